from league_standings.models import TeamRecord
from league_standings.services.ranker import conference_layout, in_scope, rank, rank_scope


def record(team_id, wins=0, losses=0, otl=0, gf=0, ga=0, conference="East", division="Atlantic", league="major"):
    return TeamRecord(
        team_id=team_id,
        name=team_id,
        league=league,
        conference=conference,
        division=division,
        wins=wins,
        losses=losses,
        overtime_losses=otl,
        goals_for=gf,
        goals_against=ga,
    )


def ids(records):
    return [r.team_id for r in records]


def test_points_dominate_percentage() -> None:
    high = record("high", wins=3, losses=1, otl=4)            # 10 pts / 16 = .625
    low = record("low", wins=4, losses=6, otl=2)              # 10 pts / 24 = .417
    best_pct = record("best_pct", wins=4, losses=2)           # 8 pts / 12 = .667
    assert high.points == low.points == 10
    assert best_pct.points == 8
    assert best_pct.point_percentage > high.point_percentage > low.point_percentage

    assert ids(rank([best_pct, low, high])) == ["high", "low", "best_pct"]


def test_goal_differential_breaks_equal_points_and_percentage() -> None:
    plus = record("plus", wins=2, losses=1, gf=9, ga=4)
    minus = record("minus", wins=2, losses=1, gf=5, ga=7)
    assert plus.points == minus.points
    assert plus.point_percentage == minus.point_percentage

    assert ids(rank([minus, plus])) == ["plus", "minus"]


def test_full_tie_falls_back_to_team_id() -> None:
    a = record("alpha", wins=1, losses=1, gf=3, ga=3)
    b = record("bravo", wins=1, losses=1, gf=3, ga=3)
    assert ids(rank([b, a])) == ["alpha", "bravo"]
    assert ids(rank([a, b])) == ["alpha", "bravo"]


def test_team_without_games_sorts_after_scoring_teams() -> None:
    idle = record("idle")
    one_point = record("otl", losses=3, otl=1)
    assert ids(rank([idle, one_point])) == ["otl", "idle"]


def test_empty_input() -> None:
    assert rank([]) == []
    assert rank_scope([], conference="East") == []


def test_scope_filters_case_insensitively() -> None:
    records = [
        record("a", conference="East", division="Atlantic"),
        record("b", conference="East", division="Metro"),
        record("c", conference="West", division="Central"),
        record("d", conference="East", division="Atlantic"),
    ]
    assert ids(in_scope(records, conference="east")) == ["a", "b", "d"]
    assert ids(in_scope(records, conference="East", division="ATLANTIC")) == ["a", "d"]
    assert ids(in_scope(records, division=" metro ")) == ["b"]
    assert len(in_scope(records)) == 4


def test_conference_layout_is_sorted() -> None:
    records = [
        record("a", conference="West", division="Pacific"),
        record("b", conference="East", division="Metro"),
        record("c", conference="West", division="Central"),
        record("d", conference="East", division="Atlantic"),
    ]
    assert conference_layout(records) == [("East", ["Atlantic", "Metro"]), ("West", ["Central", "Pacific"])]
