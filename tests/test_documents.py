import pytest

from conftest import game_doc, team_doc
from league_standings.documents import parse_draft_pick, parse_game, parse_period, parse_playoff_status, parse_team
from league_standings.errors import InvalidDocument
from league_standings.models import Period, PlayoffStatus


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("OT", Period.OVERTIME),
        ("overtime", Period.OVERTIME),
        ("SO", Period.SHOOTOUT),
        ("Shootout", Period.SHOOTOUT),
        ("Final", Period.REGULATION),
        ("3rd", Period.REGULATION),
        ("1st", Period.REGULATION),
        (None, None),
        ("  ", None),
    ],
)
def test_parse_period(raw, expected) -> None:
    assert parse_period(raw) is expected


def test_unknown_period_is_rejected() -> None:
    with pytest.raises(InvalidDocument, match="unknown period"):
        parse_period("4th", "g1")


def test_parse_playoff_status() -> None:
    assert parse_playoff_status("League") is PlayoffStatus.LEAGUE
    assert parse_playoff_status("none") is None
    assert parse_playoff_status(None) is None
    with pytest.raises(InvalidDocument):
        parse_playoff_status("champion")


def test_parse_team() -> None:
    team = parse_team(team_doc("bos", logoUrl="https://img/bos.png", playoffStatus="division"))
    assert team.team_id == "bos"
    assert team.name == "BOS Club"
    assert team.league == "major"
    assert team.logo_url == "https://img/bos.png"
    assert team.playoff_status is PlayoffStatus.DIVISION


def test_parse_team_defaults_league_and_accepts_legacy_name() -> None:
    team = parse_team({"id": "x", "name": "Legacy Team", "conference": "E", "division": "A"})
    assert team.name == "Legacy Team"
    assert team.league == "major"


def test_parse_team_missing_division() -> None:
    doc = team_doc("bos")
    del doc["division"]
    with pytest.raises(InvalidDocument, match="division"):
        parse_team(doc)


def test_parse_game_played_and_unplayed() -> None:
    played = parse_game(game_doc("g1", "a", "b", 4, 1.0, "OT"))
    assert played.is_played
    assert played.away_score == 1
    assert played.period is Period.OVERTIME
    assert played.day == "D1"

    scheduled = parse_game(game_doc("g2", "a", "b"))
    assert not scheduled.is_played
    assert scheduled.period is None


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"homeScore": -1}, ">= 0"),
        ({"homeScore": "3"}, "integer"),
        ({"awayScore": True}, "integer"),
        ({"awayTeamId": "a"}, "cannot play itself"),
        ({"homeTeamId": None}, "homeTeamId"),
    ],
)
def test_parse_game_rejects_bad_fields(overrides, message) -> None:
    doc = game_doc("g1", "a", "b", 1, 0)
    doc.update(overrides)
    with pytest.raises(InvalidDocument, match=message):
        parse_game(doc)


def test_parse_draft_pick() -> None:
    pick = parse_draft_pick(
        {"id": "p1", "draftClassId": "dc", "season": 2, "round": 1, "pick": 3, "teamId": "bos", "playerId": "pl9"}
    )
    assert pick.pick_id == "p1"
    assert pick.original_team_id == "bos"
    assert pick.completed

    with pytest.raises(InvalidDocument, match="round"):
        parse_draft_pick({"id": "p2", "draftClassId": "dc", "pick": 1, "teamId": "bos"})


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"passed": "yes"}, "passed"),
        ({"passed": 1}, "passed"),
        ({"season": None}, "season"),
        ({"season": 0}, "season"),
    ],
)
def test_parse_draft_pick_rejects_bad_fields(overrides, message) -> None:
    doc = {"id": "p1", "draftClassId": "dc", "season": 2, "round": 1, "pick": 1, "teamId": "bos"}
    doc.update(overrides)
    with pytest.raises(InvalidDocument, match=message):
        parse_draft_pick(doc)


def test_parse_draft_pick_passed_flag() -> None:
    doc = {"id": "p1", "draftClassId": "dc", "season": 2, "round": 1, "pick": 1, "teamId": "bos"}
    assert parse_draft_pick(doc).passed is False
    assert parse_draft_pick({**doc, "passed": True}).passed is True
