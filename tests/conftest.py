from typing import Any, Dict, List, Optional

import pytest

from league_standings.cache import TTLCache
from league_standings.errors import DocumentNotFound, StoreError
from league_standings.models import GameResult, Period, Team


class FakeStoreClient:
    """In-memory stand-in for StoreClient returning decoded documents."""

    def __init__(self, teams=None, games=None, picks=None) -> None:
        self.team_docs: List[Dict[str, Any]] = list(teams or [])
        self.game_docs: List[Dict[str, Any]] = list(games or [])
        self.pick_docs: List[Dict[str, Any]] = list(picks or [])
        self.fail_teams = False
        self.fail_games = False
        self.fail_writes = False
        self.calls: Dict[str, int] = {"teams": 0, "games": 0}
        self.writes: List[tuple] = []
        self.pick_writes: List[tuple] = []

    def teams(self) -> List[Dict[str, Any]]:
        self.calls["teams"] += 1
        if self.fail_teams:
            raise StoreError("teams unavailable")
        return list(self.team_docs)

    def games(self) -> List[Dict[str, Any]]:
        self.calls["games"] += 1
        if self.fail_games:
            raise StoreError("games unavailable")
        return list(self.game_docs)

    def draft_picks(self, draft_class_id: str) -> List[Dict[str, Any]]:
        return [d for d in self.pick_docs if d.get("draftClassId") == draft_class_id]

    def set_playoff_status(self, team_id: str, status: Optional[str]) -> Dict[str, Any]:
        if self.fail_writes:
            raise StoreError("write failed")
        doc = next((d for d in self.team_docs if d["id"] == team_id), None)
        if doc is None:
            raise DocumentNotFound(f"teams/{team_id}")
        self.writes.append((team_id, status))
        doc["playoffStatus"] = status
        return {"id": team_id, "playoffStatus": status}

    def record_draft_pick(self, pick_id: str, player_id: str) -> Dict[str, Any]:
        if self.fail_writes:
            raise StoreError("write failed")
        doc = next((d for d in self.pick_docs if d["id"] == pick_id), None)
        if doc is None:
            raise DocumentNotFound(f"draftPicks/{pick_id}")
        self.pick_writes.append((pick_id, player_id))
        doc["playerId"] = player_id
        return dict(doc)


def team_doc(team_id, conference="Eastern Conference", division="Atlantic", league="major", **extra):
    doc = {
        "id": team_id,
        "city": team_id.upper(),
        "mascot": "Club",
        "league": league,
        "conference": conference,
        "division": division,
    }
    doc.update(extra)
    return doc


def game_doc(game_id, home, away, home_score=None, away_score=None, period=None, **extra):
    doc = {"id": game_id, "homeTeamId": home, "awayTeamId": away, "season": 1, "week": 1, "day": "D1"}
    if home_score is not None:
        doc["homeScore"] = home_score
    if away_score is not None:
        doc["awayScore"] = away_score
    if period is not None:
        doc["period"] = period
    doc.update(extra)
    return doc


def make_team(team_id, conference="East", division="Atlantic", league="major", status=None) -> Team:
    return Team(
        team_id=team_id,
        city=team_id.upper(),
        mascot="Club",
        conference=conference,
        division=division,
        league=league,
        playoff_status=status,
    )


def make_game(game_id, home, away, home_score=None, away_score=None, period=Period.REGULATION, season=1) -> GameResult:
    return GameResult(
        game_id=game_id,
        home_team_id=home,
        away_team_id=away,
        home_score=home_score,
        away_score=away_score,
        period=period,
        season=season,
    )


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock) -> TTLCache:
    return TTLCache(clock=clock)


@pytest.fixture
def league_docs():
    teams = [
        team_doc("bos", division="Atlantic"),
        team_doc("tor", division="Atlantic"),
        team_doc("nyr", division="Metropolitan"),
        team_doc("min", conference="Western Conference", division="Central"),
        team_doc("dal", conference="Western Conference", division="Central"),
        team_doc("farm", league="minor", conference="Minor Conference", division="Farm"),
    ]
    games = [
        game_doc("g1", "bos", "tor", 5, 2, "Final"),
        game_doc("g2", "tor", "nyr", 3, 2, "OT"),
        game_doc("g3", "min", "dal", 1, 4, "3rd"),
        game_doc("g4", "dal", "bos", 2, 3, "SO"),
        game_doc("g5", "nyr", "min"),
    ]
    return teams, games


@pytest.fixture
def fake_client(league_docs) -> FakeStoreClient:
    teams, games = league_docs
    return FakeStoreClient(teams=teams, games=games)
