# league_standings/services/standings_service.py
"""
Standings logic.

Responsibilities:
  - fetch the team directory and game results (in parallel, cached)
  - parse documents into models, skipping invalid ones
  - aggregate records for a league
  - rank a league / conference / division scope
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, TypeVar

from ..cache import TTLCache
from ..documents import parse_game, parse_team
from ..errors import InvalidDocument, StoreError
from ..models import GameResult, Team, TeamRecord
from ..store_client import StoreClient
from .aggregator import aggregate_records
from .ranker import rank_scope

T = TypeVar("T")

logger = logging.getLogger(__name__)

TEAMS_KEY = "store:teams"
GAMES_KEY = "store:games"


def parse_all(docs: List[Dict[str, Any]], parser: Callable[[Dict[str, Any]], T], kind: str) -> List[T]:
    """Parse every document, logging and skipping the ones that fail validation."""
    out: List[T] = []
    for doc in docs:
        try:
            out.append(parser(doc))
        except InvalidDocument as exc:
            logger.warning("skipping invalid %s document %s", kind, exc)
    return out


@dataclass
class LeagueRecords:
    """Aggregated records for one league plus what went wrong while loading them."""
    records: List[TeamRecord]
    loaded: bool = True
    errors: List[str] = field(default_factory=list)


@dataclass
class StandingsService:
    """Service responsible for returning aggregated and ranked team records."""

    client: StoreClient
    cache: TTLCache
    standings_ttl: int
    season: int = 0

    def _load_teams(self) -> List[Team]:
        return parse_all(self.client.teams(), parse_team, "team")

    def _load_games(self) -> List[GameResult]:
        return parse_all(self.client.games(), parse_game, "game")

    def teams(self) -> List[Team]:
        """Team directory using cached loading."""
        return self.cache.get_or_set(TEAMS_KEY, ttl_seconds=self.standings_ttl, loader=self._load_teams)

    def games(self) -> List[GameResult]:
        """Game results (restricted to the configured season) using cached loading."""
        games = self.cache.get_or_set(GAMES_KEY, ttl_seconds=self.standings_ttl, loader=self._load_games)
        if not self.season:
            return games
        return [g for g in games if g.season == self.season]

    def refresh(self) -> None:
        """Drop cached teams and games so the next load hits the store."""
        self.cache.invalidate(TEAMS_KEY)
        self.cache.invalidate(GAMES_KEY)

    def invalidate_teams(self) -> None:
        """Drop the cached team directory (after a playoff status write)."""
        self.cache.invalidate(TEAMS_KEY)

    def load_league(self, league: str) -> LeagueRecords:
        """
        Fetch teams and games concurrently and aggregate records for one league.

        A failed team fetch yields no records; a failed game fetch still returns
        every team of the league with zeroed counters. Failures are never cached.
        """
        with ThreadPoolExecutor(max_workers=2) as pool:
            teams_future = pool.submit(self.teams)
            games_future = pool.submit(self.games)

        errors: List[str] = []

        try:
            teams = teams_future.result()
        except StoreError:
            logger.exception("Error loading teams")
            return LeagueRecords(records=[], loaded=False, errors=["Could not load teams."])

        try:
            games = games_future.result()
        except StoreError:
            logger.exception("Error loading games")
            errors.append("Could not load game results; records show zero games.")
            games = []

        wanted = (league or "").strip().lower()
        league_teams = [t for t in teams if not wanted or t.league.lower() == wanted]
        records = aggregate_records(league_teams, games)

        logger.info("built %d records for league %s from %d games", len(records), league, len(games))
        return LeagueRecords(records=list(records.values()), loaded=True, errors=errors)

    def get_standings(
        self,
        league: str,
        conference: Optional[str] = None,
        division: Optional[str] = None,
    ) -> List[TeamRecord]:
        """Ranked records for a league, optionally narrowed to a conference/division."""
        result = self.load_league(league)
        return rank_scope(result.records, conference=conference, division=division)
