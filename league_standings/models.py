# league_standings/models.py
"""
Domain models for the standings service.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Sequence


class Period(str, Enum):
    """How a finished game was decided."""
    REGULATION = "REGULATION"
    OVERTIME = "OVERTIME"
    SHOOTOUT = "SHOOTOUT"


class PlayoffStatus(str, Enum):
    """Manually curated classification shown next to a team name."""
    LEAGUE = "league"
    CONFERENCE = "conference"
    DIVISION = "division"
    PLAYOFF = "playoff"
    ELIMINATED = "eliminated"


@dataclass(frozen=True)
class Team:
    """An entry of the team directory."""
    team_id: str
    city: str
    mascot: str
    conference: str
    division: str
    league: str = "major"
    logo_url: str = ""
    playoff_status: Optional[PlayoffStatus] = None

    @property
    def name(self) -> str:
        return f"{self.city} {self.mascot}".strip()


@dataclass(frozen=True)
class GameResult:
    """A scheduled or completed game as stored in the games collection."""
    game_id: str
    home_team_id: str
    away_team_id: str
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    period: Optional[Period] = None
    season: Optional[int] = None
    week: Optional[int] = None
    day: str = ""

    @property
    def is_played(self) -> bool:
        """A game counts only once both scores have been entered."""
        return self.home_score is not None and self.away_score is not None


@dataclass(frozen=True)
class TeamRecord:
    """Cumulative counters for one team, rebuilt on every aggregation pass."""
    team_id: str
    name: str
    league: str
    conference: str
    division: str
    wins: int = 0
    losses: int = 0
    overtime_losses: int = 0
    goals_for: int = 0
    goals_against: int = 0
    logo_url: str = ""
    playoff_status: Optional[PlayoffStatus] = None

    @property
    def games_played(self) -> int:
        return self.wins + self.losses + self.overtime_losses

    @property
    def goal_differential(self) -> int:
        return self.goals_for - self.goals_against

    @property
    def points(self) -> int:
        return 2 * self.wins + self.overtime_losses

    @property
    def point_percentage(self) -> float:
        if self.games_played <= 0:
            return 0.0
        return self.points / (2 * self.games_played)


@dataclass(frozen=True)
class Badge:
    """Display-only playoff marker (e.g. 'x' styled as 'primary')."""
    text: str
    style_class: str

    @property
    def css_badge_class(self) -> str:
        return f"badge bg-{self.style_class}"

    @property
    def row_class(self) -> str:
        return f"table-{self.style_class}"


@dataclass(frozen=True)
class StandingsRow:
    """A ranked team row for standings display."""
    rank: int
    record: TeamRecord
    badge: Optional[Badge] = None


@dataclass(frozen=True)
class StandingsGroup:
    """One table of the standings page: a division, a conference or the whole league."""
    title: str
    rows: Sequence[StandingsRow]
    conference: Optional[str] = None
    division: Optional[str] = None


@dataclass(frozen=True)
class StandingsViewModel:
    """All data needed to render the standings template or JSON payload."""
    now: datetime
    league: str
    view: str
    groups: Sequence[StandingsGroup]
    loaded: bool = True
    errors: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class DraftPick:
    """A single slot on the draft board."""
    draft_class_id: str
    season: int
    round: int
    pick: int
    team_id: str
    original_team_id: str
    pick_id: str = ""
    player_id: Optional[str] = None
    passed: bool = False

    @property
    def completed(self) -> bool:
        return self.player_id is not None
