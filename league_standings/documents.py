# league_standings/documents.py
"""
Validated conversion of decoded store documents into domain models.

Every parser raises InvalidDocument instead of defaulting missing or malformed
fields, so bad data is visible at the boundary rather than as zeroed standings.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from .errors import InvalidDocument
from .models import DraftPick, GameResult, Period, PlayoffStatus, Team

PERIOD_ALIASES: Dict[str, Period] = {
    "1st": Period.REGULATION,
    "2nd": Period.REGULATION,
    "3rd": Period.REGULATION,
    "final": Period.REGULATION,
    "reg": Period.REGULATION,
    "regulation": Period.REGULATION,
    "ot": Period.OVERTIME,
    "overtime": Period.OVERTIME,
    "so": Period.SHOOTOUT,
    "shootout": Period.SHOOTOUT,
}


def _doc_id(doc: Dict[str, Any]) -> str:
    doc_id = doc.get("id")
    if not isinstance(doc_id, str) or not doc_id:
        raise InvalidDocument("<unknown>", "document has no id")
    return doc_id


def _require_str(doc: Dict[str, Any], key: str) -> str:
    val = doc.get(key)
    if not isinstance(val, str) or not val.strip():
        raise InvalidDocument(_doc_id(doc), f"missing or empty '{key}'")
    return val.strip()


def _optional_str(doc: Dict[str, Any], key: str, default: str = "") -> str:
    val = doc.get(key)
    if val is None:
        return default
    if not isinstance(val, str):
        raise InvalidDocument(_doc_id(doc), f"'{key}' must be a string")
    return val.strip() or default


def _optional_int(doc: Dict[str, Any], key: str, minimum: Optional[int] = None) -> Optional[int]:
    val = doc.get(key)
    if val is None:
        return None
    # numbers written from the browser may arrive as doubles
    if isinstance(val, float) and val.is_integer():
        val = int(val)
    if isinstance(val, bool) or not isinstance(val, int):
        raise InvalidDocument(_doc_id(doc), f"'{key}' must be an integer, got {val!r}")
    if minimum is not None and val < minimum:
        raise InvalidDocument(_doc_id(doc), f"'{key}' must be >= {minimum}, got {val}")
    return val


def _require_int(doc: Dict[str, Any], key: str, minimum: Optional[int] = None) -> int:
    val = _optional_int(doc, key, minimum)
    if val is None:
        raise InvalidDocument(_doc_id(doc), f"missing '{key}'")
    return val


def _optional_bool(doc: Dict[str, Any], key: str) -> bool:
    val = doc.get(key)
    if val is None:
        return False
    if not isinstance(val, bool):
        raise InvalidDocument(_doc_id(doc), f"'{key}' must be a boolean, got {val!r}")
    return val


def parse_period(raw: Any, doc_id: str = "<unknown>") -> Optional[Period]:
    """Map stored period labels ('OT', '3rd', 'SO', ...) onto Period."""
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise InvalidDocument(doc_id, f"'period' must be a string, got {raw!r}")
    key = raw.strip().lower()
    if not key:
        return None
    try:
        return PERIOD_ALIASES[key]
    except KeyError:
        raise InvalidDocument(doc_id, f"unknown period {raw!r}") from None


def parse_playoff_status(raw: Any, doc_id: str = "<unknown>") -> Optional[PlayoffStatus]:
    """Map a stored status string onto PlayoffStatus; None/'none'/'' mean no status."""
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise InvalidDocument(doc_id, f"'playoffStatus' must be a string, got {raw!r}")
    key = raw.strip().lower()
    if key in ("", "none"):
        return None
    try:
        return PlayoffStatus(key)
    except ValueError:
        raise InvalidDocument(doc_id, f"unknown playoff status {raw!r}") from None


def parse_team(doc: Dict[str, Any]) -> Team:
    """Build a Team from a team directory document."""
    doc_id = _doc_id(doc)

    # older documents carry a single display name instead of city + mascot
    if doc.get("city") is None and doc.get("mascot") is None:
        city, mascot = _require_str(doc, "name"), ""
    else:
        city, mascot = _require_str(doc, "city"), _require_str(doc, "mascot")

    return Team(
        team_id=doc_id,
        city=city,
        mascot=mascot,
        conference=_require_str(doc, "conference"),
        division=_require_str(doc, "division"),
        league=_optional_str(doc, "league", "major"),
        logo_url=_optional_str(doc, "logoUrl"),
        playoff_status=parse_playoff_status(doc.get("playoffStatus"), doc_id),
    )


def parse_game(doc: Dict[str, Any]) -> GameResult:
    """Build a GameResult from a games collection document."""
    doc_id = _doc_id(doc)
    home = _require_str(doc, "homeTeamId")
    away = _require_str(doc, "awayTeamId")
    if home == away:
        raise InvalidDocument(doc_id, f"team {home} cannot play itself")

    day = doc.get("day")
    return GameResult(
        game_id=doc_id,
        home_team_id=home,
        away_team_id=away,
        home_score=_optional_int(doc, "homeScore", minimum=0),
        away_score=_optional_int(doc, "awayScore", minimum=0),
        period=parse_period(doc.get("period"), doc_id),
        season=_optional_int(doc, "season", minimum=1),
        week=_optional_int(doc, "week", minimum=1),
        day=str(day) if day is not None else "",
    )


def parse_draft_pick(doc: Dict[str, Any]) -> DraftPick:
    """Build a DraftPick from a draftPicks collection document."""
    doc_id = _doc_id(doc)
    team_id = _require_str(doc, "teamId")
    player_id = doc.get("playerId")
    if player_id is not None and (not isinstance(player_id, str) or not player_id):
        raise InvalidDocument(doc_id, "'playerId' must be a non-empty string")

    return DraftPick(
        pick_id=doc_id,
        draft_class_id=_require_str(doc, "draftClassId"),
        season=_require_int(doc, "season", minimum=1),
        round=_require_int(doc, "round", minimum=1),
        pick=_require_int(doc, "pick", minimum=1),
        team_id=team_id,
        original_team_id=_optional_str(doc, "originalTeamId", team_id),
        player_id=player_id,
        passed=_optional_bool(doc, "passed"),
    )