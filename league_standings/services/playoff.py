# league_standings/services/playoff.py
"""
Playoff status badges.

The status is curated by a league admin; it is shown as-is and never checked
against the team's actual position.
"""

from __future__ import annotations

from typing import Dict, Optional

from ..models import Badge, PlayoffStatus, TeamRecord

BADGES: Dict[PlayoffStatus, Badge] = {
    PlayoffStatus.LEAGUE: Badge(text="P", style_class="success"),
    PlayoffStatus.CONFERENCE: Badge(text="z", style_class="info"),
    PlayoffStatus.DIVISION: Badge(text="y", style_class="warning"),
    PlayoffStatus.PLAYOFF: Badge(text="x", style_class="primary"),
    PlayoffStatus.ELIMINATED: Badge(text="e", style_class="danger"),
}


def badge_for(record: TeamRecord) -> Optional[Badge]:
    """Return the badge for a record, or None when no status is assigned."""
    if record.playoff_status is None:
        return None
    return BADGES.get(record.playoff_status)


def row_class(record: TeamRecord) -> str:
    """CSS class for highlighting the record's table row ('' when none)."""
    badge = badge_for(record)
    return badge.row_class if badge else ""
