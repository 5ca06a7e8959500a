# league_standings/services/ranker.py
"""
Standings ordering and scope filters.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from ..models import TeamRecord


def sort_key(r: TeamRecord) -> Tuple[int, float, int, str]:
    """
    Tie-break chain: points desc, point percentage desc, goal differential desc,
    then team id asc so equal records always land in the same order.
    """
    return (-r.points, -r.point_percentage, -r.goal_differential, r.team_id)


def rank(records: Iterable[TeamRecord]) -> List[TeamRecord]:
    """Return the records ordered best to worst."""
    return sorted(records, key=sort_key)


def _matches(value: str, wanted: Optional[str]) -> bool:
    w = (wanted or "").strip().lower()
    return not w or value.strip().lower() == w


def in_scope(
    records: Iterable[TeamRecord],
    conference: Optional[str] = None,
    division: Optional[str] = None,
) -> List[TeamRecord]:
    """Filter records by conference / division (blank means any)."""
    return [r for r in records if _matches(r.conference, conference) and _matches(r.division, division)]


def rank_scope(
    records: Iterable[TeamRecord],
    conference: Optional[str] = None,
    division: Optional[str] = None,
) -> List[TeamRecord]:
    """Filter then rank."""
    return rank(in_scope(records, conference=conference, division=division))


def conference_layout(records: Sequence[TeamRecord]) -> List[Tuple[str, List[str]]]:
    """Conferences and their divisions present in the records, alphabetically."""
    layout: dict[str, set[str]] = {}
    for r in records:
        layout.setdefault(r.conference, set()).add(r.division)
    return [(conf, sorted(divs)) for conf, divs in sorted(layout.items())]
