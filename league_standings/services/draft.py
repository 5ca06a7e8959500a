# league_standings/services/draft.py
"""
Draft board rules: generating picks, finding whose turn it is, recording a pick.

All functions return new lists; picks passed in are never mutated.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence, Tuple

from ..errors import DraftError
from ..models import DraftPick, TeamRecord
from .ranker import rank

logger = logging.getLogger(__name__)


def generate_draft_picks(
    draft_class_id: str,
    season: int,
    draft_order: Sequence[str],
    rounds: int,
    known_team_ids: Optional[Iterable[str]] = None,
) -> List[DraftPick]:
    """
    Build `rounds` rounds of picks, every round following draft_order.

    Pick numbers restart at 1 each round. A team id missing from known_team_ids
    produces no pick, but the following teams keep their slot numbers.
    """
    if not draft_order:
        raise DraftError("draft order is empty")
    if rounds < 1:
        raise DraftError(f"rounds must be >= 1, got {rounds}")

    known = set(known_team_ids) if known_team_ids is not None else None
    picks: List[DraftPick] = []

    for rnd in range(1, rounds + 1):
        for pick_no, team_id in enumerate(draft_order, start=1):
            if known is not None and team_id not in known:
                logger.warning("draft order references unknown team %s", team_id)
                continue
            picks.append(
                DraftPick(
                    draft_class_id=draft_class_id,
                    season=season,
                    round=rnd,
                    pick=pick_no,
                    team_id=team_id,
                    original_team_id=team_id,
                )
            )

    logger.info("generated %d picks over %d rounds for %s", len(picks), rounds, draft_class_id)
    return picks


def sort_picks(picks: Iterable[DraftPick]) -> List[DraftPick]:
    return sorted(picks, key=lambda p: (p.round, p.pick))


def _open_index(ordered: Sequence[DraftPick]) -> Optional[int]:
    for i, p in enumerate(ordered):
        if not p.completed:
            return i
    return None


def current_pick(picks: Iterable[DraftPick]) -> Optional[DraftPick]:
    """
    The pick on the clock: first pick (in round/pick order) with no player.

    A passed pick stays on the clock; it is not skipped.
    """
    ordered = sort_picks(picks)
    idx = _open_index(ordered)
    return ordered[idx] if idx is not None else None


def current_position(picks: Iterable[DraftPick]) -> Optional[Tuple[int, int]]:
    """
    (round, pick) of the current pick; the last pick once all are done;
    None for an empty board.
    """
    ordered = sort_picks(picks)
    if not ordered:
        return None
    idx = _open_index(ordered)
    p = ordered[idx] if idx is not None else ordered[-1]
    return p.round, p.pick


def apply_pick(picks: Iterable[DraftPick], player_id: str) -> List[DraftPick]:
    """
    Assign player_id to the pick on the clock and return the updated board.

    Raises:
        DraftError when the player is already taken, every pick is made,
        or the pick on the clock has been passed.
    """
    if not player_id:
        raise DraftError("player id is required")

    ordered = sort_picks(picks)
    if any(p.player_id == player_id for p in ordered):
        raise DraftError(f"player {player_id} has already been drafted")

    idx = _open_index(ordered)
    if idx is None:
        raise DraftError("no pick is open")
    if ordered[idx].passed:
        raise DraftError(f"round {ordered[idx].round} pick {ordered[idx].pick} was passed")

    ordered[idx] = replace(ordered[idx], player_id=player_id)
    return ordered


def draft_order_from_standings(records: Iterable[TeamRecord]) -> List[str]:
    """Worst team picks first."""
    return [r.team_id for r in reversed(rank(records))]
