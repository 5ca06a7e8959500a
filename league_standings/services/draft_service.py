# league_standings/services/draft_service.py
"""
Draft board loading and pick recording.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..documents import parse_draft_pick
from ..models import DraftPick
from ..store_client import StoreClient
from .draft import apply_pick, current_pick, current_position, draft_order_from_standings, sort_picks
from .standings_service import StandingsService, parse_all

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DraftBoard:
    draft_class_id: str
    picks: List[DraftPick]
    position: Optional[Tuple[int, int]]


@dataclass
class DraftService:
    """Reads draft picks from the store, records selections and suggests a standings-based order."""

    client: StoreClient
    standings_service: StandingsService

    def board(self, draft_class_id: str) -> DraftBoard:
        """
        Load and order the picks of a draft class.

        Raises:
            StoreError when the picks cannot be fetched.
        """
        picks = sort_picks(parse_all(self.client.draft_picks(draft_class_id), parse_draft_pick, "draft pick"))
        return DraftBoard(draft_class_id=draft_class_id, picks=picks, position=current_position(picks))

    def make_pick(self, draft_class_id: str, player_id: str) -> DraftBoard:
        """
        Give player_id to the pick on the clock and write it to the store.

        Raises:
            DraftError when the board does not allow the pick.
            StoreError when the board cannot be loaded or the write fails.
        """
        board = self.board(draft_class_id)
        on_clock = current_pick(board.picks)
        picks = apply_pick(board.picks, player_id)

        self.client.record_draft_pick(on_clock.pick_id, player_id)
        logger.info(
            "%s: round %d pick %d (%s) took %s",
            draft_class_id,
            on_clock.round,
            on_clock.pick,
            on_clock.team_id,
            player_id,
        )
        return DraftBoard(draft_class_id=draft_class_id, picks=picks, position=current_position(picks))

    def suggested_order(self, league: str) -> List[str]:
        """Team ids of a league, worst record first."""
        result = self.standings_service.load_league(league)
        return draft_order_from_standings(result.records)
