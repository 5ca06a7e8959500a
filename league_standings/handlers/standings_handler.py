# league_standings/handlers/standings_handler.py
"""
Handler/controller responsible for building the standings view model.

Keeps Flask routes simple by concentrating assembly logic here.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from dateutil import tz

from ..config import VALID_VIEWS
from ..models import StandingsGroup, StandingsRow, StandingsViewModel, TeamRecord
from ..services.playoff import badge_for
from ..services.ranker import conference_layout, rank_scope
from ..services.standings_service import StandingsService


def _rows(records: Sequence[TeamRecord]) -> List[StandingsRow]:
    return [StandingsRow(rank=i, record=r, badge=badge_for(r)) for i, r in enumerate(records, start=1)]


@dataclass
class StandingsHandler:
    """Turns aggregated league records into grouped, ranked tables."""

    standings_service: StandingsService
    tz_name: str
    default_view: str = "division"

    @property
    def app_tz(self):
        """Return the configured timezone object used for timestamps."""
        return tz.gettz(self.tz_name)

    def build(
        self,
        league: str,
        view: Optional[str] = None,
        conference: Optional[str] = None,
        division: Optional[str] = None,
        refresh: bool = False,
    ) -> StandingsViewModel:
        """
        Build a standings view model for the current request.

        Args:
            league: league to show (e.g. "major", "minor").
            view: "division", "conference" or "overall"; unknown values use the default.
            conference: optional conference filter (division/conference views).
            division: optional division filter (division view).
            refresh: drop cached store data before loading.

        Returns:
            StandingsViewModel ready for template rendering or JSON output.
        """
        view = (view or "").strip().lower()
        if view not in VALID_VIEWS:
            view = self.default_view

        if refresh:
            self.standings_service.refresh()

        result = self.standings_service.load_league(league)
        records = result.records
        now = datetime.now(tz=self.app_tz)

        groups: List[StandingsGroup] = []
        if view == "overall":
            groups.append(StandingsGroup(title=f"{league.title()} League", rows=_rows(rank_scope(records))))
        else:
            for conf, divisions in conference_layout(records):
                if conference and conf.lower() != conference.strip().lower():
                    continue
                if view == "conference":
                    groups.append(
                        StandingsGroup(title=conf, conference=conf, rows=_rows(rank_scope(records, conference=conf)))
                    )
                    continue
                for div in divisions:
                    if division and div.lower() != division.strip().lower():
                        continue
                    groups.append(
                        StandingsGroup(
                            title=div,
                            conference=conf,
                            division=div,
                            rows=_rows(rank_scope(records, conference=conf, division=div)),
                        )
                    )

        return StandingsViewModel(
            now=now,
            league=league,
            view=view,
            groups=groups,
            loaded=result.loaded,
            errors=list(result.errors),
        )

    def build_context(self, **kwargs: Any) -> Dict[str, Any]:
        """
        Build a plain dict suitable for render_template(**context).

        We keep this separate from build() so the HTML and JSON endpoints share
        the same assembly logic.
        """
        vm = self.build(**kwargs)
        return vm.__dict__
