# league_standings/services/aggregator.py
"""
Team aggregation.

Folds the full game list into one TeamRecord per team. The result is rebuilt from
scratch on every call; nothing is updated incrementally.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable

from ..models import GameResult, Period, Team, TeamRecord

logger = logging.getLogger(__name__)

EXTRA_TIME_PERIODS = (Period.OVERTIME, Period.SHOOTOUT)


@dataclass
class _Counters:
    wins: int = 0
    losses: int = 0
    overtime_losses: int = 0
    goals_for: int = 0
    goals_against: int = 0


def empty_record(team: Team) -> TeamRecord:
    """A zero-valued record carrying the team's static attributes."""
    return TeamRecord(
        team_id=team.team_id,
        name=team.name,
        league=team.league,
        conference=team.conference,
        division=team.division,
        logo_url=team.logo_url,
        playoff_status=team.playoff_status,
    )


def aggregate_records(teams: Iterable[Team], games: Iterable[GameResult]) -> Dict[str, TeamRecord]:
    """
    Build a TeamRecord for every team from the games they played.

    Rules:
      - only games with both scores present count
      - the higher score wins; the loser gets an overtime loss when the game
        ended in overtime or a shootout, otherwise a regulation loss
      - games with equal scores have no defined result and are skipped
      - games involving a team outside `teams` are skipped
    """
    team_list = list(teams)
    counters: Dict[str, _Counters] = {t.team_id: _Counters() for t in team_list}

    counted = 0
    for game in games:
        if not game.is_played:
            continue

        home = counters.get(game.home_team_id)
        away = counters.get(game.away_team_id)
        if home is None or away is None:
            logger.debug("skipping game %s: team outside the requested set", game.game_id)
            continue

        if game.home_score == game.away_score:
            logger.warning(
                "skipping game %s: tied score %s-%s has no win/loss result",
                game.game_id,
                game.home_score,
                game.away_score,
            )
            continue

        home.goals_for += game.home_score
        home.goals_against += game.away_score
        away.goals_for += game.away_score
        away.goals_against += game.home_score

        if game.home_score > game.away_score:
            winner, loser = home, away
        else:
            winner, loser = away, home

        winner.wins += 1
        if game.period in EXTRA_TIME_PERIODS:
            loser.overtime_losses += 1
        else:
            loser.losses += 1
        counted += 1

    logger.debug("aggregated %d games into %d team records", counted, len(team_list))

    return {
        t.team_id: replace(
            empty_record(t),
            wins=counters[t.team_id].wins,
            losses=counters[t.team_id].losses,
            overtime_losses=counters[t.team_id].overtime_losses,
            goals_for=counters[t.team_id].goals_for,
            goals_against=counters[t.team_id].goals_against,
        )
        for t in team_list
    }
