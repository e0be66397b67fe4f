"""Matchup-specific factors: head-to-head history and home/away splits."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from outcome_predictor.analysis.team_log import build_team_log, win_rate
from outcome_predictor.data.sources import GameRepository
from outcome_predictor.domain.games import Game, Team

logger = logging.getLogger(__name__)

HEAD_TO_HEAD_SCALE = 0.4


@dataclass(frozen=True)
class HeadToHead:
    """
    Completed meetings between two teams, from the current home team's side.

    Attributes:
        games_played: Meetings found across the searched seasons.
        home_wins: Meetings won by the current home team (any venue).
    """

    games_played: int = 0
    home_wins: int = 0

    @property
    def home_win_rate(self) -> float:
        if self.games_played == 0:
            return 0.5
        return self.home_wins / self.games_played

    @property
    def adjustment(self) -> float:
        """(home win rate - 0.5) * 0.4, i.e. within [-0.2, 0.2]; 0 without meetings."""
        if self.games_played == 0:
            return 0.0
        return (self.home_win_rate - 0.5) * HEAD_TO_HEAD_SCALE


def meetings(games: Iterable[Game], home: Team, away: Team, before: datetime) -> list[Game]:
    return [g for g in games if g.is_matchup(home, away) and g.completed_before(before)]


def head_to_head(
    repository: GameRepository,
    home: Team,
    away: Team,
    season: int,
    before: datetime,
    seasons: int = 3,
) -> HeadToHead:
    """
    Gather meetings over `season - seasons + 1 .. season` from the home team's schedule.

    A season whose fetch fails is skipped; the remaining seasons still count.
    """
    found: list[Game] = []
    for lookback in range(season - seasons + 1, season + 1):
        try:
            season_games = repository.games_for_team(home, lookback)
        except Exception as e:
            logger.warning("Skipping %d head-to-head lookup for %s: %s", lookback, home.abbreviation, e)
            continue
        found.extend(meetings(season_games, home, away, before))

    return HeadToHead(
        games_played=len(found),
        home_wins=sum(1 for g in found if g.team_won(home)),
    )


def home_away_split(
    home: Team,
    home_games: Iterable[Game],
    away: Team,
    away_games: Iterable[Game],
) -> float:
    """
    ((home team's win rate at home - 0.5) + (0.5 - away team's win rate on the road)) / 2.

    Each rate is 0.5 when the team has no games at that venue. Unclamped.
    """
    home_log = build_team_log(home, home_games)
    away_log = build_team_log(away, away_games)

    home_at_home = win_rate(home_log[home_log["is_home"]])
    away_on_road = win_rate(away_log[~away_log["is_home"]])

    return ((home_at_home - 0.5) + (0.5 - away_on_road)) / 2.0
