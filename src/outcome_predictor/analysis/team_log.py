"""
Team game logs: one row per completed game from a single team's perspective.

This is the per-team "long" view every analyzer reads from (win rates,
recent form, scoring averages, home/away splits).
"""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from outcome_predictor.domain.games import Game, Team

TEAM_LOG_COLS = [
    "game_id",
    "season",
    "week",
    "gameday",
    "is_home",
    "points_for",
    "points_against",
]


def build_team_log(team: Team, games: Iterable[Game]) -> pd.DataFrame:
    """
    Build a chronological game log for `team`.

    Only completed games involving the team are kept. Adds:
    - point_diff: points_for - points_against
    - team_win: 1 if the team won, else 0 (ties count as 0)

    Returns
    -------
    pd.DataFrame
        Sorted by gameday (stable), index reset to 0..N-1.
    """
    records = [
        (
            g.game_id,
            g.season,
            g.week,
            g.scheduled_date,
            g.is_home(team),
            g.points_for(team),
            g.points_for(g.away_team if g.is_home(team) else g.home_team),
        )
        for g in games
        if g.is_completed and g.involves(team)
    ]
    log = pd.DataFrame.from_records(records, columns=TEAM_LOG_COLS)
    log = log.astype({"is_home": bool, "points_for": "int64", "points_against": "int64"})
    log = log.sort_values("gameday", kind="stable").reset_index(drop=True)

    log["point_diff"] = log["points_for"] - log["points_against"]
    log["team_win"] = (log["point_diff"] > 0).astype("int64")
    return log


def win_rate(log: pd.DataFrame) -> float:
    """Fraction of games won; 0.5 when the log is empty."""
    if log.empty:
        return 0.5
    return float(log["team_win"].mean())


def average_points(log: pd.DataFrame, last_n: int) -> float | None:
    """Mean points scored over the last `last_n` games, or None for an empty log."""
    if log.empty:
        return None
    return float(log["points_for"].tail(last_n).mean())
