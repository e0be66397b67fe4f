import itertools
from datetime import datetime, timedelta

import numpy as np
import pandas as pd
import pytest

from outcome_predictor.data.repository import InMemoryGameRepository
from outcome_predictor.data.teams import team_by_abbreviation
from outcome_predictor.domain.games import Game, GameOutcome, Prediction, Team

# Sunday kickoffs, one week apart
SEASON_START = datetime(2023, 9, 10, 13, 0)
KICKOFF = datetime(2023, 11, 26, 13, 0)

# Opponents that never meet the teams under test
FILLER = ["MIA", "NE", "CLE", "PIT", "TEN", "JAX", "CAR", "TB", "NYG", "WAS"]


def _team(team) -> Team:
    return team if isinstance(team, Team) else team_by_abbreviation(team)


@pytest.fixture
def kc() -> Team:
    return team_by_abbreviation("KC")


@pytest.fixture
def det() -> Team:
    return team_by_abbreviation("DET")


@pytest.fixture
def make_game():
    """Factory: make_game("KC", "DET", when, 27, 20) -> completed game (scores optional)."""
    ids = itertools.count(1)

    def _make(home, away, when=KICKOFF, home_score=None, away_score=None, week=12, season=2023):
        home, away = _team(home), _team(away)
        outcome = None
        if home_score is not None and away_score is not None:
            outcome = GameOutcome(home_score, away_score)
        return Game(
            game_id=f"{season}_{week:02d}_{away.abbreviation}_{home.abbreviation}_{next(ids)}",
            home_team=home,
            away_team=away,
            scheduled_date=when,
            week=week,
            season=season,
            outcome=outcome,
        )

    return _make


@pytest.fixture
def make_record(make_game):
    """
    Factory: a team's weekly results against filler opponents.

    `scores` is a list of (points_for, points_against); `home` is a bool
    for every game or a list of bools, one per game.
    """

    def _make(team, scores, home=True, start=SEASON_START, opponents=None, season=2023):
        team = _team(team)
        pool = opponents or [t for t in FILLER if t != team.abbreviation]
        games = []
        for i, (pf, pa) in enumerate(scores):
            opponent = _team(pool[i % len(pool)])
            when = start + timedelta(days=7 * i)
            at_home = home if isinstance(home, bool) else home[i]
            if at_home:
                games.append(make_game(team, opponent, when, pf, pa, week=i + 1, season=season))
            else:
                games.append(make_game(opponent, team, when, pa, pf, week=i + 1, season=season))
        return games

    return _make


@pytest.fixture
def target_game(make_game, kc, det) -> Game:
    """Unplayed KC (home) vs DET game on a Sunday late in the season."""
    return make_game(kc, det, KICKOFF, week=12)


@pytest.fixture
def repository_with():
    def _make(*game_lists):
        return InMemoryGameRepository(itertools.chain.from_iterable(game_lists))

    return _make


@pytest.fixture
def make_prediction(make_game):
    """Factory: Prediction with a given probability/confidence for a throwaway game."""

    def _make(probability, confidence=0.5, game=None, season=2023):
        if game is None:
            game = make_game("KC", "DET", KICKOFF, season=season)
        return Prediction(
            game=game,
            home_win_probability=probability,
            confidence=confidence,
            reasoning="fixed",
        )

    return _make


@pytest.fixture
def mock_schedule_data() -> pd.DataFrame:
    """Mock schedules data for unit tests (no live API calls)."""
    return pd.DataFrame(
        {
            "game_id": ["2023_01_DET_KC", "2023_01_BUF_NYJ", "2023_19_MIA_KC", "2023_02_KC_JAX"],
            "season": [2023, 2023, 2023, 2023],
            "game_type": ["REG", "REG", "WC", "REG"],
            "week": [1, 1, 19, 2],
            "gameday": ["2023-09-07", "2023-09-11", "2024-01-13", "2023-09-17"],
            "gametime": ["20:20", "20:15", "20:00", "13:00"],
            "home_team": ["KC", "NYJ", "KC", "JAX"],
            "away_team": ["DET", "BUF", "MIA", "KC"],
            "home_score": [20, 22, 26, np.nan],
            "away_score": [21, 16, 7, np.nan],
        }
    )
