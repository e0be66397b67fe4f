from __future__ import annotations

from datetime import datetime
from typing import Iterable

import pandas as pd

from outcome_predictor.data.sources import GameRepository
from outcome_predictor.data.teams import team_by_abbreviation
from outcome_predictor.domain.games import Game, GameOutcome, Prediction, Team


def _chronological(games: Iterable[Game]) -> list[Game]:
    return sorted(games, key=lambda g: g.scheduled_date)


class InMemoryGameRepository(GameRepository):
    """Game repository backed by a dict keyed on game_id."""

    def __init__(self, games: Iterable[Game] = ()) -> None:
        self._games: dict[str, Game] = {g.game_id: g for g in games}

    def save(self, game: Game) -> None:
        self._games[game.game_id] = game

    def game(self, game_id: str) -> Game | None:
        return self._games.get(game_id)

    def games_for_team(self, team: Team, season: int) -> list[Game]:
        return _chronological(
            g for g in self._games.values() if g.season == season and g.involves(team)
        )

    def games_between(self, start: datetime, end: datetime) -> list[Game]:
        return _chronological(
            g for g in self._games.values() if start <= g.scheduled_date <= end
        )

    def games_for_week(self, season: int, week: int) -> list[Game]:
        return _chronological(
            g for g in self._games.values() if g.season == season and g.week == week
        )

    def __len__(self) -> int:
        return len(self._games)


class ScheduleFrameRepository(InMemoryGameRepository):
    """
    Game repository built from a canonical schedule DataFrame.

    Expects one row per game with at least:
        game_id, season, week, gameday, home_team, away_team,
        home_score, away_score

    Rows with missing scores become scheduled (outcome-less) games. If a
    'gametime' column ("HH:MM") is present it is added to 'gameday' to form
    the kickoff timestamp.
    """

    REQUIRED_COLS = [
        "game_id",
        "season",
        "week",
        "gameday",
        "home_team",
        "away_team",
        "home_score",
        "away_score",
    ]

    def __init__(self, frame: pd.DataFrame) -> None:
        missing = [c for c in self.REQUIRED_COLS if c not in frame.columns]
        if missing:
            raise KeyError(f"Schedule frame is missing required columns: {missing}")
        super().__init__(self._rows_to_games(frame))

    @staticmethod
    def _kickoffs(frame: pd.DataFrame) -> pd.Series:
        kickoff = pd.to_datetime(frame["gameday"])
        if "gametime" in frame.columns:
            offset = pd.to_timedelta(frame["gametime"].fillna("00:00").astype(str) + ":00")
            kickoff = kickoff + offset
        return kickoff

    @classmethod
    def _rows_to_games(cls, frame: pd.DataFrame) -> list[Game]:
        df = frame.copy()
        df["kickoff"] = cls._kickoffs(df)
        completed = df["home_score"].notna() & df["away_score"].notna()

        games: list[Game] = []
        for row, is_completed in zip(df.itertuples(index=False), completed):
            outcome = None
            if is_completed:
                outcome = GameOutcome(int(row.home_score), int(row.away_score))
            games.append(
                Game(
                    game_id=str(row.game_id),
                    home_team=team_by_abbreviation(row.home_team),
                    away_team=team_by_abbreviation(row.away_team),
                    scheduled_date=row.kickoff.to_pydatetime(),
                    week=int(row.week),
                    season=int(row.season),
                    outcome=outcome,
                )
            )
        return games


class InMemoryPredictionRepository:
    """Stores predictions for later evaluation against outcomes."""

    def __init__(self) -> None:
        self._predictions: list[Prediction] = []

    def save(self, prediction: Prediction) -> None:
        self._predictions.append(prediction)

    def predictions_for(self, game_id: str) -> list[Prediction]:
        return sorted(
            (p for p in self._predictions if p.game.game_id == game_id),
            key=lambda p: p.created_at,
        )

    def predictions_between(self, start: datetime, end: datetime) -> list[Prediction]:
        return sorted(
            (p for p in self._predictions if start <= p.created_at <= end),
            key=lambda p: p.created_at,
        )

    def settled(
        self, games: GameRepository, start: datetime, end: datetime
    ) -> list[tuple[Prediction, GameOutcome]]:
        """
        Pair every stored prediction with the outcome of its game, when known.

        Outcomes are looked up from `games` over [start, end] (kickoff dates),
        so predictions made before a game was played can be scored once the
        repository has the final.
        """
        outcomes = {
            g.game_id: g.outcome for g in games.games_between(start, end) if g.outcome is not None
        }
        return [
            (p, outcomes[p.game.game_id])
            for p in self._predictions
            if p.game.game_id in outcomes
        ]
