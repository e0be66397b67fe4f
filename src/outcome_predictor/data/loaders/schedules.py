from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

import pandas as pd

from outcome_predictor.config import DATA_CONFIG

try:
    import nflreadpy as nflr
except ImportError as e:
    raise ImportError(
        "nflreadpy is required for ScheduleLoader.\n"
        "Install with `pip install nflreadpy` or add it to pyproject.toml."
    ) from e

logger = logging.getLogger(__name__)


@dataclass
class ScheduleLoaderConfig:
    """
    Configuration for the schedule loader that feeds the game repository.

    Attributes:
        seasons: NFL seasons to load.
        include_postseason: If False, keep regular-season games only.
        save_parquet: If True, saves the canonical DataFrame to data/raw/.
    """

    seasons: List[int] = field(default_factory=lambda: list(DATA_CONFIG.default_seasons))
    include_postseason: bool = True
    save_parquet: bool = False


class ScheduleLoader:
    """
    Load NFL schedules (completed and upcoming games) from nflreadpy.

    Produces the canonical table consumed by ScheduleFrameRepository:
    - One row per game
    - 'game_id', 'season', 'week', 'gameday' (datetime64), 'gametime'
    - 'home_team', 'away_team'
    - 'home_score', 'away_score' (NaN for games not yet played)
    - 'home_win' (nullable Int) for completed games
    """

    BASE_COLS = [
        "game_id",
        "season",
        "game_type",
        "week",
        "gameday",
        "gametime",
        "home_team",
        "away_team",
        "home_score",
        "away_score",
    ]

    def __init__(self, config: ScheduleLoaderConfig | None = None) -> None:
        if config is None:
            config = ScheduleLoaderConfig()
        self.config = config

    def load(self) -> pd.DataFrame:
        schedules = self._load_raw_schedules()
        games = self._build_schedule_table(schedules)
        logger.info(
            "Loaded %d games (%d completed) for seasons %s",
            len(games),
            int(games["home_score"].notna().sum()),
            self.config.seasons,
        )

        if self.config.save_parquet:
            DATA_CONFIG.raw_data_dir.mkdir(parents=True, exist_ok=True)
            start_season = min(self.config.seasons)
            end_season = max(self.config.seasons)
            path = DATA_CONFIG.raw_data_dir / f"schedules_{start_season}_{end_season}.parquet"
            games.to_parquet(path, index=False)

        return games

    def _load_raw_schedules(self) -> pd.DataFrame:
        """Load raw schedules via nflreadpy (Polars) and convert to pandas."""
        seasons = self.config.seasons
        if not seasons:
            raise ValueError("At least one season must be provided to ScheduleLoader.")

        pl_df = nflr.load_schedules(seasons=list(seasons))
        try:
            schedules = pl_df.to_pandas()
        except AttributeError as e:
            raise TypeError(
                "nflreadpy.load_schedules did not return a Polars DataFrame as expected. "
                "Check nflreadpy version and docs."
            ) from e

        if not isinstance(schedules, pd.DataFrame):
            raise TypeError("nflreadpy schedules could not be converted to a pandas DataFrame.")
        return schedules

    def _build_schedule_table(self, schedules: pd.DataFrame) -> pd.DataFrame:
        """Standardize the raw schedules into the canonical game table."""
        df = schedules.copy()

        if "gameday" not in df.columns:
            raise KeyError("Could not find a 'gameday' column in schedules.")
        df["gameday"] = pd.to_datetime(df["gameday"])

        keep_cols = [c for c in self.BASE_COLS if c in df.columns]
        df = df[keep_cols].copy()

        if not self.config.include_postseason and "game_type" in df.columns:
            df = df[df["game_type"].astype(str).str.upper() == "REG"].copy()

        self._add_outcome_targets_inplace(df)

        sort_cols = [c for c in ["gameday", "gametime", "game_id"] if c in df.columns]
        return df.sort_values(sort_cols).reset_index(drop=True)

    @staticmethod
    def _add_outcome_targets_inplace(df: pd.DataFrame) -> None:
        """Add a nullable home_win column (NA for games not yet played)."""
        required = ["home_score", "away_score"]
        missing = [c for c in required if c not in df.columns]
        if missing:
            raise KeyError(f"Missing score columns required for targets: {missing}")

        played = df["home_score"].notna() & df["away_score"].notna()
        home_win = (df["home_score"] > df["away_score"]).astype("Int64")
        df["home_win"] = home_win.where(played, pd.NA)
