from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

# Base directory for the project (repo root)
PROJECT_ROOT = Path(__file__).resolve().parents[2]


@dataclass(frozen=True)
class DataConfig:
    """Data storage paths and defaults."""

    raw_data_dir: Path = PROJECT_ROOT / "data" / "raw"
    default_seasons: Optional[List[int]] = None

    def __post_init__(self):
        if self.default_seasons is None:
            # Current season plus the two prior ones feed head-to-head lookups
            object.__setattr__(self, "default_seasons", list(range(2021, 2024)))


@dataclass(frozen=True)
class LogConfig:
    """Logging and results paths."""

    level: str = "INFO"
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    predictions_dir: Path = PROJECT_ROOT / "results" / "predictions"


@dataclass(frozen=True)
class BaselineConfig:
    """
    Configuration for the win-rate + home-field baseline.

    Attributes:
        home_field_advantage: Probability boost for the home team.
        recent_games_weight: Number of recent games to weight more heavily.
            Reserved; the baseline arithmetic does not use it yet.
        full_confidence_games: Completed games (both teams) needed for
            confidence 1.0.
    """

    home_field_advantage: float = 0.05
    recent_games_weight: int = 5
    full_confidence_games: int = 20


@dataclass(frozen=True)
class FactorWeights:
    """Linear weights applied to each raw factor adjustment."""

    head_to_head: float = 0.25
    home_away: float = 0.12
    injury: float = 0.15
    news_sentiment: float = 0.08
    weather: float = 0.12
    rest_travel: float = 0.12
    recent_form: float = 0.15


@dataclass(frozen=True)
class ConfidenceConfig:
    """
    Components of the enhanced predictor's confidence score.

    Each component is capped on its own before the total is clamped to [0, 1].
    """

    sample_size_cap: float = 0.3
    sample_size_games: float = 50.0
    certainty_cap: float = 0.3
    certainty_scale: float = 0.6
    injury_bonus: float = 0.06
    news_bonus: float = 0.05
    weather_bonus: float = 0.07
    head_to_head_bonus: float = 0.07
    head_to_head_cap: float = 0.15
    head_to_head_games: float = 10.0


@dataclass(frozen=True)
class EnhancedPredictorConfig:
    """
    Configuration for the multi-factor enhanced predictor.

    Attributes:
        home_field_advantage: Added directly to the probability (not weighted).
        weights: Per-factor linear weights.
        confidence: Confidence score components.
        head_to_head_seasons: Seasons (current included) searched for meetings.
        recent_score_games: Games averaged for the predicted scoreline.
        default_home_score / default_away_score: Scoreline fallback when a
            team has no completed games.
        score_swing: Points shifted per unit of (p - 0.5) in the scoreline.
        significance_threshold: Minimum |adjustment| for the head-to-head and
            home/away lines to appear in the reasoning.
        max_workers: Thread pool size for the independent collaborator reads.
    """

    home_field_advantage: float = 0.06
    weights: FactorWeights = field(default_factory=FactorWeights)
    confidence: ConfidenceConfig = field(default_factory=ConfidenceConfig)
    head_to_head_seasons: int = 3
    recent_score_games: int = 5
    default_home_score: int = 23
    default_away_score: int = 20
    score_swing: float = 16.0
    significance_threshold: float = 0.01
    max_workers: int = 4


# Global config instances
DATA_CONFIG = DataConfig()
LOG_CONFIG = LogConfig()
