import pandas as pd
import pytest

from outcome_predictor.data.loaders.schedules import ScheduleLoader, ScheduleLoaderConfig


class FakePolarsFrame:
    """Stands in for the Polars frame nflreadpy returns."""

    def __init__(self, df):
        self.df = df

    def to_pandas(self):
        return self.df.copy()


@pytest.fixture
def patch_schedules(monkeypatch, mock_schedule_data):
    import nflreadpy as nflr

    requested = []

    def mock_load_schedules(seasons):
        requested.append(seasons)
        return FakePolarsFrame(mock_schedule_data)

    monkeypatch.setattr(nflr, "load_schedules", mock_load_schedules)
    return requested


def test_schedule_loader_with_mock(patch_schedules):
    """Unit test using mock schedules (no external dependency)."""
    loader = ScheduleLoader(ScheduleLoaderConfig(seasons=[2023], save_parquet=False))
    df = loader.load()

    assert patch_schedules == [[2023]]
    assert isinstance(df, pd.DataFrame)
    assert len(df) == 4

    for col in ScheduleLoader.BASE_COLS + ["home_win"]:
        assert col in df.columns

    assert pd.api.types.is_datetime64_any_dtype(df["gameday"])
    assert list(df["game_id"]) == ["2023_01_DET_KC", "2023_01_BUF_NYJ", "2023_02_KC_JAX", "2023_19_MIA_KC"]


def test_home_win_is_nullable_for_unplayed_games(patch_schedules):
    df = ScheduleLoader(ScheduleLoaderConfig(seasons=[2023])).load().set_index("game_id")

    assert df.loc["2023_01_DET_KC", "home_win"] == 0
    assert df.loc["2023_01_BUF_NYJ", "home_win"] == 1
    assert pd.isna(df.loc["2023_02_KC_JAX", "home_win"])


def test_regular_season_only(patch_schedules):
    df = ScheduleLoader(ScheduleLoaderConfig(seasons=[2023], include_postseason=False)).load()

    assert len(df) == 3
    assert set(df["game_type"]) == {"REG"}


def test_rejects_non_polars_result(monkeypatch, mock_schedule_data):
    import nflreadpy as nflr

    monkeypatch.setattr(nflr, "load_schedules", lambda seasons: object())

    with pytest.raises(TypeError):
        ScheduleLoader(ScheduleLoaderConfig(seasons=[2023])).load()


def test_requires_seasons():
    with pytest.raises(ValueError):
        ScheduleLoader(ScheduleLoaderConfig(seasons=[])).load()


def test_missing_score_columns(monkeypatch, mock_schedule_data):
    import nflreadpy as nflr

    frame = FakePolarsFrame(mock_schedule_data.drop(columns=["away_score"]))
    monkeypatch.setattr(nflr, "load_schedules", lambda seasons: frame)

    with pytest.raises(KeyError):
        ScheduleLoader(ScheduleLoaderConfig(seasons=[2023])).load()


@pytest.mark.integration
def test_schedule_loader_real_smoke():
    """Optional integration test that hits nflreadpy for real."""
    loader = ScheduleLoader(ScheduleLoaderConfig(seasons=[2023], save_parquet=False))
    df = loader.load()

    assert isinstance(df, pd.DataFrame)
    assert len(df) > 0
    assert "game_id" in df.columns
    assert pd.api.types.is_datetime64_any_dtype(df["gameday"])
