from datetime import datetime, timedelta

import pytest

from outcome_predictor.analysis.weather import (
    WeatherImpactAnalyzer,
    estimate_pass_ratio,
    weather_impact,
    weather_summary,
)
from outcome_predictor.data.sources import WeatherSource
from outcome_predictor.domain.reports import WeatherConditions

KICKOFF = datetime(2023, 12, 17, 13, 0)


def _conditions(temperature=65.0, wind=5.0, precip=0.0, indoor=False):
    return WeatherConditions(
        temperature=temperature,
        wind_speed=wind,
        precipitation_probability=precip,
        is_indoor=indoor,
        location="Kansas City, MO",
        forecast_time=KICKOFF,
    )


class StubWeather(WeatherSource):
    def __init__(self, conditions=None, error=None):
        self.conditions = conditions
        self.error = error
        self.calls = []

    def weather(self, location, at):
        self.calls.append((location, at))
        if self.error is not None:
            raise self.error
        return self.conditions


def test_indoor_game_has_no_impact():
    blizzard = _conditions(temperature=-5, wind=40, precip=1.0, indoor=True)
    assert weather_impact(blizzard, 0.7, 0.4, home_is_dome=True) == 0.0
    assert weather_summary(blizzard) == "Indoor game - no weather impact"


def test_good_weather_has_no_impact():
    assert weather_impact(_conditions(), 0.7, 0.7, home_is_dome=False) == 0.0
    summary = weather_summary(_conditions(temperature=65.4, wind=5.9))
    assert summary == "Good weather conditions (65°F, 5mph wind)"


@pytest.mark.parametrize(
    "wind, home_ratio, away_ratio, expected",
    [
        (25.0, 0.65, 0.50, -0.10),
        (25.0, 0.50, 0.65, 0.10),
        (25.0, 0.65, 0.65, 0.0),
        (18.0, 0.62, 0.50, 0.0),
        (18.0, 0.68, 0.50, -0.05),
        (18.0, 0.50, 0.68, 0.05),
    ],
)
def test_wind_penalises_pass_heavy_sides(wind, home_ratio, away_ratio, expected):
    impact = weather_impact(_conditions(wind=wind), home_ratio, away_ratio, home_is_dome=False)
    assert impact == pytest.approx(expected)


@pytest.mark.parametrize(
    "temperature, dome, expected",
    [(10.0, False, -0.08), (10.0, True, -0.14), (28.0, False, -0.04), (28.0, True, -0.08), (35.0, True, 0.0)],
)
def test_cold_penalises_home_side(temperature, dome, expected):
    impact = weather_impact(_conditions(temperature=temperature), 0.55, 0.55, home_is_dome=dome)
    assert impact == pytest.approx(expected)


@pytest.mark.parametrize(
    "precip, home_ratio, away_ratio, expected",
    [
        (0.8, 0.45, 0.45, 0.06 - 0.06),
        (0.8, 0.45, 0.60, 0.06 + 0.08),
        (0.8, 0.60, 0.45, -0.08 - 0.06),
        (0.6, 0.45, 0.60, 0.03 + 0.04),
        (0.6, 0.55, 0.55, -0.04 + 0.04),
        (0.5, 0.45, 0.60, 0.0),
    ],
)
def test_precipitation_favors_run_leaning_sides(precip, home_ratio, away_ratio, expected):
    impact = weather_impact(_conditions(precip=precip), home_ratio, away_ratio, home_is_dome=False)
    assert impact == pytest.approx(expected)


def test_worst_case_for_home_is_clamped():
    conditions = _conditions(temperature=5.0, wind=30.0, precip=0.9)
    assert weather_impact(conditions, 0.70, 0.40, home_is_dome=True) == pytest.approx(-0.15)


def test_best_case_for_home_is_clamped():
    conditions = _conditions(temperature=50.0, wind=30.0, precip=0.9)
    assert weather_impact(conditions, 0.40, 0.70, home_is_dome=False) == pytest.approx(0.15)


def test_summary_lists_each_condition():
    conditions = _conditions(temperature=10.7, wind=25.2, precip=0.875)
    assert weather_summary(conditions) == (
        "severe wind (25mph) - favors running game; "
        "extreme cold (10°F) - ball handling issues; "
        "likely precipitation (87%) - favors rush"
    )


def test_summary_moderate_conditions():
    conditions = _conditions(temperature=30.0, wind=16.0, precip=0.625)
    assert weather_summary(conditions) == (
        "strong wind (16mph) - passing difficult; "
        "freezing temps (30°F) - affects grip; "
        "possible precipitation (62%)"
    )


def test_pass_ratio_estimate(make_record, kc):
    assert estimate_pass_ratio(kc, []) == 0.55
    assert estimate_pass_ratio(kc, make_record(kc, [(30, 10)] * 3)) == pytest.approx(0.61)
    assert estimate_pass_ratio(kc, make_record(kc, [(50, 10)] * 3)) == pytest.approx(0.70)
    assert estimate_pass_ratio(kc, make_record(kc, [(5, 10)] * 3)) == pytest.approx(0.40)


def test_pass_ratio_uses_last_eight_games(make_record, kc):
    games = make_record(kc, [(0, 10)] * 4 + [(28, 10)] * 8)
    assert estimate_pass_ratio(kc, games) == pytest.approx(0.59)


def test_analyzer_fetches_home_city_at_kickoff(make_game, make_record, kc, det):
    game = make_game(kc, det, KICKOFF)
    source = StubWeather(_conditions(temperature=10.0))
    analyzer = WeatherImpactAnalyzer(source)

    result = analyzer.analyze(game, make_record(kc, [(24, 20)]), make_record(det, [(24, 20)]))

    assert source.calls == [("Kansas City, MO", KICKOFF)]
    assert result.adjustment == pytest.approx(-0.08)
    assert result.details.startswith("extreme cold (10°F)")


def test_dome_home_team_takes_extra_cold_penalty(make_game, det, kc):
    game = make_game(det, kc, KICKOFF)
    analyzer = WeatherImpactAnalyzer(StubWeather(_conditions(temperature=10.0)))
    assert analyzer.analyze(game, [], []).adjustment == pytest.approx(-0.14)


def test_analyzer_is_fail_soft(make_game, kc, det, caplog):
    game = make_game(kc, det, KICKOFF + timedelta(days=30))
    analyzer = WeatherImpactAnalyzer(StubWeather(error=TimeoutError("beyond forecast horizon")))

    result = analyzer.analyze(game, [], [])

    assert result.adjustment == 0.0
    assert result.details == ""
    assert "Weather unavailable" in caplog.text


def test_unreadable_forecast_is_neutral(make_game, kc, det, caplog):
    game = make_game(kc, det, KICKOFF)
    analyzer = WeatherImpactAnalyzer(StubWeather(_conditions(temperature="cold")))

    result = analyzer.analyze(game, [], [])

    assert result.adjustment == 0.0
    assert result.details == ""
    assert "Unreadable forecast" in caplog.text
