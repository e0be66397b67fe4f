from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Mapping

from outcome_predictor.data.stadiums import STADIUMS, StadiumLocation, stadium_for
from outcome_predictor.domain.games import Game, Team
from outcome_predictor.utils import clamp

NORMAL_SUMMARY = "Normal rest and travel conditions"
THURSDAY = 3  # datetime.weekday()


@dataclass(frozen=True)
class RestTravelConfig:
    """
    Thresholds and bonuses for the rest-and-travel advantage.

    All bonuses are from the home team's perspective; the total is clamped
    to [-advantage_bound, advantage_bound].
    """

    default_rest_days: int = 7
    short_week_rest_days: int = 4
    road_window: int = 5

    thursday_bonus: float = 0.07
    major_rest_gap: int = 4
    major_rest_weight: float = 0.08
    minor_rest_gap: int = 2
    minor_rest_weight: float = 0.04

    long_trip_miles: float = 2000.0
    medium_trip_miles: float = 1000.0
    coast_to_coast_bonus: float = 0.08
    long_trip_two_zone_bonus: float = 0.05
    long_trip_bonus: float = 0.03
    medium_trip_zones_bonus: float = 0.04
    medium_trip_bonus: float = 0.02

    third_road_game_bonus: float = 0.05
    second_road_game_bonus: float = 0.03

    advantage_bound: float = 0.15


DEFAULT_REST_TRAVEL_CONFIG = RestTravelConfig()


@dataclass(frozen=True)
class RestAndTravelAnalysis:
    """
    Schedule geometry around a single game.

    Attributes:
        home_rest_days / away_rest_days: Days since each side's last completed game.
        travel_distance: Miles between the away and home stadiums.
        time_zone_change: Hours gained by the away team travelling east.
        consecutive_road_games: Road games in a row for the away team, this one included.
        is_short_week: Thursday game with at least one side on short rest.
    """

    home_rest_days: int
    away_rest_days: int
    travel_distance: float
    time_zone_change: int
    consecutive_road_games: int
    is_short_week: bool

    @property
    def rest_differential(self) -> int:
        return self.home_rest_days - self.away_rest_days

    def advantage(self, config: RestTravelConfig = DEFAULT_REST_TRAVEL_CONFIG) -> float:
        """Home-side advantage in [-0.15, 0.15] (with default bounds)."""
        adjustment = 0.0

        if self.is_short_week:
            adjustment += config.thursday_bonus

        rest_diff = self.rest_differential
        if abs(rest_diff) >= config.major_rest_gap:
            adjustment += rest_diff / 7.0 * config.major_rest_weight
        elif abs(rest_diff) >= config.minor_rest_gap:
            adjustment += rest_diff / 7.0 * config.minor_rest_weight

        zones = abs(self.time_zone_change)
        if self.travel_distance > config.long_trip_miles:
            if zones >= 3:
                adjustment += config.coast_to_coast_bonus
            elif zones == 2:
                adjustment += config.long_trip_two_zone_bonus
            else:
                adjustment += config.long_trip_bonus
        elif self.travel_distance > config.medium_trip_miles:
            if zones >= 2:
                adjustment += config.medium_trip_zones_bonus
            else:
                adjustment += config.medium_trip_bonus

        if self.consecutive_road_games >= 3:
            adjustment += config.third_road_game_bonus
        elif self.consecutive_road_games >= 2:
            adjustment += config.second_road_game_bonus

        return clamp(adjustment, -config.advantage_bound, config.advantage_bound)

    @property
    def impact_summary(self) -> str:
        factors = []

        if self.is_short_week:
            factors.append("Thursday night game - home team advantage (57% win rate)")

        rest_diff = self.rest_differential
        if rest_diff >= 4:
            factors.append(f"home team has {rest_diff}-day rest advantage")
        elif rest_diff <= -4:
            factors.append(f"away team has {abs(rest_diff)}-day rest advantage")

        if self.travel_distance > 2000 and abs(self.time_zone_change) >= 3:
            factors.append(
                f"away team crosses {abs(self.time_zone_change)} time zones "
                f"({int(self.travel_distance)} miles)"
            )
        elif self.travel_distance > 1000:
            factors.append(f"away team travels {int(self.travel_distance)} miles")

        if self.consecutive_road_games >= 3:
            factors.append(f"away team's {self.consecutive_road_games}rd consecutive road game")
        elif self.consecutive_road_games == 2:
            factors.append("away team's 2nd consecutive road game")

        return "; ".join(factors) if factors else NORMAL_SUMMARY


def rest_days(games: Iterable[Game], kickoff: datetime, default: int = 7) -> int:
    """Whole days between the last completed game before `kickoff` and `kickoff`."""
    previous = [g.scheduled_date for g in games if g.completed_before(kickoff)]
    if not previous:
        return default
    return (kickoff - max(previous)).days


def consecutive_road_games(team: Team, games: Iterable[Game], kickoff: datetime, window: int = 5) -> int:
    """
    Road games in a row for `team` leading into the game at `kickoff`.

    The current game counts as the first. The newest of the last `window`
    completed games is skipped and the rest are scanned backwards until
    the first game `team` did not play on the road.
    """
    recent = sorted(
        (g for g in games if g.completed_before(kickoff)),
        key=lambda g: g.scheduled_date,
    )[-window:]

    count = 1
    for game in list(reversed(recent))[1:]:
        if not game.is_away(team):
            break
        count += 1
    return count


def _travel(
    away: StadiumLocation | None, home: StadiumLocation | None
) -> tuple[float, int]:
    if away is None or home is None:
        return 0.0, 0
    return away.distance_to(home), away.time_zone_difference(home)


def analyze_rest_and_travel(
    game: Game,
    home_games: Iterable[Game],
    away_games: Iterable[Game],
    stadiums: Mapping[str, StadiumLocation] = STADIUMS,
    config: RestTravelConfig = DEFAULT_REST_TRAVEL_CONFIG,
) -> RestAndTravelAnalysis:
    """
    Rest, travel and schedule-density profile for `game`.

    `home_games` / `away_games` may contain scheduled games; only games
    completed before kickoff are used. Teams missing from `stadiums` travel
    zero miles across zero time zones.
    """
    kickoff = game.scheduled_date
    away_games = list(away_games)

    home_rest = rest_days(home_games, kickoff, config.default_rest_days)
    away_rest = rest_days(away_games, kickoff, config.default_rest_days)

    distance, zones = _travel(
        stadium_for(game.away_team, stadiums),
        stadium_for(game.home_team, stadiums),
    )

    short_week = kickoff.weekday() == THURSDAY and (
        home_rest <= config.short_week_rest_days or away_rest <= config.short_week_rest_days
    )

    return RestAndTravelAnalysis(
        home_rest_days=home_rest,
        away_rest_days=away_rest,
        travel_distance=distance,
        time_zone_change=zones,
        consecutive_road_games=consecutive_road_games(
            game.away_team, away_games, kickoff, config.road_window
        ),
        is_short_week=short_week,
    )
