"""
Static stadium table used for travel distance, time-zone and dome lookups.

Coordinates are the home stadium of each franchise; `utc_offset` is the
standard-time offset in hours. Shared stadiums (MetLife, SoFi) appear twice.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping

from outcome_predictor.domain.games import Team

EARTH_RADIUS_MILES = 3959.0


@dataclass(frozen=True)
class StadiumLocation:
    city: str
    state: str
    latitude: float
    longitude: float
    utc_offset: int
    is_indoor: bool = False

    def distance_to(self, other: "StadiumLocation") -> float:
        """Great-circle distance in miles (haversine)."""
        lat1 = math.radians(self.latitude)
        lat2 = math.radians(other.latitude)
        d_lat = math.radians(other.latitude - self.latitude)
        d_lon = math.radians(other.longitude - self.longitude)

        a = (
            math.sin(d_lat / 2) ** 2
            + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
        )
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
        return EARTH_RADIUS_MILES * c

    def time_zone_difference(self, other: "StadiumLocation") -> int:
        """Hours gained travelling from this stadium to `other` (east is positive)."""
        return other.utc_offset - self.utc_offset


STADIUMS: Mapping[str, StadiumLocation] = {
    # AFC East
    "BUF": StadiumLocation("Orchard Park", "NY", 42.7738, -78.7870, -5),
    "MIA": StadiumLocation("Miami Gardens", "FL", 25.9580, -80.2389, -5),
    "NE": StadiumLocation("Foxborough", "MA", 42.0909, -71.2643, -5),
    "NYJ": StadiumLocation("East Rutherford", "NJ", 40.8128, -74.0742, -5),
    # AFC North
    "BAL": StadiumLocation("Baltimore", "MD", 39.2780, -76.6227, -5),
    "CIN": StadiumLocation("Cincinnati", "OH", 39.0954, -84.5160, -5),
    "CLE": StadiumLocation("Cleveland", "OH", 41.5061, -81.6995, -5),
    "PIT": StadiumLocation("Pittsburgh", "PA", 40.4468, -80.0158, -5),
    # AFC South
    "HOU": StadiumLocation("Houston", "TX", 29.6847, -95.4107, -6, is_indoor=True),
    "IND": StadiumLocation("Indianapolis", "IN", 39.7601, -86.1639, -5, is_indoor=True),
    "JAX": StadiumLocation("Jacksonville", "FL", 30.3240, -81.6373, -5),
    "TEN": StadiumLocation("Nashville", "TN", 36.1665, -86.7713, -6),
    # AFC West
    "DEN": StadiumLocation("Denver", "CO", 39.7439, -105.0201, -7),
    "KC": StadiumLocation("Kansas City", "MO", 39.0489, -94.4839, -6),
    "LV": StadiumLocation("Las Vegas", "NV", 36.0909, -115.1833, -8, is_indoor=True),
    "LAC": StadiumLocation("Inglewood", "CA", 33.9534, -118.3392, -8),
    # NFC East
    "DAL": StadiumLocation("Arlington", "TX", 32.7473, -97.0945, -6, is_indoor=True),
    "NYG": StadiumLocation("East Rutherford", "NJ", 40.8128, -74.0742, -5),
    "PHI": StadiumLocation("Philadelphia", "PA", 39.9008, -75.1675, -5),
    "WAS": StadiumLocation("Landover", "MD", 38.9076, -76.8645, -5),
    # NFC North
    "CHI": StadiumLocation("Chicago", "IL", 41.8623, -87.6167, -6),
    "DET": StadiumLocation("Detroit", "MI", 42.3400, -83.0456, -5, is_indoor=True),
    "GB": StadiumLocation("Green Bay", "WI", 44.5013, -88.0622, -6),
    "MIN": StadiumLocation("Minneapolis", "MN", 44.9738, -93.2575, -6, is_indoor=True),
    # NFC South
    "ATL": StadiumLocation("Atlanta", "GA", 33.7555, -84.4008, -5, is_indoor=True),
    "CAR": StadiumLocation("Charlotte", "NC", 35.2258, -80.8528, -5),
    "NO": StadiumLocation("New Orleans", "LA", 29.9511, -90.0812, -6, is_indoor=True),
    "TB": StadiumLocation("Tampa", "FL", 27.9759, -82.5033, -5),
    # NFC West
    "ARI": StadiumLocation("Glendale", "AZ", 33.5276, -112.2626, -7, is_indoor=True),
    "LA": StadiumLocation("Inglewood", "CA", 33.9534, -118.3392, -8),
    "SF": StadiumLocation("Santa Clara", "CA", 37.4032, -121.9698, -8),
    "SEA": StadiumLocation("Seattle", "WA", 47.5952, -122.3316, -8),
}


def stadium_for(team: Team, table: Mapping[str, StadiumLocation] = STADIUMS) -> StadiumLocation | None:
    """Stadium of `team`, or None when the team is not in `table`."""
    return table.get(team.abbreviation)


def is_dome_team(team: Team, table: Mapping[str, StadiumLocation] = STADIUMS) -> bool:
    """True if the team normally plays home games indoors (dome or retractable roof)."""
    stadium = stadium_for(team, table)
    return stadium is not None and stadium.is_indoor


def weather_location(team: Team, table: Mapping[str, StadiumLocation] = STADIUMS) -> str:
    """Location string passed to the weather source for a game hosted by `team`."""
    stadium = stadium_for(team, table)
    if stadium is not None:
        return f"{stadium.city}, {stadium.state}"
    # Unknown team: last word of the name, e.g. "Kansas City Chiefs" -> "Chiefs"
    return team.name.split(" ")[-1]
