from __future__ import annotations

from outcome_predictor.domain.games import Conference, Division, Team

AFC, NFC = Conference.AFC, Conference.NFC
NORTH, SOUTH, EAST, WEST = Division.NORTH, Division.SOUTH, Division.EAST, Division.WEST

# Abbreviations follow nflverse schedules (home_team / away_team columns)
NFL_TEAMS: tuple[Team, ...] = (
    # AFC East
    Team("BUF", "Buffalo Bills", AFC, EAST),
    Team("MIA", "Miami Dolphins", AFC, EAST),
    Team("NE", "New England Patriots", AFC, EAST),
    Team("NYJ", "New York Jets", AFC, EAST),
    # AFC North
    Team("BAL", "Baltimore Ravens", AFC, NORTH),
    Team("CIN", "Cincinnati Bengals", AFC, NORTH),
    Team("CLE", "Cleveland Browns", AFC, NORTH),
    Team("PIT", "Pittsburgh Steelers", AFC, NORTH),
    # AFC South
    Team("HOU", "Houston Texans", AFC, SOUTH),
    Team("IND", "Indianapolis Colts", AFC, SOUTH),
    Team("JAX", "Jacksonville Jaguars", AFC, SOUTH),
    Team("TEN", "Tennessee Titans", AFC, SOUTH),
    # AFC West
    Team("DEN", "Denver Broncos", AFC, WEST),
    Team("KC", "Kansas City Chiefs", AFC, WEST),
    Team("LV", "Las Vegas Raiders", AFC, WEST),
    Team("LAC", "Los Angeles Chargers", AFC, WEST),
    # NFC East
    Team("DAL", "Dallas Cowboys", NFC, EAST),
    Team("NYG", "New York Giants", NFC, EAST),
    Team("PHI", "Philadelphia Eagles", NFC, EAST),
    Team("WAS", "Washington Commanders", NFC, EAST),
    # NFC North
    Team("CHI", "Chicago Bears", NFC, NORTH),
    Team("DET", "Detroit Lions", NFC, NORTH),
    Team("GB", "Green Bay Packers", NFC, NORTH),
    Team("MIN", "Minnesota Vikings", NFC, NORTH),
    # NFC South
    Team("ATL", "Atlanta Falcons", NFC, SOUTH),
    Team("CAR", "Carolina Panthers", NFC, SOUTH),
    Team("NO", "New Orleans Saints", NFC, SOUTH),
    Team("TB", "Tampa Bay Buccaneers", NFC, SOUTH),
    # NFC West
    Team("ARI", "Arizona Cardinals", NFC, WEST),
    Team("LA", "Los Angeles Rams", NFC, WEST),
    Team("SF", "San Francisco 49ers", NFC, WEST),
    Team("SEA", "Seattle Seahawks", NFC, WEST),
)

_BY_ABBREVIATION = {t.abbreviation: t for t in NFL_TEAMS}

# Historical / alternate codes seen in older schedule data
_ALIASES = {
    "LAR": "LA",
    "OAK": "LV",
    "SD": "LAC",
    "STL": "LA",
    "WSH": "WAS",
    "JAC": "JAX",
}


def team_by_abbreviation(abbreviation: str) -> Team:
    """
    Look up a team by code, accepting relocated-franchise aliases.

    Raises:
        KeyError: if the code is unknown.
    """
    code = abbreviation.upper()
    code = _ALIASES.get(code, code)
    try:
        return _BY_ABBREVIATION[code]
    except KeyError:
        raise KeyError(f"Unknown team abbreviation: {abbreviation}") from None
