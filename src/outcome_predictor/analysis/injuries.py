from __future__ import annotations

import logging

from outcome_predictor.analysis.base import NEUTRAL, FactorResult
from outcome_predictor.data.sources import InjurySource
from outcome_predictor.domain.games import Game, Team
from outcome_predictor.domain.reports import TeamInjuryReport

logger = logging.getLogger(__name__)


def describe_key_injuries(report: TeamInjuryReport) -> str:
    """'Team key injuries: Name (QB - Out), ... . ' or '' when nobody key is hurt."""
    key = report.key_injuries
    if not key:
        return ""
    listed = ", ".join(f"{p.name} ({p.position.value} - {p.status.value})" for p in key)
    return f"{report.team.name} key injuries: {listed}. "


class InjuryImpactAssessor:
    """
    Turn both teams' injury reports into a single adjustment.

    adjustment = away total impact - home total impact, so a banged-up
    visitor favors the home team. A report that cannot be fetched counts
    as no impact for that team.
    """

    def __init__(self, source: InjurySource) -> None:
        self.source = source

    def fetch(self, team: Team, season: int) -> TeamInjuryReport | None:
        try:
            return self.source.injuries(team, season)
        except Exception as e:
            logger.warning("Injury report unavailable for %s: %s", team.abbreviation, e)
            return None

    @staticmethod
    def assess(home: TeamInjuryReport | None, away: TeamInjuryReport | None) -> FactorResult:
        if home is None and away is None:
            return NEUTRAL

        home_impact = home.total_impact if home is not None else 0.0
        away_impact = away.total_impact if away is not None else 0.0

        details = ""
        for report in (home, away):
            if report is not None:
                details += describe_key_injuries(report)

        return FactorResult(away_impact - home_impact, details)

    def analyze(self, game: Game) -> FactorResult:
        home = self.fetch(game.home_team, game.season)
        away = self.fetch(game.away_team, game.season)
        try:
            return self.assess(home, away)
        except Exception as e:
            logger.warning("Unreadable injury reports for %s: %s", game.game_id, e)
            return NEUTRAL
