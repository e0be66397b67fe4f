from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from outcome_predictor.analysis.base import FactorResult
from outcome_predictor.data.sources import NewsSource
from outcome_predictor.domain.games import Game, Team
from outcome_predictor.domain.reports import Article, NewsSentiment
from outcome_predictor.utils import clamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewsConfig:
    """
    Keyword scan over recent articles.

    Keywords are matched as lowercase substrings of "title content"; each
    keyword counts at most once per article.
    """

    negative_keywords: tuple[str, ...] = (
        "injury",
        "injured",
        "out",
        "suspended",
        "arrest",
        "arrested",
        "jail",
        "divorce",
        "personal",
        "leave",
        "absence",
        "ruled out",
    )
    positive_keywords: tuple[str, ...] = ("return", "healthy", "activated", "cleared", "practice")
    negative_weight: float = 0.05
    positive_weight: float = 0.03
    min_impact: float = -0.15
    max_impact: float = 0.10
    max_articles: int = 10


DEFAULT_NEWS_CONFIG = NewsConfig()
NO_NEWS = NewsSentiment(impact=0.0, key_news=None)


def score_articles(articles: Sequence[Article], config: NewsConfig = DEFAULT_NEWS_CONFIG) -> NewsSentiment:
    """
    Keyword sentiment of `articles`, in [min_impact, max_impact].

    The key headline is the title of the first article with a negative hit.
    """
    impact = 0.0
    key_news = None

    for article in articles:
        text = f"{article.title} {article.content}".lower()

        negatives = sum(1 for kw in config.negative_keywords if kw in text)
        if negatives and key_news is None:
            key_news = article.title
        impact -= negatives * config.negative_weight
        impact += sum(config.positive_weight for kw in config.positive_keywords if kw in text)

    return NewsSentiment(clamp(impact, config.min_impact, config.max_impact), key_news)


class NewsSentimentAnalyzer:
    """Score the most recent pre-kickoff articles for each team and compare."""

    def __init__(self, source: NewsSource, config: NewsConfig = DEFAULT_NEWS_CONFIG) -> None:
        self.source = source
        self.config = config

    def sentiment(self, team: Team, before: datetime) -> NewsSentiment:
        """
        Sentiment of `team`'s newest articles before `before`.

        Any failure fetching or reading the articles gives NO_NEWS.
        """
        try:
            articles = self.source.articles(team, before)
            recent = sorted(
                (a for a in articles if a.published_date < before),
                key=lambda a: a.published_date,
                reverse=True,
            )[: self.config.max_articles]
            return score_articles(recent, self.config)
        except Exception as e:
            logger.warning("News unavailable for %s: %s", team.abbreviation, e)
            return NO_NEWS

    @staticmethod
    def assess(game: Game, home: NewsSentiment, away: NewsSentiment) -> FactorResult:
        details = ""
        if home.key_news is not None:
            details += f"{game.home_team.name}: {home.key_news}. "
        if away.key_news is not None:
            details += f"{game.away_team.name}: {away.key_news}. "
        return FactorResult(home.impact - away.impact, details)

    def analyze(self, game: Game) -> FactorResult:
        kickoff = game.scheduled_date
        return self.assess(
            game,
            self.sentiment(game.home_team, kickoff),
            self.sentiment(game.away_team, kickoff),
        )
