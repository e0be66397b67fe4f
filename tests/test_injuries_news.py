from datetime import datetime, timedelta, timezone

import pytest

from outcome_predictor.analysis.injuries import InjuryImpactAssessor, describe_key_injuries
from outcome_predictor.analysis.news import NO_NEWS, NewsSentimentAnalyzer, score_articles
from outcome_predictor.data.sources import InjurySource, NewsSource
from outcome_predictor.domain.reports import (
    Article,
    InjuredPlayer,
    InjuryStatus,
    PlayerPosition,
    TeamInjuryReport,
)

KICKOFF = datetime(2023, 11, 26, 13, 0)


class StubInjuries(InjurySource):
    def __init__(self, reports, failing=()):
        self.reports = reports
        self.failing = set(failing)

    def injuries(self, team, season):
        if team.abbreviation in self.failing:
            raise TimeoutError("injury feed timed out")
        return self.reports.get(team.abbreviation, TeamInjuryReport(team))


class StubNews(NewsSource):
    def __init__(self, articles, failing=()):
        self.articles_by_team = articles
        self.failing = set(failing)

    def articles(self, team, before):
        if team.abbreviation in self.failing:
            raise ConnectionError("news feed down")
        return list(self.articles_by_team.get(team.abbreviation, []))


def _article(title, content="", days_before=1):
    return Article(title=title, content=content, published_date=KICKOFF - timedelta(days=days_before))


@pytest.fixture
def qb_out(kc):
    return TeamInjuryReport(
        kc,
        [
            InjuredPlayer("Patrick Mahomes", PlayerPosition.QUARTERBACK, InjuryStatus.OUT),
            InjuredPlayer("Travis Kelce", PlayerPosition.TIGHT_END, InjuryStatus.QUESTIONABLE),
        ],
    )


def test_describe_key_injuries(qb_out, det):
    assert describe_key_injuries(qb_out) == "Kansas City Chiefs key injuries: Patrick Mahomes (QB - Out). "
    assert describe_key_injuries(TeamInjuryReport(det)) == ""


def test_injured_home_team_favors_away(target_game, qb_out, det):
    away = TeamInjuryReport(det, [InjuredPlayer("WR1", PlayerPosition.WIDE_RECEIVER, InjuryStatus.OUT)])
    assessor = InjuryImpactAssessor(StubInjuries({"KC": qb_out, "DET": away}))

    result = assessor.analyze(target_game)

    # away 0.5 - home (1.0 + 0.12 * 0.5, capped at 1.0)
    assert result.adjustment == pytest.approx(0.5 - 1.0)
    assert result.details == (
        "Kansas City Chiefs key injuries: Patrick Mahomes (QB - Out). "
        "Detroit Lions key injuries: WR1 (WR - Out). "
    )


def test_injury_failure_for_one_team_keeps_the_other(target_game, qb_out, caplog):
    assessor = InjuryImpactAssessor(StubInjuries({"KC": qb_out}, failing={"DET"}))

    result = assessor.analyze(target_game)

    assert result.adjustment == pytest.approx(-1.0)
    assert "Injury report unavailable for DET" in caplog.text


def test_injury_failure_for_both_teams_is_neutral(target_game):
    assessor = InjuryImpactAssessor(StubInjuries({}, failing={"KC", "DET"}))
    result = assessor.analyze(target_game)
    assert result.adjustment == 0.0
    assert result.details == ""


def test_score_articles_counts_each_keyword_once_per_article():
    articles = [
        _article("Receiver ruled out"),
        _article("Linebacker activated", "Cleared to practice on Friday"),
    ]
    sentiment = score_articles(articles)

    # "out" + "ruled out" = -0.10; "activated" + "cleared" + "practice" = +0.09
    assert sentiment.impact == pytest.approx(-0.01)
    assert sentiment.key_news == "Receiver ruled out"


@pytest.mark.parametrize(
    "title, expected",
    [
        ("Quarterback injured, ruled out, suspended after arrest", -0.15),
        ("Starters return healthy, activated and cleared for practice", 0.10),
        ("Weekly press conference recap", 0.0),
    ],
)
def test_score_articles_is_clamped(title, expected):
    assert score_articles([_article(title)] * 3).impact == pytest.approx(expected)


def test_sentiment_uses_ten_most_recent_articles_before_kickoff(kc):
    recent = [_article("Weekly press conference recap", days_before=d) for d in range(1, 11)]
    older = [_article("Star receiver suspended", days_before=20)]
    leaked = [Article("Coach arrested", "", KICKOFF + timedelta(hours=2))]
    analyzer = NewsSentimentAnalyzer(StubNews({"KC": older + leaked + recent}))

    sentiment = analyzer.sentiment(kc, KICKOFF)

    assert sentiment.impact == 0.0
    assert sentiment.key_news is None


def test_news_adjustment_is_home_minus_away(target_game):
    source = StubNews(
        {
            "KC": [_article("Left tackle returns to practice")],
            "DET": [_article("Running back ruled out")],
        }
    )
    result = NewsSentimentAnalyzer(source).analyze(target_game)

    assert result.adjustment == pytest.approx(0.06 - (-0.10))
    assert result.details == "Detroit Lions: Running back ruled out. "


def test_news_failure_is_neutral(target_game, kc, caplog):
    analyzer = NewsSentimentAnalyzer(StubNews({}, failing={"KC", "DET"}))

    assert analyzer.sentiment(kc, KICKOFF) == NO_NEWS
    result = analyzer.analyze(target_game)
    assert result.adjustment == 0.0
    assert result.details == ""
    assert "News unavailable for KC" in caplog.text


def test_unreadable_injury_report_is_neutral(target_game, kc, caplog):
    # position given as a bare code instead of a PlayerPosition
    garbled = TeamInjuryReport(kc, [InjuredPlayer("QB1", "QB", InjuryStatus.OUT)])
    assessor = InjuryImpactAssessor(StubInjuries({"KC": garbled}))

    result = assessor.analyze(target_game)

    assert result.adjustment == 0.0
    assert result.details == ""
    assert "Unreadable injury reports" in caplog.text


def test_timezone_aware_articles_are_neutral(target_game, kc, caplog):
    aware = Article("Star receiver suspended", "", datetime(2023, 11, 25, tzinfo=timezone.utc))
    analyzer = NewsSentimentAnalyzer(StubNews({"KC": [aware]}))

    assert analyzer.sentiment(kc, KICKOFF) == NO_NEWS
    result = analyzer.analyze(target_game)
    assert result.adjustment == 0.0
    assert result.details == ""
    assert "News unavailable for KC" in caplog.text
