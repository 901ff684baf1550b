import json
import random
from datetime import date, datetime, timedelta, timezone

import pytest

from socialpulse.analytics.aggregator import AnalyticsAggregator, engagement_level
from socialpulse.analytics.insights import NO_CREDENTIALS_MESSAGE
from socialpulse.analytics.percentages import sentiment_percentages
from socialpulse.analytics.trend import build_sentiment_trend, fill_gap
from socialpulse.common.models import SearchQuery

NOW = datetime(2024, 5, 30, 12, 0, tzinfo=timezone.utc)


def make_aggregator(seed=7, trend_days=30):
    return AnalyticsAggregator(rng=random.Random(seed), trend_days=trend_days, clock=lambda: NOW)


def mixed_records(make_comment):
    actual = [
        make_comment("roads are great now", "positive", user_name="Ravi", topics=["infrastructure"]),
        make_comment("water shortage again", "negative", user_name="Ravi", topics=["water issues"]),
        make_comment("ok", "neutral", platform="Twitter (X)", user_name="Anu"),
        make_comment("thank you", "positive", platform="Facebook", user_name="Sita", topics=["appreciation"]),
        make_comment("schools reopened", "neutral", platform="Instagram", user_name="Gopi", topics=["education"]),
    ]
    metadata = make_comment(json.dumps({"title": "Budget video", "view_count": 999}),
                            user_name="VIDEO_METADATA", topics=["video_metadata"],
                            engagement_score=999, is_video_metadata=True)
    note = make_comment(json.dumps({"commentCounts": {"reported": 50, "retrieved": 40}}),
                        user_name="VIDEO_INFO", topics=["video_info"], is_comment_metric=True)
    return actual + [metadata, note]


def test_pseudo_records_excluded_everywhere(make_comment):
    analytics = make_aggregator().generate(mixed_records(make_comment))

    assert analytics.metrics.total_comments == 5
    assert sum(entry.value for entry in analytics.platform_distribution) == 5
    assert "video_metadata" not in [t.name for t in analytics.topic_distribution]
    assert "video_info" not in [t.name for t in analytics.topic_distribution]
    assert all(i.name not in ("VIDEO_METADATA", "VIDEO_INFO") for i in analytics.influencers)
    keywords = [k.text for k in analytics.top_keywords]
    assert not any("title" in k or "commentcounts" in k for k in keywords)
    today = analytics.sentiment_trend[-1]
    assert (today.positive, today.neutral, today.negative) == (40, 40, 20)


@pytest.mark.parametrize("positive, negative, total", [
    (1, 1, 3), (3, 5, 8), (1, 0, 3), (2, 2, 3), (0, 0, 7), (7, 0, 7), (1, 1, 2), (13, 21, 40),
])
def test_percentages_always_sum_to_100(positive, negative, total):
    triple = sentiment_percentages(positive, negative, total)
    assert sum(triple) == 100
    assert all(0 <= value <= 100 for value in triple)


def test_percentage_overflow_reduces_larger_share():
    # 37.5 and 62.5 both round up to 101 in total
    assert sentiment_percentages(3, 5, 8) == (38, 62, 0)


def test_metrics_reconcile_to_100(make_comment):
    comments = [make_comment(sentiment=s) for s in ["positive", "negative", "neutral"]]
    metrics = make_aggregator().generate(comments).metrics

    assert (metrics.positive_sentiment, metrics.negative_sentiment, metrics.neutral_sentiment) == (33, 33, 34)
    assert metrics.changes.is_placeholder


def test_engagement_rate_formula(make_comment):
    comments = [make_comment(sentiment="positive" if i % 2 else "negative", engagement_score=2)
                for i in range(100)]
    assert make_aggregator().generate(comments).metrics.engagement_rate == 10.0

    skewed = [make_comment(sentiment="positive", engagement_score=4) for _ in range(10)]
    # 4 * 0.1 * 1.5 * 5
    assert make_aggregator().generate(skewed).metrics.engagement_rate == 3.0

    loud = [make_comment(sentiment="positive", engagement_score=10000) for _ in range(100)]
    assert make_aggregator().generate(loud).metrics.engagement_rate == 100


def test_empty_state_without_credentials():
    analytics = make_aggregator().generate([], credentials_configured=False)

    assert analytics.ai_insights == NO_CREDENTIALS_MESSAGE
    assert analytics.ai_insights.startswith("No API keys configured")
    assert analytics.metrics.total_comments == 0
    assert analytics.sentiment_trend == [] and analytics.influencers == []
    assert analytics.metrics.changes.is_placeholder is False


def test_empty_state_with_credentials_names_the_query(make_comment):
    query = SearchQuery(id=4, keyword="test", timeperiod=30, platform="all")
    only_pseudo = mixed_records(make_comment)[-2:]

    analytics = make_aggregator().generate(only_pseudo, query, credentials_configured=True)

    assert analytics.ai_insights.startswith('No data found for "test" on any platform for the last 30 days')
    assert "API keys" not in analytics.ai_insights
    assert analytics.metrics.total_comments == 0
    assert analytics.search_query_id == 4


def test_influencer_grouping(make_comment):
    sentiments = ["positive"] * 12 + ["neutral"] * 5 + ["negative"] * 3
    comments = [make_comment(sentiment=s, user_name="UserA", platform="YouTube") for s in sentiments]
    comments.append(make_comment(sentiment="positive", user_name="UserA", platform="Facebook"))

    influencers = make_aggregator().generate(comments).influencers

    top = influencers[0]
    assert (top.name, top.platform, top.comment_count) == ("UserA", "YouTube", 20)
    assert top.engagement_level == "High"
    assert top.handle == "usera"
    assert (top.sentiment.positive, top.sentiment.neutral, top.sentiment.negative) == (60, 25, 15)
    assert influencers[1].platform == "Facebook"


def test_engagement_level_thresholds():
    assert [engagement_level(n) for n in (1, 5, 6, 15, 16)] == ["Low", "Low", "Medium", "Medium", "High"]


def test_topic_and_platform_distributions(make_comment):
    comments = [
        make_comment(topics=["education", "education"], platform="YouTube"),
        make_comment(topics=["education", "healthcare"], platform="Reddit"),
    ]
    analytics = make_aggregator().generate(comments)

    assert [(t.name, t.value, t.color) for t in analytics.topic_distribution] == [
        ("education", 2, "#3B82F6"), ("healthcare", 1, "#10B981")]
    assert [(p.name, p.color) for p in analytics.platform_distribution] == [
        ("YouTube", "#FF0000"), ("Reddit", "#9CA3AF")]


def test_top_keywords_weights_topics(make_comment):
    comments = [
        make_comment("Water water from the tank", topics=["water issues"]),
        make_comment("that tank was empty", topics=["water issues"]),
    ]
    keywords = {k.text: k.value for k in make_aggregator().generate(comments).top_keywords}

    assert keywords["water issues"] == 6
    assert keywords["water"] == 2
    assert keywords["tank"] == 2
    assert "from" not in keywords and "that" not in keywords and "the" not in keywords


def test_insight_templates(make_comment):
    positive = [make_comment(sentiment="positive", topics=["education"])] * 2 + [make_comment(sentiment="negative")]
    text = make_aggregator().generate(positive).ai_insights
    assert "12% increase" in text and "education" in text

    tied = [make_comment(sentiment="positive"), make_comment(sentiment="negative")]
    text = make_aggregator().generate(tied).ai_insights
    assert text.startswith("The overall sentiment is trending negative with 50%")


def test_trend_window_follows_query_timeperiod(make_comment):
    query = SearchQuery(id=1, keyword="kw", timeperiod=7)
    trend = make_aggregator().generate([make_comment(sentiment="positive")], query).sentiment_trend

    assert len(trend) == 7
    assert trend[-1].date == "2024-05-30"
    assert (trend[-1].positive, trend[-1].neutral, trend[-1].negative) == (100, 0, 0)


def test_trend_gap_fill_bounds_and_continuity(make_comment):
    comments = [
        make_comment(sentiment="negative", created_at=NOW - timedelta(days=20)),
        make_comment(sentiment="positive", created_at=NOW),
    ]
    for seed in range(20):
        trend = make_aggregator(seed=seed).generate(comments).sentiment_trend
        assert len(trend) == 30
        assert [p.date for p in trend] == sorted(p.date for p in trend)
        for point in trend:
            assert point.positive + point.neutral + point.negative == 100
            assert all(0 <= v <= 100 for v in (point.positive, point.neutral, point.negative))
        for previous, current in zip(trend[:-1], trend[1:-1]):
            if current.date != (NOW - timedelta(days=20)).date().isoformat():
                assert abs(current.positive - previous.positive) <= 10


def test_trend_ignores_comments_outside_window(make_comment):
    yesterday = make_comment(sentiment="positive", created_at=NOW - timedelta(days=1))
    trend = build_sentiment_trend([yesterday], days=1, today=date(2024, 5, 30), rng=random.Random(3))

    assert len(trend) == 1
    assert trend[0].positive <= 38


def test_fill_gap_keeps_polarized_share_bounded():
    rng = random.Random(11)
    for _ in range(200):
        positive, neutral, negative = fill_gap((60, 0, 40), rng)
        assert positive + negative <= 96
        assert neutral == 100 - positive - negative >= 0
