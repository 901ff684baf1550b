"""Analytics aggregator: metrics, trend, distributions, keywords, influencers, insights."""
import random
import time
from collections import Counter, defaultdict
from datetime import date, datetime
from typing import Callable, Dict, List, Optional, Sequence, Tuple
from socialpulse.analytics.insights import empty_state_message, summarize
from socialpulse.analytics.percentages import sentiment_percentages
from socialpulse.analytics.trend import build_sentiment_trend
from socialpulse.common.config import settings
from socialpulse.common.logger import setup_logger
from socialpulse.common.metrics import analytics_duration_seconds
from socialpulse.common.models import (
    Analytics, Comment, DistributionEntry, Influencer, KeywordCount, MetricChanges,
    Metrics, SearchQuery, SentimentBreakdown, utcnow,
)

logger = setup_logger(__name__)

TOPIC_COLORS = (
    "#3B82F6", "#10B981", "#F59E0B", "#EF4444", "#8B5CF6",
    "#EC4899", "#14B8A6", "#F97316", "#6366F1", "#D946EF",
)

PLATFORM_COLORS = {
    "YouTube": "#FF0000",
    "Twitter (X)": "#1DA1F2",
    "Facebook": "#4267B2",
    "Instagram": "#E1306C",
}
FALLBACK_COLOR = "#9CA3AF"

STOP_WORDS = frozenset({"the", "and", "was", "for", "that", "this", "with", "have", "from", "not"})
TOPIC_KEYWORD_WEIGHT = 3
MIN_KEYWORD_LENGTH = 4

TOP_TOPICS = 10
TOP_KEYWORDS = 30
TOP_INFLUENCERS = 10

# No historical comparison exists yet; flagged via MetricChanges.is_placeholder
PLACEHOLDER_CHANGES = MetricChanges(
    total_comments=8.2,
    positive_sentiment=12.4,
    negative_sentiment=-3.8,
    engagement_rate=1.2,
)


def engagement_level(comment_count: int) -> str:
    if comment_count > 15:
        return "High"
    if comment_count > 5:
        return "Medium"
    return "Low"


def engagement_rate(comments: Sequence[Comment], positive_pct: int, negative_pct: int) -> float:
    """Average engagement weighted by volume (full at 100 comments) and sentiment skew."""
    total = len(comments)
    if not total:
        return 0.0
    average = sum(c.engagement_score for c in comments) / total
    volume_weight = min(total / 100, 1)
    skew = abs(positive_pct - negative_pct) / 100 * 0.5
    return min(round(average * volume_weight * (1 + skew) * 5, 2), 100)


def _count_sentiments(comments: Sequence[Comment]) -> Tuple[int, int, int]:
    counts = Counter(c.sentiment for c in comments)
    return counts["positive"], counts["negative"], len(comments)


class AnalyticsAggregator:
    """Computes the dashboard analytics for one query's comments.

    Only actual comments count; video metadata and retrieval notes are
    dropped before any computation.
    """

    def __init__(self, rng: Optional[random.Random] = None, trend_days: Optional[int] = None,
                 clock: Callable[[], datetime] = utcnow):
        self.rng = rng or random.Random()
        self.trend_days = trend_days or settings.TREND_DAYS
        self.clock = clock

    def generate(self, comments: Sequence[Comment], query: Optional[SearchQuery] = None,
                 credentials_configured: bool = True) -> Analytics:
        start_time = time.time()
        query_id = query.id if query else None
        actual = [c for c in comments if c.is_actual]

        if not actual:
            logger.info(f"No actual comments for query {query_id}; returning empty analytics")
            return Analytics(
                search_query_id=query_id,
                metrics=Metrics(changes=MetricChanges(is_placeholder=False)),
                ai_insights=empty_state_message(credentials_configured, query),
            )

        metrics = self.compute_metrics(actual)
        topic_distribution = self.topic_distribution(actual)
        top_topic = topic_distribution[0].name if topic_distribution else None

        analytics = Analytics(
            search_query_id=query_id,
            metrics=metrics,
            sentiment_trend=build_sentiment_trend(
                actual, self._trend_window(query), self._today(), self.rng),
            topic_distribution=topic_distribution,
            platform_distribution=self.platform_distribution(actual),
            top_keywords=self.top_keywords(actual),
            influencers=self.influencers(actual),
            ai_insights=summarize(
                metrics.positive_sentiment, metrics.negative_sentiment,
                metrics.engagement_rate, top_topic),
        )

        duration = time.time() - start_time
        analytics_duration_seconds.observe(duration)
        logger.info(f"Generated analytics for query {query_id} over {len(actual)} comments "
                    f"in {duration:.2f}s (engagement rate {metrics.engagement_rate}%)")
        return analytics

    def compute_metrics(self, comments: Sequence[Comment]) -> Metrics:
        positive, negative, total = _count_sentiments(comments)
        positive_pct, negative_pct, neutral_pct = sentiment_percentages(positive, negative, total)
        return Metrics(
            total_comments=total,
            positive_sentiment=positive_pct,
            negative_sentiment=negative_pct,
            neutral_sentiment=neutral_pct,
            engagement_rate=engagement_rate(comments, positive_pct, negative_pct),
            changes=PLACEHOLDER_CHANGES.model_copy(),
        )

    def topic_distribution(self, comments: Sequence[Comment]) -> List[DistributionEntry]:
        counts = Counter(topic for c in comments for topic in set(c.topics))
        return [
            DistributionEntry(name=name, value=value, color=TOPIC_COLORS[i % len(TOPIC_COLORS)])
            for i, (name, value) in enumerate(counts.most_common(TOP_TOPICS))
        ]

    def platform_distribution(self, comments: Sequence[Comment]) -> List[DistributionEntry]:
        counts = Counter(c.platform for c in comments)
        return [
            DistributionEntry(name=name, value=value, color=PLATFORM_COLORS.get(name, FALLBACK_COLOR))
            for name, value in counts.items()
        ]

    def top_keywords(self, comments: Sequence[Comment]) -> List[KeywordCount]:
        counts: Counter = Counter()
        for comment in comments:
            for word in comment.text.lower().split():
                if len(word) >= MIN_KEYWORD_LENGTH and word not in STOP_WORDS:
                    counts[word] += 1
            for topic in comment.topics:
                counts[topic] += TOPIC_KEYWORD_WEIGHT
        return [KeywordCount(text=text, value=value) for text, value in counts.most_common(TOP_KEYWORDS)]

    def influencers(self, comments: Sequence[Comment]) -> List[Influencer]:
        groups: Dict[Tuple[str, str], List[Comment]] = defaultdict(list)
        for comment in comments:
            groups[(comment.user_name, comment.platform)].append(comment)

        influencers = []
        for (name, platform), group in groups.items():
            positive, negative, total = _count_sentiments(group)
            positive_pct, negative_pct, neutral_pct = sentiment_percentages(positive, negative, total)
            influencers.append(Influencer(
                name=name,
                handle="".join(name.lower().split()),
                platform=platform,
                comment_count=total,
                engagement_level=engagement_level(total),
                sentiment=SentimentBreakdown(
                    positive=positive_pct, neutral=neutral_pct, negative=negative_pct),
            ))

        # Stable sort keeps first-seen order among equal counts
        influencers.sort(key=lambda i: i.comment_count, reverse=True)
        return influencers[:TOP_INFLUENCERS]

    def _trend_window(self, query: Optional[SearchQuery]) -> int:
        if query and query.timeperiod > 0:
            return query.timeperiod
        return self.trend_days

    def _today(self) -> date:
        return self.clock().date()
