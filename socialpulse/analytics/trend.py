"""Daily sentiment trend with smoothed gap filling.

Days without comments are not left empty: their percentages are a small
random step away from the previous day's, so the series stays continuous.
Filled days are smoothing, not observations.
"""
import random
from collections import Counter
from datetime import date, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Tuple
from socialpulse.analytics.percentages import round_half_up, sentiment_percentages
from socialpulse.common.models import Comment, TrendPoint

INITIAL_BASELINE = (33, 34, 33)  # positive, neutral, negative
MAX_STEP = 5.0
MAX_POLARIZED = 95.0


def comment_date(comment: Comment) -> Optional[date]:
    """UTC calendar day of a comment (origin timestamp, else ingestion)."""
    timestamp = comment.created_at or comment.collected_at
    if timestamp is None:
        return None
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(timezone.utc)
    return timestamp.date()


def fill_gap(baseline: Tuple[int, int, int], rng: random.Random) -> Tuple[int, int, int]:
    """Perturb a (positive, neutral, negative) baseline by one random step."""
    step = rng.uniform(-MAX_STEP, MAX_STEP)
    positive = min(100.0, max(0.0, baseline[0] + step))
    negative = min(100.0, max(0.0, baseline[2] - step / 2))

    polarized = positive + negative
    if polarized > MAX_POLARIZED:
        positive *= MAX_POLARIZED / polarized
        negative *= MAX_POLARIZED / polarized

    positive_pct = round_half_up(positive)
    negative_pct = round_half_up(negative)
    return positive_pct, 100 - positive_pct - negative_pct, negative_pct


def build_sentiment_trend(comments: Iterable[Comment], days: int, today: date,
                          rng: random.Random) -> List[TrendPoint]:
    """One point per day over the ``days`` ending ``today``, oldest first."""
    start = today - timedelta(days=days - 1)
    buckets: Dict[date, Counter] = {start + timedelta(days=i): Counter() for i in range(days)}

    for comment in comments:
        day = comment_date(comment)
        if day in buckets:
            buckets[day][comment.sentiment] += 1

    trend = []
    baseline = INITIAL_BASELINE
    for day, counts in buckets.items():
        total = sum(counts.values())
        if total:
            positive, negative, neutral = sentiment_percentages(
                counts["positive"], counts["negative"], total)
            baseline = (positive, neutral, negative)
        else:
            baseline = fill_gap(baseline, rng)

        trend.append(TrendPoint(
            date=day.isoformat(),
            positive=baseline[0],
            neutral=baseline[1],
            negative=baseline[2],
        ))
    return trend
