"""Deterministic sample comments for platforms without a configured credential."""
import hashlib
import random
from datetime import datetime, timedelta
from typing import List, Optional
from socialpulse.common.models import (
    Comment, PLATFORM_NAMES, VideoMetadata, utcnow,
)
from socialpulse.fetcher.records import video_metadata_record
from socialpulse.preprocessor.nlp_processor import detect_language

SAMPLE_USERS = (
    "Ravi Kumar", "Lakshmi Devi", "Srinivas Rao", "Anitha Reddy", "Venkatesh",
    "Priya Sharma", "Mahesh Babu", "Kavitha", "Rajesh Naidu", "Swathi",
)

# {kw} is replaced with the search keyword
SAMPLE_TEXTS = (
    "Great work on {kw}, the new roads are a big improvement",
    "Thank you for the update on {kw}",
    "{kw} is a complete waste of money, nothing has changed",
    "Drinking water supply is still a problem in our village",
    "Very happy with the new hospital facilities",
    "Not sure what to think about {kw} yet",
    "The school building work is still pending",
    "Terrible response from the administration on {kw}",
    "Farmers need better support for their crops this season",
    "ok, will wait and see",
    "{kw} గురించి మంచి వార్త",
    "రోడ్లు బాగుంది, ధన్యవాదాలు",
    "నీటి సమస్య ఇంకా పరిష్కారం కాలేదు",
    "ప్రభుత్వం పథకం అమలు ఆలస్యం అవుతోంది",
    "Jobs for the youth should be the priority",
    "Excellent development in our area 👍",
)


def _seeded_random(*parts) -> random.Random:
    seed = hashlib.sha256("|".join(str(p) for p in parts).encode("utf-8")).hexdigest()
    return random.Random(int(seed[:16], 16))


def _sample_comment(slug: str, index: int, rng: random.Random, keyword: str,
                    timeperiod: int, now: datetime) -> Comment:
    text = rng.choice(SAMPLE_TEXTS).format(kw=keyword)
    user_name = rng.choice(SAMPLE_USERS)
    age = timedelta(days=rng.randint(0, max(timeperiod - 1, 0)), minutes=rng.randint(0, 1439))
    return Comment(
        platform=PLATFORM_NAMES[slug],
        user_name=user_name,
        user_id=f"{slug}-{user_name.lower().replace(' ', '')}",
        text=text,
        language=detect_language(text),
        sentiment="neutral",
        topics=[],
        engagement_score=rng.randint(0, 50),
        created_at=now - age,
        source_url=f"https://example.com/{slug}/comment/{index}",
    )


def generate_sample_comments(slug: str, keyword: str, timeperiod: int,
                             now: Optional[datetime] = None) -> List[Comment]:
    """Same (platform, keyword, timeperiod) always yields the same comments."""
    now = now or utcnow()
    rng = _seeded_random(slug, keyword, timeperiod)
    count = rng.randint(15, 24)
    return [_sample_comment(slug, i, rng, keyword, timeperiod, now) for i in range(count)]


def generate_sample_video_comments(title: str, timeperiod: int,
                                   now: Optional[datetime] = None) -> List[Comment]:
    """Sample title-search result: a metadata record followed by comments."""
    now = now or utcnow()
    rng = _seeded_random("youtube-title", title, timeperiod)
    video_id = f"sample{rng.randint(100000, 999999)}"
    url = f"https://www.youtube.com/watch?v={video_id}"
    comments = [_sample_comment("youtube", i, rng, title, timeperiod, now)
                for i in range(rng.randint(15, 24))]

    metadata = VideoMetadata(
        title=title,
        video_id=video_id,
        channel_title="Sample Channel",
        view_count=rng.randint(1000, 100000),
        like_count=rng.randint(100, 5000),
        comment_count=len(comments),
        url=url,
    )
    return [video_metadata_record(metadata, created_at=now)] + comments
