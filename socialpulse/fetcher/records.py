"""Video metadata and retrieval-note pseudo-records.

Both travel in the same comment list as the real comments of a platform and
carry their payload as JSON in ``text``. Aggregation and comment listings
skip them via ``Comment.is_actual``.
"""
import json
from datetime import datetime
from typing import Any, Dict, Optional
from socialpulse.common.logger import setup_logger
from socialpulse.common.models import (
    Comment, PLATFORM_NAMES, VideoMetadata, VIDEO_INFO_USER, VIDEO_METADATA_USER, utcnow,
)

logger = setup_logger(__name__)

RETRIEVAL_NOTE_THRESHOLD = 95
RETRIEVAL_NOTE_MIN_MISSING = 2
RETRIEVAL_NOTE_INFO = "Some comments may not be accessible via the YouTube API"


def video_metadata_record(metadata: VideoMetadata, created_at: Optional[datetime] = None) -> Comment:
    return Comment(
        platform=PLATFORM_NAMES["youtube"],
        user_name=VIDEO_METADATA_USER,
        user_id=VIDEO_METADATA_USER,
        text=metadata.model_dump_json(),
        language="English",
        engagement_score=metadata.view_count,
        created_at=created_at or utcnow(),
        source_url=metadata.url,
        is_video_metadata=True,
    )


def build_metric_note(metadata: VideoMetadata, retrieved: int) -> Optional[Comment]:
    """Retrieval-completeness note, or None when retrieval is close enough."""
    reported = metadata.comment_count
    if reported <= 0 or retrieved <= 0:
        return None

    percentage = min(100, int(retrieved * 100 / reported + 0.5))
    if percentage >= RETRIEVAL_NOTE_THRESHOLD or reported - retrieved <= RETRIEVAL_NOTE_MIN_MISSING:
        return None

    logger.info(f"Retrieved {percentage}% of comments ({retrieved}/{reported}) for video {metadata.video_id}")
    payload = {
        "commentCounts": {"reported": reported, "retrieved": retrieved, "percentage": percentage},
        "info": RETRIEVAL_NOTE_INFO,
    }
    return Comment(
        platform=PLATFORM_NAMES["youtube"],
        user_name=VIDEO_INFO_USER,
        user_id=VIDEO_INFO_USER,
        text=json.dumps(payload),
        language="English",
        created_at=utcnow(),
        source_url=metadata.url,
        is_comment_metric=True,
    )


def parse_video_metadata(comment: Comment) -> Optional[VideoMetadata]:
    if not comment.is_video_metadata:
        return None
    try:
        return VideoMetadata.model_validate_json(comment.text)
    except ValueError as e:
        logger.warning(f"Unreadable video metadata record: {e}")
        return None


def parse_metric_note(comment: Comment) -> Optional[Dict[str, Any]]:
    if not comment.is_comment_metric:
        return None
    try:
        note = json.loads(comment.text)
    except ValueError as e:
        logger.warning(f"Unreadable retrieval note: {e}")
        return None
    if not isinstance(note, dict):
        return None
    note.setdefault("platform", comment.platform)
    note.setdefault("source_url", comment.source_url)
    return note
