"""Instagram Graph API fetcher: hashtag -> recent media -> comments."""
import re
from typing import Any, Dict, List
from socialpulse.common.exceptions import PlatformAPIError
from socialpulse.common.logger import setup_logger
from socialpulse.common.metrics import errors_total
from socialpulse.common.models import Comment, PLATFORM_NAMES
from socialpulse.fetcher.base import PlatformFetcher, parse_timestamp, register_fetcher

logger = setup_logger(__name__)

GRAPH_URL = "https://graph.instagram.com"
GRAPH_VERSION_URL = f"{GRAPH_URL}/v17.0"


def to_hashtag(keyword: str) -> str:
    return re.sub(r"\s+", "", keyword).lower()


@register_fetcher("instagram")
class InstagramFetcher(PlatformFetcher):
    platform_name = PLATFORM_NAMES["instagram"]

    def fetch_live(self, keyword: str, timeperiod: int, api_key: str) -> List[Comment]:
        hashtag = to_hashtag(keyword)
        data = self.client.get_json_with_retries(f"{GRAPH_URL}/ig_hashtag_search", params={
            "user_id": "me",
            "q": hashtag,
            "access_token": api_key,
        })
        hashtags = data.get("data") or []
        if not hashtags or not hashtags[0].get("id"):
            logger.info(f"No Instagram hashtag found for: {hashtag}")
            return []

        media_data = self.client.get_json_with_retries(
            f"{GRAPH_VERSION_URL}/{hashtags[0]['id']}/recent_media",
            params={
                "user_id": "me",
                "fields": "id,caption,timestamp,comments_count",
                "access_token": api_key,
            },
        )
        media_items = [media for media in media_data.get("data") or [] if media.get("id")]
        if not media_items:
            logger.info(f"No recent media for hashtag: {hashtag}")
            return []

        comments: List[Comment] = []
        for media in media_items:
            comments.extend(self.fetch_media_comments(media["id"], api_key))
        return comments

    def fetch_media_comments(self, media_id: str, api_key: str) -> List[Comment]:
        try:
            data = self.client.get_json_with_retries(f"{GRAPH_VERSION_URL}/{media_id}/comments", params={
                "fields": "id,text,username,timestamp,like_count",
                "access_token": api_key,
            })
        except PlatformAPIError as e:
            logger.warning(f"Failed to fetch comments for media {media_id}: {e}")
            errors_total.labels(component="fetcher", error_type="instagram_media").inc()
            return []
        return [self._normalize(media_id, comment) for comment in data.get("data") or []]

    def _normalize(self, media_id: str, comment: Dict[str, Any]) -> Comment:
        username = comment.get("username")
        return self.make_comment(
            user_name=username or "Instagram User",
            user_id=username,
            text=comment.get("text", ""),
            created_at=parse_timestamp(comment.get("timestamp")),
            source_url=f"https://instagram.com/p/{media_id}",
            engagement_score=comment.get("like_count") or 0,
        )
