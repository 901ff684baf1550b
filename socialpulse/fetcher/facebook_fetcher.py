"""Facebook Graph API fetcher: post search, then comments per post."""
from datetime import timedelta
from typing import Any, Dict, List
from socialpulse.common.exceptions import PlatformAPIError
from socialpulse.common.logger import setup_logger
from socialpulse.common.metrics import errors_total
from socialpulse.common.models import Comment, PLATFORM_NAMES, utcnow
from socialpulse.fetcher.base import PlatformFetcher, parse_timestamp, register_fetcher

logger = setup_logger(__name__)

GRAPH_URL = "https://graph.facebook.com/v17.0"
POST_LIMIT = 25


@register_fetcher("facebook")
class FacebookFetcher(PlatformFetcher):
    platform_name = PLATFORM_NAMES["facebook"]

    def fetch_live(self, keyword: str, timeperiod: int, api_key: str) -> List[Comment]:
        since = int((utcnow() - timedelta(days=timeperiod)).timestamp())
        data = self.client.get_json_with_retries(f"{GRAPH_URL}/search", params={
            "q": keyword,
            "type": "post",
            "fields": "id,message,created_time",
            "limit": POST_LIMIT,
            "since": since,
            "access_token": api_key,
        })

        posts = [post for post in data.get("data") or [] if post.get("id")]
        if not posts:
            logger.info(f"No Facebook posts found for keyword: {keyword}")
            return []

        comments: List[Comment] = []
        for post in posts:
            comments.extend(self.fetch_post_comments(post["id"], api_key))
        return comments

    def fetch_post_comments(self, post_id: str, api_key: str) -> List[Comment]:
        """Comments on one post; a failing post is skipped."""
        try:
            data = self.client.get_json_with_retries(f"{GRAPH_URL}/{post_id}/comments", params={
                "fields": "id,message,from,created_time,like_count",
                "access_token": api_key,
            })
        except PlatformAPIError as e:
            logger.warning(f"Failed to fetch comments for post {post_id}: {e}")
            errors_total.labels(component="fetcher", error_type="facebook_post").inc()
            return []
        return [self._normalize(comment) for comment in data.get("data") or []]

    def _normalize(self, comment: Dict[str, Any]) -> Comment:
        author = comment.get("from") or {}
        return self.make_comment(
            user_name=author.get("name") or "Facebook User",
            user_id=author.get("id"),
            text=comment.get("message", ""),
            created_at=parse_timestamp(comment.get("created_time")),
            source_url=f"https://facebook.com/{comment.get('id')}",
            engagement_score=comment.get("like_count") or 0,
        )
