"""Twitter (X) API v2 recent-search fetcher."""
from datetime import timedelta
from typing import Any, Dict, List, Optional
from socialpulse.common.logger import setup_logger
from socialpulse.common.models import Comment, PLATFORM_NAMES, utcnow
from socialpulse.fetcher.base import PlatformFetcher, parse_timestamp, register_fetcher

logger = setup_logger(__name__)

RECENT_SEARCH_URL = "https://api.twitter.com/2/tweets/search/recent"
# Recent search only reaches back seven days
MAX_LOOKBACK_DAYS = 7
MAX_RESULTS = 100
LANGUAGE_CODES = {"te": "Telugu", "en": "English"}


@register_fetcher("twitter")
class TwitterFetcher(PlatformFetcher):
    platform_name = PLATFORM_NAMES["twitter"]

    def fetch_live(self, keyword: str, timeperiod: int, api_key: str) -> List[Comment]:
        days = min(timeperiod, MAX_LOOKBACK_DAYS)
        # Start slightly inside the window; the API rejects a start_time older than 7 days
        start_time = utcnow() - timedelta(days=days) + timedelta(minutes=1)

        data = self.client.get_json_with_retries(
            RECENT_SEARCH_URL,
            params={
                "query": keyword,
                "start_time": start_time.strftime("%Y-%m-%dT%H:%M:%SZ"),
                "max_results": MAX_RESULTS,
                "tweet.fields": "created_at,public_metrics,author_id,lang",
                "expansions": "author_id",
                "user.fields": "name,username",
            },
            headers={"Authorization": f"Bearer {api_key}"},
        )

        tweets = data.get("data") or []
        if not tweets:
            logger.info(f"No tweets found for keyword: {keyword}")
            return []

        users = {user["id"]: user for user in (data.get("includes") or {}).get("users") or []
                 if user.get("id")}
        return [self._normalize(tweet, users.get(tweet.get("author_id"))) for tweet in tweets]

    def _normalize(self, tweet: Dict[str, Any], user: Optional[Dict[str, Any]] = None) -> Comment:
        metrics = tweet.get("public_metrics") or {}
        return self.make_comment(
            user_name=user.get("name", "Unknown User") if user else "Unknown User",
            user_id=user.get("username") if user else None,
            text=tweet.get("text", ""),
            created_at=parse_timestamp(tweet.get("created_at")),
            source_url=f"https://twitter.com/x/status/{tweet.get('id')}",
            engagement_score=(metrics.get("like_count") or 0) + (metrics.get("retweet_count") or 0),
            language=LANGUAGE_CODES.get(tweet.get("lang")),
        )
