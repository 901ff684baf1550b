"""Redis-backed store: JSON documents under a key prefix."""
import hashlib
from typing import Dict, List, Optional
import redis
from socialpulse.common.config import settings
from socialpulse.common.logger import setup_logger
from socialpulse.common.models import Analytics, Comment, SearchQuery, utcnow
from socialpulse.store.base import CommentStore, DEFAULT_ALERT_SETTINGS, DEFAULT_API_KEYS

logger = setup_logger(__name__)


class RedisStore(CommentStore):
    """Persistent store.

    Layout (``<p>`` is the key prefix):
      <p>:query:<id>             SearchQuery JSON
      <p>:comments:<id>          list of Comment JSON, insertion order
      <p>:analytics:<id>         Analytics JSON
      <p>:fingerprint:<sha256>   sorted set of query ids with analytics, scored by id
      <p>:api_keys, <p>:alerts   hashes
    """

    def __init__(self, client: Optional[redis.Redis] = None, prefix: Optional[str] = None):
        self.prefix = prefix or settings.REDIS_KEY_PREFIX
        if client is None:
            client = redis.Redis(
                host=settings.REDIS_HOST,
                port=settings.REDIS_PORT,
                db=settings.REDIS_DB,
                decode_responses=True
            )
            try:
                client.ping()
                logger.info(f"Connected to Redis at {settings.REDIS_HOST}:{settings.REDIS_PORT}")
            except redis.RedisError as e:
                logger.error(f"Failed to connect to Redis: {e}")
                raise
        self.client = client

    def _key(self, *parts) -> str:
        return ":".join([self.prefix] + [str(p) for p in parts])

    def _fingerprint_key(self, keyword: str, timeperiod: int, platform: str,
                         is_video_title_search: bool = False) -> str:
        mode = "title" if is_video_title_search else "keyword"
        digest = hashlib.sha256(f"{keyword}\x00{timeperiod}\x00{platform}\x00{mode}".encode("utf-8")).hexdigest()
        return self._key("fingerprint", digest)

    def save_search_query(self, keyword, timeperiod, platform="all", user_id=None,
                          is_video_title_search=False) -> SearchQuery:
        query = SearchQuery(
            id=self.client.incr(self._key("query", "next_id")),
            keyword=keyword,
            timeperiod=timeperiod,
            platform=platform,
            user_id=user_id,
            is_video_title_search=is_video_title_search,
        )
        self.client.set(self._key("query", query.id), query.model_dump_json())
        logger.debug(f"Created search query {query.id} for {query.fingerprint}")
        return query

    def get_search_query(self, query_id: int) -> Optional[SearchQuery]:
        raw = self.client.get(self._key("query", query_id))
        return SearchQuery.model_validate_json(raw) if raw else None

    def save_comments(self, query_id: int, comments: List[Comment]) -> List[Comment]:
        if not self.client.exists(self._key("query", query_id)):
            raise KeyError(f"Unknown search query {query_id}")
        if not comments:
            return []

        last_id = self.client.incrby(self._key("comment", "next_id"), len(comments))
        first_id = last_id - len(comments) + 1
        collected_at = utcnow()
        saved = [
            comment.model_copy(update={
                "id": first_id + i,
                "search_query_id": query_id,
                "collected_at": comment.collected_at or collected_at,
            })
            for i, comment in enumerate(comments)
        ]
        self.client.rpush(self._key("comments", query_id), *[c.model_dump_json() for c in saved])
        return saved

    def get_all_comments(self, query_id: int) -> Optional[List[Comment]]:
        if not self.client.exists(self._key("query", query_id)):
            return None
        raw = self.client.lrange(self._key("comments", query_id), 0, -1)
        return [Comment.model_validate_json(item) for item in raw]

    def save_analytics(self, query_id: int, analytics: Analytics) -> Analytics:
        query = self.get_search_query(query_id)
        if query is None:
            raise KeyError(f"Unknown search query {query_id}")
        analytics = analytics.model_copy(update={"search_query_id": query_id})

        # Analytics and the fingerprint entry land together (MULTI/EXEC)
        pipe = self.client.pipeline(transaction=True)
        pipe.set(self._key("analytics", query_id), analytics.model_dump_json())
        pipe.zadd(self._fingerprint_key(*query.fingerprint), {query_id: query_id})
        pipe.execute()
        return analytics

    def get_analytics(self, query_id: int) -> Optional[Analytics]:
        raw = self.client.get(self._key("analytics", query_id))
        return Analytics.model_validate_json(raw) if raw else None

    def find_search_result(self, keyword, timeperiod, platform,
                           is_video_title_search=False) -> Optional[SearchQuery]:
        key = self._fingerprint_key(keyword, timeperiod, platform, is_video_title_search)
        newest = self.client.zrevrange(key, 0, 0)
        if not newest:
            return None
        return self.get_search_query(int(newest[0]))

    def get_api_keys(self) -> Dict[str, Optional[str]]:
        keys = dict(DEFAULT_API_KEYS)
        for platform, value in self.client.hgetall(self._key("api_keys")).items():
            keys[platform] = value or None
        return keys

    def save_api_key(self, platform: str, api_key: Optional[str]) -> None:
        if api_key:
            self.client.hset(self._key("api_keys"), platform, api_key)
        else:
            self.client.hdel(self._key("api_keys"), platform)

    def get_alert_settings(self) -> Dict[str, bool]:
        alerts = dict(DEFAULT_ALERT_SETTINGS)
        for name, value in self.client.hgetall(self._key("alerts")).items():
            alerts[name] = value == "1"
        return alerts

    def save_alert_settings(self, alert_settings: Dict[str, bool]) -> Dict[str, bool]:
        if alert_settings:
            self.client.hset(self._key("alerts"),
                             mapping={name: "1" if enabled else "0" for name, enabled in alert_settings.items()})
        return self.get_alert_settings()
