"""In-process store backed by dicts behind a lock."""
import threading
from typing import Dict, List, Optional, Tuple
from socialpulse.common.logger import setup_logger
from socialpulse.common.models import Analytics, Comment, SearchQuery, utcnow
from socialpulse.store.base import CommentStore, DEFAULT_ALERT_SETTINGS, DEFAULT_API_KEYS

logger = setup_logger(__name__)


class MemoryStore(CommentStore):
    """Thread-safe in-memory store, for tests and single-process runs."""

    def __init__(self):
        self._lock = threading.Lock()
        self._queries: Dict[int, SearchQuery] = {}
        self._comments: Dict[int, List[Comment]] = {}
        self._analytics: Dict[int, Analytics] = {}
        self._fingerprints: Dict[Tuple[str, int, str, bool], int] = {}
        self._api_keys: Dict[str, Optional[str]] = dict(DEFAULT_API_KEYS)
        self._alert_settings: Dict[str, bool] = dict(DEFAULT_ALERT_SETTINGS)
        self._next_query_id = 1
        self._next_comment_id = 1

    def save_search_query(self, keyword, timeperiod, platform="all", user_id=None,
                          is_video_title_search=False) -> SearchQuery:
        with self._lock:
            query = SearchQuery(
                id=self._next_query_id,
                keyword=keyword,
                timeperiod=timeperiod,
                platform=platform,
                user_id=user_id,
                is_video_title_search=is_video_title_search,
            )
            self._next_query_id += 1
            self._queries[query.id] = query
            self._comments[query.id] = []
        logger.debug(f"Created search query {query.id} for {query.fingerprint}")
        return query

    def get_search_query(self, query_id: int) -> Optional[SearchQuery]:
        with self._lock:
            return self._queries.get(query_id)

    def save_comments(self, query_id: int, comments: List[Comment]) -> List[Comment]:
        collected_at = utcnow()
        with self._lock:
            if query_id not in self._queries:
                raise KeyError(f"Unknown search query {query_id}")
            saved = []
            for comment in comments:
                saved.append(comment.model_copy(update={
                    "id": self._next_comment_id,
                    "search_query_id": query_id,
                    "collected_at": comment.collected_at or collected_at,
                }))
                self._next_comment_id += 1
            self._comments[query_id].extend(saved)
        return saved

    def get_all_comments(self, query_id: int) -> Optional[List[Comment]]:
        with self._lock:
            comments = self._comments.get(query_id)
            return list(comments) if comments is not None else None

    def save_analytics(self, query_id: int, analytics: Analytics) -> Analytics:
        analytics = analytics.model_copy(update={"search_query_id": query_id})
        with self._lock:
            query = self._queries.get(query_id)
            if query is None:
                raise KeyError(f"Unknown search query {query_id}")
            self._analytics[query_id] = analytics
            current = self._fingerprints.get(query.fingerprint)
            if current is None or query_id >= current:
                self._fingerprints[query.fingerprint] = query_id
        return analytics

    def get_analytics(self, query_id: int) -> Optional[Analytics]:
        with self._lock:
            return self._analytics.get(query_id)

    def find_search_result(self, keyword, timeperiod, platform,
                           is_video_title_search=False) -> Optional[SearchQuery]:
        with self._lock:
            query_id = self._fingerprints.get((keyword, timeperiod, platform, is_video_title_search))
            return self._queries.get(query_id) if query_id is not None else None

    def get_api_keys(self) -> Dict[str, Optional[str]]:
        with self._lock:
            return dict(self._api_keys)

    def save_api_key(self, platform: str, api_key: Optional[str]) -> None:
        with self._lock:
            self._api_keys[platform] = api_key or None

    def get_alert_settings(self) -> Dict[str, bool]:
        with self._lock:
            return dict(self._alert_settings)

    def save_alert_settings(self, alert_settings: Dict[str, bool]) -> Dict[str, bool]:
        with self._lock:
            self._alert_settings.update(alert_settings)
            return dict(self._alert_settings)
