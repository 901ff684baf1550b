"""Storage interface for queries, comments, analytics and settings."""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from socialpulse.common.models import Analytics, Comment, CommentPage, SearchQuery

DEFAULT_API_KEYS: Dict[str, Optional[str]] = {
    "youtube": None,
    "twitter": None,
    "facebook": None,
    "instagram": None,
}

DEFAULT_ALERT_SETTINGS: Dict[str, bool] = {
    "negativeSentimentSpike": True,
    "engagementVolume": True,
    "newTopicDetection": False,
}


def paginate(comments: List[Comment], page: Optional[int], page_size: Optional[int]) -> CommentPage:
    """Page over actual comments only; ``page=None`` returns all of them."""
    actual = [c for c in comments if c.is_actual]
    total = len(actual)
    if page is None or not page_size:
        return CommentPage(comments=actual, total=total, has_more=False)

    page = max(page, 1)
    start = (page - 1) * page_size
    end = start + page_size
    return CommentPage(
        comments=actual[start:end],
        total=total,
        page=page,
        page_size=page_size,
        has_more=end < total,
    )


class CommentStore(ABC):
    """Keyed storage for search queries and their comments and analytics.

    Lookups for unknown ids return None. ``save_analytics`` also makes the
    query the current cache entry for its fingerprint, in one atomic step.
    """

    @abstractmethod
    def save_search_query(self, keyword: str, timeperiod: int, platform: str = "all",
                          user_id: Optional[int] = None,
                          is_video_title_search: bool = False) -> SearchQuery:
        """Create a query and assign its id."""

    @abstractmethod
    def get_search_query(self, query_id: int) -> Optional[SearchQuery]:
        ...

    @abstractmethod
    def save_comments(self, query_id: int, comments: List[Comment]) -> List[Comment]:
        """Append comments to a query, assigning ids, query id and collected_at."""

    @abstractmethod
    def get_all_comments(self, query_id: int) -> Optional[List[Comment]]:
        """Every stored record, pseudo-records included, in insertion order."""

    def get_comments(self, query_id: int, page: Optional[int] = None,
                     page_size: Optional[int] = None) -> Optional[CommentPage]:
        comments = self.get_all_comments(query_id)
        if comments is None:
            return None
        return paginate(comments, page, page_size)

    @abstractmethod
    def save_analytics(self, query_id: int, analytics: Analytics) -> Analytics:
        ...

    @abstractmethod
    def get_analytics(self, query_id: int) -> Optional[Analytics]:
        ...

    @abstractmethod
    def find_search_result(self, keyword: str, timeperiod: int, platform: str,
                           is_video_title_search: bool = False) -> Optional[SearchQuery]:
        """Most recent query with saved analytics for this fingerprint.

        Title searches and keyword searches never share an entry.
        """

    @abstractmethod
    def get_api_keys(self) -> Dict[str, Optional[str]]:
        ...

    @abstractmethod
    def save_api_key(self, platform: str, api_key: Optional[str]) -> None:
        ...

    @abstractmethod
    def get_alert_settings(self) -> Dict[str, bool]:
        ...

    @abstractmethod
    def save_alert_settings(self, alert_settings: Dict[str, bool]) -> Dict[str, bool]:
        ...
