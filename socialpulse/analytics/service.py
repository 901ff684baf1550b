"""Analysis service: validation, fingerprint cache and the collect-to-analytics pipeline."""
import time
from typing import Any, Dict, List, Optional, Tuple
from socialpulse.analytics.aggregator import AnalyticsAggregator
from socialpulse.common.config import settings
from socialpulse.common.exceptions import InvalidQueryError
from socialpulse.common.logger import setup_logger
from socialpulse.common.metrics import analytics_requests_total
from socialpulse.common.models import (
    Analytics, Comment, CommentPage, PLATFORM_CHOICES, PLATFORM_NAMES, SearchQuery, SearchResult,
)
from socialpulse.fetcher.collector import MediaCollector
from socialpulse.fetcher.records import parse_metric_note, parse_video_metadata
from socialpulse.preprocessor.preprocessor import Preprocessor
from socialpulse.store.base import CommentStore, paginate
from socialpulse.store.factory import create_store

logger = setup_logger(__name__)


def validate_query(keyword: Any, timeperiod: Any, platform: Any) -> Tuple[str, int, str]:
    """Normalize pipeline input or raise InvalidQueryError."""
    if not isinstance(keyword, str) or not keyword.strip():
        raise InvalidQueryError("Keyword must be a non-empty string")

    if isinstance(timeperiod, str) and timeperiod.strip().isdecimal():
        try:
            timeperiod = int(timeperiod.strip())
        except ValueError as e:
            raise InvalidQueryError(f"Invalid time period: {timeperiod!r}") from e
    if isinstance(timeperiod, bool) or not isinstance(timeperiod, int) or timeperiod <= 0:
        raise InvalidQueryError("Time period must be a positive whole number of days")
    if timeperiod > settings.MAX_TIMEPERIOD_DAYS:
        raise InvalidQueryError(f"Time period must be at most {settings.MAX_TIMEPERIOD_DAYS} days")

    if platform not in PLATFORM_CHOICES:
        raise InvalidQueryError(f"Unknown platform: {platform}")

    return keyword.strip(), timeperiod, platform


class AnalysisService:
    """Runs searches end to end and serves cached results by query fingerprint.

    A repeat of (keyword, timeperiod, platform) returns the stored analytics
    without collecting again. ``refresh`` and title searches always collect,
    creating a new query that becomes the fingerprint's cache entry once its
    analytics are saved.
    """

    def __init__(self, store: Optional[CommentStore] = None,
                 collector: Optional[MediaCollector] = None,
                 preprocessor: Optional[Preprocessor] = None,
                 aggregator: Optional[AnalyticsAggregator] = None):
        self.store = store or create_store()
        self.collector = collector or MediaCollector(credentials=self.credentials)
        self.preprocessor = preprocessor or Preprocessor()
        self.aggregator = aggregator or AnalyticsAggregator()

    def credentials(self) -> Dict[str, Optional[str]]:
        """Stored keys override environment settings per platform."""
        environment = settings.platform_credentials()
        stored = self.store.get_api_keys()
        return {slug: stored.get(slug) or environment.get(slug) for slug in PLATFORM_NAMES}

    def analyze(self, keyword: Any, timeperiod: Any = None, platform: str = "all",
                refresh: bool = False, is_video_title_search: bool = False,
                page: Optional[int] = None, page_size: Optional[int] = None,
                user_id: Optional[int] = None) -> SearchResult:
        if timeperiod is None:
            timeperiod = settings.DEFAULT_TIMEPERIOD
        keyword, timeperiod, platform = validate_query(keyword, timeperiod, platform)
        if is_video_title_search:
            platform = "youtube"

        if refresh or is_video_title_search:
            analytics_requests_total.labels(cache="bypass").inc()
        else:
            query = self.store.find_search_result(
                keyword, timeperiod, platform, is_video_title_search=False)
            analytics = self.store.get_analytics(query.id) if query else None
            if analytics is not None:
                analytics_requests_total.labels(cache="hit").inc()
                logger.info(f"Serving cached analytics for query {query.id} {query.fingerprint}")
                return self._build_result(query, analytics, page, page_size, cached=True)
            analytics_requests_total.labels(cache="miss").inc()

        return self._run(keyword, timeperiod, platform, is_video_title_search, page, page_size, user_id)

    def _run(self, keyword: str, timeperiod: int, platform: str, is_video_title_search: bool,
             page: Optional[int], page_size: Optional[int], user_id: Optional[int]) -> SearchResult:
        start_time = time.time()

        comments = self.collector.collect(keyword, timeperiod, platform, is_video_title_search)
        processed = self.preprocessor.process_batch(comments)

        query = self.store.save_search_query(
            keyword, timeperiod, platform, user_id=user_id,
            is_video_title_search=is_video_title_search)
        saved = self.store.save_comments(query.id, processed)

        analytics = self.aggregator.generate(
            saved, query, credentials_configured=self.collector.has_credentials())
        analytics = self.store.save_analytics(query.id, analytics)

        logger.info(f"Analyzed \"{keyword}\" ({platform}, {timeperiod}d) as query {query.id}: "
                    f"{analytics.metrics.total_comments} comments in {time.time() - start_time:.2f}s")
        return self._build_result(query, analytics, page, page_size, cached=False, comments=saved)

    def get_comments(self, query_id: int, page: Optional[int] = None,
                     page_size: Optional[int] = None) -> Optional[CommentPage]:
        return self.store.get_comments(query_id, page, page_size)

    def get_result(self, query_id: int, page: Optional[int] = None,
                   page_size: Optional[int] = None) -> Optional[SearchResult]:
        query = self.store.get_search_query(query_id)
        analytics = self.store.get_analytics(query_id) if query else None
        if analytics is None:
            return None
        return self._build_result(query, analytics, page, page_size, cached=True)

    def append_comments(self, query_id: int, comments: List[Comment]) -> Optional[Analytics]:
        """Grow a query's comment set and recompute its cached analytics."""
        query = self.store.get_search_query(query_id)
        if query is None:
            return None

        processed = self.preprocessor.process_batch(comments)
        self.store.save_comments(query_id, processed)
        all_comments = self.store.get_all_comments(query_id) or []

        analytics = self.aggregator.generate(
            all_comments, query, credentials_configured=self.collector.has_credentials())
        logger.info(f"Appended {len(processed)} comments to query {query_id}")
        return self.store.save_analytics(query_id, analytics)

    def get_api_keys(self) -> Dict[str, Optional[str]]:
        return self.store.get_api_keys()

    def save_api_key(self, platform: str, api_key: Optional[str]) -> Dict[str, Optional[str]]:
        if platform not in PLATFORM_NAMES:
            raise InvalidQueryError(f"Unknown platform: {platform}")
        self.store.save_api_key(platform, api_key)
        logger.info(f"Updated {platform} credential ({'set' if api_key else 'cleared'})")
        return self.store.get_api_keys()

    def get_alert_settings(self) -> Dict[str, bool]:
        return self.store.get_alert_settings()

    def save_alert_settings(self, alert_settings: Dict[str, bool]) -> Dict[str, bool]:
        return self.store.save_alert_settings(alert_settings)

    def _build_result(self, query: SearchQuery, analytics: Analytics, page: Optional[int],
                      page_size: Optional[int], cached: bool,
                      comments: Optional[List[Comment]] = None) -> SearchResult:
        if comments is None:
            comments = self.store.get_all_comments(query.id) or []
        comment_page = paginate(comments, page, page_size)

        metadata = next((m for m in map(parse_video_metadata, comments) if m is not None), None)
        notes = [note for note in map(parse_metric_note, comments) if note is not None]

        result = SearchResult(
            search_query_id=query.id,
            keyword=query.keyword,
            timeperiod=query.timeperiod,
            platform=query.platform,
            is_video_title_search=query.is_video_title_search,
            metrics=analytics.metrics,
            sentiment_trend=analytics.sentiment_trend,
            topic_distribution=analytics.topic_distribution,
            platform_distribution=analytics.platform_distribution,
            top_keywords=analytics.top_keywords,
            influencers=analytics.influencers,
            ai_insights=analytics.ai_insights,
            comments=comment_page.comments,
            total_comments=comment_page.total,
            has_more_comments=comment_page.has_more,
            last_updated=query.created_at,
            cached=cached,
            retrieval_notes=notes,
        )
        if metadata is not None:
            result = result.model_copy(update={
                "video_title": metadata.title,
                "channel_title": metadata.channel_title,
                "view_count": metadata.view_count,
                "like_count": metadata.like_count,
                "comment_count": metadata.comment_count,
                "video_url": metadata.url,
            })
        return result
