"""Media collector: per-platform fan-out over the fetcher registry."""
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional
from socialpulse.common.config import settings
from socialpulse.common.exceptions import InvalidQueryError
from socialpulse.common.logger import setup_logger
from socialpulse.common.metrics import errors_total
from socialpulse.common.models import Comment
from socialpulse.fetcher.base import FETCHER_REGISTRY, CredentialProvider, PlatformFetcher
from socialpulse.fetcher.http import ApiClient
# Imported for registration; order here is the order results are joined in
from socialpulse.fetcher import youtube_fetcher  # noqa: F401
from socialpulse.fetcher import twitter_fetcher  # noqa: F401
from socialpulse.fetcher import facebook_fetcher  # noqa: F401
from socialpulse.fetcher import instagram_fetcher  # noqa: F401

logger = setup_logger(__name__)


class MediaCollector:
    """Collects comments from one platform or, for ``"all"``, every registered one."""

    def __init__(self, credentials: Optional[CredentialProvider] = None,
                 fetchers: Optional[Dict[str, PlatformFetcher]] = None,
                 max_workers: Optional[int] = None):
        self.credentials = credentials or settings.platform_credentials
        if fetchers is None:
            # One client per fetcher; sessions are never shared across threads
            fetchers = {slug: cls(credentials=self.credentials, client=ApiClient())
                        for slug, cls in FETCHER_REGISTRY.items()}
        self.fetchers = fetchers
        self.max_workers = max_workers or settings.COLLECTOR_MAX_WORKERS
        logger.info(f"Initialized media collector for platforms: {list(self.fetchers)}")

    def has_credentials(self) -> bool:
        """True if any platform credential is configured."""
        return any(self.credentials().values())

    def collect(self, keyword: str, timeperiod: int, platform: str = "all",
                is_video_title_search: bool = False) -> List[Comment]:
        start_time = time.time()

        if is_video_title_search:
            fetcher = self.fetchers.get("youtube")
            if fetcher is None:
                raise InvalidQueryError("Video title search requires the youtube fetcher")
            comments = self._safe_call("youtube", lambda: fetcher.fetch_by_title(keyword, timeperiod))
        elif platform == "all":
            comments = self._collect_all(keyword, timeperiod)
        elif platform in self.fetchers:
            fetcher = self.fetchers[platform]
            comments = self._safe_call(platform, lambda: fetcher.fetch(keyword, timeperiod))
        else:
            raise InvalidQueryError(f"Unknown platform: {platform}")

        duration = time.time() - start_time
        logger.info(f"Collected {len(comments)} records for \"{keyword}\" "
                    f"({platform}, {timeperiod}d) in {duration:.2f}s")
        return comments

    def _collect_all(self, keyword: str, timeperiod: int) -> List[Comment]:
        slugs = list(self.fetchers)
        with ThreadPoolExecutor(max_workers=max(1, min(self.max_workers, len(slugs)))) as executor:
            futures = [
                executor.submit(self._safe_call, slug,
                                lambda f=self.fetchers[slug]: f.fetch(keyword, timeperiod))
                for slug in slugs
            ]
            results = [future.result() for future in futures]

        comments: List[Comment] = []
        for platform_comments in results:
            comments.extend(platform_comments)
        return comments

    def _safe_call(self, slug: str, call) -> List[Comment]:
        """Run one platform's fetch; its failure never affects the others."""
        try:
            return call()
        except Exception as e:
            logger.error(f"Collection from {slug} failed: {e}")
            errors_total.labels(component="collector", error_type=f"{slug}_collect").inc()
            return []
