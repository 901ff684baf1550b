"""Platform fetcher contract and registry."""
import re
import time
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Type
from socialpulse.common.config import settings
from socialpulse.common.exceptions import PlatformAPIError
from socialpulse.common.logger import setup_logger
from socialpulse.common.metrics import (
    fetch_requests_total, fetch_duration_seconds, comments_collected_total, errors_total,
)
from socialpulse.common.models import Comment
from socialpulse.fetcher.http import ApiClient
from socialpulse.fetcher.sample_data import generate_sample_comments
from socialpulse.preprocessor.nlp_processor import detect_language

logger = setup_logger(__name__)

CredentialProvider = Callable[[], Dict[str, Optional[str]]]

FETCHER_REGISTRY: Dict[str, Type["PlatformFetcher"]] = {}

_OFFSET_WITHOUT_COLON = re.compile(r"([+-]\d{2})(\d{2})$")


def register_fetcher(slug: str):
    """Class decorator adding a fetcher to the registry under ``slug``."""
    def decorator(cls):
        cls.slug = slug
        FETCHER_REGISTRY[slug] = cls
        return cls
    return decorator


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse ISO-8601 timestamps as returned by the platform APIs."""
    if not value:
        return None
    try:
        normalized = _OFFSET_WITHOUT_COLON.sub(r"\1:\2", value.replace("Z", "+00:00"))
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        logger.debug(f"Unparseable timestamp: {value}")
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class PlatformFetcher:
    """Fetches comments for a keyword from one platform.

    Without a credential the fetcher returns deterministic sample data. With a
    credential, any upstream failure yields an empty list so real and sample
    data can never be confused.
    """

    slug = ""
    platform_name = ""

    def __init__(self, credentials: Optional[CredentialProvider] = None,
                 client: Optional[ApiClient] = None):
        self.credentials = credentials or settings.platform_credentials
        self.client = client or ApiClient()

    @property
    def api_key(self) -> Optional[str]:
        return self.credentials().get(self.slug) or None

    def fetch(self, keyword: str, timeperiod: int) -> List[Comment]:
        """Fetch normalized comments for ``keyword`` over the last ``timeperiod`` days."""
        return self._collect(
            live=lambda key: self.fetch_live(keyword, timeperiod, key),
            sample=lambda: generate_sample_comments(self.slug, keyword, timeperiod),
        )

    def fetch_live(self, keyword: str, timeperiod: int, api_key: str) -> List[Comment]:
        raise NotImplementedError

    def _collect(self, live: Callable[[str], List[Comment]],
                 sample: Callable[[], List[Comment]]) -> List[Comment]:
        start_time = time.time()
        api_key = self.api_key

        if not api_key:
            logger.warning(f"{self.platform_name} credential is not configured; using sample data")
            comments = sample()
            comments_collected_total.labels(platform=self.slug, source="sample").inc(len(comments))
            return comments

        try:
            comments = live(api_key)
            fetch_requests_total.labels(platform=self.slug, status="success").inc()
        except (PlatformAPIError, KeyError, TypeError, ValueError) as e:
            logger.error(f"Error fetching from {self.platform_name}: {e}")
            fetch_requests_total.labels(platform=self.slug, status="error").inc()
            errors_total.labels(component="fetcher", error_type=f"{self.slug}_fetch").inc()
            comments = []

        duration = time.time() - start_time
        fetch_duration_seconds.labels(platform=self.slug).observe(duration)
        comments_collected_total.labels(platform=self.slug, source="api").inc(len(comments))
        logger.info(f"Fetched {len(comments)} comments from {self.platform_name} in {duration:.2f}s")
        return comments

    def make_comment(self, user_name: str, text: str, created_at: Optional[datetime],
                     source_url: str, engagement_score: int = 0,
                     user_id: Optional[str] = None, language: Optional[str] = None) -> Comment:
        """Normalized comment with placeholder sentiment and topics."""
        text = text or ""
        return Comment(
            platform=self.platform_name,
            user_name=user_name,
            user_id=user_id,
            text=text,
            language=language or detect_language(text),
            sentiment="neutral",
            topics=[],
            engagement_score=max(0, int(engagement_score or 0)),
            created_at=created_at,
            source_url=source_url,
        )
