"""HTTP client for platform APIs with timeout and exponential backoff."""
import time
from typing import Any, Callable, Dict, Optional
import requests
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential
from socialpulse.common.config import settings
from socialpulse.common.exceptions import PlatformAPIError
from socialpulse.common.logger import setup_logger

logger = setup_logger(__name__)


class ApiClient:
    """Thin wrapper over a requests session returning decoded JSON objects."""

    def __init__(self, timeout: Optional[float] = None, max_retries: Optional[int] = None,
                 backoff_base: Optional[float] = None, session: Optional[requests.Session] = None,
                 sleep: Callable[[float], None] = time.sleep):
        self.timeout = settings.HTTP_TIMEOUT_SEC if timeout is None else timeout
        self.max_retries = settings.HTTP_MAX_RETRIES if max_retries is None else max_retries
        self.backoff_base = settings.HTTP_BACKOFF_BASE_SEC if backoff_base is None else backoff_base
        self.session = session or requests.Session()
        self.sleep = sleep

    def get_json(self, url: str, params: Optional[Dict[str, Any]] = None,
                 headers: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """Single GET; raises PlatformAPIError on transport, status or payload errors."""
        try:
            response = self.session.get(url, params=params, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise PlatformAPIError(f"GET {url} failed: {e}") from e

        if not response.ok:
            raise PlatformAPIError(
                f"GET {url} returned {response.status_code} {response.reason}",
                status=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise PlatformAPIError(f"GET {url} returned malformed JSON", status=response.status_code) from e

        if not isinstance(data, dict):
            raise PlatformAPIError(f"GET {url} returned an unexpected payload", status=response.status_code)
        return data

    def get_json_with_retries(self, url: str, params: Optional[Dict[str, Any]] = None,
                              headers: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """GET with up to ``max_retries`` retries (delays 1x, 2x, 4x the base)."""
        retrying = Retrying(
            stop=stop_after_attempt(self.max_retries + 1),
            wait=wait_exponential(multiplier=self.backoff_base),
            retry=retry_if_exception_type(PlatformAPIError),
            before_sleep=self._log_retry,
            sleep=self.sleep,
            reraise=True,
        )
        return retrying(self.get_json, url, params=params, headers=headers)

    def _log_retry(self, retry_state):
        logger.warning(f"{retry_state.outcome.exception()}; retrying "
                       f"({retry_state.attempt_number}/{self.max_retries}) "
                       f"in {retry_state.next_action.sleep:.1f}s")
