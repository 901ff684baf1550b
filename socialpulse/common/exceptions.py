"""Exception types raised across the pipeline."""
from typing import Optional


class SocialPulseError(Exception):
    """Base class for application errors."""


class InvalidQueryError(SocialPulseError):
    """Search input rejected before the pipeline runs."""


class PlatformAPIError(SocialPulseError):
    """An upstream platform call failed or returned an unusable payload."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
