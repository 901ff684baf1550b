"""Configuration management for the social sentiment analyzer."""
import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Platform credentials (empty means "not configured" -> sample data)
    YOUTUBE_API_KEY: str = os.getenv("YOUTUBE_API_KEY", "")
    TWITTER_BEARER_TOKEN: str = os.getenv("TWITTER_BEARER_TOKEN", "")
    FACEBOOK_ACCESS_TOKEN: str = os.getenv("FACEBOOK_ACCESS_TOKEN", "")
    INSTAGRAM_ACCESS_TOKEN: str = os.getenv("INSTAGRAM_ACCESS_TOKEN", "")

    # Storage
    STORE_BACKEND: str = os.getenv("STORE_BACKEND", "memory")
    REDIS_HOST: str = os.getenv("REDIS_HOST", "localhost")
    REDIS_PORT: int = int(os.getenv("REDIS_PORT", "6379"))
    REDIS_DB: int = int(os.getenv("REDIS_DB", "0"))
    REDIS_KEY_PREFIX: str = os.getenv("REDIS_KEY_PREFIX", "socialpulse")

    # Outbound HTTP
    HTTP_TIMEOUT_SEC: float = float(os.getenv("HTTP_TIMEOUT_SEC", "15"))
    HTTP_MAX_RETRIES: int = int(os.getenv("HTTP_MAX_RETRIES", "3"))
    HTTP_BACKOFF_BASE_SEC: float = float(os.getenv("HTTP_BACKOFF_BASE_SEC", "1.0"))
    PAGE_DELAY_SEC: float = float(os.getenv("PAGE_DELAY_SEC", "0.2"))

    # YouTube pagination limits
    YOUTUBE_MAX_VIDEOS: int = int(os.getenv("YOUTUBE_MAX_VIDEOS", "10"))
    YOUTUBE_MAX_COMMENTS: int = int(os.getenv("YOUTUBE_MAX_COMMENTS", "200"))
    YOUTUBE_RETRIEVAL_RATIO: float = float(os.getenv("YOUTUBE_RETRIEVAL_RATIO", "0.8"))

    # Processing
    COLLECTOR_MAX_WORKERS: int = int(os.getenv("COLLECTOR_MAX_WORKERS", "4"))
    TREND_DAYS: int = int(os.getenv("TREND_DAYS", "30"))
    DEFAULT_TIMEPERIOD: int = int(os.getenv("DEFAULT_TIMEPERIOD", "30"))
    MAX_TIMEPERIOD_DAYS: int = int(os.getenv("MAX_TIMEPERIOD_DAYS", "365"))

    # API
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "8000"))
    API_TOKEN: str = os.getenv("API_TOKEN", "dev-token-change-in-prod")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    def platform_credentials(self) -> dict:
        """Credentials from the environment, keyed by platform slug."""
        return {
            "youtube": self.YOUTUBE_API_KEY or None,
            "twitter": self.TWITTER_BEARER_TOKEN or None,
            "facebook": self.FACEBOOK_ACCESS_TOKEN or None,
            "instagram": self.INSTAGRAM_ACCESS_TOKEN or None,
        }


settings = Settings()
