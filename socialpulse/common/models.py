"""Data models for search queries, comments and analytics."""
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any, Literal
from pydantic import BaseModel, Field

Sentiment = Literal["positive", "negative", "neutral"]

PLATFORM_CHOICES = ("all", "youtube", "twitter", "facebook", "instagram")

# Platform slug -> display name stored on comments
PLATFORM_NAMES = {
    "youtube": "YouTube",
    "twitter": "Twitter (X)",
    "facebook": "Facebook",
    "instagram": "Instagram",
}

VIDEO_METADATA_USER = "VIDEO_METADATA"
VIDEO_INFO_USER = "VIDEO_INFO"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SearchQuery(BaseModel):
    """A unique search; (keyword, timeperiod, platform, title mode) is its fingerprint."""
    id: int
    keyword: str
    timeperiod: int
    platform: str = "all"
    user_id: Optional[int] = None
    is_video_title_search: bool = False
    created_at: datetime = Field(default_factory=utcnow)

    @property
    def fingerprint(self) -> tuple:
        return (self.keyword, self.timeperiod, self.platform, self.is_video_title_search)


class Comment(BaseModel):
    """Collected comment, or a metadata/metric pseudo-record for one platform."""
    id: Optional[int] = None
    search_query_id: Optional[int] = None
    platform: str
    user_name: str
    user_id: Optional[str] = None
    text: str = ""
    translation: Optional[str] = None
    language: Optional[str] = None
    sentiment: Sentiment = "neutral"
    sentiment_score: float = 0.0
    topics: List[str] = []
    engagement_score: int = Field(default=0, ge=0)
    created_at: Optional[datetime] = None
    collected_at: Optional[datetime] = None
    source_url: Optional[str] = None
    is_video_metadata: bool = False
    is_comment_metric: bool = False

    @property
    def is_actual(self) -> bool:
        """True for real user comments (not metadata or metric notes)."""
        return not (self.is_video_metadata or self.is_comment_metric)


class MetricChanges(BaseModel):
    """Period-over-period deltas.

    There is no historical comparison yet, so these are fixed values and
    ``is_placeholder`` stays True until one exists.
    """
    total_comments: float = 0.0
    positive_sentiment: float = 0.0
    negative_sentiment: float = 0.0
    engagement_rate: float = 0.0
    is_placeholder: bool = True


class Metrics(BaseModel):
    total_comments: int = 0
    positive_sentiment: int = 0
    negative_sentiment: int = 0
    neutral_sentiment: int = 0
    engagement_rate: float = 0.0
    changes: MetricChanges = Field(default_factory=MetricChanges)


class TrendPoint(BaseModel):
    date: str
    positive: int
    neutral: int
    negative: int


class DistributionEntry(BaseModel):
    name: str
    value: int
    color: str


class KeywordCount(BaseModel):
    text: str
    value: int


class SentimentBreakdown(BaseModel):
    positive: int = 0
    neutral: int = 0
    negative: int = 0


class Influencer(BaseModel):
    name: str
    handle: str
    platform: str
    comment_count: int
    engagement_level: Literal["Low", "Medium", "High"]
    sentiment: SentimentBreakdown


class Analytics(BaseModel):
    """Aggregated view of one search query's comments."""
    search_query_id: Optional[int] = None
    metrics: Metrics = Field(default_factory=Metrics)
    sentiment_trend: List[TrendPoint] = []
    topic_distribution: List[DistributionEntry] = []
    platform_distribution: List[DistributionEntry] = []
    top_keywords: List[KeywordCount] = []
    influencers: List[Influencer] = []
    ai_insights: str = ""


class CommentPage(BaseModel):
    comments: List[Comment] = []
    total: int = 0
    page: Optional[int] = None
    page_size: Optional[int] = None
    has_more: bool = False


class VideoMetadata(BaseModel):
    title: str = ""
    video_id: str = ""
    channel_title: str = ""
    view_count: int = 0
    like_count: int = 0
    comment_count: int = 0
    url: str = ""


class SearchResult(BaseModel):
    """Query fields + analytics + the consumer-facing comment list."""
    search_query_id: int
    keyword: str
    timeperiod: int
    platform: str
    is_video_title_search: bool = False
    metrics: Metrics
    sentiment_trend: List[TrendPoint] = []
    topic_distribution: List[DistributionEntry] = []
    platform_distribution: List[DistributionEntry] = []
    top_keywords: List[KeywordCount] = []
    influencers: List[Influencer] = []
    ai_insights: str = ""
    comments: List[Comment] = []
    total_comments: int = 0
    has_more_comments: bool = False
    last_updated: datetime
    cached: bool = False
    retrieval_notes: List[Dict[str, Any]] = []
    video_title: Optional[str] = None
    channel_title: Optional[str] = None
    view_count: Optional[int] = None
    like_count: Optional[int] = None
    comment_count: Optional[int] = None
    video_url: Optional[str] = None
