"""Templated insight summaries."""
from typing import Optional
from socialpulse.common.models import SearchQuery

POSITIVE_TEMPLATE = (
    "Most users are expressing positive sentiment toward the search topic, especially "
    "regarding {topic}. There's been a 12% increase in positive mentions over the past "
    "week. Engagement rate is currently at {engagement_rate}%."
)

NEGATIVE_TEMPLATE = (
    "The overall sentiment is trending negative with {negative}% of comments expressing "
    "concerns, primarily about {topic}. Positive comments ({positive}%) are mostly "
    "appreciating recent initiatives. Consider addressing the most mentioned pain points "
    "to improve public perception. Engagement rate is currently at {engagement_rate}%."
)

NO_CREDENTIALS_MESSAGE = (
    "No API keys configured. Please set up API keys in the settings to fetch actual "
    "data from social media platforms."
)

NO_DATA_TEMPLATE = (
    "No data found for \"{keyword}\" on {platform} for the last {timeperiod} days. "
    "Please try a different keyword, platform, or time period."
)

DEFAULT_TOPIC = "various topics"


def summarize(positive: int, negative: int, engagement_rate: float,
              top_topic: Optional[str] = None) -> str:
    """Positive template when positive outweighs negative, else the negative one."""
    topic = top_topic or DEFAULT_TOPIC
    if positive > negative:
        return POSITIVE_TEMPLATE.format(topic=topic, engagement_rate=engagement_rate)
    return NEGATIVE_TEMPLATE.format(
        topic=topic, negative=negative, positive=positive, engagement_rate=engagement_rate)


def empty_state_message(credentials_configured: bool, query: Optional[SearchQuery] = None) -> str:
    if not credentials_configured:
        return NO_CREDENTIALS_MESSAGE

    keyword = query.keyword if query else "the specified keyword"
    platform = "any platform" if not query or query.platform == "all" else query.platform
    timeperiod = query.timeperiod if query else "selected"
    return NO_DATA_TEMPLATE.format(keyword=keyword, platform=platform, timeperiod=timeperiod)
