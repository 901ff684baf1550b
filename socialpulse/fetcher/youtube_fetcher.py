"""YouTube Data API v3 fetcher with paginated, deduplicated comment retrieval."""
import math
import time
from datetime import timedelta
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple
from socialpulse.common.config import settings
from socialpulse.common.exceptions import PlatformAPIError
from socialpulse.common.logger import setup_logger
from socialpulse.common.metrics import errors_total
from socialpulse.common.models import Comment, PLATFORM_NAMES, VideoMetadata, utcnow
from socialpulse.fetcher.base import PlatformFetcher, parse_timestamp, register_fetcher
from socialpulse.fetcher.records import build_metric_note, video_metadata_record
from socialpulse.fetcher.sample_data import generate_sample_video_comments

logger = setup_logger(__name__)

API_BASE = "https://www.googleapis.com/youtube/v3"
SEARCH_URL = f"{API_BASE}/search"
VIDEOS_URL = f"{API_BASE}/videos"
COMMENT_THREADS_URL = f"{API_BASE}/commentThreads"
COMMENTS_PER_PAGE = 100
TITLE_SEARCH_CANDIDATES = 5


def video_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


def _to_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def _thread_entries(item: Dict[str, Any]) -> Iterator[Tuple[str, Dict[str, Any]]]:
    """Yield (comment_id, snippet) for a thread's top-level comment and inline replies."""
    top_level = (item.get("snippet") or {}).get("topLevelComment") or {}
    comment_id = top_level.get("id") or item.get("id")
    if comment_id and top_level.get("snippet"):
        yield comment_id, top_level["snippet"]

    for reply in (item.get("replies") or {}).get("comments") or []:
        if reply.get("id") and reply.get("snippet"):
            yield reply["id"], reply["snippet"]


@register_fetcher("youtube")
class YouTubeFetcher(PlatformFetcher):
    """Searches recent videos for a keyword and pages through their comments."""

    platform_name = PLATFORM_NAMES["youtube"]

    def __init__(self, credentials=None, client=None, max_videos: Optional[int] = None,
                 max_comments: Optional[int] = None, retrieval_ratio: Optional[float] = None,
                 page_delay: Optional[float] = None, sleep: Callable[[float], None] = time.sleep):
        super().__init__(credentials=credentials, client=client)
        self.max_videos = max_videos or settings.YOUTUBE_MAX_VIDEOS
        self.max_comments = max_comments or settings.YOUTUBE_MAX_COMMENTS
        self.retrieval_ratio = retrieval_ratio or settings.YOUTUBE_RETRIEVAL_RATIO
        self.page_delay = settings.PAGE_DELAY_SEC if page_delay is None else page_delay
        self.sleep = sleep

    def fetch_live(self, keyword: str, timeperiod: int, api_key: str) -> List[Comment]:
        published_after = (utcnow() - timedelta(days=timeperiod)).strftime("%Y-%m-%dT%H:%M:%SZ")
        data = self.client.get_json_with_retries(SEARCH_URL, params={
            "part": "id",
            "type": "video",
            "q": keyword,
            "maxResults": self.max_videos,
            "publishedAfter": published_after,
            "key": api_key,
        })

        video_ids = [item["id"]["videoId"] for item in data.get("items") or []
                     if (item.get("id") or {}).get("videoId")]
        if not video_ids:
            logger.info(f"No YouTube videos found for keyword: {keyword}")
            return []

        comments: List[Comment] = []
        for video_id in video_ids[:self.max_videos]:
            comments.extend(self.collect_video(video_id, api_key))
        return comments

    def fetch_by_title(self, title: str, timeperiod: int) -> List[Comment]:
        """Exact-title mode: one video, its metadata record first, then comments."""
        return self._collect(
            live=lambda key: self.fetch_title_live(title, key),
            sample=lambda: generate_sample_video_comments(title, timeperiod),
        )

    def fetch_title_live(self, title: str, api_key: str) -> List[Comment]:
        data = self.client.get_json_with_retries(SEARCH_URL, params={
            "part": "snippet",
            "type": "video",
            "q": title,
            "maxResults": TITLE_SEARCH_CANDIDATES,
            "key": api_key,
        })
        items = [item for item in data.get("items") or [] if (item.get("id") or {}).get("videoId")]
        if not items:
            logger.info(f"No YouTube video found with title: {title}")
            return []

        wanted = title.strip().lower()
        best = next((item for item in items
                     if (item.get("snippet") or {}).get("title", "").strip().lower() == wanted),
                    items[0])
        video_id = best["id"]["videoId"]

        metadata = self.fetch_video_statistics(video_id, api_key)
        if not metadata.title:
            metadata = metadata.model_copy(update={"title": (best.get("snippet") or {}).get("title", title)})
        logger.info(f"Found video: \"{metadata.title}\" ({metadata.url})")

        return [video_metadata_record(metadata)] + self.collect_video(video_id, api_key, metadata)

    def collect_video(self, video_id: str, api_key: str,
                      metadata: Optional[VideoMetadata] = None) -> List[Comment]:
        """Comments for one video plus a retrieval note when retrieval fell short."""
        metadata = metadata or self.fetch_video_statistics(video_id, api_key)
        comments = self.fetch_video_comments(video_id, api_key, reported=metadata.comment_count)
        note = build_metric_note(metadata, len(comments))
        if note is not None:
            comments.append(note)
        return comments

    def fetch_video_statistics(self, video_id: str, api_key: str) -> VideoMetadata:
        """Title, channel and counts; zeros when the lookup fails."""
        metadata = VideoMetadata(video_id=video_id, url=video_url(video_id))
        try:
            data = self.client.get_json_with_retries(VIDEOS_URL, params={
                "part": "snippet,statistics",
                "id": video_id,
                "key": api_key,
            })
        except PlatformAPIError as e:
            logger.warning(f"Could not read statistics for video {video_id}: {e}")
            return metadata

        items = data.get("items") or []
        if not items:
            return metadata

        snippet = items[0].get("snippet") or {}
        statistics = items[0].get("statistics") or {}
        return metadata.model_copy(update={
            "title": snippet.get("title", ""),
            "channel_title": snippet.get("channelTitle", ""),
            "view_count": _to_int(statistics.get("viewCount")),
            "like_count": _to_int(statistics.get("likeCount")),
            "comment_count": _to_int(statistics.get("commentCount")),
        })

    def comment_limit(self, reported: int) -> int:
        """Safety ceiling, or the retrieval ratio of the reported count if lower."""
        if reported <= 0:
            return self.max_comments
        return max(1, min(self.max_comments, math.ceil(reported * self.retrieval_ratio)))

    def fetch_video_comments(self, video_id: str, api_key: str, reported: int = 0) -> List[Comment]:
        """Page through comment threads, deduplicating by ``video_id:comment_id``.

        A page that still fails after retries ends pagination for this video;
        comments gathered so far are kept.
        """
        limit = self.comment_limit(reported)
        seen = set()
        comments: List[Comment] = []
        page_token = None

        while len(comments) < limit:
            params = {
                "part": "snippet,replies",
                "videoId": video_id,
                "maxResults": COMMENTS_PER_PAGE,
                "order": "time",
                "textFormat": "plainText",
                "key": api_key,
            }
            if page_token:
                params["pageToken"] = page_token

            try:
                data = self.client.get_json_with_retries(COMMENT_THREADS_URL, params=params)
            except PlatformAPIError as e:
                logger.warning(f"Giving up on comment pages for video {video_id} "
                               f"with {len(comments)} collected: {e}")
                errors_total.labels(component="fetcher", error_type="youtube_pagination").inc()
                break

            items = data.get("items") or []
            for item in items:
                for comment_id, snippet in _thread_entries(item):
                    derived_id = f"{video_id}:{comment_id}"
                    if derived_id in seen:
                        continue
                    seen.add(derived_id)
                    comments.append(self._normalize(video_id, comment_id, snippet))
                    if len(comments) >= limit:
                        break
                if len(comments) >= limit:
                    break

            page_token = data.get("nextPageToken")
            if not items or not page_token:
                break
            self.sleep(self.page_delay)

        logger.info(f"Collected {len(comments)} comments for video {video_id} "
                    f"(reported {reported}, limit {limit})")
        return comments

    def _normalize(self, video_id: str, comment_id: str, snippet: Dict[str, Any]) -> Comment:
        return self.make_comment(
            user_name=snippet.get("authorDisplayName") or "YouTube User",
            user_id=(snippet.get("authorChannelId") or {}).get("value"),
            text=snippet.get("textOriginal") or snippet.get("textDisplay") or "",
            created_at=parse_timestamp(snippet.get("publishedAt")),
            source_url=f"{video_url(video_id)}&lc={comment_id}",
            engagement_score=_to_int(snippet.get("likeCount")),
        )
