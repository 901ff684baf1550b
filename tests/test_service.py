import random
from unittest.mock import patch

import pytest

from socialpulse.analytics.aggregator import AnalyticsAggregator
from socialpulse.analytics.service import AnalysisService, validate_query
from socialpulse.common.exceptions import InvalidQueryError
from socialpulse.common.models import VideoMetadata
from socialpulse.fetcher.records import build_metric_note, video_metadata_record
from socialpulse.store.memory_store import MemoryStore


class FakeCollector:
    def __init__(self, comments=(), credentials=True):
        self.comments = list(comments)
        self.credentials = credentials
        self.calls = []

    def has_credentials(self):
        return self.credentials

    def collect(self, keyword, timeperiod, platform="all", is_video_title_search=False):
        self.calls.append((keyword, timeperiod, platform, is_video_title_search))
        return list(self.comments)


def make_service(collector, store=None):
    return AnalysisService(
        store=store or MemoryStore(),
        collector=collector,
        aggregator=AnalyticsAggregator(rng=random.Random(1)),
    )


def raw(make_comment, text, platform="YouTube"):
    return make_comment(text, platform=platform, topics=[])


def test_end_to_end_sentiment(make_comment):
    texts = ["thank you very much", "this is bad and a waste of money", "ok, fine"]
    service = make_service(FakeCollector([raw(make_comment, t) for t in texts]))

    result = service.analyze("good service", 30)

    assert [c.sentiment for c in result.comments] == ["positive", "negative", "neutral"]
    assert result.metrics.total_comments == 3
    assert result.total_comments == 3
    assert result.cached is False
    assert result.comments[0].topics == ["appreciation"]


def test_repeat_query_served_from_cache(make_comment):
    collector = FakeCollector([raw(make_comment, "great work")])
    service = make_service(collector)

    first = service.analyze("water", 30, "youtube")
    second = service.analyze("water", "30", "youtube")

    assert len(collector.calls) == 1
    assert second.cached is True
    assert second.search_query_id == first.search_query_id
    assert second.metrics == first.metrics


def test_refresh_collects_again_and_replaces_cache_entry(make_comment):
    collector = FakeCollector([raw(make_comment, "great work")])
    service = make_service(collector)

    first = service.analyze("water", 30)
    collector.comments.append(raw(make_comment, "terrible roads"))
    refreshed = service.analyze("water", 30, refresh=True)
    cached = service.analyze("water", 30)

    assert len(collector.calls) == 2
    assert refreshed.search_query_id != first.search_query_id
    assert cached.search_query_id == refreshed.search_query_id
    assert cached.metrics.total_comments == 2
    assert service.get_comments(first.search_query_id).total == 1


def test_different_fingerprints_do_not_share_cache(make_comment):
    collector = FakeCollector([raw(make_comment, "nice")])
    service = make_service(collector)

    service.analyze("water", 30)
    service.analyze("water", 7)
    service.analyze("water", 30, "twitter")

    assert len(collector.calls) == 3


@pytest.mark.parametrize("keyword, timeperiod, platform", [
    ("", 30, "all"),
    ("   ", 30, "all"),
    (None, 30, "all"),
    ("water", 0, "all"),
    ("water", -3, "all"),
    ("water", "abc", "all"),
    ("water", 2.5, "all"),
    ("water", True, "all"),
    ("water", 30, "tiktok"),
    ("water", "\u00b2", "all"),
    ("water", 100000, "all"),
    ("water", "1000000", "all"),
])
def test_invalid_queries_rejected(keyword, timeperiod, platform):
    with pytest.raises(InvalidQueryError):
        validate_query(keyword, timeperiod, platform)


def test_validate_query_normalizes():
    assert validate_query("  water  ", " 14 ", "facebook") == ("water", 14, "facebook")


def test_timeperiod_upper_bound_follows_settings():
    with patch("socialpulse.analytics.service.settings") as settings:
        settings.MAX_TIMEPERIOD_DAYS = 90
        assert validate_query("water", 90, "all") == ("water", 90, "all")
        with pytest.raises(InvalidQueryError):
            validate_query("water", 91, "all")


def test_keyword_search_does_not_reuse_title_search(make_comment):
    metadata = VideoMetadata(title="Budget Speech", video_id="vid", comment_count=1,
                             url="https://www.youtube.com/watch?v=vid")
    collector = FakeCollector([video_metadata_record(metadata), raw(make_comment, "good speech")])
    service = make_service(collector)

    title_result = service.analyze("Budget Speech", 30, is_video_title_search=True)
    keyword_result = service.analyze("Budget Speech", 30, "youtube")
    cached = service.analyze("Budget Speech", 30, "youtube")

    assert [call[3] for call in collector.calls] == [True, False]
    assert keyword_result.cached is False
    assert keyword_result.is_video_title_search is False
    assert keyword_result.search_query_id != title_result.search_query_id
    assert cached.cached is True
    assert cached.search_query_id == keyword_result.search_query_id


def test_invalid_query_never_reaches_collector():
    collector = FakeCollector()
    with pytest.raises(InvalidQueryError):
        make_service(collector).analyze("water", "soon")
    assert collector.calls == []


def test_title_search_surfaces_video_fields(make_comment):
    metadata = VideoMetadata(title="Budget Speech", video_id="vid", channel_title="News",
                             view_count=1000, like_count=50, comment_count=50,
                             url="https://www.youtube.com/watch?v=vid")
    records = [video_metadata_record(metadata)]
    records += [raw(make_comment, f"good point {i}") for i in range(40)]
    records.append(build_metric_note(metadata, 40))
    collector = FakeCollector(records)
    service = make_service(collector)

    result = service.analyze("Budget Speech", 30, "all", is_video_title_search=True)
    again = service.analyze("Budget Speech", 30, "all", is_video_title_search=True)

    assert collector.calls[0] == ("Budget Speech", 30, "youtube", True)
    assert len(collector.calls) == 2
    assert again.search_query_id != result.search_query_id
    assert result.platform == "youtube" and result.is_video_title_search
    assert result.video_title == "Budget Speech"
    assert result.channel_title == "News"
    assert result.view_count == 1000
    assert result.video_url == "https://www.youtube.com/watch?v=vid"
    assert result.total_comments == 40
    assert all(c.is_actual for c in result.comments)
    assert result.metrics.total_comments == 40
    assert result.retrieval_notes[0]["commentCounts"]["percentage"] == 80


def test_pagination_of_result_comments(make_comment):
    service = make_service(FakeCollector([raw(make_comment, f"comment {i}") for i in range(5)]))

    result = service.analyze("water", 30, page=2, page_size=2)

    assert [c.text for c in result.comments] == ["comment 2", "comment 3"]
    assert result.has_more_comments is True
    assert result.total_comments == 5


def test_no_credentials_and_no_comments():
    result = make_service(FakeCollector(credentials=False)).analyze("water", 30)

    assert result.ai_insights.startswith("No API keys configured")
    assert result.metrics.total_comments == 0
    assert result.comments == []


def test_credentials_but_no_comments():
    result = make_service(FakeCollector(credentials=True)).analyze("test", 30)

    assert result.ai_insights.startswith('No data found for "test"')


def test_append_comments_recomputes_analytics(make_comment):
    service = make_service(FakeCollector([raw(make_comment, "great work")]))
    result = service.analyze("water", 30)

    analytics = service.append_comments(result.search_query_id, [raw(make_comment, "bad roads")])

    assert analytics.metrics.total_comments == 2
    assert analytics.metrics.negative_sentiment == 50
    assert service.analyze("water", 30).metrics.total_comments == 2
    assert service.append_comments(999, []) is None


def test_lookups_for_unknown_query():
    service = make_service(FakeCollector())
    assert service.get_comments(42) is None
    assert service.get_result(42) is None


def test_get_result_returns_stored_analysis(make_comment):
    service = make_service(FakeCollector([raw(make_comment, "great work")]))
    query_id = service.analyze("water", 30).search_query_id

    result = service.get_result(query_id)

    assert result.cached is True
    assert result.keyword == "water"
    assert result.metrics.positive_sentiment == 100


def test_stored_credentials_override_environment():
    service = make_service(FakeCollector())
    service.save_api_key("youtube", "stored-key")

    with patch("socialpulse.analytics.service.settings") as settings:
        settings.platform_credentials.return_value = {
            "youtube": "env-key", "twitter": "env-token", "facebook": None, "instagram": None}
        credentials = service.credentials()

    assert credentials == {"youtube": "stored-key", "twitter": "env-token", "facebook": None, "instagram": None}


def test_save_api_key_rejects_unknown_platform():
    with pytest.raises(InvalidQueryError):
        make_service(FakeCollector()).save_api_key("myspace", "key")
