from datetime import datetime, timezone

import pytest

from socialpulse.common.exceptions import InvalidQueryError
from socialpulse.fetcher.base import FETCHER_REGISTRY, parse_timestamp
from socialpulse.fetcher.collector import MediaCollector
from socialpulse.fetcher.sample_data import generate_sample_comments


class StaticFetcher:
    def __init__(self, comments):
        self.comments = comments
        self.calls = 0

    def fetch(self, keyword, timeperiod):
        self.calls += 1
        return list(self.comments)


class BrokenFetcher:
    def fetch(self, keyword, timeperiod):
        raise RuntimeError("upstream exploded")


def test_registry_order():
    assert list(FETCHER_REGISTRY)[:4] == ["youtube", "twitter", "facebook", "instagram"]


def test_one_failing_platform_does_not_abort_others(make_comment):
    twitter = StaticFetcher([make_comment("tweet", platform="Twitter (X)")])
    instagram = StaticFetcher([make_comment("post", platform="Instagram")])
    collector = MediaCollector(credentials=lambda: {}, fetchers={
        "youtube": BrokenFetcher(),
        "twitter": twitter,
        "instagram": instagram,
    })

    comments = collector.collect("kw", 7)

    assert [c.text for c in comments] == ["tweet", "post"]


def test_single_platform_only_calls_that_fetcher(make_comment):
    youtube = StaticFetcher([make_comment("video comment")])
    twitter = StaticFetcher([make_comment("tweet")])
    collector = MediaCollector(credentials=lambda: {}, fetchers={"youtube": youtube, "twitter": twitter})

    assert [c.text for c in collector.collect("kw", 7, platform="youtube")] == ["video comment"]
    assert twitter.calls == 0


def test_unknown_platform_rejected():
    collector = MediaCollector(credentials=lambda: {}, fetchers={})
    with pytest.raises(InvalidQueryError):
        collector.collect("kw", 7, platform="tiktok")


def test_has_credentials():
    assert MediaCollector(credentials=lambda: {"youtube": None, "twitter": "token"}, fetchers={}).has_credentials()
    assert not MediaCollector(credentials=lambda: {"youtube": None, "twitter": None}, fetchers={}).has_credentials()


def test_all_platforms_without_credentials_yield_sample_data():
    comments = MediaCollector(credentials=lambda: {}).collect("water", 14)

    platforms = {c.platform for c in comments}
    assert platforms == {"YouTube", "Twitter (X)", "Facebook", "Instagram"}
    assert all(c.sentiment == "neutral" and c.topics == [] for c in comments)


def test_sample_data_is_seeded_by_platform_keyword_and_period():
    now = datetime(2024, 5, 30, tzinfo=timezone.utc)
    first = generate_sample_comments("facebook", "water", 14, now=now)

    assert first == generate_sample_comments("facebook", "water", 14, now=now)
    assert first != generate_sample_comments("instagram", "water", 14, now=now)
    assert all(now - c.created_at <= (now - now.replace(day=16)) for c in first)
    assert all(c.source_url == f"https://example.com/facebook/comment/{i}" for i, c in enumerate(first))


def test_parse_timestamp_variants():
    expected = datetime(2024, 5, 20, 10, 0, tzinfo=timezone.utc)
    assert parse_timestamp("2024-05-20T10:00:00Z") == expected
    assert parse_timestamp("2024-05-20T10:00:00+0000") == expected
    assert parse_timestamp("2024-05-20T10:00:00") == expected
    assert parse_timestamp("yesterday") is None
    assert parse_timestamp(None) is None


def test_each_fetcher_gets_its_own_client():
    collector = MediaCollector(credentials=lambda: {})

    clients = [fetcher.client for fetcher in collector.fetchers.values()]
    sessions = {id(client.session) for client in clients}
    assert len(sessions) == len(clients) == len(FETCHER_REGISTRY)
