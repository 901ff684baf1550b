from datetime import datetime, timezone

import pytest

from socialpulse.common.models import Comment


@pytest.fixture
def make_comment():
    def factory(text="", sentiment="neutral", platform="YouTube", user_name="user",
                topics=None, engagement_score=0, created_at=None, language="English",
                **kwargs):
        return Comment(
            platform=platform,
            user_name=user_name,
            text=text,
            language=language,
            sentiment=sentiment,
            topics=["general"] if topics is None else topics,
            engagement_score=engagement_score,
            created_at=created_at or datetime(2024, 5, 30, 10, 0, tzinfo=timezone.utc),
            **kwargs
        )
    return factory
