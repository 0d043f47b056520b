from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from vidto.config import Settings
from vidto.database import Database
from vidto.main import create_app
from vidto.models import Tag, Video

TAGS = [
    {"id": "tag1", "name": "Education", "color": "#3B82F6"},
    {"id": "tag2", "name": "Entertainment", "color": "#EF4444"},
    {"id": "tag3", "name": "Technology", "color": "#10B981"},
]


class TickingClock:
    """Returns a strictly increasing timestamp on every call."""

    def __init__(self, start: datetime = datetime(2025, 1, 1, 12, 0, 0), step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current += self.step
        return value


class FakeTime:
    """Manually advanced epoch clock for cache tests."""

    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def test_settings():
    return Settings(
        environment="test",
        database_url="sqlite://",
        redis_url="",
        auto_create_tables=True,
    )


@pytest.fixture
def database(test_settings):
    db = Database(test_settings.database_url)
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def session(database):
    db_session = database.session()
    yield db_session
    db_session.close()


@pytest.fixture
def app(test_settings, database):
    return create_app(test_settings, database=database)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seed_tags(session):
    tags = [Tag(**tag) for tag in TAGS]
    session.add_all(tags)
    session.commit()
    return tags


def add_video(session, title, views=0, created_at=None, tag_ids=(), video_id=None, duration=60):
    """Insert a video row directly with a chosen timestamp."""
    video = Video(
        id=video_id or f"vid-{title.lower().replace(' ', '-')}",
        title=title,
        thumbnail_url="https://picsum.photos/seed/test/300/200",
        duration=duration,
        views=views,
        created_at=created_at or datetime(2025, 1, 1),
    )
    if tag_ids:
        video.tags = session.query(Tag).filter(Tag.id.in_(list(tag_ids))).all()
    session.add(video)
    session.commit()
    return video


@pytest.fixture
def three_videos(session, seed_tags):
    """Views [500, 5000, 100] created in increasing order."""
    return [
        add_video(session, "First Video", views=500, created_at=datetime(2025, 1, 1, 9), tag_ids=["tag1"], duration=100),
        add_video(session, "Second Video", views=5000, created_at=datetime(2025, 1, 2, 9), tag_ids=["tag2"], duration=200),
        add_video(session, "Third Video", views=100, created_at=datetime(2025, 1, 3, 9), tag_ids=["tag1", "tag3"], duration=300),
    ]
