from datetime import date

import pytest

from vidto.client.state import GalleryQuery, GalleryState
from vidto.errors import ValidationError
from vidto.schemas.video import SortKey, VideoFilters


@pytest.fixture
def state(test_settings):
    return GalleryState(test_settings)


def test_initial_query(state):
    assert state.query == GalleryQuery(limit=10, sort=SortKey.NEWEST)
    assert not state.has_active_filters
    assert state.active_filter_count == 0


def test_load_more_grows_limit(state):
    state.load_more()
    state.load_more()

    assert state.limit == 30
    assert state.past_first_page


def test_sort_change_resets_limit(state):
    state.load_more()

    assert state.set_sort(SortKey.MOST_VIEWS)
    assert state.limit == 10
    assert state.query.sort == SortKey.MOST_VIEWS


def test_same_sort_keeps_limit(state):
    state.load_more()

    assert not state.set_sort("newest")
    assert state.limit == 20


def test_filter_change_resets_limit(state):
    state.load_more()

    assert state.set_tag_ids(["tag2", "tag1"])
    assert state.limit == 10
    assert state.query.tag_ids == ("tag1", "tag2")


def test_reordered_tags_are_not_a_change(state):
    state.set_tag_ids(["tag1", "tag2"])
    state.load_more()

    assert not state.set_tag_ids(["tag2", "tag1"])
    assert state.limit == 20


def test_date_range_counts_as_one_filter(state):
    state.set_tag_ids(["tag1", "tag2"])
    state.set_date_range(date(2025, 1, 1), date(2025, 1, 31))

    assert state.has_active_filters
    assert state.active_filter_count == 3


def test_inverted_date_range_rejected(state):
    with pytest.raises(ValidationError):
        state.set_date_range(date(2025, 2, 1), date(2025, 1, 1))


def test_clear_filters(state):
    state.set_filters(VideoFilters(tag_ids=["tag1"], date_from=date(2025, 1, 1)))
    state.load_more()

    assert state.clear_filters()
    assert state.limit == 10
    assert not state.has_active_filters
    assert not state.clear_filters()


def test_scroll_near_bottom_loads_more(state):
    assert state.on_scroll(scroll_top=1150, viewport_height=800, content_height=2000)
    assert state.limit == 20


def test_scroll_far_from_bottom_does_nothing(state):
    assert not state.on_scroll(scroll_top=0, viewport_height=800, content_height=2000)
    assert state.limit == 10


def test_cache_key_covers_every_field():
    base = GalleryQuery(limit=10, sort=SortKey.NEWEST)
    variants = [
        GalleryQuery(limit=20, sort=SortKey.NEWEST),
        GalleryQuery(limit=10, sort=SortKey.OLDEST),
        GalleryQuery(limit=10, sort=SortKey.NEWEST, tag_ids=["tag1"]),
        GalleryQuery(limit=10, sort=SortKey.NEWEST, date_from=date(2025, 1, 1)),
        GalleryQuery(limit=10, sort=SortKey.NEWEST, date_to=date(2025, 1, 1)),
    ]

    keys = {query.cache_key() for query in variants}

    assert base.cache_key() not in keys
    assert len(keys) == len(variants)


def test_query_params():
    query = GalleryQuery(
        limit=20,
        sort=SortKey.LEAST_VIEWS,
        tag_ids=["b", "a", "a"],
        date_from=date(2025, 1, 1),
        date_to=date(2025, 1, 31),
    )

    assert query.to_params() == {
        "limit": 20,
        "sort": "least_views",
        "tagIds": ["a", "b"],
        "dateFrom": "2025-01-01",
        "dateTo": "2025-01-31",
    }


def test_load_more_stops_at_max_page_size(test_settings):
    state = GalleryState(test_settings.model_copy(update={"max_page_size": 25}))

    assert state.load_more()
    assert state.load_more()
    assert state.limit == 25
    assert state.at_max_limit

    assert not state.load_more()
    assert not state.on_scroll(scroll_top=1200, viewport_height=800, content_height=2000)
    assert state.limit == 25
