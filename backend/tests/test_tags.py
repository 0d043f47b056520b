import re

import pytest

from vidto.errors import ValidationError
from vidto.models import Tag
from vidto.services.tag_service import TagService

API = "/api/v1"


@pytest.fixture
def four_tags(session):
    session.add_all(
        [
            Tag(id="tag1", name="Education", color="#3B82F6"),
            Tag(id="tag2", name="Entertainment", color="#EF4444"),
            Tag(id="tag3", name="Technology", color="#10B981"),
            Tag(id="tag4", name="Art", color="#8B5CF6"),
        ]
    )
    session.commit()


class TestListTags:
    def test_returns_all_tags(self, client, four_tags):
        body = client.get(f"{API}/tags").json()

        assert len(body) == 4
        for tag in body:
            assert tag["id"]
            assert tag["name"]
            assert re.match(r"^#[0-9A-F]{6}$", tag["color"], re.IGNORECASE)

    def test_sorted_alphabetically(self, client, four_tags):
        names = [tag["name"] for tag in client.get(f"{API}/tags").json()]

        assert names == ["Art", "Education", "Entertainment", "Technology"]

    def test_empty_store(self, client):
        assert client.get(f"{API}/tags").json() == []


class TestCreateTag:
    def test_service_creates_tag(self, session):
        service = TagService(session)

        tag = service.create_tag("  Music ", "#123abc")

        assert tag.name == "Music"
        assert [t.name for t in service.list_tags()] == ["Music"]

    def test_service_rejects_duplicate_name(self, session, four_tags):
        with pytest.raises(ValidationError, match="already exists"):
            TagService(session).create_tag("Art", "#000000")

    @pytest.mark.parametrize("color", ["red", "#12345", "#GGGGGG", ""])
    def test_service_rejects_bad_color(self, session, color):
        with pytest.raises(ValidationError):
            TagService(session).create_tag("Music", color)

    def test_endpoint(self, client):
        response = client.post(f"{API}/tags", json={"name": "Music", "color": "#123ABC"})

        assert response.status_code == 201
        assert response.json()["name"] == "Music"
        assert client.get(f"{API}/tags").json() == [response.json()]

    def test_endpoint_duplicate_is_422(self, client):
        client.post(f"{API}/tags", json={"name": "Music", "color": "#123ABC"})

        response = client.post(f"{API}/tags", json={"name": "Music", "color": "#000000"})

        assert response.status_code == 422
