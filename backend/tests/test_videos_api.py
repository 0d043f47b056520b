from vidto.models import Tag

API = "/api/v1"


def create_video(client, **payload):
    body = {"title": "Test Video", "duration": 600, "views": 500}
    body.update(payload)
    return client.post(f"{API}/videos", json=body)


class TestCreateVideoEndpoint:
    def test_creates_video(self, client):
        response = create_video(client)

        assert response.status_code == 201
        assert isinstance(response.json()["id"], str)

    def test_created_video_has_expected_shape(self, client, seed_tags):
        created = create_video(
            client, title="Structured Video", duration=450, views=750, tagIds=["tag1"]
        ).json()

        response = client.get(f"{API}/videos/{created['id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == created["id"]
        assert body["title"] == "Structured Video"
        assert body["duration"] == 450
        assert body["views"] == 750
        assert "picsum.photos" in body["thumbnailUrl"]
        assert isinstance(body["createdAt"], str)
        assert body["tags"] == [{"id": "tag1", "name": "Education", "color": "#3B82F6"}]

    def test_empty_title_rejected_and_nothing_persisted(self, client):
        response = create_video(client, title="", duration=10, views=0)

        assert response.status_code == 422
        assert client.get(f"{API}/videos/count").json() == 0

    def test_negative_duration_rejected(self, client):
        assert create_video(client, duration=-1).status_code == 422

    def test_negative_views_rejected(self, client):
        assert create_video(client, views=-100).status_code == 422

    def test_unknown_tag_rejected(self, client, seed_tags):
        response = create_video(client, tagIds=["tag1", "ghost"])

        assert response.status_code == 422
        assert "ghost" in response.json()["detail"]
        assert client.get(f"{API}/videos/count").json() == 0

    def test_accepts_snake_case_payload(self, client, seed_tags):
        response = create_video(client, tag_ids=["tag2"])

        video = client.get(f"{API}/videos/{response.json()['id']}").json()
        assert [tag["id"] for tag in video["tags"]] == ["tag2"]


class TestGetVideoEndpoint:
    def test_missing_video_is_null(self, client):
        response = client.get(f"{API}/videos/non-existent")

        assert response.status_code == 200
        assert response.json() is None

    def test_count(self, client):
        assert client.get(f"{API}/videos/count").json() == 0
        create_video(client, title="Video 1")
        create_video(client, title="Video 2")
        assert client.get(f"{API}/videos/count").json() == 2


class TestListVideosEndpoint:
    def test_newest_first(self, client, three_videos):
        response = client.get(f"{API}/videos", params={"sort": "newest", "limit": 10})

        assert response.status_code == 200
        assert [video["title"] for video in response.json()] == [
            "Third Video",
            "Second Video",
            "First Video",
        ]

    def test_most_views(self, client, three_videos):
        body = client.get(f"{API}/videos", params={"sort": "most_views"}).json()

        assert body[0]["title"] == "Second Video"
        assert body[0]["views"] == 5000

    def test_filter_by_tag(self, client, three_videos):
        body = client.get(f"{API}/videos", params={"tagIds": "tag1"}).json()

        assert len(body) == 2
        assert all(any(tag["id"] == "tag1" for tag in video["tags"]) for video in body)

    def test_tag_ids_repeated_or_comma_separated(self, client, three_videos):
        repeated = client.get(f"{API}/videos", params=[("tagIds", "tag2"), ("tagIds", "tag3")]).json()
        joined = client.get(f"{API}/videos", params={"tagIds": "tag2,tag3"}).json()

        assert [video["id"] for video in repeated] == [video["id"] for video in joined]
        assert {video["title"] for video in joined} == {"Second Video", "Third Video"}

    def test_date_range(self, client, three_videos):
        body = client.get(
            f"{API}/videos", params={"dateFrom": "2025-01-02", "dateTo": "2025-01-02"}
        ).json()

        assert [video["title"] for video in body] == ["Second Video"]

    def test_respects_limit(self, client, three_videos):
        assert len(client.get(f"{API}/videos", params={"limit": 2}).json()) == 2

    def test_invalid_sort_rejected(self, client):
        assert client.get(f"{API}/videos", params={"sort": "random"}).status_code == 422

    def test_zero_limit_rejected(self, client):
        assert client.get(f"{API}/videos", params={"limit": 0}).status_code == 422

    def test_inverted_date_range_rejected(self, client):
        response = client.get(
            f"{API}/videos", params={"dateFrom": "2025-02-01", "dateTo": "2025-01-01"}
        )

        assert response.status_code == 422

    def test_store_failure_is_503(self, client, database):
        database.drop_all()

        response = client.get(f"{API}/videos")

        assert response.status_code == 503
        assert response.json()["detail"].startswith("Store unavailable")


def test_deleting_tag_removes_it_from_videos(client, database, seed_tags):
    created = create_video(client, tagIds=["tag1", "tag3"]).json()

    with database.session() as db:
        db.delete(db.get(Tag, "tag3"))
        db.commit()

    video = client.get(f"{API}/videos/{created['id']}").json()
    assert [tag["id"] for tag in video["tags"]] == ["tag1"]
