"""
Video Client Tests

Tests for VideoClient record operations against the mock transport:
- get / search / create / update / delete
- publish, schedule and unschedule
Uploads are covered in tests/upload/test_orchestrator.py
"""

import json
from datetime import datetime, timedelta, timezone

import pytest

from vidhost.constants import ErrorKind
from vidhost.errors import TransportError


def last_body(transport):
    """Decoded JSON body of the most recent request"""
    return json.loads(transport.request_history[-1]["body"])


# =============================================================================
# READ OPERATIONS
# =============================================================================


@pytest.mark.unit
class TestGetAndSearch:
    """Test fetching videos"""

    def test_get(self, video_client, mock_transport):
        video_id = mock_transport.add_fake_video(
            "Sparring", metadata=[{"key": "round", "value": "3"}]
        )["videoId"]

        video = video_client.get(video_id)

        assert video.video_id == video_id
        assert video.title == "Sparring"
        assert video.metadata == {"round": "3"}

    def test_get_unknown_raises(self, video_client):
        with pytest.raises(TransportError) as exc_info:
            video_client.get("vi-missing")

        assert exc_info.value.status_code == 404
        assert exc_info.value.kind is ErrorKind.TRANSPORT

    def test_search_walks_all_pages(self, video_client, mock_transport):
        for i in range(5):
            mock_transport.add_fake_video(f"Video {i}")

        videos = video_client.search({"pageSize": 2})

        assert [v.title for v in videos] == [f"Video {i}" for i in range(5)]
        assert len(mock_transport.request_history) == 3

    def test_search_single_page(self, video_client, mock_transport):
        for i in range(5):
            mock_transport.add_fake_video(f"Video {i}")

        videos = video_client.search({"pageSize": 2, "currentPage": 3})

        assert [v.title for v in videos] == ["Video 4"]

    def test_search_empty(self, video_client):
        assert video_client.search() == []

    def test_search_with_callback(self, video_client, mock_transport):
        mock_transport.add_fake_video("One")
        mock_transport.add_fake_video("Two")
        seen = []

        result = video_client.search(callback=lambda video: seen.append(video.title))

        assert result is None
        assert seen == ["One", "Two"]

    def test_search_sends_filters(self, video_client, mock_transport):
        video_client.search({"tags": ["boxing"], "metadata": {"coach": "Ann"}})

        params = mock_transport.request_history[0]["params"]
        assert ("tags[]", "boxing") in params
        assert ("metadata[coach]", "Ann") in params


# =============================================================================
# WRITE OPERATIONS
# =============================================================================


@pytest.mark.unit
class TestCreateUpdateDelete:
    """Test record changes"""

    def test_create(self, video_client, mock_transport):
        video = video_client.create("Warmup", {"description": "Morning", "tags": ["a"]})

        assert video.title == "Warmup"
        assert video.description == "Morning"
        assert video.video_id in mock_transport.videos
        assert last_body(mock_transport) == {
            "title": "Warmup",
            "description": "Morning",
            "tags": ["a"],
        }

    def test_title_argument_wins(self, video_client, mock_transport):
        video_client.create("Argument", {"title": "Property"})

        assert last_body(mock_transport)["title"] == "Argument"

    def test_create_rejected(self, video_client):
        with pytest.raises(TransportError) as exc_info:
            video_client.create("")

        assert exc_info.value.status_code == 400

    def test_update(self, video_client, mock_transport):
        video_id = mock_transport.add_fake_video("Before")["videoId"]

        video = video_client.update(video_id, {"title": "After", "tags": ["x"]})

        assert video.title == "After"
        assert video.tags == ["x"]
        assert mock_transport.request_history[-1]["method"] == "PATCH"

    def test_delete(self, video_client, mock_transport):
        video_id = mock_transport.add_fake_video("Gone")["videoId"]

        assert video_client.delete(video_id) is None
        assert video_id not in mock_transport.videos

    def test_delete_unknown_raises(self, video_client):
        with pytest.raises(TransportError) as exc_info:
            video_client.delete("vi-missing")

        assert exc_info.value.status_code == 404


# =============================================================================
# PUBLICATION
# =============================================================================


@pytest.mark.unit
class TestPublication:
    """Test publish, schedule and unschedule"""

    def test_schedule_aware_datetime(self, video_client, mock_transport):
        video_id = mock_transport.add_fake_video("Later")["videoId"]
        when = datetime(2025, 10, 24, 18, 0, tzinfo=timezone(timedelta(hours=2)))

        video = video_client.schedule(video_id, when)

        assert last_body(mock_transport) == {"scheduledAt": "2025-10-24T18:00:00+02:00"}
        assert video.published_at == when

    def test_schedule_string(self, video_client, mock_transport):
        video_id = mock_transport.add_fake_video("Later")["videoId"]

        video_client.schedule(video_id, "2025-10-24T18:00:00+00:00")

        assert last_body(mock_transport) == {"scheduledAt": "2025-10-24T18:00:00+00:00"}

    def test_schedule_string_with_z(self, video_client, mock_transport):
        video_id = mock_transport.add_fake_video("Later")["videoId"]

        video = video_client.schedule(video_id, "2025-10-24T18:00:00Z")

        assert last_body(mock_transport) == {"scheduledAt": "2025-10-24T18:00:00+00:00"}
        assert video.published_at == datetime(2025, 10, 24, 18, 0, tzinfo=timezone.utc)

    def test_schedule_naive_is_local_time(self, video_client, mock_transport):
        video_id = mock_transport.add_fake_video("Later")["videoId"]
        naive = datetime(2025, 10, 24, 18, 0, 30, 123456)

        video_client.schedule(video_id, naive)

        sent = datetime.fromisoformat(last_body(mock_transport)["scheduledAt"])
        assert sent.tzinfo is not None
        assert sent == naive.replace(microsecond=0).astimezone()

    def test_publish_now(self, video_client, mock_transport):
        video_id = mock_transport.add_fake_video("Now")["videoId"]
        before = datetime.now(timezone.utc).replace(microsecond=0)

        video = video_client.publish(video_id)

        assert video.is_published is True
        assert video.published_at >= before

    def test_unschedule(self, video_client, mock_transport):
        video_id = mock_transport.add_fake_video(
            "Later", publishedAt="2025-10-24T18:00:00+00:00"
        )["videoId"]

        video = video_client.unschedule(video_id)

        assert last_body(mock_transport) == {"scheduledAt": None}
        assert video.is_published is False

    def test_schedule_unknown_video_raises(self, video_client):
        with pytest.raises(TransportError):
            video_client.schedule("vi-missing", "2025-10-24T18:00:00+00:00")
