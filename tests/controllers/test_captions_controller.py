"""
Caption Client Tests
"""

import pytest

from vidhost.errors import EmptySource, SourceUnreadable
from vidhost.models.video import Caption


@pytest.fixture
def video_id(mock_transport):
    """Id of an existing video"""
    return mock_transport.add_fake_video("With captions")["videoId"]


@pytest.fixture
def vtt_file(tmp_path):
    """A small WebVTT caption file"""
    path = tmp_path / "subs.vtt"
    path.write_text("WEBVTT\n\n00:00.000 --> 00:01.000\nHello\n")
    return str(path)


@pytest.mark.unit
class TestCaptionUpload:
    """Test caption uploads"""

    def test_upload(self, caption_client, mock_transport, video_id, vtt_file):
        caption = caption_client.upload(vtt_file, {"videoId": video_id, "language": "en"})

        assert isinstance(caption, Caption)
        assert caption.srclang == "en"
        assert caption.uri == f"/videos/{video_id}/captions/en"
        assert caption.default is False

        submission = mock_transport.get_submissions()[0]
        assert submission["path"] == f"/videos/{video_id}/captions/en"
        assert submission["fields"]["file"] > 0

    @pytest.mark.parametrize("missing", ["videoId", "language"])
    def test_missing_property(self, caption_client, video_id, vtt_file, missing):
        properties = {"videoId": video_id, "language": "en"}
        del properties[missing]

        with pytest.raises(ValueError) as exc_info:
            caption_client.upload(vtt_file, properties)

        assert missing in str(exc_info.value)

    def test_missing_file(self, caption_client, video_id, tmp_path):
        with pytest.raises(SourceUnreadable):
            caption_client.upload(
                str(tmp_path / "none.vtt"), {"videoId": video_id, "language": "en"}
            )

    def test_empty_file(self, caption_client, mock_transport, video_id, tmp_path):
        path = tmp_path / "empty.vtt"
        path.write_bytes(b"")

        with pytest.raises(EmptySource):
            caption_client.upload(str(path), {"videoId": video_id, "language": "en"})

        assert mock_transport.get_submissions() == []

    def test_rejected_upload_sets_last_error(self, caption_client, vtt_file):
        result = caption_client.upload(vtt_file, {"videoId": "vi-missing", "language": "en"})

        assert result is None
        assert caption_client.last_error["status"] == 404
        assert "not found" in caption_client.last_error["message"]

    def test_scripted_failure(self, caption_client, mock_transport, video_id, vtt_file):
        mock_transport.queue_submit_outcome(500, raise_error=False)

        result = caption_client.upload(vtt_file, {"videoId": video_id, "language": "en"})

        assert result is None
        assert caption_client.last_error["status"] == 500


@pytest.mark.unit
class TestCaptionManagement:
    """Test reading, updating and deleting caption tracks"""

    def _upload(self, caption_client, video_id, vtt_file, language):
        return caption_client.upload(vtt_file, {"videoId": video_id, "language": language})

    def test_get(self, caption_client, video_id, vtt_file):
        self._upload(caption_client, video_id, vtt_file, "fr")

        caption = caption_client.get(video_id, "fr")

        assert caption.srclang == "fr"
        assert caption_client.last_error is None

    def test_get_missing(self, caption_client, video_id):
        assert caption_client.get(video_id, "de") is None
        assert caption_client.last_error["status"] == 404

    def test_get_all(self, caption_client, video_id, vtt_file):
        self._upload(caption_client, video_id, vtt_file, "en")
        self._upload(caption_client, video_id, vtt_file, "fr")

        captions = caption_client.get_all(video_id)

        assert sorted(c.srclang for c in captions) == ["en", "fr"]

    def test_get_all_unknown_video(self, caption_client):
        assert caption_client.get_all("vi-missing") is None

    def test_update_default(self, caption_client, video_id, vtt_file):
        self._upload(caption_client, video_id, vtt_file, "en")

        caption = caption_client.update_default(video_id, "en", True)

        assert caption.default is True

    def test_delete(self, caption_client, mock_transport, video_id, vtt_file):
        self._upload(caption_client, video_id, vtt_file, "en")

        assert caption_client.delete(video_id, "en") == 204
        assert mock_transport.captions == {}

    def test_delete_missing(self, caption_client, video_id):
        assert caption_client.delete(video_id, "en") is None
        assert caption_client.last_error["status"] == 404
