"""
Client Test Configuration and Fixtures

This file contains pytest fixtures shared across the client tests.

To use pytest:
    pip install -e ".[test]"
    pytest tests/
"""

import pytest

from vidhost.controllers.captions_controller import CaptionClient
from vidhost.controllers.videos_controller import VideoClient
from vidhost.implementations.mock_transport import MockTransport

# Small chunk size so multi-chunk uploads need only a few bytes
TEST_CHUNK_SIZE = 10


# =============================================================================
# TRANSPORT FIXTURES
# =============================================================================


@pytest.fixture
def mock_transport():
    """
    Provide a fresh MockTransport instance for each test.

    Usage:
        def test_something(mock_transport):
            mock_transport.queue_submit_outcome(404)
    """
    return MockTransport()


# =============================================================================
# CLIENT FIXTURES
# =============================================================================


@pytest.fixture
def video_client(mock_transport):
    """
    Provide VideoClient over the mock transport with a 10-byte chunk size.

    Usage:
        def test_upload(video_client, make_source):
            video = video_client.upload(make_source(25))
    """
    return VideoClient(mock_transport, chunk_size=TEST_CHUNK_SIZE)


@pytest.fixture
def caption_client(mock_transport):
    """Provide CaptionClient over the mock transport"""
    return CaptionClient(mock_transport)


# =============================================================================
# HELPER FIXTURES
# =============================================================================


@pytest.fixture
def make_source(tmp_path):
    """
    Provide a helper writing a source file of a given size.

    Bytes follow a repeating 0-255 pattern so ranges can be told apart.

    Usage:
        def test_upload(make_source):
            path = make_source(25, name="clip.mp4")
    """

    def _make(size: int, name: str = "clip.mp4") -> str:
        path = tmp_path / name
        path.write_bytes(bytes(i % 256 for i in range(size)))
        return str(path)

    return _make


@pytest.fixture
def video_payload():
    """Provide a complete video payload as returned by the API"""
    return {
        "videoId": "vi4k0jvEUuaTdRAEjQ4Jfrgz",
        "title": "Maths video",
        "description": "An amazing video explaining the string theory",
        "tags": ["maths", "string theory", "video"],
        "metadata": [
            {"key": "Author", "value": "John Doe"},
            {"key": "Format", "value": "Tutorial"},
        ],
        "source": {"uri": "/videos/vi4k0jvEUuaTdRAEjQ4Jfrgz/source"},
        "assets": {"player": "https://embed.api.video/vod/vi4k0jvEUuaTdRAEjQ4Jfrgz"},
        "publishedAt": "2023-05-01T12:00:00+00:00",
    }


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Full integration tests")
