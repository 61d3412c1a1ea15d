"""
Chunk Upload Request Builder Tests
"""

import io

import pytest

from vidhost.models.upload import UploadChunk
from vidhost.upload.request_builder import (
    ChunkUploadRequestBuilder,
    format_content_range,
)

MIB = 1024 * 1024
TOTAL = 150 * MIB


@pytest.mark.unit
class TestContentRange:
    """Test Content-Range formatting"""

    @pytest.mark.parametrize(
        "offset,end,expected",
        [
            (0, 64 * MIB, "bytes 0-67108863/157286400"),
            (64 * MIB, 128 * MIB, "bytes 67108864-134217727/157286400"),
            (128 * MIB, TOTAL, "bytes 134217728-157286399/157286400"),
        ],
    )
    def test_inclusive_end(self, offset, end, expected):
        assert format_content_range(offset, end, TOTAL) == expected


@pytest.mark.unit
class TestChunkUploadRequestBuilder:
    """Test request construction"""

    def test_build_chunk_request(self):
        chunk = UploadChunk(offset=10, end=20, total_length=25, data=bytes(10))
        buffer = io.BytesIO(chunk.data)

        request = ChunkUploadRequestBuilder().build(
            chunk, "/videos/vi1/source", "clip.mp4", buffer
        )

        assert request.path == "/videos/vi1/source"
        assert request.method == "POST"
        assert request.headers == {"Content-Range": "bytes 10-19/25", "Expect": ""}
        assert request.fields["file"].filename == "clip.mp4"
        assert request.fields["file"].content is buffer

    def test_build_single_request_has_no_range_headers(self):
        stream = io.BytesIO(b"data")

        request = ChunkUploadRequestBuilder().build_single(
            "/videos/vi1/source", "clip.mp4", stream
        )

        assert "Content-Range" not in request.headers
        assert "Expect" not in request.headers
        assert request.fields["file"].content is stream
