"""
Chunk Upload Request Builder

Builds the multipart requests used to upload a video source.
Pure: no I/O and no retries happen here.
"""

from typing import BinaryIO

from vidhost.constants import UPLOAD_FIELD_NAME
from vidhost.interfaces.transport_interface import FileField, UploadRequest
from vidhost.models.upload import UploadChunk


def format_content_range(offset: int, end: int, total_length: int) -> str:
    """
    Format a Content-Range value for [offset, end).

    The header uses an inclusive, 0-based last byte.

    Example:
        format_content_range(0, 67108864, 157286400)
        # "bytes 0-67108863/157286400"
    """
    return f"bytes {offset}-{end - 1}/{total_length}"


class ChunkUploadRequestBuilder:
    """
    Builds upload requests for the /videos/{id}/source endpoint.

    Usage:
        builder = ChunkUploadRequestBuilder()
        request = builder.build(chunk, "/videos/vi123/source", "clip.mp4", buffer)
        transport.submit(request.path, request.fields, request.method, request.headers)
    """

    def build(
        self,
        chunk: UploadChunk,
        path: str,
        filename: str,
        buffer: BinaryIO,
    ) -> UploadRequest:
        """
        Build the request for one byte range.

        Args:
            chunk: Range being uploaded
            path: Upload endpoint
            filename: Name reported for the file part
            buffer: Stream holding exactly the chunk bytes

        Returns:
            UploadRequest with Content-Range and an empty Expect header
        """
        return UploadRequest(
            path=path,
            fields={UPLOAD_FIELD_NAME: FileField(filename, buffer)},
            method="POST",
            headers={
                "Content-Range": format_content_range(
                    chunk.offset, chunk.end, chunk.total_length
                ),
                # Empty value suppresses 100-continue negotiation
                "Expect": "",
            },
        )

    def build_single(self, path: str, filename: str, stream: BinaryIO) -> UploadRequest:
        """Build a whole-file request without range headers"""
        return UploadRequest(
            path=path,
            fields={UPLOAD_FIELD_NAME: FileField(filename, stream)},
            method="POST",
        )
