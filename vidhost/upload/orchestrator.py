"""
Upload Orchestrator

Drives a video source upload: creates the record when needed, sends small
files in one request and larger ones as sequential byte ranges.

Chunk loop:
1. Read the next range into a transient in-memory buffer
2. Submit it with Content-Range
3. Classify the outcome: SUCCESS records the returned video, CONTINUE moves
   on, FATAL aborts the whole upload
4. Close the buffer, whatever happened
"""

import io
import logging
import os
from typing import Any, BinaryIO, Callable, Dict, Optional

from vidhost.constants import PROGRESS_LOG_STEP, ChunkOutcome
from vidhost.errors import EmptySource, SourceUnreadable, TransportError
from vidhost.interfaces.transport_interface import (
    ApiResponse,
    TransportInterface,
    UploadRequest,
)
from vidhost.models.upload import UploadChunk, UploadSession
from vidhost.models.video import Video
from vidhost.upload.chunker import ByteRangeChunker
from vidhost.upload.classification import classify_error, classify_response
from vidhost.upload.request_builder import ChunkUploadRequestBuilder
from vidhost.utils.casting import VideoRecordCaster

# Creates a video record: (title, properties) -> Video
CreateVideo = Callable[[str, Dict[str, Any]], Video]

# Progress callback: (bytes_copied, total_bytes) -> None
ProgressCallback = Callable[[int, int], None]


def check_readable(source: str) -> None:
    """
    Check that source is a readable regular file.

    Raises:
        SourceUnreadable: If it is missing, not a file or not readable
    """
    if not os.path.isfile(source) or not os.access(source, os.R_OK):
        raise SourceUnreadable(f"'{source}' must be a readable source file.")


class UploadOrchestrator:
    """
    Uploads a local file as the source of a video record.

    Usage:
        orchestrator = UploadOrchestrator(transport, client.create, chunk_size)
        video = orchestrator.upload("/path/to/clip.mp4", {"title": "Clip"})
    """

    def __init__(
        self,
        transport: TransportInterface,
        create_video: CreateVideo,
        chunk_size: int,
        caster: Optional[VideoRecordCaster] = None,
        builder: Optional[ChunkUploadRequestBuilder] = None,
    ):
        """
        Initialize orchestrator.

        Args:
            transport: Transport used for the upload requests
            create_video: Collaborator creating a record when no id is given
            chunk_size: Largest single request, and the size of each range
            caster: Response caster (optional)
            builder: Request builder (optional)
        """
        self.logger = logging.getLogger(__name__)
        self.transport = transport
        self.create_video = create_video
        self.chunk_size = chunk_size
        self.caster = caster or VideoRecordCaster()
        self.builder = builder or ChunkUploadRequestBuilder()

        # Most recent session, kept for inspection after upload returns
        self.last_session: Optional[UploadSession] = None

    def upload(
        self,
        source: str,
        properties: Optional[Dict[str, Any]] = None,
        video_id: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> Optional[Video]:
        """
        Upload a file as a video source.

        Args:
            source: Path to the file to upload
            properties: Properties for the created record (when video_id is None)
            video_id: Existing record to attach the source to (optional)
            on_progress: Called with (bytes_copied, total) after each range

        Returns:
            Video from the last successful response, or None if every range
            was answered with a non-fatal continue status

        Raises:
            SourceUnreadable: If source cannot be read
            EmptySource: If source is empty
            TransportError: On the first fatal response
            MalformedResponse: If a response cannot be cast
        """
        source = os.fspath(source)
        check_readable(source)
        filename = os.path.basename(source)

        if video_id is None:
            properties = dict(properties or {})
            properties.setdefault("title", filename)
            video_id = self.create_video(properties["title"], properties).video_id
            self.logger.info(f"Created video {video_id} for {source}")

        path = f"/videos/{video_id}/source"

        with open(source, "rb") as stream:
            length = os.fstat(stream.fileno()).st_size
            if length <= 0:
                raise EmptySource(f"'{source}' is empty.")

            self.logger.info(
                f"Starting upload: {source} ({length} bytes) -> video {video_id}"
            )

            if length <= self.chunk_size:
                return self._upload_single(path, filename, stream, on_progress, length)

            session = UploadSession(
                video_id=video_id,
                source_length=length,
                chunk_size=self.chunk_size,
            )
            self.last_session = session
            return self._upload_chunks(session, path, filename, stream, on_progress)

    def _upload_single(
        self,
        path: str,
        filename: str,
        stream: BinaryIO,
        on_progress: Optional[ProgressCallback],
        length: int,
    ) -> Video:
        """Send the whole file in one request without range headers"""
        self.last_session = None
        request = self.builder.build_single(path, filename, stream)
        response = self._submit(request)

        if not response.is_successful():
            self.logger.error(f"Upload to {path} failed: {response.status_code}")
            raise TransportError.from_response(response, f"Upload to {path}")

        video = self.caster.unmarshal(response)
        if on_progress:
            on_progress(length, length)

        self.logger.info(f"✅ Upload complete: video {video.video_id}")
        return video

    def _upload_chunks(
        self,
        session: UploadSession,
        path: str,
        filename: str,
        stream: BinaryIO,
        on_progress: Optional[ProgressCallback],
    ) -> Optional[Video]:
        chunker = ByteRangeChunker(stream, session.source_length, session.chunk_size)
        last_logged = 0

        self.logger.info(
            f"Uploading in {chunker.chunk_count} chunks of "
            f"up to {session.chunk_size} bytes"
        )

        for chunk in chunker:
            buffer = io.BytesIO(chunk.data)
            try:
                outcome = self._submit_chunk(session, chunk, path, filename, buffer)
            finally:
                buffer.close()

            session.record_chunk(chunk.end)
            self.logger.debug(
                f"Chunk {session.chunks_submitted}/{chunker.chunk_count} "
                f"[{chunk.offset}, {chunk.end}) -> {outcome.value}"
            )

            progress = int(session.progress * 100)
            if progress >= last_logged + PROGRESS_LOG_STEP:
                self.logger.info(f"Upload progress: {progress}%")
                last_logged = progress

            if on_progress:
                on_progress(session.bytes_copied, session.source_length)

        if session.last_response is None:
            self.logger.warning(
                f"Upload of video {session.video_id} finished without "
                f"a final video representation"
            )
        else:
            self.logger.info(f"✅ Upload complete: video {session.video_id}")

        return session.last_response

    def _submit_chunk(
        self,
        session: UploadSession,
        chunk: UploadChunk,
        path: str,
        filename: str,
        buffer: io.BytesIO,
    ) -> ChunkOutcome:
        """
        Submit one range and update the session.

        Raises:
            TransportError: If the outcome is fatal
        """
        request = self.builder.build(chunk, path, filename, buffer)

        try:
            response = self._submit(request)
        except TransportError as e:
            if classify_error(e.status_code) is ChunkOutcome.FATAL:
                self._log_abort(session, chunk, e.status_code)
                raise
            return ChunkOutcome.CONTINUE

        outcome = classify_response(response)
        if outcome is ChunkOutcome.SUCCESS:
            session.last_response = self.caster.unmarshal(response)
        elif outcome is ChunkOutcome.FATAL:
            self._log_abort(session, chunk, response.status_code)
            raise TransportError.from_response(
                response, f"Chunk {request.headers['Content-Range']} upload"
            )
        return outcome

    def _submit(self, request: UploadRequest) -> ApiResponse:
        return self.transport.submit(
            request.path,
            request.fields,
            request.method,
            request.headers,
        )

    def _log_abort(
        self, session: UploadSession, chunk: UploadChunk, status_code: Optional[int]
    ) -> None:
        self.logger.error(
            f"❌ Upload of video {session.video_id} aborted at byte {chunk.offset} "
            f"(status: {status_code}); the record keeps an incomplete source"
        )
