"""
Videos Controller

High-level client for video records.
Maps each operation onto the transport and casts the responses.

This follows the same pattern as the upload controller:
- Clean, simple API for callers
- Upload complexity delegated to UploadOrchestrator
- Proper error handling and logging
"""

import json
import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Union

from vidhost.constants import DEFAULT_CHUNK_SIZE
from vidhost.errors import TransportError
from vidhost.interfaces.transport_interface import ApiResponse, TransportInterface
from vidhost.models.video import Video
from vidhost.upload.orchestrator import ProgressCallback, UploadOrchestrator
from vidhost.utils.casting import VideoRecordCaster, from_iso
from vidhost.utils.pagination import iterate_pages


class VideoClient:
    """
    Client for the /videos resource.

    This class:
    - Creates, reads, searches, updates and deletes video records
    - Publishes and schedules videos
    - Uploads video sources (chunked above chunk_size)

    Usage:
        client = VideoClient(transport)

        video = client.upload("/path/to/clip.mp4", {"title": "Clip"})
        client.publish(video.video_id)
    """

    def __init__(
        self,
        transport: TransportInterface,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        """
        Initialize video client.

        Args:
            transport: TransportInterface implementation
            chunk_size: Upload chunk size in bytes (files up to this size
                are sent in a single request)
        """
        self.logger = logging.getLogger(__name__)
        self.transport = transport
        self.chunk_size = chunk_size
        self.caster = VideoRecordCaster()
        self.orchestrator = UploadOrchestrator(
            transport, self.create, chunk_size, caster=self.caster
        )

        if not self.transport.is_available():
            self.logger.warning(
                "Video client initialized but transport not available. "
                "Check API key and network connection.",
            )

    def get(self, video_id: str) -> Video:
        """
        Fetch one video.

        Raises:
            TransportError: If the request fails
        """
        return self._unmarshal(
            self.transport.get(f"/videos/{video_id}"), f"Get video {video_id}"
        )

    def search(
        self,
        parameters: Optional[Dict[str, Any]] = None,
        callback: Optional[Callable[[Video], None]] = None,
    ) -> Optional[List[Video]]:
        """
        Search videos.

        Available parameters:
            - currentPage (int): fetch only this page
            - pageSize (int): items per page (default 100)
            - videoIds (list): limit the search to these ids
            - tags (list)
            - metadata (dict)

        Without currentPage every page is fetched.

        Args:
            parameters: Search filters and pagination
            callback: Called for each Video instead of collecting them

        Returns:
            List of videos, or None when a callback is given

        Example:
            for video in client.search({"tags": ["training"]}):
                print(video.title)
        """
        items = iterate_pages(self.transport, "/videos", parameters or {})

        if callback is None:
            return [self.caster.cast(item) for item in items]

        for item in items:
            callback(self.caster.cast(item))
        return None

    def create(self, title: str, properties: Optional[Dict[str, Any]] = None) -> Video:
        """
        Create a video record without a source.

        Args:
            title: Video title (overrides any title in properties)
            properties: Other fields (description, tags, metadata, ...)
        """
        payload = dict(properties or {})
        payload["title"] = title

        video = self._unmarshal(
            self.transport.post("/videos", {}, json.dumps(payload)),
            "Create video",
        )
        self.logger.info(f"Video created: {video.video_id}")
        return video

    def upload(
        self,
        source: str,
        properties: Optional[Dict[str, Any]] = None,
        video_id: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> Optional[Video]:
        """
        Upload a file as a video source.

        Creates the record first when video_id is None, using
        properties["title"] or the file name as title.

        Returns:
            The uploaded Video, or None if no range produced a final
            representation

        Raises:
            SourceUnreadable: If source cannot be read
            EmptySource: If source is empty
            TransportError: If a request fails (a created record is kept)

        Example:
            video = client.upload("/recordings/session.mp4")
        """
        self.orchestrator.chunk_size = self.chunk_size
        return self.orchestrator.upload(source, properties, video_id, on_progress)

    def update(self, video_id: str, properties: Dict[str, Any]) -> Video:
        """Update fields of a video"""
        return self._patch(video_id, properties, f"Update video {video_id}")

    def delete(self, video_id: str) -> None:
        """
        Delete a video.

        Raises:
            TransportError: If the request fails
        """
        response = self.transport.delete(f"/videos/{video_id}")
        if not response.is_successful():
            raise TransportError.from_response(response, f"Delete video {video_id}")
        self.logger.info(f"Video deleted: {video_id}")

    def publish(self, video_id: str) -> Video:
        """Publish a video now"""
        return self.schedule(video_id, datetime.now().astimezone())

    def schedule(self, video_id: str, scheduled_at: Union[str, datetime]) -> Video:
        """
        Schedule publication of a video.

        Args:
            video_id: Video to schedule
            scheduled_at: datetime, or ISO-8601 string; naive values are
                taken as local time

        Example:
            client.schedule("vi123", "2025-10-24T18:00:00+02:00")
        """
        if not isinstance(scheduled_at, datetime):
            scheduled_at = from_iso(scheduled_at)
        if scheduled_at.tzinfo is None:
            scheduled_at = scheduled_at.astimezone()

        return self._patch(
            video_id,
            {"scheduledAt": scheduled_at.isoformat(timespec="seconds")},
            f"Schedule video {video_id}",
        )

    def unschedule(self, video_id: str) -> Video:
        """Remove a scheduled publication"""
        return self._patch(
            video_id, {"scheduledAt": None}, f"Unschedule video {video_id}"
        )

    def _patch(self, video_id: str, payload: Dict[str, Any], action: str) -> Video:
        return self._unmarshal(
            self.transport.patch(f"/videos/{video_id}", {}, json.dumps(payload)),
            action,
        )

    def _unmarshal(self, response: ApiResponse, action: str) -> Video:
        if not response.is_successful():
            self.logger.error(f"{action} failed (status: {response.status_code})")
            raise TransportError.from_response(response, action)
        return self.caster.unmarshal(response)
