"""
Captions Controller

Client for caption tracks attached to videos.
Failed requests return None and leave the details in last_error.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

from vidhost.constants import UPLOAD_FIELD_NAME
from vidhost.errors import EmptySource
from vidhost.interfaces.transport_interface import (
    ApiResponse,
    FileField,
    TransportInterface,
)
from vidhost.models.video import Caption
from vidhost.upload.orchestrator import check_readable
from vidhost.utils.casting import CaptionCaster, decode_json


class CaptionClient:
    """
    Client for /videos/{id}/captions.

    Usage:
        captions = CaptionClient(transport)
        caption = captions.upload("subs.vtt", {"videoId": "vi123", "language": "en"})
        if caption is None:
            print(captions.last_error)
    """

    def __init__(self, transport: TransportInterface):
        self.logger = logging.getLogger(__name__)
        self.transport = transport
        self.caster = CaptionCaster()

        # Details of the most recent failed request
        self.last_error: Optional[Dict[str, Any]] = None

    def get(self, video_id: str, language: str) -> Optional[Caption]:
        """Fetch one caption track, or None on failure"""
        response = self.transport.get(f"/videos/{video_id}/captions/{language}")
        if not self._check(response):
            return None
        return self.caster.unmarshal(response)

    def get_all(self, video_id: str) -> Optional[List[Caption]]:
        """Fetch every caption track of a video, or None on failure"""
        response = self.transport.get(f"/videos/{video_id}/captions")
        if not self._check(response):
            return None
        return self.caster.cast_all(decode_json(response))

    def upload(self, source: str, properties: Dict[str, Any]) -> Optional[Caption]:
        """
        Upload a caption file.

        Args:
            source: Path to the caption file (e.g. WebVTT)
            properties: Must contain "videoId" and "language"

        Returns:
            Caption, or None if the server rejected the upload

        Raises:
            SourceUnreadable: If source cannot be read
            ValueError: If videoId or language is missing
            EmptySource: If source is empty
        """
        source = os.fspath(source)
        check_readable(source)

        for key in ("videoId", "language"):
            if key not in properties:
                raise ValueError(f'"{key}" property must be set for upload caption.')

        video_id = properties["videoId"]
        language = properties["language"]

        with open(source, "rb") as stream:
            if os.fstat(stream.fileno()).st_size <= 0:
                raise EmptySource(f"'{source}' is empty.")

            response = self.transport.submit(
                f"/videos/{video_id}/captions/{language}",
                {UPLOAD_FIELD_NAME: FileField(os.path.basename(source), stream)},
            )

        if not self._check(response):
            return None

        self.logger.info(f"Caption {language} uploaded for video {video_id}")
        return self.caster.unmarshal(response)

    def update_default(
        self, video_id: str, language: str, is_default: bool
    ) -> Optional[Caption]:
        """Mark a caption track as the default one (or not)"""
        response = self.transport.patch(
            f"/videos/{video_id}/captions/{language}",
            {},
            json.dumps({"default": is_default}),
        )
        if not self._check(response):
            return None
        return self.caster.unmarshal(response)

    def delete(self, video_id: str, language: str) -> Optional[int]:
        """
        Delete a caption track.

        Returns:
            Response status code, or None on failure
        """
        response = self.transport.delete(f"/videos/{video_id}/captions/{language}")
        if not self._check(response):
            return None
        return response.status_code

    def _check(self, response: ApiResponse) -> bool:
        """Record failures in last_error; True if the response succeeded"""
        if response.is_successful():
            return True

        self.last_error = {
            "status": response.status_code,
            "message": self._error_message(response),
        }
        self.logger.warning(
            f"Caption request failed (status: {response.status_code}): "
            f"{self.last_error['message']}"
        )
        return False

    @staticmethod
    def _error_message(response: ApiResponse) -> str:
        try:
            payload = response.json()
        except ValueError:
            return response.text
        if isinstance(payload, dict):
            return str(payload.get("title") or payload.get("message") or payload)
        return response.text
