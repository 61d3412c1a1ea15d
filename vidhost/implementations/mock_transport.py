"""
Mock Transport Implementation

Simulated video-hosting API for testing without network access.
Similar to MockUploader/MockStorage in the other modules.
"""

import json
import logging
import re
from collections import deque
from typing import Any, Deque, Dict, List, Optional, Tuple
from urllib.parse import parse_qsl
from uuid import uuid4

from vidhost.constants import DEFAULT_CURRENT_PAGE, DEFAULT_PAGE_SIZE
from vidhost.errors import TransportError
from vidhost.interfaces.transport_interface import (
    ApiResponse,
    FileField,
    TransportInterface,
)

VIDEO_PATH = re.compile(r"^/videos/(?P<video_id>[^/?]+)$")
SOURCE_PATH = re.compile(r"^/videos/(?P<video_id>[^/]+)/source$")
CAPTIONS_PATH = re.compile(r"^/videos/(?P<video_id>[^/]+)/captions$")
CAPTION_PATH = re.compile(
    r"^/videos/(?P<video_id>[^/]+)/captions/(?P<language>[^/]+)$"
)
CONTENT_RANGE = re.compile(r"^bytes (?P<start>\d+)-(?P<end>\d+)/(?P<total>\d+)$")


class MockTransport(TransportInterface):
    """
    In-memory video service.

    Useful for:
    - Unit tests
    - Development without an API key
    - Simulating failing upload legs (see queue_submit_outcome)
    """

    def __init__(self, base_url: str = "https://mock.api.video"):
        """
        Initialize mock transport.

        Args:
            base_url: Base URL used when building asset links

        Example:
            transport = MockTransport()
            transport.queue_submit_outcome(None)   # chunk 1 handled normally
            transport.queue_submit_outcome(404)    # chunk 2 raises TransportError(404)
        """
        self.logger = logging.getLogger(__name__)
        self.base_url = base_url

        self.videos: Dict[str, dict] = {}
        self.captions: Dict[Tuple[str, str], dict] = {}
        self.uploaded_bytes: Dict[str, int] = {}

        # Track requests for testing
        self.request_history: List[dict] = []
        self._submit_outcomes: Deque[Tuple[Optional[int], bool]] = deque()

        self.logger.info("Mock Transport initialized")

    # =========================================================================
    # TRANSPORT INTERFACE
    # =========================================================================

    def get(self, path: str, params: Optional[Any] = None) -> ApiResponse:
        path, query = self._split_query(path, params)
        self._record("GET", path, params=query)

        if path == "/videos":
            return self._list_videos(query)

        match = VIDEO_PATH.match(path)
        if match:
            video = self.videos.get(match.group("video_id"))
            return self._json(200, video) if video else self._not_found(path)

        match = CAPTIONS_PATH.match(path)
        if match:
            video_id = match.group("video_id")
            if video_id not in self.videos:
                return self._not_found(path)
            items = [c for (vid, _), c in self.captions.items() if vid == video_id]
            return self._json(200, items)

        match = CAPTION_PATH.match(path)
        if match:
            caption = self.captions.get(match.group("video_id", "language"))
            return self._json(200, caption) if caption else self._not_found(path)

        return self._not_found(path)

    def post(
        self,
        path: str,
        headers: Optional[Dict[str, str]] = None,
        body: Optional[str] = None,
    ) -> ApiResponse:
        self._record("POST", path, headers=headers, body=body)

        if path != "/videos":
            return self._not_found(path)

        payload = json.loads(body or "{}")
        if not payload.get("title"):
            return self._json(400, {"title": "title is required"})

        video_id = f"vi{uuid4().hex[:20]}"
        video = {
            "videoId": video_id,
            "title": payload["title"],
            "description": payload.get("description", ""),
            "tags": payload.get("tags", []),
            "metadata": payload.get("metadata", []),
            "source": {"uri": f"/videos/{video_id}/source"},
            "assets": {},
            "publishedAt": None,
        }
        self.videos[video_id] = video
        self.logger.debug(f"[MOCK] Created video {video_id}")
        return self._json(201, video)

    def patch(
        self,
        path: str,
        headers: Optional[Dict[str, str]] = None,
        body: Optional[str] = None,
    ) -> ApiResponse:
        self._record("PATCH", path, headers=headers, body=body)
        payload = json.loads(body or "{}")

        match = VIDEO_PATH.match(path)
        if match:
            video = self.videos.get(match.group("video_id"))
            if video is None:
                return self._not_found(path)
            for key, value in payload.items():
                if key == "scheduledAt":
                    video["scheduledAt"] = value
                    video["publishedAt"] = value
                elif key != "videoId":
                    video[key] = value
            return self._json(200, video)

        match = CAPTION_PATH.match(path)
        if match:
            caption = self.captions.get(match.group("video_id", "language"))
            if caption is None:
                return self._not_found(path)
            if "default" in payload:
                caption["default"] = bool(payload["default"])
            return self._json(200, caption)

        return self._not_found(path)

    def delete(self, path: str) -> ApiResponse:
        self._record("DELETE", path)

        match = VIDEO_PATH.match(path)
        if match:
            if self.videos.pop(match.group("video_id"), None) is None:
                return self._not_found(path)
            return ApiResponse(status_code=204)

        match = CAPTION_PATH.match(path)
        if match:
            if self.captions.pop(match.group("video_id", "language"), None) is None:
                return self._not_found(path)
            return ApiResponse(status_code=204)

        return self._not_found(path)

    def submit(
        self,
        path: str,
        fields: Dict[str, FileField],
        method: str = "POST",
        headers: Optional[Dict[str, str]] = None,
    ) -> ApiResponse:
        headers = dict(headers or {})
        sizes = {name: len(self._read(part)) for name, part in fields.items()}
        self._record(method, path, headers=headers, fields=sizes)

        if self._submit_outcomes:
            status_code, raise_error = self._submit_outcomes.popleft()
            if status_code is not None:
                self.logger.debug(f"[MOCK] Scripted status {status_code} for {path}")
                if raise_error:
                    raise TransportError(
                        f"Simulated status {status_code}", status_code=status_code
                    )
                return self._json(status_code, {"status": status_code})

        match = SOURCE_PATH.match(path)
        if match:
            return self._receive_source(match.group("video_id"), sizes, headers)

        match = CAPTION_PATH.match(path)
        if match:
            video_id, language = match.group("video_id", "language")
            if video_id not in self.videos:
                return self._not_found(path)
            caption = {
                "uri": f"/videos/{video_id}/captions/{language}",
                "src": f"{self.base_url}/vod/{video_id}/captions/{language}.vtt",
                "srclang": language,
                "default": False,
            }
            self.captions[(video_id, language)] = caption
            return self._json(200, caption)

        return self._not_found(path)

    def is_available(self) -> bool:
        """Mock transport is always available"""
        return True

    # =========================================================================
    # SIMULATION
    # =========================================================================

    def _receive_source(
        self, video_id: str, sizes: Dict[str, int], headers: Dict[str, str]
    ) -> ApiResponse:
        video = self.videos.get(video_id)
        if video is None:
            return self._not_found(f"/videos/{video_id}/source")

        received = sum(sizes.values())
        content_range = headers.get("Content-Range")
        if content_range:
            match = CONTENT_RANGE.match(content_range)
            if match is None:
                return self._json(400, {"title": "invalid Content-Range"})
            start, end, total = (int(v) for v in match.group("start", "end", "total"))
            if end - start + 1 != received:
                return self._json(400, {"title": "Content-Range does not match body"})
            self.uploaded_bytes[video_id] = end + 1
            complete = end + 1 == total
        else:
            self.uploaded_bytes[video_id] = received
            complete = True

        video["source"] = {
            "type": "upload",
            "uri": f"/videos/{video_id}/source",
            "receivedBytes": self.uploaded_bytes[video_id],
        }
        if complete:
            video["assets"] = {
                "player": f"{self.base_url}/vod/{video_id}/player",
                "hls": f"{self.base_url}/vod/{video_id}/hls/manifest.m3u8",
            }
        return self._json(201, video)

    def _list_videos(self, query: List[Tuple[str, str]]) -> ApiResponse:
        params = dict(query)
        page_size = int(params.get("pageSize", DEFAULT_PAGE_SIZE))
        current_page = int(params.get("currentPage", DEFAULT_CURRENT_PAGE))

        items = list(self.videos.values())
        pages_total = max(1, -(-len(items) // page_size))
        start = (current_page - 1) * page_size

        return self._json(
            200,
            {
                "data": items[start:start + page_size],
                "pagination": {
                    "currentPage": current_page,
                    "pageSize": page_size,
                    "pagesTotal": pages_total,
                    "itemsTotal": len(items),
                },
            },
        )

    # =========================================================================
    # HELPERS
    # =========================================================================

    @staticmethod
    def _read(part: FileField) -> bytes:
        if isinstance(part.content, bytes):
            return part.content
        return part.content.read()

    @staticmethod
    def _split_query(
        path: str, params: Optional[Any]
    ) -> Tuple[str, List[Tuple[str, str]]]:
        query: List[Tuple[str, str]] = []
        if "?" in path:
            path, raw = path.split("?", 1)
            query.extend(parse_qsl(raw))
        if isinstance(params, dict):
            query.extend((str(k), str(v)) for k, v in params.items())
        elif params:
            query.extend((str(k), str(v)) for k, v in params)
        return path, query

    @staticmethod
    def _json(status_code: int, payload: Any) -> ApiResponse:
        return ApiResponse(
            status_code=status_code,
            content=json.dumps(payload).encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )

    def _not_found(self, path: str) -> ApiResponse:
        return self._json(404, {"title": f"{path} not found", "status": 404})

    def _record(self, method: str, path: str, **details: Any) -> None:
        entry = {"method": method, "path": path}
        entry.update(details)
        self.request_history.append(entry)

    # =========================================================================
    # TESTING HELPER METHODS
    # =========================================================================

    def queue_submit_outcome(
        self, status_code: Optional[int], raise_error: bool = True
    ) -> None:
        """
        Script the result of the next unscripted submit call.

        Args:
            status_code: Status to answer with, or None to handle normally
            raise_error: Raise TransportError instead of returning a response
        """
        self._submit_outcomes.append((status_code, raise_error))

    def get_submissions(self) -> List[dict]:
        """All multipart submissions, in order"""
        return [
            entry for entry in self.request_history if "fields" in entry
        ]

    def add_fake_video(self, title: str, **fields: Any) -> dict:
        """Insert a video record directly, bypassing the request history"""
        video_id = fields.pop("videoId", f"vi{uuid4().hex[:20]}")
        video = {
            "videoId": video_id,
            "title": title,
            "description": "",
            "tags": [],
            "metadata": [],
            "source": {},
            "assets": {},
            "publishedAt": None,
        }
        video.update(fields)
        self.videos[video_id] = video
        return video

    def clear_history(self) -> None:
        """Clear request history"""
        self.request_history.clear()
        self.logger.debug("[MOCK] Request history cleared")
