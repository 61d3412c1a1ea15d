"""
vidhost

Client library for a video-hosting API with chunked source uploads.

Public API:
    - VideoClient: Create, search, update, delete, publish and upload videos
    - CaptionClient: Manage caption tracks
    - Video / Caption: Returned records
    - create_client: Factory function

Usage:
    from vidhost import create_client

    client = create_client()
    video = client.upload("/path/to/video.mp4", {"title": "Session"})
    client.publish(video.video_id)
"""

from vidhost.constants import ChunkOutcome, ErrorKind
from vidhost.controllers.captions_controller import CaptionClient
from vidhost.controllers.videos_controller import VideoClient
from vidhost.errors import (
    AuthenticationError,
    EmptySource,
    InvalidSource,
    MalformedResponse,
    SourceUnreadable,
    TransportError,
    VideoClientError,
)
from vidhost.factory import ClientFactory, create_client
from vidhost.models.video import Caption, Video

# Public API
__all__ = [
    "AuthenticationError",
    "Caption",
    "CaptionClient",
    "ChunkOutcome",
    "ClientFactory",
    "EmptySource",
    "ErrorKind",
    "InvalidSource",
    "MalformedResponse",
    "SourceUnreadable",
    "TransportError",
    "Video",
    "VideoClient",
    "VideoClientError",
    "create_client",
]
