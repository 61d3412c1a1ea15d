"""
Controllers Package

High-level clients for the API resources.
"""

from vidhost.controllers.captions_controller import CaptionClient
from vidhost.controllers.videos_controller import VideoClient

__all__ = [
    "CaptionClient",
    "VideoClient",
]
