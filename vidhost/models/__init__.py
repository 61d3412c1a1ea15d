"""
Models Package

Data structures returned by the client.
"""

from vidhost.models.upload import UploadChunk, UploadSession
from vidhost.models.video import Caption, Video

__all__ = [
    "Caption",
    "UploadChunk",
    "UploadSession",
    "Video",
]
