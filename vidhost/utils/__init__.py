"""
Utilities Package

Response casting and pagination helpers.
"""

from vidhost.utils.casting import CaptionCaster, VideoRecordCaster
from vidhost.utils.pagination import build_query, iterate_pages

__all__ = [
    "CaptionCaster",
    "VideoRecordCaster",
    "build_query",
    "iterate_pages",
]
