"""
Upload Package

Chunked video source upload: range planning, request building,
outcome classification and the orchestrating loop.
"""

from vidhost.upload.chunker import ByteRangeChunker, plan_ranges
from vidhost.upload.classification import classify_error, classify_response
from vidhost.upload.orchestrator import UploadOrchestrator
from vidhost.upload.request_builder import (
    ChunkUploadRequestBuilder,
    format_content_range,
)

__all__ = [
    "ByteRangeChunker",
    "ChunkUploadRequestBuilder",
    "UploadOrchestrator",
    "classify_error",
    "classify_response",
    "format_content_range",
    "plan_ranges",
]
