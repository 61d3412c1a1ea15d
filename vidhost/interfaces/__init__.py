"""
Interfaces Package

Abstract interfaces for transport implementations.
"""

from vidhost.interfaces.transport_interface import (
    ApiResponse,
    FileField,
    TransportInterface,
    UploadRequest,
)

__all__ = [
    "ApiResponse",
    "FileField",
    "TransportInterface",
    "UploadRequest",
]
