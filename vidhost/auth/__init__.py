"""
Authentication Package

API key authentication for the video-hosting API.
"""

from vidhost.auth.token_manager import TokenManager

__all__ = [
    "TokenManager",
]
