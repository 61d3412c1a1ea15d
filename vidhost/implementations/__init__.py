"""
Implementations Package

Concrete transport implementations.
"""

from vidhost.implementations.http_transport import HttpTransport
from vidhost.implementations.mock_transport import MockTransport

__all__ = [
    "HttpTransport",
    "MockTransport",
]
