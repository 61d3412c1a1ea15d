"""
Transport Interface

Abstract interface for the HTTP transport used by the client.
Follows Dependency Inversion Principle - controllers depend on this abstraction,
not on a concrete HTTP library.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Dict, Optional, Union

from vidhost.constants import DEFAULT_CONTENT_TYPE


@dataclass
class ApiResponse:
    """
    Response of a single HTTP exchange.

    Attributes:
        status_code: HTTP status code
        content: Raw response body
        headers: Response headers
    """

    status_code: int
    content: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    def is_successful(self) -> bool:
        """True for 2xx status codes"""
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        """Body decoded as UTF-8"""
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """
        Decode the body as JSON.

        Raises:
            ValueError: If the body is not valid JSON
        """
        return json.loads(self.text)


@dataclass
class FileField:
    """
    A file part of a multipart form.

    content is either the raw bytes or an open binary stream.
    """

    filename: str
    content: Union[bytes, BinaryIO]
    content_type: str = DEFAULT_CONTENT_TYPE


@dataclass
class UploadRequest:
    """A multipart request ready to hand to TransportInterface.submit"""

    path: str
    fields: Dict[str, FileField]
    method: str = "POST"
    headers: Dict[str, str] = field(default_factory=dict)


class TransportInterface(ABC):
    """
    Abstract base class for HTTP transports.

    Implementations return an ApiResponse for every HTTP status and raise
    TransportError only when no response could be obtained.
    """

    @abstractmethod
    def get(self, path: str, params: Optional[Any] = None) -> ApiResponse:
        """
        Send a GET request.

        Args:
            path: API path, e.g. "/videos/vi123"
            params: Query parameters (mapping or list of pairs)
        """

    @abstractmethod
    def post(
        self,
        path: str,
        headers: Optional[Dict[str, str]] = None,
        body: Optional[str] = None,
    ) -> ApiResponse:
        """Send a POST request with a JSON body"""

    @abstractmethod
    def patch(
        self,
        path: str,
        headers: Optional[Dict[str, str]] = None,
        body: Optional[str] = None,
    ) -> ApiResponse:
        """Send a PATCH request with a JSON body"""

    @abstractmethod
    def delete(self, path: str) -> ApiResponse:
        """Send a DELETE request"""

    @abstractmethod
    def submit(
        self,
        path: str,
        fields: Dict[str, FileField],
        method: str = "POST",
        headers: Optional[Dict[str, str]] = None,
    ) -> ApiResponse:
        """
        Send a multipart form.

        Args:
            path: API path
            fields: Form fields keyed by name
            method: HTTP method
            headers: Extra request headers

        Example:
            transport.submit(
                "/videos/vi123/source",
                {"file": FileField("clip.mp4", stream)},
            )
        """

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if the transport is ready to send requests.

        Returns:
            True if credentials are usable
        """
