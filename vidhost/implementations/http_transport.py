"""
HTTP Transport Implementation

Concrete implementation of TransportInterface on top of requests.
Adds the bearer token to every call and maps responses to ApiResponse.
"""

import logging
from typing import Any, Dict, Optional

import requests

from vidhost.auth.token_manager import TokenManager
from vidhost.constants import HTTP_TIMEOUT
from vidhost.errors import AuthenticationError, TransportError
from vidhost.interfaces.transport_interface import (
    ApiResponse,
    FileField,
    TransportInterface,
)


class HttpTransport(TransportInterface):
    """
    HTTP transport for the video-hosting API.

    Features:
    - Connection reuse through a single requests.Session
    - Bearer authentication via TokenManager
    - JSON and multipart bodies
    - Every HTTP status returned as ApiResponse, network failures raised
    """

    def __init__(
        self,
        base_url: str,
        token_manager: Optional[TokenManager] = None,
        session: Optional[requests.Session] = None,
        timeout: float = HTTP_TIMEOUT,
    ):
        """
        Initialize HTTP transport.

        Args:
            base_url: API root, e.g. "https://ws.api.video"
            token_manager: Token source (None = unauthenticated requests)
            session: requests session to reuse (optional)
            timeout: Request timeout in seconds

        Example:
            tokens = TokenManager(base_url, api_key)
            transport = HttpTransport(base_url, tokens)
        """
        self.logger = logging.getLogger(__name__)
        self.base_url = base_url.rstrip("/")
        self.token_manager = token_manager
        self.session = session or requests.Session()
        self.timeout = timeout

        self.logger.info(f"HTTP transport initialized for {self.base_url}")

    def _auth_headers(self) -> Dict[str, str]:
        if self.token_manager is None:
            return {}
        try:
            return {"Authorization": f"Bearer {self.token_manager.get_token()}"}
        except AuthenticationError as e:
            raise TransportError(f"Cannot authenticate request: {e}") from e

    def _send(self, method: str, path: str, **kwargs: Any) -> ApiResponse:
        """
        Execute a request and wrap the result.

        Raises:
            TransportError: If no response was received
        """
        headers = self._auth_headers()
        headers.update(kwargs.pop("headers", None) or {})
        url = f"{self.base_url}{path}"

        self.logger.debug(f"{method} {path}")

        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                timeout=self.timeout,
                **kwargs,
            )
        except requests.RequestException as e:
            self.logger.error(f"{method} {path} failed: {e}")
            raise TransportError(f"{method} {path} failed: {e}") from e

        self.logger.debug(f"{method} {path} -> {response.status_code}")

        return ApiResponse(
            status_code=response.status_code,
            content=response.content,
            headers=dict(response.headers),
        )

    def _json_headers(self, headers: Optional[Dict[str, str]]) -> Dict[str, str]:
        merged = {"Content-Type": "application/json"}
        merged.update(headers or {})
        return merged

    def get(self, path: str, params: Optional[Any] = None) -> ApiResponse:
        return self._send("GET", path, params=params)

    def post(
        self,
        path: str,
        headers: Optional[Dict[str, str]] = None,
        body: Optional[str] = None,
    ) -> ApiResponse:
        return self._send("POST", path, headers=self._json_headers(headers), data=body)

    def patch(
        self,
        path: str,
        headers: Optional[Dict[str, str]] = None,
        body: Optional[str] = None,
    ) -> ApiResponse:
        return self._send(
            "PATCH", path, headers=self._json_headers(headers), data=body
        )

    def delete(self, path: str) -> ApiResponse:
        return self._send("DELETE", path)

    def submit(
        self,
        path: str,
        fields: Dict[str, FileField],
        method: str = "POST",
        headers: Optional[Dict[str, str]] = None,
    ) -> ApiResponse:
        files = {
            name: (part.filename, part.content, part.content_type)
            for name, part in fields.items()
        }
        return self._send(method, path, headers=headers, files=files)

    def is_available(self) -> bool:
        """
        Check if transport is ready.

        Returns:
            True if no auth is configured or a token can be obtained
        """
        if self.token_manager is None:
            return True
        return self.token_manager.is_authenticated()
