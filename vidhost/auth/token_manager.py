"""
Token Manager

Handles API key authentication for the video-hosting API.
Exchanges the API key for a short-lived bearer token and refreshes it
before it expires.

Flow:
1. First request: POST /auth/api-key with the API key
2. Runtime: the cached access token is reused until close to expiry
3. Token refresh: POST /auth/refresh with the refresh token, falling back
   to a fresh API key exchange if the refresh is rejected
"""

import logging
import time
from typing import Optional

import requests

from vidhost.constants import (
    AUTH_API_KEY_PATH,
    AUTH_REFRESH_PATH,
    HTTP_TIMEOUT,
    TOKEN_EXPIRY_LEEWAY,
)
from vidhost.errors import AuthenticationError


class TokenManager:
    """
    Manages bearer tokens obtained from an API key.

    This class:
    - Exchanges the API key for access/refresh tokens
    - Refreshes expired tokens automatically
    - Reports authentication status
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        session: Optional[requests.Session] = None,
        timeout: float = HTTP_TIMEOUT,
    ):
        """
        Initialize token manager.

        Args:
            base_url: API root, e.g. "https://ws.api.video"
            api_key: Account API key
            session: Shared requests session (optional)
            timeout: Request timeout in seconds

        Example:
            tokens = TokenManager("https://sandbox.api.video", api_key)
            headers = {"Authorization": f"Bearer {tokens.get_token()}"}
        """
        self.logger = logging.getLogger(__name__)

        if not api_key:
            raise ValueError("API key must not be empty")

        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

        self.access_token: Optional[str] = None
        self.refresh_token: Optional[str] = None
        self.expires_at = 0.0

    @property
    def expired(self) -> bool:
        """True if there is no token or it expires within the leeway"""
        return (
            self.access_token is None
            or time.time() >= self.expires_at - TOKEN_EXPIRY_LEEWAY
        )

    def get_token(self) -> str:
        """
        Get a valid access token.

        Automatically authenticates or refreshes if needed.

        Returns:
            Bearer access token

        Raises:
            AuthenticationError: If no token can be obtained
        """
        if not self.expired:
            return self.access_token

        if self.refresh_token:
            self.logger.debug("Access token expired, refreshing...")
            try:
                self._request_token(
                    AUTH_REFRESH_PATH, {"refreshToken": self.refresh_token}
                )
                return self.access_token
            except AuthenticationError as e:
                self.logger.warning(f"Token refresh failed ({e}), re-authenticating")

        self._request_token(AUTH_API_KEY_PATH, {"apiKey": self.api_key})
        return self.access_token

    def _request_token(self, path: str, payload: dict) -> None:
        """
        Call an auth endpoint and store the returned tokens.

        Raises:
            AuthenticationError: On network failure, non-2xx or bad payload
        """
        url = f"{self.base_url}{path}"
        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise AuthenticationError(f"Auth request to {path} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise AuthenticationError(
                f"Auth request to {path} rejected with status {response.status_code}"
            )

        try:
            data = response.json()
            self.access_token = data["access_token"]
            self.refresh_token = data.get("refresh_token", self.refresh_token)
            self.expires_at = time.time() + float(data.get("expires_in", 0))
        except (ValueError, KeyError, TypeError) as e:
            raise AuthenticationError(
                f"Unexpected auth payload from {path}: {e}"
            ) from e

        self.logger.info("Access token obtained")

    def is_authenticated(self) -> bool:
        """
        Check if a valid token can be obtained.

        Returns:
            True if authentication succeeds
        """
        try:
            return bool(self.get_token())
        except AuthenticationError:
            return False

    def invalidate(self) -> None:
        """Drop cached tokens so the next call re-authenticates"""
        self.access_token = None
        self.refresh_token = None
        self.expires_at = 0.0
        self.logger.debug("Cached tokens cleared")
