"""
Client Factory

Factory pattern for creating clients on top of a transport implementation.
Automatically configures from environment variables (see config/settings.py).
"""

import logging
from typing import Literal, Optional

from vidhost.auth.token_manager import TokenManager
from vidhost.config import settings
from vidhost.controllers.captions_controller import CaptionClient
from vidhost.controllers.videos_controller import VideoClient
from vidhost.implementations.http_transport import HttpTransport
from vidhost.implementations.mock_transport import MockTransport
from vidhost.interfaces.transport_interface import TransportInterface

# Type alias
TransportMode = Literal["auto", "http", "mock"]


class ClientFactory:
    """
    Factory for creating transports and clients.

    Reads configuration from environment variables:
    - VIDHOST_API_KEY: Account API key
    - VIDHOST_BASE_URL: API root (production by default)
    - VIDHOST_CHUNK_SIZE: Upload chunk size in bytes
    - VIDHOST_HTTP_TIMEOUT: Request timeout in seconds

    Usage:
        # Auto-detect from environment
        client = ClientFactory.create_client()

        # Force mock for testing
        client = ClientFactory.create_client(mode="mock")
    """

    _logger = logging.getLogger(__name__)

    @classmethod
    def create_transport(
        cls,
        mode: TransportMode = "auto",
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> TransportInterface:
        """
        Create a transport instance.

        Args:
            mode: "auto" (from env), "http" (force real), "mock" (force sim)
            api_key: Override VIDHOST_API_KEY
            base_url: Override VIDHOST_BASE_URL

        Returns:
            TransportInterface implementation

        Raises:
            RuntimeError: If mode="http" but no API key is available
        """
        if mode == "mock":
            cls._logger.info("Creating Mock Transport (forced)")
            return MockTransport()

        if mode == "http":
            try:
                transport = cls._create_http_transport(api_key, base_url)
                cls._logger.info("Creating HTTP Transport (forced)")
                return transport
            except ValueError as e:
                raise RuntimeError(
                    f"HTTP transport requested but not available: {e}"
                ) from e

        # mode == "auto" - try HTTP first, fall back to mock
        try:
            transport = cls._create_http_transport(api_key, base_url)
            cls._logger.info("Creating HTTP Transport (auto-detected)")
            return transport
        except ValueError as e:
            cls._logger.warning(f"HTTP transport not available ({e}), using Mock Transport")
            return MockTransport()

    @classmethod
    def _create_http_transport(
        cls,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> HttpTransport:
        """
        Create HTTP transport from environment configuration.

        Raises:
            ValueError: If no API key is configured
        """
        api_key = api_key or settings.VIDHOST_API_KEY
        base_url = base_url or settings.VIDHOST_BASE_URL

        if not api_key:
            raise ValueError(
                "VIDHOST_API_KEY not set in environment. "
                "Add to .env file: VIDHOST_API_KEY=your_api_key"
            )

        token_manager = TokenManager(
            base_url=base_url,
            api_key=api_key,
            timeout=settings.VIDHOST_HTTP_TIMEOUT,
        )
        return HttpTransport(
            base_url=base_url,
            token_manager=token_manager,
            session=token_manager.session,
            timeout=settings.VIDHOST_HTTP_TIMEOUT,
        )

    @classmethod
    def create_client(
        cls,
        mode: TransportMode = "auto",
        chunk_size: Optional[int] = None,
        transport: Optional[TransportInterface] = None,
    ) -> VideoClient:
        """
        Create a video client.

        Args:
            mode: Transport mode when no transport is given
            chunk_size: Override VIDHOST_CHUNK_SIZE
            transport: Use this transport instead of creating one

        Example:
            client = ClientFactory.create_client()
            video = client.upload("/path/to/clip.mp4")
        """
        return VideoClient(
            transport or cls.create_transport(mode),
            chunk_size=chunk_size or settings.VIDHOST_CHUNK_SIZE,
        )

    @classmethod
    def create_caption_client(
        cls,
        mode: TransportMode = "auto",
        transport: Optional[TransportInterface] = None,
    ) -> CaptionClient:
        """Create a caption client"""
        return CaptionClient(transport or cls.create_transport(mode))

    @classmethod
    def is_http_available(cls) -> bool:
        """
        Check if an HTTP transport can be created.

        Returns:
            True if an API key is configured
        """
        try:
            cls._create_http_transport()
            return True
        except ValueError:
            return False


# Convenience function for quick creation
def create_client(
    force_mock: bool = False,
    chunk_size: Optional[int] = None,
) -> VideoClient:
    """
    Quick client creation with simple mock override.

    Args:
        force_mock: If True, always use the mock transport
        chunk_size: Override VIDHOST_CHUNK_SIZE

    Example:
        # Normal usage
        client = create_client()

        # Testing
        client = create_client(force_mock=True)
    """
    mode = "mock" if force_mock else "auto"
    return ClientFactory.create_client(mode=mode, chunk_size=chunk_size)
