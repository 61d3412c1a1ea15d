"""
Client Constants

Centralized protocol configuration for the video-hosting API client.
Following the same pattern as upload/constants.py for consistency.
"""

from enum import Enum

# =============================================================================
# API CONFIGURATION
# =============================================================================

PRODUCTION_BASE_URL = "https://ws.api.video"
SANDBOX_BASE_URL = "https://sandbox.api.video"

# Authentication endpoints
AUTH_API_KEY_PATH = "/auth/api-key"
AUTH_REFRESH_PATH = "/auth/refresh"

# Refresh the access token this many seconds before it expires
TOKEN_EXPIRY_LEEWAY = 60

# HTTP request timeout (seconds)
HTTP_TIMEOUT = 30

# =============================================================================
# UPLOAD CONFIGURATION
# =============================================================================

# Chunk size for multi-request uploads (in bytes)
# Files up to this size go up in a single request
DEFAULT_CHUNK_SIZE = 64 * 1024 * 1024  # 64 MiB

# Multipart field carrying the file bytes
UPLOAD_FIELD_NAME = "file"

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Informational status some upload legs answer with instead of a resource
CONTINUE_STATUS_CODE = 100

# Lowest status code treated as a fatal upload failure
FATAL_STATUS_THRESHOLD = 400

# Log upload progress every N percent
PROGRESS_LOG_STEP = 10

# =============================================================================
# LISTING CONFIGURATION
# =============================================================================

DEFAULT_PAGE_SIZE = 100
DEFAULT_CURRENT_PAGE = 1

# =============================================================================
# STATUS ENUMS
# =============================================================================


class ChunkOutcome(Enum):
    """Classification of a single chunk submission"""

    SUCCESS = "success"
    CONTINUE = "continue"
    FATAL = "fatal"


class ErrorKind(Enum):
    """Client error categories"""

    SOURCE_UNREADABLE = "source_unreadable"
    EMPTY_SOURCE = "empty_source"
    INVALID_SOURCE = "invalid_source"
    MALFORMED_RESPONSE = "malformed_response"
    TRANSPORT = "transport"
    AUTH_ERROR = "auth_error"
