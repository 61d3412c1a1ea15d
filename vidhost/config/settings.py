"""
Central Configuration File

ALL runtime configuration values live here. This is the single source of truth.

Guidelines:
- Secrets (API keys) should be in .env, NOT here
- Import these settings in modules: from vidhost.config.settings import VIDHOST_BASE_URL
- Protocol constants live in vidhost/constants.py
"""

import os

from dotenv import load_dotenv

from vidhost.constants import DEFAULT_CHUNK_SIZE, HTTP_TIMEOUT, PRODUCTION_BASE_URL

# Load environment variables from .env file
load_dotenv()

# =============================================================================
# API CONFIGURATION
# =============================================================================

# API key exchanged for an access token (keep it in .env)
VIDHOST_API_KEY = os.getenv("VIDHOST_API_KEY")

# Use SANDBOX_BASE_URL from vidhost.constants for testing accounts
VIDHOST_BASE_URL = os.getenv("VIDHOST_BASE_URL", PRODUCTION_BASE_URL)

# HTTP request timeout (seconds)
VIDHOST_HTTP_TIMEOUT = float(os.getenv("VIDHOST_HTTP_TIMEOUT", HTTP_TIMEOUT))

# =============================================================================
# UPLOAD CONFIGURATION
# =============================================================================

# Files larger than this are uploaded in byte ranges of this size
VIDHOST_CHUNK_SIZE = int(os.getenv("VIDHOST_CHUNK_SIZE", DEFAULT_CHUNK_SIZE))
