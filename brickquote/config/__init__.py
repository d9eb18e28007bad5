"""BrickQuote configuration.

This package contains:
- settings: Environment variables and configuration
- secrets: OpenAI key lookup (Secret Manager, or env under the emulator)
- errors: Custom exceptions and error codes
"""

from brickquote.config.settings import settings
from brickquote.config.errors import BrickQuoteError
from brickquote.config.secrets import get_secret, get_openai_api_key

__all__ = [
    "settings",
    "BrickQuoteError",
    "get_secret",
    "get_openai_api_key",
]
