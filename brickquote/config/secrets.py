"""Secret lookup for BrickQuote.

The only secret is the OpenAI API key. Deployed functions read it from
Secret Manager; under the Firebase emulator it comes from the environment.
"""

import os
import logging
from functools import lru_cache
from typing import Optional

logger = logging.getLogger(__name__)

OPENAI_API_KEY_SECRET = "OPENAI_API_KEY"
DEFAULT_PROJECT_ID = "brickquote-dev"


def is_emulator_mode() -> bool:
    """True when the Functions or Firestore emulator is configured."""
    return (
        os.environ.get('FUNCTIONS_EMULATOR') == 'true' or
        os.environ.get('FIRESTORE_EMULATOR_HOST') is not None
    )


def _secret_version_name(secret_id: str) -> str:
    project_id = (
        os.environ.get('GCLOUD_PROJECT')
        or os.environ.get('GOOGLE_CLOUD_PROJECT')
        or DEFAULT_PROJECT_ID
    )
    return f"projects/{project_id}/secrets/{secret_id}/versions/latest"


def _read_from_secret_manager(secret_id: str) -> str:
    from google.cloud import secretmanager

    client = secretmanager.SecretManagerServiceClient()
    response = client.access_secret_version(request={"name": _secret_version_name(secret_id)})
    return response.payload.data.decode("UTF-8")


def get_secret(secret_id: str) -> Optional[str]:
    """
    Look up a secret by name.

    Falls back to the environment variable of the same name when Secret
    Manager cannot be reached.

    Args:
        secret_id: Secret name, e.g. 'OPENAI_API_KEY'

    Returns:
        The secret value, or None if it is not set anywhere
    """
    if is_emulator_mode():
        value = os.environ.get(secret_id)
        if not value:
            logger.warning(f"Secret {secret_id} is not set in the emulator environment")
        return value

    try:
        return _read_from_secret_manager(secret_id)
    except Exception as e:
        logger.warning(f"Secret Manager lookup for {secret_id} failed, using environment: {e}")
        return os.environ.get(secret_id)


@lru_cache(maxsize=1)
def get_openai_api_key() -> Optional[str]:
    return get_secret(OPENAI_API_KEY_SECRET)


def clear_secret_cache() -> None:
    """Forget the cached OpenAI key (after rotation, or between tests)."""
    get_openai_api_key.cache_clear()
