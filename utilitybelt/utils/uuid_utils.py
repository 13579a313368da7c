"""
UUID utilities.
"""
import secrets
import uuid

from utilitybelt.logging_config import get_logger

logger = get_logger(__name__)


def generate_uuid() -> str:
    """Random version 4 UUID string."""
    return str(uuid.uuid4())


def generate_crypto_random_uuid(have_fallback: bool = True) -> str:
    """
    Version 4 UUID built from the operating system CSPRNG (secrets).

    Args:
        have_fallback: Use generate_uuid() if secure randomness is unavailable (default: True)

    Raises:
        NotImplementedError: If secure randomness is unavailable and have_fallback is False
    """
    try:
        return str(uuid.UUID(bytes=secrets.token_bytes(16), version=4))
    except NotImplementedError:
        if have_fallback:
            logger.warning("Crypto random UUID not available, using fallback")
            return generate_uuid()

        logger.error("Crypto random UUID not available, and fallback is disabled")
        raise
