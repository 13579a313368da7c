"""
Async delay helper.
"""
import asyncio
import math

from utilitybelt.logging_config import get_logger

logger = get_logger(__name__)


async def delay(milliseconds) -> None:
    """
    Sleep for the given number of milliseconds without blocking the event loop.

    Invalid durations (negative, not finite, not a number) return at once with an error log.

    Usage:
        await delay(250)
    """
    if (
        isinstance(milliseconds, bool)
        or not isinstance(milliseconds, (int, float))
        or not math.isfinite(milliseconds)
        or milliseconds < 0
        ):
        logger.error("Delay must be a non-negative number", milliseconds=repr(milliseconds))
        return

    await asyncio.sleep(milliseconds / 1000)
