import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

from veo_studio.services.errors import PollTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


async def poll_until(
    fetch: Callable[[T], Awaitable[T]],
    initial: T,
    is_done: Callable[[T], bool],
    interval: float,
    sleep: Sleep = asyncio.sleep,
    max_attempts: Optional[int] = None,
) -> T:
    """Re-fetch ``initial`` every ``interval`` seconds until ``is_done`` holds.

    The first check happens on ``initial`` itself, so an already finished
    value returns without sleeping. ``max_attempts`` bounds the number of
    re-fetches; ``None`` polls forever.
    """
    current = initial
    attempts = 0
    while not is_done(current):
        if max_attempts is not None and attempts >= max_attempts:
            raise PollTimeoutError(f"Operation did not finish after {attempts} status checks.")
        await sleep(interval)
        current = await fetch(current)
        attempts += 1
        logger.debug("Status check %d finished (done=%s)", attempts, is_done(current))
    return current
