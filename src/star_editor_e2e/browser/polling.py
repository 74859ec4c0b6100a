"""Polling primitive behind every readiness wait."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from star_editor_e2e.config import DEFAULT_POLL_INTERVAL_MS
from star_editor_e2e.models import WaitTimeoutError

logger = logging.getLogger(__name__)


async def poll_until(
    condition: Callable[[], Awaitable[bool]],
    timeout_ms: int,
    interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
    description: str = "condition",
) -> None:
    """Re-evaluate ``condition`` every ``interval_ms`` until it is true.

    The condition is always evaluated at least once, even with a zero timeout.
    Errors raised by the condition propagate unchanged.

    Args:
        condition: Async callable returning a truthy value when satisfied
        timeout_ms: Maximum time to wait
        interval_ms: Delay between evaluations
        description: Human-readable name used in logs and the timeout error

    Raises:
        WaitTimeoutError: If the deadline passes before the condition holds
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout_ms / 1000
    attempts = 0

    while True:
        attempts += 1
        if await condition():
            logger.debug("%s satisfied after %d attempt(s)", description, attempts)
            return
        remaining = deadline - loop.time()
        if remaining <= 0:
            raise WaitTimeoutError(
                f"Timed out after {timeout_ms}ms waiting for {description}",
                details={"timeout_ms": timeout_ms, "attempts": attempts},
            )
        await asyncio.sleep(min(interval_ms / 1000, remaining))
