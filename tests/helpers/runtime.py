"""Polling helper for tests that wait on the event bus consumer."""

from __future__ import annotations

import asyncio
from typing import Callable


async def wait_for(
    condition: Callable[[], bool],
    timeout: float = 2.0,
    interval: float = 0.01,
    what: str = "condition",
) -> None:
    """Poll *condition* until it is truthy.

    Raises :class:`TimeoutError` naming *what* after *timeout* seconds.
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not condition():
        if loop.time() >= deadline:
            raise TimeoutError(f"{what} not met within {timeout}s")
        await asyncio.sleep(interval)
