"""
vidscribe.transcribe.timeout - Deadline guard for pipeline stages.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from vidscribe.exceptions import TranscriptionTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def with_timeout(operation: Awaitable[T], seconds: float, message: str) -> T:
    """Await an operation, failing if it does not finish in time.

    The operation runs as a task that is cancelled when the deadline
    elapses, so the underlying download or subprocess actually stops.
    Errors raised by the operation itself propagate unchanged.

    Args:
        operation: Coroutine or awaitable to run
        seconds: Deadline in seconds
        message: Message for the timeout error

    Returns:
        The operation's result

    Raises:
        TranscriptionTimeoutError: If the deadline elapses first
    """
    task = asyncio.ensure_future(operation)
    try:
        done, _ = await asyncio.wait({task}, timeout=seconds)
    except asyncio.CancelledError:
        task.cancel()
        raise

    if task in done:
        return task.result()

    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass
    except Exception as e:
        logger.debug("Stage raised during cancellation: %s", e)
    raise TranscriptionTimeoutError(message)
