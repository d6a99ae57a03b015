"""Helpers shared by the per-kind checkers and the runner."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def deadline_detail(seconds: float) -> str:
    """Human-readable detail for a check that exceeded its deadline."""
    return f"exceeded {seconds:g}s"


def error_text(exc: BaseException) -> str:
    """Exception message, falling back to the class name for message-less errors."""
    return str(exc) or type(exc).__name__


def _settle(future: asyncio.Future[Any], result: Any, exc: BaseException | None) -> None:
    if future.done():
        return
    if exc is not None:
        future.set_exception(exc)
    else:
        future.set_result(result)


async def run_blocking(func: Callable[..., T], *args: Any) -> T:
    """Run a blocking call on a daemon thread and await its result.

    Unlike ``asyncio.to_thread``, the thread is never joined: neither
    ``asyncio.run`` shutting down the default executor nor interpreter exit
    waits for it. A syscall stuck on a hung network mount therefore cannot
    hold back the report or the exit status. Cancelling the awaiting task
    abandons the call; its eventual result is discarded.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[T] = loop.create_future()

    def work() -> None:
        result: Any = None
        error: BaseException | None = None
        try:
            result = func(*args)
        except Exception as exc:
            error = exc
        try:
            loop.call_soon_threadsafe(_settle, future, result, error)
        except RuntimeError:
            # Event loop already closed; nobody is waiting for this result
            logger.debug("Discarding late result of %s", getattr(func, "__name__", func))

    name = f"blocking:{getattr(func, '__name__', 'call')}"
    threading.Thread(target=work, name=name, daemon=True).start()
    return await future
