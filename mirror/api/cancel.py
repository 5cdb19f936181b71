"""Run blocking pipeline work off the event loop, cancelling it on disconnect.

The pipeline is synchronous and checks a :class:`threading.Event` between
network reads and between translation batches.  :func:`run_until_disconnect`
owns that event for one request and sets it as soon as the client goes away.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from typing import Any, Callable, TypeVar

from fastapi import Request
from starlette.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)

T = TypeVar("T")

POLL_INTERVAL = 0.25


async def _watch(request: Request, cancel: threading.Event, poll_interval: float) -> None:
    while not cancel.is_set():
        if await request.is_disconnected():
            logger.info("Client left %s; cancelling", request.url.path)
            cancel.set()
            return
        await asyncio.sleep(poll_interval)


async def run_until_disconnect(
    request: Request,
    func: Callable[..., T],
    *args: Any,
    poll_interval: float = POLL_INTERVAL,
    **kwargs: Any,
) -> T:
    """Call ``func(*args, cancel=event, **kwargs)`` in the threadpool.

    *event* is set once ``request.is_disconnected()`` reports True, so the
    pipeline stops at its next checkpoint and raises
    :class:`~mirror.errors.RequestCancelled`.
    """
    cancel = threading.Event()
    watcher = asyncio.create_task(_watch(request, cancel, poll_interval))
    try:
        return await run_in_threadpool(func, *args, cancel=cancel, **kwargs)
    finally:
        watcher.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await watcher
