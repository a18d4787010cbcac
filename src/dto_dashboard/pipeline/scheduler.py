"""Cancelable delayed callbacks for the pipeline estimate."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol

logger = logging.getLogger(__name__)

Callback = Callable[[], Awaitable[None]]


class TimerHandle(Protocol):
    def cancel(self) -> object: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callback) -> TimerHandle: ...


class AsyncioScheduler:
    """Runs each timer as its own task on the running event loop.

    Cancelling the handle before the delay elapses drops the callback;
    cancelling it while the callback awaits aborts the callback.
    """

    def call_later(self, delay: float, callback: Callback) -> asyncio.Task:
        async def _fire() -> None:
            await asyncio.sleep(delay)
            await callback()

        task = asyncio.get_running_loop().create_task(_fire())
        task.add_done_callback(_log_failure)
        return task


def _log_failure(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Pipeline timer failed", exc_info=exc)


class TimerSet:
    """All timers owned by one simulator, cancelable as a group."""

    def __init__(self, scheduler: Scheduler):
        self._scheduler = scheduler
        self._handles: list[TimerHandle] = []

    def __len__(self) -> int:
        return len(self._handles)

    def schedule(self, delay: float, callback: Callback) -> TimerHandle:
        handle = self._scheduler.call_later(delay, callback)
        self._handles.append(handle)
        return handle

    def cancel_all(self) -> None:
        handles, self._handles = self._handles, []
        for handle in handles:
            handle.cancel()
