"""Process-wide asyncio worker for blocking call sites.

Tool scripts run synchronously, so capabilities that need network I/O submit a
coroutine to a single event loop living on a dedicated daemon thread and block
on the result:
- Every submission is bounded by a timeout
- An optional CancelToken aborts the wait and cancels the coroutine
- The loop is created lazily and shared by the whole process
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import threading
from collections.abc import Coroutine
from typing import Any, TypeVar

from swarmthing.utils.logger import get_logger

logger = get_logger("core.worker")

T = TypeVar("T")

_POLL_INTERVAL = 0.05


class CancelToken:
    """Thread-safe cancellation flag shared between a caller and its work."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float) -> bool:
        return self._event.wait(timeout)


class WorkCancelled(Exception):
    """The submitted coroutine was cancelled through its CancelToken."""


class AsyncWorker:
    """Runs coroutines on a background event loop for synchronous callers."""

    def __init__(self, name: str = "swarmthing-worker") -> None:
        self._name = name
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    def _ensure_started(self) -> asyncio.AbstractEventLoop:
        with self._lock:
            if self._loop is not None and self._thread and self._thread.is_alive():
                return self._loop

            loop = asyncio.new_event_loop()
            ready = threading.Event()

            def _runner() -> None:
                asyncio.set_event_loop(loop)
                loop.call_soon(ready.set)
                loop.run_forever()

            thread = threading.Thread(target=_runner, name=self._name, daemon=True)
            thread.start()
            ready.wait()
            self._loop = loop
            self._thread = thread
            logger.debug("Async worker started", thread=self._name)
            return loop

    def submit(
        self,
        coro: Coroutine[Any, Any, T],
        timeout: float,
        cancel_token: CancelToken | None = None,
    ) -> T:
        """Run coro on the worker loop and wait for its result.

        Raises:
            TimeoutError: the coroutine did not finish within timeout seconds.
            WorkCancelled: cancel_token fired before the coroutine finished.
        """
        loop = self._ensure_started()
        future = asyncio.run_coroutine_threadsafe(coro, loop)

        if cancel_token is None:
            try:
                return future.result(timeout=timeout)
            except concurrent.futures.TimeoutError:
                future.cancel()
                raise TimeoutError(f"timed out after {timeout:g}s") from None

        remaining = timeout
        while remaining > 0:
            step = min(_POLL_INTERVAL, remaining)
            try:
                return future.result(timeout=step)
            except concurrent.futures.TimeoutError:
                remaining -= step
            if cancel_token.cancelled:
                future.cancel()
                raise WorkCancelled("cancelled")
        future.cancel()
        raise TimeoutError(f"timed out after {timeout:g}s")

    def shutdown(self) -> None:
        with self._lock:
            loop, thread = self._loop, self._thread
            self._loop = None
            self._thread = None
        if loop is None:
            return
        loop.call_soon_threadsafe(loop.stop)
        if thread is not None:
            thread.join(timeout=2.0)
            if not thread.is_alive():
                loop.close()
        logger.debug("Async worker stopped", thread=self._name)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()


# Global instance
_worker: AsyncWorker | None = None
_worker_lock = threading.Lock()


def get_worker() -> AsyncWorker:
    """Get or create the process-wide worker."""
    global _worker
    with _worker_lock:
        if _worker is None:
            _worker = AsyncWorker()
        return _worker
