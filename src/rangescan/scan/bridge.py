"""Blocking bridge from synchronous callers into an event loop thread."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Coroutine
from typing import Any, TypeVar

from ..core.errors import InvalidStateError

logger = logging.getLogger("rangescan")

T = TypeVar("T")


class BlockingRunner:
    """Runs coroutines to completion on a private event loop thread.

    Every coroutine submitted through one runner shares the same loop, so
    loop-bound resources such as an ``httpx.AsyncClient`` stay usable across
    pages.
    """

    def __init__(self, *, name: str = "rangescan-loop") -> None:
        self._name = name
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def run(self, coro: Coroutine[Any, Any, T]) -> T:
        loop = self._ensure_started(coro)
        if threading.current_thread() is self._thread:
            coro.close()
            raise InvalidStateError("BlockingRunner.run cannot be called from its own loop thread")
        future = asyncio.run_coroutine_threadsafe(coro, loop)
        return future.result()

    __call__ = run

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            loop, thread = self._loop, self._thread
        if loop is None or thread is None:
            return
        loop.call_soon_threadsafe(loop.stop)
        thread.join()
        loop.close()
        logger.debug("blocking runner stopped name=%s", self._name)

    def _ensure_started(self, coro: Coroutine[Any, Any, Any]) -> asyncio.AbstractEventLoop:
        with self._lock:
            if self._closed:
                coro.close()
                raise InvalidStateError("BlockingRunner is already closed")
            if self._loop is None:
                loop = asyncio.new_event_loop()
                ready = threading.Event()
                thread = threading.Thread(
                    target=self._serve,
                    args=(loop, ready),
                    name=self._name,
                    daemon=True,
                )
                thread.start()
                ready.wait()
                self._loop, self._thread = loop, thread
                logger.debug("blocking runner started name=%s", self._name)
            return self._loop

    @staticmethod
    def _serve(loop: asyncio.AbstractEventLoop, ready: threading.Event) -> None:
        asyncio.set_event_loop(loop)
        loop.call_soon(ready.set)
        loop.run_forever()

    def __enter__(self) -> "BlockingRunner":
        return self

    def __exit__(self, *exc_info: object) -> bool:
        self.close()
        return False


__all__ = [
    "BlockingRunner",
]
