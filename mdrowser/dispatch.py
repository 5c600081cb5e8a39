# File: mdrowser/dispatch.py
"""mdrowser.dispatch: отложенный запуск UI-вызовов в потоке event loop."""

from __future__ import annotations

import asyncio
import threading
from typing import Any, Callable, Optional

from mdrowser.logger import logger

__all__ = ["LoopDispatcher"]


class LoopDispatcher:
    """
    Single-threaded executor bound to one asyncio loop.

    `schedule` may be called from any thread or from a task callback; the call
    itself always runs later on the loop thread, one at a time, in order.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop
        self._pending = 0
        self._lock = threading.Lock()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    @property
    def pending(self) -> int:
        return self._pending

    def schedule(self, fn: Callable[..., Any], *args: Any) -> None:
        with self._lock:
            self._pending += 1
        self.loop.call_soon_threadsafe(self._run, fn, args)

    def _run(self, fn: Callable[..., Any], args: tuple) -> None:
        try:
            fn(*args)
        except Exception:
            logger.exception("Scheduled UI call %r failed", fn)
        finally:
            with self._lock:
                self._pending -= 1

    async def idle(self) -> None:
        """Ждёт, пока не выполнятся все запланированные вызовы."""
        while self._pending:
            await asyncio.sleep(0)
