"""SIGINT watcher — implements InterruptWatcher port for the running asyncio loop."""

from __future__ import annotations

import asyncio
import signal
from collections.abc import Callable


class SignalInterruptWatcher:
    """Routes SIGINT to a callback while registered.

    Uses ``loop.add_signal_handler`` where available and falls back to
    ``signal.signal`` plus ``call_soon_threadsafe`` (Windows).
    """

    def __init__(self, signum: int = signal.SIGINT) -> None:
        self._signum = signum
        self._loop: asyncio.AbstractEventLoop | None = None
        self._previous = None
        self._uses_loop_handler = False

    def start(self, on_interrupt: Callable[[], None]) -> None:
        loop = asyncio.get_running_loop()
        self._loop = loop
        try:
            loop.add_signal_handler(self._signum, on_interrupt)
            self._uses_loop_handler = True
        except NotImplementedError:
            self._uses_loop_handler = False
            self._previous = signal.signal(
                self._signum,
                lambda _signum, _frame: loop.call_soon_threadsafe(on_interrupt),
            )

    def stop(self) -> None:
        if self._loop is None:
            return
        if self._uses_loop_handler:
            self._loop.remove_signal_handler(self._signum)
        elif self._previous is not None:
            signal.signal(self._signum, self._previous)
        self._loop = None
        self._previous = None
