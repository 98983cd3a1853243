"""Port: user interrupt notifications (Ctrl-C)."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol


class InterruptWatcher(Protocol):
    """Delivers interrupts to a callback on the running event loop thread."""

    def start(self, on_interrupt: Callable[[], None]) -> None:
        """Begin routing interrupts to *on_interrupt*."""
        ...

    def stop(self) -> None:
        """Deregister; later interrupts fall back to the default behaviour."""
        ...
