"""Port: blocking line input for the interactive prompt."""

from __future__ import annotations

from typing import Protocol


class LineReader(Protocol):
    """Abstract line source (usually stdin)."""

    def readline(self) -> str:
        """Block until a full line is available. Returns '' at end of input."""
        ...
