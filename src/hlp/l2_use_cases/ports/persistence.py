"""Port: transcript persistence."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class TranscriptStore(Protocol):
    """Abstract reading and writing of transcript text."""

    def read(self, source: str) -> str:
        """Return the full transcript text of *source* ('-' for stdin)."""
        ...

    def append(self, source: str, target: str, original: str, content: str, role: str = 'assistant') -> Path:
        """Write *original* followed by a new *role* message to *target* ('-' means back into *source*).

        Returns the written path.
        """
        ...
