"""Gateway: text-stream line reader — implements LineReader port."""

from __future__ import annotations

import sys
from typing import TextIO


class StdinLineReader:
    """Reads prompt lines from a text stream (stdin by default)."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def readline(self) -> str:
        return (self._stream or sys.stdin).readline()
