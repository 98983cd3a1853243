"""Gateway: file-based transcript persistence — implements TranscriptStore port."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

from hlp.l1_entities.chat_message import validate_role
from hlp.l1_entities.transcript import append_message

log = logging.getLogger('hlp.persist')

STDIN_MARKER = '-'


class StdinTargetError(ValueError):
    """Raised when a reply would be written back into stdin."""

    def __init__(self) -> None:
        super().__init__('cannot output to stdin')


class FileTranscriptStore:
    """Reads transcripts from files or stdin and writes continued transcripts to files.

    Line endings pass through unchanged in both directions.
    """

    def __init__(self, stdin: TextIO | None = None) -> None:
        self._stdin = stdin

    def read(self, source: str) -> str:
        """Return the text of *source* with its line endings untouched."""
        if source == STDIN_MARKER:
            stream = self._stdin or sys.stdin
            buffer = getattr(stream, 'buffer', None)
            text = buffer.read().decode('utf-8') if buffer is not None else stream.read()
            log.debug('Read %d chars from stdin', len(text))
            return text
        with open(source, encoding='utf-8', newline='') as f:
            text = f.read()
        log.debug('Read %d chars from %s', len(text), source)
        return text

    def append(self, source: str, target: str, original: str, content: str, role: str = 'assistant') -> Path:
        """Write *original* plus a new *role* message to *target*; '-' means back into *source*."""
        validate_role(role)
        path = self.resolve_target(source, target)
        with open(path, 'w', encoding='utf-8', newline='') as f:
            append_message(f, original, content, role)
        log.debug('Appended %s message (%d chars) to %s', role, len(content), path)
        return path

    @staticmethod
    def resolve_target(source: str, target: str) -> Path:
        """Map the '-' target to the source file. Raises StdinTargetError if that is stdin."""
        if target == STDIN_MARKER:
            if source == STDIN_MARKER:
                raise StdinTargetError
            return Path(source)
        return Path(target)
