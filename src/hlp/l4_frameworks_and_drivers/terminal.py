"""Terminal output helpers."""

from __future__ import annotations

from typing import TextIO

import click

PROMPT = click.style('hlp>', fg='green') + ' '


class TerminalWriter:
    """Echoes streamed text without a newline; click strips colors when not on a tty."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def __call__(self, text: str) -> None:
        click.echo(text, file=self._stream, nl=False)
