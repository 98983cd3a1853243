"""Transcript codec — the plain-text chat file format.

A transcript is a sequence of role boundaries, each followed by content lines::

    --- system
    You are terse.
    --- user
    What is a monad?

Content before the first boundary is treated as a system message. Boundary
matching ignores case and surrounding whitespace. A single empty line directly
above a boundary is a separator, not content, so appending a message and
parsing again leaves the earlier messages unchanged.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import TextIO

from hlp.l1_entities.chat_message import ChatMessage, validate_role
from hlp.l1_entities.errors import InvalidRoleError

_BOUNDARY_RE = re.compile(r'^---\s*([a-z]+)$', re.IGNORECASE)


def parse_transcript(stream: Iterable[str]) -> list[ChatMessage]:
    """Parse transcript lines into an ordered message list.

    Raises InvalidRoleError on a boundary naming an unknown role; nothing is
    returned for the part already scanned.
    """
    messages: list[ChatMessage] = []
    role: str | None = None
    content: list[str] = []

    for raw in stream:
        line = raw.rstrip('\n').removesuffix('\r')

        match = _BOUNDARY_RE.match(line.strip())
        if match:
            # one empty line right before a boundary separates messages
            if content and content[-1] == '\n':
                content.pop()
            if role is not None and content:
                messages.append(ChatMessage(role=role, content=''.join(content)))
                content = []
            role = _role_for_token(match.group(1))
            continue

        if role is None and line.strip():
            role = 'system'
        if role is not None:
            content.append(f'{line}\n')

    if role is not None and content:
        messages.append(ChatMessage(role=role, content=''.join(content)))

    return messages


def _role_for_token(token: str) -> str:
    """Case-fold a boundary token and validate it; errors report the token as written."""
    try:
        return validate_role(token.lower())
    except InvalidRoleError:
        raise InvalidRoleError(token) from None


def render_appended(original: str, content: str, role: str = 'assistant') -> str:
    """Return *original* followed by a new *role* message holding *content*."""
    validate_role(role)
    separator = '\n' if original.endswith('\n') else '\n\n'
    return f'{original}{separator}--- {role}\n{content}\n'


def append_message(sink: TextIO, original: str, content: str, role: str = 'assistant') -> None:
    """Write the appended transcript to *sink*. Validates *role* before writing anything."""
    sink.write(render_appended(original, content, role))
    sink.flush()
