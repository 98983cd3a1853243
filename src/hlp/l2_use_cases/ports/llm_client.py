"""Port: streaming LLM chat client."""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Protocol

from hlp.l1_entities.chat_message import ChatMessage


@dataclass(frozen=True)
class ChatRequest:
    """One chat-completion request."""

    messages: list[ChatMessage]
    model: str
    max_tokens: int = 0  # <= 0 → service default
    temperature: float | None = None


class ChatStreamer(Protocol):
    """Abstract streaming chat client. Zero framework types leak through."""

    def stream(self, request: ChatRequest) -> AsyncIterator[str]:
        """Yield reply text fragments in emission order. Raises on service failure."""
        ...
