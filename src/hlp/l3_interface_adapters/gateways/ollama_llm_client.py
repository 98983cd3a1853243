"""Gateway: Ollama streaming client — implements ChatStreamer port."""

from __future__ import annotations

from collections.abc import AsyncIterator

import ollama as ollama_sync

from hlp.l2_use_cases.ports.llm_client import ChatRequest


class OllamaChatStreamer:
    """Wraps ollama.AsyncClient to implement the ChatStreamer protocol."""

    def __init__(self, host: str = 'http://localhost:11434') -> None:
        self._host = host

    async def stream(self, request: ChatRequest) -> AsyncIterator[str]:
        client = ollama_sync.AsyncClient(host=self._host)
        options: dict = {}
        if request.max_tokens > 0:
            options['num_predict'] = request.max_tokens
        if request.temperature is not None:
            options['temperature'] = request.temperature

        parts = await client.chat(
            model=request.model,
            messages=[m.model_dump() for m in request.messages],
            stream=True,
            options=options or None,
        )
        try:
            async for part in parts:
                content = part.message.content
                if content:
                    yield content
        finally:
            await parts.aclose()

    def check_connectivity(self) -> tuple[bool, str]:
        try:
            client = ollama_sync.Client(host=self._host)
            client.list()
            return True, ''
        except Exception as e:
            return False, f'Cannot connect to Ollama: {e}'
