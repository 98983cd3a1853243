"""Gateway: OpenAI-compatible streaming client — implements ChatStreamer port.

Works with any OpenAI-compatible API: OpenAI, Gemini, Groq, Together, vLLM, etc.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

import openai

from hlp.l2_use_cases.ports.llm_client import ChatRequest

log = logging.getLogger('hlp.llm')


def create_params(request: ChatRequest) -> dict:
    """Map a ChatRequest onto chat.completions.create keyword arguments."""
    params: dict = {
        'model': request.model,
        'messages': [{'role': m.role, 'content': m.content} for m in request.messages],
    }
    if request.max_tokens > 0:
        params['max_tokens'] = request.max_tokens
    if request.temperature is not None:
        params['temperature'] = request.temperature
    return params


class OpenAICompatChatStreamer:
    """Wraps openai.AsyncOpenAI to implement the ChatStreamer protocol.

    With ``stream=False`` a single non-streaming completion is requested and
    its whole content is yielded once, for providers without SSE support.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = 'https://api.openai.com/v1',
        *,
        stream: bool = True,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._stream = stream

    async def stream(self, request: ChatRequest) -> AsyncIterator[str]:
        client = openai.AsyncOpenAI(api_key=self._api_key, base_url=self._base_url)
        params = create_params(request)
        log.debug('OpenAI request: base_url=%s model=%s stream=%s', self._base_url, request.model, self._stream)

        if not self._stream:
            resp = await client.chat.completions.create(**params)
            yield resp.choices[0].message.content or ''
            return

        chunks = await client.chat.completions.create(**params, stream=True)
        try:
            async for chunk in chunks:
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content
                if content:
                    yield content
        finally:
            await chunks.close()
