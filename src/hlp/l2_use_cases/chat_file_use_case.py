"""Use case: answer a transcript file with one streamed reply."""

from __future__ import annotations

import io
import logging
from collections.abc import Callable

from hlp.l1_entities.config import ChatConfig
from hlp.l1_entities.transcript import parse_transcript
from hlp.l2_use_cases.ports.llm_client import ChatRequest, ChatStreamer
from hlp.l2_use_cases.stream_chat_use_case import StreamChatUseCase

log = logging.getLogger('hlp.session')


class ChatFileUseCase:
    """Parses a transcript, streams the assistant reply through *write*, returns the reply."""

    def __init__(self, streamer: ChatStreamer, config: ChatConfig, write: Callable[[str], object]) -> None:
        self._stream = StreamChatUseCase(streamer)
        self._config = config
        self._write = write

    async def execute(self, transcript: str) -> str:
        """Returns the reply text. Raises InvalidRoleError before any request is sent."""
        messages = parse_transcript(io.StringIO(transcript))
        log.debug('Parsed transcript: %d messages', len(messages))
        request = ChatRequest(
            messages=messages,
            model=self._config.model,
            max_tokens=self._config.max_tokens,
            temperature=self._config.temperature,
        )
        state = await self._stream.execute(request, self._write, timeout=self._config.timeout)
        if state.needs_trailing_newline:
            self._write('\n')
        return state.text

