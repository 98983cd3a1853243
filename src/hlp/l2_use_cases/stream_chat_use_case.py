"""Use case: drive one streaming chat exchange."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from hlp.l1_entities.errors import StreamFailedError
from hlp.l2_use_cases.ports.llm_client import ChatRequest, ChatStreamer

log = logging.getLogger('hlp.llm')

DEFAULT_TIMEOUT = 120.0


@dataclass
class StreamState:
    """Mutable state for one request: received chunks and the last non-empty delta."""

    chunks: list[str] = field(default_factory=list)
    last_delta: str = ''

    @property
    def text(self) -> str:
        return ''.join(self.chunks)

    @property
    def needs_trailing_newline(self) -> bool:
        """True when the reply did not end on its own line."""
        return not self.last_delta.endswith('\n')

    def record(self, delta: str) -> None:
        self.chunks.append(delta)
        self.last_delta = delta


class StreamChatUseCase:
    """Streams one reply, forwarding each non-empty delta to a sink.

    Sink exceptions propagate unchanged and stop the stream. Service errors and
    an exceeded deadline surface as StreamFailedError.
    """

    def __init__(self, streamer: ChatStreamer) -> None:
        self._streamer = streamer

    async def execute(
        self,
        request: ChatRequest,
        sink: Callable[[str], object],
        timeout: float | None = None,
    ) -> StreamState:
        deadline = timeout or DEFAULT_TIMEOUT
        state = StreamState()
        log.debug(
            'Streaming: model=%s messages=%d max_tokens=%d timeout=%.0fs',
            request.model,
            len(request.messages),
            request.max_tokens,
            deadline,
        )
        try:
            async with asyncio.timeout(deadline) as scope:
                await self._consume(request, sink, state)
        except TimeoutError as e:
            # a TimeoutError raised by the sink is not a missed deadline
            if not scope.expired():
                raise
            log.warning('Stream exceeded %.0fs deadline after %d chunks', deadline, len(state.chunks))
            raise StreamFailedError(f'request timed out after {deadline:g}s') from e
        log.debug('Stream finished: %d chunks, %d chars', len(state.chunks), len(state.text))
        return state

    async def _consume(self, request: ChatRequest, sink: Callable[[str], object], state: StreamState) -> None:
        deltas = aiter(self._streamer.stream(request))
        try:
            while True:
                try:
                    delta = await anext(deltas)
                except StopAsyncIteration:
                    return
                except StreamFailedError:
                    raise
                except Exception as e:
                    log.warning('Stream failed: %s', e)
                    raise StreamFailedError(str(e)) from e
                if not delta:
                    continue
                state.record(delta)
                sink(delta)
        finally:
            aclose = getattr(deltas, 'aclose', None)
            if aclose is not None:
                await aclose()
