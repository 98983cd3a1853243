"""Use case: interactive chat loop — stream a reply, prompt, repeat."""

from __future__ import annotations

import asyncio
import enum
import logging
import threading
from collections.abc import Callable

from hlp.l1_entities.chat_message import ChatMessage
from hlp.l1_entities.config import ChatConfig
from hlp.l1_entities.errors import SilentTerminationError
from hlp.l2_use_cases.ports.interrupt_watcher import InterruptWatcher
from hlp.l2_use_cases.ports.line_reader import LineReader
from hlp.l2_use_cases.ports.llm_client import ChatRequest, ChatStreamer
from hlp.l2_use_cases.stream_chat_use_case import StreamChatUseCase

log = logging.getLogger('hlp.session')


class SessionOutcome(enum.Enum):
    ONCE = 'once'  # ask-once mode finished its single reply
    STOPPED = 'stopped'  # blank line or interrupt at the prompt


class InteractiveSessionUseCase:
    """Alternates between streaming a reply and reading the next user line.

    Every reply is echoed through *write* as it arrives. Between replies the
    session writes *prompt* and waits, with no timeout, for either a line of
    input or an interrupt. A closed input stream raises SilentTerminationError;
    any other failure aborts the session and propagates.
    """

    def __init__(
        self,
        streamer: ChatStreamer,
        config: ChatConfig,
        reader: LineReader,
        interrupts: InterruptWatcher,
        write: Callable[[str], object],
        *,
        prompt: str = '> ',
        once: bool = False,
    ) -> None:
        self._stream = StreamChatUseCase(streamer)
        self._config = config
        self._reader = reader
        self._interrupts = interrupts
        self._write = write
        self._prompt = prompt
        self._once = once
        self.conversation: list[ChatMessage] = []

    async def run(self, messages: list[ChatMessage]) -> SessionOutcome:
        self.conversation = list(messages)
        while True:
            response = await self._respond()
            if self._once:
                return SessionOutcome.ONCE

            self._write(self._prompt)
            line = await self.await_input()
            if line is None:
                log.debug('Session stopped after %d messages', len(self.conversation))
                return SessionOutcome.STOPPED

            self.conversation.append(ChatMessage(role='assistant', content=response))
            self.conversation.append(ChatMessage(role='user', content=line))

    async def _respond(self) -> str:
        request = ChatRequest(
            messages=list(self.conversation),
            model=self._config.model,
            max_tokens=self._config.max_tokens,
            temperature=self._config.temperature,
        )
        state = await self._stream.execute(request, self._write, timeout=self._config.timeout)
        if state.needs_trailing_newline:
            self._write('\n')
        return state.text

    async def await_input(self) -> str | None:
        """Race the next input line against an interrupt.

        Returns the stripped line, or None when the user interrupted or entered
        a blank line.
        """
        loop = asyncio.get_running_loop()
        interrupted = asyncio.Event()
        line_future: asyncio.Future[str] = loop.create_future()

        self._interrupts.start(interrupted.set)
        interrupt_wait = asyncio.ensure_future(interrupted.wait())
        try:
            _read_in_background(self._reader, line_future, loop)
            await asyncio.wait({line_future, interrupt_wait}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            self._interrupts.stop()
            interrupt_wait.cancel()

        if interrupted.is_set():
            log.debug('Interrupted at prompt')
            if not line_future.done():
                line_future.cancel()
            return None

        try:
            raw = line_future.result()
        except (EOFError, BrokenPipeError) as e:
            raise SilentTerminationError(e) from e
        except ValueError as e:
            # io raises ValueError for reads on a closed file
            if 'closed' not in str(e):
                raise
            raise SilentTerminationError(e) from e

        if not raw:
            raise SilentTerminationError(EOFError('end of input'))
        return raw.strip() or None


def _read_in_background(
    reader: LineReader,
    future: asyncio.Future[str],
    loop: asyncio.AbstractEventLoop,
) -> None:
    """Run the blocking readline on a daemon thread and settle *future* on the loop."""

    def _run() -> None:
        try:
            line = reader.readline()
        except Exception as e:  # noqa: BLE001 -- handed to the waiting loop
            _deliver(loop, future, None, e)
        else:
            _deliver(loop, future, line, None)

    threading.Thread(target=_run, name='hlp-readline', daemon=True).start()


def _deliver(
    loop: asyncio.AbstractEventLoop,
    future: asyncio.Future[str],
    line: str | None,
    error: Exception | None,
) -> None:
    try:
        loop.call_soon_threadsafe(_settle, future, line, error)
    except RuntimeError:
        log.debug('Dropped input read after the event loop closed')


def _settle(future: asyncio.Future[str], line: str | None, error: Exception | None) -> None:
    if future.done():
        return
    if error is not None:
        future.set_exception(error)
    else:
        future.set_result(line or '')
