"""Shared test fixtures and protocol-conforming fakes."""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Callable
from pathlib import Path

import pytest

from hlp.l1_entities.chat_message import ChatMessage
from hlp.l1_entities.config import ChatConfig
from hlp.l2_use_cases.ports.llm_client import ChatRequest

# --- Protocol-conforming Fakes ---


class FakeChatStreamer:
    """Fake streaming client: yields scripted deltas, optionally failing part-way."""

    def __init__(
        self,
        deltas: list[str] | None = None,
        *,
        error: Exception | None = None,
        fail_at: int | None = None,
        delay: float = 0.0,
    ) -> None:
        self._deltas = list(deltas if deltas is not None else ['Fake', ' reply'])
        self._error = error
        self._fail_at = fail_at
        self._delay = delay
        self.requests: list[ChatRequest] = []
        self.yielded: list[str] = []
        self.closed = False

    def set_deltas(self, deltas: list[str]) -> None:
        self._deltas = list(deltas)

    async def stream(self, request: ChatRequest):
        self.requests.append(request)
        try:
            for i, delta in enumerate(self._deltas):
                if self._error is not None and self._fail_at == i:
                    raise self._error
                if self._delay:
                    await asyncio.sleep(self._delay)
                self.yielded.append(delta)
                yield delta
            if self._error is not None and (self._fail_at is None or self._fail_at >= len(self._deltas)):
                raise self._error
        finally:
            self.closed = True


class FakeLineReader:
    """Fake line source; each entry is returned (or raised, if an exception) in order."""

    def __init__(self, lines: list[str | BaseException] | None = None) -> None:
        self._lines = list(lines or [])
        self.read_calls = 0

    def readline(self) -> str:
        self.read_calls += 1
        if not self._lines:
            return ''
        item = self._lines.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


class BlockingLineReader:
    """Blocks until released, then reports end of input."""

    def __init__(self) -> None:
        self.release = threading.Event()

    def readline(self) -> str:
        self.release.wait(timeout=5)
        return ''


class FakeInterruptWatcher:
    """Records registration; optionally delivers an interrupt as soon as it is started."""

    def __init__(self, *, fire_on_start: bool = False) -> None:
        self._fire_on_start = fire_on_start
        self.start_calls = 0
        self.stop_calls = 0
        self.active = False

    def start(self, on_interrupt: Callable[[], None]) -> None:
        self.start_calls += 1
        self.active = True
        if self._fire_on_start:
            asyncio.get_running_loop().call_soon(on_interrupt)

    def stop(self) -> None:
        self.stop_calls += 1
        self.active = False


# --- Standard Fixtures ---


@pytest.fixture(autouse=True)
def isolated_config_paths(tmp_path: Path, monkeypatch):
    """Keep every test away from the real user config directory."""
    import hlp.l3_interface_adapters.gateways.yaml_config_loader as mod

    config_dir = tmp_path / 'user-config'
    monkeypatch.setattr(mod, 'DEFAULT_CONFIG_PATHS', [config_dir / 'config.yaml', config_dir / 'config.yml'])
    return config_dir


@pytest.fixture
def chat_config() -> ChatConfig:
    return ChatConfig(model='test-model', timeout=5.0)


@pytest.fixture
def system_messages() -> list[ChatMessage]:
    return [ChatMessage(role='system', content='Be terse')]


@pytest.fixture
def fake_streamer() -> FakeChatStreamer:
    return FakeChatStreamer(['Hi', ' there'])


@pytest.fixture
def sample_transcript(tmp_path: Path) -> Path:
    p = tmp_path / 'notes.chat'
    p.write_text('--- system\nBe terse\n--- user\nWhat is a monad?\n', encoding='utf-8')
    return p


@pytest.fixture
def sample_config_yaml(tmp_path: Path) -> Path:
    content = """\
chat:
  model: "llama3:8b"
  timeout: 30
  max_tokens: 256
llm_provider: "ollama"
ollama:
  host: "http://my-server:11434"
"""
    p = tmp_path / 'config.yaml'
    p.write_text(content, encoding='utf-8')
    return p
