"""Dependency container — composition root for wiring all layers together."""

from __future__ import annotations

from hlp.l1_entities.config import AppConfig
from hlp.l2_use_cases.chat_file_use_case import ChatFileUseCase
from hlp.l2_use_cases.interactive_session_use_case import InteractiveSessionUseCase
from hlp.l2_use_cases.ports.interrupt_watcher import InterruptWatcher
from hlp.l2_use_cases.ports.line_reader import LineReader
from hlp.l2_use_cases.ports.llm_client import ChatStreamer
from hlp.l2_use_cases.ports.persistence import TranscriptStore
from hlp.l3_interface_adapters.gateways.file_persistence import FileTranscriptStore
from hlp.l3_interface_adapters.gateways.ollama_llm_client import OllamaChatStreamer
from hlp.l3_interface_adapters.gateways.openai_llm_client import OpenAICompatChatStreamer
from hlp.l3_interface_adapters.gateways.stdin_line_reader import StdinLineReader
from hlp.l4_frameworks_and_drivers.infra_config import InfraConfig
from hlp.l4_frameworks_and_drivers.interrupt_watcher import SignalInterruptWatcher
from hlp.l4_frameworks_and_drivers.terminal import PROMPT, TerminalWriter


class DependencyContainer:
    """Creates and wires all concrete instances. Easy to override for testing."""

    def __init__(self, config: AppConfig, infra: InfraConfig | None = None) -> None:
        self.config = config
        self.infra = infra or InfraConfig()

        self.streamer: ChatStreamer = self._build_streamer(self.infra)
        self.transcripts: TranscriptStore = FileTranscriptStore()
        self.reader: LineReader = StdinLineReader()
        self.interrupts: InterruptWatcher = SignalInterruptWatcher()
        self.terminal = TerminalWriter()

    @staticmethod
    def _build_streamer(infra: InfraConfig) -> ChatStreamer:
        if infra.llm_provider == 'ollama':
            return OllamaChatStreamer(host=infra.ollama.host)
        return OpenAICompatChatStreamer(
            api_key=infra.openai.api_key,
            base_url=infra.openai.base_url,
            stream=infra.openai.stream,
        )

    def session(self, *, once: bool = False) -> InteractiveSessionUseCase:
        return InteractiveSessionUseCase(
            streamer=self.streamer,
            config=self.config.chat,
            reader=self.reader,
            interrupts=self.interrupts,
            write=self.terminal,
            prompt=PROMPT,
            once=once,
        )

    def chat_file(self) -> ChatFileUseCase:
        return ChatFileUseCase(self.streamer, self.config.chat, self.terminal)
