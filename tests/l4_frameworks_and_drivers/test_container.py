"""Tests for the dependency container."""

from __future__ import annotations

from hlp.l2_use_cases.chat_file_use_case import ChatFileUseCase
from hlp.l2_use_cases.interactive_session_use_case import InteractiveSessionUseCase
from hlp.l3_interface_adapters.gateways.file_persistence import FileTranscriptStore
from hlp.l3_interface_adapters.gateways.ollama_llm_client import OllamaChatStreamer
from hlp.l3_interface_adapters.gateways.openai_llm_client import OpenAICompatChatStreamer
from hlp.l4_frameworks_and_drivers.container import DependencyContainer
from hlp.l4_frameworks_and_drivers.infra_config import InfraConfig, build_app_config
from hlp.l4_frameworks_and_drivers.interrupt_watcher import SignalInterruptWatcher


class TestDependencyContainer:
    def test_creates_all_components(self):
        config = build_app_config({})
        container = DependencyContainer(config)

        assert container.config is config
        assert isinstance(container.streamer, OpenAICompatChatStreamer)
        assert isinstance(container.transcripts, FileTranscriptStore)
        assert isinstance(container.interrupts, SignalInterruptWatcher)

    def test_ollama_provider(self):
        infra = InfraConfig.model_validate({'llm_provider': 'ollama', 'ollama': {'host': 'http://gpu:11434'}})
        container = DependencyContainer(build_app_config({}), infra)
        assert isinstance(container.streamer, OllamaChatStreamer)

    def test_use_case_factories(self):
        container = DependencyContainer(build_app_config({}))
        assert isinstance(container.session(once=True), InteractiveSessionUseCase)
        assert isinstance(container.chat_file(), ChatFileUseCase)
