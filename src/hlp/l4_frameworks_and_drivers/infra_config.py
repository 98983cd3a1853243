"""Infrastructure provider configs — lives in L4, not domain."""

from __future__ import annotations

import copy
from typing import Literal

from pydantic import BaseModel, Field

from hlp.l1_entities.config import AppConfig
from hlp.l3_interface_adapters.gateways.yaml_config_loader import deep_merge

APP_CONFIG_DEFAULTS: dict = {
    'chat': {
        'model': 'gpt-4o-mini',
        'timeout': 120.0,
        'max_tokens': 0,
        'temperature': None,
    },
}


def build_app_config(raw: dict) -> AppConfig:
    """Merge *raw* user overrides on top of defaults, then validate."""
    merged = copy.deepcopy(APP_CONFIG_DEFAULTS)
    deep_merge(merged, raw)
    return AppConfig.model_validate(merged)


class OllamaProviderConfig(BaseModel):
    host: str = 'http://localhost:11434'


class OpenAIProviderConfig(BaseModel):
    api_key: str | None = None  # None → SDK reads OPENAI_API_KEY env
    base_url: str = 'https://api.openai.com/v1'
    stream: bool = True


class InfraConfig(BaseModel):
    """Groups all provider-specific settings outside the domain layer."""

    llm_provider: Literal['openai', 'ollama'] = 'openai'
    ollama: OllamaProviderConfig = Field(default_factory=OllamaProviderConfig)
    openai: OpenAIProviderConfig = Field(default_factory=OpenAIProviderConfig)


# Named config keys exposed by `hlp config`, each a path into the YAML document.
CONFIG_KEYS: dict[str, tuple[str, ...]] = {
    'model': ('chat', 'model'),
    'timeout': ('chat', 'timeout'),
    'provider': ('llm_provider',),
    'endpoint': ('openai', 'base_url'),
    'api_key': ('openai', 'api_key'),
    'stream': ('openai', 'stream'),
    'ollama_host': ('ollama', 'host'),
}


def get_config_value(config: AppConfig, infra: InfraConfig, key: str) -> object:
    """Resolved value of a named key (defaults applied). Raises KeyError for unknown keys."""
    path = CONFIG_KEYS[key]
    node: object = config if path[0] in APP_CONFIG_DEFAULTS else infra
    for part in path:
        node = getattr(node, part)
    return node


def set_config_value(raw: dict, key: str, value: str) -> dict:
    """Return a copy of *raw* with *key* set to *value*, validated against both schemas.

    Raises KeyError for unknown keys and pydantic.ValidationError for bad values.
    """
    path = CONFIG_KEYS[key]
    updated = copy.deepcopy(raw)
    node = updated
    for part in path[:-1]:
        node = node.setdefault(part, {})
    node[path[-1]] = value

    # store the coerced value, e.g. 'false' → False
    node[path[-1]] = get_config_value(build_app_config(updated), InfraConfig.model_validate(updated), key)
    return updated
