"""Gateway: YAML configuration store — loads and saves the user's config file."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from hlp.l3_interface_adapters.gateways.paths import DEFAULT_CONFIG_PATHS

log = logging.getLogger('hlp.config')


class YamlConfigLoader:
    """Loads raw config dicts from YAML files with merge and override support."""

    def load_raw(
        self,
        config_path: str | None = None,
        overrides: dict | None = None,
    ) -> dict:
        """Return the merged YAML data as a raw dict (before Pydantic validation)."""
        data: dict = {}
        path = self.resolve_path(config_path)
        if config_path is not None and not path.exists():
            raise FileNotFoundError(f'Config file not found: {path}')
        if path.exists():
            data = yaml.safe_load(path.read_text(encoding='utf-8')) or {}
            log.debug('Loaded config from %s', path)
        if overrides:
            deep_merge(data, overrides)
        return data

    def save_raw(self, data: dict, config_path: str | None = None) -> Path:
        """Write *data* as YAML, creating the config directory if needed."""
        path = self.resolve_path(config_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump(data, sort_keys=False, allow_unicode=True), encoding='utf-8')
        log.debug('Saved config to %s', path)
        return path

    @staticmethod
    def resolve_path(config_path: str | None = None) -> Path:
        """Explicit path if given, else the first existing default, else the primary default."""
        if config_path is not None:
            return Path(config_path)
        for default_path in DEFAULT_CONFIG_PATHS:
            if default_path.exists():
                return default_path
        return DEFAULT_CONFIG_PATHS[0]


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (mutates base)."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base
