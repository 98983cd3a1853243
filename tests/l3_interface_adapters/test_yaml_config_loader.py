"""Tests for YAML config loader gateway."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from hlp.l3_interface_adapters.gateways.yaml_config_loader import YamlConfigLoader, deep_merge


class TestYamlConfigLoader:
    def test_load_raw_from_yaml(self, sample_config_yaml: Path):
        raw = YamlConfigLoader().load_raw(str(sample_config_yaml))
        assert raw['chat']['model'] == 'llama3:8b'
        assert raw['llm_provider'] == 'ollama'

    def test_load_nonexistent_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            YamlConfigLoader().load_raw(str(tmp_path / 'nonexistent.yaml'))

    def test_load_with_overrides(self, sample_config_yaml: Path):
        raw = YamlConfigLoader().load_raw(str(sample_config_yaml), overrides={'chat': {'model': 'other'}})
        assert raw['chat']['model'] == 'other'
        assert raw['chat']['max_tokens'] == 256

    def test_empty_yaml_is_empty_dict(self, tmp_path: Path):
        p = tmp_path / 'empty.yaml'
        p.write_text('', encoding='utf-8')
        assert YamlConfigLoader().load_raw(str(p)) == {}

    def test_save_raw_creates_directories(self, tmp_path: Path):
        target = tmp_path / 'nested' / 'config.yaml'
        path = YamlConfigLoader().save_raw({'chat': {'model': 'x'}}, str(target))
        assert path == target
        assert yaml.safe_load(target.read_text(encoding='utf-8')) == {'chat': {'model': 'x'}}


class TestDefaultConfigResolution:
    def test_no_default_file_yields_empty(self, isolated_config_paths: Path):
        assert YamlConfigLoader().load_raw() == {}

    def test_loads_from_default_config_dir(self, isolated_config_paths: Path):
        isolated_config_paths.mkdir()
        (isolated_config_paths / 'config.yaml').write_text('chat:\n  model: from-default\n', encoding='utf-8')
        assert YamlConfigLoader().load_raw()['chat']['model'] == 'from-default'

    def test_yml_fallback(self, isolated_config_paths: Path):
        isolated_config_paths.mkdir()
        (isolated_config_paths / 'config.yml').write_text('llm_provider: ollama\n', encoding='utf-8')
        assert YamlConfigLoader.resolve_path() == isolated_config_paths / 'config.yml'

    def test_save_without_path_writes_primary_default(self, isolated_config_paths: Path):
        path = YamlConfigLoader().save_raw({'llm_provider': 'openai'})
        assert path == isolated_config_paths / 'config.yaml'
        assert path.exists()


class TestDeepMerge:
    def test_nested_merge(self):
        base = {'chat': {'model': 'a', 'timeout': 1}}
        deep_merge(base, {'chat': {'model': 'b'}})
        assert base == {'chat': {'model': 'b', 'timeout': 1}}

    def test_override_replaces_scalars(self):
        assert deep_merge({'a': {'b': 1}}, {'a': 2}) == {'a': 2}
