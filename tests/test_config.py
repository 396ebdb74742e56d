"""
Tests for YAML configuration loading.
"""

import logging

import pytest
from wazir.config import GameConfig, default_config, load_config, load_config_from_yaml


def test_load_config_default():
    config = load_config()
    assert config == default_config
    assert config is not default_config


def test_load_config_from_yaml(tmp_path):
    path = tmp_path / "wazir.yaml"
    path.write_text("data_dir: /tmp/wazir-data\nmax_num_players: 12\nlog_level: DEBUG\n")

    config = load_config(str(path))
    assert config.data_dir == "/tmp/wazir-data"
    assert config.max_num_players == 12
    assert config.log_level == "DEBUG"
    assert config.default_num_players == GameConfig().default_num_players


def test_empty_yaml_uses_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config_from_yaml(str(path)) == default_config


def test_unknown_keys_are_ignored_with_warning(tmp_path, caplog):
    path = tmp_path / "wazir.yaml"
    path.write_text("llm_model: gpt-4\nmax_num_players: 8\n")

    with caplog.at_level(logging.WARNING):
        config = load_config_from_yaml(str(path))

    assert config.max_num_players == 8
    assert not hasattr(config, "llm_model")
    assert "Unknown config key 'llm_model'" in caplog.text


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config_from_yaml(str(tmp_path / "nope.yaml"))
