import logging

from xelement.config import XElementConfig, load_config
from xelement.registry import ElementRegistry


def test_defaults():
    config = load_config({})
    assert config == XElementConfig()
    assert config.external_writes is True
    assert config.log_level_number == logging.WARNING
    assert config.definitions_path is None


def test_env_values():
    config = load_config(
        {"XEL_EXTERNAL_WRITES": "no", "XEL_LOG_LEVEL": "debug", "XEL_DEFINITIONS": "defs.toml"}
    )
    assert config.external_writes is False
    assert config.log_level == "DEBUG"
    assert config.log_level_number == logging.DEBUG
    assert config.definitions_path == "defs.toml"


def test_unrecognised_values_fall_back():
    config = load_config({"XEL_EXTERNAL_WRITES": "maybe", "XEL_LOG_LEVEL": "chatty"})
    assert config.external_writes is True
    assert config.log_level_number == logging.WARNING


def test_registry_reads_process_environment(monkeypatch):
    monkeypatch.setenv("XEL_EXTERNAL_WRITES", "false")
    assert ElementRegistry().config.external_writes is False
