"""Unit tests for AppConfig class."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from configuration import AppConfig, LogicError, configuration
from kvstore.in_memory_store import InMemoryStore
from tests.unit import config_dict


def test_default_configuration() -> None:
    """Test that configuration properties fail when nothing is loaded."""
    cfg = AppConfig()
    cfg._configuration = None  # pylint: disable=protected-access
    cfg._kv_store = None  # pylint: disable=protected-access

    assert cfg.is_loaded() is False
    with pytest.raises(LogicError, match="logic error: configuration is not loaded"):
        _ = cfg.configuration
    with pytest.raises(LogicError):
        _ = cfg.service_configuration
    with pytest.raises(LogicError):
        _ = cfg.llama_stack_configuration
    with pytest.raises(LogicError):
        _ = cfg.session_configuration
    with pytest.raises(LogicError):
        _ = cfg.identity_configuration
    with pytest.raises(LogicError):
        _ = cfg.authorization_configuration
    with pytest.raises(LogicError):
        _ = cfg.storage_configuration
    with pytest.raises(LogicError):
        _ = cfg.quota_configuration
    with pytest.raises(LogicError):
        _ = cfg.kv_store


def test_singleton() -> None:
    """Test that AppConfig is a singleton."""
    assert AppConfig() is configuration


def test_init_from_dict() -> None:
    """Test that all sections are available after initialization."""
    cfg = AppConfig()
    cfg.init_from_dict(config_dict)

    assert cfg.is_loaded() is True
    assert cfg.configuration.name == "test"
    assert cfg.service_configuration.port == 8080
    assert cfg.llama_stack_configuration.url == "http://test.com:1234"
    assert cfg.session_configuration.ttl == 3600
    assert cfg.identity_configuration.module == "noop"
    assert cfg.authorization_configuration.admin_emails == ["admin@example.com"]
    assert cfg.storage_configuration.type == "memory"
    assert cfg.quota_configuration.default_monthly_limit == 50


def test_init_from_dict_with_unknown_field() -> None:
    """Test that unknown configuration field is rejected."""
    with pytest.raises(ValidationError):
        AppConfig().init_from_dict(config_dict | {"mcp_servers": []})


def test_kv_store_is_created_once() -> None:
    """Test that the store is created lazily and reused."""
    cfg = AppConfig()
    cfg.init_from_dict(config_dict)

    store = cfg.kv_store
    assert isinstance(store, InMemoryStore)
    assert cfg.kv_store is store

    # new configuration means new store
    cfg.init_from_dict(config_dict)
    assert cfg.kv_store is not store


def test_load_configuration(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test loading configuration from YAML file with environment variables."""
    monkeypatch.setenv("TEST_SESSION_SECRET", "secret-from-environment-variable-0123456789")
    cfg_filename = tmp_path / "wordgarden.yaml"
    cfg_filename.write_text(
        """
name: WordGarden
service:
  host: 0.0.0.0
  port: 8080
llama_stack:
  url: http://localhost:8321
session:
  secret: ${env.TEST_SESSION_SECRET}
identity:
  module: noop
quota:
  default_monthly_limit: 100
""",
        encoding="utf-8",
    )

    cfg = AppConfig()
    cfg.load_configuration(str(cfg_filename))

    assert cfg.configuration.name == "WordGarden"
    assert cfg.service_configuration.host == "0.0.0.0"
    assert (
        cfg.session_configuration.secret.get_secret_value()
        == "secret-from-environment-variable-0123456789"
    )
    assert cfg.quota_configuration.default_monthly_limit == 100
    assert cfg.quota_configuration.default_daily_limit == 10


def test_load_configuration_missing_file() -> None:
    """Test loading configuration from file that does not exist."""
    with pytest.raises(FileNotFoundError):
        AppConfig().load_configuration("/nonexistent/wordgarden.yaml")
