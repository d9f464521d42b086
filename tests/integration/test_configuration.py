"""Integration tests for configuration loading and handling."""

from pathlib import Path

import pytest

from configuration import LogicError, configuration
from kvstore.in_memory_store import InMemoryStore


def test_default_configuration() -> None:
    """Test that exception is raised when configuration is not loaded."""
    with pytest.raises(LogicError, match="logic error: configuration is not loaded"):
        configuration.configuration  # pylint: disable=pointless-statement


def test_loading_proper_configuration(configuration_filename: str) -> None:
    """Test the configuration loading."""
    cfg = configuration
    cfg.load_configuration(configuration_filename)

    assert cfg.configuration.name == "WordGarden usage service"

    svc_config = cfg.service_configuration
    assert svc_config.host == "localhost"
    assert svc_config.port == 8080
    assert svc_config.workers == 1

    ls_config = cfg.llama_stack_configuration
    assert ls_config.url == "http://localhost:8321"
    assert ls_config.model_id == "meta-llama/Llama-3.1-8B-Instruct"

    assert cfg.session_configuration.ttl == 3600
    assert cfg.identity_configuration.module == "noop"
    assert cfg.authorization_configuration.is_admin("Admin@Example.com")

    assert cfg.quota_configuration.default_monthly_limit == 50
    assert cfg.quota_configuration.default_daily_limit == 10

    assert isinstance(cfg.kv_store, InMemoryStore)


def test_loading_configuration_with_env_variable(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test that environment variables are replaced in configuration."""
    monkeypatch.setenv("WG_SESSION_SECRET", "secret-from-environment-variable-32chars")
    config_file = tmp_path / "wordgarden.yaml"
    config_file.write_text(
        """
name: env test
service:
  host: localhost
  port: 8080
llama_stack:
  url: http://localhost:8321
session:
  secret: ${env.WG_SESSION_SECRET}
identity:
  module: noop
storage:
  type: memory
"""
    )

    configuration.load_configuration(str(config_file))

    secret = configuration.session_configuration.secret.get_secret_value()
    assert secret == "secret-from-environment-variable-32chars"
