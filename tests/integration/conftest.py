"""Shared fixtures for integration tests."""

from pathlib import Path
from typing import Any, Generator

import pytest
from fastapi.testclient import TestClient
from pytest_mock import MockerFixture

from configuration import configuration


@pytest.fixture(autouse=True)
def reset_configuration_state() -> Generator:
    """Reset configuration state before each integration test.

    This autouse fixture ensures test independence by resetting the
    singleton configuration state before each test runs.
    """
    # pylint: disable=protected-access
    configuration._configuration = None
    configuration._kv_store = None
    yield


@pytest.fixture(name="configuration_filename")
def configuration_filename_fixture() -> str:
    """Retrieve configuration file name to be used by integration tests."""
    return str(Path(__file__).parent.parent / "configuration" / "wordgarden.yaml")


@pytest.fixture(name="test_config")
def test_config_fixture(configuration_filename: str) -> Generator:
    """Load real configuration for integration tests."""
    configuration.load_configuration(configuration_filename)
    yield configuration


@pytest.fixture(name="client")
def client_fixture(test_config: Any) -> TestClient:
    """Test client for the application using loaded configuration.

    The application lifespan is not started, so no connection to Llama Stack
    is attempted.
    """
    assert test_config.is_loaded()
    # the application must be imported after configuration is loaded
    from app.main import app  # pylint: disable=import-outside-toplevel

    return TestClient(app)


@pytest.fixture(name="llama_client")
def llama_client_fixture(mocker: MockerFixture) -> Any:
    """Mocked Llama Stack client returning fixed completion."""
    mock_holder = mocker.patch("services.generation.AsyncLlamaStackClientHolder")
    mock_client = mocker.AsyncMock()
    mock_client.inference.completion.return_value = mocker.Mock(
        content="Red globes ripening"
    )
    mock_holder.return_value.get_client.return_value = mock_client
    return mock_client

