"""Unit tests for the service entry point."""

import os

import pytest
from pytest_mock import MockerFixture

import constants
from wordgarden_service import create_argument_parser, main


def test_create_argument_parser() -> None:
    """Test default values of command line arguments."""
    args = create_argument_parser().parse_args([])
    assert args.verbose is False
    assert args.dump_configuration is False
    assert args.config_file == "wordgarden.yaml"


def test_parse_arguments() -> None:
    """Test parsing all command line arguments."""
    args = create_argument_parser().parse_args(["-v", "-d", "-c", "other.yaml"])
    assert args.verbose is True
    assert args.dump_configuration is True
    assert args.config_file == "other.yaml"


def test_main_starts_service(
    mocker: MockerFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test that configuration is loaded and Uvicorn started."""
    monkeypatch.setattr("sys.argv", ["wordgarden-service", "-c", "custom.yaml"])
    monkeypatch.setenv(constants.CONFIGURATION_PATH_ENV_VARIABLE, "wordgarden.yaml")
    mock_load = mocker.patch("wordgarden_service.configuration.load_configuration")
    mock_start = mocker.patch("wordgarden_service.start_uvicorn")

    main()

    mock_load.assert_called_once_with("custom.yaml")
    mock_start.assert_called_once()
    assert os.environ[constants.CONFIGURATION_PATH_ENV_VARIABLE] == "custom.yaml"


def test_main_dumps_configuration(
    mocker: MockerFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test that service is not started when configuration is dumped."""
    monkeypatch.setattr("sys.argv", ["wordgarden-service", "-d"])
    mocker.patch("wordgarden_service.configuration.load_configuration")
    mock_dump = mocker.patch("models.config.Configuration.dump")
    mock_start = mocker.patch("wordgarden_service.start_uvicorn")

    main()

    mock_dump.assert_called_once()
    mock_start.assert_not_called()


def test_main_dump_failure(
    mocker: MockerFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test that failure of configuration dump ends the process."""
    monkeypatch.setattr("sys.argv", ["wordgarden-service", "-d"])
    mocker.patch("wordgarden_service.configuration.load_configuration")
    mocker.patch("models.config.Configuration.dump", side_effect=OSError("read-only"))

    with pytest.raises(SystemExit):
        main()
