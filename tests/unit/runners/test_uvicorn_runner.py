"""Unit tests for the Uvicorn runner implementation."""

from pathlib import Path

from pytest_mock import MockerFixture

from models.config import ServiceConfiguration, TLSConfiguration
from runners.uvicorn import start_uvicorn


def test_start_uvicorn(mocker: MockerFixture) -> None:
    """Test the function to start Uvicorn server using default configuration."""
    configuration = ServiceConfiguration(host="localhost", port=8080, workers=1)

    # don't start real Uvicorn server
    mocked_run = mocker.patch("uvicorn.run")
    start_uvicorn(configuration)
    mocked_run.assert_called_once_with(
        "app.main:app",
        host="localhost",
        port=8080,
        workers=1,
        log_level="info",
        ssl_keyfile=None,
        ssl_certfile=None,
        ssl_keyfile_password="",
        use_colors=True,
        access_log=True,
    )


def test_start_uvicorn_different_host_port_and_logs(mocker: MockerFixture) -> None:
    """Test the function to start Uvicorn server using custom configuration."""
    configuration = ServiceConfiguration(
        host="0.0.0.0", port=1234, workers=10, color_log=False, access_log=False
    )

    mocked_run = mocker.patch("uvicorn.run")
    start_uvicorn(configuration)
    mocked_run.assert_called_once_with(
        "app.main:app",
        host="0.0.0.0",
        port=1234,
        workers=10,
        log_level="info",
        ssl_keyfile=None,
        ssl_certfile=None,
        ssl_keyfile_password="",
        use_colors=False,
        access_log=False,
    )


def test_start_uvicorn_with_tls(mocker: MockerFixture, tmp_path: Path) -> None:
    """Test the function to start Uvicorn server with TLS configuration."""
    key = tmp_path / "tls.key"
    certificate = tmp_path / "tls.crt"
    password = tmp_path / "password"
    for path in (key, certificate, password):
        path.write_text("x", encoding="utf-8")

    configuration = ServiceConfiguration(
        tls_config=TLSConfiguration(
            tls_key_path=key,
            tls_certificate_path=certificate,
            tls_key_password=password,
        )
    )

    mocked_run = mocker.patch("uvicorn.run")
    start_uvicorn(configuration)

    kwargs = mocked_run.call_args.kwargs
    assert kwargs["ssl_keyfile"] == key
    assert kwargs["ssl_certfile"] == certificate
    assert kwargs["ssl_keyfile_password"] == str(password)
