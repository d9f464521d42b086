"""Unit tests for the /generate REST API endpoint."""

from typing import Any

import httpx
import pytest
from fastapi import HTTPException
from llama_stack_client import APIConnectionError
from pytest_mock import MockerFixture

from app.endpoints.generate import generate_endpoint_handler
from authentication.interface import AuthTuple
from configuration import configuration
from models.requests import GenerateRequest
from models.usage import LimitOverride
from services.accounting import get_accounting

AUTH: AuthTuple = ("u-1", "jo@example.com", "token")


@pytest.fixture(name="mock_client")
def mock_client_fixture(mocker: MockerFixture) -> Any:
    """Mock Llama Stack client used by generation backend."""
    mock_holder = mocker.patch("services.generation.AsyncLlamaStackClientHolder")
    mock_client = mocker.AsyncMock()
    mock_client.inference.completion.return_value = mocker.Mock(content="haiku")
    mock_holder.return_value.get_client.return_value = mock_client
    return mock_client


@pytest.mark.asyncio
async def test_generate(mock_client: Any) -> None:
    """Test successful generation."""
    response = await generate_endpoint_handler(
        body=GenerateRequest(prompt="Write a haiku"), auth=AUTH
    )

    assert response.result == "haiku"
    kwargs = mock_client.inference.completion.call_args.kwargs
    assert kwargs["content"] == "Write a haiku"
    assert kwargs["sampling_params"]["max_tokens"] == 512

    usage = get_accounting().quota_ledger.usage("u-1")
    assert usage.record.monthly_count == 1
    # calling user is recorded in directory
    assert get_accounting().user_directory.get("u-1") is not None


@pytest.mark.asyncio
async def test_generate_quota_exceeded(mock_client: Any) -> None:
    """Test that exhausted quota results in 429 response."""
    get_accounting().limit_resolver.update_override(
        "u-1", LimitOverride(monthly_limit=0)
    )

    with pytest.raises(HTTPException) as exc_info:
        await generate_endpoint_handler(
            body=GenerateRequest(prompt="Write a haiku"), auth=AUTH
        )

    assert exc_info.value.status_code == 429
    assert exc_info.value.detail["quota"] == "monthly"  # type: ignore
    mock_client.inference.completion.assert_not_awaited()


@pytest.mark.asyncio
async def test_generate_backend_failure(mock_client: Any) -> None:
    """Test that backend failure results in 500 and quota is not consumed."""
    mock_client.inference.completion.side_effect = APIConnectionError(
        request=httpx.Request("POST", "http://test.com:1234")
    )

    with pytest.raises(HTTPException) as exc_info:
        await generate_endpoint_handler(
            body=GenerateRequest(prompt="Write a haiku"), auth=AUTH
        )

    assert exc_info.value.status_code == 500
    assert exc_info.value.detail["response"] == "Generation failed"  # type: ignore
    assert get_accounting().quota_ledger.usage("u-1").record.monthly_count == 0


@pytest.mark.asyncio
async def test_generate_uses_configured_store(mock_client: Any) -> None:
    """Test that the usage is stored in configured key-value store."""
    await generate_endpoint_handler(
        body=GenerateRequest(prompt="Write a haiku"), auth=AUTH
    )
    assert "quota:u-1" in configuration.kv_store.list_keys("quota:")
    mock_client.inference.completion.assert_awaited_once()
