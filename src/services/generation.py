"""Generation proxy guarded by usage quota.

The quota is checked before the backend is called, and one request is counted
only after the backend returned a result. Check and commit are two separate
store operations, so two concurrent requests of the same user can both pass
the check. The quota can be exceeded by the number of such requests.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from llama_stack_client import APIError  # type: ignore

import metrics
from client import AsyncLlamaStackClientHolder
from log import get_logger
from models.config import LlamaStackConfiguration
from quota.quota_ledger import QuotaLedger

logger = get_logger(__name__)


class UpstreamFailureError(Exception):
    """Generative backend failed to produce a result."""


class GenerationBackend(ABC):  # pylint: disable=too-few-public-methods
    """Black-box text completion backend."""

    @abstractmethod
    async def complete(self, prompt: str, max_tokens: int, temperature: float) -> str:
        """Complete the prompt.

        Raises:
            UpstreamFailureError: If the backend fails.
        """


class LlamaStackGenerationBackend(GenerationBackend):  # pylint: disable=too-few-public-methods
    """Text completion made by Llama Stack inference API."""

    def __init__(self, config: LlamaStackConfiguration) -> None:
        """Initialize the backend with Llama Stack configuration."""
        self.config = config

    async def complete(self, prompt: str, max_tokens: int, temperature: float) -> str:
        """Complete the prompt with the configured model."""
        client = AsyncLlamaStackClientHolder().get_client()
        if temperature > 0:
            strategy = {"type": "top_p", "temperature": temperature, "top_p": 0.95}
        else:
            strategy = {"type": "greedy"}

        metrics.llm_calls_total.labels(self.config.model_id).inc()
        try:
            response = await client.inference.completion(
                model_id=self.config.model_id,
                content=prompt,
                sampling_params={"strategy": strategy, "max_tokens": max_tokens},
            )
        except APIError as exc:
            metrics.llm_calls_failures_total.inc()
            raise UpstreamFailureError(f"Llama Stack call failed: {exc}") from exc
        return str(response.content)


class GenerationProxy:
    """Guards generative backend by per-user quota."""

    def __init__(
        self,
        quota_ledger: QuotaLedger,
        backend: GenerationBackend,
        default_max_tokens: int,
        default_temperature: float,
    ) -> None:
        """Initialize the proxy."""
        self.quota_ledger = quota_ledger
        self.backend = backend
        self.default_max_tokens = default_max_tokens
        self.default_temperature = default_temperature

    async def generate(  # pylint: disable=too-many-arguments,too-many-positional-arguments
        self,
        subject_id: str,
        prompt: str,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        now: Optional[datetime] = None,
    ) -> str:
        """Generate text for given subject.

        Raises:
            QuotaExceedError: If the subject has no quota left. Backend is not
                called in this case.
            UpstreamFailureError: If the backend failed. No quota is consumed.
        """
        self.quota_ledger.ensure_available_quota(subject_id, now)

        try:
            result = await self.backend.complete(
                prompt,
                max_tokens if max_tokens is not None else self.default_max_tokens,
                (
                    temperature
                    if temperature is not None
                    else self.default_temperature
                ),
            )
        except UpstreamFailureError as exc:
            logger.error("Generation for subject %s failed: %s", subject_id, exc)
            raise

        self.quota_ledger.commit(subject_id, now)
        return result


def get_generation_proxy(
    quota_ledger: QuotaLedger, config: LlamaStackConfiguration
) -> GenerationProxy:
    """Construct generation proxy backed by Llama Stack."""
    return GenerationProxy(
        quota_ledger,
        LlamaStackGenerationBackend(config),
        default_max_tokens=config.max_tokens,
        default_temperature=config.temperature,
    )

