"""Llama stack client retrieval."""

import logging

from typing import Optional

from llama_stack_client import AsyncLlamaStackClient  # type: ignore
from models.config import LlamaStackConfiguration
from utils.types import Singleton


logger = logging.getLogger(__name__)


class AsyncLlamaStackClientHolder(metaclass=Singleton):
    """Container for an initialised AsyncLlamaStackClient."""

    _lsc: Optional[AsyncLlamaStackClient] = None

    async def load(self, llama_stack_config: LlamaStackConfiguration) -> None:
        """Construct Async Llama stack client according to configuration."""
        logger.info("Using Llama stack running as a service at %s", llama_stack_config.url)
        api_key = (
            llama_stack_config.api_key.get_secret_value()
            if llama_stack_config.api_key is not None
            else None
        )
        self._lsc = AsyncLlamaStackClient(
            base_url=llama_stack_config.url,
            api_key=api_key,
            timeout=llama_stack_config.timeout,
            max_retries=0,
        )

    def is_loaded(self) -> bool:
        """Check if the client has been initialised."""
        return self._lsc is not None

    def get_client(self) -> AsyncLlamaStackClient:
        """Return an initialised AsyncLlamaStackClient."""
        if not self._lsc:
            raise RuntimeError(
                "AsyncLlamaStackClient has not been initialised. Ensure 'load(..)' has been called."
            )
        return self._lsc
