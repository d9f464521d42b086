"""Check if the Llama Stack version is supported by the service."""

import logging

from llama_stack_client import AsyncLlamaStackClient  # type: ignore
from semver import Version

from constants import (
    MAXIMAL_SUPPORTED_LLAMA_STACK_VERSION,
    MINIMAL_SUPPORTED_LLAMA_STACK_VERSION,
)

logger = logging.getLogger("utils.llama_stack_version")


class InvalidLlamaStackVersionException(Exception):
    """Llama Stack version is not valid."""


async def check_llama_stack_version(client: AsyncLlamaStackClient) -> None:
    """Verify that the connected Llama Stack has supported version.

    Raises:
        InvalidLlamaStackVersionException: If the version is out of range.
    """
    version_info = await client.inspect.version()
    compare_versions(
        version_info.version,
        MINIMAL_SUPPORTED_LLAMA_STACK_VERSION,
        MAXIMAL_SUPPORTED_LLAMA_STACK_VERSION,
    )


def compare_versions(version_info: str, minimal: str, maximal: str) -> None:
    """Check that semver version is in inclusive range [minimal, maximal].

    Raises:
        InvalidLlamaStackVersionException: If the version is out of range.
    """
    current_version = Version.parse(version_info)
    minimal_version = Version.parse(minimal)
    maximal_version = Version.parse(maximal)
    logger.debug(
        "Llama Stack version %s, supported range %s - %s",
        current_version,
        minimal_version,
        maximal_version,
    )

    if not minimal_version <= current_version <= maximal_version:
        raise InvalidLlamaStackVersionException(
            f"Llama Stack version in range {minimal_version} - {maximal_version} "
            f"is required, but {current_version} is used"
        )
    logger.info("Supported Llama Stack version: %s", current_version)
