"""Configuration loader."""

import logging
from typing import Any, Optional

# We want to support environment variable replacement in the configuration
# similarly to how it is done in llama-stack, so we use their function directly
from llama_stack.core.stack import replace_env_vars

import yaml
from models.config import (
    AuthorizationConfiguration,
    Configuration,
    IdentityConfiguration,
    LlamaStackConfiguration,
    QuotaConfiguration,
    ServiceConfiguration,
    SessionTokenConfiguration,
    StorageConfiguration,
)

from kvstore.store import KeyValueStore
from kvstore.store_factory import StoreFactory


logger = logging.getLogger(__name__)


class LogicError(Exception):
    """Error in application logic."""


class AppConfig:
    """Singleton class to load and store the configuration."""

    _instance = None

    def __new__(cls, *args: Any, **kwargs: Any) -> "AppConfig":
        """Create a new instance of the class."""
        if not isinstance(cls._instance, cls):
            cls._instance = super().__new__(cls, *args, **kwargs)
        return cls._instance

    def __init__(self) -> None:
        """Initialize the class instance."""
        self._configuration: Optional[Configuration] = None
        self._kv_store: Optional[KeyValueStore] = None

    def load_configuration(self, filename: str) -> None:
        """Load configuration from YAML file."""
        with open(filename, encoding="utf-8") as fin:
            config_dict = yaml.safe_load(fin)
            config_dict = replace_env_vars(config_dict)
            logger.info("Loaded configuration from %s", filename)
            self.init_from_dict(config_dict)

    def init_from_dict(self, config_dict: dict[Any, Any]) -> None:
        """Initialize configuration from a dictionary."""
        self._configuration = Configuration(**config_dict)
        # storage needs to be re-created for new configuration
        self._kv_store = None

    def is_loaded(self) -> bool:
        """Check if configuration has been loaded."""
        return self._configuration is not None

    @property
    def configuration(self) -> Configuration:
        """Return the whole configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration

    @property
    def service_configuration(self) -> ServiceConfiguration:
        """Return service configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration.service

    @property
    def llama_stack_configuration(self) -> LlamaStackConfiguration:
        """Return Llama stack configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration.llama_stack

    @property
    def session_configuration(self) -> SessionTokenConfiguration:
        """Return session token configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration.session

    @property
    def identity_configuration(self) -> IdentityConfiguration:
        """Return identity verification configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration.identity

    @property
    def authorization_configuration(self) -> AuthorizationConfiguration:
        """Return authorization configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration.authorization

    @property
    def storage_configuration(self) -> StorageConfiguration:
        """Return key-value storage configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration.storage

    @property
    def quota_configuration(self) -> QuotaConfiguration:
        """Return quota configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration.quota

    @property
    def kv_store(self) -> KeyValueStore:
        """Return the key-value store, creating it on first access."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        if self._kv_store is None:
            self._kv_store = StoreFactory.key_value_store(self._configuration.storage)
        return self._kv_store


configuration: AppConfig = AppConfig()
