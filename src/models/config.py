"""Model with service configuration."""

from typing import Optional

from pydantic import (
    AnyHttpUrl,
    BaseModel,
    ConfigDict,
    Field,
    FilePath,
    NonNegativeFloat,
    PositiveInt,
    SecretStr,
    model_validator,
)
from typing_extensions import Literal, Self

import constants


class ConfigurationBase(BaseModel):
    """Base class for all configuration models that rejects unknown fields."""

    model_config = ConfigDict(extra="forbid")


class TLSConfiguration(ConfigurationBase):
    """TLS configuration."""

    tls_certificate_path: Optional[FilePath] = None
    tls_key_path: Optional[FilePath] = None
    tls_key_password: Optional[FilePath] = None


class CORSConfiguration(ConfigurationBase):
    """CORS configuration."""

    allow_origins: list[str] = [
        "*"
    ]  # not AnyHttpUrl: we need to support "*" that is not valid URL
    allow_credentials: bool = False
    allow_methods: list[str] = ["*"]
    allow_headers: list[str] = ["*"]

    @model_validator(mode="after")
    def check_cors_configuration(self) -> Self:
        """Check CORS configuration."""
        # credentials are not allowed with wildcard origins per CORS/Fetch spec.
        # see https://fastapi.tiangolo.com/tutorial/cors/
        if self.allow_credentials and "*" in self.allow_origins:
            raise ValueError(
                "Invalid CORS configuration: allow_credentials can not be set to true when "
                "allow origins contains '*' wildcard."
                "Use explicit origins or disable credential."
            )
        return self


class SQLiteDatabaseConfiguration(ConfigurationBase):
    """SQLite database configuration."""

    db_path: str


class PostgreSQLDatabaseConfiguration(ConfigurationBase):
    """PostgreSQL database configuration."""

    host: str = "localhost"
    port: PositiveInt = 5432
    db: str
    user: str
    password: SecretStr
    namespace: Optional[str] = "wordgarden"
    ssl_mode: str = constants.POSTGRES_DEFAULT_SSL_MODE
    gss_encmode: str = constants.POSTGRES_DEFAULT_GSS_ENCMODE
    ca_cert_path: Optional[FilePath] = None

    @model_validator(mode="after")
    def check_postgres_configuration(self) -> Self:
        """Check PostgreSQL configuration."""
        if self.port > 65535:
            raise ValueError("Port value should be less than 65536")
        return self


class ServiceConfiguration(ConfigurationBase):
    """Service configuration."""

    host: str = "localhost"
    port: PositiveInt = 8080
    workers: PositiveInt = 1
    color_log: bool = True
    access_log: bool = True
    tls_config: TLSConfiguration = Field(default_factory=TLSConfiguration)
    cors: CORSConfiguration = Field(default_factory=CORSConfiguration)

    @model_validator(mode="after")
    def check_service_configuration(self) -> Self:
        """Check service configuration."""
        if self.port > 65535:
            raise ValueError("Port value should be less than 65536")
        return self


class LlamaStackConfiguration(ConfigurationBase):
    """Llama stack configuration.

    Llama Stack is used as the generative AI backend. Only the service mode is
    supported, so the URL is mandatory.
    """

    url: str
    api_key: Optional[SecretStr] = None
    model_id: str = constants.DEFAULT_MODEL_ID
    max_tokens: PositiveInt = constants.DEFAULT_MAX_TOKENS
    temperature: NonNegativeFloat = constants.DEFAULT_TEMPERATURE
    timeout: PositiveInt = constants.DEFAULT_LLM_TIMEOUT


class SessionTokenConfiguration(ConfigurationBase):
    """Configuration of session tokens issued by token exchange."""

    secret: SecretStr
    ttl: PositiveInt = constants.DEFAULT_SESSION_TOKEN_TTL
    issuer: Optional[str] = None

    @model_validator(mode="after")
    def check_secret(self) -> Self:
        """Check that the signing secret is long enough for HMAC-SHA256."""
        if len(self.secret.get_secret_value()) < constants.MINIMAL_SESSION_SECRET_LENGTH:
            raise ValueError(
                "Session token secret needs to be at least "
                f"{constants.MINIMAL_SESSION_SECRET_LENGTH} characters long"
            )
        return self


class FirebaseConfiguration(ConfigurationBase):
    """Firebase identity toolkit configuration."""

    api_key: SecretStr
    url: AnyHttpUrl = Field(
        default=constants.FIREBASE_ACCOUNTS_LOOKUP_URL, validate_default=True
    )


class IdentityConfiguration(ConfigurationBase):
    """Identity verification configuration."""

    module: str = constants.DEFAULT_IDENTITY_MODULE
    timeout: PositiveInt = constants.DEFAULT_IDENTITY_TIMEOUT
    firebase: Optional[FirebaseConfiguration] = None

    @model_validator(mode="after")
    def check_identity_model(self) -> Self:
        """Validate YAML containing identity configuration section."""
        if self.module not in constants.SUPPORTED_IDENTITY_MODULES:
            supported_modules = ", ".join(sorted(constants.SUPPORTED_IDENTITY_MODULES))
            raise ValueError(
                f"Unsupported identity module '{self.module}'. "
                f"Supported modules: {supported_modules}"
            )

        if self.module == constants.IDENTITY_MOD_FIREBASE and self.firebase is None:
            raise ValueError(
                "Firebase configuration must be specified when using firebase identity module"
            )

        return self

    @property
    def firebase_configuration(self) -> FirebaseConfiguration:
        """Return Firebase configuration if the module is firebase."""
        if self.module != constants.IDENTITY_MOD_FIREBASE:
            raise ValueError(
                "Firebase configuration is only available for firebase identity module"
            )
        if self.firebase is None:
            raise ValueError("Firebase configuration should not be None")
        return self.firebase


class AuthorizationConfiguration(ConfigurationBase):
    """Authorization configuration.

    Only users with e-mail addresses listed in `admin_emails` are allowed to
    call admin endpoints.
    """

    admin_emails: list[str] = Field(default_factory=list)

    def is_admin(self, email: str) -> bool:
        """Check if given e-mail belongs to an administrator."""
        normalized = email.strip().lower()
        return any(normalized == admin.strip().lower() for admin in self.admin_emails)


class StorageConfiguration(ConfigurationBase):
    """Key-value storage configuration."""

    type: Literal["memory", "sqlite", "postgres"] | None = None
    sqlite: Optional[SQLiteDatabaseConfiguration] = None
    postgres: Optional[PostgreSQLDatabaseConfiguration] = None

    @model_validator(mode="after")
    def check_storage_configuration(self) -> Self:
        """Check storage configuration."""
        if self.type is None:
            # in-memory storage is used when nothing is configured, good
            # enough for local development
            self.type = constants.STORE_TYPE_MEMORY

        match self.type:
            case constants.STORE_TYPE_MEMORY:
                if self.sqlite is not None or self.postgres is not None:
                    raise ValueError(
                        "No database configuration should be provided for in-memory storage"
                    )
            case constants.STORE_TYPE_SQLITE:
                if self.sqlite is None:
                    raise ValueError("SQLite configuration must be provided")
                if self.postgres is not None:
                    raise ValueError("Only SQLite storage configuration can be provided")
            case constants.STORE_TYPE_POSTGRES:
                if self.postgres is None:
                    raise ValueError("PostgreSQL configuration must be provided")
                if self.sqlite is not None:
                    raise ValueError(
                        "Only PostgreSQL storage configuration can be provided"
                    )
        return self


class QuotaConfiguration(ConfigurationBase):
    """Default usage limits and statistics settings."""

    default_monthly_limit: PositiveInt = constants.DEFAULT_MONTHLY_LIMIT
    default_daily_limit: PositiveInt = constants.DEFAULT_DAILY_LIMIT
    stats_window_days: PositiveInt = constants.DEFAULT_STATS_WINDOW_DAYS


class Configuration(ConfigurationBase):
    """Global service configuration."""

    name: str
    service: ServiceConfiguration
    llama_stack: LlamaStackConfiguration
    session: SessionTokenConfiguration
    identity: IdentityConfiguration
    authorization: AuthorizationConfiguration = Field(
        default_factory=AuthorizationConfiguration
    )
    storage: StorageConfiguration = Field(default_factory=StorageConfiguration)
    quota: QuotaConfiguration = Field(default_factory=QuotaConfiguration)

    def dump(self, filename: str = "configuration.json") -> None:
        """Dump actual configuration into JSON file."""
        with open(filename, "w", encoding="utf-8") as fout:
            fout.write(self.model_dump_json(indent=4))
