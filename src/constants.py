"""Constants used in business logic."""

# Minimal and maximal supported Llama Stack version
MINIMAL_SUPPORTED_LLAMA_STACK_VERSION = "0.2.17"
MAXIMAL_SUPPORTED_LLAMA_STACK_VERSION = "0.2.22"

# Environment variable used to pass configuration path to Uvicorn workers
CONFIGURATION_PATH_ENV_VARIABLE = "WORDGARDEN_CONFIG_PATH"
DEFAULT_CONFIGURATION_FILE = "wordgarden.yaml"

# Session tokens
# Every issued session token is valid for one hour. The value is reported to
# clients as `expiresIn` by the token exchange endpoint.
DEFAULT_SESSION_TOKEN_TTL = 3600
SESSION_TOKEN_ALGORITHM = "HS256"
SESSION_TOKEN_EMAIL_CLAIM = "email"
# minimal length of secret used to sign session tokens
MINIMAL_SESSION_SECRET_LENGTH = 32

# Identity verification modules
IDENTITY_MOD_FIREBASE = "firebase"
IDENTITY_MOD_NOOP = "noop"
SUPPORTED_IDENTITY_MODULES = frozenset(
    {
        IDENTITY_MOD_FIREBASE,
        IDENTITY_MOD_NOOP,
    }
)
DEFAULT_IDENTITY_MODULE = IDENTITY_MOD_FIREBASE
FIREBASE_ACCOUNTS_LOOKUP_URL = (
    "https://identitytoolkit.googleapis.com/v1/accounts:lookup"
)
DEFAULT_IDENTITY_TIMEOUT = 10

# Usage limits that are used when system limits were never configured
DEFAULT_MONTHLY_LIMIT = 50
DEFAULT_DAILY_LIMIT = 10

# Length of the trailing window of global usage statistics shown on dashboard
DEFAULT_STATS_WINDOW_DAYS = 30

# Sentinel stored as last activity for users created by admin
NEVER_ACTIVE = "Never"

# Prefix of subject IDs synthesized for users added by admin
MANUAL_SUBJECT_PREFIX = "manual-"

# Generation defaults
DEFAULT_MODEL_ID = "meta-llama/Llama-3.1-8B-Instruct"
DEFAULT_MAX_TOKENS = 512
DEFAULT_TEMPERATURE = 0.7
DEFAULT_LLM_TIMEOUT = 60

# Keys and key prefixes used in key-value store
USER_KEY_PREFIX = "user:"
QUOTA_KEY_PREFIX = "quota:"
LIMIT_KEY_PREFIX = "limit:"
SYSTEM_LIMITS_KEY = "config:system_limits"
DAILY_STATS_KEY_PREFIX = "stats:daily:"

# PostgreSQL connection constants
# See: https://www.postgresql.org/docs/current/libpq-connect.html#LIBPQ-CONNECT-SSLMODE
POSTGRES_DEFAULT_SSL_MODE = "prefer"
# See: https://www.postgresql.org/docs/current/libpq-connect.html#LIBPQ-CONNECT-GSSENCMODE
POSTGRES_DEFAULT_GSS_ENCMODE = "prefer"

# key-value store constants
STORE_TYPE_MEMORY = "memory"
STORE_TYPE_SQLITE = "sqlite"
STORE_TYPE_POSTGRES = "postgres"
