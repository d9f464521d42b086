"""Unit tests."""

from configuration import configuration

config_dict = {
    "name": "test",
    "service": {
        "host": "localhost",
        "port": 8080,
        "workers": 1,
        "color_log": True,
        "access_log": True,
    },
    "llama_stack": {
        "api_key": "test-key",
        "url": "http://test.com:1234",
    },
    "session": {
        "secret": "unit-test-secret-that-is-long-enough-for-hs256",
        "ttl": 3600,
    },
    "identity": {
        "module": "noop",
    },
    "authorization": {
        "admin_emails": ["admin@example.com"],
    },
    "storage": {
        "type": "memory",
    },
}

# Configuration must be initialized before importing app.main, since the
# application is constructed from it during import
configuration.init_from_dict(config_dict)
