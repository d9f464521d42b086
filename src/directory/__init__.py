"""Directory of users known to the service."""
