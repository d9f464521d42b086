"""Unit tests for api_client modules."""
