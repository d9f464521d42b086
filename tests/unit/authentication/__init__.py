"""Unit tests for authentication modules."""
