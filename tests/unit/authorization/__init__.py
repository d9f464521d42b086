"""Unit tests for authorization modules."""
