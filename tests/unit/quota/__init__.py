"""Unit tests for quota modules."""
