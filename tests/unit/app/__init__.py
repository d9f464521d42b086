"""Unit tests for app modules."""
