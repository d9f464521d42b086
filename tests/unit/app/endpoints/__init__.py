"""Unit tests for app endpoints modules."""
