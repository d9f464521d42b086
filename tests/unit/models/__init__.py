"""Unit tests for models modules."""
