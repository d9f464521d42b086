"""Unit tests for identity modules."""
