"""Unit tests for runners modules."""
