"""Unit tests for kvstore modules."""
