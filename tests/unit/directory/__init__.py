"""Unit tests for directory modules."""
