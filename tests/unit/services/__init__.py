"""Unit tests for services modules."""
