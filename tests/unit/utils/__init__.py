"""Unit tests for utils modules."""
