"""Test suite for the design token versioning engine."""
