"""Command line interface for the token versioning engine."""
