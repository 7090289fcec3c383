"""Shared pytest fixtures for the token versioning test suite."""

from typing import Any, Dict

import pytest

from token_versioning.config import VersioningConfig
from token_versioning.versioning import MigrationRegistry, TokenMigration, TokenVersionStore


@pytest.fixture
def base_tokens() -> Dict[str, Any]:
    """A small but nested token tree."""
    return {
        "colors": {
            "primary": "#000",
            "danger": "#f00",
        },
        "spacing": {"sm": "4px", "md": "8px"},
        "typography": {"fontFamily": "Inter", "lineHeight": 1.5},
    }


@pytest.fixture
def store() -> TokenVersionStore:
    return TokenVersionStore()


@pytest.fixture
def rename_registry() -> MigrationRegistry:
    """Registry with a reversible 1.0.0 -> 2.0.0 key rename and a 2.0.0 -> 3.0.0 addition."""

    def forward(tokens):
        result = dict(tokens)
        result["brand"] = result.pop("legacy", None)
        return result

    def backward(tokens):
        result = dict(tokens)
        result["legacy"] = result.pop("brand", None)
        return result

    def add_radius(tokens):
        return dict(tokens, radius={"sm": "2px"})

    return MigrationRegistry(
        [
            TokenMigration("1.0.0", "2.0.0", migrate=forward, rollback=backward, breaking=True),
            TokenMigration("2.0.0", "3.0.0", migrate=add_radius),
        ]
    )


@pytest.fixture
def pruning_config() -> VersioningConfig:
    return VersioningConfig(max_versions=2)
