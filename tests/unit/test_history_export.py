"""Tests for history serialization."""

import json

import pytest
import yaml

from token_versioning.exceptions import ValidationError
from token_versioning.versioning import (
    TokenVersion,
    build_history,
    default_registry,
    export_history,
    write_history,
)
from token_versioning.versioning.models import ChangeType, TokenChange


@pytest.fixture
def history():
    record = TokenVersion(
        version="1.1.0",
        created_at="2024-01-01T00:00:00+00:00",
        created_by="ci",
        tags=["release"],
        parent="1.0.0",
        changes=(TokenChange(ChangeType.ADD, "colors.primary", new_value="#000"),),
    )
    return build_history("1.1.0", [record], default_registry().migrations)


class TestBuildHistory:
    """Test cases for build_history."""

    def test_structure(self, history):
        assert history["currentVersion"] == "1.1.0"
        assert history["versions"][0] == {
            "version": "1.1.0",
            "createdAt": "2024-01-01T00:00:00+00:00",
            "createdBy": "ci",
            "description": None,
            "breaking": False,
            "tags": ["release"],
            "parent": "1.0.0",
            "changes": [{"type": "add", "path": "colors.primary", "newValue": "#000"}],
        }
        assert history["migrations"][0] == {
            "fromVersion": "1.0.0",
            "toVersion": "2.0.0",
            "description": "Restructure color tokens to use semantic naming",
            "breaking": True,
        }


class TestExportHistory:
    """Test cases for export_history and write_history."""

    def test_json(self, history):
        text = export_history(history, "json")
        assert json.loads(text) == history
        assert text.startswith("{\n  ")

    def test_yaml(self, history):
        assert yaml.safe_load(export_history(history, "yaml")) == history

    def test_unsupported_format(self, history):
        with pytest.raises(ValidationError) as exc_info:
            export_history(history, "toml")
        assert "format" in exc_info.value.field_errors

    def test_write_history_creates_directories(self, history, tmp_path):
        target = tmp_path / "nested" / "history.json"

        written = write_history(export_history(history), target)

        assert written == target
        assert json.loads(target.read_text(encoding="utf-8")) == history
