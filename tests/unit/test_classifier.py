"""Tests for change classification."""

from token_versioning.versioning.classifier import (
    breaking_changes,
    classify_changes,
    has_breaking_changes,
    has_new_features,
    is_breaking_modification,
)
from token_versioning.versioning.differ import diff_tokens
from token_versioning.versioning.models import ChangeType, IncrementType, TokenChange


class TestClassifyChanges:
    """Test cases for classify_changes."""

    def test_empty_change_list_is_patch(self):
        assert classify_changes([]) is IncrementType.PATCH
        assert classify_changes(None) is IncrementType.PATCH

    def test_value_modification_is_patch(self):
        changes = diff_tokens({"a": "#000"}, {"a": "#111"})
        assert classify_changes(changes) is IncrementType.PATCH

    def test_addition_is_minor(self):
        changes = diff_tokens({"a": 1}, {"a": 1, "b": 2})
        assert classify_changes(changes) is IncrementType.MINOR

    def test_removal_is_major(self):
        changes = diff_tokens({"a": 1, "b": 2}, {"a": 1})
        assert classify_changes(changes) is IncrementType.MAJOR

    def test_type_change_is_major(self):
        changes = diff_tokens({"a": {"b": 1}}, {"a": "flat"})
        assert classify_changes(changes) is IncrementType.MAJOR

    def test_breaking_wins_over_additions(self):
        """Test precedence breaking > additive > patch."""
        changes = diff_tokens({"a": 1, "b": 2}, {"a": 3, "c": 4})
        assert classify_changes(changes) is IncrementType.MAJOR

    def test_declared_breaking_forces_major(self):
        changes = diff_tokens({"a": 1}, {"a": 2})
        assert classify_changes(changes, breaking=True) is IncrementType.MAJOR

    def test_initial_add_is_minor(self):
        assert classify_changes(diff_tokens(None, {"a": 1})) is IncrementType.MINOR

    def test_accepts_generator(self):
        changes = (c for c in [TokenChange(ChangeType.ADD, "x", new_value=1)])
        assert classify_changes(changes) is IncrementType.MINOR


class TestBreakingDetection:
    """Test cases for breaking change helpers."""

    def test_modify_dropping_nested_keys_is_breaking(self):
        change = TokenChange(
            ChangeType.MODIFY, "colors", old_value={"a": 1, "b": 2}, new_value={"a": 1}
        )
        assert is_breaking_modification(change)

    def test_modify_same_kind_is_not_breaking(self):
        change = TokenChange(ChangeType.MODIFY, "a", old_value=1, new_value=2)
        assert not is_breaking_modification(change)

    def test_breaking_changes_subset(self):
        changes = [
            TokenChange(ChangeType.ADD, "new", new_value=1),
            TokenChange(ChangeType.REMOVE, "old", old_value=1),
            TokenChange(ChangeType.MODIFY, "tweak", old_value=1, new_value=2),
        ]
        assert [c.path for c in breaking_changes(changes)] == ["old"]
        assert has_breaking_changes(changes)
        assert has_new_features(changes)

    def test_rename_is_neither_breaking_nor_feature(self):
        changes = [TokenChange(ChangeType.RENAME, "a", old_value="a", new_value="b")]
        assert not has_breaking_changes(changes)
        assert not has_new_features(changes)
        assert classify_changes(changes) is IncrementType.PATCH
