"""Tests for the exception hierarchy."""

from token_versioning.exceptions import (
    BreakingChangeError,
    CircularPathError,
    MigrationError,
    NoPathError,
    NotFoundError,
    ParseError,
    TokenVersioningError,
    ValidationError,
)


class TestExceptions:
    """Test cases for error codes and serialization."""

    def test_default_error_code_is_class_name(self):
        error = TokenVersioningError("boom")
        assert error.error_code == "TOKENVERSIONINGERROR"
        assert str(error) == "TOKENVERSIONINGERROR: boom"

    def test_to_dict(self):
        error = NotFoundError("Version 9.9.9 not found", resource="version", identifier="9.9.9")
        assert error.to_dict() == {
            "error_code": "NOT_FOUND",
            "message": "Version 9.9.9 not found",
            "details": {"resource": "version", "identifier": "9.9.9"},
        }

    def test_builtin_bases(self):
        assert isinstance(ParseError("x"), ValueError)
        assert isinstance(ValidationError("x"), ValueError)
        assert isinstance(NotFoundError("x"), LookupError)
        assert isinstance(BreakingChangeError(), ValidationError)

    def test_migration_errors(self):
        error = NoPathError("no path", from_version="1.0.0", to_version="2.0.0")
        assert isinstance(error, MigrationError)
        assert error.details == {"from_version": "1.0.0", "to_version": "2.0.0"}
        assert CircularPathError().error_code == "CIRCULAR_MIGRATION_PATH"
