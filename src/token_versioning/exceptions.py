"""Exceptions raised by the token versioning engine."""

from typing import Any, Dict, List, Optional


class TokenVersioningError(Exception):
    """Base exception for all token versioning errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__.upper()
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"{self.error_code}: {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}'"
            f")"
        )


class ParseError(TokenVersioningError, ValueError):
    """Exception raised for malformed semantic version strings."""

    def __init__(
        self,
        message: str,
        error_code: str = "INVALID_VERSION",
        details: Optional[Dict[str, Any]] = None,
        value: Any = None,
    ):
        super().__init__(message, error_code, details)
        if value is not None:
            self.details["value"] = str(value)


class ValidationError(TokenVersioningError, ValueError):
    """Exception raised when input fails validation before any state change."""

    def __init__(
        self,
        message: str,
        error_code: str = "VALIDATION_ERROR",
        details: Optional[Dict[str, Any]] = None,
        field_errors: Optional[Dict[str, str]] = None,
    ):
        super().__init__(message, error_code, details)
        self.field_errors = field_errors or {}
        if self.field_errors:
            self.details["field_errors"] = self.field_errors


class BreakingChangeError(ValidationError):
    """Exception raised when breaking changes are submitted without being declared."""

    def __init__(
        self,
        message: str = "Breaking changes must be declared explicitly",
        error_code: str = "UNDECLARED_BREAKING_CHANGE",
        details: Optional[Dict[str, Any]] = None,
        paths: Optional[List[str]] = None,
    ):
        super().__init__(message, error_code, details)
        if paths:
            self.details["paths"] = paths


class NotFoundError(TokenVersioningError, LookupError):
    """Exception raised when a requested version, tag or snapshot does not exist."""

    def __init__(
        self,
        message: str,
        error_code: str = "NOT_FOUND",
        details: Optional[Dict[str, Any]] = None,
        resource: Optional[str] = None,
        identifier: Optional[str] = None,
    ):
        super().__init__(message, error_code, details)
        self.resource = resource
        self.identifier = identifier
        if resource:
            self.details["resource"] = resource
        if identifier:
            self.details["identifier"] = identifier


class VersionConflictError(TokenVersioningError):
    """Exception raised when the store head moved under an optimistic writer."""

    def __init__(
        self,
        message: str,
        error_code: str = "VERSION_CONFLICT",
        details: Optional[Dict[str, Any]] = None,
        expected: Optional[str] = None,
        actual: Optional[str] = None,
    ):
        super().__init__(message, error_code, details)
        self.details["expected"] = expected
        self.details["actual"] = actual


class MigrationError(TokenVersioningError):
    """Base exception for migration path resolution errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "MIGRATION_ERROR",
        details: Optional[Dict[str, Any]] = None,
        from_version: Optional[str] = None,
        to_version: Optional[str] = None,
    ):
        super().__init__(message, error_code, details)
        self.from_version = from_version
        self.to_version = to_version
        if from_version:
            self.details["from_version"] = from_version
        if to_version:
            self.details["to_version"] = to_version


class NoPathError(MigrationError):
    """Exception raised when no migration chain connects two versions."""

    def __init__(
        self,
        message: str,
        error_code: str = "NO_MIGRATION_PATH",
        details: Optional[Dict[str, Any]] = None,
        from_version: Optional[str] = None,
        to_version: Optional[str] = None,
    ):
        super().__init__(message, error_code, details, from_version, to_version)


class CircularPathError(MigrationError):
    """Exception raised when a migration chain loops back on itself."""

    def __init__(
        self,
        message: str = "Circular migration detected",
        error_code: str = "CIRCULAR_MIGRATION_PATH",
        details: Optional[Dict[str, Any]] = None,
        from_version: Optional[str] = None,
        to_version: Optional[str] = None,
    ):
        super().__init__(message, error_code, details, from_version, to_version)
