"""Domain error classes.

Protocol-agnostic errors that represent catalog failures.
Every error carries an ErrorKind so callers can match on a closed set of
failure categories instead of comparing exception identity.
These errors are translated to HTTP responses by the entrypoint layer.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping


class ErrorKind(str, Enum):
    """Closed set of failure categories raised by the catalog core."""

    ID_FORMAT = "ID_FORMAT"
    NOT_FOUND = "NOT_FOUND"
    DUPLICATE = "DUPLICATE"
    VALIDATION = "VALIDATION"
    STORE = "STORE"


class DomainError(Exception):
    """Base class for all domain errors.

    Contains error information that can be translated to HTTP (or any other
    protocol) by an adapter.
    """

    # Default error code (can be used as i18n key)
    error_code: str = "DOMAIN_ERROR"
    kind: ErrorKind = ErrorKind.STORE

    def __init__(self, message: str, **context: Any) -> None:
        """Create a domain error.

        Args:
            message: Human-readable error message
            **context: Additional context for the error (e.g., resource, identifier)
        """
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format for protocol translation."""
        return {
            "message": self.message,
            "code": self.error_code,
            **self.context,
        }


class InvalidIdError(DomainError):
    """The supplied identifier is not a structurally valid record id.

    Always caused by caller input; retrying cannot help.
    """

    error_code: str = "INVALID_ID"
    kind: ErrorKind = ErrorKind.ID_FORMAT

    def __init__(self, identifier: str, **context: Any) -> None:
        super().__init__(
            f"'{identifier}' is not a valid identifier",
            identifier=identifier,
            **context,
        )


class NotFoundError(DomainError):
    """Resource not found.

    Protocol mappings:
        - REST: 404 Not Found
    """

    error_code: str = "NOT_FOUND"
    kind: ErrorKind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str, identifier: str | None = None, **context: Any) -> None:
        """Create a not found error.

        Args:
            resource: Type of resource (e.g., "Movie")
            identifier: Resource identifier
            **context: Additional context
        """
        if identifier:
            message = f"{resource} with identifier '{identifier}' not found"
        else:
            message = f"{resource} not found"

        super().__init__(message, resource=resource, identifier=identifier, **context)


class DuplicateRecordError(DomainError):
    """A uniqueness constraint was violated on write.

    Carries the offending field (when the store reports one) so callers can
    attach the failure to that field in a validation response.

    Protocol mappings:
        - REST: 409 Conflict (or folded into a 422 by the use case)
    """

    error_code: str = "DUPLICATE"
    kind: ErrorKind = ErrorKind.DUPLICATE

    def __init__(self, resource: str, field: str | None = None, **context: Any) -> None:
        self.field = field
        super().__init__(f"{resource} already exists", resource=resource, field=field, **context)


class ValidationError(DomainError):
    """One or more field invariants failed.

    Always a batch of field/message pairs when raised from a Validator.

    Protocol mappings:
        - REST: 422 Unprocessable Entity
    """

    error_code: str = "VALIDATION_ERROR"
    kind: ErrorKind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, str]] | None = None,
        **context: Any,
    ) -> None:
        """Create a validation error.

        Args:
            message: Overall validation error message (optional if errors provided)
            errors: List of field-specific errors, each with 'field' and 'message'
                   Example: [{"field": "title", "message": "must be provided"}]
            **context: Additional context
        """
        self.errors: list[dict[str, str]] | None
        if errors:
            self.errors = errors
            msg = message or "Validation failed"
        else:
            self.errors = None
            msg = message or "Validation error"

        super().__init__(msg, **context)

    @classmethod
    def from_field_errors(cls, field_errors: Mapping[str, str]) -> ValidationError:
        """Build an aggregate error from a field -> message mapping."""
        return cls(
            errors=[{"field": field, "message": message} for field, message in field_errors.items()]
        )

    @property
    def field_errors(self) -> dict[str, str]:
        """The errors as a field -> message mapping."""
        return {error["field"]: error["message"] for error in self.errors or []}

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format."""
        if self.errors:
            return {
                "message": self.message,
                "code": self.error_code,
                "errors": self.errors,
                **self.context,
            }
        return super().to_dict()


class StoreError(DomainError):
    """Infrastructure failure talking to the document store.

    Propagated as-is; the repository never retries. The underlying driver
    exception is chained as ``__cause__``.

    Protocol mappings:
        - REST: 500 Internal Server Error
    """

    error_code: str = "STORE_ERROR"
    kind: ErrorKind = ErrorKind.STORE


class StoreTimeoutError(StoreError):
    """A store call exceeded its deadline.

    The outcome of a write is indeterminate from the caller's point of view.

    Protocol mappings:
        - REST: 503 Service Unavailable
    """

    error_code: str = "STORE_TIMEOUT"
