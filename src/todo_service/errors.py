"""Error types for the todo service.

Every error carries the HTTP status it is reported with, so routes can let
them propagate to the application-level exception handler.
"""

from enum import Enum


class TodoServiceError(Exception):
    """Base exception for errors reported to the caller."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize service error.

        Args:
            message: Human-readable message returned to the caller.
            status_code: HTTP status override.
        """
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidRequestError(TodoServiceError):
    """Raised when the request body is malformed or missing fields."""

    status_code = 400


class ValidationFailure(str, Enum):
    """Reasons a task input can be rejected."""

    EMPTY_INPUT = "EmptyInput"
    TOO_SHORT = "TooShort"
    TOO_LONG = "TooLong"
    NO_MEANINGFUL_TEXT = "NoMeaningfulText"


class InputValidationError(TodoServiceError):
    """Raised when task input text fails validation."""

    status_code = 400

    def __init__(self, failure: ValidationFailure, message: str) -> None:
        super().__init__(message)
        self.failure = failure


class InvalidExtractedDateError(TodoServiceError):
    """Raised when the model produced a due date that cannot be parsed."""

    status_code = 400


class ExtractionSchemaViolation(TodoServiceError):
    """Raised when the model did not return a schema-conforming object."""

    status_code = 500


class NotAuthenticatedError(TodoServiceError):
    """Raised when the caller identity is missing."""

    status_code = 401


class TaskNotFoundError(TodoServiceError):
    """Raised when a task does not exist or belongs to another owner."""

    status_code = 404


class TaskStoreError(TodoServiceError):
    """Raised when the record store cannot be read or written."""

    status_code = 500


class GenerationError(TodoServiceError):
    """Raised when the generation service call fails."""

    status_code = 500


class GenerationConfigError(GenerationError):
    """Raised when no generation-service credential is configured.

    The detail is kept for server logs; callers only see ``public_message``.
    """

    status_code = 500
    public_message = "Server configuration error. Please contact the administrator."


class GenerationAuthError(GenerationError):
    """Raised when the generation service rejects our credentials."""

    status_code = 401


class GenerationQuotaError(GenerationError):
    """Raised when the generation service is throttling or out of quota."""

    status_code = 429


class GenerationTimeoutError(GenerationError):
    """Raised when the generation call exceeds the request timeout."""

    status_code = 504


class GenerationNetworkError(GenerationError):
    """Raised when the generation service cannot be reached."""

    status_code = 503


__all__ = [
    "ExtractionSchemaViolation",
    "GenerationAuthError",
    "GenerationConfigError",
    "GenerationError",
    "GenerationNetworkError",
    "GenerationQuotaError",
    "GenerationTimeoutError",
    "InputValidationError",
    "InvalidExtractedDateError",
    "InvalidRequestError",
    "NotAuthenticatedError",
    "TaskNotFoundError",
    "TaskStoreError",
    "TodoServiceError",
    "ValidationFailure",
]
