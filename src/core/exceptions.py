"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

    # Not found errors (404)
    USER_NOT_FOUND = "USER_NOT_FOUND"
    NOT_FOUND = "NOT_FOUND"

    # Validation errors (400)
    VALIDATION_FAILED = "VALIDATION_FAILED"
    MISSING_FIELDS = "MISSING_FIELDS"

    # Uniqueness conflicts (400)
    EMAIL_TAKEN = "EMAIL_TAKEN"
    NICKNAME_TAKEN = "NICKNAME_TAKEN"

    # Server errors (500)
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ValidationFailedError(AppException):
    """One or more fields violate their constraints.

    ``violations`` keeps every violation found on the input, not just the
    first, so the client can fix all of them in one round trip.
    """

    def __init__(self, violations: list[Any]) -> None:
        self.violations = list(violations)
        super().__init__(
            error_code=ErrorCode.VALIDATION_FAILED,
            message="Validation failed",
            status_code=400,
            details=[
                {
                    "field": violation.field,
                    "code": violation.code.value,
                    "message": violation.message,
                }
                for violation in self.violations
            ],
        )


class MissingFieldsError(AppException):
    """Required fields are absent from the request."""

    def __init__(self, required: list[str], missing: list[str]) -> None:
        super().__init__(
            error_code=ErrorCode.MISSING_FIELDS,
            message="Required fields are missing",
            status_code=400,
            details={"required": required, "missing": missing},
        )


class EmailTakenError(AppException):
    """Email address already belongs to another account."""

    def __init__(self, email: str) -> None:
        super().__init__(
            error_code=ErrorCode.EMAIL_TAKEN,
            message="Email is already in use",
            status_code=400,
            details={"email": email},
        )


class NicknameTakenError(AppException):
    """Nickname already belongs to another account."""

    def __init__(self, nickname: str) -> None:
        super().__init__(
            error_code=ErrorCode.NICKNAME_TAKEN,
            message="Nickname is already in use",
            status_code=400,
            details={"nickname": nickname},
        )


class UserNotFoundError(AppException):
    """User not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_NOT_FOUND,
            message=f"User not found: {user_id}",
            status_code=404,
            details={"user_id": user_id},
        )


class InvalidCredentialsError(AppException):
    """Login failed. Deliberately silent about which part was wrong."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_CREDENTIALS,
            message="Invalid email or password",
            status_code=401,
        )


class StorageUnavailableError(AppException):
    """The database could not be reached or refused the operation."""

    def __init__(self, reason: str = "") -> None:
        super().__init__(
            error_code=ErrorCode.STORAGE_UNAVAILABLE,
            message="Storage is unavailable",
            status_code=500,
            details={"reason": reason} if reason else None,
        )


class DuplicateRecordError(Exception):
    """Raised by the storage layer when a unique constraint rejects a write."""

    field: str = ""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Duplicate {self.field}: {value}")


class DuplicateEmailError(DuplicateRecordError):
    """Unique constraint on email rejected the write."""

    field = "email"


class DuplicateNicknameError(DuplicateRecordError):
    """Unique constraint on nickname rejected the write."""

    field = "nickname"
