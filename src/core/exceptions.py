"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"
    FEATURE_NOT_AVAILABLE = "FEATURE_NOT_AVAILABLE"

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_USERNAME = "INVALID_USERNAME"
    INVALID_DOCUMENT = "INVALID_DOCUMENT"
    EXPERIENCE_LIMIT = "EXPERIENCE_LIMIT"
    NOTHING_TO_UPDATE = "NOTHING_TO_UPDATE"

    # Conflict errors (409)
    USERNAME_TAKEN = "USERNAME_TAKEN"
    PROFILE_EXISTS = "PROFILE_EXISTS"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


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


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class AuthorizationError(AppException):
    """Authorization failed."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(
            error_code=ErrorCode.FORBIDDEN,
            message=message,
            status_code=403,
        )


class FeatureNotAvailableError(AppException):
    """The caller's plan or state does not include a feature."""

    def __init__(self, feature_id: str, reason: str) -> None:
        super().__init__(
            error_code=ErrorCode.FEATURE_NOT_AVAILABLE,
            message=reason,
            status_code=403,
            details={"feature_id": feature_id},
        )


class ProfileNotFoundError(AppException):
    """Profile not found (by id or username)."""

    def __init__(self, key: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message=f"Profile not found: {key}",
            status_code=404,
            details={"profile": key},
        )


class InvalidUsernameError(AppException):
    """Username does not match the allowed format."""

    def __init__(self, username: str) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_USERNAME,
            message=(
                "Invalid username format. Use 3-20 characters: "
                "lowercase letters, digits, '-' or '_'"
            ),
            status_code=400,
            details={"username": username},
        )


class UsernameTakenError(AppException):
    """Username is already used by another profile."""

    def __init__(self, username: str) -> None:
        super().__init__(
            error_code=ErrorCode.USERNAME_TAKEN,
            message=f"Username is already taken: {username}",
            status_code=409,
            details={"username": username},
        )


class ProfileAlreadyExistsError(AppException):
    """The user already owns a profile."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_EXISTS,
            message="Profile already exists",
            status_code=409,
            details={"user_id": user_id},
        )


class InvalidDocumentError(AppException):
    """Legacy profile document failed frontmatter validation."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_DOCUMENT,
            message=", ".join(errors),
            status_code=400,
            details={"errors": errors},
        )


class ExperienceLimitError(AppException):
    """Too many experience records in one update."""

    def __init__(self, limit: int, submitted: int) -> None:
        super().__init__(
            error_code=ErrorCode.EXPERIENCE_LIMIT,
            message=f"Maximum {limit} experiences allowed",
            status_code=400,
            details={"limit": limit, "submitted": submitted},
        )


class NothingToUpdateError(AppException):
    """Update request carried no recognized fields."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.NOTHING_TO_UPDATE,
            message="Nothing to update",
            status_code=400,
        )
