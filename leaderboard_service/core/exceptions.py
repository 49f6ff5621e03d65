"""Custom exception classes for the application."""

from __future__ import annotations

from typing import Any


class AppException(Exception):
    """Base application exception.

    All custom exceptions should inherit from this class.
    Follows RFC 7807 Problem Details for HTTP APIs so the transport layer
    can render any of them without knowing the concrete subclass.

    Attributes:
        status_code: HTTP status code for the error.
        detail: Human-readable error message.
        type: Error type identifier (used in RFC 7807 problem details).
        title: Short, human-readable summary of the problem type.
        instance: URI reference that identifies the specific occurrence of the problem.
        extra: Additional context-specific information about the error.

    Example:
            raise AppException(
            status_code=404,
            detail="Game not found",
            type="game-not-found",
            title="Not Found",
            instance="/games/a1b2c3",
            extra={"hex_id": "a1b2c3"}
        )
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        type: str = "about:blank",
        title: str | None = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application exception.

        Args:
            status_code: HTTP status code.
            detail: Human-readable error message.
            type: Error type identifier.
            title: Short summary of the problem type.
            instance: URI reference identifying this specific occurrence.
            extra: Additional context about the error.
        """
        self.status_code = status_code
        self.detail = detail
        self.type = type
        self.title = title or self._default_title(status_code)
        self.instance = instance
        self.extra = extra or {}
        super().__init__(detail)

    @staticmethod
    def _default_title(status_code: int) -> str:
        """Get default title for HTTP status code."""
        titles = {
            400: "Bad Request",
            404: "Not Found",
            422: "Unprocessable Entity",
            500: "Internal Server Error",
        }
        return titles.get(status_code, "Error")


class ValidationException(AppException):
    """Exception raised for validation errors.

    Example:
            raise ValidationException(
            detail="User name cannot be empty",
            type="validation-error",
            extra={"field": "user_name"}
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "validation-error",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=422,
            detail=detail,
            type=type,
            title="Validation Error",
            instance=instance,
            extra=extra,
        )


class BadRequestException(AppException):
    """Exception raised for malformed requests.

    Example:
            raise BadRequestException(
            detail="Hex ID must be exactly 6 characters",
            type="bad-request",
            extra={"hex_id": "abc"}
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "bad-request",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=400,
            detail=detail,
            type=type,
            title="Bad Request",
            instance=instance,
            extra=extra,
        )


class InternalServerException(AppException):
    """Exception raised for internal server errors.

    The detail stays generic; the concrete cause travels as
    ``__cause__`` and in the operator-facing logs only.

    Example:
            raise InternalServerException(
            detail="Internal server error",
            extra={"operation": "scores.list"}
        ) from exc
    """

    def __init__(
        self,
        detail: str = "Internal server error",
        type: str = "internal-error",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=500,
            detail=detail,
            type=type,
            title="Internal Server Error",
            instance=instance,
            extra=extra,
        )


# ============================================================================
# Pagination Exceptions
# ============================================================================


class InvalidCursorError(ValidationException):
    """Raised when a pagination cursor cannot be decoded.

    The detail never says which decoding step failed, so a client cannot
    probe the cursor format by trial and error.
    """

    def __init__(self, instance: str | None = None) -> None:
        super().__init__(
            detail="Invalid cursor",
            type="invalid-cursor",
            instance=instance,
        )


class InvalidSortFieldError(ValidationException):
    """Raised when a sort key or sort order is not one of the known values.

    Example:
        raise InvalidSortFieldError("sort_by", "points", allowed=["score", "date", "user_name"])
    """

    def __init__(
        self,
        parameter: str,
        value: Any,
        *,
        allowed: list[str] | None = None,
    ) -> None:
        allowed = allowed or []
        super().__init__(
            detail=f"Invalid value for {parameter}: {value!r}",
            type="invalid-sort-field",
            extra={"parameter": parameter, "value": value, "allowed": allowed},
        )


class InvalidParameterError(BadRequestException):
    """Raised when a path or query identifier is malformed (e.g. a bad hex id)."""

    def __init__(self, detail: str, extra: dict[str, Any] | None = None) -> None:
        super().__init__(detail=detail, type="invalid-parameter", extra=extra)


__all__ = [
    "AppException",
    "BadRequestException",
    "InternalServerException",
    "InvalidCursorError",
    "InvalidParameterError",
    "InvalidSortFieldError",
    "ValidationException",
]
