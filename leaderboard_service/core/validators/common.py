"""Common validator utilities."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")


def optional_validator(
    validate_fn: Callable[[T], T],
) -> Callable[[T | None], T | None]:
    """Wrap a validator to handle None values.

    Create schemas validate required fields; Update schemas reuse the same
    check on optional fields, where None means "leave unchanged".

    Example:
        validate_not_blank_optional = optional_validator(validate_not_blank)
    """

    def wrapper(value: T | None) -> T | None:
        if value is None:
            return None
        return validate_fn(value)

    return wrapper


def validate_not_blank(value: str) -> str:
    """Reject strings that are empty or whitespace only.

    Raises:
        ValueError: If the string has no non-whitespace character.
    """
    if not value.strip():
        msg = "must not be blank"
        raise ValueError(msg)
    return value


validate_not_blank_optional = optional_validator(validate_not_blank)


__all__ = ["optional_validator", "validate_not_blank", "validate_not_blank_optional"]
