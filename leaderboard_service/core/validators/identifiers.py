"""Validators for public resource identifiers.

Games are addressed by a six-character ``hex_id``. Generated ids only use
``0-9a-f``, but any lowercase alphanumeric id of the right length is
accepted so that ids created elsewhere stay addressable.
"""

from __future__ import annotations

import re

from leaderboard_service.core.exceptions import InvalidParameterError

HEX_ID_LENGTH = 6
_HEX_ID_RE = re.compile(r"[0-9a-z]{6}")


def is_valid_hex_id(value: str) -> bool:
    """Whether ``value`` is exactly six characters of ``[0-9a-z]``."""
    return _HEX_ID_RE.fullmatch(value) is not None


def validate_hex_id(value: str) -> str:
    """Return ``value`` unchanged or raise InvalidParameterError.

    Called before any query runs, so a malformed id never reaches the store.

    Raises:
        InvalidParameterError: ``value`` is not a well-formed hex id (400).
    """
    if not is_valid_hex_id(value):
        raise InvalidParameterError(
            f"Invalid hex_id: expected {HEX_ID_LENGTH} lowercase alphanumeric characters",
            extra={"hex_id": value},
        )
    return value


__all__ = ["HEX_ID_LENGTH", "is_valid_hex_id", "validate_hex_id"]
