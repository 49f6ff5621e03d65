"""Pagination settings for list operations.

The default page size is read once per process and injected into the
repositories; nothing reads the environment per request.

Environment variables use LEADR_ prefix.
Example: LEADR_PAGE_SIZE=50
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PAGE_SIZE = 25
MAX_PAGE_SIZE = 100


class PaginationSettings(BaseSettings):
    """Pagination configuration settings.

    Attributes:
        page_size: Page size used when a request does not specify a limit.
            Unparsable values fall back to 25; parsed values are clamped
            to ``[1, 100]``.

    Example:
        settings = PaginationSettings()
        repo = GameRepository(settings)
    """

    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE,
        description="Default page size when limit not specified",
    )

    @field_validator("page_size", mode="before")
    @classmethod
    def clamp_page_size(cls, v: Any) -> int:
        """Fall back to the default on garbage and clamp to the allowed range."""
        try:
            size = int(str(v).strip())
        except (TypeError, ValueError):
            return DEFAULT_PAGE_SIZE
        return max(1, min(size, MAX_PAGE_SIZE))

    model_config = SettingsConfigDict(
        env_prefix="LEADR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )


__all__ = ["DEFAULT_PAGE_SIZE", "MAX_PAGE_SIZE", "PaginationSettings"]
