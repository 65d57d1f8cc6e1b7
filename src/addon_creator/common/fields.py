"""Reusable Pydantic field annotations."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field, HttpUrl, StrictStr

NonEmptyString = Annotated[StrictStr, Field(min_length=1, frozen=True)]

# HTTP/HTTPS URL for direct file access
DirectUrl = Annotated[
    HttpUrl,
    Field(
        frozen=True,
        description="Direct HTTP/HTTPS URL",
    ),
]

__all__ = [
    "DirectUrl",
    "NonEmptyString",
]
