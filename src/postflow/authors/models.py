"""Author domain models."""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, Field

HANDLE_RE = re.compile(r"^[a-z0-9][a-z0-9_-]*$")


def is_valid_handle(handle: str) -> bool:
    """True if the handle is safe to use as a file name."""
    return bool(HANDLE_RE.match(handle))


class AuthorRecord(BaseModel):
    """A registered author that posts refer to by handle."""

    handle: str = Field(frozen=True)
    name: str
    metadata: dict[str, Any] = Field(default_factory=dict)
