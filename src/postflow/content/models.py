"""Content domain models — pure Pydantic v2 data types.

A post moves through two publication states: it is created as a draft
and becomes public once published.  ``draft`` is derived from the state
and is the flag the site generator filters on.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PublicationState(StrEnum):
    """Lifecycle state of a content item."""

    DRAFT = "draft"
    PUBLISHED = "published"


class ContentItem(BaseModel):
    """A single post tracked from creation through publication.

    ``slug`` and ``created_at`` are frozen: assigning to either raises a
    validation error.  Everything the generator reads but postflow does not
    model (tags, description, ...) rides along in ``metadata``.
    """

    model_config = ConfigDict(validate_assignment=True)

    slug: str = Field(frozen=True)
    title: str
    created_at: datetime = Field(frozen=True)
    author: str | None = None
    state: PublicationState = PublicationState.DRAFT
    body: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)
    file_path: str = ""

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be empty")
        return value

    @property
    def draft(self) -> bool:
        """True while the item is excluded from public rendering."""
        return self.state is PublicationState.DRAFT
