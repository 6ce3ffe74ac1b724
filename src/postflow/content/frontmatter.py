"""YAML front matter codec for post documents.

A post document is the file the site generator reads::

    ---
    title: Hello World
    date: '2026-02-18T10:00:00+00:00'
    author: kay
    draft: true
    ---

    Body text...

Keys postflow does not model are kept in ``ContentItem.metadata`` and
written back after the known keys.
"""

from __future__ import annotations

import logging
from datetime import UTC, date, datetime
from typing import Any

import yaml
from postflow.content.models import ContentItem, PublicationState
from postflow.errors import FrontmatterError
from pydantic import ValidationError

logger = logging.getLogger(__name__)

DELIMITER = "---"
KNOWN_KEYS = ("title", "date", "author", "draft")


def split(text: str) -> tuple[dict[str, Any], str]:
    """Separate front matter from body.

    Returns ``({}, text)`` when the text has no front matter block.

    Raises:
        FrontmatterError: If the block is unterminated, is not valid YAML,
            or is not a mapping.
    """
    if not text.startswith(DELIMITER):
        return {}, text

    lines = text.splitlines(keepends=True)
    if lines[0].strip() != DELIMITER:
        return {}, text

    for idx in range(1, len(lines)):
        if lines[idx].strip() == DELIMITER:
            raw = "".join(lines[1:idx])
            body = "".join(lines[idx + 1 :])
            break
    else:
        raise FrontmatterError("Front matter block is not terminated")

    try:
        meta = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise FrontmatterError(f"Invalid YAML front matter: {exc}") from exc

    if meta is None:
        meta = {}
    if not isinstance(meta, dict):
        raise FrontmatterError("Front matter must be a mapping")
    if body.startswith("\n"):
        body = body[1:]
    return meta, body


def join(meta: dict[str, Any], body: str) -> str:
    """Render front matter and body as a single document."""
    header = yaml.safe_dump(meta, sort_keys=False, allow_unicode=True, default_flow_style=False)
    text = f"{DELIMITER}\n{header}{DELIMITER}\n"
    if body:
        text += "\n" + body
    return text


def item_to_document(item: ContentItem) -> str:
    """Serialize an item to the generator's front matter layout."""
    meta: dict[str, Any] = {
        "title": item.title,
        "date": item.created_at.isoformat(),
    }
    if item.author:
        meta["author"] = item.author
    meta["draft"] = item.draft
    for key, value in item.metadata.items():
        if key not in KNOWN_KEYS:
            meta[key] = value
    return join(meta, item.body)


def item_from_document(text: str, slug: str, file_path: str = "") -> ContentItem:
    """Build an item from a post document.

    The slug comes from the file name, not the front matter.  A missing
    ``draft`` key means published, matching how the generator treats it.

    Raises:
        FrontmatterError: If the document cannot be parsed or lacks a
            usable title or date.
    """
    meta, body = split(text)
    if meta.get("title") in (None, ""):
        raise FrontmatterError(f"{slug}: missing 'title'")
    if meta.get("date") in (None, ""):
        raise FrontmatterError(f"{slug}: missing 'date'")

    state = PublicationState.DRAFT if _as_bool(meta.get("draft", False)) else PublicationState.PUBLISHED
    author = meta.get("author")

    try:
        return ContentItem(
            slug=slug,
            title=str(meta["title"]),
            created_at=_as_datetime(meta["date"]),
            author=str(author) if author else None,
            state=state,
            body=body,
            metadata={k: v for k, v in meta.items() if k not in KNOWN_KEYS},
            file_path=file_path,
        )
    except (ValidationError, ValueError) as exc:
        raise FrontmatterError(f"{slug}: {exc}") from exc


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1", "on")
    return bool(value)


def _as_datetime(value: Any) -> datetime:
    """Coerce a front matter date (string, date, or datetime) to aware UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        parsed = datetime.fromisoformat(value.strip())
    else:
        raise ValueError(f"unsupported date value {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed
