"""JSON-backed author registry.

One ``<handle>.json`` file per author under the authors directory::

    {"name": "Kay Example", "bio": "Writes about coupling."}

``name`` is the display name; every other key is free-form metadata the
theme may render.  Posts reference authors by handle, and nothing here
forces a post's handle to be registered: a dangling handle just renders
without author details.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from postflow.authors.models import AuthorRecord, is_valid_handle
from postflow.content.models import ContentItem
from postflow.errors import AuthorExistsError, InvalidHandleError
from pydantic import ValidationError

logger = logging.getLogger(__name__)

AUTHOR_SUFFIX = ".json"

# Alias to avoid shadowing by AuthorRegistry.list method
_list = list


class AuthorRegistry:
    """Register and look up authors stored as JSON files."""

    def __init__(self, authors_dir: Path) -> None:
        self._dir = Path(authors_dir)

    # ── Private helpers ──────────────────────────────────────────

    def path_for(self, handle: str) -> Path:
        return self._dir / f"{handle}{AUTHOR_SUFFIX}"

    def _read(self, path: Path) -> AuthorRecord | None:
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as exc:
            logger.warning("Unreadable author file %s: %s", path, exc)
            return None
        if not isinstance(raw, dict):
            logger.warning("Author file %s is not a JSON object", path)
            return None
        name = raw.pop("name", "")
        try:
            return AuthorRecord(handle=path.stem, name=str(name), metadata=raw)
        except ValidationError as exc:
            logger.warning("Invalid author file %s: %s", path, exc)
            return None

    # ── Write operations ─────────────────────────────────────────

    def register(
        self,
        handle: str,
        name: str,
        metadata: dict[str, Any] | None = None,
    ) -> AuthorRecord:
        """Add a new author.

        Raises:
            InvalidHandleError: If the handle is not file-system safe.
            AuthorExistsError: If the handle is already registered.
        """
        if not is_valid_handle(handle):
            raise InvalidHandleError(handle)
        if self.exists(handle):
            raise AuthorExistsError(handle)

        record = AuthorRecord(handle=handle, name=name, metadata=dict(metadata or {}))
        payload = {"name": record.name, **record.metadata}

        path = self.path_for(handle)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        logger.info("Registered author %s", handle)
        return record

    # ── Read operations ──────────────────────────────────────────

    def get(self, handle: str) -> AuthorRecord | None:
        """Return an author by handle, or None if missing or unreadable."""
        if not is_valid_handle(handle):
            return None
        path = self.path_for(handle)
        if not path.is_file():
            return None
        return self._read(path)

    def exists(self, handle: str) -> bool:
        return is_valid_handle(handle) and self.path_for(handle).is_file()

    def list(self) -> _list[AuthorRecord]:
        """Return all readable authors sorted by handle."""
        if not self._dir.is_dir():
            return []
        records: _list[AuthorRecord] = []
        for path in sorted(self._dir.glob(f"*{AUTHOR_SUFFIX}")):
            record = self._read(path)
            if record is not None:
                records.append(record)
        return records

    # ── References ───────────────────────────────────────────────

    def resolve(self, item: ContentItem) -> AuthorRecord | None:
        """Return the item's author, or None when unset or unregistered."""
        if not item.author:
            return None
        record = self.get(item.author)
        if record is None:
            logger.debug("%s refers to unregistered author %r", item.slug, item.author)
        return record

    def dangling(self, items: Iterable[ContentItem]) -> _list[tuple[str, str]]:
        """Return ``(slug, handle)`` for items whose author is not registered."""
        return [
            (item.slug, item.author)
            for item in items
            if item.author and not self.exists(item.author)
        ]
