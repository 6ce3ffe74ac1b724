"""File-backed post store.

Each post lives in ``<content_dir>/<slug>.md`` as a Markdown document with
YAML front matter, which is exactly what the site generator reads.  Every
lifecycle operation loads the file, applies the matching function from
:mod:`postflow.content.lifecycle`, and writes it back.
"""

from __future__ import annotations

import logging
from pathlib import Path

from postflow.content import lifecycle
from postflow.content.frontmatter import item_from_document, item_to_document
from postflow.content.lifecycle import visible_items
from postflow.content.models import ContentItem, PublicationState
from postflow.errors import DuplicateSlugError, FrontmatterError, ItemNotFoundError

logger = logging.getLogger(__name__)

POST_SUFFIX = ".md"

# Alias to avoid shadowing by PostStore.list method
_list = list


class PostStore:
    """CRUD and lifecycle operations over a directory of post documents."""

    def __init__(self, content_dir: Path) -> None:
        self._dir = Path(content_dir)

    @property
    def content_dir(self) -> Path:
        return self._dir

    # ── Private helpers ──────────────────────────────────────────

    def path_for(self, slug: str) -> Path:
        return self._dir / f"{slug}{POST_SUFFIX}"

    def _read(self, path: Path) -> ContentItem:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise FrontmatterError(f"{path}: {exc}") from exc
        return item_from_document(text, slug=path.stem, file_path=str(path))

    # ── Write operations ─────────────────────────────────────────

    def create(self, title: str, author: str | None = None) -> ContentItem:
        """Create and persist a new draft.

        Raises:
            InvalidTitleError: If no slug can be derived from the title.
            DuplicateSlugError: If a post with the derived slug exists.
        """
        item = lifecycle.create(title, author=author)
        if self.exists(item.slug):
            raise DuplicateSlugError(item.slug)
        self.save(item)
        logger.info("Created draft %s", self.path_for(item.slug))
        return item

    def save(self, item: ContentItem) -> None:
        """Write an item to its document, replacing any previous content."""
        path = self.path_for(item.slug)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(item_to_document(item), encoding="utf-8")
        item.file_path = str(path)

    def edit(self, slug: str, body: str, author: str | None = None) -> ContentItem:
        """Replace a post's body (and optionally author) on disk."""
        item = lifecycle.edit(self.require(slug), body, author)
        self.save(item)
        return item

    def publish(self, slug: str) -> ContentItem:
        """Flip a post to published on disk."""
        item = lifecycle.publish(self.require(slug))
        self.save(item)
        return item

    def unpublish(self, slug: str) -> ContentItem:
        """Revert a published post to draft on disk."""
        item = lifecycle.unpublish(self.require(slug))
        self.save(item)
        return item

    # ── Read operations ──────────────────────────────────────────

    def get(self, slug: str) -> ContentItem | None:
        """Return a post by slug, or None if there is no such file.

        Raises:
            FrontmatterError: If the file exists but cannot be parsed.
        """
        path = self.path_for(slug)
        if not path.is_file():
            return None
        return self._read(path)

    def require(self, slug: str) -> ContentItem:
        """Return a post by slug.

        Raises:
            ItemNotFoundError: If the slug does not exist.
        """
        item = self.get(slug)
        if item is None:
            raise ItemNotFoundError(slug)
        return item

    def exists(self, slug: str) -> bool:
        return self.path_for(slug).is_file()

    def list(self, state: PublicationState | None = None) -> _list[ContentItem]:
        """Return all readable posts, newest first, optionally by state.

        Files that fail to parse are logged and skipped.
        """
        if not self._dir.is_dir():
            return []
        items: _list[ContentItem] = []
        for path in sorted(self._dir.glob(f"*{POST_SUFFIX}")):
            try:
                item = self._read(path)
            except FrontmatterError as exc:
                logger.warning("Skipping unreadable post %s: %s", path, exc)
                continue
            if state is None or item.state is state:
                items.append(item)
        items.sort(key=lambda i: i.created_at, reverse=True)
        return items

    def visible(self, preview: bool = False) -> _list[ContentItem]:
        """Posts the generator renders; drafts only when previewing."""
        return visible_items(self.list(), preview=preview)
