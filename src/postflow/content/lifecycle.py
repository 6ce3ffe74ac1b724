"""Publication lifecycle operations on a single content item.

Two states, one designed transition::

    DRAFT ──publish──▶ PUBLISHED

``unpublish`` is the explicit escape hatch back to DRAFT and the only
operation that moves an item backwards.

All functions mutate and return the item they are given.  None of them
perform I/O.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime

from postflow.content.models import ContentItem, PublicationState
from postflow.content.slugs import slugify
from postflow.errors import InvalidTitleError

logger = logging.getLogger(__name__)


def create(
    title: str,
    *,
    author: str | None = None,
    now: datetime | None = None,
) -> ContentItem:
    """Start a new draft from a title.

    Args:
        title: Human-supplied title; must contain at least one character
            that survives slug conversion.
        author: Optional author handle.  Not checked against the registry.
        now: Creation timestamp override.  Defaults to the current UTC time.

    Returns:
        A DRAFT item with an empty body.

    Raises:
        InvalidTitleError: If the title is blank or yields an empty slug.
    """
    if not title or not title.strip():
        raise InvalidTitleError(title)
    slug = slugify(title)
    if not slug:
        raise InvalidTitleError(title)

    item = ContentItem(
        slug=slug,
        title=title.strip(),
        created_at=now or datetime.now(tz=UTC),
        author=author,
    )
    logger.debug("Created draft %s", slug)
    return item


def edit(item: ContentItem, body: str, author: str | None = None) -> ContentItem:
    """Replace the body and, when given, the author handle.

    The publication state and creation time are left untouched.
    """
    item.body = body
    if author is not None:
        item.author = author
    return item


def publish(item: ContentItem) -> ContentItem:
    """Move an item to PUBLISHED.  Publishing twice is a no-op."""
    if not item.body.strip():
        logger.warning("Publishing %s with an empty body", item.slug)
    if item.state is PublicationState.PUBLISHED:
        logger.debug("%s is already published", item.slug)
        return item
    item.state = PublicationState.PUBLISHED
    logger.info("Published %s", item.slug)
    return item


def unpublish(item: ContentItem) -> ContentItem:
    """Move a published item back to DRAFT.

    Supported, but treated as a workflow exception and logged as such.
    """
    if item.state is PublicationState.DRAFT:
        return item
    item.state = PublicationState.DRAFT
    logger.warning("Reverted %s to draft; it will drop out of the next build", item.slug)
    return item


def is_public(item: ContentItem) -> bool:
    """True when the generator should include the item in public output."""
    return not item.draft


def visible_items(items: Iterable[ContentItem], preview: bool = False) -> list[ContentItem]:
    """Return the items a rendering pass includes.

    Public items are always included; drafts only when ``preview`` is set.
    """
    if preview:
        return list(items)
    return [item for item in items if is_public(item)]
