"""Content domain — post lifecycle models, operations, and store.

A post is created as a draft, edited, and published; the store keeps each
post as a Markdown document the site generator can render directly.
"""

from postflow.content.lifecycle import (
    create,
    edit,
    is_public,
    publish,
    unpublish,
    visible_items,
)
from postflow.content.models import ContentItem, PublicationState
from postflow.content.slugs import slugify
from postflow.content.store import PostStore

__all__ = [
    "ContentItem",
    "PostStore",
    "PublicationState",
    "create",
    "edit",
    "is_public",
    "publish",
    "slugify",
    "unpublish",
    "visible_items",
]
