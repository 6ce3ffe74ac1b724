"""Author domain — registration and lookup of post authors."""

from postflow.authors.models import AuthorRecord, is_valid_handle
from postflow.authors.registry import AuthorRegistry

__all__ = [
    "AuthorRecord",
    "AuthorRegistry",
    "is_valid_handle",
]
