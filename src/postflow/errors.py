"""Exception hierarchy shared by the content, author, and generator layers."""

from __future__ import annotations


class PostflowError(Exception):
    """Base error for everything raised by postflow."""


class InvalidTitleError(PostflowError, ValueError):
    """A title could not be turned into a usable slug."""

    def __init__(self, title: str) -> None:
        self.title = title
        super().__init__(f"Cannot derive a slug from title {title!r}")


class DuplicateSlugError(PostflowError):
    """A post with this slug already exists."""

    def __init__(self, slug: str) -> None:
        self.slug = slug
        super().__init__(f"A post with slug {slug!r} already exists")


class ItemNotFoundError(PostflowError, KeyError):
    """No post is stored under this slug."""

    def __init__(self, slug: str) -> None:
        self.slug = slug
        super().__init__(slug)

    def __str__(self) -> str:
        return f"No post with slug {self.slug!r}"


class FrontmatterError(PostflowError):
    """A post document has unreadable front matter."""


class InvalidHandleError(PostflowError, ValueError):
    """An author handle is not a file-system-safe name."""

    def __init__(self, handle: str) -> None:
        self.handle = handle
        super().__init__(
            f"Invalid author handle {handle!r}: use lowercase letters, digits, '-' or '_'"
        )


class AuthorExistsError(PostflowError):
    """An author with this handle is already registered."""

    def __init__(self, handle: str) -> None:
        self.handle = handle
        super().__init__(f"Author {handle!r} is already registered")


class GeneratorError(PostflowError):
    """The external site generator failed."""
