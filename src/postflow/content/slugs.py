"""Title-to-slug conversion."""

from __future__ import annotations

import re
import unicodedata

MAX_SLUG_LENGTH = 80

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def slugify(title: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """Turn a title into a lowercase, hyphen-separated, filesystem-safe slug.

    Accented letters are transliterated to ASCII; anything else outside
    ``[a-z0-9]`` becomes a single hyphen.  Returns an empty string when the
    title has no addressable characters.

    Long slugs are cut at the last hyphen before ``max_length`` so words
    stay whole.
    """
    normalized = unicodedata.normalize("NFKD", title)
    ascii_text = normalized.encode("ascii", "ignore").decode("ascii").lower()
    slug = _NON_ALNUM_RE.sub("-", ascii_text).strip("-")

    if len(slug) > max_length:
        cut = slug[:max_length]
        if slug[max_length] != "-" and "-" in cut:
            cut = cut.rsplit("-", 1)[0]
        slug = cut.strip("-")
    return slug
