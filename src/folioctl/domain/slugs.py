"""Slug derivation for documents.

A document's slug is ``YYYY-MM-DD-<title-slug>``: the publication date
followed by an ASCII-folded, hyphenated form of the title.

INVARIANT: Slugs are permanent. ``title`` and ``date`` never change after
a document is created, so neither does the slug derived from them.
"""

from __future__ import annotations

import re
import unicodedata
from datetime import date

SLUG_PATTERN: re.Pattern[str] = re.compile(r"^\d{4}-\d{2}-\d{2}-[a-z0-9]+(?:-[a-z0-9]+)*$")

_FALLBACK = "untitled"


def slugify(text: str) -> str:
    """Reduce *text* to lowercase ASCII words joined by hyphens.

    Examples:
        >>> slugify("Move Semantics, Revisited")
        'move-semantics-revisited'
        >>> slugify("Café au lait")
        'cafe-au-lait'
        >>> slugify("???")
        'untitled'
    """
    folded = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-z0-9]+", "-", folded.lower()).strip("-")
    return slug or _FALLBACK


def slugify_document(published: date, title: str) -> str:
    """Build the permanent slug for a document published on *published*."""
    return f"{published.isoformat()}-{slugify(title)}"


def is_valid_slug(slug: str) -> bool:
    """Check whether *slug* has the ``YYYY-MM-DD-words`` shape."""
    return SLUG_PATTERN.match(slug) is not None
