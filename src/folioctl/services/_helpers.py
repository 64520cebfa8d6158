"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from folioctl.infrastructure.store import ContentEntry, ContentStore


def today() -> date:
    """Today's calendar date (UTC)."""
    return datetime.now(UTC).date()


def parse_iso_date(value: str) -> date:
    """Parse ``YYYY-MM-DD``.

    Raises:
        ValueError: *value* is not an ISO calendar date.
    """
    return date.fromisoformat(value.strip())


def entry_summary(entry: ContentEntry, store: ContentStore) -> dict[str, Any]:
    """JSON-ready listing row for a document."""
    doc = entry.document
    return {
        "slug": entry.slug,
        "kind": entry.kind,
        "title": doc.title,
        "date": doc.date.isoformat(),
        "modified": doc.modified.isoformat() if doc.modified else None,
        "tags": sorted(doc.tags),
        "description": doc.description,
        "path": store.relative(entry.path),
    }


def entry_detail(entry: ContentEntry, store: ContentStore) -> dict[str, Any]:
    """Full JSON-ready record for a document, body included."""
    doc = entry.document
    return {
        **entry_summary(entry, store),
        "image": doc.image,
        "image_caption": doc.image_caption,
        "extra": dict(doc.extra),
        "body": doc.body,
    }
