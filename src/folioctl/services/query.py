"""QueryService — structured retrieval over the content store.

Three read-only surfaces:
- get: one document by slug, body included
- list_items: filtered, sorted listing
- tags: tag usage counts across the site
"""

from __future__ import annotations

from datetime import date

from folioctl.domain.tags import normalize_tag, tag_counts
from folioctl.infrastructure.store import (
    ContentEntry,
    DocumentNotFoundError,
    DuplicateSlugError,
)
from folioctl.services._helpers import entry_detail, entry_summary
from folioctl.services.base import BaseService
from folioctl.services.contracts import (
    ListItemsResultData,
    TagsResultData,
    dump_validated,
)
from folioctl.services.result import ServiceResult

SORT_MODES = ("recency", "modified", "title")


def _sort_key(mode: str):
    if mode == "title":
        return lambda e: (e.document.title.casefold(), e.slug)
    if mode == "modified":
        return lambda e: (e.document.last_changed, e.slug)
    return lambda e: (e.document.date, e.slug)


class QueryService(BaseService):
    """Handles document retrieval and listings."""

    def get(self, slug: str) -> ServiceResult:
        """Retrieve one document by slug."""
        try:
            entry = self._store.get(slug)
        except DocumentNotFoundError as exc:
            return ServiceResult.failure("get", "NOT_FOUND", str(exc), slug=slug)
        except DuplicateSlugError as exc:
            return ServiceResult.failure(
                "get",
                "DUPLICATE_SLUG",
                str(exc),
                paths=[self._store.relative(p) for p in exc.paths],
            )
        return ServiceResult(ok=True, op="get", data=entry_detail(entry, self._store))

    def list_items(
        self,
        *,
        kind: str | None = None,
        tag: str | None = None,
        since: date | None = None,
        sort: str = "recency",
        limit: int = 20,
    ) -> ServiceResult:
        """List documents, newest first unless sorted by title.

        Args:
            kind: ``post`` or ``page``; both when None.
            tag: Keep documents carrying this tag (case-insensitive).
            since: Keep documents changed on or after this date.
            sort: ``recency`` (by date), ``modified``, or ``title``.
            limit: Maximum rows returned.
        """
        if sort not in SORT_MODES:
            return ServiceResult.failure(
                "list_items", "INVALID_SORT", f"Unknown sort mode: {sort!r}"
            )

        scan = self._store.scan(kind)
        entries: list[ContentEntry] = scan.entries
        if tag:
            wanted = normalize_tag(tag)
            entries = [
                e for e in entries if any(normalize_tag(t) == wanted for t in e.document.tags)
            ]
        if since:
            entries = [e for e in entries if e.document.last_changed >= since]

        entries = sorted(entries, key=_sort_key(sort), reverse=sort != "title")
        total = len(entries)
        items = [entry_summary(e, self._store) for e in entries[: max(limit, 0)]]

        return ServiceResult(
            ok=True,
            op="list_items",
            data=dump_validated(
                ListItemsResultData, {"items": items, "count": len(items), "total": total}
            ),
            warnings=self._failure_warnings(scan),
            meta={
                "kind": kind,
                "tag": tag,
                "since": since.isoformat() if since else None,
                "sort": sort,
                "limit": limit,
            },
        )

    def tags(self, *, kind: str | None = None) -> ServiceResult:
        """Tag usage across documents, most used first."""
        scan = self._store.scan(kind)
        counts = tag_counts(e.document.tags for e in scan.entries)
        items = [{"tag": tag, "count": count} for tag, count in counts]
        return ServiceResult(
            ok=True,
            op="tags",
            data=dump_validated(TagsResultData, {"items": items, "count": len(items)}),
            warnings=self._failure_warnings(scan),
        )
