"""UpdateService — in-place edits to existing documents.

Pipeline: VALIDATE → APPLY → PERSIST → RESPOND

``title`` and ``date`` are immutable: the slug is derived from them and
slugs are permanent. Every successful edit stamps ``modified``.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from folioctl.domain.frontmatter import FrontmatterError
from folioctl.infrastructure.store import (
    ContentEntry,
    DocumentNotFoundError,
    DuplicateSlugError,
)
from folioctl.services._helpers import today
from folioctl.services.base import BaseService
from folioctl.services.result import ServiceResult

IMMUTABLE_FIELDS = frozenset({"title", "date"})

# Fields that are set (or cleared with an empty string) directly.
_SCALAR_FIELDS = ("description", "image", "image_caption", "body")

UPDATABLE_FIELDS = frozenset({*_SCALAR_FIELDS, "tags", "add_tags", "remove_tags"})


class UpdateService(BaseService):
    """Handles document modification."""

    def update(
        self,
        slug: str,
        *,
        changes: dict[str, Any],
        on: date | None = None,
    ) -> ServiceResult:
        """Apply *changes* to the document *slug* and stamp ``modified``.

        Supported keys: ``description``, ``image``, ``image_caption``,
        ``body`` (empty string clears the first three), ``tags``
        (replace), ``add_tags``, ``remove_tags``.
        """
        return self._apply("update", slug, changes, on)

    def touch(self, slug: str, *, on: date | None = None) -> ServiceResult:
        """Only stamp ``modified`` on the document *slug*."""
        return self._apply("touch", slug, {}, on)

    # ------------------------------------------------------------------

    def _apply(
        self,
        op: str,
        slug: str,
        changes: dict[str, Any],
        on: date | None,
    ) -> ServiceResult:
        # ── VALIDATE ──────────────────────────────────────────────
        frozen = sorted(IMMUTABLE_FIELDS & changes.keys())
        if frozen:
            return ServiceResult.failure(
                op,
                "IMMUTABLE_FIELD",
                f"Cannot change {', '.join(frozen)}: the slug is derived from them",
                fields=frozen,
            )
        unknown = sorted(changes.keys() - UPDATABLE_FIELDS)
        if unknown:
            return ServiceResult.failure(
                op, "UNKNOWN_FIELD", f"Unknown field(s): {', '.join(unknown)}", fields=unknown
            )

        try:
            entry = self._store.get(slug)
        except DocumentNotFoundError as exc:
            return ServiceResult.failure(op, "NOT_FOUND", str(exc), slug=slug)
        except DuplicateSlugError as exc:
            return ServiceResult.failure(op, "DUPLICATE_SLUG", str(exc), slug=slug)

        # ── APPLY ─────────────────────────────────────────────────
        doc = entry.document
        revised: dict[str, Any] = {}
        for key in _SCALAR_FIELDS:
            if key in changes:
                value = changes[key]
                if key != "body" and value == "":
                    value = None
                revised[key] = value

        tags = set(changes.get("tags", doc.tags))
        tags |= {t for t in changes.get("add_tags", ()) if t}
        tags -= set(changes.get("remove_tags", ()))
        if tags != set(doc.tags):
            revised["tags"] = frozenset(tags)

        fields_changed = sorted(k for k, v in revised.items() if getattr(doc, k) != v)
        revised["modified"] = on or today()
        try:
            updated = doc.revise(**revised)
        except FrontmatterError as exc:
            return ServiceResult.failure(
                op, "VALIDATION_FAILED", str(exc), problems=list(exc.problems)
            )

        # ── PERSIST ───────────────────────────────────────────────
        self._store.write(ContentEntry(entry.kind, entry.path, updated))

        warnings: list[str] = []
        if updated.image_caption and not updated.image:
            warnings.append("image_caption set without image")

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "slug": updated.slug,
                "title": updated.title,
                "path": self._store.relative(entry.path),
                "modified": updated.modified.isoformat() if updated.modified else None,
                "fields_changed": fields_changed,
            },
            warnings=warnings,
        )
