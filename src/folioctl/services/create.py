"""CreateService — authoring new posts and pages.

Pipeline: VALIDATE → GENERATE → PERSIST → RESPOND
"""

from __future__ import annotations

from datetime import date
from typing import Any

from jinja2 import TemplateNotFound

from folioctl.domain.document import Document
from folioctl.domain.frontmatter import FrontmatterError
from folioctl.domain.tags import near_duplicate_tags
from folioctl.infrastructure.store import ContentEntry
from folioctl.infrastructure.templates import build_template_environment
from folioctl.services._helpers import today
from folioctl.services.base import BaseService
from folioctl.services.result import ServiceResult


class CreateService(BaseService):
    """Handles document creation for posts and pages."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def create_post(
        self,
        title: str,
        *,
        tags: list[str] | None = None,
        description: str | None = None,
        image: str | None = None,
        image_caption: str | None = None,
        on: date | None = None,
    ) -> ServiceResult:
        """Create a new blog post under the posts directory."""
        return self._create(
            kind="post",
            template="post.md.j2",
            title=title,
            tags=tags,
            description=description,
            image=image,
            image_caption=image_caption,
            on=on,
        )

    def create_page(
        self,
        title: str,
        *,
        template: str = "page",
        tags: list[str] | None = None,
        description: str | None = None,
        image: str | None = None,
        image_caption: str | None = None,
        on: date | None = None,
    ) -> ServiceResult:
        """Create a standalone page (``--template resume`` for a résumé)."""
        return self._create(
            kind="page",
            template=f"{template}.md.j2",
            title=title,
            tags=tags,
            description=description,
            image=image,
            image_caption=image_caption,
            on=on,
        )

    # ------------------------------------------------------------------
    # Pipeline (private)
    # ------------------------------------------------------------------

    def _create(
        self,
        *,
        kind: str,
        template: str,
        title: str,
        tags: list[str] | None,
        on: date | None,
        **fields: Any,
    ) -> ServiceResult:
        op = f"create_{kind}"
        warnings: list[str] = []

        # ── VALIDATE ──────────────────────────────────────────────
        fm = {
            "title": title,
            "date": on or today(),
            "tags": list(tags or []),
            **{k: v for k, v in fields.items() if v},
        }
        try:
            document = Document.from_frontmatter(fm)
        except FrontmatterError as exc:
            return ServiceResult.failure(
                op, "VALIDATION_FAILED", str(exc), problems=list(exc.problems)
            )

        if document.image_caption and not document.image:
            warnings.append("image_caption given without image")

        scan = self._store.scan()
        existing_tags = {tag for entry in scan.entries for tag in entry.document.tags}
        for group in near_duplicate_tags(existing_tags | document.tags):
            if any(tag in document.tags for tag in group):
                warnings.append(f"Tag variants in use: {', '.join(group)}")

        # ── GENERATE ──────────────────────────────────────────────
        env = build_template_environment("content", site_root=self._store.root)
        try:
            tmpl = env.get_template(template)
        except TemplateNotFound:
            return ServiceResult.failure(
                op, "TEMPLATE_NOT_FOUND", f"No content template named {template!r}"
            )
        body = tmpl.render(
            title=document.title,
            date=document.date.isoformat(),
            tags=sorted(document.tags),
            description=document.description or "",
            image=document.image,
            image_caption=document.image_caption,
            site=self._store.settings.site,
        )
        document = document.revise(body=body)

        # ── PERSIST ───────────────────────────────────────────────
        slug = document.slug
        path = self._store.path_for(kind, slug)
        clashes = scan.by_slug().get(slug, [])
        if clashes or path.exists():
            where = clashes[0].path if clashes else path
            return ServiceResult.failure(
                op,
                "DUPLICATE_SLUG",
                f"A document with slug {slug!r} already exists",
                path=self._store.relative(where),
            )
        self._store.write(ContentEntry(kind, path, document))

        # ── RESPOND ───────────────────────────────────────────────
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "slug": slug,
                "kind": kind,
                "title": document.title,
                "date": document.date.isoformat(),
                "tags": sorted(document.tags),
                "path": self._store.relative(path),
            },
            warnings=warnings,
        )
