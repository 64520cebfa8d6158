"""CheckService — content and stylesheet validation, with safe repairs.

Single command following the linter pattern. Five categories:
front-matter parsing, document rules, identity (slugs and filenames),
assets, and the stylesheet.
"""

from __future__ import annotations

import logging
from typing import Any

from folioctl.domain.document import render_document
from folioctl.domain.stylesheet import (
    find_root_shadowing,
    undefined_variables,
    unused_custom_properties,
)
from folioctl.domain.tags import near_duplicate_tags
from folioctl.infrastructure.filesystem import read_text
from folioctl.infrastructure.store import ScanResult
from folioctl.services._helpers import today
from folioctl.services.base import BaseService
from folioctl.services.contracts import CheckResultData, dump_validated
from folioctl.services.result import ServiceResult

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Issue severity and category constants
# ---------------------------------------------------------------------------

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"

_SEVERITY_RANK = {SEVERITY_WARNING: 0, SEVERITY_ERROR: 1}

CAT_FRONTMATTER = "frontmatter"
CAT_DOCUMENT = "document"
CAT_IDENTITY = "identity"
CAT_ASSETS = "assets"
CAT_STYLESHEET = "stylesheet"


def _issue(
    category: str,
    severity: str,
    message: str,
    *,
    path: str | None = None,
    slug: str | None = None,
    line: int | None = None,
    fix_action: str | None = None,
) -> dict[str, Any]:
    return {
        "category": category,
        "severity": severity,
        "message": message,
        "path": path,
        "slug": slug,
        "line": line,
        "fix_action": fix_action,
    }


class CheckService(BaseService):
    """Handles site validation and repair."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def check(self, *, min_severity: str = SEVERITY_WARNING) -> ServiceResult:
        """Report issues without modifying anything."""
        if min_severity not in _SEVERITY_RANK:
            return ServiceResult.failure(
                "check", "INVALID_SEVERITY", f"Unknown severity: {min_severity!r}"
            )

        scan = self._store.scan()
        issues: list[dict[str, Any]] = []
        issues.extend(self._check_frontmatter(scan))
        issues.extend(self._check_documents(scan))
        issues.extend(self._check_identity(scan))
        issues.extend(self._check_assets(scan))
        issues.extend(self._check_stylesheet())

        threshold = _SEVERITY_RANK[min_severity]
        issues = [i for i in issues if _SEVERITY_RANK[i["severity"]] >= threshold]
        error_count = sum(1 for i in issues if i["severity"] == SEVERITY_ERROR)
        logger.debug("Check found %d issues (%d errors)", len(issues), error_count)

        return ServiceResult(
            ok=True,
            op="check",
            data=dump_validated(
                CheckResultData,
                {
                    "issues": issues,
                    "count": len(issues),
                    "error_count": error_count,
                    "warning_count": len(issues) - error_count,
                    "healthy": error_count == 0,
                    "documents": len(scan.entries) + len(scan.failures),
                },
            ),
            meta={
                "min_severity": min_severity,
                "stylesheet": self._store.relative(self._store.stylesheet_path),
            },
        )

    def fix(self) -> ServiceResult:
        """Repair what can be repaired mechanically.

        Every readable document is rewritten in canonical form (key order,
        sorted de-duplicated tags), which drops YAML comments. Files whose
        name does not match their slug are renamed when the target is free.
        """
        scan = self._store.scan()
        by_slug = scan.by_slug()
        fixes: list[str] = []
        warnings = self._failure_warnings(scan)

        for entry in scan.entries:
            rel = self._store.relative(entry.path)
            if read_text(entry.path) != render_document(entry.document):
                self._store.write(entry)
                fixes.append(f"Rewrote front-matter of {rel}")

            if entry.path.stem == entry.slug:
                continue
            if len(by_slug[entry.slug]) > 1:
                warnings.append(f"Left {rel} in place: slug {entry.slug!r} is not unique")
                continue
            target = entry.path.with_name(f"{entry.slug}{entry.path.suffix}")
            if target.exists():
                warnings.append(f"Cannot rename {rel}: {target.name} already exists")
                continue
            moved = self._store.rename(entry, target)
            fixes.append(f"Renamed {rel} -> {self._store.relative(moved.path)}")

        logger.debug("Applied %d fixes", len(fixes))
        return ServiceResult(
            ok=True,
            op="fix",
            data={"fixes": fixes, "count": len(fixes)},
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def _check_frontmatter(self, scan: ScanResult) -> list[dict[str, Any]]:
        return [
            _issue(
                CAT_FRONTMATTER,
                SEVERITY_ERROR,
                problem,
                path=self._store.relative(failure.path),
            )
            for failure in scan.failures
            for problem in failure.problems
        ]

    def _check_documents(self, scan: ScanResult) -> list[dict[str, Any]]:
        issues: list[dict[str, Any]] = []
        require_description = self._store.settings.check.require_description
        current = today()

        for entry in scan.entries:
            doc = entry.document
            rel = self._store.relative(entry.path)
            if require_description and not (doc.description or "").strip():
                issues.append(
                    _issue(
                        CAT_DOCUMENT,
                        SEVERITY_WARNING,
                        "Missing description",
                        path=rel,
                        slug=entry.slug,
                    )
                )
            if doc.image_caption and not doc.image:
                issues.append(
                    _issue(
                        CAT_DOCUMENT,
                        SEVERITY_WARNING,
                        "image_caption without image",
                        path=rel,
                        slug=entry.slug,
                    )
                )
            if doc.modified and doc.modified > current:
                issues.append(
                    _issue(
                        CAT_DOCUMENT,
                        SEVERITY_WARNING,
                        f"modified date {doc.modified.isoformat()} is in the future",
                        path=rel,
                        slug=entry.slug,
                    )
                )

        all_tags = {tag for entry in scan.entries for tag in entry.document.tags}
        for group in near_duplicate_tags(all_tags):
            issues.append(
                _issue(
                    CAT_DOCUMENT,
                    SEVERITY_WARNING,
                    f"Tags differ only by case or spacing: {', '.join(group)}",
                )
            )
        return issues

    def _check_identity(self, scan: ScanResult) -> list[dict[str, Any]]:
        issues: list[dict[str, Any]] = []
        for slug, entries in scan.by_slug().items():
            if len(entries) > 1:
                paths = ", ".join(self._store.relative(e.path) for e in entries)
                issues.append(
                    _issue(
                        CAT_IDENTITY,
                        SEVERITY_ERROR,
                        f"Duplicate slug shared by: {paths}",
                        slug=slug,
                    )
                )
                continue
            entry = entries[0]
            if entry.path.stem != slug:
                issues.append(
                    _issue(
                        CAT_IDENTITY,
                        SEVERITY_WARNING,
                        f"Filename does not match slug {slug!r}",
                        path=self._store.relative(entry.path),
                        slug=slug,
                        fix_action=f"rename to {slug}{entry.path.suffix}",
                    )
                )
        return issues

    def _check_assets(self, scan: ScanResult) -> list[dict[str, Any]]:
        issues: list[dict[str, Any]] = []
        for entry in scan.entries:
            image = entry.document.image
            if image and self._store.asset_exists(image) is False:
                issues.append(
                    _issue(
                        CAT_ASSETS,
                        SEVERITY_WARNING,
                        f"Image not found: {image}",
                        path=self._store.relative(entry.path),
                        slug=entry.slug,
                    )
                )
        return issues

    def _check_stylesheet(self) -> list[dict[str, Any]]:
        rel = self._store.relative(self._store.stylesheet_path)
        sheet = self._store.load_stylesheet()
        if sheet is None:
            return [_issue(CAT_STYLESHEET, SEVERITY_WARNING, "No stylesheet found", path=rel)]

        issues = [
            _issue(CAT_STYLESHEET, SEVERITY_ERROR, err.message, path=rel, line=err.line)
            for err in sheet.errors
        ]
        for shadow in find_root_shadowing(sheet):
            scope = f" in {' > '.join(shadow.context)}" if shadow.context else ""
            lines = ", ".join(str(n) for n in shadow.lines)
            if shadow.kind == "conflict":
                issues.append(
                    _issue(
                        CAT_STYLESHEET,
                        SEVERITY_ERROR,
                        f":root redefines {shadow.name}{scope} with different values "
                        f"(lines {lines}); the last one silently wins",
                        path=rel,
                        line=shadow.lines[-1],
                    )
                )
            else:
                issues.append(
                    _issue(
                        CAT_STYLESHEET,
                        SEVERITY_WARNING,
                        f":root repeats {shadow.name}{scope} (lines {lines})",
                        path=rel,
                        line=shadow.lines[-1],
                    )
                )
        for undefined in undefined_variables(sheet):
            issues.append(
                _issue(
                    CAT_STYLESHEET,
                    SEVERITY_WARNING,
                    f"var({undefined.name}) in {undefined.selector} "
                    f"{{ {undefined.property} }} is never defined",
                    path=rel,
                    line=undefined.line,
                )
            )
        if self._store.settings.check.warn_unused_properties:
            for prop in unused_custom_properties(sheet):
                issues.append(
                    _issue(
                        CAT_STYLESHEET,
                        SEVERITY_WARNING,
                        f"Custom property {prop.name} is never used",
                        path=rel,
                        line=prop.line,
                    )
                )
        return issues
