"""StyleService — read-only views of the site stylesheet."""

from __future__ import annotations

from folioctl.domain.stylesheet import custom_properties, reference_counts
from folioctl.services.base import BaseService
from folioctl.services.contracts import StyleVarsResultData, dump_validated
from folioctl.services.result import ServiceResult


def _context_label(context: tuple[str, ...]) -> str:
    return " > ".join(context)


def _parse_context(context: str | None) -> tuple[str, ...]:
    """``"@media (x) > @supports (y)"`` → ``("@media (x)", "@supports (y)")``."""
    if not context:
        return ()
    return tuple(" ".join(part.split()) for part in context.split(">") if part.strip())


class StyleService(BaseService):
    """Summaries, custom properties, and cascade lookups for the stylesheet."""

    def info(self) -> ServiceResult:
        """Rule counts, breakpoints, and syntax error count."""
        sheet = self._store.load_stylesheet()
        if sheet is None:
            return self._missing("style_info")
        props = custom_properties(sheet)
        return ServiceResult(
            ok=True,
            op="style_info",
            data={
                "path": self._store.relative(self._store.stylesheet_path),
                "rules": len(sheet.rules),
                "declarations": sum(len(r.declarations) for r in sheet.rules),
                "statements": [f"@{s.keyword} {s.prelude}".strip() for s in sheet.statements],
                "custom_properties": len({p.name for p in props}),
                "breakpoints": sheet.breakpoints(),
                "syntax_errors": len(sheet.errors),
            },
        )

    def variables(self) -> ServiceResult:
        """Every custom-property definition with its usage count."""
        sheet = self._store.load_stylesheet()
        if sheet is None:
            return self._missing("style_vars")
        refs = reference_counts(sheet)
        items = [
            {
                "name": prop.name,
                "value": prop.value,
                "selector": prop.selector,
                "context": _context_label(prop.context),
                "line": prop.line,
                "references": refs.get(prop.name, 0),
            }
            for prop in custom_properties(sheet)
        ]
        return ServiceResult(
            ok=True,
            op="style_vars",
            data=dump_validated(StyleVarsResultData, {"items": items, "count": len(items)}),
        )

    def lookup(self, selector: str, *, context: str | None = None) -> ServiceResult:
        """Cascaded declarations for *selector* inside *context*.

        *context* is an at-rule prelude such as ``@media (max-width: 700px)``;
        nest several with ``>``.
        """
        sheet = self._store.load_stylesheet()
        if sheet is None:
            return self._missing("style_lookup")
        ctx = _parse_context(context)
        declarations = sheet.declarations_for(selector, ctx)
        if not declarations:
            return ServiceResult.failure(
                "style_lookup",
                "NOT_FOUND",
                f"No rule targets {selector!r}"
                + (f" inside {_context_label(ctx)}" if ctx else ""),
            )
        return ServiceResult(
            ok=True,
            op="style_lookup",
            data={
                "selector": " ".join(selector.split()),
                "context": _context_label(ctx),
                "declarations": declarations,
                "count": len(declarations),
            },
        )

    def _missing(self, op: str) -> ServiceResult:
        path = self._store.relative(self._store.stylesheet_path)
        return ServiceResult.failure(op, "NO_STYLESHEET", f"No stylesheet at {path}", path=path)
