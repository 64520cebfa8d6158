"""Tests for operation-specific Rich renderers."""

from folioctl.output.renderers import render_quiet, render_result
from folioctl.services.result import ServiceError, ServiceResult

# ── Helpers ───────────────────────────────────────────────────────────


def _ok(op: str, **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str, code: str, message: str, **detail: object) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=dict(detail)),
    )


_ITEMS = [
    {
        "slug": "2024-03-01-jit",
        "kind": "post",
        "title": "JIT",
        "tags": ["cpp", "gpu"],
        "modified": "2024-04-01",
        "path": "_posts/2024-03-01-jit.md",
    },
    {
        "slug": "2023-12-01-about",
        "kind": "page",
        "title": "About",
        "tags": [],
        "modified": None,
        "path": "_pages/2023-12-01-about.md",
    },
]


# ── Error rendering ──────────────────────────────────────────────────


class TestErrorRenderer:
    def test_basic_error(self) -> None:
        output = render_result(_err("create_post", "VALIDATION_FAILED", "title is blank"))
        assert "ERROR" in output
        assert "create_post" in output
        assert "title is blank" in output

    def test_problems_listed(self) -> None:
        result = _err("update", "VALIDATION_FAILED", "bad", problems=["date: invalid", "tags: x"])
        output = render_result(result)
        assert "  - date: invalid" in output
        assert "  - tags: x" in output

    def test_verbose_shows_detail(self) -> None:
        output = render_result(_err("get", "NOT_FOUND", "Bad", slug="2024-01-01-x"), verbose=True)
        assert "detail" in output
        assert "slug: 2024-01-01-x" in output

    def test_no_error_object(self) -> None:
        assert "Unknown error" in render_result(ServiceResult(ok=False, op="get"))


# ── Mutation renderer ────────────────────────────────────────────────


class TestMutationRenderer:
    def test_create_post(self) -> None:
        result = _ok(
            "create_post",
            slug="2024-01-01-move-semantics",
            path="_posts/2024-01-01-move-semantics.md",
            title="Move Semantics",
            kind="post",
            tags=[],
        )
        output = render_result(result)
        assert "OK" in output
        assert "slug: 2024-01-01-move-semantics" in output
        assert "_posts/2024-01-01-move-semantics.md" in output
        assert "tags" not in output

    def test_update_shows_fields_changed(self) -> None:
        result = _ok("update", slug="s", fields_changed=["description", "tags"])
        assert "fields_changed: description, tags" in render_result(result)

    def test_update_without_changes(self) -> None:
        result = _ok("touch", slug="s", fields_changed=[])
        assert "fields_changed: (none)" in render_result(result)


# ── Query renderers ──────────────────────────────────────────────────


class TestSingleItemRenderer:
    def test_get_result(self) -> None:
        result = _ok(
            "get",
            slug="2024-03-01-jit",
            title="JIT",
            kind="post",
            date="2024-03-01",
            modified=None,
            tags=["cpp"],
            description="Runtime codegen",
            extra={"layout": "post"},
            body="\nHello body.\n",
        )
        output = render_result(result)
        assert "2024-03-01-jit: JIT" in output
        assert "description: Runtime codegen" in output
        assert "tags: cpp" in output
        assert "layout: post" in output
        assert "Hello body." in output
        assert "modified" not in output


class TestItemTableRenderer:
    def test_list_items(self) -> None:
        output = render_result(_ok("list_items", items=_ITEMS, count=2, total=2))
        assert "2024-03-01-jit" in output
        assert "About" in output
        assert "cpp, gpu" in output
        assert output.endswith("2 documents")

    def test_truncated_total(self) -> None:
        output = render_result(_ok("list_items", items=_ITEMS[:1], count=1, total=5))
        assert output.endswith("1 of 5 documents")

    def test_verbose_shows_modified_and_path(self) -> None:
        output = render_result(_ok("list_items", items=_ITEMS, count=2, total=2), verbose=True)
        assert "Modified" in output
        assert "2024-04-01" in output
        assert "_posts/2024-03-01-jit.md" in output

    def test_verbose_shows_meta(self) -> None:
        result = ServiceResult(
            ok=True,
            op="list_items",
            data={"items": _ITEMS, "count": 2, "total": 2},
            meta={"sort": "title"},
        )
        assert "sort: title" in render_result(result, verbose=True)
        assert "sort: title" not in render_result(result)


class TestTagsRenderer:
    def test_tags(self) -> None:
        items = [{"tag": "cpp", "count": 3}, {"tag": "gpu", "count": 1}]
        output = render_result(_ok("tags", items=items, count=2))
        assert "cpp" in output
        assert output.endswith("2 tags")

    def test_empty(self) -> None:
        assert render_result(_ok("tags", items=[], count=0)) == "No tags in use."


# ── Check renderers ──────────────────────────────────────────────────


class TestCheckRenderer:
    def test_no_issues(self) -> None:
        output = render_result(_ok("check", issues=[], count=0, error_count=0))
        assert "No issues found." in output

    def test_verbose_shows_meta(self) -> None:
        result = ServiceResult(
            ok=True,
            op="check",
            data={"issues": [], "count": 0, "error_count": 0},
            meta={"min_severity": "error", "stylesheet": "assets/css/style.css"},
        )
        output = render_result(result, verbose=True)
        assert "min_severity: error" in output
        assert "stylesheet: assets/css/style.css" in output

    def test_with_issues(self) -> None:
        issues = [
            {
                "category": "stylesheet",
                "severity": "error",
                "message": ":root redefines --c",
                "path": "assets/css/style.css",
                "line": 7,
                "fix_action": None,
            },
            {
                "category": "identity",
                "severity": "warning",
                "message": "Filename does not match slug",
                "path": "_posts/draft.md",
                "slug": "2024-01-01-x",
                "line": None,
                "fix_action": "rename to 2024-01-01-x.md",
            },
        ]
        result = _ok("check", issues=issues, count=2, error_count=1, warning_count=1)
        output = render_result(result)
        assert "stylesheet" in output
        assert "assets/css/style.css:7: :root redefines --c" in output
        assert "_posts/draft.md: Filename does not match slug" in output
        assert "rename to" not in output
        assert output.endswith("1 errors, 1 warnings")

        verbose = render_result(result, verbose=True)
        assert "fix: rename to 2024-01-01-x.md" in verbose


class TestFixRenderer:
    def test_fix(self) -> None:
        output = render_result(_ok("fix", fixes=["Renamed a -> b"], count=1))
        assert "fixes_applied: 1" in output
        assert "Renamed" not in output

    def test_verbose_lists_fixes(self) -> None:
        output = render_result(_ok("fix", fixes=["Renamed a -> b"], count=1), verbose=True)
        assert "- Renamed a -> b" in output


# ── Style renderers ──────────────────────────────────────────────────


class TestStyleRenderers:
    def test_style_info(self) -> None:
        result = _ok(
            "style_info",
            path="assets/css/style.css",
            rules=12,
            declarations=40,
            statements=[],
            custom_properties=5,
            breakpoints=["@media (max-width: 700px)", "@media print"],
            syntax_errors=0,
        )
        output = render_result(result)
        assert "rules: 12" in output
        assert "breakpoints: 2" in output
        assert "@media print" in output

    def test_style_vars(self) -> None:
        items = [
            {
                "name": "--ink",
                "value": "#111",
                "selector": ":root",
                "context": "@media print",
                "line": 3,
                "references": 0,
            }
        ]
        output = render_result(_ok("style_vars", items=items, count=1))
        assert "--ink" in output
        assert "@media print > :root" in output
        assert output.endswith("1 definitions")

    def test_style_lookup(self) -> None:
        result = _ok(
            "style_lookup",
            selector="a:hover",
            context="",
            declarations={"color": "var(--accent)"},
            count=1,
        )
        assert render_result(result) == "a:hover {\n  color: var(--accent);\n}"


# ── Init and generic ─────────────────────────────────────────────────


class TestInitRenderer:
    def test_init(self) -> None:
        result = _ok(
            "init_site",
            site_path="/tmp/site",
            title="Folio",
            files_written=["folio.toml", "assets/css/style.css"],
        )
        output = render_result(result)
        assert "files_written: 2" in output
        assert "folio.toml" not in output
        assert "folio.toml" in render_result(result, verbose=True)


class TestGenericRenderer:
    def test_unknown_op(self) -> None:
        output = render_result(_ok("something", answer=42, nested={"a": 1}))
        assert "answer: 42" in output
        assert 'nested: {"a":1}' in output


# ── Quiet mode ───────────────────────────────────────────────────────


class TestQuietMode:
    def test_mutation_quiet(self) -> None:
        assert render_quiet(_ok("create_post", slug="2024-01-01-x")) == "2024-01-01-x"

    def test_listing_quiet_returns_slugs(self) -> None:
        assert render_quiet(_ok("list_items", items=_ITEMS)) == (
            "2024-03-01-jit\n2023-12-01-about"
        )

    def test_tags_quiet(self) -> None:
        assert render_quiet(_ok("tags", items=[{"tag": "cpp", "count": 1}])) == "cpp"

    def test_style_vars_quiet(self) -> None:
        assert render_quiet(_ok("style_vars", items=[{"name": "--ink"}])) == "--ink"

    def test_error_quiet(self) -> None:
        assert render_quiet(_err("get", "NOT_FOUND", "missing")) == "ERROR: get: missing"

    def test_plain_ok(self) -> None:
        assert render_quiet(_ok("check", count=0)) == "OK: check"
