"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from folioctl.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from folioctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    # Listings print one key per line; mutations print the slug.
    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(k for k in (_extract_key(item) for item in items) if k)
    if "slug" in result.data:
        return str(result.data["slug"])

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _extract_key(item: Any) -> str:
    """Extract the identifying value from a listing row."""
    if isinstance(item, dict):
        for key in ("slug", "tag", "name"):
            val = item.get(key)
            if val is not None:
                return str(val)
    return ""


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="folio.ok")
    op = Text(f"  {result.op}", style="folio.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="folio.key")
    if key == "slug":
        v = Text(str(value), style="folio.slug")
    elif key.endswith("path"):
        v = Text(str(value), style="folio.path")
    elif key == "title":
        v = Text(str(value), style="folio.title")
    elif isinstance(value, list):
        v = Text(", ".join(str(x) for x in value))
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block (verbose only)."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(f"    {k}: {v}", markup=False)


def _new_table() -> Table:
    return Table(show_header=True, show_lines=False, pad_edge=False, expand=False)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="folio.error")
    op = Text(f"  {result.op}", style="folio.op")
    console.print(label, op, Text(": "), Text(msg))

    if err and err.detail.get("problems"):
        for problem in err.detail["problems"]:
            console.print(Text(f"  - {problem}"))
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}", markup=False)


# ── Mutation renderers ────────────────────────────────────────────────


def _render_mutation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render create/update/touch results."""
    _status_line(console, result)
    for key in ("slug", "path", "title", "kind", "date", "modified", "tags"):
        if key in result.data and result.data[key] not in (None, []):
            _field(console, key, result.data[key])
    if "fields_changed" in result.data:
        _field(console, "fields_changed", result.data["fields_changed"] or "(none)")
    if verbose:
        _render_meta(console, result)


# ── Query renderers ───────────────────────────────────────────────────


def _render_single_item(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render query-get result as a panel with metadata."""
    d = result.data
    lines: list[str] = []
    for key in ("kind", "date", "modified", "description", "image", "image_caption", "path"):
        val = d.get(key)
        if val is not None:
            lines.append(f"{key}: {val}")

    tags = d.get("tags", [])
    if tags:
        lines.append(f"tags: {', '.join(tags)}")
    for key, val in (d.get("extra") or {}).items():
        lines.append(f"{key}: {val}")

    content = "\n".join(lines)
    body = d.get("body", "")
    if body:
        content += f"\n\n{body.strip()}"

    title = f"{d.get('slug', '?')}: {d.get('title', 'Untitled')}"
    style = style_for_kind(str(d.get("kind", "")))
    console.print(
        Panel(Text(content), title=escape(title), border_style=style or "dim", expand=False)
    )


def _render_item_table(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render list_items results as a table."""
    items = result.data.get("items", [])
    table = _new_table()
    table.add_column("Slug", style="folio.slug", no_wrap=True)
    table.add_column("Title", style="folio.title")
    table.add_column("Kind")
    table.add_column("Tags", style="folio.tag")
    if verbose:
        table.add_column("Modified", style="dim")
        table.add_column("Path", style="folio.path")

    for item in items:
        kind = str(item.get("kind", ""))
        row: list[Any] = [
            str(item.get("slug", "")),
            str(item.get("title", "")),
            Text(kind, style=style_for_kind(kind)),
            ", ".join(item.get("tags", [])),
        ]
        if verbose:
            row.append(str(item.get("modified") or ""))
            row.append(str(item.get("path", "")))
        table.add_row(*row)

    console.print(table)
    count = result.data.get("count", len(items))
    total = result.data.get("total", count)
    suffix = f" of {total}" if total != count else ""
    console.print(f"\n{count}{suffix} documents")
    if verbose:
        _render_meta(console, result)


def _render_tags(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render tag usage counts."""
    items = result.data.get("items", [])
    if not items:
        console.print("No tags in use.")
        return
    table = _new_table()
    table.add_column("Tag", style="folio.tag")
    table.add_column("Documents", justify="right")
    for item in items:
        table.add_row(str(item.get("tag", "")), str(item.get("count", 0)))
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} tags")


# ── Check renderers ───────────────────────────────────────────────────


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render check results with issues grouped by category."""
    issues = result.data.get("issues", [])
    count = result.data.get("count", len(issues))

    if count == 0:
        console.print("[folio.ok]OK[/folio.ok]  No issues found.")
        if verbose:
            _render_meta(console, result)
        return

    severity_styles = {"error": "folio.error", "warning": "folio.warning"}

    by_category: dict[str, list[dict[str, Any]]] = {}
    for issue in issues:
        cat = str(issue.get("category", "unknown"))
        by_category.setdefault(cat, []).append(issue)

    for cat, cat_issues in by_category.items():
        console.print(f"\n[bold]{cat}[/bold]")
        for issue in cat_issues:
            sev = str(issue.get("severity", "warning"))
            style = severity_styles.get(sev, "")
            prefix = f"[{style}]{sev}[/{style}]" if style else sev
            where = issue.get("path") or issue.get("slug")
            if where and issue.get("line"):
                where = f"{where}:{issue['line']}"
            loc = f" [folio.path]{escape(str(where))}[/folio.path]" if where else ""
            console.print(f"  {prefix}{loc}: {escape(str(issue.get('message', '')))}")
            if verbose and issue.get("fix_action"):
                console.print(f"    fix: {escape(issue['fix_action'])}")

    errors = result.data.get("error_count", 0)
    warnings = result.data.get("warning_count", count - errors)
    console.print(f"\n{errors} errors, {warnings} warnings")
    if verbose:
        _render_meta(console, result)


def _render_fix(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render fix results."""
    _status_line(console, result)
    fixes = result.data.get("fixes", [])
    _field(console, "fixes_applied", result.data.get("count", len(fixes)))
    if verbose:
        for fix in fixes:
            console.print(f"  - {fix}", markup=False)


# ── Style renderers ───────────────────────────────────────────────────


def _render_style_info(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the stylesheet summary."""
    _status_line(console, result)
    d = result.data
    for key in ("path", "rules", "declarations", "custom_properties", "syntax_errors"):
        if key in d:
            _field(console, key, d[key])
    breakpoints = d.get("breakpoints", [])
    _field(console, "breakpoints", len(breakpoints))
    for bp in breakpoints:
        console.print(f"    {bp}", markup=False)
    if verbose and d.get("statements"):
        _field(console, "statements", d["statements"])


def _render_style_vars(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render custom-property definitions as a table."""
    items = result.data.get("items", [])
    table = _new_table()
    table.add_column("Property", style="folio.slug", no_wrap=True)
    table.add_column("Value")
    table.add_column("Scope", style="folio.selector")
    table.add_column("Uses", justify="right")
    if verbose:
        table.add_column("Line", justify="right", style="dim")

    for item in items:
        scope = str(item.get("selector", ""))
        if item.get("context"):
            scope = f"{item['context']} > {scope}"
        uses = int(item.get("references", 0))
        row: list[Any] = [
            str(item.get("name", "")),
            str(item.get("value", "")),
            scope,
            Text(str(uses), style="folio.warning" if uses == 0 else ""),
        ]
        if verbose:
            row.append(str(item.get("line", "")))
        table.add_row(*row)

    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} definitions")


def _render_style_lookup(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render cascaded declarations as a CSS-like block."""
    d = result.data
    header = d.get("selector", "")
    if d.get("context"):
        header = f"{d['context']} > {header}"
    console.print(Text(f"{header} {{", style="folio.selector"))
    for name, value in d.get("declarations", {}).items():
        console.print(Text(f"  {name}: {value};"))
    console.print(Text("}", style="folio.selector"))


# ── Init renderers ───────────────────────────────────────────────────


def _render_init(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render init_site results with site details and file manifest."""
    _status_line(console, result)
    d = result.data
    for key in ("site_path", "title"):
        if key in d:
            _field(console, key, d[key])
    files = d.get("files_written", [])
    _field(console, "files_written", len(files))
    if verbose:
        for f in files:
            console.print(f"    {f}", markup=False)
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Mutations
    "create_post": _render_mutation,
    "create_page": _render_mutation,
    "update": _render_mutation,
    "touch": _render_mutation,
    # Query
    "get": _render_single_item,
    "list_items": _render_item_table,
    "tags": _render_tags,
    # Check
    "check": _render_check,
    "fix": _render_fix,
    # Style
    "style_info": _render_style_info,
    "style_vars": _render_style_vars,
    "style_lookup": _render_style_lookup,
    # Init
    "init_site": _render_init,
}
