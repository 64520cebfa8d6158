"""Command group: document retrieval and listings."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

import click

from folioctl.commands._base import FolioGroup, complete_slugs, iso_date_option
from folioctl.services.query import SORT_MODES, QueryService

if TYPE_CHECKING:
    from folioctl.commands._context import AppContext

_QUERY_EXAMPLES = """\
  folioctl query get 2024-01-01-object-lifetimes
  folioctl query list --kind post --tag cpp
  folioctl query list --sort modified --since 2024-06-01
  folioctl query tags"""

_KIND_CHOICE = click.Choice(["post", "page"])


@click.group(cls=FolioGroup, examples=_QUERY_EXAMPLES)
@click.pass_obj
def query(app: AppContext) -> None:
    """Retrieve and list site content."""


@query.command(
    examples="""\
  folioctl query get 2024-01-01-object-lifetimes
  folioctl --json query get 2023-05-14-resume"""
)
@click.argument("slug", shell_complete=complete_slugs)
@click.pass_obj
def get(app: AppContext, slug: str) -> None:
    """Show one document's front-matter and body."""
    app.emit(QueryService(app.store).get(slug))


@query.command(
    name="list",
    examples="""\
  folioctl query list
  folioctl query list --kind post --tag cpp
  folioctl query list --sort title --limit 50
  folioctl query list --since 2024-06-01 --sort modified
  folioctl -q query list --kind page""",
)
@click.option("--kind", type=_KIND_CHOICE, default=None, help="Only posts or only pages.")
@click.option("--tag", default=None, help="Filter by tag (case-insensitive).")
@click.option(
    "--since",
    default=None,
    callback=iso_date_option,
    help="Changed on or after ISO date (YYYY-MM-DD).",
)
@click.option(
    "--sort",
    type=click.Choice(list(SORT_MODES)),
    default="recency",
    help="Sort mode.",
)
@click.option("--limit", default=20, type=int, help="Max results.")
@click.pass_obj
def list_cmd(
    app: AppContext,
    kind: str | None,
    tag: str | None,
    since: date | None,
    sort: str,
    limit: int,
) -> None:
    """List documents with filters."""
    svc = QueryService(app.store)
    app.emit(svc.list_items(kind=kind, tag=tag, since=since, sort=sort, limit=limit))


@query.command(
    examples="""\
  folioctl query tags
  folioctl query tags --kind post
  folioctl --json query tags"""
)
@click.option("--kind", type=_KIND_CHOICE, default=None, help="Only posts or only pages.")
@click.pass_obj
def tags(app: AppContext, kind: str | None) -> None:
    """Show tag usage counts."""
    app.emit(QueryService(app.store).tags(kind=kind))
