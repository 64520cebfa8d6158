"""Command: site validation and repair."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from folioctl.commands._base import FolioCommand

if TYPE_CHECKING:
    from folioctl.commands._context import AppContext


@click.command(
    cls=FolioCommand,
    examples="""\
  folioctl check
  folioctl check --errors-only
  folioctl check --min-severity error
  folioctl --json check
  folioctl check --fix""",
)
@click.option(
    "--min-severity",
    type=click.Choice(["warning", "error"]),
    default="warning",
    help="Hide issues below this severity.",
)
@click.option("--errors-only", is_flag=True, help="Shortcut for --min-severity error.")
@click.option("--fix", is_flag=True, help="Rewrite front-matter canonically and rename files.")
@click.pass_obj
def check(app: AppContext, min_severity: str, errors_only: bool, fix: bool) -> None:
    """Check content and stylesheet, exiting 1 when errors are found."""
    from folioctl.services.check import CheckService

    svc = CheckService(app.store)

    if fix:
        app.emit(svc.fix())
        return

    threshold = "error" if errors_only else min_severity
    result = svc.check(min_severity=threshold)
    app.emit(result)
    if not result.data.get("healthy", True):
        raise SystemExit(1)
