"""Command: site initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from folioctl.commands._base import FolioCommand

if TYPE_CHECKING:
    from folioctl.commands._context import AppContext

_INIT_EXAMPLES = """\
  folioctl init
  folioctl init my-site --title "Jane Doe" --author "Jane Doe"
  folioctl init . --title "Notes on Compilers" --base-url https://jane.dev
  folioctl --no-interact init /tmp/site"""


@click.command("init", cls=FolioCommand, examples=_INIT_EXAMPLES)
@click.argument("path", required=False, default=".")
@click.option("--title", default=None, help="Site title.")
@click.option("--author", default=None, help="Author name, used on the résumé page.")
@click.option("--base-url", default=None, help="Public URL the site is served from.")
@click.pass_obj
def init_cmd(
    app: AppContext,
    path: str,
    title: str | None,
    author: str | None,
    base_url: str | None,
) -> None:
    """Initialize a new portfolio site."""
    site_path = Path(path).resolve()
    interactive = not app.settings.no_interact and not app.settings.json_output

    # Interactive prompts for missing options
    if title is None:
        title = (
            click.prompt("Site title", default=site_path.name) if interactive else site_path.name
        )
    if author is None:
        author = click.prompt("Author", default="") if interactive else ""
    if base_url is None:
        base_url = click.prompt("Base URL", default="") if interactive else ""

    from folioctl.services.init import InitService

    app.emit(InitService.init_site(site_path, title=title, author=author, base_url=base_url))
