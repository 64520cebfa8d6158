"""Root CLI group: global flags, settings construction, command registration."""

from __future__ import annotations

from pathlib import Path

import click

from folioctl import __version__
from folioctl.commands import register_commands
from folioctl.commands._base import FolioGroup
from folioctl.commands._context import AppContext
from folioctl.config.settings import FolioSettings

_ROOT_EXAMPLES = """\
  folioctl init my-site --title "Jane Doe"
  folioctl create post "Object Lifetimes in C++" --tags cpp
  folioctl --site ~/blog query list --kind post
  folioctl --json check
  folioctl style lookup body"""


@click.group(cls=FolioGroup, invoke_without_command=True, examples=_ROOT_EXAMPLES)
@click.version_option(version=__version__, prog_name="folioctl")
@click.option(
    "--site",
    "site_root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Site directory (default: where folio.toml is found).",
)
@click.option("-c", "--config", "config_path", default=None, help="Use this config file.")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only slugs or names.")
@click.option("-v", "--verbose", is_flag=True, help="Show extra fields and debug logs.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option("--no-interact", is_flag=True, help="Never prompt for missing values.")
@click.pass_context
def cli(
    ctx: click.Context,
    site_root: Path | None,
    config_path: str | None,
    **flags: bool,
) -> None:
    """folioctl: manage the content and stylesheet of a static portfolio site."""
    settings = FolioSettings.from_cli(
        config_path=config_path,
        site_root=site_root.resolve() if site_root else None,
        **flags,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
