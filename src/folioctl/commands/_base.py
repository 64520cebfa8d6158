"""Shared Click building blocks for folioctl commands.

- FolioCommand / FolioGroup accept an ``examples`` string and expose it
  through an eager ``--examples`` flag, keeping ``--help`` short.
- ``iso_date_option`` converts ``YYYY-MM-DD`` option values to dates.
- ``complete_slugs`` offers document slugs for shell completion.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any

import click
from click.shell_completion import CompletionItem


def _examples_flag(examples: str) -> click.Option:
    def show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value:
            click.echo(f"Examples for '{ctx.command_path}':\n\n{examples}")
            ctx.exit(0)

    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=show,
        help="Show usage examples and exit.",
    )


class FolioCommand(click.Command):
    """Command with an optional ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(_examples_flag(examples))


class FolioGroup(click.Group):
    """Group with an optional ``--examples`` flag whose subcommands are FolioCommands."""

    command_class = FolioCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(_examples_flag(examples))


def iso_date_option(
    _ctx: click.Context, _param: click.Parameter, value: str | None
) -> date | None:
    """Click callback turning ``YYYY-MM-DD`` into a :class:`date`."""
    if value is None:
        return None
    from folioctl.services._helpers import parse_iso_date

    try:
        return parse_iso_date(value)
    except ValueError as exc:
        raise click.BadParameter(f"{value!r} is not a YYYY-MM-DD date") from exc


def complete_slugs(
    ctx: click.Context, _param: click.Parameter, incomplete: str
) -> list[CompletionItem]:
    """Slugs of readable documents starting with *incomplete*.

    Runs before the root callback, so settings are rebuilt from the raw
    ``--site`` and ``--config`` values.
    """
    from folioctl.config.settings import FolioSettings
    from folioctl.infrastructure.store import ContentStore

    root = ctx.find_root().params
    site_root = root.get("site_root")
    settings = FolioSettings.from_cli(
        config_path=root.get("config_path"),
        site_root=Path(site_root).resolve() if site_root else None,
    )
    scan = ContentStore(settings).scan()
    return [
        CompletionItem(entry.slug, help=entry.document.title)
        for entry in sorted(scan.entries, key=lambda e: e.slug)
        if entry.slug.startswith(incomplete)
    ]
