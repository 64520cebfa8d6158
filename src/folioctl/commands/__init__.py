"""Subcommand modules for folioctl.

Provides register_commands() which uses deferred imports to keep
``folioctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from folioctl.commands.create import create
    from folioctl.commands.query import query
    from folioctl.commands.style import style

    cli.add_command(create)
    cli.add_command(query)
    cli.add_command(style)

    # --- Standalone commands ---
    from folioctl.commands.check import check
    from folioctl.commands.init_cmd import init_cmd
    from folioctl.commands.update import touch, update

    cli.add_command(init_cmd)
    cli.add_command(update)
    cli.add_command(touch)
    cli.add_command(check)
