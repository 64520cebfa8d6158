"""Command group: stylesheet inspection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from folioctl.commands._base import FolioGroup
from folioctl.services.style import StyleService

if TYPE_CHECKING:
    from folioctl.commands._context import AppContext

_STYLE_EXAMPLES = """\
  folioctl style info
  folioctl style vars
  folioctl style lookup body
  folioctl style lookup :root --context "@media (prefers-color-scheme: dark)\""""


@click.group(cls=FolioGroup, examples=_STYLE_EXAMPLES)
@click.pass_obj
def style(app: AppContext) -> None:
    """Inspect the site stylesheet."""


@style.command(
    examples="""\
  folioctl style info
  folioctl --json style info"""
)
@click.pass_obj
def info(app: AppContext) -> None:
    """Summarize rules, custom properties, and breakpoints."""
    app.emit(StyleService(app.store).info())


@style.command(
    name="vars",
    examples="""\
  folioctl style vars
  folioctl -v style vars""",
)
@click.pass_obj
def vars_cmd(app: AppContext) -> None:
    """List custom-property definitions and how often each is used."""
    app.emit(StyleService(app.store).variables())


@style.command(
    examples="""\
  folioctl style lookup body
  folioctl style lookup ".site-nav a:hover"
  folioctl style lookup html --context "@media (max-width: 700px)\""""
)
@click.argument("selector")
@click.option(
    "--context",
    default=None,
    help="Enclosing at-rule, e.g. '@media (max-width: 700px)'. Nest with '>'.",
)
@click.pass_obj
def lookup(app: AppContext, selector: str, context: str | None) -> None:
    """Show the cascaded declarations for a selector."""
    app.emit(StyleService(app.store).lookup(selector, context=context))
