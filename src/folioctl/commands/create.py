"""Command group: content creation (post, page)."""

from __future__ import annotations

import sys
from datetime import date
from typing import TYPE_CHECKING

import click

from folioctl.commands._base import FolioGroup, iso_date_option
from folioctl.services.create import CreateService

if TYPE_CHECKING:
    from folioctl.commands._context import AppContext


def _is_interactive(app: AppContext) -> bool:
    """Return True when interactive prompts should fire.

    Prompts require: no ``--no-interact``, no ``--json``, and stdin is a TTY.
    """
    return not app.settings.no_interact and not app.settings.json_output and sys.stdin.isatty()


def _prompt_missing(
    app: AppContext, tags: tuple[str, ...], description: str | None
) -> tuple[tuple[str, ...], str | None]:
    if not _is_interactive(app):
        return tags, description
    if not tags:
        raw = click.prompt("Tags (comma-separated, empty for none)", default="")
        tags = tuple(t.strip() for t in raw.split(",") if t.strip())
    if description is None:
        raw = click.prompt("Description (optional)", default="")
        description = raw.strip() or None
    return tags, description


_CREATE_EXAMPLES = """\
  folioctl create post "Object Lifetimes in C++"
  folioctl create post "JIT Notes" --tags gpu --tags compilers --description "What I learned"
  folioctl create page "About"
  folioctl create page "Résumé" --template resume"""


@click.group(cls=FolioGroup, examples=_CREATE_EXAMPLES)
@click.pass_obj
def create(app: AppContext) -> None:
    """Create posts and pages."""


@create.command(
    examples="""\
  folioctl create post "Object Lifetimes in C++"
  folioctl create post "Copy Elision" --tags cpp --tags semantics
  folioctl create post "GPU Kernels" --image /assets/img/gpu.png --image-caption "A warp"
  folioctl create post "Backdated" --date 2023-11-05"""
)
@click.argument("title")
@click.option("--tags", multiple=True, help="Tags (repeatable).")
@click.option("--description", default=None, help="One-line summary for listings.")
@click.option("--image", default=None, help="Header image path or URL.")
@click.option("--image-caption", default=None, help="Caption for the header image.")
@click.option(
    "--date", "on", default=None, callback=iso_date_option, help="Publication date (YYYY-MM-DD)."
)
@click.pass_obj
def post(
    app: AppContext,
    title: str,
    tags: tuple[str, ...],
    description: str | None,
    image: str | None,
    image_caption: str | None,
    on: date | None,
) -> None:
    """Create a new blog post."""
    tags, description = _prompt_missing(app, tags, description)
    svc = CreateService(app.store)
    app.emit(
        svc.create_post(
            title,
            tags=list(tags),
            description=description,
            image=image,
            image_caption=image_caption,
            on=on,
        )
    )


@create.command(
    examples="""\
  folioctl create page "About"
  folioctl create page "Résumé" --template resume
  folioctl create page "Talks" --description "Slides and recordings" """
)
@click.argument("title")
@click.option(
    "--template",
    default="page",
    show_default=True,
    help="Body template (page, resume, or one from .folioctl/templates).",
)
@click.option("--tags", multiple=True, help="Tags (repeatable).")
@click.option("--description", default=None, help="One-line summary.")
@click.option("--image", default=None, help="Header image path or URL.")
@click.option("--image-caption", default=None, help="Caption for the header image.")
@click.option(
    "--date", "on", default=None, callback=iso_date_option, help="Page date (YYYY-MM-DD)."
)
@click.pass_obj
def page(
    app: AppContext,
    title: str,
    template: str,
    tags: tuple[str, ...],
    description: str | None,
    image: str | None,
    image_caption: str | None,
    on: date | None,
) -> None:
    """Create a new standalone page."""
    tags, description = _prompt_missing(app, tags, description)
    svc = CreateService(app.store)
    app.emit(
        svc.create_page(
            title,
            template=template,
            tags=list(tags),
            description=description,
            image=image,
            image_caption=image_caption,
            on=on,
        )
    )
