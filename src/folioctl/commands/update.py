"""Commands: in-place document edits (update, touch)."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, TextIO

import click

from folioctl.commands._base import FolioCommand, complete_slugs, iso_date_option

if TYPE_CHECKING:
    from folioctl.commands._context import AppContext

_ON_OPTION = click.option(
    "--on",
    default=None,
    callback=iso_date_option,
    help="Modification date to record (YYYY-MM-DD, default today).",
)


@click.command(
    cls=FolioCommand,
    examples="""\
  folioctl update 2024-01-01-object-lifetimes --description "RAII, moves, and lifetimes"
  folioctl update 2024-01-01-object-lifetimes --add-tag cpp --remove-tag draft
  folioctl update 2024-01-01-object-lifetimes --image /assets/img/raii.png
  folioctl update 2024-01-01-object-lifetimes --image-caption ""
  folioctl update 2024-01-01-object-lifetimes --body-file draft.md""",
)
@click.argument("slug", shell_complete=complete_slugs)
@click.option("--description", default=None, help="New description (empty string clears).")
@click.option("--image", default=None, help="New image reference (empty string clears).")
@click.option("--image-caption", default=None, help="New caption (empty string clears).")
@click.option("--tags", multiple=True, help="Replace all tags (repeatable).")
@click.option("--add-tag", "add_tags", multiple=True, help="Add a tag (repeatable).")
@click.option("--remove-tag", "remove_tags", multiple=True, help="Remove a tag (repeatable).")
@click.option("--body", default=None, help="New body text.")
@click.option(
    "--body-file",
    type=click.File("r", encoding="utf-8"),
    default=None,
    help="Read the new body from a file ('-' for stdin).",
)
@_ON_OPTION
@click.pass_obj
def update(
    app: AppContext,
    slug: str,
    description: str | None,
    image: str | None,
    image_caption: str | None,
    tags: tuple[str, ...],
    add_tags: tuple[str, ...],
    remove_tags: tuple[str, ...],
    body: str | None,
    body_file: TextIO | None,
    on: date | None,
) -> None:
    """Edit a document's metadata or body and stamp its modified date."""
    from folioctl.services.update import UpdateService

    if body is not None and body_file is not None:
        raise click.UsageError("Use either --body or --body-file, not both.")
    if body_file is not None:
        body = body_file.read()

    changes: dict[str, object] = {}
    for key, value in (
        ("description", description),
        ("image", image),
        ("image_caption", image_caption),
        ("body", body),
    ):
        if value is not None:
            changes[key] = value
    if tags:
        changes["tags"] = list(tags)
    if add_tags:
        changes["add_tags"] = list(add_tags)
    if remove_tags:
        changes["remove_tags"] = list(remove_tags)

    if not changes:
        click.echo("No changes specified. Use --help for options, or 'touch'.", err=True)
        raise SystemExit(1)

    app.emit(UpdateService(app.store).update(slug, changes=changes, on=on))


@click.command(
    cls=FolioCommand,
    examples="""\
  folioctl touch 2024-01-01-object-lifetimes
  folioctl touch 2024-01-01-object-lifetimes --on 2024-03-02""",
)
@click.argument("slug", shell_complete=complete_slugs)
@_ON_OPTION
@click.pass_obj
def touch(app: AppContext, slug: str, on: date | None) -> None:
    """Stamp a document's modified date without other changes."""
    from folioctl.services.update import UpdateService

    app.emit(UpdateService(app.store).touch(slug, on=on))
