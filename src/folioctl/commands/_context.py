"""AppContext: the object every subcommand receives via ``@click.pass_obj``.

Holds the invocation's settings, opens the content store on demand, and
owns result emission: which stream, which format, which exit code.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from folioctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from folioctl.config.settings import FolioSettings
    from folioctl.infrastructure.store import ContentStore
    from folioctl.services.result import ServiceResult

logger = logging.getLogger(__name__)


class AppContext:
    """Per-invocation state shared by all commands.

    Nothing touches the site until :attr:`store` is first read, so
    ``--help``, ``--version`` and ``--examples`` work anywhere.
    """

    def __init__(self, settings: FolioSettings) -> None:
        from folioctl.config.logging import configure_logging

        self.settings = settings
        self._store: ContentStore | None = None
        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            site_root=settings.site_root,
        )

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    @property
    def store(self) -> ContentStore:
        """Content store rooted at the site directory."""
        if self._store is None:
            from folioctl.infrastructure.store import ContentStore

            if self.settings.config_path is None:
                logger.warning(
                    "No folio.toml found; using %s as the site root", self.settings.site_root
                )
            self._store = ContentStore(self.settings)
        return self._store

    def emit(self, result: ServiceResult) -> None:
        """Print *result* and exit 1 if it failed.

        Successful output goes to stdout with warnings on stderr (JSON
        output already carries them). Failures go to stderr.
        """
        out = self.output_settings
        text = format_result(result, settings=out)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)

        click.echo(text)
        if not out.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
