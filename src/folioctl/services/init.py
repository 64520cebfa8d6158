"""InitService — scaffold a new site.

Writes ``folio.toml``, the content directories, a starter résumé page,
and the default stylesheet. Existing files other than ``folio.toml`` are
left untouched.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from folioctl.config.discovery import CONFIG_FILENAME
from folioctl.config.settings import FolioSettings
from folioctl.infrastructure.store import ContentStore
from folioctl.infrastructure.templates import build_template_environment, read_packaged_asset
from folioctl.services.create import CreateService
from folioctl.services.result import ServiceResult

logger = logging.getLogger(__name__)


class InitService:
    """Handles site initialization."""

    @staticmethod
    def init_site(
        path: Path,
        *,
        title: str,
        author: str = "",
        base_url: str = "",
        on: date | None = None,
    ) -> ServiceResult:
        """Create a site skeleton at *path*."""
        site_root = path.resolve()
        config_file = site_root / CONFIG_FILENAME
        if config_file.exists():
            return ServiceResult.failure(
                "init_site",
                "ALREADY_INITIALIZED",
                f"{CONFIG_FILENAME} already exists in {site_root}",
                path=str(config_file),
            )

        site_root.mkdir(parents=True, exist_ok=True)
        env = build_template_environment("site")
        config_file.write_text(
            env.get_template(f"{CONFIG_FILENAME}.j2").render(
                title=title, author=author, base_url=base_url.rstrip("/")
            ),
            encoding="utf-8",
        )
        files_written = [CONFIG_FILENAME]

        settings = FolioSettings.from_cli(config_path=str(config_file), site_root=site_root)
        store = ContentStore(settings)
        for kind in ("post", "page"):
            store.directory_for(kind).mkdir(parents=True, exist_ok=True)
        (site_root / settings.content.assets_dir).mkdir(parents=True, exist_ok=True)

        warnings: list[str] = []
        stylesheet = store.stylesheet_path
        if stylesheet.exists():
            warnings.append(f"Kept existing stylesheet {store.relative(stylesheet)}")
        else:
            stylesheet.parent.mkdir(parents=True, exist_ok=True)
            stylesheet.write_text(read_packaged_asset("site", "style.css"), encoding="utf-8")
            files_written.append(store.relative(stylesheet))

        resume = CreateService(store).create_page(
            "Résumé",
            template="resume",
            description=f"Résumé of {author}" if author else "Résumé",
            on=on,
        )
        if resume.ok:
            files_written.append(resume.data["path"])
        else:
            assert resume.error is not None
            warnings.append(f"Skipped résumé page: {resume.error.message}")

        logger.debug("Initialized site at %s", site_root)
        return ServiceResult(
            ok=True,
            op="init_site",
            data={
                "site_path": str(site_root),
                "title": title,
                "files_written": files_written,
                "directories": [
                    settings.content.posts_dir,
                    settings.content.pages_dir,
                    settings.content.assets_dir,
                ],
            },
            warnings=warnings,
        )
