"""Shared pytest fixtures and test helpers for folioctl tests."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from folioctl.config.settings import FolioSettings
from folioctl.infrastructure.store import ContentStore

SAMPLE_CSS = """\
:root {
  --color-text: #222;
  --color-accent: #06c;
}

body {
  color: var(--color-text);
}

a:hover {
  color: var(--color-accent);
}
"""


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's FOLIO_* environment out of the tests."""
    monkeypatch.delenv("FOLIO_CONFIG", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Temporary site directory with basic structure.

    This is the single source of truth for the site directory layout.
    All site-related fixtures (store, _isolated_site) build on this.
    """
    (tmp_path / "folio.toml").write_text(
        '[site]\ntitle = "Test Site"\nauthor = "Test Author"\n', encoding="utf-8"
    )
    (tmp_path / "_posts").mkdir()
    (tmp_path / "_pages").mkdir()
    css = tmp_path / "assets" / "css" / "style.css"
    css.parent.mkdir(parents=True)
    css.write_text(SAMPLE_CSS, encoding="utf-8")
    return tmp_path


@pytest.fixture
def settings(site_root: Path) -> FolioSettings:
    return FolioSettings.from_cli(site_root=site_root)


@pytest.fixture
def store(settings: FolioSettings) -> ContentStore:
    """ContentStore over the temporary site."""
    return ContentStore(settings)


@pytest.fixture
def _isolated_site(site_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp site root so the CLI discovers its folio.toml.

    Use via ``@pytest.mark.usefixtures("_isolated_site")`` on command test
    classes. Tests that need the path can also request ``tmp_path`` directly
    (pytest deduplicates, it's the same directory).
    """
    monkeypatch.chdir(site_root)


# ---------------------------------------------------------------------------
# Shared test helpers (used across service test modules)
# ---------------------------------------------------------------------------


def create_post(store: ContentStore, title: str, **kwargs: Any) -> dict[str, Any]:
    """Create a post via CreateService, asserting success."""
    from folioctl.services.create import CreateService

    kwargs.setdefault("on", date(2024, 1, 1))
    result = CreateService(store).create_post(title, **kwargs)
    assert result.ok, result.error
    return result.data


def create_page(store: ContentStore, title: str, **kwargs: Any) -> dict[str, Any]:
    """Create a page via CreateService, asserting success."""
    from folioctl.services.create import CreateService

    kwargs.setdefault("on", date(2024, 1, 1))
    result = CreateService(store).create_page(title, **kwargs)
    assert result.ok, result.error
    return result.data


def write_raw(path: Path, text: str) -> Path:
    """Write a content file verbatim, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path
