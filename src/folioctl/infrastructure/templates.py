"""Shared Jinja2 template loading with per-site override support."""

from __future__ import annotations

from importlib.resources import files
from pathlib import Path

from jinja2 import BaseLoader, ChoiceLoader, Environment, FileSystemLoader, PackageLoader


def build_template_environment(group: str, *, site_root: Path | None = None) -> Environment:
    """Build a Jinja2 environment with site overrides before packaged defaults.

    Overrides are loaded from ``.folioctl/templates/<group>/`` inside the
    site, falling back to the flat ``.folioctl/templates/`` directory.
    """
    loaders: list[BaseLoader] = []
    if site_root is not None:
        template_root = site_root / ".folioctl" / "templates"
        loaders.append(FileSystemLoader([str(template_root / group), str(template_root)]))

    loaders.append(PackageLoader("folioctl", f"templates/{group}"))
    return Environment(loader=ChoiceLoader(loaders), keep_trailing_newline=True)


def read_packaged_asset(group: str, name: str) -> str:
    """Read a static (non-template) file shipped under ``templates/<group>``."""
    return files("folioctl").joinpath("templates", group, name).read_text(encoding="utf-8")
