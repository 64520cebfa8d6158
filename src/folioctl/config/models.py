"""Section models for folio.toml, with code-baked defaults.

Sparse TOML contract: defaults live here, folio.toml only contains
overrides. A fresh site needs only ``[site] title``.
"""

from __future__ import annotations

from pathlib import PurePosixPath

from pydantic import BaseModel, field_validator


def _site_relative(value: str) -> str:
    path = PurePosixPath(value.replace("\\", "/"))
    if not value.strip() or path.is_absolute() or ".." in path.parts:
        msg = f"{value!r} must be a path inside the site"
        raise ValueError(msg)
    return path.as_posix()


class SiteConfig(BaseModel):
    """[site] section."""

    model_config = {"frozen": True}

    title: str = "My Portfolio"
    author: str = ""
    base_url: str = ""


class ContentConfig(BaseModel):
    """[content] section: directories relative to the site root."""

    model_config = {"frozen": True}

    posts_dir: str = "_posts"
    pages_dir: str = "_pages"
    assets_dir: str = "assets"

    @field_validator("posts_dir", "pages_dir", "assets_dir")
    @classmethod
    def _inside_site(cls, value: str) -> str:
        return _site_relative(value)


class StyleConfig(BaseModel):
    """[style] section."""

    model_config = {"frozen": True}

    path: str = "assets/css/style.css"

    @field_validator("path")
    @classmethod
    def _inside_site(cls, value: str) -> str:
        return _site_relative(value)


class CheckConfig(BaseModel):
    """[check] section: toggles for optional checks."""

    model_config = {"frozen": True}

    require_description: bool = True
    warn_unused_properties: bool = True
