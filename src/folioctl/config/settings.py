"""FolioSettings: CLI flags, env vars, and folio.toml merged into one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``FOLIO_*`` prefix, ``__`` for nested sections
  3. TOML file    — ``folio.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from folioctl.config.discovery import find_config, load_config
from folioctl.config.models import CheckConfig, ContentConfig, SiteConfig, StyleConfig

SECTIONS = ("site", "content", "style", "check")


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Expose the known sections of a parsed ``folio.toml``.

    Top-level tables other than :data:`SECTIONS` belong to other tools
    (the site generator, deploy scripts) and are ignored.
    """

    def __init__(self, settings_cls: type[BaseSettings], data: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._data = {key: value for key, value in data.items() if key in SECTIONS}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


# Parsed TOML handed to settings_customise_sources during construction.
_pending = threading.local()


class FolioSettings(BaseSettings):
    """Settings for one folioctl invocation, frozen after construction.

    Attributes:
        site_root: Directory holding the site sources (parent of
            ``folio.toml``, or CWD if no config was found).
        config_path: The config file in effect, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "FOLIO_",
        "env_nested_delimiter": "__",
        "extra": "ignore",
    }

    site_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_interact: bool = False

    # --- folio.toml sections ---
    site: SiteConfig = Field(default_factory=SiteConfig)
    content: ContentConfig = Field(default_factory=ContentConfig)
    style: StyleConfig = Field(default_factory=StyleConfig)
    check: CheckConfig = Field(default_factory=CheckConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Env vars override folio.toml; dotenv and secrets are not read."""
        data = getattr(_pending, "data", None) or {}
        return (init_settings, env_settings, TomlSettingsSource(settings_cls, data))

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        site_root: Path | None = None,
        **cli_flags: Any,
    ) -> FolioSettings:
        """Build settings for a CLI invocation.

        An explicit *config_path* wins over discovery; a path that does not
        exist is ignored. *site_root* defaults to the config file's directory.

        Raises:
            click.ClickException: The config file is not valid TOML.
        """
        toml_path: Path | None
        if config_path:
            candidate = Path(config_path)
            toml_path = candidate.resolve() if candidate.is_file() else None
        else:
            toml_path = find_config(site_root)

        if site_root is None:
            site_root = toml_path.parent if toml_path else Path.cwd()

        _pending.data = load_config(toml_path)
        try:
            return cls(site_root=site_root, config_path=toml_path, **cli_flags)
        finally:
            _pending.data = None
