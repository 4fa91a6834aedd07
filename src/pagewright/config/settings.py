"""Render configuration.

Settings come from three layers, highest priority first:

1. Environment variables (``PAGEWRIGHT_SECTION__KEY``)
2. ``.pagewright.toml`` in the site root
3. Defaults declared on the models below
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pagewright.config.exceptions import ConfigLoadError, ConfigValidationError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".pagewright.toml"


def _deep_merge(destination: dict[str, Any], source: Mapping[str, Any]) -> dict[str, Any]:
    """Merge source into destination, with source values overwriting."""
    for key, value in source.items():
        if isinstance(value, Mapping) and isinstance(destination.get(key), Mapping):
            destination[key] = _deep_merge(dict(destination[key]), value)
        else:
            destination[key] = value
    return destination


class EnvSettings(BaseModel):
    """Build environment flags and base URLs."""

    dev: bool = True
    prod: bool = False
    build: bool = False
    cache: bool = False
    dir: str = ""
    dev_url: str = Field(default="/", description="Base URL while developing")
    prod_url: str = Field(default="", description="Absolute production URL used in permalinks")


class AssetSettings(BaseModel):
    """Input and output directories for one asset kind."""

    input_dir: str
    output_dir: str


class ArchiveMetaSettings(BaseModel):
    """Configured listing labels for a content type.

    ``id``, ``slug`` and ``title`` are normally filled from the archive page
    found in the content at build time; the rest are editorial labels.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = ""
    slug: str = ""
    title: str = ""
    singular: str = ""
    plural: str = ""
    layout: str = ""
    order: str = ""
    display: int = 0


class RenderSettings(BaseSettings):
    """Root configuration for the render pipeline.

    Supports environment variable overrides with the pattern:
    PAGEWRIGHT_SECTION__KEY (e.g., PAGEWRIGHT_ENV__PROD=true)
    """

    namespace: str = "pw"
    title: str = "Static Site"
    source: str = "local"

    env: EnvSettings = Field(default_factory=EnvSettings)

    hierarchical_types: list[str] = Field(
        default_factory=lambda: ["page"],
        description="Content types whose parents form a physical path hierarchy",
    )
    type_in_slug: dict[str, str | dict[str, str]] = Field(
        default_factory=dict,
        description="Content type to slug segment, optionally keyed by locale",
    )
    locale_in_slug: dict[str, str] = Field(default_factory=dict, description="Locale to slug prefix")
    locales: list[str] = Field(default_factory=list, description="CMS locales, default first")
    normal_types: dict[str, str] = Field(default_factory=dict, description="Source type to normal type")
    archive_meta: dict[str, ArchiveMetaSettings | dict[str, ArchiveMetaSettings]] = Field(
        default_factory=dict,
        description="Listing labels per content type, optionally keyed by locale",
    )

    scripts: AssetSettings = Field(default_factory=lambda: AssetSettings(input_dir="src", output_dir="js"))
    styles: AssetSettings = Field(default_factory=lambda: AssetSettings(input_dir="src", output_dir="css"))

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="PAGEWRIGHT_",
        env_nested_delimiter="__",
    )

    @field_validator("locale_in_slug", "normal_types")
    @classmethod
    def _drop_empty_keys(cls, value: dict[str, str]) -> dict[str, str]:
        return {key: val for key, val in value.items() if key}

    @property
    def default_locale(self) -> str:
        return self.locales[0] if self.locales else ""

    @classmethod
    def load(cls, site_root: Path | None = None) -> RenderSettings:
        """Load configuration from ``.pagewright.toml`` and environment variables.

        Raises:
            ConfigLoadError: If the TOML file exists but cannot be parsed
            ConfigValidationError: If the merged values fail validation

        """
        root_path = site_root if site_root is not None else Path.cwd()
        config_file = root_path / CONFIG_FILENAME

        file_settings: dict[str, Any] = {}
        if config_file.is_file():
            try:
                with config_file.open("rb") as f:
                    file_settings = tomllib.load(f)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigLoadError(config_file, str(exc)) from exc
            logger.debug("Loaded render settings from %s", config_file)

        try:
            env_settings = cls().model_dump(exclude_unset=True)
            merged = _deep_merge(file_settings, env_settings)
            return cls.model_validate(merged)
        except ValidationError as exc:
            raise ConfigValidationError(exc.errors()) from exc
