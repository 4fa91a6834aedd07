"""Configuration models and loading."""

from pagewright.config.exceptions import ConfigError, ConfigLoadError, ConfigValidationError
from pagewright.config.settings import (
    ArchiveMetaSettings,
    AssetSettings,
    EnvSettings,
    RenderSettings,
)

__all__ = [
    "ArchiveMetaSettings",
    "AssetSettings",
    "ConfigError",
    "ConfigLoadError",
    "ConfigValidationError",
    "EnvSettings",
    "RenderSettings",
]
