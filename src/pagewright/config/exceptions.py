"""Custom exceptions for configuration handling."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pagewright.exceptions import PagewrightError


class ConfigError(PagewrightError):
    """Base exception for all configuration-related errors."""


class ConfigLoadError(ConfigError):
    """Raised when the configuration file cannot be read or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load config at '{path}': {reason}")


class ConfigValidationError(ConfigError):
    """Raised when the configuration fails validation."""

    def __init__(self, errors: Sequence[dict[str, Any]] | None = None) -> None:
        self.errors = list(errors or [])
        super().__init__(f"Configuration validation failed with {len(self.errors)} error(s).")
