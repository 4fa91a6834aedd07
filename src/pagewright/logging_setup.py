"""Logging for pagewright.

Library modules only create ``logging.getLogger(__name__)`` loggers under
``pagewright``. Applications that render sites call :func:`configure_logging`
once to send those records (and everything else) through Rich. Render-time
shape problems go through :func:`print_message`.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from typing import Final, Literal

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["console", "configure_logging", "print_message"]

LOG_LEVEL_ENV: Final[str] = "PAGEWRIGHT_LOG_LEVEL"

MessageKind = Literal["error", "warning", "success", "info"]

_KIND_LEVELS: Final[dict[str, int]] = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "success": logging.INFO,
    "info": logging.INFO,
}

_MANAGED_ATTR: Final[str] = "_pagewright_managed"

console = Console()

logger = logging.getLogger("pagewright")


def _level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level

    name = (level or os.getenv(LOG_LEVEL_ENV) or "INFO").upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def _managed_handler(root: logging.Logger) -> RichHandler | None:
    return next(
        (h for h in root.handlers if isinstance(h, RichHandler) and getattr(h, _MANAGED_ATTR, False)),
        None,
    )


def configure_logging(level: int | str | None = None) -> RichHandler:
    """Route all logging through a single Rich handler on the root logger.

    Calling it again reuses the handler installed the first time, so build
    scripts and serverless handlers can call it on every entry.

    Args:
        level: Level name or number; defaults to ``$PAGEWRIGHT_LOG_LEVEL``,
            then ``INFO``. Unknown names fall back to ``INFO``.

    Returns:
        The managed handler

    """
    root = logging.getLogger()
    handler = _managed_handler(root)

    if handler is None:
        root.handlers.clear()
        handler = RichHandler(console=console, rich_tracebacks=True, show_path=False, markup=True)
        handler.setFormatter(logging.Formatter("%(message)s"))
        setattr(handler, _MANAGED_ATTR, True)
        root.addHandler(handler)

    root.setLevel(_level(level))
    logging.captureWarnings(True)
    return handler


def print_message(pre: str = "Log", message: object = "", kind: MessageKind = "error") -> None:
    """Log a prefixed message at the level matching ``kind``.

    Used wherever a render-time problem should be reported without raising:
    missing render functions, malformed configuration handed to a setter and
    similar shape errors.

    Args:
        pre: Short label printed before the message
        message: A string, or an iterable of strings joined by newlines
        kind: One of ``error``, ``warning``, ``success`` or ``info``

    """
    if isinstance(message, Iterable) and not isinstance(message, str | bytes):
        text = "\n".join(str(part) for part in message).strip()
    else:
        text = str(message).strip()

    level = _KIND_LEVELS.get(kind, logging.ERROR)
    logger.log(level, "%s: %s", pre, text)
