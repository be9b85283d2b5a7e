"""Unified logging configuration for hosts embedding the engine.

Library modules only ever call ``logging.getLogger(__name__)``; handlers are
attached here, on request, by the application (a game server, a self-play
script, a test harness).

Usage:
    from gomoku_ai.core.logging_config import setup_logging, LogContext

    logger = setup_logging("gomoku_ai", level="DEBUG", format_style="compact")

    with LogContext(logger, logging.WARNING):
        decide(board, history, StoneColor.BLACK, Tier.EXPERT)
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from types import TracebackType

__all__ = [
    "COMPACT_FORMAT",
    "DEFAULT_FORMAT",
    "DETAILED_FORMAT",
    "STRUCTURED_FORMAT",
    "LogContext",
    "configure_third_party_loggers",
    "get_logger",
    "setup_logging",
]

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
COMPACT_FORMAT = "%(levelname)s %(name)s: %(message)s"
DETAILED_FORMAT = (
    "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s"
)
STRUCTURED_FORMAT = (
    '{"time": "%(asctime)s", "level": "%(levelname)s", '
    '"logger": "%(name)s", "message": "%(message)s"}'
)

_FORMATS = {
    "default": DEFAULT_FORMAT,
    "compact": COMPACT_FORMAT,
    "detailed": DETAILED_FORMAT,
    "structured": STRUCTURED_FORMAT,
}

NOISY_PACKAGES = ("asyncio", "numpy", "pydantic", "urllib3", "filelock")

# Handlers we attached, per logger name, so repeated setup calls stay idempotent
_configured: dict[str, set[str]] = {}


def _resolve_level(level: int | str) -> int:
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        return resolved if isinstance(resolved, int) else logging.INFO
    return level


def setup_logging(
    name: str,
    level: int | str = logging.INFO,
    log_file: str | Path | None = None,
    log_dir: str | Path | None = None,
    console: bool = True,
    format_style: str = "default",
    propagate: bool = False,
) -> logging.Logger:
    """Configure and return a named logger.

    Args:
        name: Logger name, usually a package name such as "gomoku_ai"
        level: Level as int or name ("DEBUG", "INFO", ...)
        log_file: Explicit file to append to
        log_dir: Directory to create ``<name>.log`` in when log_file is unset
        console: Attach a stderr stream handler
        format_style: One of default, compact, detailed, structured;
            unknown styles fall back to default
        propagate: Whether records also reach ancestor loggers

    Returns:
        The configured logger. Calling again with the same name does not add
        duplicate handlers.
    """
    logger = logging.getLogger(name)
    logger.setLevel(_resolve_level(level))
    logger.propagate = propagate

    formatter = logging.Formatter(_FORMATS.get(format_style, DEFAULT_FORMAT))
    attached = _configured.setdefault(name, set())

    if console and "console" not in attached:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        attached.add("console")

    if log_file is None and log_dir is not None:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        log_file = directory / f"{name.replace('.', '_')}.log"

    if log_file is not None:
        path = Path(log_file)
        handler_key = f"file:{path.resolve()}"
        if handler_key not in attached:
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(path)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
            attached.add(handler_key)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` without configuring handlers."""
    return logging.getLogger(name)


def configure_third_party_loggers(
    quiet: bool = True,
    verbose_packages: Iterable[str] | None = None,
) -> None:
    """Raise noisy dependency loggers to WARNING.

    Args:
        quiet: When False this is a no-op
        verbose_packages: Packages to leave at their current level
    """
    if not quiet:
        return
    keep = set(verbose_packages or ())
    for package in NOISY_PACKAGES:
        if package in keep:
            continue
        logging.getLogger(package).setLevel(logging.WARNING)


class LogContext:
    """Temporarily change a logger's level inside a ``with`` block."""

    def __init__(self, logger: logging.Logger, level: int | str) -> None:
        self.logger = logger
        self.level = _resolve_level(level)
        self._previous: int | None = None

    def __enter__(self) -> logging.Logger:
        self._previous = self.logger.level
        self.logger.setLevel(self.level)
        return self.logger

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._previous is not None:
            self.logger.setLevel(self._previous)
