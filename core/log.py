"""Shared logging configuration."""

import logging

from rich.console import Console
from rich.logging import RichHandler

from .config import get_settings


def _resolve_level(value: int | str | None) -> int:
    if isinstance(value, int):
        return value
    for candidate in (value, get_settings().log_level):
        if isinstance(candidate, str):
            level = logging.getLevelName(candidate.strip().upper())
            if isinstance(level, int):
                return level
    return logging.WARNING


def configure_logging(level: int | str | None = None) -> None:
    """Route log records through rich, on stderr, once per process."""
    resolved = _resolve_level(level)
    root = logging.getLogger()
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(name)s | %(message)s"))
        root.addHandler(handler)
    root.setLevel(resolved)


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name or "depprep")
