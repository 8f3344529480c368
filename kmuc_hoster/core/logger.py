"""Logging for kmuc-hoster.

All module loggers live under the ``kmuc_hoster`` package logger and keep
level NOTSET, so the package logger alone decides what gets through. The
console handler shows INFO and above; ``setup_file_logging`` adds a file
handler and, in verbose mode, lets DEBUG records reach it.
"""
import logging
import tempfile
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

console = Console()

PACKAGE_LOGGER = "kmuc_hoster"
FILE_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_file_handler: Optional[logging.FileHandler] = None


def _package_logger() -> logging.Logger:
    package = logging.getLogger(PACKAGE_LOGGER)
    if not any(isinstance(h, RichHandler) for h in package.handlers):
        handler = RichHandler(console=console, show_path=False)
        handler.setLevel(logging.INFO)
        handler.setFormatter(logging.Formatter("%(message)s"))
        package.addHandler(handler)
        package.setLevel(logging.INFO)
    return package


def get_logger(name: str) -> logging.Logger:
    """Return a logger that reports through the package handlers.

    Names outside the package (``__main__`` when run as a script) are
    nested under it.
    """
    _package_logger()
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def _open_log_file(target: Path) -> logging.FileHandler:
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(target, encoding="utf-8")
    except OSError:
        fallback = Path(tempfile.gettempdir()) / target.name
        return logging.FileHandler(fallback, encoding="utf-8")


def setup_file_logging(log_file: Optional[str] = None, verbose: bool = False) -> Path:
    """Mirror package log records into a file.

    Args:
        log_file: Destination; defaults to the configured kmuc-hoster.log
        verbose: Record DEBUG messages (step progress, checkpoint writes)

    Returns:
        Path of the log file actually in use. An unwritable destination
        falls back to the temp directory. Calling again only adjusts the
        level of the existing handler.
    """
    global _file_handler

    level = logging.DEBUG if verbose else logging.INFO
    package = _package_logger()
    package.setLevel(level)

    if _file_handler is None:
        from kmuc_hoster.core.config import get_config

        target = Path(log_file) if log_file else get_config().default_log_file
        _file_handler = _open_log_file(target)
        _file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        package.addHandler(_file_handler)
        package.info(f"kmuc-hoster logging initialized: {_file_handler.baseFilename}")

    _file_handler.setLevel(level)
    return Path(_file_handler.baseFilename)


def reset_file_logging() -> None:
    """Detach and close the file handler and restore the default level."""
    global _file_handler

    package = _package_logger()
    if _file_handler is not None:
        package.removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None
    package.setLevel(logging.INFO)
