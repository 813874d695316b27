"""Logging utilities for ngmap commands."""

from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path
from typing import Sequence

from .models import Diagnostic

_LOGGER_NAME = "ngmap"
_CONSOLE_FORMAT = "[ngmap] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the ngmap hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def _console_level(verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the ngmap logger for a CLI run.

    ``verbose`` wins over ``quiet``. The console only shows warnings when
    ``quiet`` is set, which keeps ``ngmap tree`` output clean for piping. The
    optional file sink always records at DEBUG so skipped files can be traced
    after the fact.
    """
    console_level = _console_level(verbose, quiet)
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file is not None else console_level)
    logger.propagate = False

    # Reset handlers so repeated CLI invocations in one process stay quiet.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(console_level)
    stream_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


def log_diagnostics(logger: logging.Logger, diagnostics: Sequence[Diagnostic]) -> None:
    """Summarise per-file diagnostics as one warning, with details at DEBUG."""
    if not diagnostics:
        return
    counts = Counter(diagnostic.kind.value for diagnostic in diagnostics)
    breakdown = ", ".join(f"{kind}: {count}" for kind, count in sorted(counts.items()))
    files = {diagnostic.file for diagnostic in diagnostics}
    logger.warning("%d files were skipped or degraded (%s)", len(files), breakdown)
    for diagnostic in diagnostics:
        logger.debug("%s %s: %s", diagnostic.kind.value, diagnostic.file, diagnostic.message)


__all__ = ["configure_logging", "get_logger", "log_diagnostics"]
