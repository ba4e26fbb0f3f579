"""
Logging configuration — called once by the CLI group callback.

Console output goes to stderr; stdout carries only ``--json`` results.
The console format gets more detailed as the level drops, so ``-v``
reads as a stage trace and ``--debug`` shows where each line came from.
An optional log file (OOTCHECK_LOG_FILE) always gets the detailed format.
"""

from __future__ import annotations

import logging
import sys

_FMT_DETAIL = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"

# (highest level the format applies to, format, date format)
_CONSOLE_FORMATS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, _FMT_DETAIL, "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
)
_FMT_PLAIN = "ootcheck: %(message)s"


def _console_formatter(level: int) -> logging.Formatter:
    for ceiling, fmt, datefmt in _CONSOLE_FORMATS:
        if level <= ceiling:
            return logging.Formatter(fmt, datefmt=datefmt)
    return logging.Formatter(_FMT_PLAIN)


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Replace the root logger's handlers.

    ``log_file_level`` defaults to ``level``; the root logger is set to
    the lower of the two so the file can be more verbose than stderr.
    """
    console_level = parse_level(level)
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root.setLevel(console_level)

    if log_file:
        file_level = parse_level(log_file_level) if log_file_level else console_level
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_DETAIL, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(fh)
        root.setLevel(min(console_level, file_level))


def parse_level(level: str | None) -> int:
    """Level name to number; unknown or empty names mean WARNING."""
    numeric = getattr(logging, (level or "").upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
