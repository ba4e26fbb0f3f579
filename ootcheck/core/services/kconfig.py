"""
Narrow parsers for kernel config and header files.

Only two things are ever read out of kernel files: the value of one
``#define CONFIG_*`` line in an autoconf header, and whether a header
mentions the shim marker. Both work on plain strings so they can be
tested against literal fixtures.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from ootcheck.core.errors import ProbeError
from ootcheck.core.models.probe import CapabilityValue

logger = logging.getLogger(__name__)

_WORD = r"[A-Za-z0-9_]"


def _define_pattern(key: str) -> re.Pattern[str]:
    return re.compile(
        rf"^[ \t]*#[ \t]*define[ \t]+{re.escape(key)}(?:[ \t]+(.*?))?[ \t]*$",
        re.MULTILINE,
    )


def parse_define(text: str, key: str) -> str | None:
    """Value of the first ``#define KEY VALUE`` line in ``text``.

    Returns ``""`` for a bare ``#define KEY`` and None when the key is
    not defined at all. ``KEY_SUFFIX`` never matches ``KEY``.
    """
    match = _define_pattern(key).search(text)
    if match is None:
        return None
    return match.group(1) or ""


def capability_value(raw: str | None, enabled_value: str) -> CapabilityValue:
    if raw is None:
        return CapabilityValue.ABSENT
    if raw == enabled_value:
        return CapabilityValue.ENABLED
    return CapabilityValue.OTHER


def read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="ignore")
    except OSError as e:
        raise ProbeError(f"Cannot read {path}: {e}") from e


def read_config_value(path: Path, key: str) -> str | None:
    """Read ``key`` from the autoconf header at ``path``.

    Raises:
        ProbeError: If the file cannot be read.
    """
    value = parse_define(read_text(path), key)
    logger.debug("%s in %s: %r", key, path, value)
    return value


def contains_marker(text: str, marker: str) -> bool:
    """Whether ``marker`` appears in ``text`` as a whole identifier."""
    pattern = rf"(?<!{_WORD}){re.escape(marker)}(?!{_WORD})"
    return re.search(pattern, text) is not None


def find_header(root: Path, name: str) -> Path | None:
    """Find a file called ``name`` anywhere below ``root``.

    Directory symlinks are followed (kernel header packages are
    mostly symlinks), each real directory is visited once. When
    several copies exist the first in sorted path order is returned.
    """
    matches: list[str] = []
    visited: set[str] = set()

    for dirpath, dirnames, filenames in os.walk(root, followlinks=True):
        real = os.path.realpath(dirpath)
        if real in visited:
            dirnames[:] = []
            continue
        visited.add(real)
        # the first path to reach a real directory owns it
        dirnames.sort()
        if name in filenames:
            matches.append(os.path.join(dirpath, name))

    if not matches:
        return None

    matches.sort()
    if len(matches) > 1:
        logger.info("%d copies of %s found, using %s", len(matches), name, matches[0])
    return Path(matches[0])
