"""
Kernel identity resolver — decide which kernel release is being probed.

Builds the ProbeRequest once, so later stages never look at raw
command-line values again.
"""

from __future__ import annotations

import logging
import platform
import re
from collections.abc import Callable
from pathlib import Path

from ootcheck.core.models.probe import ProbeRequest

logger = logging.getLogger(__name__)

_MAJOR_MINOR_RE = re.compile(r"^(\d+\.\d+)\.")


def running_release() -> str:
    """Release string of the running kernel (what ``uname -r`` prints)."""
    return platform.release()


def release_base(release: str) -> str:
    """Drop the build-metadata suffix: ``5.15.0-91-generic`` → ``5.15.0``."""
    return release.split("-", 1)[0]


def release_major_minor(release: str) -> str:
    """``5.15.0-91-generic`` → ``5.15``. Returned unchanged if not N.N.x."""
    match = _MAJOR_MINOR_RE.match(release)
    return match.group(1) if match else release


def resolve_request(
    source_path: Path | str | None = None,
    kernel_release: str | None = None,
    sysroot: Path | str | None = None,
    release_query: Callable[[], str] = running_release,
) -> ProbeRequest:
    """Resolve caller inputs into a ProbeRequest.

    An explicit source path always wins over a release-driven search;
    the release is still resolved because the config locator needs it.

    Args:
        source_path: Explicit kernel source/header tree, if any.
        kernel_release: Explicit kernel release, if any.
        sysroot: Root under which the conventional locations are searched.
        release_query: Returns the running kernel's release.

    Returns:
        The resolved request.
    """
    release_explicit = bool(kernel_release)
    release = kernel_release if kernel_release else release_query()

    if source_path is not None and str(source_path) == "":
        source_path = None

    request = ProbeRequest(
        kernel_release=release,
        source_path=Path(source_path) if source_path is not None else None,
        release_explicit=release_explicit,
        sysroot=Path(sysroot) if sysroot else Path("/"),
    )

    logger.info(
        "Kernel release: %s (%s)",
        request.kernel_release,
        "explicit" if release_explicit else "running kernel",
    )
    if request.source_explicit:
        logger.info("Kernel source: %s (explicit)", request.source_path)

    return request
