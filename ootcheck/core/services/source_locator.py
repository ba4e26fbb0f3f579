"""
Source tree locator — find the kernel header tree for a release.

Walks a fixed, ordered list of conventional locations and stops at
the first one holding ``include/linux``. Order is the whole policy:
there is no ranking beyond it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from ootcheck.core.errors import KernelSourceNotFound
from ootcheck.core.services.release import release_base, release_major_minor

logger = logging.getLogger(__name__)

# Placeholders: {release}, {base} (before the first "-"), {major_minor}
SOURCE_CANDIDATES: tuple[str, ...] = (
    "/lib/modules/{release}/source",
    "/lib/modules/{release}/build",
    "/usr/src/linux-{release}",
    "/usr/src/linux-{base}",
    "/usr/src/kernel-headers-{release}",
    "/usr/src/kernel-source-{release}",
    "/usr/src/linux-{major_minor}",
    "/usr/src/linux",
    "/usr/src/kernels/{release}",
    "/usr/src/kernels",
)

HEADER_SUBDIR = Path("include") / "linux"


def rebase(path: str | Path, sysroot: Path) -> Path:
    """Place an absolute path under ``sysroot``."""
    path = Path(path)
    if sysroot == Path("/") or not path.is_absolute():
        return path
    return sysroot / path.relative_to(path.anchor)


def expand_template(template: str, release: str) -> str:
    return template.format(
        release=release,
        base=release_base(release),
        major_minor=release_major_minor(release),
    )


def is_release_keyed(template: str) -> bool:
    """Whether a template names the release (or a truncated form of it)."""
    return any(key in template for key in ("{release}", "{base}", "{major_minor}"))


def expand_candidates(
    release: str,
    templates: Iterable[str] = SOURCE_CANDIDATES,
    sysroot: Path = Path("/"),
) -> list[Path]:
    """Expand templates for a release, keeping first-occurrence order.

    Truncated forms can collapse onto an earlier entry (a release with
    no suffix makes ``linux-{base}`` equal ``linux-{release}``); the
    duplicate is dropped so it is not checked twice.
    """
    seen: set[Path] = set()
    candidates: list[Path] = []
    for template in templates:
        path = rebase(expand_template(template, release), sysroot)
        if path in seen:
            continue
        seen.add(path)
        candidates.append(path)
    return candidates


def first_match(
    candidates: Iterable[Path],
    predicate: Callable[[Path], bool],
) -> Path | None:
    """Return the first candidate satisfying ``predicate``, else None."""
    for candidate in candidates:
        if predicate(candidate):
            logger.debug("  ✓ %s", candidate)
            return candidate
        logger.debug("  ✗ %s", candidate)
    return None


def has_header_tree(path: Path) -> bool:
    """A kernel source or header tree has ``include/linux``.

    An unreadable candidate is not a match.
    """
    try:
        return (path / HEADER_SUBDIR).is_dir()
    except OSError as e:
        logger.debug("  cannot inspect %s: %s", path, e)
        return False


def locate_source(
    release: str,
    sysroot: Path = Path("/"),
    predicate: Callable[[Path], bool] = has_header_tree,
) -> Path:
    """Find the kernel source tree for ``release``.

    Raises:
        KernelSourceNotFound: If no candidate has a header tree.
    """
    candidates = expand_candidates(release, sysroot=sysroot)
    logger.debug("Searching %d source locations for %s", len(candidates), release)

    found = first_match(candidates, predicate)
    if found is None:
        raise KernelSourceNotFound(release, candidates)

    logger.info("Kernel source: %s", found)
    return found
