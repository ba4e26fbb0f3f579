"""
Configuration locator — find the autoconf header of a kernel tree.

The config is only looked up when the source tree is the one the
release itself points at. A custom tree handed in by the caller may
have nothing to do with the release's module directory, so reading
a config next to it would classify the wrong kernel.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ootcheck.core.services.source_locator import (
    SOURCE_CANDIDATES,
    expand_template,
    first_match,
    is_release_keyed,
    rebase,
)

logger = logging.getLogger(__name__)

# {source} is the kernel source tree; absolute entries are rebased on the sysroot
CONFIG_CANDIDATES: tuple[str, ...] = (
    "{source}/include/generated/autoconf.h",
    "{source}/include/linux/autoconf.h",
    "/boot/bmlinux.autoconf.h",
)

# Module directory links; compared by real path as well as by text
_MODULE_LINKS: tuple[str, ...] = (
    "/lib/modules/{release}/build",
    "/lib/modules/{release}/source",
)


def _normalize(path: Path) -> str:
    return os.path.normpath(str(path))


def is_release_tree(source: Path, release: str, sysroot: Path = Path("/")) -> bool:
    """Whether ``source`` is the conventional tree for ``release``.

    True when the path is textually one of the release-keyed source
    candidates, or when it is the real target of the release's
    ``/lib/modules`` build/source link. Generic locations such as
    ``/usr/src/linux`` do not count: nothing ties them to the release.
    """
    wanted = _normalize(source)
    for template in SOURCE_CANDIDATES:
        if not is_release_keyed(template):
            continue
        if _normalize(rebase(expand_template(template, release), sysroot)) == wanted:
            return True

    real = source.resolve()
    for template in _MODULE_LINKS:
        link = rebase(expand_template(template, release), sysroot)
        try:
            if link.exists() and link.resolve() == real:
                return True
        except OSError as e:
            logger.debug("  cannot inspect %s: %s", link, e)

    return False


def _is_config_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError as e:
        logger.debug("  cannot inspect %s: %s", path, e)
        return False


def config_candidates(source: Path, sysroot: Path = Path("/")) -> list[Path]:
    candidates = []
    for template in CONFIG_CANDIDATES:
        if template.startswith("{source}"):
            candidates.append(source / template[len("{source}/"):])
        else:
            candidates.append(rebase(template, sysroot))
    return candidates


def locate_config(
    source: Path,
    release: str,
    sysroot: Path = Path("/"),
) -> Path | None:
    """Find the kernel config for ``source``, or None.

    None is not an error: it sends the classifier to header inspection.
    """
    if not is_release_tree(source, release, sysroot):
        logger.info(
            "Source %s is not the tree for %s, skipping config lookup", source, release
        )
        return None

    found = first_match(config_candidates(source, sysroot), _is_config_file)
    if found is None:
        logger.info("No kernel config found under %s", source)
    else:
        logger.info("Kernel config: %s", found)
    return found
