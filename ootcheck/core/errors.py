"""
Probe errors.

Services raise these; the check use case turns them into a
``Classification.NOT_FOUND`` verdict. The CLI never sees a traceback.
"""

from __future__ import annotations

from pathlib import Path


class ProbeError(Exception):
    """Raised when a probe stage cannot inspect what it needs."""


class KernelSourceNotFound(ProbeError):
    """No candidate directory holds an ``include/linux`` header tree."""

    def __init__(self, release: str, searched: list[Path]):
        self.release = release
        self.searched = searched
        super().__init__(
            f"No kernel source tree found for {release} "
            f"({len(searched)} locations searched)"
        )
