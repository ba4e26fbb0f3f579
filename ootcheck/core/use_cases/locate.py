"""
Locate use case — show where the probe looks, without classifying.

Used to debug build hosts: lists every source candidate with whether
it qualifies, and which tree and config a check would bind.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ootcheck.core.models.probe import ProbeRequest
from ootcheck.core.services.config_locator import is_release_tree, locate_config
from ootcheck.core.services.source_locator import (
    expand_candidates,
    first_match,
    has_header_tree,
)


@dataclass
class LocateResult:
    """Candidate locations and what a check would bind."""

    request: ProbeRequest
    candidates: list[tuple[Path, bool]] = field(default_factory=list)
    source_path: Path | None = None
    release_tree: bool = False
    config_path: Path | None = None

    @property
    def found(self) -> bool:
        return self.source_path is not None

    def to_dict(self) -> dict:
        return {
            "kernel_release": self.request.kernel_release,
            "source_explicit": self.request.source_explicit,
            "candidates": [
                {"path": str(path), "has_headers": ok} for path, ok in self.candidates
            ],
            "source_path": str(self.source_path) if self.source_path else None,
            "release_tree": self.release_tree,
            "config_path": str(self.config_path) if self.config_path else None,
        }


def run_locate(request: ProbeRequest) -> LocateResult:
    """Evaluate every source candidate and bind source/config like a check."""
    result = LocateResult(request=request)

    candidates = expand_candidates(request.kernel_release, sysroot=request.sysroot)
    result.candidates = [(path, has_header_tree(path)) for path in candidates]

    if request.source_path is not None:
        result.source_path = request.source_path
    else:
        result.source_path = first_match(candidates, has_header_tree)

    if result.source_path is None:
        return result

    result.release_tree = is_release_tree(
        result.source_path, request.kernel_release, request.sysroot
    )
    result.config_path = locate_config(
        result.source_path, request.kernel_release, request.sysroot
    )
    return result
