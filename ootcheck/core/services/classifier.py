"""
Capability classifier — turn config or header evidence into a verdict.

Two branches, never both in one run:

    config found   →  value of the config key decides
    no config      →  the capability header (and its marker) decides

Pure logic apart from reading the one file each branch needs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ootcheck.core.models.probe import (
    CapabilityProfile,
    CapabilityValue,
    Classification,
    Evidence,
)
from ootcheck.core.services.kconfig import (
    capability_value,
    contains_marker,
    find_header,
    read_config_value,
    read_text,
)
from ootcheck.core.services.source_locator import HEADER_SUBDIR, has_header_tree

logger = logging.getLogger(__name__)


@dataclass
class Verdict:
    """Classification plus the evidence behind it."""

    classification: Classification
    evidence: Evidence
    detail: str = ""
    config_value: str | None = None
    header_path: Path | None = None
    marker_found: bool | None = None

    def to_dict(self) -> dict:
        return {
            "classification": self.classification.label,
            "exit_code": int(self.classification),
            "evidence": self.evidence.value,
            "detail": self.detail,
            "config_value": self.config_value,
            "header_path": str(self.header_path) if self.header_path else None,
            "marker_found": self.marker_found,
        }


def classify_value(raw: str | None, profile: CapabilityProfile) -> Classification:
    """Map a config key value to a classification.

    Absent means the kernel predates the feature. Present but not
    enabled means it was configured off, which the build must not
    paper over by compiling the shim.
    """
    state = capability_value(raw, profile.enabled_value)
    if state is CapabilityValue.ABSENT:
        return Classification.OOT_REQUIRED
    if state is CapabilityValue.ENABLED:
        return Classification.BUILTIN
    return Classification.MISCONFIGURED


def classify_from_config(config_path: Path, profile: CapabilityProfile) -> Verdict:
    """Classify from the kernel's autoconf header."""
    raw = read_config_value(config_path, profile.config_key)
    classification = classify_value(raw, profile)

    if classification is Classification.OOT_REQUIRED:
        detail = f"{profile.config_key} not defined in {config_path}"
    elif classification is Classification.BUILTIN:
        detail = f"{profile.config_key}={raw} in {config_path}"
    else:
        detail = (
            f"{profile.config_key} is set to {raw!r} in {config_path}; "
            f"the kernel must be built with {profile.config_key}={profile.enabled_value}"
        )

    logger.info("Config verdict: %s (%s)", classification.label, detail)
    return Verdict(
        classification=classification,
        evidence=Evidence.CONFIG,
        detail=detail,
        config_value=raw,
    )


def has_any_header_tree(source: Path) -> bool:
    """``include/linux`` directly under the tree or under its ``source`` link."""
    return has_header_tree(source) or has_header_tree(source / "source")


def classify_from_headers(source: Path, profile: CapabilityProfile) -> Verdict:
    """Classify by inspecting the header tree when no config exists.

    A header carrying the marker is a copy of our own shim left by an
    earlier install, so the shim is rebuilt rather than trusted.
    """
    if not has_any_header_tree(source):
        detail = f"No {HEADER_SUBDIR} directory under {source}"
        logger.info("Header verdict: not-found (%s)", detail)
        return Verdict(
            classification=Classification.NOT_FOUND,
            evidence=Evidence.NONE,
            detail=detail,
        )

    header = find_header(source, profile.header_name)
    if header is None:
        detail = f"{profile.header_name} not found under {source}"
        logger.info("Header verdict: oot-required (%s)", detail)
        return Verdict(
            classification=Classification.OOT_REQUIRED,
            evidence=Evidence.HEADER,
            detail=detail,
        )

    marker_found = contains_marker(read_text(header), profile.marker_symbol)
    if marker_found:
        classification = Classification.OOT_REQUIRED
        detail = f"{header} is a previously installed shim header ({profile.marker_symbol})"
    else:
        classification = Classification.BUILTIN
        detail = f"{header} is the in-tree kernel header"

    logger.info("Header verdict: %s (%s)", classification.label, detail)
    return Verdict(
        classification=classification,
        evidence=Evidence.HEADER,
        detail=detail,
        header_path=header,
        marker_found=marker_found,
    )
