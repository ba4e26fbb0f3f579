"""
Check use case — run the four probe stages and produce a verdict.

    resolve release → locate source | not-found → locate config? → classify

Control only flows forward; the first stage that cannot continue
decides the outcome.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ootcheck.core.errors import KernelSourceNotFound, ProbeError
from ootcheck.core.models.probe import (
    CapabilityProfile,
    Classification,
    Evidence,
    ProbeRequest,
)
from ootcheck.core.services.classifier import (
    Verdict,
    classify_from_config,
    classify_from_headers,
)
from ootcheck.core.services.config_locator import locate_config
from ootcheck.core.services.source_locator import locate_source

logger = logging.getLogger(__name__)


@dataclass
class CheckResult:
    """Result of the check use case."""

    request: ProbeRequest
    profile: CapabilityProfile = field(default_factory=CapabilityProfile)
    source_path: Path | None = None
    config_path: Path | None = None
    verdict: Verdict | None = None

    @property
    def classification(self) -> Classification:
        assert self.verdict is not None
        return self.verdict.classification

    @property
    def exit_code(self) -> int:
        return int(self.classification)

    def to_dict(self) -> dict:
        result: dict = {
            "profile": self.profile.name,
            "kernel_release": self.request.kernel_release,
            "source_path": str(self.source_path) if self.source_path else None,
            "source_explicit": self.request.source_explicit,
            "config_path": str(self.config_path) if self.config_path else None,
        }
        if self.verdict:
            result.update(self.verdict.to_dict())
        return result


def run_check(
    request: ProbeRequest,
    profile: CapabilityProfile | None = None,
) -> CheckResult:
    """Classify the kernel described by ``request``.

    Args:
        request: Resolved inputs (see ``resolve_request``).
        profile: Capability to probe for (default: built-in profile).

    Returns:
        CheckResult whose ``exit_code`` is the process exit status.
    """
    result = CheckResult(request=request, profile=profile or CapabilityProfile())

    # ── Source tree ─────────────────────────────────────────────
    if request.source_path is not None:
        result.source_path = request.source_path
    else:
        try:
            result.source_path = locate_source(request.kernel_release, request.sysroot)
        except KernelSourceNotFound as e:
            logger.info("%s", e)
            result.verdict = Verdict(
                classification=Classification.NOT_FOUND,
                evidence=Evidence.NONE,
                detail=str(e),
            )
            return result

    # ── Config, then classification ─────────────────────────────
    try:
        result.config_path = locate_config(
            result.source_path, request.kernel_release, request.sysroot
        )
        if result.config_path is not None:
            result.verdict = classify_from_config(result.config_path, result.profile)
        else:
            result.verdict = classify_from_headers(result.source_path, result.profile)
    except ProbeError as e:
        logger.info("%s", e)
        result.verdict = Verdict(
            classification=Classification.NOT_FOUND,
            evidence=Evidence.NONE,
            detail=str(e),
        )

    return result
