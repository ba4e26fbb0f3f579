"""
Domain models — types for the kernel capability probe.

    from ootcheck.core.models import Classification, CapabilityProfile, ProbeRequest
"""

from ootcheck.core.models.probe import (
    CapabilityProfile,
    CapabilityValue,
    Classification,
    Evidence,
    ProbeRequest,
)

__all__ = [
    "CapabilityProfile",
    "CapabilityValue",
    "Classification",
    "Evidence",
    "ProbeRequest",
]
