"""
Probe models — the values that flow through one kernel capability check.

Everything here lives for a single process run. Nothing is persisted.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class Classification(IntEnum):
    """Terminal outcome of a probe. The value IS the process exit code."""

    BUILTIN = 0        # kernel provides the capability; do not build the shim
    MISCONFIGURED = 1  # supported but not enabled; build must fail
    OOT_REQUIRED = 2   # build the compatibility shim
    NOT_FOUND = 3      # no kernel source/config located; build must fail

    @property
    def is_failure(self) -> bool:
        """Whether build tooling should treat this outcome as an error."""
        return self in (Classification.MISCONFIGURED, Classification.NOT_FOUND)

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", "-")


class CapabilityValue(str, Enum):
    """Parsed state of the capability key in a kernel config file."""

    ABSENT = "absent"
    ENABLED = "enabled"
    OTHER = "other"


class Evidence(str, Enum):
    """Which branch of the classifier produced the verdict."""

    CONFIG = "config"
    HEADER = "header"
    NONE = "none"


class CapabilityProfile(BaseModel):
    """What is being probed: one kernel config key and its header.

    The defaults describe the auxiliary bus, the subsystem this tool
    was first written for. Other subsystems are described in an
    ``ootcheck.yml`` profile file.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)  # YAML reads `1` as int

    name: str = "auxiliary-bus"
    description: str = ""
    config_key: str = "CONFIG_AUXILIARY_BUS"
    enabled_value: str = "1"                    # autoconf.h writes "1" for =y
    header_name: str = "auxiliary_bus.h"
    marker_symbol: str = "_AUXILIARY_COMPAT_H_"  # only in our shim header


class ProbeRequest(BaseModel):
    """Resolved inputs, built once before any filesystem search.

    ``source_path`` is None when the caller gave no explicit tree; the
    source locator then searches using ``kernel_release``.
    """

    model_config = ConfigDict(frozen=True)

    kernel_release: str
    source_path: Path | None = None
    release_explicit: bool = False
    sysroot: Path = Field(default=Path("/"))

    @property
    def source_explicit(self) -> bool:
        return self.source_path is not None
