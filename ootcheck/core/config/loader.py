"""
Profile loader — reads ootcheck.yml into a CapabilityProfile.

A profile names the kernel config key, header file and shim marker
that a probe inspects. Without a profile file the built-in defaults
(auxiliary bus) are used.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ootcheck.core.models.probe import CapabilityProfile

logger = logging.getLogger(__name__)

# Default profile filename
PROFILE_FILE = "ootcheck.yml"


class ConfigError(Exception):
    """Raised when a profile file is invalid or unreadable."""


def find_profile_file(start_dir: Path | None = None) -> Path | None:
    """Search for ootcheck.yml starting from the given directory, walking up.

    Driver build systems call the probe from nested source directories,
    so the profile at the driver's top level is still found.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to ootcheck.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / PROFILE_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_profile(path: Path | None = None) -> CapabilityProfile:
    """Load and validate a capability profile.

    Args:
        path: Explicit path to a profile file. If None, searches upward
            and falls back to the built-in default.

    Returns:
        Validated CapabilityProfile.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    explicit = path is not None
    if path is None:
        path = find_profile_file()

    if path is None:
        logger.debug("No %s found, using built-in profile", PROFILE_FILE)
        return CapabilityProfile()

    if not path.is_file():
        if explicit:
            raise ConfigError(f"Profile file not found: {path}")
        return CapabilityProfile()

    logger.debug("Loading profile from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "profile" key or be flat
    profile_data = data["profile"] if "profile" in data else data
    if not isinstance(profile_data, dict):
        raise ConfigError(f"Expected 'profile' to be a mapping in {path}")

    try:
        profile = CapabilityProfile.model_validate(profile_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid profile in {path}: {e}") from e

    for field_name in ("config_key", "header_name", "marker_symbol", "enabled_value"):
        if not getattr(profile, field_name).strip():
            raise ConfigError(f"Invalid profile in {path}: '{field_name}' must not be empty")

    logger.info("Loaded profile '%s' (%s)", profile.name, profile.config_key)
    return profile
