"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from tests.kernel_trees import RELEASE, make_tree


@pytest.fixture
def sysroot(tmp_path: Path) -> Path:
    """An empty directory standing in for the target's /."""
    root = tmp_path / "root"
    root.mkdir()
    return root


@pytest.fixture
def build_tree(sysroot: Path) -> Path:
    """``/lib/modules/<RELEASE>/build`` with a header tree."""
    return make_tree(sysroot / "lib" / "modules" / RELEASE / "build")


@pytest.fixture
def custom_tree(tmp_path: Path) -> Path:
    """A kernel tree unrelated to any release's module directory."""
    return make_tree(tmp_path / "work" / "linux-custom")
