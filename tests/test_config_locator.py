"""
Tests for the configuration locator — release-tree check and config order.
"""

from pathlib import Path

from ootcheck.core.services.config_locator import (
    config_candidates,
    is_release_tree,
    locate_config,
)
from tests.kernel_trees import RELEASE, deny_inspection, make_tree, write_autoconf


class TestIsReleaseTree:
    def test_module_build_dir(self, sysroot: Path, build_tree: Path):
        assert is_release_tree(build_tree, RELEASE, sysroot)

    def test_release_keyed_usr_src(self, sysroot: Path):
        tree = sysroot / "usr" / "src" / "linux-5.15.0"
        assert is_release_tree(tree, RELEASE, sysroot)

    def test_trailing_slash_normalised(self, sysroot: Path, build_tree: Path):
        assert is_release_tree(Path(str(build_tree) + "/"), RELEASE, sysroot)

    def test_generic_location_is_not(self, sysroot: Path):
        assert not is_release_tree(sysroot / "usr" / "src" / "linux", RELEASE, sysroot)
        assert not is_release_tree(sysroot / "usr" / "src" / "kernels", RELEASE, sysroot)

    def test_custom_tree_is_not(self, sysroot: Path, custom_tree: Path):
        assert not is_release_tree(custom_tree, RELEASE, sysroot)

    def test_other_release_is_not(self, sysroot: Path, build_tree: Path):
        assert not is_release_tree(build_tree, "6.1.0-13-amd64", sysroot)

    def test_target_of_build_link(self, sysroot: Path, custom_tree: Path):
        modules = sysroot / "lib" / "modules" / RELEASE
        modules.mkdir(parents=True)
        (modules / "build").symlink_to(custom_tree)
        assert is_release_tree(custom_tree, RELEASE, sysroot)


class TestConfigCandidates:
    def test_order(self, sysroot: Path, build_tree: Path):
        assert config_candidates(build_tree, sysroot) == [
            build_tree / "include" / "generated" / "autoconf.h",
            build_tree / "include" / "linux" / "autoconf.h",
            sysroot / "boot" / "bmlinux.autoconf.h",
        ]


class TestLocateConfig:
    def test_generated_autoconf(self, sysroot: Path, build_tree: Path):
        expected = write_autoconf(build_tree, "#define CONFIG_AUXILIARY_BUS 1\n")
        assert locate_config(build_tree, RELEASE, sysroot) == expected

    def test_generated_preferred_over_legacy(self, sysroot: Path, build_tree: Path):
        write_autoconf(build_tree, "", subdir="linux")
        generated = write_autoconf(build_tree, "")
        assert locate_config(build_tree, RELEASE, sysroot) == generated

    def test_legacy_location(self, sysroot: Path, build_tree: Path):
        legacy = write_autoconf(build_tree, "", subdir="linux")
        assert locate_config(build_tree, RELEASE, sysroot) == legacy

    def test_boot_fallback(self, sysroot: Path, build_tree: Path):
        boot = sysroot / "boot" / "bmlinux.autoconf.h"
        boot.parent.mkdir()
        boot.write_text("")
        assert locate_config(build_tree, RELEASE, sysroot) == boot

    def test_none_found(self, sysroot: Path, build_tree: Path):
        assert locate_config(build_tree, RELEASE, sysroot) is None

    def test_custom_tree_skips_lookup(self, sysroot: Path, custom_tree: Path):
        write_autoconf(custom_tree, "#define CONFIG_AUXILIARY_BUS 1\n")
        assert locate_config(custom_tree, RELEASE, sysroot) is None

    def test_generic_tree_skips_lookup(self, sysroot: Path):
        tree = make_tree(sysroot / "usr" / "src" / "linux")
        write_autoconf(tree, "#define CONFIG_AUXILIARY_BUS 1\n")
        assert locate_config(tree, RELEASE, sysroot) is None


class TestUnreadableLocations:
    def test_unreadable_module_dir_is_not_release_tree(
        self, sysroot: Path, custom_tree: Path, monkeypatch
    ):
        modules = sysroot / "lib" / "modules" / RELEASE
        modules.mkdir(parents=True)
        (modules / "build").symlink_to(custom_tree)
        deny_inspection(monkeypatch, modules, method="exists")
        assert not is_release_tree(custom_tree, RELEASE, sysroot)

    def test_unreadable_config_is_skipped(self, sysroot: Path, build_tree: Path, monkeypatch):
        generated = write_autoconf(build_tree, "#define CONFIG_AUXILIARY_BUS 1\n")
        legacy = write_autoconf(build_tree, "#define CONFIG_AUXILIARY_BUS 1\n", subdir="linux")
        deny_inspection(monkeypatch, generated, method="is_file")
        assert locate_config(build_tree, RELEASE, sysroot) == legacy
