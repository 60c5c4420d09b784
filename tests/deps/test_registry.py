"""
Tests for the native dependency registry.
"""

import pytest

from crossplan.core.exceptions import CatalogError, ConfigError, UnknownDependencyError
from crossplan.deps.registry import DEFAULT_REGISTRY, Dependency, DependencyRegistry


class TestDependency:
    def test_name_is_uppercased(self):
        dep = Dependency(name="openssl", supports_static=True)

        assert dep.name == "OPENSSL"

    def test_package_defaults_to_lowercase_name(self):
        dep = Dependency(name="SQLITE", supports_static=True)

        assert dep.package == "sqlite"

    def test_explicit_package(self):
        dep = Dependency(name="TLS", supports_static=True, package="openssl")

        assert dep.package == "openssl"

    def test_default_subpaths(self):
        dep = Dependency(name="X", supports_static=False)

        assert dep.include_subpath == "include"
        assert dep.lib_subpath == "lib"

    def test_empty_name(self):
        with pytest.raises(CatalogError):
            Dependency(name="", supports_static=False)

    @pytest.mark.parametrize("name", ["lib-ssl", "open ssl", "libc++", "LIB\n"])
    def test_name_must_fit_variable_names(self, name):
        with pytest.raises(CatalogError, match="Invalid dependency name"):
            Dependency(name=name, supports_static=True)


class TestRegistry:
    def test_all_dependencies(self):
        names = {d.name for d in DEFAULT_REGISTRY.all_dependencies()}

        assert names == {"OPENSSL", "GLIBC", "MUSL", "SQLITE", "FFMPEG", "OPENCV"}

    def test_for_project_case_insensitive(self):
        deps = DEFAULT_REGISTRY.for_project({"openssl", "Glibc"})

        assert [d.name for d in deps] == ["OPENSSL", "GLIBC"]

    def test_for_project_registry_order(self):
        deps = DEFAULT_REGISTRY.for_project(["opencv", "sqlite", "openssl"])

        assert [d.name for d in deps] == ["OPENSSL", "SQLITE", "OPENCV"]

    def test_for_project_empty(self):
        assert DEFAULT_REGISTRY.for_project(set()) == ()

    def test_for_project_unknown(self):
        with pytest.raises(UnknownDependencyError) as exc_info:
            DEFAULT_REGISTRY.for_project({"openssl", "libfoo", "LIBBAR"})

        assert exc_info.value.names == ["LIBBAR", "LIBFOO"]

    def test_lookup(self):
        assert DEFAULT_REGISTRY.lookup("musl").runtime is True
        assert DEFAULT_REGISTRY.lookup("ffmpeg").supports_static is False

    def test_lookup_unknown(self):
        with pytest.raises(UnknownDependencyError, match="zlib"):
            DEFAULT_REGISTRY.lookup("zlib")

    def test_duplicate_after_normalization(self):
        with pytest.raises(CatalogError, match="Duplicate dependency"):
            DependencyRegistry(
                [
                    Dependency(name="openssl", supports_static=True),
                    Dependency(name="OpenSSL", supports_static=False),
                ]
            )

    def test_contains(self):
        assert "openssl" in DEFAULT_REGISTRY
        assert "zlib" not in DEFAULT_REGISTRY


class TestRegistryOverrides:
    def test_disable_static(self):
        registry = DEFAULT_REGISTRY.with_overrides({"openssl": {"static": False}})

        assert registry.lookup("openssl").supports_static is False
        assert DEFAULT_REGISTRY.lookup("openssl").supports_static is True

    def test_override_subpaths(self):
        registry = DEFAULT_REGISTRY.with_overrides(
            {"sqlite": {"include_subpath": "include/sqlite3", "lib_subpath": "lib64"}}
        )
        dep = registry.lookup("sqlite")

        assert dep.include_subpath == "include/sqlite3"
        assert dep.lib_subpath == "lib64"

    def test_override_unknown(self):
        with pytest.raises(UnknownDependencyError):
            DEFAULT_REGISTRY.with_overrides({"zlib": {"static": True}})

    def test_override_bad_key(self):
        with pytest.raises(ConfigError, match="unsupported override"):
            DEFAULT_REGISTRY.with_overrides({"openssl": {"package": "libressl"}})

    def test_override_static_requires_bool(self):
        with pytest.raises(ConfigError, match="boolean"):
            DEFAULT_REGISTRY.with_overrides({"openssl": {"static": "yes"}})
