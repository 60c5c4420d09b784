"""
Pytest configuration and shared fixtures for crossplan tests.
"""

import pytest

from crossplan.cross.store import PackageStore
from crossplan.cross.targets import DEFAULT_CATALOG, LinkMode, TargetCatalog, TargetDescriptor
from crossplan.deps.registry import DEFAULT_REGISTRY, Dependency, DependencyRegistry
from crossplan.plan.assembler import BuildPlanAssembler
from crossplan.toolchain.metadata_registry import ToolchainMetadataRegistry
from crossplan.toolchain.resolver import ToolchainResolver


STORE_ROOT = "/store"


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def store() -> PackageStore:
    """Package store rooted at /store."""
    return PackageStore(STORE_ROOT)


@pytest.fixture
def catalog() -> TargetCatalog:
    return DEFAULT_CATALOG


@pytest.fixture
def registry() -> DependencyRegistry:
    return DEFAULT_REGISTRY


@pytest.fixture
def metadata() -> ToolchainMetadataRegistry:
    """Embedded toolchain metadata."""
    return ToolchainMetadataRegistry()


@pytest.fixture
def resolver(metadata, store) -> ToolchainResolver:
    return ToolchainResolver(metadata, store)


@pytest.fixture
def assembler(catalog, registry, resolver, store) -> BuildPlanAssembler:
    """Assembler over the built-in catalog and registry."""
    return BuildPlanAssembler(catalog, registry, resolver, store)


@pytest.fixture
def toy_target() -> TargetDescriptor:
    """Target with a minimal a-b-c-d triple."""
    return TargetDescriptor(
        id="toy",
        triple="a-b-c-d",
        cross_package_key="toy-cross",
        default_link_mode=LinkMode.STATIC,
        cc_prefix="a-b-c-d-",
    )


@pytest.fixture
def openssl() -> Dependency:
    return DEFAULT_REGISTRY.lookup("openssl")


@pytest.fixture
def metadata_file(tmp_path):
    """Write a custom toolchain metadata file and return its path."""

    def _write(content: str):
        path = tmp_path / "toolchains.json"
        path.write_text(content)
        return path

    return _write
