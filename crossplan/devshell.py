"""
Interactive development shell environment.

Builds the host-architecture shell used for local editing: the packages to
put on PATH and the pkg-config search path for native dependencies. It reads
only the dependency registry's path metadata and never goes through the
cross-compilation build plan.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from crossplan.cross.store import HOST_PACKAGE_KEY, OUTPUT_DEV, PackageStore
from crossplan.deps.registry import Dependency, DependencyRegistry

logger = logging.getLogger(__name__)

DEFAULT_TOOLS = (
    "pkg-config",
    "rustc",
    "cargo",
    "rustfmt",
    "clippy",
    "rust-analyzer",
    "gdb",
)


@dataclass(frozen=True)
class DevShell:
    """Host shell definition."""

    name: str
    packages: Tuple[str, ...]
    env: Dict[str, str] = field(default_factory=dict)
    motd: str = ""


class DevShellEnvironment:
    """
    Derive the host development shell from the dependency registry.

    Example:
        >>> shell = DevShellEnvironment(DEFAULT_REGISTRY, PackageStore()).build(
        ...     "standing_bot", ["openssl"])
        >>> shell.env["PKG_CONFIG_PATH"]
        '/nix/store/crossplan/host/openssl/dev/lib/pkgconfig'
    """

    def __init__(self, registry: DependencyRegistry, store: PackageStore):
        self.registry = registry
        self.store = store

    def pkg_config_dir(self, dependency: Dependency) -> str:
        return self.store.output_path(
            HOST_PACKAGE_KEY, dependency.package, OUTPUT_DEV, f"{dependency.lib_subpath}/pkgconfig"
        )

    def include_dir(self, dependency: Dependency) -> str:
        return self.store.output_path(
            HOST_PACKAGE_KEY, dependency.package, OUTPUT_DEV, dependency.include_subpath
        )

    def build(
        self,
        name: str,
        dependency_names: Iterable[str],
        tools: Optional[Iterable[str]] = None,
    ) -> DevShell:
        """
        Build the shell definition for a project.

        Raises:
            UnknownDependencyError: A dependency name is not registered
        """
        dependencies = self.registry.for_project(dependency_names)
        packages: List[str] = [f"{d.package}.dev" for d in dependencies]
        packages.extend(tools if tools is not None else DEFAULT_TOOLS)

        env = {}
        if dependencies:
            env["PKG_CONFIG_PATH"] = ":".join(self.pkg_config_dir(d) for d in dependencies)
            env["C_INCLUDE_PATH"] = ":".join(self.include_dir(d) for d in dependencies)

        logger.debug(f"Dev shell {name}: {len(packages)} packages")
        return DevShell(
            name=name,
            packages=tuple(packages),
            env=env,
            motd=f"Entered {name} app development environment.",
        )
