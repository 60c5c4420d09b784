"""
Build plan assembly.

Combines a target, its toolchain bundle and the project's native dependencies
into one environment mapping for a foreign-architecture build:

- per-dependency ``<TRIPLE>_<DEP>_{STATIC,INCLUDE_DIR,LIB_DIR}`` variables
- toolchain variables (build target, C compiler, linker driver)
- the static C runtime flag and runtime search paths for static targets

Assembly is pure: catalogs are read-only, nothing is cached and a failed
assembly produces no plan.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from crossplan.core.exceptions import VariableCollisionError
from crossplan.cross.store import OUTPUT_DEV, OUTPUT_LIB, PackageStore
from crossplan.cross.targets import TargetCatalog, TargetDescriptor
from crossplan.deps.registry import Dependency, DependencyRegistry
from crossplan.plan.naming import INCLUDE_DIR, LIB_DIR, STATIC, project, target_variable
from crossplan.toolchain.resolver import ToolchainBundle, ToolchainResolver

logger = logging.getLogger(__name__)

STATIC_MARKER = "1"
CRT_STATIC_FLAGS = ("-C", "target-feature=+crt-static")

# Toolchain variables
BUILD_TARGET_VAR = "CARGO_BUILD_TARGET"
TARGET_CC_VAR = "TARGET_CC"
RUSTFLAGS_VAR = "RUSTFLAGS"


@dataclass(frozen=True)
class BuildPlan:
    """
    Complete environment for one target build.

    Attributes:
        target: Requested target
        toolchain: Toolchain bundle resolved for the target
        dependencies: Dependencies the plan covers, in registry order
        variables: Read-only mapping of variable name to value
    """

    target: TargetDescriptor
    toolchain: ToolchainBundle
    dependencies: Tuple[Dependency, ...] = ()
    variables: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "variables", MappingProxyType(dict(self.variables)))

    def as_env(self) -> Dict[str, str]:
        """Plan variables as a plain dict, sorted by name."""
        return {key: self.variables[key] for key in sorted(self.variables)}


class _Emission:
    """Accumulates variables and rejects conflicting re-emission."""

    def __init__(self):
        self.values: Dict[str, str] = {}
        self.sources: Dict[str, str] = {}

    def add(self, name: str, value: str, source: str) -> None:
        existing = self.values.get(name)
        if existing is not None and existing != value:
            logger.debug(
                f"Collision on {name}: {self.sources[name]} vs {source}"
            )
            raise VariableCollisionError(name, existing, value)
        self.values[name] = value
        self.sources[name] = source

    def update(self, variables: Mapping[str, str], source: str) -> None:
        for name, value in variables.items():
            self.add(name, value, source)


class BuildPlanAssembler:
    """
    Assemble build plans for targets in a catalog.

    Example:
        >>> assembler = BuildPlanAssembler.default()
        >>> plan = assembler.assemble("aarch64", {"openssl"})
        >>> plan.variables["AARCH64_UNKNOWN_LINUX_MUSL_OPENSSL_STATIC"]
        '1'
    """

    def __init__(
        self,
        catalog: TargetCatalog,
        registry: DependencyRegistry,
        resolver: ToolchainResolver,
        store: PackageStore,
        host_target: Optional[TargetDescriptor] = None,
    ):
        """
        Args:
            catalog: Target catalog
            registry: Dependency registry
            resolver: Toolchain resolver
            store: Package store layout
            host_target: When set, static-capable dependencies are also emitted
                statically for this target (for build-time host code)
        """
        self.catalog = catalog
        self.registry = registry
        self.resolver = resolver
        self.store = store
        self.host_target = host_target

    @classmethod
    def default(cls, store: Optional[PackageStore] = None) -> "BuildPlanAssembler":
        """Assembler over the built-in catalog, registry and toolchain metadata."""
        from crossplan.cross.targets import DEFAULT_CATALOG
        from crossplan.deps.registry import DEFAULT_REGISTRY
        from crossplan.toolchain.metadata_registry import ToolchainMetadataRegistry

        store = store or PackageStore()
        resolver = ToolchainResolver(ToolchainMetadataRegistry(), store)
        return cls(DEFAULT_CATALOG, DEFAULT_REGISTRY, resolver, store)

    def assemble(
        self,
        target_id: str,
        required_names: Iterable[str],
        extra_env: Optional[Mapping[str, str]] = None,
    ) -> BuildPlan:
        """
        Assemble the build plan for one target.

        Args:
            target_id: Target identifier or triple
            required_names: Names of the dependencies the project links against
            extra_env: Additional variables merged last

        Returns:
            BuildPlan for the target

        Raises:
            UnknownTargetError: Target is not in the catalog
            ToolchainUnavailableError: No pinned toolchain for the target
            UnknownDependencyError: A dependency name is not registered
            VariableCollisionError: Two rules emit different values for one name
        """
        target = self.catalog.lookup(target_id)
        toolchain = self.resolver.resolve(target)
        dependencies = self.registry.for_project(required_names)

        emission = _Emission()
        for dependency in dependencies:
            emission.update(
                self.dependency_variables(target, dependency),
                source=f"dependency {dependency.name}",
            )

        if self.host_target is not None and self.host_target.id != target.id:
            for dependency in dependencies:
                if dependency.supports_static:
                    emission.update(
                        self._static_variables(self.host_target, dependency),
                        source=f"host dependency {dependency.name}",
                    )

        emission.update(
            self.toolchain_variables(toolchain, dependencies), source="toolchain"
        )

        if extra_env:
            emission.update(extra_env, source="project env")

        logger.debug(
            f"Assembled plan for {target.id} with {len(emission.values)} variables"
        )
        return BuildPlan(
            target=target,
            toolchain=toolchain,
            dependencies=dependencies,
            variables=emission.values,
        )

    def assemble_matrix(
        self, target_ids: Iterable[str], required_names: Iterable[str]
    ) -> Dict[str, BuildPlan]:
        """Assemble one plan per target, keyed by target id."""
        required = list(required_names)
        plans = {}
        for target_id in target_ids:
            plan = self.assemble(target_id, required)
            plans[plan.target.id] = plan
        return plans

    def links_statically(self, target: TargetDescriptor, dependency: Dependency) -> bool:
        return dependency.supports_static and target.is_static

    def dependency_variables(
        self, target: TargetDescriptor, dependency: Dependency
    ) -> Dict[str, str]:
        """Variables locating one dependency for one target."""
        if self.links_statically(target, dependency):
            return self._static_variables(target, dependency)
        return self._location_variables(target, dependency, static=False)

    def _static_variables(
        self, target: TargetDescriptor, dependency: Dependency
    ) -> Dict[str, str]:
        variables = {project(target, dependency, STATIC): STATIC_MARKER}
        variables.update(self._location_variables(target, dependency, static=True))
        return variables

    def _location_variables(
        self, target: TargetDescriptor, dependency: Dependency, static: bool
    ) -> Dict[str, str]:
        return {
            project(target, dependency, INCLUDE_DIR): self._include_dir(
                target, dependency, static
            ),
            project(target, dependency, LIB_DIR): self._lib_dir(
                target, dependency, static
            ),
        }

    def _include_dir(self, target: TargetDescriptor, dependency: Dependency, static: bool) -> str:
        return self.store.output_path(
            target.cross_package_key,
            dependency.package,
            OUTPUT_DEV,
            dependency.include_subpath,
            static=static,
        )

    def _lib_dir(self, target: TargetDescriptor, dependency: Dependency, static: bool) -> str:
        return self.store.output_path(
            target.cross_package_key,
            dependency.package,
            OUTPUT_LIB,
            dependency.lib_subpath,
            static=static,
        )

    def toolchain_variables(
        self, toolchain: ToolchainBundle, dependencies: Iterable[Dependency] = ()
    ) -> Dict[str, str]:
        """
        Toolchain variables for a bundle.

        The compiler path is used both as the target C compiler and as the
        linker driver. Static targets also get the static C runtime flag and a
        library search path for every statically linked C runtime.
        """
        target = toolchain.target
        variables = {
            BUILD_TARGET_VAR: target.triple,
            TARGET_CC_VAR: toolchain.compiler_path,
            target_variable(target, "LINKER", prefix="CARGO_TARGET"): toolchain.linker_path,
        }

        if target.is_static:
            flags: List[str] = list(CRT_STATIC_FLAGS)
            for dependency in dependencies:
                if dependency.runtime and self.links_statically(target, dependency):
                    flags.append(f"-L {self._lib_dir(target, dependency, static=True)}")
            variables[RUSTFLAGS_VAR] = " ".join(flags)

        return variables
