"""
crossplan - declarative cross-compilation build-matrix resolver.

Maps a target identifier and the native dependencies a project links against
to a toolchain and the environment a foreign-architecture build needs.
"""

from crossplan.core.exceptions import (
    CrossPlanError,
    ToolchainUnavailableError,
    UnknownDependencyError,
    UnknownTargetError,
    VariableCollisionError,
)
from crossplan.cross.targets import DEFAULT_CATALOG, LinkMode, TargetCatalog, TargetDescriptor
from crossplan.deps.registry import DEFAULT_REGISTRY, Dependency, DependencyRegistry
from crossplan.plan.assembler import BuildPlan, BuildPlanAssembler
from crossplan.plan.naming import project

__version__ = "0.1.0"

__all__ = [
    "BuildPlan",
    "BuildPlanAssembler",
    "CrossPlanError",
    "DEFAULT_CATALOG",
    "DEFAULT_REGISTRY",
    "Dependency",
    "DependencyRegistry",
    "LinkMode",
    "TargetCatalog",
    "TargetDescriptor",
    "ToolchainUnavailableError",
    "UnknownDependencyError",
    "UnknownTargetError",
    "VariableCollisionError",
    "project",
]
