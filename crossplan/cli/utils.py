"""
Shared utilities for CLI commands.

Provides configuration loading, assembler construction and consistent error
output for the crossplan commands.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

from crossplan.config.parser import ProjectConfig, load_project_config
from crossplan.core.exceptions import ConfigError
from crossplan.cross.store import PackageStore
from crossplan.cross.targets import DEFAULT_CATALOG, TargetCatalog
from crossplan.deps.registry import DEFAULT_REGISTRY, DependencyRegistry
from crossplan.plan.assembler import BuildPlanAssembler
from crossplan.toolchain.metadata_registry import ToolchainMetadataRegistry
from crossplan.toolchain.resolver import ToolchainResolver

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration Management
# ============================================================================


def load_config(args) -> ProjectConfig:
    """
    Load the project configuration named by CLI arguments.

    Raises:
        ConfigError: If the configuration file is invalid, or --config names a
            missing file
    """
    project_root = Path(args.project_root).resolve()
    config_path = args.config.resolve() if args.config else None
    config = load_project_config(project_root, config_path)
    logger.debug(f"Loaded configuration for project {config.project or project_root.name}")
    return config


def resolve_store(args, config: ProjectConfig) -> PackageStore:
    root = getattr(args, "store", None) or config.store
    try:
        return PackageStore(root)
    except ValueError as e:
        raise ConfigError(str(e)) from e


def resolve_target_id(args, config: ProjectConfig) -> str:
    """Target from --target, else from config."""
    target_id = getattr(args, "target", None) or config.target
    if not target_id:
        raise ConfigError("No target given: pass --target or set 'target' in crossplan.yaml")
    return target_id


def resolve_dependency_names(args, config: ProjectConfig) -> List[str]:
    """Dependencies from --dep flags, else from config."""
    deps = getattr(args, "deps", None)
    return list(deps) if deps else list(config.dependencies)


def create_catalogs(config: ProjectConfig):
    """Default catalog and registry with the project's overrides applied."""
    catalog: TargetCatalog = DEFAULT_CATALOG.with_overrides(config.target_overrides)
    registry: DependencyRegistry = DEFAULT_REGISTRY.with_overrides(
        config.dependency_overrides
    )
    return catalog, registry


def create_assembler(
    config: ProjectConfig,
    store: PackageStore,
    revision: Optional[str] = None,
    with_host: bool = False,
) -> BuildPlanAssembler:
    """
    Build a BuildPlanAssembler for a project configuration.

    Args:
        config: Project configuration
        store: Package store layout
        revision: Toolchain revision overriding the config
        with_host: Force host-target emission on

    Raises:
        UnknownTargetError: An override or the host target names an unknown target
        UnknownDependencyError: An override names an unknown dependency
        ToolchainRegistryError: Embedded toolchain metadata is unreadable
    """
    catalog, registry = create_catalogs(config)
    resolver = ToolchainResolver(
        ToolchainMetadataRegistry(), store, revision=revision or config.revision
    )

    host_target = None
    if with_host or config.host.enabled:
        host_target = catalog.lookup(config.host.target)

    return BuildPlanAssembler(catalog, registry, resolver, store, host_target=host_target)


# ============================================================================
# User Interface / Output Formatting
# ============================================================================


def print_error(message: str, details: Optional[str] = None):
    """
    Print error message to stderr in consistent format.

    Args:
        message: Main error message
        details: Optional additional details
    """
    print(f"ERROR: {message}", file=sys.stderr)
    if details:
        print(f"  {details}", file=sys.stderr)


def print_warning(message: str):
    """Print warning message to stderr."""
    print(f"WARNING: {message}", file=sys.stderr)
