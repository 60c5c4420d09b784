"""
Core functionality for crossplan.

This package contains the exception hierarchy and the small file utilities
used when plans are written to disk.
"""

from .exceptions import (
    CatalogError,
    ConfigError,
    CrossPlanError,
    ToolchainUnavailableError,
    UnknownDependencyError,
    UnknownTargetError,
    VariableCollisionError,
)

__all__ = [
    "CatalogError",
    "ConfigError",
    "CrossPlanError",
    "ToolchainUnavailableError",
    "UnknownDependencyError",
    "UnknownTargetError",
    "VariableCollisionError",
]
