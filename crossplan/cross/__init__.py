"""
Cross-compilation support for crossplan.

This module provides the target catalog and the package store layout used to
locate cross toolchains and native libraries.
"""

from crossplan.cross.targets import (
    DEFAULT_CATALOG,
    LinkMode,
    TargetCatalog,
    TargetDescriptor,
)
from crossplan.cross.store import PackageStore

__all__ = [
    "DEFAULT_CATALOG",
    "LinkMode",
    "TargetCatalog",
    "TargetDescriptor",
    "PackageStore",
]
