"""Toolchain metadata and per-target toolchain resolution."""

from crossplan.toolchain.metadata_registry import ToolchainMetadataRegistry
from crossplan.toolchain.resolver import StdlibArtifact, ToolchainBundle, ToolchainResolver

__all__ = [
    "StdlibArtifact",
    "ToolchainBundle",
    "ToolchainMetadataRegistry",
    "ToolchainResolver",
]
