"""
Toolchain resolution for cross-compilation targets.

Assembles a compiler, linker and target standard library for one target. The
compiler front-end and the standard library are pinned to the same upstream
revision so both agree on ABI. The target's cross C compiler doubles as the
linker driver; no separate linker binary is ever selected.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from crossplan.core.exceptions import ToolchainUnavailableError
from crossplan.cross.store import PackageStore
from crossplan.cross.targets import TargetDescriptor
from crossplan.toolchain.metadata_registry import LATEST, ToolchainMetadataRegistry

logger = logging.getLogger(__name__)

STDLIB_COMPONENT = "rust-std"


@dataclass(frozen=True)
class StdlibArtifact:
    """Reference to a target-specific standard-library build."""

    component: str
    triple: str
    revision: str

    def __str__(self) -> str:
        return f"{self.component}-{self.triple}@{self.revision}"


@dataclass(frozen=True)
class ToolchainBundle:
    """
    Compiler, linker and standard library consistent for one target.

    Attributes:
        target: Target the bundle was resolved for
        compiler_path: Absolute path of the cross C compiler
        linker_path: Linker driver; always the compiler
        stdlib_artifact: Target standard library at the pinned revision
        components: Minimal toolchain components (compiler front-end, build tool)
        revision: Pinned upstream revision
    """

    target: TargetDescriptor
    compiler_path: str
    linker_path: str
    stdlib_artifact: StdlibArtifact
    components: Tuple[str, ...] = ()
    revision: str = LATEST


class ToolchainResolver:
    """
    Resolve toolchain bundles for targets at a single pinned revision.

    Example:
        >>> resolver = ToolchainResolver(ToolchainMetadataRegistry(), PackageStore())
        >>> bundle = resolver.resolve(DEFAULT_CATALOG.lookup("aarch64"))
        >>> bundle.linker_path == bundle.compiler_path
        True
    """

    def __init__(
        self,
        metadata: ToolchainMetadataRegistry,
        store: PackageStore,
        revision: str = LATEST,
    ):
        self.metadata = metadata
        self.store = store
        self.revision = revision

    def pinned_revision(self) -> Optional[str]:
        """Resolved revision, or None when the configured revision is unknown."""
        return self.metadata.resolve_revision(self.revision)

    def resolve(self, target: TargetDescriptor) -> ToolchainBundle:
        """
        Resolve the toolchain bundle for a target.

        Args:
            target: Target descriptor from the catalog

        Returns:
            ToolchainBundle whose target is the given descriptor

        Raises:
            ToolchainUnavailableError: If the revision is unknown or publishes no
                standard library for the target triple
        """
        revision = self.pinned_revision()
        if revision is None:
            raise ToolchainUnavailableError(
                target.triple, self.revision, "unknown toolchain revision"
            )

        if not self.metadata.has_stdlib(revision, target.triple):
            raise ToolchainUnavailableError(target.triple, revision)

        compiler = self.store.compiler_path(target.cross_package_key, target.cc_prefix)
        bundle = ToolchainBundle(
            target=target,
            compiler_path=compiler,
            linker_path=compiler,
            stdlib_artifact=StdlibArtifact(
                component=STDLIB_COMPONENT, triple=target.triple, revision=revision
            ),
            components=tuple(self.metadata.components(revision)),
            revision=revision,
        )
        logger.debug(f"Resolved toolchain for {target.id}: {bundle.stdlib_artifact}")
        return bundle
