"""
Centralized exception hierarchy for crossplan.

Every error raised by the resolver derives from CrossPlanError. All of them
describe static configuration mistakes, so none are retryable.
"""

from typing import Iterable


# ============================================================================
# Base Exceptions
# ============================================================================


class CrossPlanError(Exception):
    """Base exception for all crossplan errors."""

    pass


class CatalogError(CrossPlanError):
    """Raised when a target catalog or dependency registry is malformed."""

    pass


class ConfigError(CrossPlanError):
    """Project configuration parsing or validation error."""

    pass


# ============================================================================
# Target Exceptions
# ============================================================================


class UnknownTargetError(CrossPlanError):
    """Raised when a target identifier is absent from the catalog."""

    def __init__(self, target_id: str, known: Iterable[str] = ()):
        self.target_id = target_id
        self.known = list(known)
        msg = f"Unknown target: {target_id}"
        if self.known:
            msg += f" (known targets: {', '.join(self.known)})"
        super().__init__(msg)


# ============================================================================
# Toolchain Exceptions
# ============================================================================


class ToolchainError(CrossPlanError):
    """Base exception for toolchain-related errors."""

    pass


class ToolchainUnavailableError(ToolchainError):
    """Raised when no pinned standard-library artifact exists for a target."""

    def __init__(self, triple: str, revision: str, reason: str = ""):
        self.triple = triple
        self.revision = revision
        msg = f"No standard library artifact for {triple} at revision {revision}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class ToolchainRegistryError(ToolchainError):
    """Raised when the embedded toolchain metadata cannot be loaded."""

    pass


# ============================================================================
# Dependency Exceptions
# ============================================================================


class UnknownDependencyError(CrossPlanError):
    """Raised when requested dependency names have no registry entry."""

    def __init__(self, names: Iterable[str]):
        self.names = sorted(names)
        super().__init__(f"Unknown dependencies: {', '.join(self.names)}")


# ============================================================================
# Plan Exceptions
# ============================================================================


class VariableCollisionError(CrossPlanError):
    """Raised when two emission rules produce different values for one variable."""

    def __init__(self, name: str, existing: str, incoming: str):
        self.name = name
        self.existing = existing
        self.incoming = incoming
        super().__init__(
            f"Variable {name} emitted twice with different values: "
            f"{existing!r} vs {incoming!r}"
        )
