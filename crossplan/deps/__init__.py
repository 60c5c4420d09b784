"""Native dependency descriptors and the default registry."""

from crossplan.deps.registry import DEFAULT_REGISTRY, Dependency, DependencyRegistry

__all__ = ["DEFAULT_REGISTRY", "Dependency", "DependencyRegistry"]
