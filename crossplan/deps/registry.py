"""
Native dependency registry.

Describes the native libraries a project may link against: the TLS library,
the C runtimes, and optional codec/vision libraries. Entries are shared and
read-only across all targets.
"""

import dataclasses
import logging
import re
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Mapping, Tuple

from crossplan.core.exceptions import CatalogError, ConfigError, UnknownDependencyError

logger = logging.getLogger(__name__)

# Names appear verbatim in variable names
NAME_PATTERN = re.compile(r"[A-Z0-9_]+")


@dataclass(frozen=True)
class Dependency:
    """
    Native dependency descriptor.

    Attributes:
        name: Canonical uppercase name used in variable names (e.g., 'OPENSSL')
        supports_static: Whether a static-library variant can be linked
        include_subpath: Header directory relative to the package's dev output
        lib_subpath: Library directory relative to the package's lib output
        package: Package name in the store (e.g., 'openssl')
        runtime: True for C runtimes whose library directory feeds the linker search path
        description: Human-readable summary
    """

    name: str
    supports_static: bool
    include_subpath: str = "include"
    lib_subpath: str = "lib"
    package: str = ""
    runtime: bool = False
    description: str = ""

    def __post_init__(self):
        if not self.name:
            raise CatalogError("Dependency name cannot be empty")
        # Canonical names are uppercase; package defaults to the lowercase name
        object.__setattr__(self, "name", self.name.upper())
        if not NAME_PATTERN.fullmatch(self.name):
            raise CatalogError(
                f"Invalid dependency name: {self.name} (letters, digits and '_' only)"
            )
        if not self.package:
            object.__setattr__(self, "package", self.name.lower())


class DependencyRegistry:
    """
    Immutable registry of native dependencies, in declaration order.

    Example:
        >>> registry = DEFAULT_REGISTRY
        >>> [d.name for d in registry.for_project({"openssl"})]
        ['OPENSSL']
    """

    def __init__(self, dependencies: Iterable[Dependency]):
        """
        Raises:
            CatalogError: If two dependencies normalize to the same name
        """
        by_name: Dict[str, Dependency] = {}
        for dependency in dependencies:
            if dependency.name in by_name:
                raise CatalogError(f"Duplicate dependency name: {dependency.name}")
            by_name[dependency.name] = dependency

        self._dependencies: Tuple[Dependency, ...] = tuple(by_name.values())
        self._by_name: Mapping[str, Dependency] = by_name

    def all_dependencies(self) -> FrozenSet[Dependency]:
        return frozenset(self._dependencies)

    def list_dependencies(self) -> List[Dependency]:
        """All dependencies in registry order."""
        return list(self._dependencies)

    def lookup(self, name: str) -> Dependency:
        """
        Look up a dependency by name (case-insensitive).

        Raises:
            UnknownDependencyError: If the name is not registered
        """
        dependency = self._by_name.get(name.upper())
        if dependency is None:
            raise UnknownDependencyError([name])
        return dependency

    def for_project(self, required_names: Iterable[str]) -> Tuple[Dependency, ...]:
        """
        Select the dependencies a project links against.

        Args:
            required_names: Dependency names, matched case-insensitively

        Returns:
            Matching dependencies in registry order

        Raises:
            UnknownDependencyError: Naming every requested name with no entry
        """
        wanted = {name.upper() for name in required_names}
        unknown = wanted - set(self._by_name)
        if unknown:
            raise UnknownDependencyError(unknown)

        selected = tuple(d for d in self._dependencies if d.name in wanted)
        logger.debug(f"Selected dependencies: {[d.name for d in selected]}")
        return selected

    def with_overrides(self, overrides: Mapping[str, Mapping[str, object]]) -> "DependencyRegistry":
        """
        Return a new registry with per-dependency overrides applied.

        Supported override keys: static, include_subpath, lib_subpath.

        Raises:
            UnknownDependencyError: If an override names an unknown dependency
            ConfigError: If an override uses an unsupported key
        """
        if not overrides:
            return self

        replaced = {d.name: d for d in self._dependencies}
        for name, fields in overrides.items():
            current = self.lookup(name)
            changes = {}
            for key, value in fields.items():
                if key == "static":
                    if not isinstance(value, bool):
                        raise ConfigError(
                            f"dependencies_overrides.{name}.static must be a boolean"
                        )
                    changes["supports_static"] = value
                elif key in ("include_subpath", "lib_subpath"):
                    changes[key] = str(value)
                else:
                    raise ConfigError(
                        f"dependencies_overrides.{name}: unsupported override '{key}'"
                    )
            logger.debug(f"Overriding dependency {current.name}: {changes}")
            replaced[current.name] = dataclasses.replace(current, **changes)

        return DependencyRegistry(replaced.values())

    def __contains__(self, name: str) -> bool:
        return name.upper() in self._by_name

    def __iter__(self):
        return iter(self._dependencies)

    def __len__(self) -> int:
        return len(self._dependencies)


DEFAULT_DEPENDENCIES = (
    Dependency(
        name="OPENSSL",
        supports_static=True,
        description="TLS library",
    ),
    Dependency(
        name="GLIBC",
        supports_static=True,
        runtime=True,
        description="GNU C library",
    ),
    Dependency(
        name="MUSL",
        supports_static=True,
        runtime=True,
        description="musl C library",
    ),
    Dependency(
        name="SQLITE",
        supports_static=True,
        description="Embedded SQL database",
    ),
    Dependency(
        name="FFMPEG",
        supports_static=False,
        description="Audio/video codec libraries",
    ),
    Dependency(
        name="OPENCV",
        supports_static=False,
        include_subpath="include/opencv4",
        description="Computer vision library",
    ),
)

DEFAULT_REGISTRY = DependencyRegistry(DEFAULT_DEPENDENCIES)
