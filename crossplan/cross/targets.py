"""
Cross-compilation target catalog.

This module defines the closed set of foreign targets crossplan knows how to
build for. Each target maps a short user-facing identifier to its canonical
target triple, the cross package bundle that provides its C toolchain and
sysroot, and the default linking mode for native dependencies.
"""

import dataclasses
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from crossplan.core.exceptions import CatalogError, ConfigError, UnknownTargetError

logger = logging.getLogger(__name__)

# <arch>-<vendor>-<os>-<abi>
TRIPLE_PATTERN = re.compile(r"^[a-z0-9_.]+-[a-z0-9_.]+-[a-z0-9_.]+-[a-z0-9_.]+$")


class LinkMode(Enum):
    """How native dependencies are linked into the output binary."""

    STATIC = "static"
    DYNAMIC = "dynamic"

    @classmethod
    def parse(cls, value: str) -> "LinkMode":
        """
        Parse a link mode from its string form.

        Raises:
            ConfigError: If the value is not 'static' or 'dynamic'
        """
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ConfigError(
                f"Invalid link mode: {value} (expected 'static' or 'dynamic')"
            ) from None


@dataclass(frozen=True)
class TargetDescriptor:
    """
    Cross-compilation target specification.

    Attributes:
        id: Stable user-facing identifier (e.g., 'armv7', 'aarch64')
        triple: Canonical target triple (e.g., 'aarch64-unknown-linux-musl')
        cross_package_key: Key of the cross toolchain/sysroot bundle in the package store
        default_link_mode: Linking mode used for static-capable dependencies
        cc_prefix: Prefix of the cross C compiler binary (e.g., 'aarch64-unknown-linux-musl-')
        description: Human-readable summary
    """

    id: str
    triple: str
    cross_package_key: str
    default_link_mode: LinkMode
    cc_prefix: str = ""
    description: str = ""

    @property
    def arch(self) -> str:
        """CPU architecture component of the triple."""
        return self.triple.split("-")[0]

    @property
    def abi(self) -> str:
        """ABI component of the triple (e.g., 'musl', 'gnueabihf')."""
        return self.triple.split("-")[-1]

    @property
    def is_static(self) -> bool:
        return self.default_link_mode is LinkMode.STATIC


def validate_triple(triple: str) -> bool:
    """Check that a triple has the <arch>-<vendor>-<os>-<abi> shape."""
    return bool(TRIPLE_PATTERN.match(triple))


class TargetCatalog:
    """
    Immutable, ordered table of supported targets.

    Example:
        >>> catalog = TargetCatalog(DEFAULT_TARGETS)
        >>> catalog.lookup("aarch64").triple
        'aarch64-unknown-linux-musl'
    """

    def __init__(self, descriptors: Iterable[TargetDescriptor]):
        """
        Build a catalog from target descriptors.

        Raises:
            CatalogError: On duplicate ids or triples, or triples with the wrong shape
        """
        by_id: Dict[str, TargetDescriptor] = {}
        # Keyed by the triple as it appears in variable names
        projected: Dict[str, TargetDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.id in by_id:
                raise CatalogError(f"Duplicate target id: {descriptor.id}")
            if not validate_triple(descriptor.triple):
                raise CatalogError(
                    f"Target {descriptor.id} has malformed triple: {descriptor.triple} "
                    f"(expected <arch>-<vendor>-<os>-<abi>)"
                )
            key = descriptor.triple.replace("-", "_").upper()
            other = projected.get(key)
            if other is not None:
                raise CatalogError(
                    f"Duplicate target triple: {descriptor.triple} "
                    f"(same variable names as target {other.id}, {other.triple})"
                )
            by_id[descriptor.id] = descriptor
            projected[key] = descriptor

        self._targets: Tuple[TargetDescriptor, ...] = tuple(by_id.values())
        self._by_id: Mapping[str, TargetDescriptor] = dict(by_id)
        self._by_triple: Mapping[str, TargetDescriptor] = {
            t.triple: t for t in self._targets
        }
        logger.debug(f"Loaded target catalog with {len(self._targets)} targets")

    def lookup(self, target_id: str) -> TargetDescriptor:
        """
        Look up a target by identifier or canonical triple.

        Raises:
            UnknownTargetError: If no target matches
        """
        descriptor = self._by_id.get(target_id) or self._by_triple.get(target_id)
        if descriptor is None:
            raise UnknownTargetError(target_id, self.ids())
        return descriptor

    def find(self, target_id: str) -> Optional[TargetDescriptor]:
        """Like lookup(), but returns None for unknown targets."""
        return self._by_id.get(target_id) or self._by_triple.get(target_id)

    def list_targets(self) -> List[TargetDescriptor]:
        return list(self._targets)

    def ids(self) -> List[str]:
        return [t.id for t in self._targets]

    def with_overrides(self, overrides: Mapping[str, Mapping[str, str]]) -> "TargetCatalog":
        """
        Return a new catalog with per-target field overrides applied.

        Supported override keys: link_mode, cross_package_key, cc_prefix.

        Args:
            overrides: Mapping of target id to override fields

        Returns:
            New TargetCatalog; this catalog is left unchanged

        Raises:
            UnknownTargetError: If an override names an unknown target
            ConfigError: If an override uses an unsupported key
        """
        if not overrides:
            return self

        replaced = {t.id: t for t in self._targets}
        for target_id, fields in overrides.items():
            current = self.lookup(target_id)
            changes = {}
            for key, value in fields.items():
                if key == "link_mode":
                    changes["default_link_mode"] = LinkMode.parse(value)
                elif key in ("cross_package_key", "cc_prefix"):
                    changes[key] = str(value)
                else:
                    raise ConfigError(
                        f"targets.{target_id}: unsupported override '{key}'"
                    )
            logger.debug(f"Overriding target {current.id}: {changes}")
            replaced[current.id] = dataclasses.replace(current, **changes)

        return TargetCatalog(replaced.values())

    def __contains__(self, target_id: str) -> bool:
        return self.find(target_id) is not None

    def __iter__(self):
        return iter(self._targets)

    def __len__(self) -> int:
        return len(self._targets)


DEFAULT_TARGETS = (
    TargetDescriptor(
        id="armv7",
        triple="armv7-unknown-linux-musleabihf",
        cross_package_key="armv7l-hf-multiplatform",
        default_link_mode=LinkMode.STATIC,
        cc_prefix="armv7l-unknown-linux-gnueabihf-",
        description="32-bit ARM, hard-float, musl libc",
    ),
    TargetDescriptor(
        id="armv7-gnu",
        triple="armv7-unknown-linux-gnueabihf",
        cross_package_key="armv7l-hf-multiplatform",
        default_link_mode=LinkMode.STATIC,
        cc_prefix="armv7l-unknown-linux-gnueabihf-",
        description="32-bit ARM, hard-float, glibc",
    ),
    TargetDescriptor(
        id="aarch64",
        triple="aarch64-unknown-linux-musl",
        cross_package_key="aarch64-multiplatform-musl",
        default_link_mode=LinkMode.STATIC,
        cc_prefix="aarch64-unknown-linux-musl-",
        description="64-bit ARM, musl libc",
    ),
    TargetDescriptor(
        id="x86_64",
        triple="x86_64-unknown-linux-gnu",
        cross_package_key="gnu64",
        default_link_mode=LinkMode.DYNAMIC,
        cc_prefix="x86_64-unknown-linux-gnu-",
        description="64-bit x86, glibc",
    ),
)

DEFAULT_CATALOG = TargetCatalog(DEFAULT_TARGETS)
