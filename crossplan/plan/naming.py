"""
Variable name projection.

Build tools look up per-target native library settings by one exact variable
shape::

    <TRIPLE_WITH_UNDERSCORES>_<DEPENDENCY>_<ATTRIBUTE>

e.g. ``ARMV7_UNKNOWN_LINUX_MUSLEABIHF_OPENSSL_LIB_DIR``. A variable with any
other case, separator or field order is silently ignored by the build, so all
names are derived here and nowhere else.
"""

from crossplan.cross.targets import TargetDescriptor
from crossplan.deps.registry import Dependency

# Dependency attributes
STATIC = "STATIC"
INCLUDE_DIR = "INCLUDE_DIR"
LIB_DIR = "LIB_DIR"

ATTRIBUTES = (STATIC, INCLUDE_DIR, LIB_DIR)


def env_name(text: str) -> str:
    """Normalize text for use in a variable name: '-' becomes '_', upper case."""
    return text.replace("-", "_").upper()


def project(target: TargetDescriptor, dependency: Dependency, attribute: str) -> str:
    """
    Project (target, dependency, attribute) onto a flat variable name.

    Example:
        >>> project(DEFAULT_CATALOG.lookup("armv7"), DEFAULT_REGISTRY.lookup("openssl"), LIB_DIR)
        'ARMV7_UNKNOWN_LINUX_MUSLEABIHF_OPENSSL_LIB_DIR'
    """
    # Dependency names are already [A-Z0-9_]; only the triple is rewritten
    return "_".join((env_name(target.triple), dependency.name, attribute)).upper()


def target_variable(target: TargetDescriptor, suffix: str, prefix: str = "") -> str:
    """
    Target-scoped tool variable, e.g. CARGO_TARGET_<TRIPLE>_LINKER.

    Example:
        >>> target_variable(DEFAULT_CATALOG.lookup("aarch64"), "LINKER", prefix="CARGO_TARGET")
        'CARGO_TARGET_AARCH64_UNKNOWN_LINUX_MUSL_LINKER'
    """
    parts = [env_name(target.triple), env_name(suffix)]
    if prefix:
        parts.insert(0, env_name(prefix))
    return "_".join(parts)
