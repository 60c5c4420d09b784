"""
Package store layout.

Toolchains and native libraries are fetched and built by an external package
repository. crossplan never touches the store; it only knows how store paths
are laid out so it can point a build at them.

Layout::

    <root>/<cross_package_key>/<package>[-static]/<output>
"""

from dataclasses import dataclass
from pathlib import PurePosixPath

DEFAULT_STORE_ROOT = "/nix/store/crossplan"

# Native package outputs
OUTPUT_DEV = "dev"
OUTPUT_LIB = "out"

HOST_PACKAGE_KEY = "host"


@dataclass(frozen=True)
class PackageStore:
    """
    Pure path resolver for packages in the external store.

    Attributes:
        root: Absolute store root
    """

    root: str = DEFAULT_STORE_ROOT

    def __post_init__(self):
        if not PurePosixPath(self.root).is_absolute():
            raise ValueError(f"Package store root must be absolute: {self.root}")

    def package_path(
        self, cross_package_key: str, package: str, static: bool = False
    ) -> PurePosixPath:
        """
        Path of a package build for a cross package set.

        Args:
            cross_package_key: Cross package set (e.g., 'aarch64-multiplatform-musl')
            package: Package name (e.g., 'openssl')
            static: Whether to select the static-library variant

        Example:
            >>> PackageStore("/store").package_path("gnu64", "openssl", static=True)
            PurePosixPath('/store/gnu64/openssl-static')
        """
        name = f"{package}-static" if static else package
        return PurePosixPath(self.root) / cross_package_key / name

    def output_path(
        self,
        cross_package_key: str,
        package: str,
        output: str,
        subpath: str = "",
        static: bool = False,
    ) -> str:
        """Absolute path inside one output of a package, as a string."""
        path = self.package_path(cross_package_key, package, static) / output
        if subpath:
            path = path / subpath
        return str(path)

    def compiler_path(self, cross_package_key: str, cc_prefix: str) -> str:
        """Path of the cross C compiler driver for a cross package set."""
        return str(
            PurePosixPath(self.root)
            / cross_package_key
            / "stdenv-cc"
            / "bin"
            / f"{cc_prefix}cc"
        )
