"""
Pinned toolchain metadata.

This module provides a registry of toolchain revisions (release channels)
together with the target triples that have a published standard-library
artifact at each revision. The compiler and every target standard library are
always taken from the same revision.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from crossplan.core.exceptions import ToolchainRegistryError

logger = logging.getLogger(__name__)

LATEST = "latest"


class ToolchainMetadataRegistry:
    """
    Registry of pinned toolchain revisions.

    The registry loads metadata from an embedded JSON file::

        {"channels": {"<revision>": {"date": "...", "components": [...],
                                     "rust_std": ["<triple>", ...]}}}

    Example:
        >>> registry = ToolchainMetadataRegistry()
        >>> registry.has_stdlib("latest", "aarch64-unknown-linux-musl")
        True
    """

    def __init__(self, metadata_path: Optional[Path] = None):
        """
        Initialize toolchain registry.

        Args:
            metadata_path: Optional path to metadata JSON file.
                          If None, uses embedded toolchains.json

        Raises:
            ToolchainRegistryError: If metadata file cannot be loaded
        """
        self.metadata_path = metadata_path or self._get_default_metadata_path()
        self.metadata = self._load_metadata()
        logger.debug(f"Loaded toolchain metadata with {len(self.list_revisions())} revisions")

    def _get_default_metadata_path(self) -> Path:
        """Get path to default embedded metadata file."""
        return Path(__file__).parent.parent / "data" / "toolchains.json"

    def _load_metadata(self) -> Dict[str, Any]:
        """
        Load toolchain metadata from JSON file.

        Raises:
            ToolchainRegistryError: If file cannot be loaded or parsed
        """
        if not self.metadata_path.exists():
            raise ToolchainRegistryError(
                f"Metadata file not found: {self.metadata_path}"
            )

        try:
            with open(self.metadata_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ToolchainRegistryError(
                f"Invalid JSON in metadata file: {e}\n" f"File: {self.metadata_path}"
            ) from e
        except OSError as e:
            raise ToolchainRegistryError(
                f"Failed to load metadata file: {e}\n" f"File: {self.metadata_path}"
            ) from e

        if not isinstance(data, dict) or not isinstance(data.get("channels"), dict):
            raise ToolchainRegistryError(
                f"Invalid metadata structure: missing 'channels' mapping\n"
                f"File: {self.metadata_path}"
            )

        return data

    @property
    def _channels(self) -> Dict[str, Any]:
        return self.metadata["channels"]

    def list_revisions(self) -> List[str]:
        """
        List known revisions, newest first (by channel date).

        Example:
            >>> ToolchainMetadataRegistry().list_revisions()
            ['latest', '1.80.1', '1.70.0']
        """
        return sorted(
            self._channels,
            key=lambda rev: str(self._channels[rev].get("date", "")),
            reverse=True,
        )

    def resolve_revision(self, pattern: str) -> Optional[str]:
        """
        Resolve a revision pattern to a known revision.

        'latest' resolves to the 'latest' channel when present, otherwise to the
        most recently dated revision.

        Returns:
            Resolved revision or None if unknown
        """
        if pattern in self._channels:
            return pattern

        if pattern.lower() == LATEST:
            revisions = self.list_revisions()
            return revisions[0] if revisions else None

        return None

    def components(self, revision: str) -> List[str]:
        """Minimal toolchain components for a revision (e.g., ['cargo', 'rustc'])."""
        channel = self._channels.get(revision, {})
        return list(channel.get("components", []))

    def stdlib_triples(self, revision: str) -> List[str]:
        channel = self._channels.get(revision, {})
        return list(channel.get("rust_std", []))

    def has_stdlib(self, revision: str, triple: str) -> bool:
        """Whether a standard-library artifact is published for triple at revision."""
        return triple in self.stdlib_triples(revision)
