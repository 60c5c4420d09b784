"""
File system utilities for crossplan.

crossplan only writes files when the CLI is asked to save a rendered plan.
"""

import tempfile
from pathlib import Path
from typing import Optional, Union


def atomic_write(path: Union[str, Path], text: str) -> None:
    """
    Replace path with text in a single rename.

    The new content is staged in a hidden file beside path, so a shell sourcing
    the plan sees either the previous file or the complete new one. Missing
    parent directories are created.

    Example:
        >>> atomic_write("build/aarch64.env", "TARGET_CC=/store/bin/cc\\n")
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    staged: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            staged = Path(handle.name)
            handle.write(text)
        staged.replace(path)
    except OSError:
        if staged is not None:
            staged.unlink(missing_ok=True)
        raise
