"""
File locking for plan outputs.

Independent crossplan invocations may render plans for different targets in
parallel. When two of them write the same output file, a lock file beside the
destination serializes the writes.

Usage:
    from crossplan.core.locking import output_lock

    with output_lock(Path("build/aarch64.env")):
        atomic_write(Path("build/aarch64.env"), content)
"""

import logging
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock, Timeout as LockTimeout

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


def lock_path_for(path: Path) -> Path:
    """Lock file used to guard writes to path."""
    return path.with_name(f".{path.name}.lock")


@contextmanager
def output_lock(path: Path, timeout: float = DEFAULT_TIMEOUT):
    """
    Hold an exclusive lock for writing an output file.

    Args:
        path: File that will be written
        timeout: Maximum wait time in seconds

    Raises:
        LockTimeout: If the lock can't be acquired within timeout
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    lock_path = lock_path_for(path)
    lock = FileLock(lock_path, timeout=timeout)

    try:
        with lock:
            logger.debug(f"Acquired output lock: {lock_path}")
            yield
            logger.debug(f"Released output lock: {lock_path}")
    except LockTimeout as e:
        logger.error(
            f"Could not acquire lock for {path} after {timeout}s. "
            "Another crossplan process may be writing it."
        )
        raise LockTimeout(str(lock_path)) from e
