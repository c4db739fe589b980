"""Icon cache directory maintenance.

PUBLIC API:
  - CacheDirectoryManager: Clears downloaded icons, keeping the sentinel file
  - SENTINEL_NAME: Placeholder file that is never deleted
"""

import logging
from pathlib import Path

from targettap.errors import CacheClearError

logger = logging.getLogger(__name__)

SENTINEL_NAME = ".gitkeep"


class CacheDirectoryManager:
    """Manages the icon cache directory.

    Attributes:
        directory: Icon cache directory.
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def ensure(self) -> Path:
        """Create the directory and its sentinel if missing."""
        self.directory.mkdir(parents=True, exist_ok=True)
        (self.directory / SENTINEL_NAME).touch(exist_ok=True)
        return self.directory

    def clear(self, directory: Path | None = None) -> int:
        """Delete every file except the sentinel.

        Every file is attempted even after a failure; failures are raised
        together once the directory has been walked.

        Args:
            directory: Directory to clear. Defaults to self.directory.

        Returns:
            Number of files removed.

        Raises:
            CacheClearError: One or more files could not be removed.
        """
        directory = Path(directory) if directory is not None else self.directory
        if not directory.is_dir():
            logger.debug(f"Icon cache {directory} does not exist, nothing to clear")
            return 0

        removed = 0
        failures: list[tuple[Path, OSError]] = []

        for entry in sorted(directory.iterdir()):
            if entry.name == SENTINEL_NAME or entry.is_dir():
                continue
            try:
                entry.unlink()
                removed += 1
            except FileNotFoundError:
                # A detached download may have renamed its temp file meanwhile
                continue
            except OSError as e:
                logger.debug(f"Failed to remove {entry}: {e}")
                failures.append((entry, e))

        if failures:
            raise CacheClearError(failures)

        logger.debug(f"Removed {removed} cached icon(s) from {directory}")
        return removed


__all__ = ["CacheDirectoryManager", "SENTINEL_NAME"]
