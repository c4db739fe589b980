"""Exception types for target discovery.

PUBLIC API:
  - TargetTapError: Base class for all targettap errors
  - DiscoveryError: Discovery pass produced no usable response
  - InvalidResponse: Listing endpoint returned non-array JSON or nothing parsable
  - CacheClearError: One or more icon files could not be deleted
"""

from pathlib import Path


class TargetTapError(Exception):
    """Base class for targettap errors."""


class DiscoveryError(TargetTapError):
    """A discovery pass could not produce a target list."""


class InvalidResponse(DiscoveryError):
    """Listing endpoint returned something other than a JSON array.

    Attributes:
        endpoint: URL that was queried (last one tried when falling back).
        reason: Short human-readable cause.
    """

    def __init__(self, endpoint: str, reason: str):
        self.endpoint = endpoint
        self.reason = reason
        super().__init__(f"Invalid response from {endpoint}: {reason}")


class CacheClearError(TargetTapError):
    """Icon cache clear finished with deletion failures.

    Attributes:
        failures: List of (path, error) pairs, one per file that was not removed.
    """

    def __init__(self, failures: list[tuple[Path, OSError]]):
        self.failures = failures
        names = ", ".join(path.name for path, _ in failures)
        super().__init__(f"Failed to remove {len(failures)} cached icon(s): {names}")


__all__ = ["TargetTapError", "DiscoveryError", "InvalidResponse", "CacheClearError"]
