"""Target inclusion and ordering utilities.

PUBLIC API:
  - should_include: Whether a target belongs in the result for the given settings
  - sort_key: Ordering key for a discovered target
  - sort_targets: Deterministic presentation order
"""

from typing import Iterable

from targettap.cdp.models import DiscoveredTarget, RemoteTarget


def should_include(target: RemoteTarget, show_workers: bool) -> bool:
    """Check whether a target is listed.

    Args:
        target: Normalized remote target.
        show_workers: Whether worker targets are enabled.

    Returns:
        False only for service/shared workers while workers are hidden.

    Examples:
        >>> should_include(RemoteTarget("1", "service_worker", "sw", ""), False)
        False
    """
    return show_workers or not target.is_worker


def sort_key(target: DiscoveredTarget) -> tuple[bool, str, str, str, str]:
    """Pages first, then by type name, then by title.

    id and url only break ties between equal titles so the order never
    depends on the order enrichment finished in.
    """
    return (not target.is_page, target.type, target.title, target.id, target.url)


def sort_targets(targets: Iterable[DiscoveredTarget]) -> list[DiscoveredTarget]:
    """Return targets in presentation order.

    Examples:
        (other, "B"), (page, "Z"), (page, "A")  ->  (page, "A"), (page, "Z"), (other, "B")
    """
    return sorted(targets, key=sort_key)


__all__ = ["should_include", "sort_key", "sort_targets"]
