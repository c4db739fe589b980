"""Target discovery pass: list, normalize, filter, enrich, sort.

PUBLIC API:
  - TargetDiscoveryService: Runs one discovery pass against a DevTools endpoint
  - DiscoveryResult: Ordered targets or the no-usable-response condition
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from targettap.cdp.listing import fetch_target_list, fix_remote_websocket
from targettap.cdp.models import DiscoveredTarget, RemoteTarget
from targettap.config import DiscoveryConfig
from targettap.errors import DiscoveryError, InvalidResponse
from targettap.services.icons import IconFetcher
from targettap.services.reporting import EVENT_LIST, EVENT_NO_JSON_ARRAY, EventReporter, LoggingReporter
from targettap.targets import should_include, sort_targets

logger = logging.getLogger(__name__)


@dataclass
class DiscoveryResult:
    """Outcome of a discovery pass.

    Attributes:
        targets: Targets in presentation order. Empty when error is set.
        error: Set when the endpoint gave no usable response.
        warnings: Non-fatal problems, e.g. icons that could not be cleared.
    """

    targets: list[DiscoveredTarget] = field(default_factory=list)
    error: DiscoveryError | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    def find(self, target_id: str) -> DiscoveredTarget | None:
        """Look up a target by full ID or unique ID prefix."""
        for target in self.targets:
            if target.id == target_id:
                return target
        matches = [t for t in self.targets if target_id and t.id.lower().startswith(target_id.lower())]
        return matches[0] if len(matches) == 1 else None


class TargetDiscoveryService:
    """Discovers debuggable targets on a remote DevTools endpoint.

    Per-target failures stay inside their own enrichment task. Only a listing
    that is not a JSON array fails the pass, and that still returns an empty
    result instead of raising.
    """

    def __init__(
        self,
        icon_fetcher: IconFetcher,
        reporter: EventReporter | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize discovery service.

        Args:
            icon_fetcher: Fetcher used to enrich page and iframe targets.
            reporter: Event reporter. Defaults to LoggingReporter.
            transport: Optional httpx transport for the listing request.
        """
        self.icon_fetcher = icon_fetcher
        self.reporter = reporter or LoggingReporter()
        self._transport = transport

    async def discover(self, config: DiscoveryConfig) -> DiscoveryResult:
        """Run one discovery pass.

        Args:
            config: Endpoint settings and worker visibility.

        Returns:
            DiscoveryResult with sorted targets, or with error set and no targets.
        """
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                entries = await fetch_target_list(client, config)
        except InvalidResponse as e:
            logger.warning(str(e))
            self.reporter.send(EVENT_NO_JSON_ARRAY)
            return DiscoveryResult(error=e)

        self.reporter.send(EVENT_LIST, {"targetCount": len(entries)})

        # Barrier: every entry settles before anything is sorted or returned
        settled = await asyncio.gather(*(self._process(entry, config) for entry in entries))
        targets = [target for target in settled if target is not None]

        logger.info(f"Discovered {len(targets)} of {len(entries)} targets on {config.base_url}")
        return DiscoveryResult(targets=sort_targets(targets))

    async def _process(self, entry: Any, config: DiscoveryConfig) -> DiscoveredTarget | None:
        """Normalize, filter and enrich one listing entry."""
        if not isinstance(entry, dict):
            logger.warning(f"Skipping malformed target entry: {entry!r}")
            return None

        target = fix_remote_websocket(config.hostname, config.port, RemoteTarget.from_json(entry))

        if target.is_page_like:
            icon_path = await self.icon_fetcher.fetch(target.url)
            return DiscoveredTarget(target, icon_path)

        if should_include(target, config.show_workers):
            return DiscoveredTarget(target)

        return None


__all__ = ["TargetDiscoveryService", "DiscoveryResult"]
