"""targettap service layer.

Services sit between the command/API surfaces and the DevTools endpoint.
They own discovery, icon enrichment and the icon cache, and are reusable
across the REPL, MCP and HTTP interfaces.

PUBLIC API:
  - TargetsProvider: Pull-based target hierarchy with change notifications
  - TargetDiscoveryService: One discovery pass against a DevTools endpoint
  - DiscoveryResult: Ordered targets or the no-usable-response condition
  - IconFetcher: Bounded-time favicon download
  - CacheDirectoryManager: Icon cache clearing
  - LoggingReporter: Default event reporter
"""

from targettap.services.cache import CacheDirectoryManager
from targettap.services.discovery import DiscoveryResult, TargetDiscoveryService
from targettap.services.icons import IconFetcher
from targettap.services.provider import TargetsProvider
from targettap.services.reporting import LoggingReporter

__all__ = [
    "TargetsProvider",
    "TargetDiscoveryService",
    "DiscoveryResult",
    "IconFetcher",
    "CacheDirectoryManager",
    "LoggingReporter",
]
