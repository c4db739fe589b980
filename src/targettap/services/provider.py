"""Targets provider for presentation hosts.

Hosts pull the hierarchy with get_children() and subscribe to be told when
a refresh produced a new result. Synchronous hosts (REPL and MCP commands)
use call(), which runs coroutines on a loop thread owned by the provider.

PUBLIC API:
  - TargetsProvider: Pull-based target hierarchy with change notifications
"""

import asyncio
import logging
import threading
from pathlib import Path
from typing import Any, Callable, Coroutine, TypeVar

import httpx

from targettap.cdp.models import DiscoveredTarget, TargetProperty
from targettap.config import (
    DEFAULT_ICON_TIMEOUT,
    ConfigManager,
    DiscoveryConfig,
    get_config_manager,
    get_discovery_config,
)
from targettap.errors import CacheClearError
from targettap.services.cache import CacheDirectoryManager
from targettap.services.discovery import DiscoveryResult, TargetDiscoveryService
from targettap.services.icons import IconFetcher
from targettap.services.reporting import EVENT_REFRESH, EventReporter, LoggingReporter

logger = logging.getLogger(__name__)

ChangeListener = Callable[[DiscoveryResult], None]
T = TypeVar("T")


class TargetsProvider:
    """Pull-based target hierarchy.

    Root children are discovered targets; a target's children are its detail
    rows; detail rows have none.

    Attributes:
        cache: Icon cache directory manager.
        service: Discovery service.
        last_result: Result of the most recent discovery pass, if any.
    """

    def __init__(
        self,
        config_source: Callable[[], DiscoveryConfig],
        icon_dir: Path,
        icon_timeout: float = DEFAULT_ICON_TIMEOUT,
        reporter: EventReporter | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize provider.

        Args:
            config_source: Called before every pass for fresh endpoint settings.
            icon_dir: Icon cache directory. Created on the first pass if missing.
            icon_timeout: Per-icon race timer in seconds.
            reporter: Event reporter. Defaults to LoggingReporter.
            transport: Optional httpx transport for all requests, used by tests.
        """
        self.reporter = reporter or LoggingReporter()
        self.cache = CacheDirectoryManager(icon_dir)
        self.service = TargetDiscoveryService(
            IconFetcher(icon_dir, timeout=icon_timeout, transport=transport),
            reporter=self.reporter,
            transport=transport,
        )
        self._config_source = config_source
        self._listeners: list[ChangeListener] = []
        self._lock = asyncio.Lock()
        self.last_result: DiscoveryResult | None = None

        # Loop thread for call()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._loop_thread: threading.Thread | None = None
        self._loop_lock = threading.Lock()

    @classmethod
    def from_config(
        cls, manager: ConfigManager | None = None, reporter: EventReporter | None = None
    ) -> "TargetsProvider":
        """Build a provider wired to targettap.toml settings.

        Without an explicit manager, each pass reads the global config so a
        reload takes effect on the next discovery.
        """
        config_source = manager.discovery_config if manager else get_discovery_config
        manager = manager or get_config_manager()
        return cls(
            config_source=config_source,
            icon_dir=manager.icon_dir,
            icon_timeout=manager.icon_timeout,
            reporter=reporter,
        )

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register a change listener.

        Args:
            listener: Called with the new DiscoveryResult after each refresh.

        Returns:
            Function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def call(self, coro: Coroutine[Any, Any, T], timeout: float | None = None) -> T:
        """Run a provider coroutine from synchronous code and wait for it.

        Safe to use while another event loop is running in the calling thread.
        Icon downloads abandoned by a pass keep running on the provider loop.

        Args:
            coro: Coroutine to run, e.g. provider.discover().
            timeout: Seconds to wait for the result. Defaults to no limit.

        Returns:
            The coroutine's result.
        """
        return asyncio.run_coroutine_threadsafe(coro, self._ensure_loop()).result(timeout)

    def close(self) -> None:
        """Stop the loop thread started by call()."""
        with self._loop_lock:
            loop, thread = self._loop, self._loop_thread
            self._loop = None
            self._loop_thread = None

        if loop is None:
            return

        loop.call_soon_threadsafe(loop.stop)
        if thread and thread.is_alive():
            thread.join(timeout=2)
        loop.close()

    def _ensure_loop(self) -> asyncio.AbstractEventLoop:
        with self._loop_lock:
            if self._loop is None:
                self._loop = asyncio.new_event_loop()
                self._loop_thread = threading.Thread(
                    target=self._loop.run_forever, daemon=True, name="targettap-provider-loop"
                )
                self._loop_thread.start()
            return self._loop

    async def discover(self) -> DiscoveryResult:
        """Run a discovery pass with the current settings."""
        async with self._lock:
            await self._prepare_cache()
            result = await self.service.discover(self._config_source())
            self.last_result = result
            return result

    async def get_children(
        self, element: DiscoveredTarget | TargetProperty | None = None
    ) -> list[DiscoveredTarget] | list[TargetProperty]:
        """Children of an element, or the discovered targets for the root."""
        if element is None:
            result = await self.discover()
            return result.targets
        return element.children()

    async def refresh(self) -> DiscoveryResult:
        """Clear the icon cache, rediscover, and notify listeners.

        Icons that could not be deleted are reported in result.warnings.

        Returns:
            The new discovery result.
        """
        self.reporter.send(EVENT_REFRESH)
        warnings: list[str] = []

        async with self._lock:
            try:
                removed = await asyncio.to_thread(self.cache.clear)
                logger.debug(f"Cleared {removed} cached icon(s)")
            except CacheClearError as e:
                logger.warning(str(e))
                warnings.append(str(e))

            await self._prepare_cache()
            result = await self.service.discover(self._config_source())
            result.warnings.extend(warnings)
            self.last_result = result

        self._notify(result)
        return result

    async def _prepare_cache(self) -> None:
        """Create the icon directory so downloads have somewhere to land."""
        try:
            await asyncio.to_thread(self.cache.ensure)
        except OSError as e:
            logger.warning(f"Icon cache {self.cache.directory} unavailable, icons disabled: {e}")

    def _notify(self, result: DiscoveryResult) -> None:
        for listener in list(self._listeners):
            try:
                listener(result)
            except Exception as e:
                logger.error(f"Change listener failed: {e}")


__all__ = ["TargetsProvider", "ChangeListener"]
