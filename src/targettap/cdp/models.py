"""Target models for the DevTools target list.

Entries from /json/list are wrapped as-is into RemoteTarget, then into
DiscoveredTarget once normalization and icon enrichment are done.

PUBLIC API:
  - RemoteTarget: One entry of the remote target list
  - DiscoveredTarget: Normalized target with optional local icon
  - TargetProperty: Synthetic detail row of a discovered target
"""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

PAGE_TYPES = frozenset({"page", "iframe"})
WORKER_TYPES = frozenset({"service_worker", "shared_worker"})


@dataclass(frozen=True)
class RemoteTarget:
    """Target entry as received from the listing endpoint.

    Attributes:
        id: Chrome target ID.
        type: Target type (page, iframe, service_worker, shared_worker, other...).
        title: Page title.
        url: Target URL.
        web_socket_debugger_url: Debugger address, rewritten during normalization.
        description: Optional CDP description field.
        devtools_frontend_url: Optional DevTools frontend address.
        favicon_url: Favicon URL reported by the browser, if any.
        parent_id: Parent target ID for iframes and workers.
    """

    id: str
    type: str
    title: str
    url: str
    web_socket_debugger_url: str = ""
    description: str = ""
    devtools_frontend_url: str = ""
    favicon_url: str = ""
    parent_id: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "RemoteTarget":
        """Build from a /json/list entry. Missing fields become empty strings."""

        def text(key: str) -> str:
            value = data.get(key)
            return "" if value is None else str(value)

        return cls(
            id=text("id"),
            type=text("type"),
            title=text("title"),
            url=text("url"),
            web_socket_debugger_url=text("webSocketDebuggerUrl"),
            description=text("description"),
            devtools_frontend_url=text("devtoolsFrontendUrl"),
            favicon_url=text("faviconUrl"),
            parent_id=text("parentId"),
        )

    def with_websocket(self, url: str) -> "RemoteTarget":
        """Copy with a different debugger address."""
        return replace(self, web_socket_debugger_url=url)

    @property
    def is_page_like(self) -> bool:
        return self.type in PAGE_TYPES

    @property
    def is_worker(self) -> bool:
        return self.type in WORKER_TYPES


@dataclass(frozen=True)
class TargetProperty:
    """Detail row shown when a target is expanded."""

    name: str
    value: str

    @property
    def label(self) -> str:
        return f"{self.name}: {self.value}"

    def children(self) -> list["TargetProperty"]:
        return []


@dataclass(frozen=True)
class DiscoveredTarget:
    """Normalized target produced by a discovery pass.

    Attributes:
        target: Normalized remote target.
        icon_path: Local favicon file, or None when no icon was fetched.
    """

    target: RemoteTarget
    icon_path: Path | None = None

    @property
    def id(self) -> str:
        return self.target.id

    @property
    def type(self) -> str:
        return self.target.type

    @property
    def title(self) -> str:
        return self.target.title

    @property
    def url(self) -> str:
        return self.target.url

    @property
    def web_socket_debugger_url(self) -> str:
        return self.target.web_socket_debugger_url

    @property
    def is_page(self) -> bool:
        return self.target.type == "page"

    @property
    def label(self) -> str:
        return self.target.title or self.target.url or self.target.id

    @property
    def description(self) -> str:
        return self.target.url

    def children(self) -> list[TargetProperty]:
        """Detail rows for id, type, url and debugger address."""
        return [
            TargetProperty("id", self.target.id),
            TargetProperty("type", self.target.type),
            TargetProperty("url", self.target.url),
            TargetProperty("webSocketDebuggerUrl", self.target.web_socket_debugger_url),
        ]

    def to_dict(self) -> dict[str, Any]:
        """Plain dict for API and MCP responses."""
        return {
            "id": self.target.id,
            "type": self.target.type,
            "title": self.target.title,
            "url": self.target.url,
            "webSocketDebuggerUrl": self.target.web_socket_debugger_url,
            "iconPath": str(self.icon_path) if self.icon_path else None,
        }


__all__ = ["RemoteTarget", "DiscoveredTarget", "TargetProperty", "PAGE_TYPES", "WORKER_TYPES"]
