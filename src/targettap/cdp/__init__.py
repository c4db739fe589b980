"""Chrome DevTools Protocol target list access.

Reads the HTTP target list the browser exposes next to its debugger
WebSocket. Nothing here opens a WebSocket.

PUBLIC API:
  - RemoteTarget: One entry of the remote target list
  - DiscoveredTarget: Normalized target with optional local icon
  - TargetProperty: Synthetic detail row of a discovered target
  - fetch_target_list: GET the remote target list
  - fix_remote_websocket: Point a debugger address at the configured host
"""

from targettap.cdp.listing import fetch_target_list, fix_remote_websocket
from targettap.cdp.models import DiscoveredTarget, RemoteTarget, TargetProperty

__all__ = ["RemoteTarget", "DiscoveredTarget", "TargetProperty", "fetch_target_list", "fix_remote_websocket"]
