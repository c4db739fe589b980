"""DevTools target list endpoint client.

PUBLIC API:
  - fetch_target_list: GET the remote target list, returns parsed JSON
  - fix_remote_websocket: Point a target's debugger address at the configured host
"""

import json
import logging
import re
from typing import Any

import httpx

from targettap.cdp.models import RemoteTarget
from targettap.config import DiscoveryConfig
from targettap.errors import InvalidResponse

logger = logging.getLogger(__name__)

LISTING_PATHS = ("/json/list", "/json")

# DevTools rejects requests whose Host header is not localhost or an IP
_HEADERS = {"Host": "localhost"}

_WS_ADDRESS = re.compile(r"wss?://([^/]+)/?")


def fix_remote_websocket(hostname: str, port: int, target: RemoteTarget) -> RemoteTarget:
    """Rewrite the host:port of the debugger address to the configured endpoint.

    The browser reports its own loopback address, which is unreachable when the
    browser runs on another machine.

    Args:
        hostname: Configured remote host.
        port: Configured remote port.
        target: Target as received.

    Returns:
        Target with rewritten address, or the same target when it has none.
    """
    match = _WS_ADDRESS.match(target.web_socket_debugger_url)
    if not match:
        return target

    address = target.web_socket_debugger_url.replace(match.group(1), f"{hostname}:{port}", 1)
    return target.with_websocket(address)


async def fetch_target_list(client: httpx.AsyncClient, config: DiscoveryConfig) -> list[Any]:
    """Fetch the target list, trying /json/list then /json.

    Args:
        client: HTTP client to issue requests with.
        config: Endpoint settings.

    Returns:
        Parsed JSON array.

    Raises:
        InvalidResponse: No path answered, the body did not parse, or it was not an array.
    """
    body = ""
    endpoint = config.base_url
    last_error = "no response"

    for path in LISTING_PATHS:
        endpoint = f"{config.base_url}{path}"
        try:
            response = await client.get(endpoint, headers=_HEADERS, timeout=config.listing_timeout)
            response.raise_for_status()
            body = response.text
        except (httpx.HTTPError, httpx.InvalidURL, OSError, ValueError, OverflowError, ExceptionGroup) as e:
            # Bad host/port values surface from the transport as these, not HTTPError
            logger.debug(f"Listing request to {endpoint} failed: {e}")
            last_error = str(e) or type(e).__name__
            continue

        if body.strip():
            break
        last_error = "empty body"

    if not body.strip():
        raise InvalidResponse(endpoint, last_error)

    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        raise InvalidResponse(endpoint, f"unparsable body: {e}")

    if not isinstance(data, list):
        raise InvalidResponse(endpoint, f"expected JSON array, got {type(data).__name__}")

    return data


__all__ = ["fetch_target_list", "fix_remote_websocket", "LISTING_PATHS"]
