"""Favicon download for page targets.

Each attempt is raced against a short timer so one slow site cannot hold up
a discovery pass. An attempt that loses the race keeps running in the
background; whatever it produces is ignored.

PUBLIC API:
  - IconFetcher: Bounded-time favicon download into the icon cache directory
  - derive_favicon_location: Map a page URL to its favicon URL and cache filename
"""

import asyncio
import logging
import os
import re
import uuid
from pathlib import Path

import httpx

from targettap.config import DEFAULT_ICON_TIMEOUT

logger = logging.getLogger(__name__)

# Example: https://docs.microsoft.com/en-us/microsoft-edge/
#   group(1) = ".microsoft.com/"
#   group(2) = "microsoft"
_SITE_ROOT = re.compile(r"((?://|\.)([^.]*)\.[^.^/]+/).*")
_SAFE_LABEL = re.compile(r"^[A-Za-z0-9_-]+$")

_DOWNLOAD_TIMEOUT = 5.0


def derive_favicon_location(url: str) -> tuple[str, str] | None:
    """Derive the site-root favicon URL and the local filename for a page.

    Args:
        url: Page URL.

    Returns:
        Tuple of (favicon_url, filename), or None if the URL has no recognizable
        site root or the site label is not usable as a filename.

    Examples:
        >>> derive_favicon_location("https://docs.microsoft.com/en-us/microsoft-edge/")
        ('https://docs.microsoft.com/favicon.ico', 'microsoftFavicon.ico')
    """
    match = _SITE_ROOT.search(url)
    if not match:
        return None

    label = match.group(2)
    if not _SAFE_LABEL.match(label):
        return None

    favicon_url = f"{url[: match.start()]}{match.group(1)}favicon.ico"
    return favicon_url, f"{label}Favicon.ico"


class IconFetcher:
    """Downloads site favicons into the icon cache directory.

    fetch() never raises: network errors, non-icon responses, empty bodies,
    file errors and timeouts all resolve to None.

    Attributes:
        icon_dir: Directory icons are written to.
        timeout: Seconds an attempt may take before it is abandoned.
    """

    def __init__(
        self,
        icon_dir: Path,
        timeout: float = DEFAULT_ICON_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize icon fetcher.

        Args:
            icon_dir: Icon cache directory. Must exist.
            timeout: Race timer in seconds. Defaults to 1 second.
            transport: Optional httpx transport, used by tests.
        """
        self.icon_dir = Path(icon_dir)
        self.timeout = timeout
        self._transport = transport
        self._background: set[asyncio.Task] = set()

    @property
    def background_count(self) -> int:
        """Number of abandoned attempts still running."""
        return len(self._background)

    async def fetch(self, page_url: str) -> Path | None:
        """Fetch the favicon for a page within the time budget.

        Args:
            page_url: URL of the page target.

        Returns:
            Path of the written icon file, or None.
        """
        if not page_url or not page_url.startswith("https"):
            return None

        location = derive_favicon_location(page_url)
        if location is None:
            return None

        favicon_url, filename = location
        attempt = asyncio.create_task(self._download(favicon_url, self.icon_dir / filename))
        timer = asyncio.create_task(asyncio.sleep(self.timeout))

        done, _ = await asyncio.wait({attempt, timer}, return_when=asyncio.FIRST_COMPLETED)

        if attempt not in done:
            logger.debug(f"Favicon fetch for {favicon_url} exceeded {self.timeout}s, abandoning")
            self._detach(attempt)
            return None

        timer.cancel()
        try:
            return attempt.result()
        except Exception as e:
            logger.debug(f"Favicon fetch for {favicon_url} failed: {e}")
            return None

    def _detach(self, task: asyncio.Task) -> None:
        """Keep a reference to an abandoned attempt until it settles."""
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _download(self, favicon_url: str, file_path: Path) -> Path | None:
        """GET the favicon and stream it to file_path."""
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=_DOWNLOAD_TIMEOUT) as client:
                async with client.stream("GET", favicon_url) as response:
                    content_type = response.headers.get("content-type", "")
                    if "icon" not in content_type.lower():
                        logger.debug(f"Skipping {favicon_url}: content-type {content_type or 'missing'}")
                        return None
                    return await self._write(response, file_path)
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as e:
            logger.debug(f"Favicon download from {favicon_url} failed: {e}")
            return None

    async def _write(self, response: httpx.Response, file_path: Path) -> Path | None:
        """Stream the body to a temp file, then move it into place.

        Two targets on the same site share a filename, so the final file only
        ever appears complete.
        """
        part = file_path.with_name(f".{file_path.name}.{uuid.uuid4().hex}.part")
        written = 0
        try:
            with open(part, "wb") as f:
                async for chunk in response.aiter_bytes():
                    f.write(chunk)
                    written += len(chunk)

            if not written:
                logger.debug(f"Empty favicon body for {file_path.name}")
                return None

            os.replace(part, file_path)
            return file_path
        finally:
            part.unlink(missing_ok=True)


__all__ = ["IconFetcher", "derive_favicon_location"]
