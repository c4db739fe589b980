from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest

from targettap.services.cache import SENTINEL_NAME

ICON_BYTES = b"\x00\x00\x01\x00\x01\x00\x10\x10"


def target_entry(target_id: str, target_type: str, title: str, url: str) -> dict[str, Any]:
    return {
        "id": target_id,
        "type": target_type,
        "title": title,
        "url": url,
        "webSocketDebuggerUrl": f"ws://127.0.0.1:9222/devtools/page/{target_id}",
    }


LISTING = [
    target_entry("P2", "page", "Zeta", "https://zeta.example.com/app"),
    target_entry("P1", "page", "Alpha", "http://localhost:3000/"),
    target_entry("F1", "iframe", "Frame", "https://frames.widgets.org/embed"),
    target_entry("S1", "service_worker", "sw.js", "https://zeta.example.com/sw.js"),
    target_entry("W1", "shared_worker", "shared.js", "https://zeta.example.com/shared.js"),
    target_entry("O1", "other", "Other", ""),
]


class RecordingReporter:
    """Collects reported events."""

    def __init__(self):
        self.events: list[tuple[str, dict | None]] = []

    def send(self, name: str, properties: dict | None = None) -> None:
        self.events.append((name, properties))

    def names(self) -> list[str]:
        return [name for name, _ in self.events]


def devtools_handler(listing: Any = LISTING, icon: bytes = ICON_BYTES) -> Callable[[httpx.Request], httpx.Response]:
    """Handler serving a target listing and favicons for every site."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/json/list":
            return httpx.Response(200, json=listing)
        if request.url.path == "/favicon.ico":
            return httpx.Response(200, headers={"content-type": "image/x-icon"}, content=icon)
        return httpx.Response(404)

    return handler


@pytest.fixture
def icon_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "favicons"
    directory.mkdir()
    (directory / SENTINEL_NAME).touch()
    return directory


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def listing() -> list[dict[str, Any]]:
    return [dict(entry) for entry in LISTING]


@pytest.fixture
def make_handler() -> Callable[..., Callable[[httpx.Request], httpx.Response]]:
    return devtools_handler
