"""Configuration management for targettap.

Handles remote endpoint settings and discovery options from targettap.toml.
"""

import logging
import re
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_HOSTNAME = "localhost"
DEFAULT_PORT = 9222
DEFAULT_LISTING_TIMEOUT = 5.0
DEFAULT_ICON_TIMEOUT = 1.0
DEFAULT_ICON_DIR = Path(__file__).parent / "resources" / "favicons"

logger = logging.getLogger(__name__)

_HOSTNAME = re.compile(r"^(?:[A-Za-z0-9._-]+|\[[0-9A-Fa-f:.]+\])$")


@dataclass(frozen=True)
class DiscoveryConfig:
    """Inputs for one discovery pass.

    Attributes:
        hostname: Remote DevTools host.
        port: Remote DevTools port.
        use_https: Query the listing endpoint over https.
        show_workers: Include service_worker and shared_worker targets.
        listing_timeout: Seconds to wait for the listing endpoint.
    """

    hostname: str = DEFAULT_HOSTNAME
    port: int = DEFAULT_PORT
    use_https: bool = False
    show_workers: bool = False
    listing_timeout: float = DEFAULT_LISTING_TIMEOUT

    @property
    def base_url(self) -> str:
        protocol = "https" if self.use_https else "http"
        return f"{protocol}://{self.hostname}:{self.port}"


def _find_config_file() -> Optional[Path]:
    """Find targettap.toml in current or parent directories."""
    current = Path.cwd()

    for parent in [current] + list(current.parents):
        config_file = parent / "targettap.toml"
        if config_file.exists():
            return config_file

    return None


def _load_config(path: Optional[Path] = None) -> dict:
    """Load raw configuration from file."""
    if path is None:
        path = _find_config_file()

    if path is None or not path.exists():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


class ConfigManager:
    """Manages configuration for targettap."""

    def __init__(self, path: Optional[Path] = None):
        self._config_file = path or _find_config_file()
        self.data = _load_config(self._config_file)
        self._remote = self.data.get("remote", {})
        self._targets = self.data.get("targets", {})

    @property
    def config_file(self) -> Optional[Path]:
        return self._config_file

    @property
    def hostname(self) -> str:
        value = str(self._remote.get("hostname", DEFAULT_HOSTNAME)).strip()
        if not _HOSTNAME.match(value):
            logger.warning(f"Invalid remote hostname {value!r}, using {DEFAULT_HOSTNAME}")
            return DEFAULT_HOSTNAME
        return value

    @property
    def port(self) -> int:
        value = self._remote.get("port", DEFAULT_PORT)
        try:
            port = int(value)
        except (TypeError, ValueError):
            port = 0
        if not 1 <= port <= 65535:
            logger.warning(f"Invalid remote port {value!r}, using {DEFAULT_PORT}")
            return DEFAULT_PORT
        return port

    @property
    def use_https(self) -> bool:
        return bool(self._remote.get("use_https", False))

    @property
    def listing_timeout(self) -> float:
        return float(self._remote.get("timeout", DEFAULT_LISTING_TIMEOUT))

    @property
    def show_workers(self) -> bool:
        return bool(self._targets.get("show_workers", False))

    @property
    def icon_dir(self) -> Path:
        """Icon cache directory, relative paths resolved against the config file."""
        value = self._targets.get("icon_dir")
        if not value:
            return DEFAULT_ICON_DIR

        path = Path(value).expanduser()
        if not path.is_absolute() and self._config_file:
            path = self._config_file.parent / path
        return path

    @property
    def icon_timeout(self) -> float:
        return float(self._targets.get("icon_timeout", DEFAULT_ICON_TIMEOUT))

    def discovery_config(self) -> DiscoveryConfig:
        """Build the settings for one discovery pass."""
        return DiscoveryConfig(
            hostname=self.hostname,
            port=self.port,
            use_https=self.use_https,
            show_workers=self.show_workers,
            listing_timeout=self.listing_timeout,
        )


# Global instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def reload_config() -> ConfigManager:
    """Drop the cached config manager and read targettap.toml again."""
    global _config_manager
    _config_manager = None
    return get_config_manager()


def get_discovery_config() -> DiscoveryConfig:
    """Get discovery settings from the active configuration."""
    return get_config_manager().discovery_config()
