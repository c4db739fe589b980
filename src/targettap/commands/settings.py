"""Configuration display command."""

from targettap.app import app
from targettap.commands._utils import build_info_response
from targettap.config import get_config_manager, reload_config


@app.command(display="markdown")
def settings(state, reload: bool = False) -> dict:
    """Show the active DevTools endpoint settings.

    Args:
        reload: Re-read targettap.toml first (default: False)

    Returns:
        Settings in markdown
    """
    manager = reload_config() if reload else get_config_manager()
    config = manager.discovery_config()

    return build_info_response(
        title="Settings",
        fields={
            "Config file": str(manager.config_file) if manager.config_file else "(defaults)",
            "Endpoint": config.base_url,
            "Show workers": "yes" if config.show_workers else "no",
            "Listing timeout": f"{config.listing_timeout}s",
            "Icon directory": str(manager.icon_dir),
            "Icon timeout": f"{manager.icon_timeout}s",
        },
    )
