"""Main application entry point for targettap.

Provides dual REPL/MCP functionality for discovering Chrome DevTools Protocol
targets. Built on ReplKit2; commands share one TargetsProvider through the
application state.
"""

from dataclasses import dataclass, field

from replkit2 import App

from targettap.services import TargetsProvider


@dataclass
class TargetTapState:
    """Application state for targettap.

    Attributes:
        provider: Target provider wired to targettap.toml settings.
    """

    provider: TargetsProvider = field(default_factory=TargetsProvider.from_config)

    def cleanup(self) -> None:
        """Stop the provider loop thread."""
        self.provider.close()


# Must be created before command imports for decorator registration
app = App(
    "targettap",
    TargetTapState,
    uri_scheme="targettap",
    fastmcp={
        "description": "Chrome DevTools Protocol target discovery",
        "tags": {"browser", "debugging", "chrome", "cdp"},
    },
)


# Command imports trigger @app.command decorator registration
from targettap.commands import targets  # noqa: E402, F401
from targettap.commands import settings  # noqa: E402, F401
