"""targettap - Chrome DevTools Protocol target discovery.

Lists the debuggable targets (pages, iframes, workers) a browser exposes on
its remote debugging port, adds site favicons to pages, and orders the result
for display. Usable as a REPL, an MCP server or an HTTP API.

PUBLIC API:
  - app: Main ReplKit2 App instance
  - main: Entry point function for CLI
  - __version__: Package version string
"""

import atexit
import sys
from importlib.metadata import version

from targettap.app import app

__version__ = version("targettap")

atexit.register(lambda: app.state.cleanup() if hasattr(app, "state") and app.state else None)


def _handle_serve():
    """Handle serve subcommand (targettap serve [host] [port])."""
    from targettap.api.server import run_api_server

    host = sys.argv[2] if len(sys.argv) > 2 else "127.0.0.1"
    try:
        port = int(sys.argv[3]) if len(sys.argv) > 3 else 8766
    except ValueError:
        print(f"Invalid port: {sys.argv[3]}")
        print("Usage: targettap serve [host] [port]")
        sys.exit(1)

    run_api_server(host=host, port=port)


CLI_SUBCOMMANDS = {
    "serve": _handle_serve,
}


def main():
    """Entry point for targettap.

    Modes are auto-detected:
    - Subcommand (e.g., `targettap serve`): Runs the HTTP API
    - Interactive terminal (TTY): Starts REPL mode
    - Pipe/redirect (no TTY): Starts MCP server mode
    """
    if len(sys.argv) > 1 and sys.argv[1] in CLI_SUBCOMMANDS:
        CLI_SUBCOMMANDS[sys.argv[1]]()
        return

    if sys.stdin.isatty():
        app.run(title="targettap - DevTools target discovery")
    else:
        app.mcp.run()


__all__ = ["app", "main", "__version__"]
