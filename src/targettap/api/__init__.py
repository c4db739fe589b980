"""HTTP API for targettap.

PUBLIC API:
  - run_api_server: Run the API server in the foreground (blocking)
"""

from targettap.api.server import run_api_server

__all__ = ["run_api_server"]
