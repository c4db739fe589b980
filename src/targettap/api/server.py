"""API server lifecycle.

PUBLIC API:
  - run_api_server: Run the API server in the foreground (blocking)
"""

import logging

import uvicorn

import targettap.api.app as app_module
from targettap.api.routes import include_routes
from targettap.services import TargetsProvider

logger = logging.getLogger(__name__)


def create_api(provider: TargetsProvider | None = None):
    """Wire routes and the shared provider into the FastAPI app.

    Args:
        provider: Provider to serve. Defaults to one built from targettap.toml.

    Returns:
        The FastAPI application.
    """
    if not any(getattr(route, "path", None) == "/health" for route in app_module.api.routes):
        include_routes(app_module.api)

    app_module.app_state = provider or TargetsProvider.from_config()
    return app_module.api


def run_api_server(host: str = "127.0.0.1", port: int = 8766):
    """Run API server in foreground (blocking).

    Args:
        host: Host to bind to
        port: Port to bind to
    """
    api = create_api()
    logger.info(f"Serving targettap API on http://{host}:{port}")

    try:
        uvicorn.run(api, host=host, port=port, log_level="warning", access_log=False)
    except (SystemExit, KeyboardInterrupt):
        pass
    finally:
        app_module.app_state = None
        logger.info("API server stopped")
