"""Route registration.

PUBLIC API:
  - include_routes: Register all API route modules with FastAPI app

Route Modules:
  - health.py: Liveness endpoint
  - targets.py: Target discovery and refresh
"""

from fastapi import FastAPI


def include_routes(app: FastAPI):
    """Include all route modules.

    Args:
        app: FastAPI application instance
    """
    from targettap.api.routes import health, targets

    app.include_router(health.router)
    app.include_router(targets.router)
