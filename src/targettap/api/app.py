"""FastAPI application and shared API state.

PUBLIC API:
  - api: FastAPI application instance
  - app_state: Provider shared by all routes, set by the server at startup
"""

from fastapi import FastAPI

from targettap.services import TargetsProvider

api = FastAPI(title="targettap", description="Chrome DevTools Protocol target discovery")

app_state: TargetsProvider | None = None
