"""Health endpoint."""

import os
from typing import Any, Dict

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """Quick health check endpoint."""
    return {"status": "ok", "pid": os.getpid()}
