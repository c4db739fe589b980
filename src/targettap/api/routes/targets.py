"""Target discovery endpoints."""

from typing import Any, Dict

from fastapi import APIRouter, HTTPException

import targettap.api.app as app_module
from targettap.services.discovery import DiscoveryResult

router = APIRouter()


def _result_payload(result: DiscoveryResult) -> Dict[str, Any]:
    return {
        "targets": [target.to_dict() for target in result.targets],
        "error": str(result.error) if result.error else None,
        "warnings": list(result.warnings),
    }


@router.get("/targets")
async def get_targets() -> Dict[str, Any]:
    """Run a discovery pass and return the ordered targets."""
    if not app_module.app_state:
        return {"targets": [], "error": "targettap not initialized", "warnings": []}

    result = await app_module.app_state.discover()
    return _result_payload(result)


@router.post("/targets/refresh")
async def refresh_targets() -> Dict[str, Any]:
    """Clear the icon cache and rediscover."""
    if not app_module.app_state:
        return {"targets": [], "error": "targettap not initialized", "warnings": []}

    result = await app_module.app_state.refresh()
    return _result_payload(result)


@router.get("/targets/{target_id}/properties")
async def get_target_properties(target_id: str) -> Dict[str, Any]:
    """Detail rows of a target from the last discovery pass."""
    provider = app_module.app_state
    if not provider or not provider.last_result:
        raise HTTPException(status_code=404, detail="No discovery has run yet")

    target = provider.last_result.find(target_id)
    if target is None:
        raise HTTPException(status_code=404, detail=f"Target {target_id} not found")

    children = await provider.get_children(target)
    return {
        "id": target.id,
        "label": target.label,
        "properties": [{"name": prop.name, "value": prop.value} for prop in children],
    }
