"""Configuration API endpoints"""

from __future__ import annotations

import os
from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from services.config_manager import ConfigManager
from services.format_service import get_format_service
from services.placeholders import PlaceholderContext

router = APIRouter()


class ConfigUpdateRequest(BaseModel):
    """Request to update configuration"""

    executable: str | None = None
    config: str | None = None
    languages: list[str] | None = None
    timeout: float | None = None


class ConfigResponse(BaseModel):
    """Configuration response"""

    executable: str
    config: str | None
    languages: list[str]
    timeout: float | None
    resolved_executable: str
    resolved_config: str | None


class ValidateResponse(BaseModel):
    """Validation response"""

    valid: bool
    message: str
    executable: str


@router.get("", response_model=ConfigResponse)
async def get_config(workspace_root: str | None = None) -> ConfigResponse:
    """Get current configuration with placeholders resolved"""
    config_manager = ConfigManager.get_instance()
    config = config_manager.get_config()
    context = PlaceholderContext(workspace_root=workspace_root)

    return ConfigResponse(
        executable=config.get("executable") or "",
        config=config.get("config"),
        languages=config.get("languages", []),
        timeout=config.get("timeout"),
        resolved_executable=config_manager.get_executable_path(context),
        resolved_config=config_manager.get_config_path(context),
    )


@router.put("")
async def update_config(request: ConfigUpdateRequest) -> dict[str, Any]:
    """Update configuration"""
    config_manager = ConfigManager.get_instance()
    current_config = config_manager.get_config()

    # Update only provided fields
    updates = request.model_dump(exclude_unset=True)
    if "languages" in updates and not updates["languages"]:
        raise HTTPException(status_code=400, detail="At least one language is required")
    if "timeout" in updates and updates["timeout"] is not None and updates["timeout"] <= 0:
        raise HTTPException(status_code=400, detail="Timeout must be positive")

    current_config.update(updates)

    try:
        config_manager.save_config(current_config)
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail=str(e))

    if "executable" in updates:
        get_format_service().bin_cache.clear()

    return {"status": "success", "message": "Configuration updated"}


@router.post("/validate", response_model=ValidateResponse)
async def validate_config(workspace_root: str | None = None) -> ValidateResponse:
    """Check that the configured formatter executable can be found"""
    config_manager = ConfigManager.get_instance()
    context = PlaceholderContext(workspace_root=workspace_root)
    executable = config_manager.get_executable_path(context)
    bin_path = get_format_service().bin_cache.resolve(executable)

    if not os.path.exists(bin_path):
        return ValidateResponse(
            valid=False,
            message=f"The '{bin_path}' command is not available",
            executable=bin_path,
        )

    config_path = config_manager.get_config_path(context)
    if config_path and not os.path.exists(config_path):
        return ValidateResponse(
            valid=False,
            message=f"Config file '{config_path}' does not exist",
            executable=bin_path,
        )

    return ValidateResponse(
        valid=True,
        message=f"Found formatter at {bin_path}",
        executable=bin_path,
    )
