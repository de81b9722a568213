"""Configuration and status routes."""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ...app import Application
from ...errors import ConfigurationError


class StatusResponse(BaseModel):
    """Response model for service status."""

    configured: bool
    require_patient_info: bool
    default_language: str
    active_sessions: int


class ConfigureRequest(BaseModel):
    """Request model for supplying the API key."""

    api_key: str


def create_control_router(app: Application) -> APIRouter:
    """Create control router."""
    router = APIRouter(prefix="/api", tags=["control"])

    @router.get("/status", response_model=StatusResponse)
    async def get_status() -> dict:
        """Report whether sessions can be started."""
        return {
            "configured": app.is_configured,
            "require_patient_info": app.require_patient_info,
            "default_language": app.default_language.value,
            "active_sessions": len(app.sessions),
        }

    @router.post("/configure", response_model=StatusResponse)
    async def configure(request: ConfigureRequest) -> dict:
        """Connect the chat backend with a user-supplied key."""
        try:
            app.configure(request.api_key)
        except ConfigurationError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return await get_status()

    return router
