"""Health check endpoints."""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from api.dependencies import get_service
from core import __version__
from core.errors import TemplateUnavailable
from document_service.service import DSRService


router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    version: str


class StatusResponse(BaseModel):
    status: str
    message: str


class ReadinessResponse(BaseModel):
    status: str
    template: str
    error: Optional[str] = None


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.utcnow().isoformat(),
        version=__version__,
    )


@router.get("/api/status", response_model=StatusResponse)
async def api_status() -> StatusResponse:
    return StatusResponse(status="OK", message="DSR Generator API is running")


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(service: DSRService = Depends(get_service)):
    """Ready once the DSR template can be loaded; 503 otherwise."""
    try:
        service.templates.load(service.template_name)
    except TemplateUnavailable as e:
        body = ReadinessResponse(status="not_ready", template=service.template_name, error=str(e))
        return JSONResponse(status_code=503, content=body.model_dump())
    return ReadinessResponse(status="ready", template=service.template_name)
