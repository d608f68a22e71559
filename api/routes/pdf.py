"""DSR generation endpoints."""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from api.dependencies import get_service
from core.errors import DSRError, RecordNotFound
from core.observability.logging import get_logger
from document_service.service import DSRService


router = APIRouter()
logger = get_logger(__name__)


class GenerateResponse(BaseModel):
    """Result of generating one DSR."""
    success: bool
    message: str
    pdf_path: Optional[str] = None


class SweepResponse(BaseModel):
    rendered: int
    failed: int
    outcomes: List[Dict[str, Any]]


def _error_response(status_code: int, show_id: str, error: DSRError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "message": f"Failed to generate DSR for show {show_id}",
            "error": str(error),
            "condition": error.condition,
        },
    )


@router.post("/generate/{show_id}", response_model=GenerateResponse)
async def generate_pdf(show_id: str, service: DSRService = Depends(get_service)):
    """Generate the DSR for one show and clear its regeneration flag."""
    try:
        ref = service.render_show_document(show_id)
    except RecordNotFound as e:
        return _error_response(404, show_id, e)
    except DSRError as e:
        logger.error(f"Error generating DSR for show {show_id}: {e}")
        return _error_response(500, show_id, e)

    return GenerateResponse(
        success=True,
        message="DSR generated successfully",
        pdf_path=ref.storage_uri,
    )


@router.post("/sweep", response_model=SweepResponse)
async def sweep_pending(service: DSRService = Depends(get_service)) -> SweepResponse:
    """Render every show flagged for regeneration."""
    outcomes = service.sweep_pending_renders()
    rendered = sum(1 for o in outcomes if o.succeeded)
    return SweepResponse(
        rendered=rendered,
        failed=len(outcomes) - rendered,
        outcomes=[o.model_dump(mode="json") for o in outcomes],
    )
