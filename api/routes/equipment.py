"""Equipment catalog endpoints."""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from api.dependencies import get_service
from core.errors import CatalogUnavailable
from document_service.service import DSRService
from equipment_resolver.formatting import format_equipment_lines


router = APIRouter()


class ExpandRequest(BaseModel):
    """Request to expand a raw equipment list."""
    equipment_list: Optional[str] = Field(None, description="e.g. '2 x ClubMax 1800 RGB; 1 x Atom 9000 RGB;'")


class ExpandResponse(BaseModel):
    """Expanded line items and their display lines."""
    items: List[Dict[str, Any]]
    formatted: List[str]


@router.get("")
async def list_equipment(service: DSRService = Depends(get_service)) -> List[Dict[str, Any]]:
    try:
        entries = service.list_equipment()
    except CatalogUnavailable as e:
        raise HTTPException(status_code=500, detail=str(e)) from e
    return [entry.model_dump() for entry in entries]


@router.post("/expand", response_model=ExpandResponse)
async def expand_equipment(
    request: ExpandRequest,
    service: DSRService = Depends(get_service),
) -> ExpandResponse:
    """Resolve an equipment list against the catalog."""
    try:
        lines = service.expand_equipment_list(request.equipment_list)
    except CatalogUnavailable as e:
        raise HTTPException(status_code=500, detail=str(e)) from e

    return ExpandResponse(
        items=[line.model_dump(mode="json") for line in lines],
        formatted=format_equipment_lines(lines),
    )
