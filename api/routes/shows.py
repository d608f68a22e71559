"""Show catalog endpoints.

Records travel as JSON objects keyed by CSV column name. Every mutation
flags the affected shows for DSR regeneration.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from api.dependencies import get_service
from core.errors import DuplicateRecord, RecordNotFound
from document_service.service import DSRService
from models.show import ShowRecord


router = APIRouter()


def _parse_record(body: Dict[str, Any]) -> ShowRecord:
    try:
        return ShowRecord.model_validate(body)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


@router.get("")
async def list_shows(service: DSRService = Depends(get_service)) -> List[Dict[str, Any]]:
    """List all shows."""
    return [record.field_values() for record in service.list_shows()]


@router.get("/{show_id}")
async def get_show(show_id: str, service: DSRService = Depends(get_service)) -> Dict[str, Any]:
    try:
        return service.get_show(show_id).field_values()
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.post("", status_code=201)
async def add_show(
    body: Dict[str, Any],
    service: DSRService = Depends(get_service),
) -> Dict[str, Any]:
    """Append a show to the catalog."""
    record = _parse_record(body)
    try:
        return service.add_show(record).field_values()
    except DuplicateRecord as e:
        raise HTTPException(status_code=409, detail=str(e)) from e


@router.put("/{show_id}")
async def update_show(
    show_id: str,
    body: Dict[str, Any],
    service: DSRService = Depends(get_service),
) -> Dict[str, Any]:
    """Replace one show wholesale; the id in the path wins."""
    record = _parse_record({**body, "id": show_id})
    try:
        return service.save_show(show_id, record).field_values()
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.put("")
async def replace_shows(
    body: List[Dict[str, Any]],
    service: DSRService = Depends(get_service),
) -> Dict[str, Any]:
    """Bulk-replace the catalog. Every show is flagged for regeneration."""
    records = [_parse_record(item) for item in body]
    try:
        flagged = service.replace_all_shows(records)
    except DuplicateRecord as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return {"success": True, "count": len(flagged)}
