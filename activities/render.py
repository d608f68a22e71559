"""DSR rendering activities.

Activities for the regeneration sweep workflow:
- list_pending_shows: ids of shows whose regeneration flag is set
- render_show: render, persist and un-flag one show
"""

from dataclasses import dataclass, field
from typing import List, Optional

from temporalio import activity
from temporalio.exceptions import ApplicationError

from core.config import get_settings
from core.errors import DSRError, RecordNotFound
from core.observability.logging import with_correlation
from document_service.service import DSRService, build_service


_service: Optional[DSRService] = None


def configure_service(service: Optional[DSRService]) -> None:
    """Set the service used by the activities (None resets to settings-based)."""
    global _service
    _service = service


def get_service() -> DSRService:
    global _service
    if _service is None:
        _service = build_service(get_settings())
    return _service


@dataclass
class ListPendingShowsOutput:
    """Output from list_pending_shows activity.

    Attributes:
        show_ids: Flagged show ids in catalog order
    """
    show_ids: List[str] = field(default_factory=list)


@dataclass
class RenderShowInput:
    """Input for render_show activity."""
    show_id: str


@dataclass
class RenderShowOutput:
    """Output from render_show activity.

    Attributes:
        show_id: Rendered show
        document_path: Where the DSR was written
        content_hash: SHA256 of the written document
        size_bytes: Size of the written document
    """
    show_id: str
    document_path: str
    content_hash: str
    size_bytes: int


def _activity_correlation(show_id: Optional[str] = None) -> dict:
    info = activity.info()
    return {
        "show_id": show_id,
        "workflow_id": info.workflow_id,
        "workflow_run_id": info.workflow_run_id,
        "activity_id": info.activity_id,
        "activity_name": info.activity_type,
        "task_queue": info.task_queue,
    }


@activity.defn
async def list_pending_shows() -> ListPendingShowsOutput:
    """List shows flagged for DSR regeneration."""
    with with_correlation(**_activity_correlation()):
        show_ids = get_service().pending_show_ids()

    activity.logger.info(f"Found {len(show_ids)} shows needing DSR regeneration")
    return ListPendingShowsOutput(show_ids=show_ids)


@activity.defn
async def render_show(input: RenderShowInput) -> RenderShowOutput:
    """Render the DSR for one show and clear its regeneration flag.

    Args:
        input: RenderShowInput with the show id

    Returns:
        RenderShowOutput describing the written document

    Raises:
        ApplicationError: Typed with the failure condition; non-retryable
            when the show does not exist
    """
    activity.logger.info(f"Rendering DSR for show {input.show_id}")

    with with_correlation(**_activity_correlation(input.show_id)):
        try:
            ref = get_service().render_show_document(input.show_id)
        except RecordNotFound as e:
            raise ApplicationError(str(e), type=e.condition, non_retryable=True) from e
        except DSRError as e:
            raise ApplicationError(str(e), type=e.condition) from e

    activity.logger.info(f"✓ DSR for show {input.show_id} written to {ref.storage_uri}")
    return RenderShowOutput(
        show_id=input.show_id,
        document_path=ref.storage_uri,
        content_hash=ref.content_hash,
        size_bytes=ref.size_bytes,
    )
