"""Reference models for rendered documents and sweep outcomes."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class DocumentReference(BaseModel):
    """Reference to a rendered DSR with metadata for retrieval and verification.

    Attributes:
        show_id: Show the document was rendered for
        storage_uri: Absolute file path to the document
        content_hash: SHA256 hash of the content for integrity verification
        content_type: MIME type
        size_bytes: Size of the document in bytes
        stored_at: Timestamp when the document was written
    """
    show_id: str = Field(..., description="Show identifier")
    storage_uri: str = Field(..., description="Absolute file path to the document")
    content_hash: str = Field(..., description="SHA256 hash of content")
    content_type: str = Field(default="application/pdf", description="MIME type")
    size_bytes: int = Field(..., description="Size in bytes")
    stored_at: datetime = Field(default_factory=datetime.utcnow, description="Storage timestamp")


class RenderStatus(str, Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class RenderOutcome(BaseModel):
    """Result of rendering one show during a regeneration sweep.

    Attributes:
        show_id: Show identifier
        show_name: Show name (for reporting)
        status: SUCCESS or FAILED
        document: Reference to the written DSR on success
        condition: Error condition name on failure (e.g. "TemplateUnavailable")
        error: Error message on failure
    """
    show_id: str
    show_name: Optional[str] = None
    status: RenderStatus
    document: Optional[DocumentReference] = None
    condition: Optional[str] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == RenderStatus.SUCCESS
