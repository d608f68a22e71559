"""File storage for DSR templates and rendered documents.

Rendered documents are written whole and described by a content-hashed
DocumentReference.
"""

import hashlib
from datetime import datetime
from pathlib import Path

from core.errors import PersistFailure, TemplateUnavailable
from models.refs import DocumentReference
from models.show import ShowRecord


DSR_FILENAME = "dsr.pdf"


def _compute_sha256(data: bytes) -> str:
    """Compute SHA256 hash of bytes."""
    return hashlib.sha256(data).hexdigest()


def put_binary(data: bytes, path: Path, show_id: str,
               content_type: str = "application/pdf",
               ensure_parent: bool = True) -> DocumentReference:
    """Store binary data and return a DocumentReference.

    Args:
        data: Binary data to store
        path: Absolute file path where the document will be stored
        show_id: Show the document belongs to
        content_type: MIME type of the data
        ensure_parent: Create parent directories if they don't exist

    Returns:
        DocumentReference with metadata for retrieval
    """
    if ensure_parent:
        path.parent.mkdir(parents=True, exist_ok=True)

    path.write_bytes(data)

    return DocumentReference(
        show_id=show_id,
        storage_uri=str(path.absolute()),
        content_hash=_compute_sha256(data),
        content_type=content_type,
        size_bytes=len(data),
        stored_at=datetime.utcnow(),
    )


class FileTemplateStore:
    """Templates stored as files in one directory."""

    def __init__(self, templates_dir: Path):
        self.templates_dir = Path(templates_dir)

    def path_for(self, name: str) -> Path:
        return self.templates_dir / name

    def load(self, name: str) -> bytes:
        path = self.path_for(name)
        try:
            return path.read_bytes()
        except OSError as e:
            raise TemplateUnavailable(f"Template not found: {path}", cause=e) from e


class FileDocumentStore:
    """Rendered DSRs stored as ``<shows_dir>/<id>-<safe name>/dsr.pdf``."""

    def __init__(self, shows_dir: Path):
        self.shows_dir = Path(shows_dir)

    def path_for(self, show: ShowRecord) -> Path:
        return self.shows_dir / show.folder_name / DSR_FILENAME

    def save(self, show: ShowRecord, data: bytes) -> DocumentReference:
        path = self.path_for(show)
        try:
            return put_binary(data, path, show_id=show.id)
        except OSError as e:
            raise PersistFailure(f"Could not write DSR to {path}", cause=e) from e
