"""In-memory store implementations.

Used by tests and by callers that already hold the data (e.g. a single
ad-hoc render from the API). Same contracts as the file-backed stores.
"""

import hashlib
from typing import Dict, Iterable, List, Optional

from core.errors import CatalogUnavailable, RecordNotFound, TemplateUnavailable
from models.equipment import EquipmentCatalogEntry
from models.refs import DocumentReference
from models.show import ShowRecord


class InMemoryShowStore:

    def __init__(self, records: Iterable[ShowRecord] = ()):
        self._records: Dict[str, ShowRecord] = {r.id: r for r in records}

    def get(self, show_id: str) -> ShowRecord:
        try:
            return self._records[show_id]
        except KeyError:
            raise RecordNotFound(f"Show with ID {show_id} not found") from None

    def get_all(self) -> List[ShowRecord]:
        return list(self._records.values())

    def save(self, record: ShowRecord) -> ShowRecord:
        self._records[record.id] = record
        return record

    def replace_all(self, records: List[ShowRecord]) -> None:
        self._records = {r.id: r for r in records}

    def set_regeneration_flag(self, show_id: str, flagged: bool) -> bool:
        record = self.get(show_id)
        self._records[show_id] = record.with_regeneration_flag(flagged)
        return True


class InMemoryCatalogStore:
    """Catalog held in a list. ``unavailable=True`` simulates a read failure."""

    def __init__(self, entries: Iterable[EquipmentCatalogEntry] = (), unavailable: bool = False):
        self.entries = list(entries)
        self.unavailable = unavailable

    def get_all(self) -> List[EquipmentCatalogEntry]:
        if self.unavailable:
            raise CatalogUnavailable("Equipment catalog unavailable")
        return list(self.entries)


class InMemoryTemplateStore:

    def __init__(self, templates: Optional[Dict[str, bytes]] = None):
        self.templates = dict(templates or {})

    def load(self, name: str) -> bytes:
        try:
            return self.templates[name]
        except KeyError:
            raise TemplateUnavailable(f"Template not found: {name}") from None


class InMemoryDocumentStore:

    def __init__(self):
        self.documents: Dict[str, bytes] = {}

    def save(self, show: ShowRecord, data: bytes) -> DocumentReference:
        self.documents[show.id] = data
        return DocumentReference(
            show_id=show.id,
            storage_uri=f"memory://{show.folder_name}/dsr.pdf",
            content_hash=hashlib.sha256(data).hexdigest(),
            size_bytes=len(data),
        )
