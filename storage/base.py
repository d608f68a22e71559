"""Store protocols consumed by the DSR core.

The core never assumes a serialization. CSV-backed implementations live in
``storage.csv_store``, file-backed template/document stores in
``storage.artifacts``, in-memory ones in ``storage.memory``.
"""

from typing import List, Protocol

from models.equipment import EquipmentCatalogEntry
from models.refs import DocumentReference
from models.show import ShowRecord


class ShowStore(Protocol):
    """Key-indexed access to the show catalog."""

    def get(self, show_id: str) -> ShowRecord:
        """Return one show. Raises RecordNotFound for unknown ids."""
        ...

    def get_all(self) -> List[ShowRecord]:
        ...

    def save(self, record: ShowRecord) -> ShowRecord:
        """Replace the record with the same id, or append it."""
        ...

    def replace_all(self, records: List[ShowRecord]) -> None:
        ...

    def set_regeneration_flag(self, show_id: str, flagged: bool) -> bool:
        """Set the flag for one show. Raises RecordNotFound for unknown ids."""
        ...


class CatalogStore(Protocol):
    """Read-only equipment catalog."""

    def get_all(self) -> List[EquipmentCatalogEntry]:
        """Raises CatalogUnavailable if the catalog cannot be read."""
        ...


class TemplateStore(Protocol):

    def load(self, name: str) -> bytes:
        """Raises TemplateUnavailable if the template does not exist."""
        ...


class DocumentStore(Protocol):

    def save(self, show: ShowRecord, data: bytes) -> DocumentReference:
        """Write a rendered DSR, overwriting any previous one for the show.

        Raises PersistFailure if the document cannot be written.
        """
        ...
