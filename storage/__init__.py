"""Storage layer for the DSR generator.

- base: store protocols consumed by the core
- csv_store: shows.csv / equipment.csv backed stores
- artifacts: template and rendered-document files
- memory: in-memory implementations of every store
"""

from storage.base import ShowStore, CatalogStore, TemplateStore, DocumentStore
from storage.csv_store import CsvShowStore, CsvCatalogStore
from storage.artifacts import FileTemplateStore, FileDocumentStore, put_binary
from storage.memory import (
    InMemoryShowStore,
    InMemoryCatalogStore,
    InMemoryTemplateStore,
    InMemoryDocumentStore,
)

__all__ = [
    "ShowStore",
    "CatalogStore",
    "TemplateStore",
    "DocumentStore",
    "CsvShowStore",
    "CsvCatalogStore",
    "FileTemplateStore",
    "FileDocumentStore",
    "put_binary",
    "InMemoryShowStore",
    "InMemoryCatalogStore",
    "InMemoryTemplateStore",
    "InMemoryDocumentStore",
]
