"""CSV-backed show and equipment catalogs.

Both files are treated as small key-value stores: every read parses the
whole file and every write rewrites it. There is no locking; concurrent
writers to the same file race and the last writer wins.
"""

import csv
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from pydantic import ValidationError

from core.errors import CatalogUnavailable, RecordNotFound
from core.observability.logging import get_logger
from models.equipment import EquipmentCatalogEntry
from models.show import REGENERATION_FLAG_COLUMN, ShowRecord


logger = get_logger(__name__)


def read_csv_rows(path: Path) -> List[Dict[str, str]]:
    """Read a CSV file into a list of dicts keyed by header.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with open(path, newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        # Cells beyond the header land under the None key; drop them
        return [
            {k: v for k, v in row.items() if k is not None}
            for row in reader
        ]


def read_csv_header(path: Path) -> List[str]:
    if not path.exists():
        return []
    with open(path, newline="", encoding="utf-8-sig") as f:
        reader = csv.reader(f)
        return next(reader, [])


def write_csv_rows(path: Path, rows: List[Dict[str, str]], header: Iterable[str] = ()) -> None:
    """Rewrite a CSV file, keeping ``header`` order and appending new columns."""
    fieldnames = list(header)
    for row in rows:
        for key in row:
            if key not in fieldnames:
                fieldnames.append(key)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames, restval="")
        writer.writeheader()
        writer.writerows(rows)


class CsvShowStore:
    """Show catalog backed by ``shows.csv``."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def get_all(self) -> List[ShowRecord]:
        if not self.path.exists():
            return []
        return [ShowRecord.model_validate(row) for row in read_csv_rows(self.path) if row.get("id")]

    def get(self, show_id: str) -> ShowRecord:
        for record in self.get_all():
            if record.id == show_id:
                return record
        raise RecordNotFound(f"Show with ID {show_id} not found")

    def save(self, record: ShowRecord) -> ShowRecord:
        records = self.get_all()
        for i, existing in enumerate(records):
            if existing.id == record.id:
                records[i] = record
                break
        else:
            records.append(record)
        self._write(records)
        return record

    def replace_all(self, records: List[ShowRecord]) -> None:
        self._write(records)

    def set_regeneration_flag(self, show_id: str, flagged: bool) -> bool:
        records = self.get_all()
        for i, record in enumerate(records):
            if record.id == show_id:
                records[i] = record.with_regeneration_flag(flagged)
                break
        else:
            raise RecordNotFound(f"Show with ID {show_id} not found")

        self._write(records)
        logger.info(
            f"Updated {REGENERATION_FLAG_COLUMN} flag to {str(flagged).lower()} for show {show_id}",
            extra_fields={"show_id": show_id},
        )
        return True

    def _write(self, records: List[ShowRecord]) -> None:
        header = read_csv_header(self.path)
        if REGENERATION_FLAG_COLUMN not in header and header:
            header.append(REGENERATION_FLAG_COLUMN)
        write_csv_rows(self.path, [r.to_row() for r in records], header=header)


class CsvCatalogStore:
    """Equipment catalog backed by ``equipment.csv``. Read-only."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def get_all(self) -> List[EquipmentCatalogEntry]:
        try:
            rows = read_csv_rows(self.path)
        except (OSError, csv.Error, UnicodeDecodeError) as e:
            raise CatalogUnavailable(f"Equipment catalog unreadable: {self.path}", cause=e) from e

        entries = []
        for line_no, row in enumerate(rows, start=2):
            entry = self._parse_row(row, line_no)
            if entry is not None:
                entries.append(entry)

        logger.debug(f"Loaded {len(entries)} equipment items from {self.path}")
        return entries

    def _parse_row(self, row: Dict[str, str], line_no: int) -> Optional[EquipmentCatalogEntry]:
        try:
            return EquipmentCatalogEntry.model_validate(row)
        except ValidationError as e:
            logger.warning(f"Skipping malformed equipment row {line_no}: {e}")
            return None
