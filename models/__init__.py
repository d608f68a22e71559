"""Models Package.

Data models for the DSR generator:
- Show catalog records
- Equipment catalog entries and parsed equipment lines
- Rendered document references and sweep outcomes
"""

from models.show import (
    ShowRecord,
    REGENERATION_FLAG_COLUMN,
    parse_yes_no,
)

from models.equipment import (
    EquipmentCatalogEntry,
    ParsedEquipmentLine,
    LineOutcome,
    MatchType,
)

from models.refs import (
    DocumentReference,
    RenderOutcome,
    RenderStatus,
)

__all__ = [
    # Shows
    "ShowRecord",
    "REGENERATION_FLAG_COLUMN",
    "parse_yes_no",
    # Equipment
    "EquipmentCatalogEntry",
    "ParsedEquipmentLine",
    "LineOutcome",
    "MatchType",
    # References
    "DocumentReference",
    "RenderOutcome",
    "RenderStatus",
]
