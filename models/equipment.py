"""Equipment catalog and parsed equipment line models.

- EquipmentCatalogEntry: one row of ``equipment.csv`` (reference data)
- ParsedEquipmentLine: one ``<qty> x <description>`` token after resolution
- LineOutcome / MatchType: how a line was (or was not) resolved
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.functional_validators import BeforeValidator
from typing_extensions import Annotated


def _parse_wavelengths(value) -> List[str]:
    """Accept a list or the CSV form '638nm, 520nm, 450nm'."""
    if value is None:
        return []
    if isinstance(value, str):
        return [w.strip() for w in value.split(",") if w.strip()]
    return [str(w).strip() for w in value if str(w).strip()]


def _blank_to_none(value):
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def _none_to_blank(value):
    if value is None:
        return ""
    return str(value).strip()


WavelengthList = Annotated[List[str], BeforeValidator(_parse_wavelengths)]
OptionalText = Annotated[Optional[str], BeforeValidator(_blank_to_none)]
RequiredText = Annotated[str, BeforeValidator(_none_to_blank)]


class LineOutcome(str, Enum):
    """Tri-state result of resolving one equipment line."""
    RESOLVED = "resolved"
    NOT_FOUND = "not_found"
    UNPARSEABLE = "unparseable"


class MatchType(str, Enum):
    """Which tier of the matching cascade produced the match."""
    EXACT = "exact"              # "<brand> <model>" equals the description
    BRAND_MODEL = "brand_model"  # brand present plus full or partial model
    SUBSTRING = "substring"      # containment either direction
    NO_MATCH = "no_match"


class EquipmentCatalogEntry(BaseModel):
    """A known piece of equipment.

    Brand+model pairs are expected to be distinguishable by a human but are
    not guaranteed unique, so lookups against the catalog are heuristic.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: OptionalText = None
    brand: RequiredText = ""
    model: RequiredText = ""
    type: OptionalText = None
    power: OptionalText = Field(default=None, description="Rated power, e.g. '1800' or '1800mW'")
    wavelengths: WavelengthList = Field(
        default_factory=list,
        validation_alias=AliasChoices("wavelengths", "wavelength"),
    )
    nohd: OptionalText = Field(default=None, description="Nominal Ocular Hazard Distance in metres")
    divergence: OptionalText = Field(default=None, description="Beam divergence")

    @property
    def full_name(self) -> str:
        return f"{self.brand} {self.model}"


class ParsedEquipmentLine(BaseModel):
    """One equipment token after resolution against the catalog.

    Transient: built by the expander, consumed by the formatter, never
    persisted.
    """
    quantity: int = Field(..., ge=0)
    description: str
    entry: Optional[EquipmentCatalogEntry] = None
    outcome: LineOutcome = LineOutcome.NOT_FOUND
    match_type: MatchType = MatchType.NO_MATCH
    error: Optional[str] = None

    @property
    def is_resolved(self) -> bool:
        return self.outcome == LineOutcome.RESOLVED and self.entry is not None

    @property
    def not_found(self) -> bool:
        return self.outcome == LineOutcome.NOT_FOUND

    @property
    def unparseable(self) -> bool:
        return self.outcome == LineOutcome.UNPARSEABLE
