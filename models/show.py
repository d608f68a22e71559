"""Show catalog models.

A ShowRecord is one row of ``shows.csv``. Attribute names are snake_case;
aliases carry the camelCase CSV column names so rows load and serialize
without a mapping table. Unknown columns are kept as extras and written
back untouched.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.functional_validators import BeforeValidator
from typing_extensions import Annotated


# =============================================================================
# Value Parsers
# =============================================================================

def parse_yes_no(value) -> Optional[bool]:
    """Parse a checklist flag.

    ``True``, ``"true"`` and ``"yes"`` (any case) are true; any other
    non-empty value is false; ``None`` and blank strings are unset.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    s = str(value).strip()
    if s == "":
        return None
    return s.lower() in ("true", "yes")


def _parse_flag(value) -> bool:
    """Parse the regeneration flag; unset means not flagged."""
    parsed = parse_yes_no(value)
    return bool(parsed)


def _parse_text(value):
    """Coerce CSV cell values to strings, leaving None alone."""
    if value is None or isinstance(value, str):
        return value
    return str(value)


YesNoValue = Annotated[Optional[bool], BeforeValidator(parse_yes_no)]
FlagValue = Annotated[bool, BeforeValidator(_parse_flag)]
TextValue = Annotated[Optional[str], BeforeValidator(_parse_text)]


# Column name of the regeneration flag in shows.csv
REGENERATION_FLAG_COLUMN = "pdf_needs_update"


class ShowRecord(BaseModel):
    """One show in the catalog.

    Invariants:
        - ``id`` is unique within the catalog
        - ``needs_regeneration`` is set whenever any field changes and
          cleared right after a DSR is produced
    """
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(..., description="Unique show identifier")
    name: TextValue = None
    date: TextValue = None
    status: TextValue = Field(default=None, description="Planning, Preshow Done, Setup Done, ...")
    show_times: TextValue = Field(default=None, alias="showTimes")

    # Venue
    venue: TextValue = None
    venue_address: TextValue = Field(default=None, alias="venueAddress")
    venue_phone: TextValue = Field(default=None, alias="venuePhone")
    venue_consulted: YesNoValue = Field(default=None, alias="venueConsulted")
    venue_consulted_notes: TextValue = Field(default=None, alias="venueConsultedNotes")
    laser_area_signed: YesNoValue = Field(default=None, alias="laserAreaSigned")

    # Client
    client: TextValue = None
    client_email: TextValue = Field(default=None, alias="clientEmail")
    client_phone: TextValue = Field(default=None, alias="clientPhone")

    # Laser safety officer
    lso_name: TextValue = Field(default=None, alias="lsoName")
    lso_contact: TextValue = Field(default=None, alias="lsoContact")
    lso_email: TextValue = Field(default=None, alias="lsoEmail")

    # Operator and crew
    operator_name: TextValue = Field(default=None, alias="operatorName")
    operator_contact: TextValue = Field(default=None, alias="operatorContact")
    crew: TextValue = None

    # Equipment
    equipment_list: TextValue = Field(
        default=None,
        alias="equipmentList",
        description="Raw list, e.g. '2 x ClubMax 1800 RGB; 1 x Atom 9000 RGB;'",
    )
    formatted_equipment_list: TextValue = Field(
        default=None,
        alias="formattedEquipmentList",
        description="Pre-computed display lines; skips expansion when present",
    )
    equipment_checked: YesNoValue = Field(default=None, alias="equipmentChecked")
    equipment_issues: YesNoValue = Field(default=None, alias="equipmentIssues")
    equipment_issues_notes: TextValue = Field(default=None, alias="equipmentIssuesNotes")

    # Safety checklist
    aviation_needed: YesNoValue = Field(default=None, alias="aviationNeeded")
    notam_issued: YesNoValue = Field(default=None, alias="notamIssued")
    notam_notes: TextValue = Field(default=None, alias="notamNotes")
    lasers_securely_mounted: YesNoValue = Field(default=None, alias="lasersSecurelyMounted")
    beam_protocol_needed: YesNoValue = Field(default=None, alias="beamProtocolNeeded")
    crew_briefed: YesNoValue = Field(default=None, alias="crewBriefed")
    emergency_stops: YesNoValue = Field(default=None, alias="emergencyStops")
    e_stop_testing_notes: TextValue = Field(default=None, alias="eStopTestingNotes")
    lasers_focused: YesNoValue = Field(default=None, alias="lasersFocused")
    beam_paths_verified: YesNoValue = Field(default=None, alias="beamPathsVerified")
    beams_within_zones: YesNoValue = Field(default=None, alias="beamsWithinZones")

    # Notes and feedback
    show_notes: TextValue = Field(default=None, alias="showNotes")
    client_feedback_received: YesNoValue = Field(default=None, alias="clientFeedbackReceived")
    client_feedback: TextValue = Field(default=None, alias="clientFeedback")

    needs_regeneration: FlagValue = Field(default=False, alias=REGENERATION_FLAG_COLUMN)

    @property
    def safe_name(self) -> str:
        """Show name reduced to ``[a-z0-9_]`` for use in folder names."""
        name = self.name or ""
        return "".join(c if c.isascii() and c.isalnum() else "_" for c in name).lower()

    @property
    def folder_name(self) -> str:
        return f"{self.id}-{self.safe_name}"

    def field_values(self) -> Dict[str, Any]:
        """All values keyed by CSV column name, extras included."""
        return self.model_dump(by_alias=True)

    def to_row(self) -> Dict[str, str]:
        """Serialize to a CSV row (booleans as true/false, None as blank)."""
        row = {}
        for key, value in self.field_values().items():
            if value is None:
                row[key] = ""
            elif isinstance(value, bool):
                row[key] = "true" if value else "false"
            else:
                row[key] = str(value)
        return row

    def with_regeneration_flag(self, flagged: bool = True) -> "ShowRecord":
        return self.model_copy(update={"needs_regeneration": flagged})
