"""DSR layout descriptor.

The layout maps show fields to fixed positions on the DSR template. It is
loaded from JSON so geometry changes need no code changes.

Coordinates are PDF points measured from the top-left corner of the page
to the text baseline. ``field`` names are the CSV column names of the show
catalog (``venuePhone``, ``lsoName``, ...).
"""

from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


DEFAULT_LAYOUT_PATH = Path(__file__).resolve().parent / "layouts" / "dsr_layout.json"


class FieldKind(str, Enum):
    TEXT = "text"
    YES_NO = "yes_no"


class Heading(BaseModel):
    """Static text drawn by the template builder."""
    page: int = Field(..., ge=0)
    text: str
    x: float
    y: float
    size: float = 14
    font: Optional[str] = None


class FieldPlacement(BaseModel):
    """Where one show field is stamped."""
    field: str
    page: int = Field(..., ge=0)
    x: float
    y: float
    size: float = 10
    kind: FieldKind = FieldKind.TEXT
    label: Optional[str] = None
    label_x: Optional[float] = None


class EquipmentBlock(BaseModel):
    """Region for the formatted equipment lines; extra lines are dropped."""
    page: int = Field(..., ge=0)
    x: float
    y: float
    size: float = 9
    line_height: float = 15
    max_lines: int = Field(default=6, ge=1)
    label: Optional[str] = None
    label_x: Optional[float] = None

    def line_y(self, index: int) -> float:
        return self.y + index * self.line_height


class DSRLayout(BaseModel):
    """Full template geometry."""
    page_width: float = 612
    page_height: float = 792
    page_count: int = Field(default=3, ge=1)
    font: str = "helv"
    label_font: str = "hebo"
    headings: List[Heading] = Field(default_factory=list)
    fields: List[FieldPlacement] = Field(default_factory=list)
    equipment_block: EquipmentBlock

    @model_validator(mode="after")
    def _check_pages(self) -> "DSRLayout":
        pages = [f.page for f in self.fields] + [h.page for h in self.headings]
        pages.append(self.equipment_block.page)
        out_of_range = [p for p in pages if p >= self.page_count]
        if out_of_range:
            raise ValueError(
                f"Layout references page {max(out_of_range)} but page_count is {self.page_count}"
            )
        return self

    def placement_for(self, field: str) -> Optional[FieldPlacement]:
        for placement in self.fields:
            if placement.field == field:
                return placement
        return None


def load_layout(path: Optional[Path] = None) -> DSRLayout:
    """Load a layout descriptor (packaged default when path is None).

    Raises:
        FileNotFoundError: If the layout file does not exist
        pydantic.ValidationError: If the descriptor is malformed
    """
    layout_path = Path(path) if path else DEFAULT_LAYOUT_PATH
    return DSRLayout.model_validate_json(layout_path.read_text(encoding="utf-8"))
