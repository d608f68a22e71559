"""Form Renderer - stamps show data onto the DSR template.

Each render is independent: open the template bytes, place every field
the layout knows about, place the equipment block, serialize. Absent
values leave the template's blank untouched. Output bytes depend only on
the template, the layout and the record.
"""

from typing import Any, List, Optional

import fitz

from core.errors import TemplateUnavailable
from core.observability.logging import get_logger
from dsr_renderer.layout import DSRLayout, FieldKind, FieldPlacement
from models.show import ShowRecord, parse_yes_no


logger = get_logger(__name__)


def display_value(value: Any, kind: FieldKind = FieldKind.TEXT) -> Optional[str]:
    """Text to stamp for a field value, or None to leave the blank.

    Yes/no fields are stamped only when explicitly set.
    """
    if kind == FieldKind.YES_NO:
        parsed = parse_yes_no(value)
        if parsed is None:
            return None
        return "Yes" if parsed else "No"

    if value is None:
        return None
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (list, tuple)):
        value = ", ".join(str(v) for v in value)
    text = str(value)
    return text if text != "" else None


def open_template(template: bytes) -> fitz.Document:
    """Open template bytes as a PDF.

    Raises:
        TemplateUnavailable: If the bytes are not a readable PDF with pages
    """
    try:
        doc = fitz.open(stream=template, filetype="pdf")
    except Exception as e:
        raise TemplateUnavailable("DSR template is not a readable PDF", cause=e) from e

    if doc.page_count == 0:
        doc.close()
        raise TemplateUnavailable("DSR template has no pages")
    return doc


class FormRenderer:
    """Stamps ShowRecords onto a template according to a DSRLayout.

    Example:
        renderer = FormRenderer(load_layout())
        pdf_bytes = renderer.render(template_bytes, show, equipment_text)
    """

    def __init__(self, layout: DSRLayout):
        self.layout = layout

    def render(
        self,
        template: bytes,
        record: ShowRecord,
        equipment_text: Optional[str] = None,
    ) -> bytes:
        """Produce a filled DSR.

        Args:
            template: Template PDF bytes
            record: Show to stamp
            equipment_text: Newline-separated equipment lines (already formatted)

        Returns:
            The filled PDF as bytes

        Raises:
            TemplateUnavailable: If the template cannot be opened
        """
        with open_template(template) as doc:
            values = record.field_values()
            stamped = self._stamp_fields(doc, values)
            equipment_lines = self._stamp_equipment(doc, equipment_text)

            logger.debug(
                f"Stamped {len(stamped)} fields and {equipment_lines} equipment lines",
                extra_fields={"fields": len(stamped), "equipment_lines": equipment_lines},
            )
            return doc.tobytes(garbage=3, deflate=True, no_new_id=True)

    def _stamp_fields(self, doc: fitz.Document, values: dict) -> List[str]:
        stamped = []
        for placement in self.layout.fields:
            if placement.page >= doc.page_count:
                continue
            text = display_value(values.get(placement.field), placement.kind)
            if text is None:
                continue
            self._insert(doc[placement.page], placement, text)
            stamped.append(placement.field)
        return stamped

    def _insert(self, page: fitz.Page, placement: FieldPlacement, text: str) -> None:
        page.insert_text(
            fitz.Point(placement.x, placement.y),
            text,
            fontsize=placement.size,
            fontname=self.layout.font,
        )

    def _stamp_equipment(self, doc: fitz.Document, equipment_text: Optional[str]) -> int:
        block = self.layout.equipment_block
        if not equipment_text or block.page >= doc.page_count:
            return 0

        lines = equipment_text.split("\n")
        if len(lines) > block.max_lines:
            logger.warning(
                f"Equipment list has {len(lines)} lines; only the first {block.max_lines} fit the DSR",
                extra_fields={"dropped_lines": len(lines) - block.max_lines},
            )
            lines = lines[:block.max_lines]

        page = doc[block.page]
        for i, line in enumerate(lines):
            if not line:
                continue
            page.insert_text(
                fitz.Point(block.x, block.line_y(i)),
                line,
                fontsize=block.size,
                fontname=self.layout.font,
            )
        return len(lines)
