"""Blank DSR template generation.

Builds the multi-page US Letter template the renderer stamps onto. Headings
and field labels come from the same layout descriptor the renderer uses,
so labels always sit next to the positions values are stamped at.
"""

from typing import Optional

import fitz

from dsr_renderer.layout import DSRLayout, load_layout


TEMPLATE_TITLE = "Display Safety Record (DSR)"
LABEL_SIZE = 10


def build_dsr_template(layout: Optional[DSRLayout] = None) -> bytes:
    """Create a blank DSR template.

    Args:
        layout: Layout to draw labels for (packaged default when None)

    Returns:
        Template PDF bytes
    """
    layout = layout or load_layout()

    with fitz.open() as doc:
        for _ in range(layout.page_count):
            doc.new_page(width=layout.page_width, height=layout.page_height)

        for heading in layout.headings:
            doc[heading.page].insert_text(
                fitz.Point(heading.x, heading.y),
                heading.text,
                fontsize=heading.size,
                fontname=heading.font or layout.label_font,
            )

        labels = [
            (p.page, p.label, p.label_x, p.x, p.y) for p in layout.fields if p.label
        ]
        block = layout.equipment_block
        if block.label:
            labels.append((block.page, block.label, block.label_x, block.x, block.y))

        for page_index, label, label_x, value_x, y in labels:
            x = label_x if label_x is not None else max(value_x - 100, 0)
            doc[page_index].insert_text(
                fitz.Point(x, y),
                label,
                fontsize=LABEL_SIZE,
                fontname=layout.label_font,
            )

        doc.set_metadata({"title": TEMPLATE_TITLE})
        return doc.tobytes(garbage=3, deflate=True, no_new_id=True)
