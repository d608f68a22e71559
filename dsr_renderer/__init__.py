"""DSR Renderer - fills the Display Safety Record template.

- layout: JSON layout descriptor (field → page, x, y, size)
- renderer: stamps show values and equipment lines onto the template
- template_builder: generates the blank template from the same layout
"""

from dsr_renderer.layout import (
    DEFAULT_LAYOUT_PATH,
    DSRLayout,
    EquipmentBlock,
    FieldKind,
    FieldPlacement,
    Heading,
    load_layout,
)
from dsr_renderer.renderer import FormRenderer, display_value, open_template
from dsr_renderer.template_builder import build_dsr_template

__all__ = [
    "DEFAULT_LAYOUT_PATH",
    "DSRLayout",
    "EquipmentBlock",
    "FieldKind",
    "FieldPlacement",
    "Heading",
    "load_layout",
    "FormRenderer",
    "display_value",
    "open_template",
    "build_dsr_template",
]
