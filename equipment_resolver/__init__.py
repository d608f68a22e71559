"""Equipment Resolver - expands show equipment lists against the catalog.

This package turns the free-text equipment list stored on a show into
resolved line items and display lines:
- Tokenizing of "<qty> x <description>" segments
- Three-tier matching cascade (exact → brand+partial model → substring)
- Display formatting with total power, NOHD and wavelengths

Usage:
    from equipment_resolver import EquipmentExpander, format_equipment_list

    expander = EquipmentExpander(catalog_store)
    lines = expander.expand("2 x ClubMax 1800 RGB; 1 x Atom 9000 RGB;")
    print(format_equipment_list(lines))
"""

from equipment_resolver.resolver import (
    EquipmentExpander,
    match_entry,
    match_exact,
    match_brand_model,
    match_substring,
)
from equipment_resolver.formatting import (
    format_equipment_line,
    format_equipment_lines,
    format_equipment_list,
    total_power,
)
from equipment_resolver.normalize import parse_equipment_list, numeric_part

__all__ = [
    # Expander
    "EquipmentExpander",
    "match_entry",
    "match_exact",
    "match_brand_model",
    "match_substring",
    # Formatting
    "format_equipment_line",
    "format_equipment_lines",
    "format_equipment_list",
    "total_power",
    # Parsing
    "parse_equipment_list",
    "numeric_part",
]
