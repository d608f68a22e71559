"""Display lines for expanded equipment.

Resolved:   "2x ClubMax 1800 RGB - 3600mW total - NOHD: 3m - Wavelengths: 638nm, 520nm, 450nm"
Unresolved: "3 Unknown Brand Widget"

Clauses whose source value is missing are left out. Power is the rated
power times the quantity.
"""

from typing import Iterable, List, Optional

from equipment_resolver.normalize import format_decimal, numeric_part
from models.equipment import ParsedEquipmentLine


def total_power(power: Optional[str], quantity: int) -> Optional[str]:
    """Rated power × quantity, or None when power has no numeric value."""
    value = numeric_part(power)
    if value is None:
        return None
    return format_decimal(value * quantity)


def format_equipment_line(line: ParsedEquipmentLine) -> str:
    if not line.is_resolved:
        return f"{line.quantity} {line.description}"

    entry = line.entry
    text = f"{line.quantity}x {entry.brand} {entry.model}"

    power = total_power(entry.power, line.quantity)
    if power is not None:
        text += f" - {power}mW total"

    nohd = numeric_part(entry.nohd)
    if nohd is not None:
        text += f" - NOHD: {format_decimal(nohd)}m"

    if entry.wavelengths:
        text += f" - Wavelengths: {', '.join(entry.wavelengths)}"

    return text


def format_equipment_lines(lines: Iterable[ParsedEquipmentLine]) -> List[str]:
    return [format_equipment_line(line) for line in lines]


def format_equipment_list(lines: Iterable[ParsedEquipmentLine]) -> str:
    """Newline-joined display lines, in input order."""
    return "\n".join(format_equipment_lines(lines))
