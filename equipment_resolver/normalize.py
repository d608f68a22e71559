"""Equipment string parsing and normalization utilities.

The equipment list on a show is free text of the form::

    "2 x ClubMax 1800 RGB; 1 x Atom 9000 RGB;"

Segments that do not match ``<quantity> x <description>`` are skipped
silently. Matching against the catalog is case-insensitive.

Examples:
    parse_equipment_list("2 x ClubMax 1800 RGB; 1 x Atom 9000 RGB")
        → [(2, "ClubMax 1800 RGB"), (1, "Atom 9000 RGB")]
    numeric_part("1800mW") → Decimal("1800")
"""

import re
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Tuple


EQUIPMENT_ITEM_PATTERN = re.compile(r"(\d+)\s*[xX]\s*([^;]+)(?:;|$)")

_LEADING_NUMBER = re.compile(r"^\s*(\d+(?:\.\d+)?|\.\d+)")


def fold(text: Optional[str]) -> str:
    """Case-fold for comparison; None becomes the empty string."""
    return (text or "").lower()


def parse_equipment_list(equipment_list: Optional[str]) -> List[Tuple[int, str]]:
    """Tokenize an equipment list into (quantity, description) pairs.

    Args:
        equipment_list: Raw equipment list string (may be None or empty)

    Returns:
        Pairs in input order; empty list for empty input
    """
    if not equipment_list:
        return []

    return [
        (int(match.group(1)), match.group(2).strip())
        for match in EQUIPMENT_ITEM_PATTERN.finditer(equipment_list)
    ]


def strip_first(text: str, part: str) -> str:
    """Remove the first occurrence of ``part`` from ``text`` and trim."""
    if not part:
        return text.strip()
    return text.replace(part, "", 1).strip()


def numeric_part(value: Optional[str]) -> Optional[Decimal]:
    """Leading number of a value that may carry a unit ('3.8m' → 3.8)."""
    if value is None:
        return None
    match = _LEADING_NUMBER.match(str(value))
    if not match:
        return None
    try:
        return Decimal(match.group(1))
    except InvalidOperation:
        return None


def format_decimal(value: Decimal) -> str:
    """Format without exponent or trailing zeros (1800.0 → '1800')."""
    if value == value.to_integral_value():
        return str(value.quantize(Decimal(1)))
    return format(value.normalize(), "f")
