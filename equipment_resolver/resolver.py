"""Equipment Expander.

Turns a free-text equipment list into resolved line items:
1. Tokenize ``<qty> x <description>`` pairs (malformed segments skipped)
2. Resolve each description against the catalog, first tier that hits wins:
   a. exact: "<brand> <model>" equals the description
   b. brand+partial model: description contains the brand, and either
      contains the model or the model contains what is left of the
      description once the brand is removed
   c. substring: containment either direction with "<brand> <model>"
3. Within a tier the first catalog entry in catalog order wins

There is no scoring; the cascade accepts the first qualifying entry.
All comparisons are case-insensitive.
"""

from typing import List, Optional, Tuple

from core.errors import CatalogUnavailable, UnparseableEquipmentLine
from core.observability.logging import get_logger
from equipment_resolver.normalize import fold, parse_equipment_list, strip_first
from models.equipment import (
    EquipmentCatalogEntry,
    LineOutcome,
    MatchType,
    ParsedEquipmentLine,
)
from storage.base import CatalogStore


logger = get_logger(__name__)

MatchResult = Tuple[Optional[EquipmentCatalogEntry], MatchType]


def match_exact(description: str, entries: List[EquipmentCatalogEntry]) -> Optional[EquipmentCatalogEntry]:
    desc = fold(description)
    for entry in entries:
        if fold(entry.full_name) == desc:
            return entry
    return None


def match_brand_model(description: str, entries: List[EquipmentCatalogEntry]) -> Optional[EquipmentCatalogEntry]:
    desc = fold(description)
    for entry in entries:
        brand = fold(entry.brand)
        if not brand or brand not in desc:
            continue
        model = fold(entry.model)
        remainder = strip_first(desc, brand)
        if model in desc or remainder in model:
            return entry
    return None


def match_substring(description: str, entries: List[EquipmentCatalogEntry]) -> Optional[EquipmentCatalogEntry]:
    desc = fold(description)
    for entry in entries:
        full_name = fold(entry.full_name)
        if desc in full_name or full_name in desc:
            return entry
    return None


MATCH_TIERS = (
    (MatchType.EXACT, match_exact),
    (MatchType.BRAND_MODEL, match_brand_model),
    (MatchType.SUBSTRING, match_substring),
)


def match_entry(description: str, entries: List[EquipmentCatalogEntry]) -> MatchResult:
    """Run the matching cascade for one description.

    Returns:
        (entry, match_type); (None, NO_MATCH) when no tier resolves
    """
    for match_type, matcher in MATCH_TIERS:
        entry = matcher(description, entries)
        if entry is not None:
            return entry, match_type
    return None, MatchType.NO_MATCH


class EquipmentExpander:
    """Expands equipment list strings against an equipment catalog.

    The catalog is re-read on every call; nothing is cached between calls.

    Example:
        expander = EquipmentExpander(CsvCatalogStore(settings.equipment_csv))
        for line in expander.expand("2 x ClubMax 1800 RGB;"):
            print(line.quantity, line.entry.model if line.is_resolved else line.description)
    """

    def __init__(self, catalog: CatalogStore):
        self.catalog = catalog

    def expand(self, equipment_list: Optional[str]) -> List[ParsedEquipmentLine]:
        """Parse and resolve an equipment list.

        Args:
            equipment_list: Raw equipment list (None or blank yields [])

        Returns:
            One ParsedEquipmentLine per token, in input order

        Raises:
            CatalogUnavailable: If the catalog cannot be loaded
        """
        if not equipment_list or not equipment_list.strip():
            return []

        logger.debug(f"Expanding equipment list: {equipment_list}")

        entries = self._load_catalog()
        tokens = parse_equipment_list(equipment_list)
        logger.debug(f"Parsed {len(tokens)} items from equipment string")

        lines = [self.resolve_line(quantity, description, entries) for quantity, description in tokens]

        resolved = sum(1 for line in lines if line.is_resolved)
        logger.info(
            f"Expanded {len(lines)} equipment items ({resolved} resolved)",
            extra_fields={"items": len(lines), "resolved": resolved},
        )
        return lines

    def resolve_line(
        self,
        quantity: int,
        description: str,
        entries: List[EquipmentCatalogEntry],
    ) -> ParsedEquipmentLine:
        """Resolve one token; failures are downgraded to an UNPARSEABLE line."""
        try:
            entry, match_type = match_entry(description, entries)
        except Exception as e:
            error = UnparseableEquipmentLine(f"Error processing equipment item '{description}'", cause=e)
            logger.warning(str(error), extra_fields={"tier": "error", "description": description})
            return ParsedEquipmentLine(
                quantity=quantity,
                description=description,
                outcome=LineOutcome.UNPARSEABLE,
                error=str(e),
            )

        if entry is None:
            logger.debug(
                f"Equipment details not found for '{description}'",
                extra_fields={"tier": MatchType.NO_MATCH.value, "description": description},
            )
            return ParsedEquipmentLine(
                quantity=quantity,
                description=description,
                outcome=LineOutcome.NOT_FOUND,
            )

        logger.debug(
            f"Found {match_type.value} match for '{description}': {entry.full_name}",
            extra_fields={"tier": match_type.value, "description": description},
        )
        return ParsedEquipmentLine(
            quantity=quantity,
            description=description,
            entry=entry,
            outcome=LineOutcome.RESOLVED,
            match_type=match_type,
        )

    def _load_catalog(self) -> List[EquipmentCatalogEntry]:
        try:
            entries = self.catalog.get_all()
        except CatalogUnavailable:
            raise
        except Exception as e:
            raise CatalogUnavailable("Equipment catalog could not be loaded", cause=e) from e

        # Blank rows would match every description in the substring tier
        return [e for e in entries if e.brand or e.model]
