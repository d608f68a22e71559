"""
Equipment Expander Tests

Validates the tokenizer and the three-tier matching cascade:
1. Well-formed "<qty> x <desc>" tokens come back in order
2. Empty input yields nothing without touching the catalog
3. Exact > brand+partial model > substring, first entry wins within a tier
4. Per-item failures are downgraded; catalog failures abort
"""

import logging

import pytest

from core.errors import CatalogUnavailable
from equipment_resolver import EquipmentExpander, parse_equipment_list
from models.equipment import EquipmentCatalogEntry, LineOutcome, MatchType
from storage.memory import InMemoryCatalogStore


class TestParseEquipmentList:
    """Tokenizing of raw equipment strings."""

    def test_tokens_in_order(self):
        """Quantities parse as integers; descriptions are trimmed."""
        tokens = parse_equipment_list("2 x ClubMax 1800 RGB; 1 x Atom 9000 RGB;")
        assert tokens == [(2, "ClubMax 1800 RGB"), (1, "Atom 9000 RGB")]

    def test_trailing_separator_optional(self):
        assert parse_equipment_list("3 x Pangolin FB4") == [(3, "Pangolin FB4")]

    def test_uppercase_x_and_no_spaces(self):
        assert parse_equipment_list("4X Hazer;10x Fan") == [(4, "Hazer"), (10, "Fan")]

    def test_malformed_segments_skipped(self):
        """Segments without a quantity are dropped silently."""
        tokens = parse_equipment_list("2 x ClubMax 1800 RGB; some cables; 1 x FB4;")
        assert tokens == [(2, "ClubMax 1800 RGB"), (1, "FB4")]

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_empty_input(self, value):
        assert parse_equipment_list(value) == []


class TestMatchingCascade:
    """Resolution against the catalog."""

    def test_exact_match(self, catalog_entries):
        expander = EquipmentExpander(InMemoryCatalogStore(catalog_entries))
        [line] = expander.expand("1 x ClubMax 1800 RGB;")

        assert line.outcome == LineOutcome.RESOLVED
        assert line.match_type == MatchType.EXACT
        assert line.entry.id == "EQ001"
        assert line.quantity == 1

    def test_case_insensitive(self, catalog_entries):
        """Lower-case input resolves to the same entry."""
        expander = EquipmentExpander(InMemoryCatalogStore(catalog_entries))
        [upper] = expander.expand("2 x ClubMax 1800 RGB")
        [lower] = expander.expand("2 x clubmax 1800 rgb")

        assert lower.entry == upper.entry
        assert lower.match_type == upper.match_type == MatchType.EXACT

    def test_exact_beats_earlier_partial_candidates(self):
        """An exact entry wins even when earlier entries qualify for lower tiers."""
        entries = [
            EquipmentCatalogEntry(id="A", brand="ClubMax", model="1800"),
            EquipmentCatalogEntry(id="B", brand="ClubMax", model="1800 RGB"),
        ]
        expander = EquipmentExpander(InMemoryCatalogStore(entries))
        [line] = expander.expand("1 x ClubMax 1800 RGB;")

        assert line.entry.id == "B"
        assert line.match_type == MatchType.EXACT

    def test_brand_with_partial_model(self, catalog_entries):
        """Brand present and what remains is part of the model."""
        expander = EquipmentExpander(InMemoryCatalogStore(catalog_entries))
        [line] = expander.expand("2 x Kvant Atom 9000;")

        assert line.match_type == MatchType.BRAND_MODEL
        assert line.entry.id == "EQ002"

    def test_brand_with_full_model_and_extra_words(self, catalog_entries):
        expander = EquipmentExpander(InMemoryCatalogStore(catalog_entries))
        [line] = expander.expand("1 x Kvant Atom 9000 RGB (spare)")

        assert line.match_type == MatchType.BRAND_MODEL
        assert line.entry.id == "EQ002"

    def test_substring_match(self, catalog_entries):
        """Description without the brand still resolves by containment."""
        expander = EquipmentExpander(InMemoryCatalogStore(catalog_entries))
        [line] = expander.expand("1 x FB4;")

        assert line.match_type == MatchType.SUBSTRING
        assert line.entry.id == "EQ003"

    def test_first_entry_wins_within_tier(self):
        entries = [
            EquipmentCatalogEntry(id="first", brand="Acme", model="Beam"),
            EquipmentCatalogEntry(id="second", brand="Acme", model="Beam"),
        ]
        expander = EquipmentExpander(InMemoryCatalogStore(entries))
        [line] = expander.expand("1 x Acme Beam")

        assert line.entry.id == "first"

    def test_not_found_keeps_quantity_and_description(self, catalog_entries):
        expander = EquipmentExpander(InMemoryCatalogStore(catalog_entries))
        [line] = expander.expand("3 x Unknown Brand Widget;")

        assert line.not_found
        assert line.entry is None
        assert line.quantity == 3
        assert line.description == "Unknown Brand Widget"
        assert line.match_type == MatchType.NO_MATCH

    def test_empty_catalog_resolves_nothing(self):
        expander = EquipmentExpander(InMemoryCatalogStore([]))
        lines = expander.expand("1 x ClubMax 1800 RGB; 2 x FB4")

        assert [line.outcome for line in lines] == [LineOutcome.NOT_FOUND, LineOutcome.NOT_FOUND]

    def test_blank_catalog_rows_ignored(self):
        """A row with neither brand nor model never matches."""
        entries = [EquipmentCatalogEntry(id="blank")]
        expander = EquipmentExpander(InMemoryCatalogStore(entries))
        [line] = expander.expand("1 x Anything")

        assert line.not_found

    def test_order_preserved(self, catalog_entries):
        expander = EquipmentExpander(InMemoryCatalogStore(catalog_entries))
        lines = expander.expand("1 x FB4; 3 x Unknown; 2 x ClubMax 1800 RGB")

        assert [(line.quantity, line.description) for line in lines] == [
            (1, "FB4"),
            (3, "Unknown"),
            (2, "ClubMax 1800 RGB"),
        ]


class TestExpanderFailures:
    """Catalog and per-item failure handling."""

    def test_empty_input_does_not_load_catalog(self):
        expander = EquipmentExpander(InMemoryCatalogStore(unavailable=True))
        assert expander.expand("") == []
        assert expander.expand(None) == []

    def test_catalog_unavailable_aborts(self):
        expander = EquipmentExpander(InMemoryCatalogStore(unavailable=True))
        with pytest.raises(CatalogUnavailable):
            expander.expand("1 x ClubMax 1800 RGB")

    def test_unexpected_catalog_error_is_wrapped(self):
        class BrokenCatalog:
            def get_all(self):
                raise OSError("disk gone")

        expander = EquipmentExpander(BrokenCatalog())
        with pytest.raises(CatalogUnavailable) as exc_info:
            expander.expand("1 x ClubMax 1800 RGB")

        assert isinstance(exc_info.value.cause, OSError)
        assert exc_info.value.condition == "CatalogUnavailable"

    def test_item_error_marks_line_unparseable(self, catalog_entries, monkeypatch):
        """One failing item does not abort the batch."""
        import equipment_resolver.resolver as resolver_module

        original = resolver_module.match_entry

        def flaky_match(description, entries):
            if description == "Bad Item":
                raise ValueError("boom")
            return original(description, entries)

        monkeypatch.setattr(resolver_module, "match_entry", flaky_match)

        expander = EquipmentExpander(InMemoryCatalogStore(catalog_entries))
        lines = expander.expand("1 x ClubMax 1800 RGB; 2 x Bad Item; 1 x FB4")

        assert [line.outcome for line in lines] == [
            LineOutcome.RESOLVED,
            LineOutcome.UNPARSEABLE,
            LineOutcome.RESOLVED,
        ]
        assert lines[1].unparseable
        assert lines[1].error == "boom"
        assert lines[1].quantity == 2

    def test_resolution_trace_logged(self, catalog_entries, caplog):
        """Each item logs the tier it resolved through."""
        caplog.set_level(logging.DEBUG, logger="equipment_resolver.resolver")

        expander = EquipmentExpander(InMemoryCatalogStore(catalog_entries))
        expander.expand("1 x ClubMax 1800 RGB; 1 x Nothing Here")

        tiers = [
            r.extra_fields["tier"]
            for r in caplog.records
            if "tier" in getattr(r, "extra_fields", {})
        ]
        assert tiers == ["exact", "no_match"]
