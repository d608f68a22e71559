"""Shared pytest fixtures for the DSR generator tests."""

import pytest
import fitz

from dsr_renderer import build_dsr_template, load_layout
from document_service import DSRService
from models.equipment import EquipmentCatalogEntry
from models.show import ShowRecord
from storage.memory import (
    InMemoryCatalogStore,
    InMemoryDocumentStore,
    InMemoryShowStore,
    InMemoryTemplateStore,
)


TEMPLATE_NAME = "dsr_template.pdf"


def text_at(page: fitz.Page, x: float, y: float, tolerance: float = 1.5):
    """Text stamped with its first character at (x, baseline y), or None."""
    row = [w for w in page.get_text("words") if w[1] - tolerance <= y <= w[3] + tolerance]
    row.sort(key=lambda w: w[0])

    start = next((i for i, w in enumerate(row) if abs(w[0] - x) <= tolerance), None)
    if start is None:
        return None

    parts = [row[start]]
    for word in row[start + 1:]:
        if word[0] - parts[-1][2] > 12:
            break
        parts.append(word)
    return " ".join(w[4] for w in parts)


@pytest.fixture
def catalog_entries():
    return [
        EquipmentCatalogEntry(
            id="EQ001",
            brand="ClubMax",
            model="1800 RGB",
            type="Laser",
            power="1800",
            nohd="3",
            wavelengths=["638nm", "520nm", "450nm"],
        ),
        EquipmentCatalogEntry(
            id="EQ002",
            brand="Kvant",
            model="Atom 9000 RGB",
            type="Laser",
            power="9000mW",
            nohd="12.5m",
            wavelengths="638nm, 520nm, 445nm",
        ),
        EquipmentCatalogEntry(
            id="EQ003",
            brand="Pangolin",
            model="FB4",
            type="Controller",
        ),
    ]


@pytest.fixture
def layout():
    return load_layout()


@pytest.fixture(scope="session")
def template_bytes():
    return build_dsr_template()


@pytest.fixture
def show():
    return ShowRecord(
        id="SH1001",
        name="Summer Festival 2024",
        date="2024-07-12",
        status="Planning",
        venue="Riverside Park",
        venuePhone="555-0100",
        client="Acme Events",
        lsoName="Jordan Lee",
        equipmentList="1 x ClubMax 1800 RGB;",
        aviationNeeded="true",
        notamIssued="false",
    )


@pytest.fixture
def service(show, catalog_entries, layout, template_bytes):
    return DSRService(
        shows=InMemoryShowStore([show.with_regeneration_flag(True)]),
        catalog=InMemoryCatalogStore(catalog_entries),
        templates=InMemoryTemplateStore({TEMPLATE_NAME: template_bytes}),
        documents=InMemoryDocumentStore(),
        layout=layout,
        template_name=TEMPLATE_NAME,
    )
