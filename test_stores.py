"""Store tests: CSV show/equipment catalogs and file artifacts."""

import hashlib
from pathlib import Path

import pytest

from core.errors import CatalogUnavailable, PersistFailure, RecordNotFound, TemplateUnavailable
from models.show import ShowRecord
from storage.artifacts import FileDocumentStore, FileTemplateStore
from storage.csv_store import CsvCatalogStore, CsvShowStore, read_csv_header, read_csv_rows


SHOWS_CSV = (
    "id,name,date,status,venue,aviationNeeded,notamIssued,equipmentList,venueCapacity,pdf_needs_update\n"
    "SH1001,Summer Festival,2024-07-12,Planning,Riverside Park,true,,1 x ClubMax 1800 RGB;,5000,false\n"
    "SH1002,Winter Gala,2024-12-01,Setup Done,Town Hall,No,yes,,,true\n"
)

EQUIPMENT_CSV = (
    "id,brand,model,type,power,nohd,wavelength,divergence\n"
    "EQ001,ClubMax,1800 RGB,Laser,1800,3,\"638nm, 520nm, 450nm\",1.2mrad\n"
    "EQ002,Kvant,Atom 9000 RGB,Laser,9000,,,\n"
)


@pytest.fixture
def shows_path(tmp_path):
    path = tmp_path / "shows.csv"
    path.write_text(SHOWS_CSV, encoding="utf-8")
    return path


@pytest.fixture
def equipment_path(tmp_path):
    path = tmp_path / "equipment.csv"
    path.write_text(EQUIPMENT_CSV, encoding="utf-8")
    return path


class TestCsvShowStore:

    def test_get_all(self, shows_path):
        records = CsvShowStore(shows_path).get_all()

        assert [r.id for r in records] == ["SH1001", "SH1002"]
        first, second = records
        assert first.aviation_needed is True
        assert first.notam_issued is None
        assert first.needs_regeneration is False
        assert second.aviation_needed is False
        assert second.notam_issued is True
        assert second.needs_regeneration is True
        assert first.field_values()["venueCapacity"] == "5000"

    def test_get_unknown(self, shows_path):
        with pytest.raises(RecordNotFound):
            CsvShowStore(shows_path).get("NOPE")

    def test_missing_file_is_empty(self, tmp_path):
        assert CsvShowStore(tmp_path / "missing.csv").get_all() == []

    def test_set_flag_rewrites_file(self, shows_path):
        store = CsvShowStore(shows_path)
        store.set_regeneration_flag("SH1001", True)

        assert store.get("SH1001").needs_regeneration is True
        assert store.get("SH1002").needs_regeneration is True
        rows = read_csv_rows(shows_path)
        assert rows[0]["pdf_needs_update"] == "true"
        assert rows[0]["venueCapacity"] == "5000"

    def test_header_order_kept(self, shows_path):
        header = read_csv_header(shows_path)
        CsvShowStore(shows_path).set_regeneration_flag("SH1002", False)
        assert read_csv_header(shows_path)[:len(header)] == header

    def test_set_flag_unknown(self, shows_path):
        with pytest.raises(RecordNotFound):
            CsvShowStore(shows_path).set_regeneration_flag("NOPE", False)

    def test_save_replaces_and_appends(self, shows_path):
        store = CsvShowStore(shows_path)
        store.save(ShowRecord(id="SH1001", name="Renamed"))
        store.save(ShowRecord(id="SH1003", name="Added", needs_regeneration=True))

        records = store.get_all()
        assert [r.id for r in records] == ["SH1001", "SH1002", "SH1003"]
        assert records[0].name == "Renamed"
        assert records[2].needs_regeneration is True

    def test_flag_column_added(self, tmp_path):
        path = tmp_path / "shows.csv"
        path.write_text("id,name\nSH1,Old Show\n", encoding="utf-8")

        CsvShowStore(path).set_regeneration_flag("SH1", True)

        assert "pdf_needs_update" in read_csv_header(path)
        assert CsvShowStore(path).get("SH1").needs_regeneration is True

    def test_replace_all(self, shows_path):
        store = CsvShowStore(shows_path)
        store.replace_all([ShowRecord(id="SH9", name="Only", needs_regeneration=True)])

        records = store.get_all()
        assert [r.id for r in records] == ["SH9"]

    def test_status_is_free_text(self, shows_path):
        store = CsvShowStore(shows_path)
        store.save(store.get("SH1001").model_copy(update={"status": "Postponed (weather)"}))

        assert store.get("SH1001").status == "Postponed (weather)"
        assert "Postponed (weather)" in shows_path.read_text(encoding="utf-8")

    def test_bom_and_blank_ids(self, tmp_path):
        path = tmp_path / "shows.csv"
        path.write_bytes("\ufeffid,name\nSH1,One\n,Orphan\n".encode("utf-8"))

        assert [r.id for r in CsvShowStore(path).get_all()] == ["SH1"]


class TestCsvCatalogStore:

    def test_get_all(self, equipment_path):
        entries = CsvCatalogStore(equipment_path).get_all()

        assert [e.id for e in entries] == ["EQ001", "EQ002"]
        assert entries[0].wavelengths == ["638nm", "520nm", "450nm"]
        assert entries[0].full_name == "ClubMax 1800 RGB"
        assert entries[1].nohd is None
        assert entries[1].wavelengths == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogUnavailable):
            CsvCatalogStore(tmp_path / "missing.csv").get_all()


class TestFileArtifacts:

    def test_template_store(self, tmp_path):
        (tmp_path / "dsr_template.pdf").write_bytes(b"%PDF-1.7 test")
        assert FileTemplateStore(tmp_path).load("dsr_template.pdf") == b"%PDF-1.7 test"

    def test_missing_template(self, tmp_path):
        with pytest.raises(TemplateUnavailable):
            FileTemplateStore(tmp_path).load("dsr_template.pdf")

    def test_document_store_path(self, tmp_path):
        store = FileDocumentStore(tmp_path / "shows")
        show = ShowRecord(id="SH1001", name="Summer Festival 2024!")

        ref = store.save(show, b"pdf-bytes")

        expected = tmp_path / "shows" / "SH1001-summer_festival_2024_" / "dsr.pdf"
        assert expected.read_bytes() == b"pdf-bytes"
        assert ref.storage_uri == str(expected.absolute())
        assert ref.size_bytes == len(b"pdf-bytes")
        assert ref.content_hash == hashlib.sha256(b"pdf-bytes").hexdigest()
        assert Path(ref.storage_uri).read_bytes() == b"pdf-bytes"

    def test_document_overwritten(self, tmp_path):
        store = FileDocumentStore(tmp_path)
        show = ShowRecord(id="SH1", name="One")
        store.save(show, b"first")
        ref = store.save(show, b"second")
        assert Path(ref.storage_uri).read_bytes() == b"second"

    def test_unwritable_location(self, tmp_path):
        blocker = tmp_path / "shows"
        blocker.write_text("not a directory")

        with pytest.raises(PersistFailure):
            FileDocumentStore(blocker).save(ShowRecord(id="SH1", name="One"), b"data")
