"""Tests for CSV loading and saving."""
import pytest

from bibmanager.exceptions import StorageError
from bibmanager.models import Project, Reference
from bibmanager.storage import CsvStorage


class TestReferenceTable:

    def test_round_trip_preserves_fields_and_author_order(self, storage, sample_reference):
        second = Reference(
            id="Turing1936",
            title="On Computable Numbers, with an Application",
            year="1936",
            authors=["Turing", "Church", "Kleene"],
        )
        storage.save_references([sample_reference, second])

        loaded = storage.load_references()

        assert loaded == [sample_reference, second]
        assert loaded[1].authors == ["Turing", "Church", "Kleene"]

    def test_quotes_delimiters_and_quote_characters(self, storage):
        ref = Reference(
            id="Smith2020",
            title='Commas, "quotes" and more',
            authors=["Smith, John", 'Doe "JD", Jane'],
        )
        storage.save_references([ref])

        assert storage.load_references() == [ref]

    def test_round_trip_keeps_author_spacing(self, storage):
        ref = Reference(id="Spaced2000", authors=["A", " B "])
        storage.save_references([ref])

        assert storage.load_references() == [ref]

    def test_rows_without_id_are_skipped(self, storage):
        with open(storage.references_path, "w", encoding="utf-8") as f:
            f.write("id,reftype,title,year,month,url,publisher,authors\n")
            f.write(",article,Orphan,1999,,,,X\n")
            f.write("Kept,article,Real,2000,,,,Y\n")

        assert [r.id for r in storage.load_references()] == ["Kept"]

    def test_header_row(self, storage, sample_reference):
        storage.save_references([sample_reference])

        with open(storage.references_path, encoding="utf-8") as f:
            header = f.readline().strip()

        assert header == "id,reftype,title,year,month,url,publisher,authors"

    def test_ragged_rows(self, storage):
        with open(storage.references_path, "w", encoding="utf-8") as f:
            f.write("id,reftype,title,year,month,url,publisher,authors\n")
            f.write("Short,article,Only a title\n")
            f.write("\n")
            f.write("Many,book,T,2001,May,u,p,A, B ,C,\n")

        short, many = storage.load_references()

        assert short.id == "Short"
        assert short.title == "Only a title"
        assert short.publisher == ""
        assert short.authors == []
        assert many.ref_type == "book"
        assert many.authors == ["A", " B ", "C"]

    def test_header_is_skipped_unconditionally(self, storage):
        with open(storage.references_path, "w", encoding="utf-8") as f:
            f.write("First,article,Looks like data,1999,,,,X\n")
            f.write("Second,article,Real,2000,,,,Y\n")

        assert [r.id for r in storage.load_references()] == ["Second"]

    def test_missing_file_is_empty(self, storage):
        assert storage.load_references() == []
        assert storage.load_projects() == []

    def test_unreadable_file_raises(self, tmp_path):
        storage = CsvStorage(str(tmp_path), str(tmp_path / "projects.csv"))

        with pytest.raises(StorageError):
            storage.load_references()

    def test_save_overwrites(self, storage, sample_reference):
        storage.save_references([sample_reference, Reference(id="Other", authors=["O"])])
        storage.save_references([sample_reference])

        assert storage.load_references() == [sample_reference]


class TestProjectTable:

    def test_round_trip(self, storage):
        project = Project("P1", "Thesis, chapter 2")
        project.add_reference("A2000")
        project.add_reference("B2001")
        storage.save_projects([project, Project("P2", "")])

        loaded = storage.load_projects()

        assert [(p.id, p.title, ids) for p, ids in loaded] == [
            ("P1", "Thesis, chapter 2", ["A2000", "B2001"]),
            ("P2", "", []),
        ]

    def test_loaded_projects_come_back_unlinked(self, storage):
        project = Project("P1", "T")
        project.add_reference("A2000")
        storage.save_projects([project])

        (loaded, ids), = storage.load_projects()

        assert loaded.reference_count() == 0
        assert ids == ["A2000"]

    def test_ragged_project_rows(self, storage):
        with open(storage.projects_path, "w", encoding="utf-8") as f:
            f.write("id,title,references\n")
            f.write("Lonely\n")
            f.write(",no id\n")
            f.write("P,Title,R1,,R2\n")

        loaded = storage.load_projects()

        assert [(p.id, p.title, ids) for p, ids in loaded] == [
            ("Lonely", "", []),
            ("P", "Title", ["R1", "R2"]),
        ]

    def test_write_failure_raises(self, tmp_path):
        storage = CsvStorage(
            str(tmp_path / "references.csv"),
            str(tmp_path / "missing" / "projects.csv"),
        )

        with pytest.raises(StorageError):
            storage.save_projects([Project("P1", "T")])
