"""
CSV persistence for references and projects.

Two flat tables, each with a header row followed by one row per entity:

    references.csv: id, reftype, title, year, month, url, publisher, author1, ...
    projects.csv:   id, title, refId1, refId2, ...

Rows are ragged: the trailing author / reference id columns vary in length.
Saves always rewrite the whole file (temp file + rename).
"""
import csv
import logging
import os
import shutil
import tempfile
from typing import Iterable, List, Tuple

from .exceptions import StorageError
from .models import Project, Reference

logger = logging.getLogger(__name__)

REFERENCE_HEADER = ["id", "reftype", "title", "year", "month", "url", "publisher", "authors"]
PROJECT_HEADER = ["id", "title", "references"]

# Fixed columns before the variable author list
_REFERENCE_FIELDS = 7


class CsvStorage:
    """
    Loads and saves the reference and project tables.

    No business logic lives here; the Repository decides what to save and when.

    Attributes:
        references_path: Path of the references CSV file
        projects_path: Path of the projects CSV file
    """

    def __init__(self, references_path: str = "references.csv",
                 projects_path: str = "projects.csv"):
        self.references_path = references_path
        self.projects_path = projects_path

    def load_references(self) -> List[Reference]:
        """
        Load all references.

        A missing file is an empty table.

        Raises:
            StorageError: If the file exists but cannot be read or parsed
        """
        references = []
        for row in self._read_rows(self.references_path):
            if not row[0]:
                logger.warning(f"Skipping reference row without id in {self.references_path}")
                continue
            if len(row) < _REFERENCE_FIELDS:
                row = row + [""] * (_REFERENCE_FIELDS - len(row))
            authors = list(row[_REFERENCE_FIELDS:])
            # Trailing empty cells carry no author
            while authors and not authors[-1]:
                authors.pop()
            references.append(Reference(
                id=row[0],
                ref_type=row[1],
                title=row[2],
                year=row[3],
                month=row[4],
                url=row[5],
                publisher=row[6],
                authors=authors,
            ))
        return references

    def load_projects(self) -> List[Tuple[Project, List[str]]]:
        """
        Load all projects.

        Returns:
            (project, reference ids) pairs; the project comes back with no
            links so the caller can check each id before linking it.

        Raises:
            StorageError: If the file exists but cannot be read or parsed
        """
        projects = []
        for row in self._read_rows(self.projects_path):
            if not row[0]:
                logger.warning(f"Skipping project row without id in {self.projects_path}")
                continue
            title = row[1] if len(row) > 1 else ""
            reference_ids = [r.strip() for r in row[2:] if r.strip()]
            projects.append((Project(row[0], title), reference_ids))
        return projects

    def save_references(self, references: Iterable[Reference]) -> None:
        """
        Rewrite the references file.

        Raises:
            StorageError: If the write fails
        """
        rows = [
            [ref.id, ref.ref_type, ref.title, ref.year, ref.month, ref.url, ref.publisher]
            + list(ref.authors)
            for ref in references
        ]
        self._write_rows(self.references_path, REFERENCE_HEADER, rows)

    def save_projects(self, projects: Iterable[Project]) -> None:
        """
        Rewrite the projects file.

        Raises:
            StorageError: If the write fails
        """
        rows = [project.to_row() for project in projects]
        self._write_rows(self.projects_path, PROJECT_HEADER, rows)

    def _read_rows(self, path: str) -> List[List[str]]:
        if not os.path.exists(path):
            logger.info(f"{path} does not exist, starting empty")
            return []

        try:
            with open(path, "r", newline="", encoding="utf-8") as f:
                reader = csv.reader(f)
                next(reader, None)  # header
                return [row for row in reader if row]
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise StorageError(path, e) from e

    def _write_rows(self, path: str, header: List[str], rows: List[List[str]]) -> None:
        target_dir = os.path.dirname(os.path.abspath(path)) or '.'
        temp_path = None
        try:
            fd, temp_path = tempfile.mkstemp(suffix='.csv.tmp', dir=target_dir)
            with os.fdopen(fd, 'w', newline='', encoding='utf-8') as tf:
                writer = csv.writer(tf)
                writer.writerow(header)
                writer.writerows(rows)
                tf.flush()
                os.fsync(tf.fileno())

            shutil.move(temp_path, path)
        except (OSError, csv.Error) as e:
            if temp_path is not None and os.path.exists(temp_path):
                try:
                    os.remove(temp_path)
                except OSError:
                    pass
            raise StorageError(path, e) from e

    def __repr__(self) -> str:
        return (
            f"CsvStorage(references={self.references_path!r}, "
            f"projects={self.projects_path!r})"
        )
