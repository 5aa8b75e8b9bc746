"""
In-memory store of references and projects.

The Repository is the only owner of the two mappings. Every mutation is
written through to the CSV storage before the method returns.

Design principles:
- Projects hold reference ids; values are resolved here
- Deleting a reference unlinks it from every project in the same call
- Listings are sorted by id, project links keep link order
"""
import logging
import string
from typing import Dict, List, Optional

from .config import DEFAULT_REF_TYPE
from .exceptions import (
    AlreadyLinkedError,
    DuplicateIdError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from .models import Project, Reference
from .storage import CsvStorage
from .utils.error_handling import storage_error_handler
from .utils.input_validation import InputValidator
from .utils.logging_setup import log_operation

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "year", "month", "url", "publisher")


class Repository:
    """
    Owns all References and Projects and keeps them consistent on disk.

    This class does NOT provide thread-safety guarantees; the session drives
    it from a single thread.

    Attributes:
        storage: CSV storage adapter the repository writes through to
        storage_errors: Save failures not yet shown to the user
    """

    def __init__(self, storage: Optional[CsvStorage] = None):
        self.storage = storage if storage is not None else CsvStorage()
        self.storage_errors: List[str] = []
        self._references: Dict[str, Reference] = {}
        self._projects: Dict[str, Project] = {}

    # Loading

    def load(self) -> List[str]:
        """
        Replace the in-memory state with the stored tables.

        A table that cannot be read leaves that store empty. Project links to
        references that do not exist are dropped.

        Returns:
            Error messages for tables that failed to load
        """
        errors = []
        self._references = {}
        self._projects = {}

        try:
            for ref in self.storage.load_references():
                self._references[ref.id] = ref
        except StorageError as e:
            logger.error(f"Failed to load references: {e}")
            errors.append(str(e))

        try:
            for project, reference_ids in self.storage.load_projects():
                for ref_id in reference_ids:
                    if ref_id in self._references:
                        project.add_reference(ref_id)
                    else:
                        logger.warning(
                            f"Project '{project.id}' links unknown reference '{ref_id}', dropping it"
                        )
                self._projects[project.id] = project
        except StorageError as e:
            logger.error(f"Failed to load projects: {e}")
            errors.append(str(e))

        logger.info(
            f"Loaded {len(self._projects)} project(s) and {len(self._references)} reference(s)"
        )
        return errors

    # Lookup

    def get_reference(self, reference_id: str) -> Reference:
        """
        Raises:
            NotFoundError: If no reference has this id
        """
        try:
            return self._references[reference_id]
        except KeyError:
            raise NotFoundError(reference_id, "Reference") from None

    def get_project(self, project_id: str) -> Project:
        """
        Raises:
            NotFoundError: If no project has this id
        """
        try:
            return self._projects[project_id]
        except KeyError:
            raise NotFoundError(project_id, "Project") from None

    def has_reference(self, reference_id: str) -> bool:
        return reference_id in self._references

    def has_project(self, project_id: str) -> bool:
        return project_id in self._projects

    def list_references(self) -> List[Reference]:
        """Return all references sorted by id."""
        return [self._references[rid] for rid in sorted(self._references)]

    def list_projects(self) -> List[Project]:
        """Return all projects sorted by id."""
        return [self._projects[pid] for pid in sorted(self._projects)]

    def reference_count(self) -> int:
        return len(self._references)

    def project_count(self) -> int:
        return len(self._projects)

    def linked_references(self, project_id: str) -> List[Reference]:
        """Resolve a project's links, in link order."""
        project = self.get_project(project_id)
        return [self._references[rid] for rid in project.reference_ids]

    def unlinked_references(self, project_id: str) -> List[Reference]:
        """References not linked to the project, sorted by id."""
        project = self.get_project(project_id)
        return [ref for ref in self.list_references() if not project.has_reference(ref.id)]

    # References

    def add_reference(self, ref: Reference) -> None:
        """Insert a reference, replacing any with the same id."""
        self._references[ref.id] = ref
        self._save_references()

    def generate_reference_id(self, first_author: str, year: str) -> str:
        """
        Build an id from the first author and year with spaces removed.

        A taken id gets a letter suffix: ``a``, then ``b`` and so on.
        """
        base = (first_author + year).replace(" ", "")
        if base not in self._references:
            return base

        for letter in string.ascii_lowercase:
            candidate = base + letter
            if candidate not in self._references:
                return candidate

        # Past "z": number the suffix instead
        n = 1
        while f"{base}z{n}" in self._references:
            n += 1
        return f"{base}z{n}"

    def create_reference(self, title: str, year: str, month: str, publisher: str,
                         url: str, authors: List[str],
                         ref_type: str = DEFAULT_REF_TYPE) -> Reference:
        """
        Create, store and persist a new reference.

        Raises:
            ValidationError: If no author is given
        """
        authors = InputValidator.clean_authors(authors)
        if not authors:
            raise ValidationError("Please enter at least one author")

        ref = Reference(
            id=self.generate_reference_id(authors[0], year),
            ref_type=ref_type,
            title=title,
            year=year,
            month=month,
            url=url,
            publisher=publisher,
            authors=authors,
        )
        self._references[ref.id] = ref
        self._save_references()
        log_operation("Reference created", ref.id)
        return ref

    def update_reference(self, reference_id: str, **fields: str) -> Reference:
        """
        Overwrite metadata fields (title, year, month, url, publisher).

        The id is not regenerated when year changes.
        """
        ref = self.get_reference(reference_id)
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot edit field(s): {', '.join(sorted(unknown))}")

        for name, value in fields.items():
            setattr(ref, name, value)
        self._save_references()
        log_operation("Reference updated", f"{reference_id} {sorted(fields)}")
        return ref

    def add_author(self, reference_id: str, name: str) -> Reference:
        ref = self.get_reference(reference_id)
        name = InputValidator.require_text(name, "Author")
        ref.authors.append(name)
        self._save_references()
        log_operation("Author added", f"{reference_id}: {name}")
        return ref

    def remove_author(self, reference_id: str, index: int) -> str:
        """
        Remove the author at ``index``.

        Raises:
            ValidationError: If the index is out of range or it is the last author
        """
        ref = self.get_reference(reference_id)
        if not 0 <= index < len(ref.authors):
            raise ValidationError("Invalid input")
        if len(ref.authors) == 1:
            raise ValidationError("A reference needs at least one author")

        name = ref.authors.pop(index)
        self._save_references()
        log_operation("Author removed", f"{reference_id}: {name}")
        return name

    def delete_reference(self, reference_id: str) -> None:
        """Remove a reference from the store and from every project."""
        self.get_reference(reference_id)

        for project in self._projects.values():
            project.remove_reference(reference_id)
        del self._references[reference_id]

        self._save_projects()
        self._save_references()
        log_operation("Reference deleted", reference_id)

    # Projects

    def add_project(self, project: Project) -> None:
        """Insert a project, replacing any with the same id."""
        self._projects[project.id] = project
        self._save_projects()

    def create_project(self, title: str, project_id: str) -> Project:
        """
        Create, store and persist a new project.

        Raises:
            ValidationError: If the id is blank
            DuplicateIdError: If the id is taken
        """
        project_id = InputValidator.require_text(project_id, "Project id")
        if project_id in self._projects:
            raise DuplicateIdError(project_id)

        project = Project(project_id, title)
        self._projects[project_id] = project
        self._save_projects()
        log_operation("Project created", project_id)
        return project

    def set_project_title(self, project_id: str, title: str) -> Project:
        project = self.get_project(project_id)
        project.title = title
        self._save_projects()
        log_operation("Project renamed", f"{project_id}: {title}")
        return project

    def rename_project_id(self, old_id: str, new_id: str) -> Project:
        """
        Re-key a project.

        Raises:
            ValidationError: If the new id is blank
            DuplicateIdError: If the new id is taken; nothing changes
        """
        project = self.get_project(old_id)
        new_id = InputValidator.require_text(new_id, "Project id")
        if new_id in self._projects:
            raise DuplicateIdError(new_id)

        del self._projects[old_id]
        project.id = new_id
        self._projects[new_id] = project
        self._save_projects()
        log_operation("Project id changed", f"{old_id} -> {new_id}")
        return project

    def delete_project(self, project_id: str) -> None:
        """Remove a project; its references stay in the store."""
        self.get_project(project_id)
        del self._projects[project_id]
        self._save_projects()
        log_operation("Project deleted", project_id)

    # Links

    def link_reference(self, project_id: str, reference_id: str) -> None:
        """
        Raises:
            NotFoundError: If the project or reference does not exist
            AlreadyLinkedError: If the reference is already in the project
        """
        project = self.get_project(project_id)
        self.get_reference(reference_id)
        if not project.add_reference(reference_id):
            raise AlreadyLinkedError(project_id, reference_id)
        self._save_projects()
        log_operation("Reference linked", f"{reference_id} -> {project_id}")

    def unlink_reference(self, project_id: str, reference_id: str) -> None:
        """
        Raises:
            NotFoundError: If the project does not link the reference
        """
        project = self.get_project(project_id)
        if not project.remove_reference(reference_id):
            raise NotFoundError(reference_id, "Reference")
        self._save_projects()
        log_operation("Reference unlinked", f"{reference_id} -x- {project_id}")

    # Persistence

    def drain_storage_errors(self) -> List[str]:
        """Return and forget queued save failures."""
        errors, self.storage_errors = self.storage_errors, []
        return errors

    @storage_error_handler
    def _save_references(self) -> None:
        self.storage.save_references(self._references.values())

    @storage_error_handler
    def _save_projects(self) -> None:
        self.storage.save_projects(self._projects.values())

    def __repr__(self) -> str:
        return (
            f"Repository(projects={len(self._projects)}, "
            f"references={len(self._references)}, storage={self.storage!r})"
        )
