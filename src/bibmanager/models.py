"""
Data models for the reference manager.

A Project holds reference ids only, never Reference values. Callers resolve
ids through the Repository, so an edited reference is seen by every project
that links it.
"""
from dataclasses import dataclass, field
from typing import List

from .config import DEFAULT_REF_TYPE


@dataclass
class Reference:
    """Represents a bibliographic entry (article, paper, etc.)."""
    id: str
    ref_type: str = DEFAULT_REF_TYPE
    title: str = ""
    year: str = ""
    month: str = ""
    url: str = ""
    publisher: str = ""
    authors: List[str] = field(default_factory=list)


class Project:
    """
    A named collection of reference ids.

    Insertion (link) order is preserved; the same id is never held twice.

    Attributes:
        id: Unique identifier, changed only through Repository.rename_project_id
        title: Human-readable project title
    """

    __slots__ = ('id', 'title', '_reference_ids')

    def __init__(self, project_id: str, title: str = ""):
        if not project_id or not isinstance(project_id, str):
            raise ValueError("project_id must be a non-empty string")

        self.id: str = project_id
        self.title: str = title
        self._reference_ids: List[str] = []

    @property
    def reference_ids(self) -> List[str]:
        """Return a copy of the linked reference ids in link order."""
        return list(self._reference_ids)

    def has_reference(self, reference_id: str) -> bool:
        return reference_id in self._reference_ids

    def add_reference(self, reference_id: str) -> bool:
        """
        Link a reference id.

        Returns:
            True if added, False if it was already linked
        """
        if reference_id in self._reference_ids:
            return False
        self._reference_ids.append(reference_id)
        return True

    def remove_reference(self, reference_id: str) -> bool:
        """
        Unlink a reference id.

        Returns:
            True if removed, False if not found
        """
        try:
            self._reference_ids.remove(reference_id)
            return True
        except ValueError:
            return False

    def reference_count(self) -> int:
        """Return number of linked references."""
        return len(self._reference_ids)

    def to_row(self) -> List[str]:
        """Serialize to a CSV row: id, title, refId1, refId2, ..."""
        return [self.id, self.title] + list(self._reference_ids)

    def __repr__(self) -> str:
        return f"Project(id={self.id!r}, title={self.title!r}, refs={len(self._reference_ids)})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Project):
            return False
        return (
            self.id == other.id
            and self.title == other.title
            and self._reference_ids == other._reference_ids
        )

    def __hash__(self) -> int:
        return hash(self.id)
