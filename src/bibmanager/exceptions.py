"""Errors raised by the reference manager."""


class BibliographyError(Exception):
    """Base class for all reference manager errors."""


class StorageError(BibliographyError):
    """Raised when a CSV store cannot be read or written."""

    def __init__(self, path: str, error: Exception):
        self.path = path
        self.error = error
        super().__init__(f"{path}: {error}")


class ValidationError(BibliographyError):
    """Raised when user supplied data is rejected."""


class DuplicateIdError(ValidationError):
    """Raised when an id is already taken."""

    def __init__(self, item_id: str, kind: str = "Project"):
        self.item_id = item_id
        super().__init__(f"{kind} with this id already exists")


class AlreadyLinkedError(ValidationError):
    """Raised when a reference is linked to a project twice."""

    def __init__(self, project_id: str, reference_id: str):
        self.project_id = project_id
        self.reference_id = reference_id
        super().__init__("Reference already in project")


class NotFoundError(BibliographyError):
    """Raised when a project or reference id does not exist."""

    def __init__(self, item_id: str, kind: str = "Reference"):
        self.item_id = item_id
        super().__init__(f"{kind} '{item_id}' not found")
