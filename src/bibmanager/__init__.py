"""Personal bibliography manager: references, projects and citation export."""
from .config import Config
from .models import Project, Reference
from .repository import Repository
from .session import Session
from .storage import CsvStorage

__version__ = "1.0.0"
__all__ = ["Config", "CsvStorage", "Project", "Reference", "Repository", "Session"]
