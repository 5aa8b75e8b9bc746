"""Pytest configuration and fixtures."""
import os
import sys
from pathlib import Path
from typing import Callable, List

import pytest

# Add the src directory to the Python path
SRC_PATH = Path(__file__).parent.parent / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from bibmanager.models import Project, Reference  # noqa: E402
from bibmanager.repository import Repository  # noqa: E402
from bibmanager.session import Session  # noqa: E402
from bibmanager.storage import CsvStorage  # noqa: E402
from bibmanager.terminal import BufferTerminal  # noqa: E402


@pytest.fixture
def storage(tmp_path) -> CsvStorage:
    """Storage backed by CSV files in a temporary directory."""
    return CsvStorage(
        str(tmp_path / "references.csv"),
        str(tmp_path / "projects.csv"),
    )


@pytest.fixture
def repo(storage) -> Repository:
    """Empty repository writing through to temporary files."""
    repository = Repository(storage)
    repository.load()
    return repository


@pytest.fixture
def sample_reference() -> Reference:
    """Return a sample reference for testing."""
    return Reference(
        id="AdaLovelace1843",
        ref_type="article",
        title="Notes on the Analytical Engine",
        year="1843",
        month="October",
        url="https://example.org/notes",
        publisher="Taylor's Scientific Memoirs",
        authors=["Ada Lovelace", "Luigi Menabrea"],
    )


@pytest.fixture
def populated_repo(repo, sample_reference) -> Repository:
    """Repository with two references and two projects."""
    repo.add_reference(sample_reference)
    repo.create_reference(
        title="On Computable Numbers",
        year="1936",
        month="",
        publisher="LMS",
        url="",
        authors=["Alan Turing"],
    )
    repo.add_project(Project("P1", "Engines"))
    repo.add_project(Project("P2", "History"))
    return repo


@pytest.fixture
def run_session(repo) -> Callable[[List[str]], BufferTerminal]:
    """Run a scripted session against ``repo`` and return its terminal."""
    def _run(inputs: List[str]) -> BufferTerminal:
        terminal = BufferTerminal(inputs)
        session = Session(repo, terminal)
        session.start()
        session.run()
        return terminal
    return _run


@pytest.fixture(autouse=True)
def mock_environment_vars(tmp_path) -> None:
    """Keep tests away from real data files."""
    os.environ.update({
        "BIBMANAGER_REFERENCES_FILE": str(tmp_path / "references.csv"),
        "BIBMANAGER_PROJECTS_FILE": str(tmp_path / "projects.csv"),
        "BIBMANAGER_LOG_DIR": str(tmp_path / "logs"),
        "LOG_LEVEL": "WARNING",
    })
