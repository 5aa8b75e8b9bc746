"""
Interactive session driving the menu screens.

The loop is: render the current screen, read one line, erase exactly what
the screen printed plus the echoed input line, then move to the screen the
handler returns.
"""
import logging
from typing import List, Optional

from .config import DEFAULT_REF_TYPE
from .exceptions import BibliographyError
from .repository import Repository
from .screens import MainMenu, Screen
from .terminal import Terminal

logger = logging.getLogger(__name__)


class Session:
    """
    Presents screens and turns user input into Repository operations.

    Attributes:
        repo: Repository holding all references and projects
        terminal: Render surface
        default_ref_type: Entry type given to new references
    """

    def __init__(self, repo: Repository, terminal: Optional[Terminal] = None,
                 default_ref_type: str = DEFAULT_REF_TYPE):
        self.repo = repo
        self.terminal = terminal if terminal is not None else Terminal()
        self.default_ref_type = default_ref_type
        self._notices: List[str] = []

    def notify(self, message: str) -> None:
        """Queue a message for the top of the next screen."""
        self._notices.append(message)

    def show_notices(self) -> int:
        """Print queued save failures and notices; return the line count."""
        messages = self.repo.drain_storage_errors() + self._notices
        self._notices = []
        return self.terminal.show(*messages)

    def start(self) -> List[str]:
        """
        Clear the screen, load both tables and print the startup banner.

        Returns:
            Load error messages (already printed)
        """
        self.terminal.clear()
        errors = self.repo.load()
        self.terminal.show(
            *errors,
            "Reference manager",
            f"\t- Loaded {self.repo.project_count()} project(s)",
            f"\t- Loaded {self.repo.reference_count()} reference(s)",
        )
        return errors

    def step(self, screen: Screen) -> Optional[Screen]:
        """Run one render / read / erase / transition cycle."""
        printed = screen.render(self)
        text = self.terminal.read_line()
        self.terminal.erase(printed + 1)
        try:
            return screen.handle(self, text)
        except BibliographyError as e:
            logger.info(f"Rejected input {text!r} on {screen!r}: {e}")
            self.notify(str(e))
            return screen

    def run(self, screen: Optional[Screen] = None) -> None:
        """Drive the menu until the main menu is left with empty input."""
        screen = screen if screen is not None else MainMenu()
        while screen is not None:
            screen = self.step(screen)
        self.terminal.show("Exiting...")
        logger.info("Session finished")
