"""
Menu screens for the interactive session.

Each screen is one state of the menu: ``render`` prints it and returns how
many lines it printed, ``handle`` consumes one line of input and returns the
next screen (``None`` ends the session). Screens hold ids only and look up
current values through the repository every time they render.

Handlers may raise BibliographyError subclasses; the session shows the
message and redisplays the same screen.
"""
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Sequence, Tuple

from .exceptions import BibliographyError, DuplicateIdError, ValidationError
from .formatting import CitationFormatter
from .models import Reference
from .utils.input_validation import InputValidator

if TYPE_CHECKING:
    from .session import Session

INVALID_INPUT = "Invalid input"
RETURN_HINT = "\tPress enter to return"


def _invalid() -> ValidationError:
    return ValidationError(INVALID_INPUT)


class Screen:
    """Base class for a menu state."""

    def render(self, session: "Session") -> int:
        """Print pending notices and the screen; return the line count."""
        return session.show_notices() + self.draw(session)

    def draw(self, session: "Session") -> int:
        raise NotImplementedError

    def handle(self, session: "Session", text: str) -> Optional["Screen"]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Pause(Screen):
    """Show a message and wait for enter before moving on."""

    def __init__(self, message: str, next_screen: Screen):
        self.message = message
        self.next_screen = next_screen

    def draw(self, session: "Session") -> int:
        return session.terminal.show(self.message, "Press enter to continue")

    def handle(self, session: "Session", text: str) -> Screen:
        return self.next_screen

    def __repr__(self) -> str:
        return f"Pause({self.message!r}, {self.next_screen!r})"


class Prompt(Screen):
    """Ask for a single value and pass it to ``apply``."""

    def __init__(self, label: str, apply: Callable[["Session", str], Screen]):
        self.label = label
        self.apply = apply

    def draw(self, session: "Session") -> int:
        return session.terminal.show(self.label)

    def handle(self, session: "Session", text: str) -> Screen:
        return self.apply(session, text)


class Form(Screen):
    """
    Ask for several values one after another.

    Answers given so far stay on screen above the current question.
    """

    fields: Sequence[Tuple[str, str]] = ()

    def __init__(self):
        self.values: Dict[str, str] = {}

    @property
    def current(self) -> Optional[Tuple[str, str]]:
        for key, label in self.fields:
            if key not in self.values:
                return key, label
        return None

    def answered_lines(self) -> List[str]:
        return [f"{label} {self.values[key]}" for key, label in self.fields if key in self.values]

    def draw(self, session: "Session") -> int:
        _, label = self.current
        return session.terminal.show(*self.answered_lines(), label)

    def handle(self, session: "Session", text: str) -> Screen:
        key, _ = self.current
        self.values[key] = text
        if self.current is not None:
            return self
        try:
            return self.fields_answered(session)
        except BibliographyError:
            # Ask the last question again
            del self.values[key]
            raise

    def fields_answered(self, session: "Session") -> Screen:
        return self.complete(session)

    def complete(self, session: "Session") -> Screen:
        raise NotImplementedError


# Main menu

class MainMenu(Screen):

    def draw(self, session: "Session") -> int:
        return session.terminal.show(
            "Main menu",
            "\t1. Select a project",
            "\t2. Select a reference",
            "\tPress enter to exit",
        )

    def handle(self, session: "Session", text: str) -> Optional[Screen]:
        if text == "1":
            return ProjectList()
        if text == "2":
            return ReferenceList()
        if text == "":
            return None
        raise _invalid()


# Projects

class ProjectList(Screen):

    def draw(self, session: "Session") -> int:
        lines = ["Select a project"]
        lines += [CitationFormatter.listing_line(p.id, p.title) for p in session.repo.list_projects()]
        lines += ["\t0 : Create new project", RETURN_HINT]
        return session.terminal.show(*lines)

    def handle(self, session: "Session", text: str) -> Screen:
        if text == "":
            return MainMenu()
        if text == "0":
            return CreateProject()
        if session.repo.has_project(text):
            return ProjectDetail(text)
        raise _invalid()


class CreateProject(Form):
    fields = (("title", "Enter project title:"), ("id", "Enter id:"))

    def complete(self, session: "Session") -> Screen:
        try:
            session.repo.create_project(self.values["title"], self.values["id"])
        except ValidationError as e:
            return Pause(str(e), ProjectList())
        return Pause("Project created", ProjectList())


class ProjectScreen(Screen):
    """A screen about one project."""

    def __init__(self, project_id: str):
        self.project_id = project_id

    def project_title(self, session: "Session") -> str:
        return session.repo.get_project(self.project_id).title

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.project_id!r})"


class ProjectDetail(ProjectScreen):

    def draw(self, session: "Session") -> int:
        return session.terminal.show(
            f"Selected project: {self.project_title(session)}",
            "\t1. View references",
            "\t2. Add reference",
            "\t3. Remove reference",
            "\t4. Export references",
            "\t5. Edit project",
            "\t6. Delete project",
            RETURN_HINT,
        )

    def handle(self, session: "Session", text: str) -> Screen:
        targets = {
            "1": ViewLinkedReferences,
            "2": LinkReference,
            "3": UnlinkReference,
            "4": ExportReferences,
            "5": EditProject,
            "6": DeleteProject,
        }
        if text == "":
            return ProjectList()
        if text in targets:
            return targets[text](self.project_id)
        raise _invalid()


class ViewLinkedReferences(ProjectScreen):

    def draw(self, session: "Session") -> int:
        lines = [f"References for project: {self.project_title(session)}"]
        lines += [
            CitationFormatter.listing_line(ref.id, ref.title)
            for ref in session.repo.linked_references(self.project_id)
        ]
        lines.append("Press enter to go back")
        return session.terminal.show(*lines)

    def handle(self, session: "Session", text: str) -> Screen:
        return ProjectDetail(self.project_id)


class LinkReference(ProjectScreen):

    def draw(self, session: "Session") -> int:
        lines = ["Select a reference to add"]
        lines += [
            CitationFormatter.listing_line(ref.id, ref.title)
            for ref in session.repo.unlinked_references(self.project_id)
        ]
        lines += ["\t0 : New reference", RETURN_HINT]
        return session.terminal.show(*lines)

    def handle(self, session: "Session", text: str) -> Screen:
        if text == "":
            return ProjectDetail(self.project_id)
        if text == "0":
            return CreateReference(on_created=self._link_new)
        if not session.repo.has_reference(text):
            raise _invalid()
        session.repo.link_reference(self.project_id, text)
        return Pause("Reference added", ProjectDetail(self.project_id))

    def _link_new(self, session: "Session", ref: Reference) -> Screen:
        session.repo.link_reference(self.project_id, ref.id)
        return Pause(f"Reference {ref.id} created and added", ProjectDetail(self.project_id))


class UnlinkReference(ProjectScreen):

    def draw(self, session: "Session") -> int:
        lines = ["Select a reference to remove"]
        lines += [
            CitationFormatter.listing_line(ref.id, ref.title)
            for ref in session.repo.linked_references(self.project_id)
        ]
        lines.append(RETURN_HINT)
        return session.terminal.show(*lines)

    def handle(self, session: "Session", text: str) -> Screen:
        if text == "":
            return ProjectDetail(self.project_id)
        if not session.repo.get_project(self.project_id).has_reference(text):
            raise _invalid()
        session.repo.unlink_reference(self.project_id, text)
        return Pause("Reference removed", ProjectDetail(self.project_id))


class ExportReferences(ProjectScreen):

    def draw(self, session: "Session") -> int:
        block = CitationFormatter.export_block(session.repo.linked_references(self.project_id))
        return session.terminal.show(
            f"Exporting references for project: {self.project_title(session)}",
            "",
            block,
            "Press enter to continue",
        )

    def handle(self, session: "Session", text: str) -> Screen:
        return ProjectDetail(self.project_id)


class EditProject(ProjectScreen):

    def draw(self, session: "Session") -> int:
        return session.terminal.show(
            f"Editing project: {self.project_title(session)}",
            "\t1. Edit title",
            "\t2. Edit id",
            RETURN_HINT,
        )

    def handle(self, session: "Session", text: str) -> Screen:
        if text == "1":
            return Prompt("Enter new title", self._set_title)
        if text == "2":
            return Prompt("Enter new id", self._set_id)
        return ProjectDetail(self.project_id)

    def _set_title(self, session: "Session", title: str) -> Screen:
        session.repo.set_project_title(self.project_id, title)
        return Pause("Title changed", EditProject(self.project_id))

    def _set_id(self, session: "Session", new_id: str) -> Screen:
        try:
            project = session.repo.rename_project_id(self.project_id, new_id)
        except DuplicateIdError as e:
            return Pause(str(e), EditProject(self.project_id))
        return Pause("Id changed", EditProject(project.id))


class DeleteProject(ProjectScreen):

    def draw(self, session: "Session") -> int:
        return session.terminal.show(
            f"Are you sure you want to delete project {self.project_title(session)} ?",
            "y/n",
        )

    def handle(self, session: "Session", text: str) -> Screen:
        confirmed = InputValidator.confirmation(text)
        if confirmed is None:
            raise _invalid()
        if not confirmed:
            return ProjectDetail(self.project_id)
        session.repo.delete_project(self.project_id)
        return Pause("Project deleted", ProjectList())


# References

class CreateReference(Form):
    """
    Collect a new reference's fields, then its authors until a blank line.

    ``on_created`` receives the stored reference and picks the next screen.
    """

    fields = (
        ("title", "Enter title:"),
        ("year", "Enter year:"),
        ("month", "Enter month:"),
        ("publisher", "Enter publisher:"),
        ("url", "Enter url:"),
    )
    AUTHOR_PROMPT = "Enter author: (Press enter to finish)"

    def __init__(self, on_created: Callable[["Session", Reference], Screen]):
        super().__init__()
        self.authors: List[str] = []
        self.on_created = on_created

    def answered_lines(self) -> List[str]:
        return super().answered_lines() + [f"Author: {name}" for name in self.authors]

    def draw(self, session: "Session") -> int:
        if self.current is not None:
            return super().draw(session)
        return session.terminal.show(*self.answered_lines(), self.AUTHOR_PROMPT)

    def fields_answered(self, session: "Session") -> Screen:
        return self

    def handle(self, session: "Session", text: str) -> Screen:
        if self.current is not None:
            return super().handle(session, text)

        name = text.strip()
        if name:
            self.authors.append(name)
            return self
        if not self.authors:
            raise ValidationError("Please enter at least one author")
        return self.complete(session)

    def complete(self, session: "Session") -> Screen:
        ref = session.repo.create_reference(
            title=self.values["title"],
            year=self.values["year"],
            month=self.values["month"],
            publisher=self.values["publisher"],
            url=self.values["url"],
            authors=self.authors,
            ref_type=session.default_ref_type,
        )
        return self.on_created(session, ref)


class ReferenceList(Screen):

    def draw(self, session: "Session") -> int:
        lines = ["Select a reference"]
        lines += [CitationFormatter.listing_line(r.id, r.title) for r in session.repo.list_references()]
        lines.append(RETURN_HINT)
        return session.terminal.show(*lines)

    def handle(self, session: "Session", text: str) -> Screen:
        if text == "":
            return MainMenu()
        if session.repo.has_reference(text):
            return ReferenceDetail(text)
        raise _invalid()


class ReferenceScreen(Screen):
    """A screen about one reference."""

    def __init__(self, reference_id: str):
        self.reference_id = reference_id

    def reference(self, session: "Session") -> Reference:
        return session.repo.get_reference(self.reference_id)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.reference_id!r})"


class ReferenceDetail(ReferenceScreen):

    def draw(self, session: "Session") -> int:
        return session.terminal.show(
            f"Selected reference: {self.reference(session).title}",
            "\t1. View reference",
            "\t2. Edit reference",
            "\t3. Delete reference",
            RETURN_HINT,
        )

    def handle(self, session: "Session", text: str) -> Screen:
        if text == "":
            return ReferenceList()
        if text == "1":
            return ViewReference(self.reference_id)
        if text == "2":
            return EditReference(self.reference_id)
        if text == "3":
            return DeleteReference(self.reference_id)
        raise _invalid()


class ViewReference(ReferenceScreen):

    def draw(self, session: "Session") -> int:
        lines = CitationFormatter.detail_lines(self.reference(session))
        return session.terminal.show(*lines, "Press enter to continue")

    def handle(self, session: "Session", text: str) -> Screen:
        return ReferenceDetail(self.reference_id)


class EditReference(ReferenceScreen):
    # menu key -> (field, label)
    FIELDS = {
        "1": ("title", "Title"),
        "2": ("year", "Year"),
        "3": ("month", "Month"),
        "4": ("url", "Url"),
        "6": ("publisher", "Publisher"),
    }

    def draw(self, session: "Session") -> int:
        return session.terminal.show(
            f"Editing reference: {self.reference(session).title}",
            "\t1. Edit title",
            "\t2. Edit year",
            "\t3. Edit month",
            "\t4. Edit url",
            "\t5. Edit authors",
            "\t6. Edit publisher",
            RETURN_HINT,
        )

    def handle(self, session: "Session", text: str) -> Screen:
        if text == "":
            return ReferenceDetail(self.reference_id)
        if text == "5":
            return EditAuthors(self.reference_id)
        if text not in self.FIELDS:
            raise _invalid()

        field_name, label = self.FIELDS[text]

        def apply(current: "Session", value: str) -> Screen:
            current.repo.update_reference(self.reference_id, **{field_name: value})
            return Pause(f"{label} changed", EditReference(self.reference_id))

        return Prompt(f"Enter new {field_name}", apply)


class EditAuthors(ReferenceScreen):

    def draw(self, session: "Session") -> int:
        return session.terminal.show(
            f"Authors: {', '.join(self.reference(session).authors)}",
            "\t1. Add author",
            "\t2. Remove author",
            RETURN_HINT,
        )

    def handle(self, session: "Session", text: str) -> Screen:
        if text == "":
            return EditReference(self.reference_id)
        if text == "1":
            return Prompt("Enter new author", self._add)
        if text == "2":
            return RemoveAuthor(self.reference_id)
        raise _invalid()

    def _add(self, session: "Session", name: str) -> Screen:
        session.repo.add_author(self.reference_id, name)
        return Pause("Author added", EditReference(self.reference_id))


class RemoveAuthor(ReferenceScreen):

    def draw(self, session: "Session") -> int:
        authors = self.reference(session).authors
        lines = ["Enter author to remove"]
        lines += [f"\t{i} : {name}" for i, name in enumerate(authors)]
        lines.append(RETURN_HINT)
        return session.terminal.show(*lines)

    def handle(self, session: "Session", text: str) -> Screen:
        if text == "":
            return EditAuthors(self.reference_id)
        index = InputValidator.parse_index(text, len(self.reference(session).authors))
        session.repo.remove_author(self.reference_id, index)
        return Pause("Author removed", EditReference(self.reference_id))


class DeleteReference(ReferenceScreen):

    def draw(self, session: "Session") -> int:
        return session.terminal.show(
            f"Deleting reference: {self.reference(session).title}",
            "Are you sure you want to delete this reference? (y/n)",
        )

    def handle(self, session: "Session", text: str) -> Screen:
        confirmed = InputValidator.confirmation(text)
        if confirmed is None:
            raise _invalid()
        if not confirmed:
            return ReferenceDetail(self.reference_id)
        session.repo.delete_reference(self.reference_id)
        return Pause("Reference deleted", ReferenceList())
