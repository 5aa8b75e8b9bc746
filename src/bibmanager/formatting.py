"""Citation export and reference display formatting."""
from typing import Iterable, List

from .models import Reference

EXPORT_FIELDS = ("title", "author", "year", "month", "url", "publisher")


def format_authors(authors: List[str], separator: str = " and ") -> str:
    """Join an author list in order."""
    return separator.join(authors)


class CitationFormatter:
    """Render references as BibLaTeX records and as plain field listings."""

    @staticmethod
    def citation_entry(ref: Reference) -> str:
        """
        Render one reference as a citation record.

        Values are written as they are stored; braces inside a value are
        not escaped.
        """
        values = {
            "title": ref.title,
            "author": format_authors(ref.authors),
            "year": ref.year,
            "month": ref.month,
            "url": ref.url,
            "publisher": ref.publisher,
        }
        lines = [f"@{ref.ref_type}{{{ref.id},"]
        lines.extend(f"\t{name} = {{{values[name]}}}," for name in EXPORT_FIELDS)
        lines.append("}")
        return "\n".join(lines) + "\n"

    @classmethod
    def export_block(cls, references: Iterable[Reference]) -> str:
        """Concatenate the records of ``references``; empty input gives ''."""
        return "".join(cls.citation_entry(ref) for ref in references)

    @staticmethod
    def detail_lines(ref: Reference) -> List[str]:
        """Field listing shown by the reference view screen."""
        return [
            f"Title: {ref.title}",
            f"Authors: {format_authors(ref.authors, ', ')}",
            f"Publisher: {ref.publisher}",
            f"Year: {ref.year}",
            f"Month: {ref.month}",
            f"URL: {ref.url}",
        ]

    @staticmethod
    def listing_line(item_id: str, title: str) -> str:
        """One ``id : title`` row of a selection list."""
        return f"\t{item_id} : {title}"
