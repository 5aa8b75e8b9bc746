"""Input validation utilities."""
from typing import List, Optional

from ..exceptions import ValidationError


class InputValidator:
    """Presence, index and confirmation checks for menu input."""

    @staticmethod
    def require_text(value: str, field_name: str) -> str:
        """Return ``value`` stripped, or raise if it is blank."""
        value = (value or "").strip()
        if not value:
            raise ValidationError(f"{field_name} cannot be empty")
        return value

    @staticmethod
    def parse_index(text: str, length: int) -> int:
        """
        Parse a zero-based list position.

        Raises:
            ValidationError: If ``text`` is not a number in range(length)
        """
        text = text.strip()
        if not text.isdigit():
            raise ValidationError("Invalid input")
        index = int(text)
        if index >= length:
            raise ValidationError("Invalid input")
        return index

    @staticmethod
    def confirmation(text: str) -> Optional[bool]:
        """Map y/n to True/False; anything else is None."""
        answer = text.strip().lower()
        if answer in ('y', 'yes'):
            return True
        if answer in ('n', 'no'):
            return False
        return None

    @staticmethod
    def clean_authors(authors: List[str]) -> List[str]:
        """Strip author names and drop blank ones."""
        return [a.strip() for a in authors if a and a.strip()]
