"""Tests for input validation helpers."""
import pytest

from bibmanager.exceptions import ValidationError
from bibmanager.utils.input_validation import InputValidator


class TestRequireText:

    def test_strips(self):
        assert InputValidator.require_text("  P1 ", "Project id") == "P1"

    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_blank_rejected(self, value):
        with pytest.raises(ValidationError, match="Project id cannot be empty"):
            InputValidator.require_text(value, "Project id")


class TestParseIndex:

    def test_valid(self):
        assert InputValidator.parse_index("1", 2) == 1
        assert InputValidator.parse_index(" 0 ", 1) == 0

    @pytest.mark.parametrize("text", ["2", "-1", "x", "", "1.5"])
    def test_invalid(self, text):
        with pytest.raises(ValidationError, match="Invalid input"):
            InputValidator.parse_index(text, 2)


class TestConfirmation:

    @pytest.mark.parametrize("text,expected", [
        ("y", True), ("Y", True), ("yes", True),
        ("n", False), ("no", False),
        ("", None), ("maybe", None),
    ])
    def test_answers(self, text, expected):
        assert InputValidator.confirmation(text) is expected


def test_clean_authors():
    assert InputValidator.clean_authors([" A ", "", "  ", "B"]) == ["A", "B"]
