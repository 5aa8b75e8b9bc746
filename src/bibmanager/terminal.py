"""
Render surface for the interactive session.

Screens print through a Terminal, which tells them how many physical lines
were written so they can erase exactly that many afterwards.
"""
import sys
from typing import List, Optional, TextIO

CLEAR_SCREEN = "\033[2J\033[H"
CLEAR_LINE = "\033[2K"
CURSOR_UP = "\033[A"


def count_lines(text: str) -> int:
    """Physical lines ``print(text)`` occupies (ignoring terminal wrapping)."""
    return text.count("\n") + 1


class Terminal:
    """ANSI terminal writing to ``output`` and reading from ``input_stream``."""

    def __init__(self, output: Optional[TextIO] = None, input_stream: Optional[TextIO] = None):
        self.output = output if output is not None else sys.stdout
        self.input_stream = input_stream if input_stream is not None else sys.stdin

    def show(self, *lines: str) -> int:
        """
        Print each argument on its own line.

        Returns:
            Number of physical lines printed
        """
        count = 0
        for line in lines:
            self.output.write(line + "\n")
            count += count_lines(line)
        self.output.flush()
        return count

    def read_line(self) -> str:
        """
        Block until the user enters a line.

        Raises:
            EOFError: If input is closed
        """
        line = self.input_stream.readline()
        if not line:
            raise EOFError("input closed")
        return line.rstrip("\r\n")

    def erase(self, count: int) -> None:
        """Clear the ``count`` lines above the cursor."""
        self.output.write((CLEAR_LINE + CURSOR_UP) * count + CLEAR_LINE)
        self.output.flush()

    def clear(self) -> None:
        self.output.write(CLEAR_SCREEN)
        self.output.flush()


class BufferTerminal(Terminal):
    """
    In-memory surface fed from a list of input lines.

    Keeps the lines currently visible so callers can check that every screen
    erased exactly what it printed. Typed input is echoed as a visible line,
    as on a real terminal.
    """

    def __init__(self, inputs: Optional[List[str]] = None):
        self.inputs: List[str] = list(inputs or [])
        self.visible: List[str] = []
        self.transcript: List[str] = []

    def show(self, *lines: str) -> int:
        count = 0
        for line in lines:
            physical = line.split("\n")
            self.visible.extend(physical)
            self.transcript.extend(physical)
            count += len(physical)
        return count

    def read_line(self) -> str:
        if not self.inputs:
            raise EOFError("no more scripted input")
        line = self.inputs.pop(0)
        self.visible.append(line)
        self.transcript.append(f"> {line}")
        return line

    def erase(self, count: int) -> None:
        if count > len(self.visible):
            raise AssertionError(
                f"erase({count}) with only {len(self.visible)} visible line(s)"
            )
        if count:
            del self.visible[-count:]

    def clear(self) -> None:
        self.visible = []
