"""
Live Terminal Output

Prints one automaton generation per line using 24-bit ANSI color escapes.
Streaming runs until the row source is exhausted or the user interrupts;
interruption is only honored between rows, never mid-row.
"""

import logging
import sys
import time
from typing import Iterable, Optional, TextIO, Tuple, Union

import numpy as np

from ..core.glyphs import SPACE, GlyphRow
from .palette import cell_rgb

logger = logging.getLogger(__name__)

ESC = "\033"
RESET = f"{ESC}[0m"
DEFAULT_GLYPH = "█"  # full block


def color_escape(rgb: Tuple[int, int, int]) -> str:
    """Foreground color escape for an RGB triple."""
    r, g, b = (int(c) for c in rgb)
    return f"{ESC}[38;2;{r};{g};{b}m"


def format_cell(value: int, glyph: str = DEFAULT_GLYPH) -> str:
    """Color-escaped glyph for one cell value."""
    return color_escape(cell_rgb(int(value))) + glyph


def format_row(row: np.ndarray, glyph: str = DEFAULT_GLYPH) -> str:
    """Render a state row as one colored glyph per cell."""
    return "".join(format_cell(value, glyph) for value in row) + RESET


def format_glyph_row(row: GlyphRow) -> str:
    """Render an RGB + glyph row; void cells print as plain spaces."""
    parts = []
    for code, rgb in zip(row.codes, row.rgb):
        if code == SPACE:
            parts.append(RESET + " ")
        else:
            parts.append(color_escape(rgb) + chr(int(code)))
    return "".join(parts) + RESET


class TerminalPrinter:
    """Writes rows to a text stream, one line per generation."""

    def __init__(self, out: Optional[TextIO] = None, delay: float = 0.05,
                 glyph: str = DEFAULT_GLYPH):
        """Initialize printer.

        Args:
            out: Destination stream (stdout if None)
            delay: Seconds to pause after each row
            glyph: Character drawn for state cells
        """
        if delay < 0:
            raise ValueError("Delay must be non-negative")
        self.out = out if out is not None else sys.stdout
        self.delay = delay
        self.glyph = glyph

    def print_row(self, row: Union[np.ndarray, GlyphRow]) -> None:
        if isinstance(row, GlyphRow):
            line = format_glyph_row(row)
        else:
            line = format_row(row, self.glyph)
        self.out.write(line + "\n")
        self.out.flush()

    def run(self, rows: Iterable[Union[np.ndarray, GlyphRow]]) -> int:
        """Print rows until exhausted or interrupted.

        Returns:
            Number of rows printed
        """
        printed = 0
        try:
            for row in rows:
                self.print_row(row)
                printed += 1
                if self.delay:
                    time.sleep(self.delay)
        except KeyboardInterrupt:
            self.out.write(RESET + "\n")
            logger.info(f"Interrupted after {printed} generations")
        return printed
