"""
RGB + Glyph Automaton

Terminal variant where every cell carries a printable character code and an
RGB color instead of a single state value. Both follow the same discipline as
the state automaton: each column of a new row depends only on the left,
center and right cells of the previous row, with toroidal wrap.

Character rule: space is void and contributes nothing. Three voids stay
void; otherwise the non-void codes are summed and wrapped back into the
printable range [33, 127).

Channel rule: each of R, G and B is the sum of the three predecessor
channels modulo 256. Void cells are always black.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

import numpy as np

from .automaton import seed_positions, validate_layout
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)

SPACE = 32
PRINTABLE_MIN = 33
PRINTABLE_MAX = 127  # exclusive
PRINTABLE_SPAN = PRINTABLE_MAX - PRINTABLE_MIN
CHANNEL_LEVELS = 256


def next_glyph(left: int, center: int, right: int) -> int:
    """Combine three character codes into the next one.

    Args:
        left: Code of the left neighbor (SPACE or printable)
        center: Code of the center cell
        right: Code of the right neighbor

    Returns:
        SPACE if all inputs are void, else a code in [33, 127)
    """
    codes = [c for c in (left, center, right) if c != SPACE]
    if not codes:
        return SPACE

    total = sum(codes)
    if total >= PRINTABLE_MAX:
        total = (total - PRINTABLE_MIN) % PRINTABLE_SPAN + PRINTABLE_MIN
    return total


def next_channel(left: int, center: int, right: int) -> int:
    """Wrapping sum of one color channel."""
    return (left + center + right) % CHANNEL_LEVELS


@dataclass
class GlyphRow:
    """One generation of the glyph automaton.

    Attributes:
        codes: (W,) character codes, SPACE for void cells
        rgb: (W, 3) color channels in [0, 256)
    """
    codes: np.ndarray
    rgb: np.ndarray

    def __post_init__(self):
        if self.codes.ndim != 1:
            raise ValueError("codes must be a 1D array")
        if self.rgb.shape != (len(self.codes), 3):
            raise ValueError(f"rgb shape {self.rgb.shape} doesn't match width {len(self.codes)}")

    @property
    def width(self) -> int:
        return len(self.codes)

    def text(self) -> str:
        """Plain characters without color."""
        return "".join(chr(int(c)) for c in self.codes)


def seed_glyph_row(width: int, start_cells: int, rng: np.random.Generator) -> GlyphRow:
    """Build the first glyph generation at the usual seed positions."""
    codes = np.full(width, SPACE, dtype=np.int16)
    rgb = np.zeros((width, 3), dtype=np.int16)

    for column in seed_positions(width, start_cells):
        codes[column] = rng.integers(PRINTABLE_MIN, PRINTABLE_MAX)
        rgb[column] = rng.integers(0, CHANNEL_LEVELS, size=3)

    return GlyphRow(codes, rgb)


def step_glyphs(row: GlyphRow) -> GlyphRow:
    """Compute the next glyph generation with toroidal neighbors."""
    width = row.width
    codes = np.full(width, SPACE, dtype=np.int16)
    rgb = np.zeros((width, 3), dtype=np.int16)

    for i in range(width):
        left, right = (i - 1) % width, (i + 1) % width
        codes[i] = next_glyph(int(row.codes[left]), int(row.codes[i]), int(row.codes[right]))
        if codes[i] == SPACE:
            continue
        for channel in range(3):
            rgb[i, channel] = next_channel(int(row.rgb[left, channel]),
                                           int(row.rgb[i, channel]),
                                           int(row.rgb[right, channel]))

    return GlyphRow(codes, rgb)


def stream_glyph_rows(width: int,
                      start_cells: int = 1,
                      rng: Optional[np.random.Generator] = None,
                      max_rows: Optional[int] = None,
                      should_stop: Optional[Callable[[], bool]] = None) -> Iterator[GlyphRow]:
    """Yield glyph generations until max_rows or should_stop() is reached.

    Raises:
        ConfigurationError: If the layout is invalid (before any row is yielded)
    """
    validate_layout(width, start_cells)
    if max_rows is not None and max_rows < 0:
        raise ConfigurationError(f"max_rows must be non-negative, got {max_rows}")
    rng = rng if rng is not None else np.random.default_rng()

    def generate() -> Iterator[GlyphRow]:
        produced = 0
        row = None
        while max_rows is None or produced < max_rows:
            if should_stop is not None and should_stop():
                logger.info(f"Glyph stream stopped after {produced} generations")
                return
            row = seed_glyph_row(width, start_cells, rng) if row is None else step_glyphs(row)
            produced += 1
            yield row

    return generate()
