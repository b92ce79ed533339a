"""Fixed color palette shared by the GIF and terminal renderers."""

from typing import List, Tuple

from ..core.rules import NUM_STATES

RGB = Tuple[int, int, int]

# Base colors
WHITE: RGB = (249, 249, 249)
BLACK: RGB = (0, 0, 0)

# Cell colors (https://www.color-hex.com/color-palette/5452)
RED: RGB = (217, 83, 79)
LIGHT_BLUE: RGB = (91, 192, 222)
GREEN: RGB = (92, 184, 92)
DARK_BLUE: RGB = (66, 139, 202)

# Palette order used in the GIF color table
PALETTE: List[RGB] = [WHITE, BLACK, RED, LIGHT_BLUE, GREEN, DARK_BLUE]
BACKGROUND_INDEX = 0
GRID_LINE_INDEX = 1

# Cell value -> palette index; black is reserved for grid lines
CELL_TO_INDEX: List[int] = [BACKGROUND_INDEX] + [value + 1 for value in range(1, NUM_STATES)]


def palette_index(value: int) -> int:
    """Palette index for a cell value.

    Raises:
        ValueError: If value is outside [0, NUM_STATES)
    """
    if not (0 <= value < NUM_STATES):
        raise ValueError(f"Cell value {value} outside [0, {NUM_STATES})")
    return CELL_TO_INDEX[value]


def cell_rgb(value: int) -> RGB:
    """RGB triple used to draw a cell value."""
    return PALETTE[palette_index(value)]


def flat_palette() -> List[int]:
    """Palette flattened to [r, g, b, r, g, b, ...] for Pillow."""
    return [channel for color in PALETTE for channel in color]
