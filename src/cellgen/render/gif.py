"""
Animated GIF Rendering

Lays an automaton grid out as same-sized square blocks and accumulates one
frame per generation into an explicit Animation value owned by the caller.
Frame k shows the first k rows, so a run of H generations yields H + 1
frames starting from a blank canvas.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Union

import numpy as np
from PIL import Image

from ..core.automaton import Automaton1D
from ..core.rules import NUM_STATES
from .palette import BACKGROUND_INDEX, CELL_TO_INDEX, GRID_LINE_INDEX, flat_palette

logger = logging.getLogger(__name__)

# GIF delays are in hundredths of a second
DEFAULT_FRAME_DELAY = 5
DEFAULT_FINAL_DELAY_FACTOR = 50
DEFAULT_SQUARE_SIZE = 6

_INDEX_LOOKUP = np.array(CELL_TO_INDEX, dtype=np.uint8)


@dataclass
class Animation:
    """Ordered frames plus the delay (centiseconds) for each one.

    Attributes:
        frames: Palette images, one per frame
        delays: Per-frame display time in 1/100 s
        loop: GIF loop count (0 loops forever)
    """
    frames: List[Image.Image] = field(default_factory=list)
    delays: List[int] = field(default_factory=list)
    loop: int = 0

    def __len__(self) -> int:
        return len(self.frames)

    @property
    def total_delay(self) -> int:
        return sum(self.delays)


def draw_frame(grid: np.ndarray, rows_filled: int,
               square_size: int = DEFAULT_SQUARE_SIZE,
               show_grid: bool = False) -> Image.Image:
    """Rasterize the first rows_filled rows of a grid.

    Args:
        grid: (H, W) array of cell values in [0, NUM_STATES)
        rows_filled: Rows to draw; the rest render as background
        square_size: Pixel edge length of one cell
        show_grid: Draw a 1px black line before every non-first row and column

    Returns:
        Palette ('P') image of size (W * square_size, H * square_size)

    Raises:
        ValueError: If parameters are out of range
    """
    if grid.ndim != 2:
        raise ValueError(f"Grid must be 2D, got shape {grid.shape}")
    if square_size < 1:
        raise ValueError("Square size must be positive")
    height = grid.shape[0]
    if not (0 <= rows_filled <= height):
        raise ValueError(f"rows_filled {rows_filled} outside [0, {height}]")
    if grid.size and (grid.min() < 0 or grid.max() >= NUM_STATES):
        raise ValueError(f"Grid values must lie in [0, {NUM_STATES})")

    indices = np.full(grid.shape, BACKGROUND_INDEX, dtype=np.uint8)
    indices[:rows_filled] = _INDEX_LOOKUP[grid[:rows_filled].astype(np.intp)]

    pixels = np.repeat(np.repeat(indices, square_size, axis=0), square_size, axis=1)
    if show_grid and square_size > 1:
        pixels[square_size::square_size, :] = GRID_LINE_INDEX
        pixels[:, square_size::square_size] = GRID_LINE_INDEX

    frame = Image.fromarray(pixels)
    frame.putpalette(flat_palette())
    return frame


def append_frame(animation: Animation, frame: Image.Image, final: bool = False,
                 frame_delay: int = DEFAULT_FRAME_DELAY,
                 final_delay_factor: int = DEFAULT_FINAL_DELAY_FACTOR) -> Animation:
    """Append a frame and its delay; the final frame lingers longer.

    Returns:
        The same accumulator, for chaining
    """
    animation.frames.append(frame)
    if final:
        animation.delays.append(frame_delay * final_delay_factor)
    else:
        animation.delays.append(frame_delay)
    return animation


def render_animation(automaton: Automaton1D,
                     square_size: int = DEFAULT_SQUARE_SIZE,
                     show_grid: bool = False,
                     frame_delay: int = DEFAULT_FRAME_DELAY,
                     final_delay_factor: int = DEFAULT_FINAL_DELAY_FACTOR) -> Animation:
    """Evolve an automaton and capture a frame after every generation.

    Args:
        automaton: Unseeded or partially evolved automaton
        square_size: Pixel edge length of one cell
        show_grid: Draw grid lines between cells
        frame_delay: Delay of each frame in 1/100 s
        final_delay_factor: Multiplier applied to the last frame's delay

    Returns:
        New Animation with generations + 1 frames
    """
    animation = Animation()
    frame_count = automaton.generations + 1

    for i in range(frame_count):
        if i != 0:
            automaton.advance()
        frame = draw_frame(automaton.grid, automaton.rows_filled, square_size, show_grid)
        animation = append_frame(animation, frame, i == frame_count - 1,
                                 frame_delay, final_delay_factor)

    logger.info(f"Rendered {len(animation)} frames ({animation.total_delay / 100:.1f}s total)")
    return animation


def save_animation(animation: Animation, path: Union[str, Path]) -> Path:
    """Encode the accumulated frames as an animated GIF.

    Raises:
        ValueError: If the animation has no frames
    """
    if not animation.frames:
        raise ValueError("Cannot save an animation with no frames")
    if len(animation.delays) != len(animation.frames):
        raise ValueError("Every frame needs exactly one delay")

    path = Path(path)
    first, rest = animation.frames[0], animation.frames[1:]
    first.save(
        path,
        format="GIF",
        save_all=True,
        append_images=rest,
        duration=[delay * 10 for delay in animation.delays],  # Pillow wants ms
        loop=animation.loop,
        optimize=False,
    )

    logger.info(f"Animation saved to {path}")
    return path
