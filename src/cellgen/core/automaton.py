"""
One-Dimensional Cellular Automaton Grid

Owns the 2D generation buffer for a single run. Row 0 is the seed row, and
every following row is computed from exactly the row before it using the
active ruleset with toroidal (wrap-around) neighbor lookup.
"""

import logging
from typing import Callable, Iterator, List, Optional, Union

import numpy as np

from ..errors import ConfigurationError
from .rules import BACKGROUND, NUM_STATES, Ruleset, parse_ruleset, transition_row

logger = logging.getLogger(__name__)

# Supported range for the number of seeded cells in row 0
MIN_START_CELLS = 1
MAX_START_CELLS = 4

CELL_DTYPE = np.uint8


def validate_layout(width: int, start_cells: int) -> None:
    """Reject row layouts the evolver cannot seed.

    Raises:
        ConfigurationError: If width or start cell count is invalid
    """
    if isinstance(width, bool) or not isinstance(width, (int, np.integer)) or width < 1:
        raise ConfigurationError(f"Width must be a positive integer, got {width!r}")
    if not (MIN_START_CELLS <= start_cells <= MAX_START_CELLS):
        raise ConfigurationError(
            f"Start cells must be between {MIN_START_CELLS} and {MAX_START_CELLS}, got {start_cells}"
        )
    if start_cells > width:
        raise ConfigurationError(f"Cannot place {start_cells} start cells in a row of width {width}")


def seed_positions(width: int, start_cells: int) -> List[int]:
    """Columns of the evenly spaced seed cells in row 0.

    The i-th seed (1-indexed) sits at floor(width / (n + 1) * i), clamped to
    the last column. A single seed lands at the row midpoint. While
    start_cells <= width the columns are always distinct.

    Args:
        width: Row width in cells
        start_cells: Number of seed cells

    Returns:
        Sorted list of distinct column indices
    """
    validate_layout(width, start_cells)

    positions = []
    for i in range(1, start_cells + 1):
        target = min((width * i) // (start_cells + 1), width - 1)
        positions.append(target)

    return positions


def seed_row(width: int, start_cells: int, rng: np.random.Generator) -> np.ndarray:
    """Build generation 0.

    Every column is background except the seed positions, which each get a
    value drawn uniformly from [1, NUM_STATES). Randomness only picks the
    color, never the placement.

    Args:
        width: Row width in cells
        start_cells: Number of seed cells
        rng: Injected random source

    Returns:
        1D array of length width
    """
    row = np.full(width, BACKGROUND, dtype=CELL_DTYPE)
    for column in seed_positions(width, start_cells):
        row[column] = rng.integers(1, NUM_STATES)
    return row


def step(previous_row: np.ndarray, ruleset: Union[Ruleset, int, str]) -> np.ndarray:
    """Compute the generation after previous_row.

    Column i reads left = prev[(i-1) % W], center = prev[i] and
    right = prev[(i+1) % W]. The previous row is never modified.

    Raises:
        ConfigurationError: If ruleset names no known ruleset
    """
    return transition_row(np.asarray(previous_row, dtype=CELL_DTYPE), ruleset)


class Automaton1D:
    """Fixed-height grid of generations for one bounded run.

    The grid is append-only: rows are filled strictly in order and a row is
    never rewritten once computed.
    """

    def __init__(self, width: int, generations: int,
                 ruleset: Ruleset = Ruleset.SUM,
                 start_cells: int = 1,
                 rng: Optional[np.random.Generator] = None):
        """Initialize an empty automaton.

        Args:
            width: Cells per row
            generations: Number of rows including the seed row
            ruleset: Transition function used for every cell of every row
            start_cells: Number of evenly spaced seed cells in row 0
            rng: Random source for seed colors (fresh generator if None)

        Raises:
            ConfigurationError: If any parameter is invalid
        """
        validate_layout(width, start_cells)
        if isinstance(generations, bool) or not isinstance(generations, (int, np.integer)) or generations < 1:
            raise ConfigurationError(f"Generations must be a positive integer, got {generations!r}")

        self.width = width
        self.generations = generations
        self.ruleset = parse_ruleset(ruleset)
        self.start_cells = start_cells
        self.rng = rng if rng is not None else np.random.default_rng()

        self.grid = np.full((generations, width), BACKGROUND, dtype=CELL_DTYPE)
        self.rows_filled = 0

        logger.debug(f"Created automaton {width}x{generations} with ruleset {self.ruleset.name}")

    @property
    def is_complete(self) -> bool:
        """True once every generation has been computed."""
        return self.rows_filled >= self.generations

    def seed(self) -> np.ndarray:
        """Fill row 0 with the seed layout.

        Raises:
            RuntimeError: If the automaton was already seeded
        """
        if self.rows_filled:
            raise RuntimeError("Automaton is already seeded")

        self.grid[0] = seed_row(self.width, self.start_cells, self.rng)
        self.rows_filled = 1
        return self.grid[0].copy()

    def advance(self) -> np.ndarray:
        """Compute the next generation from the last filled row.

        Seeds row 0 if nothing has been computed yet.

        Returns:
            Copy of the newly computed row

        Raises:
            RuntimeError: If all generations are already filled
        """
        if self.rows_filled == 0:
            return self.seed()
        if self.is_complete:
            raise RuntimeError(f"All {self.generations} generations already computed")

        r = self.rows_filled
        self.grid[r] = step(self.grid[r - 1], self.ruleset)
        self.rows_filled += 1
        return self.grid[r].copy()

    def evolve(self) -> np.ndarray:
        """Compute every remaining generation.

        Returns:
            Copy of the full grid
        """
        while not self.is_complete:
            self.advance()

        logger.info(f"Evolved {self.generations} generations ({self.count_active()} active cells)")
        return self.to_array()

    def row(self, index: int) -> np.ndarray:
        """Get a computed row.

        Raises:
            IndexError: If the row has not been computed
        """
        if not (0 <= index < self.rows_filled):
            raise IndexError(f"Row {index} not computed ({self.rows_filled} rows filled)")
        return self.grid[index].copy()

    def count_active(self) -> int:
        """Count non-background cells among computed rows."""
        return int(np.count_nonzero(self.grid[:self.rows_filled]))

    def to_array(self) -> np.ndarray:
        """Get grid as numpy array (uncomputed rows are background)."""
        return self.grid.copy()

    def __str__(self) -> str:
        """Digits for computed rows, one line per generation."""
        return "\n".join("".join(str(v) for v in self.grid[r]) for r in range(self.rows_filled))

    def __repr__(self) -> str:
        return (f"Automaton1D({self.width}x{self.generations}, ruleset={self.ruleset.name}, "
                f"filled={self.rows_filled})")


def stream_rows(width: int,
                ruleset: Ruleset = Ruleset.SUM,
                start_cells: int = 1,
                rng: Optional[np.random.Generator] = None,
                max_rows: Optional[int] = None,
                should_stop: Optional[Callable[[], bool]] = None) -> Iterator[np.ndarray]:
    """Yield generations indefinitely, keeping only the previous row.

    Args:
        width: Cells per row
        ruleset: Active ruleset
        start_cells: Number of seed cells
        rng: Random source for seed colors
        max_rows: Stop after this many rows (unbounded if None)
        should_stop: Polled once per generation boundary; stops when True

    Yields:
        Each generation starting with the seed row

    Raises:
        ConfigurationError: If the layout is invalid (before any row is yielded)
    """
    validate_layout(width, start_cells)
    ruleset = parse_ruleset(ruleset)
    if max_rows is not None and max_rows < 0:
        raise ConfigurationError(f"max_rows must be non-negative, got {max_rows}")
    rng = rng if rng is not None else np.random.default_rng()

    def generate() -> Iterator[np.ndarray]:
        produced = 0
        row = None
        while max_rows is None or produced < max_rows:
            if should_stop is not None and should_stop():
                logger.info(f"Stream stopped after {produced} generations")
                return
            row = seed_row(width, start_cells, rng) if row is None else step(row, ruleset)
            produced += 1
            yield row.copy()

    return generate()
