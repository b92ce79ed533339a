"""
Run Configuration

All settings for a single generator run, fixed once validated. Values can
come from defaults, CELLGEN_* environment variables (see .env.example) or
command line overrides.
"""

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

import numpy as np

from .core.automaton import validate_layout
from .core.rules import Ruleset, parse_ruleset
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "CELLGEN_"

_TRUE_VALUES = {"1", "true", "yes", "y", "on"}
_FALSE_VALUES = {"0", "false", "no", "n", "off", ""}


def parse_bool(value: str) -> bool:
    text = value.strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Expected a yes/no value, got {value!r}")


def _parse_int(value: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        raise ConfigurationError(f"Expected an integer, got {value!r}") from None


def _parse_float(value: str) -> float:
    try:
        return float(value.strip())
    except ValueError:
        raise ConfigurationError(f"Expected a number, got {value!r}") from None


@dataclass(frozen=True)
class AutomatonConfig:
    """Settings for one run.

    Attributes:
        width: Cells per row
        generations: Rows in the GIF, including the seed row
        ruleset: Transition function for every cell
        start_cells: Seed cells in row 0 (1-4)
        square_size: Pixel edge of one cell in the GIF
        frame_delay: GIF frame delay in 1/100 s
        final_delay_factor: Multiplier for the last frame's delay
        show_grid: Draw grid lines in the GIF
        seed: Random seed for seed colors (None for fresh entropy)
        output: GIF output path
        term_delay: Seconds between rows in terminal mode
    """
    width: int = 100
    generations: int = 100
    ruleset: Ruleset = Ruleset.SUM
    start_cells: int = 1
    square_size: int = 6
    frame_delay: int = 5
    final_delay_factor: int = 50
    show_grid: bool = False
    seed: Optional[int] = None
    output: Path = field(default_factory=lambda: Path("out.gif"))
    term_delay: float = 0.05

    def __post_init__(self):
        object.__setattr__(self, "ruleset", parse_ruleset(self.ruleset))
        object.__setattr__(self, "output", Path(self.output))
        self.validate()

    def validate(self) -> None:
        """Check every field.

        Raises:
            ConfigurationError: On the first invalid field
        """
        validate_layout(self.width, self.start_cells)
        if self.generations < 1:
            raise ConfigurationError(f"Generations must be positive, got {self.generations}")
        if self.square_size < 1:
            raise ConfigurationError(f"Square size must be positive, got {self.square_size}")
        if self.frame_delay < 0:
            raise ConfigurationError(f"Frame delay must be non-negative, got {self.frame_delay}")
        if self.final_delay_factor < 1:
            raise ConfigurationError(f"Final delay factor must be at least 1, got {self.final_delay_factor}")
        if self.term_delay < 0:
            raise ConfigurationError(f"Terminal delay must be non-negative, got {self.term_delay}")

    def replace(self, **overrides: Any) -> "AutomatonConfig":
        """Copy with overrides applied; None values are ignored."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)

    def make_rng(self) -> np.random.Generator:
        """Random source for seeding, reproducible when seed is set."""
        return np.random.default_rng(self.seed)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AutomatonConfig":
        """Build a config from CELLGEN_* variables over the defaults.

        Raises:
            ConfigurationError: If a variable is malformed or out of range
        """
        environ = os.environ if environ is None else environ

        parsers: Dict[str, Callable[[str], Any]] = {
            "width": _parse_int,
            "generations": _parse_int,
            "ruleset": parse_ruleset,
            "start_cells": _parse_int,
            "square_size": _parse_int,
            "frame_delay": _parse_int,
            "final_delay_factor": _parse_int,
            "show_grid": parse_bool,
            "seed": _parse_int,
            "output": Path,
            "term_delay": _parse_float,
        }

        values = {}
        for name, parse in parsers.items():
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw is None:
                continue
            values[name] = parse(raw)
            logger.debug(f"{ENV_PREFIX}{name.upper()}={raw!r}")

        return cls(**values)
