"""
cellgen: One-Dimensional Cellular Automata Generator

Evolves a fixed-width toroidal row generation by generation under one of six
modular rulesets and exports the result as an animated GIF or as colored
terminal output.
"""

from .config import AutomatonConfig
from .core.automaton import Automaton1D, seed_positions, seed_row, step, stream_rows
from .core.rules import NUM_STATES, Ruleset, transition
from .errors import ConfigurationError

__version__ = "0.1.0"

__all__ = [
    'Automaton1D',
    'AutomatonConfig',
    'ConfigurationError',
    'NUM_STATES',
    'Ruleset',
    'seed_positions',
    'seed_row',
    'step',
    'stream_rows',
    'transition',
]
