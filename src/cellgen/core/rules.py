"""
One-Dimensional Transition Rules

Pure rule functions mapping a (left, center, right) neighbor triple from the
previous generation to the next cell value. Every rule reduces its raw integer
result modulo NUM_STATES, so all outputs stay in [0, NUM_STATES).
"""

from enum import Enum
from typing import Callable, Dict, Tuple, Union

import numpy as np

from ..errors import ConfigurationError


# Number of cell states: background plus four accent colors
NUM_STATES: int = 5
BACKGROUND: int = 0


class Ruleset(Enum):
    """Selectable transition functions, numbered as in the interactive menu."""
    SUM = 1                  # (l + c + r) mod K
    CROSS_SUM = 2            # ((l + c) + (r + c)) mod K
    MULTIPLICATIVE = 3       # products with zero as an absorbing marker
    SHIFT_RIGHT_BY_LEFT = 4  # ((r << l) ^ c) mod K
    SHIFT_LEFT_BY_RIGHT = 5  # ((l << r) ^ c) mod K
    OR_XOR = 6               # ((l | r) ^ c) mod K

    @property
    def is_experimental(self) -> bool:
        """Bit manipulation rulesets tend to look best with a single seed."""
        return self.value >= 4


def sum_rule(left: int, center: int, right: int) -> int:
    """Standard sum of the three neighbors."""
    return (left + center + right) % NUM_STATES


def cross_sum_rule(left: int, center: int, right: int) -> int:
    """Sum of both pairs containing the center, so the center counts twice."""
    left_sum = left + center
    right_sum = right + center
    return (left_sum + right_sum) % NUM_STATES


def multiplicative_rule(left: int, center: int, right: int) -> int:
    """Multiply the non-zero operands; a lone non-zero value passes through.

    Args:
        left: Left neighbor value
        center: Center (same column) value
        right: Right neighbor value

    Returns:
        Next cell value in [0, NUM_STATES)
    """
    if left == 0 and center == 0 and right == 0:
        return 0
    if left == 0 and right == 0:
        return center
    if left == 0 and center == 0:
        return right
    if right == 0 and center == 0:
        return left
    if left == 0:
        return (center * right) % NUM_STATES
    if right == 0:
        return (center * left) % NUM_STATES
    return (left * right) % NUM_STATES


def shift_right_by_left_rule(left: int, center: int, right: int) -> int:
    """Shift right by left, then XOR with center."""
    return ((right << left) ^ center) % NUM_STATES


def shift_left_by_right_rule(left: int, center: int, right: int) -> int:
    """Shift left by right, then XOR with center."""
    return ((left << right) ^ center) % NUM_STATES


def or_xor_rule(left: int, center: int, right: int) -> int:
    """OR the outer neighbors, then XOR with center."""
    return ((left | right) ^ center) % NUM_STATES


RuleFunction = Callable[[int, int, int], int]

RULE_FUNCTIONS: Dict[Ruleset, RuleFunction] = {
    Ruleset.SUM: sum_rule,
    Ruleset.CROSS_SUM: cross_sum_rule,
    Ruleset.MULTIPLICATIVE: multiplicative_rule,
    Ruleset.SHIFT_RIGHT_BY_LEFT: shift_right_by_left_rule,
    Ruleset.SHIFT_LEFT_BY_RIGHT: shift_left_by_right_rule,
    Ruleset.OR_XOR: or_xor_rule,
}

_missing = set(Ruleset) - set(RULE_FUNCTIONS)
if _missing:
    raise RuntimeError(f"Rulesets without a rule function: {sorted(r.name for r in _missing)}")


def transition(left: int, center: int, right: int, ruleset: Union[Ruleset, int, str]) -> int:
    """Compute the next value of a cell from its three predecessors.

    Args:
        left: Value of the left neighbor in the previous generation
        center: Value of the same column in the previous generation
        right: Value of the right neighbor in the previous generation
        ruleset: Active ruleset for this run, or its number or name

    Returns:
        Next cell value in [0, NUM_STATES)

    Raises:
        ConfigurationError: If ruleset names no known ruleset
    """
    return RULE_FUNCTIONS[parse_ruleset(ruleset)](int(left), int(center), int(right))


def transition_row(row: np.ndarray, ruleset: Union[Ruleset, int, str]) -> np.ndarray:
    """Apply the ruleset to every column of a row with toroidal neighbors.

    Args:
        row: 1D integer array holding the previous generation
        ruleset: Active ruleset

    Returns:
        New 1D array with the next generation
    """
    width = len(row)
    rule = RULE_FUNCTIONS[parse_ruleset(ruleset)]
    new_row = np.zeros(width, dtype=row.dtype)

    for i in range(width):
        left = int(row[(i - 1) % width])
        center = int(row[i])
        right = int(row[(i + 1) % width])
        new_row[i] = rule(left, center, right)

    return new_row


def parse_ruleset(value: Union[Ruleset, int, str]) -> Ruleset:
    """Resolve a ruleset from its number or name.

    Args:
        value: A Ruleset, its integer id, a numeric string, or a member name

    Returns:
        Matching Ruleset

    Raises:
        ConfigurationError: If the value names no known ruleset
    """
    if isinstance(value, Ruleset):
        return value

    if isinstance(value, str):
        text = value.strip()
        if text.isdigit():
            value = int(text)
        else:
            try:
                return Ruleset[text.upper().replace("-", "_")]
            except KeyError:
                raise ConfigurationError(f"Unknown ruleset {value!r}") from None

    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"Unknown ruleset {value!r}")

    try:
        return Ruleset(value)
    except ValueError:
        raise ConfigurationError(
            f"Ruleset must be between 1 and {len(Ruleset)}, got {value}"
        ) from None


def get_rule_table(ruleset: Ruleset) -> Dict[Tuple[int, int, int], int]:
    """Get the complete outcome table for all NUM_STATES**3 neighborhoods.

    Returns:
        Dictionary mapping (left, center, right) to next value
    """
    rules = {}
    for left in range(NUM_STATES):
        for center in range(NUM_STATES):
            for right in range(NUM_STATES):
                rules[(left, center, right)] = transition(left, center, right, ruleset)
    return rules
