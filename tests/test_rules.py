"""Comprehensive tests for the one-dimensional transition rules.

Checks every ruleset over all NUM_STATES**3 neighborhoods, including the
full absorbing-zero table of the multiplicative rule.
"""

import itertools

import numpy as np
import pytest

from cellgen.core.rules import (
    NUM_STATES, RULE_FUNCTIONS, Ruleset, get_rule_table, parse_ruleset,
    transition, transition_row,
)
from cellgen.errors import ConfigurationError

ALL_TRIPLES = list(itertools.product(range(NUM_STATES), repeat=3))


class TestRuleRange:
    """Every rule is total and stays inside [0, NUM_STATES)."""

    @pytest.mark.parametrize("ruleset", list(Ruleset))
    def test_outputs_in_range(self, ruleset):
        """All 125 neighborhoods map into the valid state range."""
        for left, center, right in ALL_TRIPLES:
            result = transition(left, center, right, ruleset)
            assert 0 <= result < NUM_STATES, f"{ruleset.name}{(left, center, right)} -> {result}"

    def test_dispatch_covers_every_ruleset(self):
        """Each ruleset has a rule function."""
        assert set(RULE_FUNCTIONS) == set(Ruleset)

    def test_rule_table_complete(self):
        """Rule table lists every neighborhood exactly once."""
        table = get_rule_table(Ruleset.SUM)
        assert len(table) == NUM_STATES ** 3
        assert table[(1, 2, 3)] == 1
        assert table[(0, 0, 0)] == 0

    def test_accepts_numpy_integers(self):
        """Values pulled from uint8 rows behave like plain ints."""
        left, center, right = np.array([4, 4, 4], dtype=np.uint8)
        assert transition(left, center, right, Ruleset.SHIFT_RIGHT_BY_LEFT) == ((4 << 4) ^ 4) % 5


class TestArithmeticRules:
    """Sum, cross-sum and bitwise rules against their formulas."""

    def test_sum_rule(self):
        for l, c, r in ALL_TRIPLES:
            assert transition(l, c, r, Ruleset.SUM) == (l + c + r) % 5

    def test_cross_sum_counts_center_twice(self):
        for l, c, r in ALL_TRIPLES:
            assert transition(l, c, r, Ruleset.CROSS_SUM) == (l + 2 * c + r) % 5

    def test_shift_rules(self):
        for l, c, r in ALL_TRIPLES:
            assert transition(l, c, r, Ruleset.SHIFT_RIGHT_BY_LEFT) == ((r << l) ^ c) % 5
            assert transition(l, c, r, Ruleset.SHIFT_LEFT_BY_RIGHT) == ((l << r) ^ c) % 5

    def test_or_xor_rule(self):
        for l, c, r in ALL_TRIPLES:
            assert transition(l, c, r, Ruleset.OR_XOR) == ((l | r) ^ c) % 5

    def test_specific_values(self):
        """A few hand-computed cases."""
        assert transition(4, 4, 4, Ruleset.SUM) == 2
        assert transition(1, 3, 2, Ruleset.CROSS_SUM) == 4
        assert transition(2, 1, 3, Ruleset.SHIFT_RIGHT_BY_LEFT) == 3   # (12 ^ 1) = 13
        assert transition(2, 1, 3, Ruleset.SHIFT_LEFT_BY_RIGHT) == 2   # (16 ^ 1) = 17
        assert transition(1, 0, 2, Ruleset.OR_XOR) == 3


class TestMultiplicativeRule:
    """Absorbing-zero case table."""

    def expected(self, l, c, r):
        if l == 0 and c == 0 and r == 0:
            return 0
        if l == 0 and c == 0:
            return r
        if l == 0 and r == 0:
            return c
        if c == 0 and r == 0:
            return l
        if l == 0:
            return (c * r) % 5
        if r == 0:
            return (c * l) % 5
        return (l * r) % 5

    def test_full_table(self):
        """Every neighborhood matches the case table."""
        for l, c, r in ALL_TRIPLES:
            assert transition(l, c, r, Ruleset.MULTIPLICATIVE) == self.expected(l, c, r)

    def test_single_nonzero_propagates(self):
        """A lone non-zero value passes through unchanged."""
        for v in range(1, NUM_STATES):
            assert transition(0, 0, v, Ruleset.MULTIPLICATIVE) == v
            assert transition(0, v, 0, Ruleset.MULTIPLICATIVE) == v
            assert transition(v, 0, 0, Ruleset.MULTIPLICATIVE) == v

    def test_all_nonzero_uses_outer_product(self):
        """Center is ignored when both outer neighbors are non-zero."""
        for l, c, r in itertools.product(range(1, NUM_STATES), repeat=3):
            assert transition(l, c, r, Ruleset.MULTIPLICATIVE) == (l * r) % 5

    def test_zero_center_outer_product(self):
        """Non-zero outer neighbors around a zero center multiply."""
        assert transition(2, 0, 3, Ruleset.MULTIPLICATIVE) == 1
        assert transition(4, 0, 4, Ruleset.MULTIPLICATIVE) == 1

    def test_two_nonzero_with_center(self):
        assert transition(0, 3, 4, Ruleset.MULTIPLICATIVE) == 2
        assert transition(3, 4, 0, Ruleset.MULTIPLICATIVE) == 2


class TestTransitionSelection:
    """transition() resolves its ruleset the same way the menu does."""

    def test_by_number(self):
        assert transition(1, 0, 0, 1) == 1
        assert transition(1, 0, 0, "1") == 1
        assert transition(4, 3, 1, 4) == transition(4, 3, 1, Ruleset.SHIFT_RIGHT_BY_LEFT)

    def test_by_name(self):
        assert transition(2, 2, 2, "sum") == 1

    @pytest.mark.parametrize("ruleset", [0, 9, "nine"])
    def test_unknown_ruleset_rejected(self, ruleset):
        with pytest.raises(ConfigurationError):
            transition(0, 0, 0, ruleset)


class TestTransitionRow:
    """Row-wide application with toroidal neighbors."""

    def test_sum_scenario(self):
        """[1,0,0,0,0] evolves to [1,1,0,0,1] under the sum rule."""
        row = np.array([1, 0, 0, 0, 0], dtype=np.uint8)
        assert transition_row(row, Ruleset.SUM).tolist() == [1, 1, 0, 0, 1]

    def test_input_row_unchanged(self):
        row = np.array([1, 2, 3, 4, 0], dtype=np.uint8)
        before = row.copy()
        transition_row(row, Ruleset.CROSS_SUM)
        assert np.array_equal(row, before)

    def test_single_cell_row_wraps_to_itself(self):
        """Width 1: the cell is its own left and right neighbor."""
        row = np.array([2], dtype=np.uint8)
        assert transition_row(row, Ruleset.SUM).tolist() == [(2 + 2 + 2) % 5]

    def test_accepts_ruleset_number(self):
        row = np.array([1, 0, 0, 0, 0], dtype=np.uint8)
        assert transition_row(row, 1).tolist() == [1, 1, 0, 0, 1]

    def test_unknown_ruleset_rejected(self):
        with pytest.raises(ConfigurationError):
            transition_row(np.zeros(5, dtype=np.uint8), 9)


class TestParseRuleset:
    """Ruleset selection from user input."""

    def test_by_number(self):
        assert parse_ruleset(1) is Ruleset.SUM
        assert parse_ruleset("6") is Ruleset.OR_XOR
        assert parse_ruleset(" 3 ") is Ruleset.MULTIPLICATIVE

    def test_by_name(self):
        assert parse_ruleset("cross_sum") is Ruleset.CROSS_SUM
        assert parse_ruleset("shift-left-by-right") is Ruleset.SHIFT_LEFT_BY_RIGHT

    def test_passthrough(self):
        assert parse_ruleset(Ruleset.OR_XOR) is Ruleset.OR_XOR

    @pytest.mark.parametrize("value", [0, 7, -1, "0", "seven", "", True, 2.5, None])
    def test_invalid(self, value):
        with pytest.raises(ConfigurationError):
            parse_ruleset(value)

    def test_experimental_flag(self):
        assert not Ruleset.MULTIPLICATIVE.is_experimental
        assert Ruleset.SHIFT_RIGHT_BY_LEFT.is_experimental
