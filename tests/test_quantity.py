"""
Unit tests for the order quantity policy (MOQ 25kg, 5kg steps).
"""

import math
import pytest

from core.quantity import (
    MINIMUM_ORDER_QUANTITY,
    QUANTITY_INCREMENT,
    get_next_valid_quantity,
    is_valid_quantity,
    round_to_nearest_increment,
)


class TestConstants:

    def test_policy_values(self):
        assert MINIMUM_ORDER_QUANTITY == 25
        assert QUANTITY_INCREMENT == 5


class TestIsValidQuantity:

    @pytest.mark.parametrize("quantity", [25, 30, 35, 100, 250, 30.0])
    def test_valid(self, quantity):
        assert is_valid_quantity(quantity) is True

    @pytest.mark.parametrize("quantity", [0, 5, 10, 20, 24, 27, 32, 27.5, -25])
    def test_invalid(self, quantity):
        assert is_valid_quantity(quantity) is False

    @pytest.mark.parametrize("quantity", [None, "abc", True, math.nan, math.inf])
    def test_non_numeric_is_invalid(self, quantity):
        assert is_valid_quantity(quantity) is False


class TestRoundToNearestIncrement:

    def test_below_moq_becomes_moq(self):
        assert round_to_nearest_increment(10) == 25
        assert round_to_nearest_increment(0) == 25
        assert round_to_nearest_increment(-40) == 25

    def test_rounds_down_below_half_step(self):
        assert round_to_nearest_increment(27) == 25
        assert round_to_nearest_increment(32) == 30

    def test_half_step_rounds_up(self):
        assert round_to_nearest_increment(27.5) == 30

    def test_rounding_is_anchored_at_moq(self):
        # Steps are counted from the MOQ, so 35 stays 35
        assert round_to_nearest_increment(35) == 35
        assert round_to_nearest_increment(38) == 40

    def test_garbage_becomes_moq(self):
        assert round_to_nearest_increment(None) == 25
        assert round_to_nearest_increment("lots") == 25
        assert round_to_nearest_increment(math.nan) == 25

    def test_numeric_strings_are_accepted(self):
        assert round_to_nearest_increment("42") == 40

    def test_result_is_always_valid(self):
        for quantity in range(-10, 300):
            assert is_valid_quantity(round_to_nearest_increment(quantity / 3))

    def test_returns_int(self):
        assert isinstance(round_to_nearest_increment(30.0), int)


class TestGetNextValidQuantity:

    def test_increase(self):
        assert get_next_valid_quantity(25, 1) == 30
        assert get_next_valid_quantity(100, 1) == 105

    def test_decrease(self):
        assert get_next_valid_quantity(35, -1) == 30

    def test_never_below_moq(self):
        assert get_next_valid_quantity(25, -1) == 25
        assert get_next_valid_quantity(10, -1) == 25

    def test_garbage_current_gives_moq(self):
        assert get_next_valid_quantity(None, 1) == 25

    @pytest.mark.parametrize("direction", [0, 2, -2, "up"])
    def test_invalid_direction_raises(self, direction):
        with pytest.raises(ValueError, match="direction"):
            get_next_valid_quantity(30, direction)
