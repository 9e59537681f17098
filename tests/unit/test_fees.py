"""Unit tests for the fee calculator."""

import math

import pytest

from src.services.fees import (
    MAX_AMOUNT_REASON,
    MIN_AMOUNT_REASON,
    NOT_A_NUMBER_REASON,
    compute_fee,
    evaluate,
)


class TestBounds:
    """Tests for the accepted transaction range."""

    def test_below_minimum_is_invalid(self):
        result = evaluate(9.99)
        assert result.valid is False
        assert result.reason == MIN_AMOUNT_REASON

    def test_minimum_is_valid(self):
        result = evaluate(10)
        assert result.valid is True
        assert result.reason is None

    def test_maximum_is_valid(self):
        assert evaluate(6000).valid is True

    def test_above_maximum_is_invalid(self):
        result = evaluate(6000.01)
        assert result.valid is False
        assert result.reason == MAX_AMOUNT_REASON

    def test_zero_and_negative_are_below_minimum(self):
        assert evaluate(0).reason == MIN_AMOUNT_REASON
        assert evaluate(-5).reason == MIN_AMOUNT_REASON

    def test_not_a_number_is_invalid(self):
        result = evaluate(math.nan)
        assert result.valid is False
        assert result.reason == NOT_A_NUMBER_REASON


class TestFeeTiers:
    """Tests for the two fee brackets."""

    @pytest.mark.parametrize("amount", [10, 10.5, 25, 33.33, 49.99])
    def test_small_amounts_pay_surcharge(self, amount):
        assert evaluate(amount).fee == amount * 0.02 + 1.00

    @pytest.mark.parametrize("amount", [50, 50.01, 199.9, 1234.56, 6000])
    def test_large_amounts_pay_percentage_only(self, amount):
        assert evaluate(amount).fee == amount * 0.02

    def test_tier_boundary(self):
        assert compute_fee(49.99) == pytest.approx(1.9998)
        assert compute_fee(50) == pytest.approx(1.0)

    @pytest.mark.parametrize("amount", [10, 42, 50, 777.77, 6000])
    def test_net_is_amount_minus_fee(self, amount):
        result = evaluate(amount)
        assert result.net == amount - result.fee

    def test_fee_previewed_for_invalid_amounts(self):
        """Invalid amounts still get a fee preview."""
        low = evaluate(5)
        high = evaluate(7000)

        assert low.fee == 5 * 0.02 + 1.00
        assert low.net == 5 - low.fee
        assert high.fee == 7000 * 0.02

    def test_no_rounding(self):
        result = evaluate(33.33)
        assert result.fee == 33.33 * 0.02 + 1.00
        assert round(result.fee, 2) == 1.67
