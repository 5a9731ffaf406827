"""Unit tests for the pricing engine and its policy data."""

from decimal import Decimal

import pytest

from stickers.domain.exceptions import ValidationError
from stickers.domain.model.rate_table import (
    DEFAULT_MINIMUM_TOTAL_CENTS,
    DEFAULT_RATE_TABLE,
    RateTable,
    SizeCurve,
)
from stickers.domain.model.value_objects import round_half_up
from stickers.domain.service.pricing_engine import quote, size_multiplier


def _quote(width: str, height: str, quantity: int, minimum: int = DEFAULT_MINIMUM_TOTAL_CENTS):
    return quote(Decimal(width), Decimal(height), quantity, DEFAULT_RATE_TABLE, minimum)


# ── Size multiplier ──────────────────────────────────────────────────────────


class TestSizeMultiplier:

    def test_full_price_at_nine_square_inches(self):
        assert size_multiplier(9) == Decimal("1")

    def test_floor_at_sixteen_square_inches(self):
        assert size_multiplier(16) == Decimal("0.8")

    def test_midpoint(self):
        assert size_multiplier(Decimal("12.5")) == Decimal("0.9")

    def test_small_stickers_are_not_surcharged(self):
        assert size_multiplier(1) == Decimal("1")

    def test_large_stickers_clamped_to_floor(self):
        assert size_multiplier(144) == Decimal("0.8")

    def test_custom_curve(self):
        curve = SizeCurve(
            full_price_area=Decimal("4"),
            floor_area=Decimal("8"),
            floor=Decimal("0.5"),
        )
        assert size_multiplier(6, curve) == Decimal("0.75")

    def test_curve_with_inverted_areas_rejected(self):
        with pytest.raises(ValidationError, match="floor area"):
            SizeCurve(full_price_area=Decimal("16"), floor_area=Decimal("9"))


# ── Rate table ───────────────────────────────────────────────────────────────


class TestRateTable:

    def test_exact_breakpoint(self):
        assert DEFAULT_RATE_TABLE.rate_for(250) == Decimal("10.50")

    def test_off_grid_quantity_falls_back_to_smallest_tier(self):
        assert DEFAULT_RATE_TABLE.rate_for(77) == DEFAULT_RATE_TABLE.rate_for(50)

    def test_large_off_grid_quantity_is_not_interpolated(self):
        assert DEFAULT_RATE_TABLE.rate_for(5000) == Decimal("12.75")

    def test_breakpoints_are_sorted(self):
        table = RateTable.of({500: "9", 50: "12", 100: "11"})
        assert table.breakpoints == [50, 100, 500]
        assert table.smallest_breakpoint == 50

    def test_empty_table_rejected(self):
        with pytest.raises(ValidationError, match="at least one breakpoint"):
            RateTable({})

    def test_non_positive_rate_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            RateTable.of({50: "0"})


# ── Quote ────────────────────────────────────────────────────────────────────


class TestQuote:

    def test_three_inch_square_at_fifty(self):
        result = _quote("3", "3", 50)
        assert result.size_multiplier == Decimal("1")
        assert result.sqft_each == Decimal("0.0625")
        assert result.raw_total_cents == 3984
        assert result.total_cents == 3984
        assert result.unit_cents == 80
        assert not result.minimum_applied

    def test_size_discount_applied(self):
        result = _quote("4", "4", 100)
        assert result.size_multiplier == Decimal("0.8")
        assert result.total_cents == 10222
        assert result.unit_cents == 102

    def test_square_foot_sticker(self):
        result = _quote("12", "12", 50)
        assert result.total_cents == 51000
        assert result.unit_cents == 1020

    def test_off_grid_quantity_uses_smallest_tier_rate(self):
        off_grid = _quote("3", "3", 77)
        on_grid = _quote("3", "3", 50)
        assert off_grid.rate_per_sqft == on_grid.rate_per_sqft
        assert off_grid.total_cents == 6136

    def test_minimum_total_enforced(self):
        result = _quote("1", "1", 50)
        assert result.raw_total_cents == 443
        assert result.total_cents == 3000
        assert result.unit_cents == 60
        assert result.minimum_applied

    def test_unit_recomputed_from_minimum(self):
        result = _quote("1", "1", 77)
        assert result.total_cents == 3000
        assert result.unit_cents == 39

    def test_unit_price_never_below_one_cent(self):
        result = _quote("0.1", "0.1", 1000, minimum=1)
        assert result.unit_cents == 1

    def test_injected_rate_table(self):
        table = RateTable.of({10: "144"})
        result = quote(Decimal("1"), Decimal("1"), 10, table, 1)
        assert result.total_cents == 1000
        assert result.unit_cents == 100

    @pytest.mark.parametrize(
        "width,height,quantity",
        [
            ("9999999", "9999999", 9999999),
            ("9999999", "0.001", 1000),
            ("1e-30", "1e-30", 50),
            ("0.0001", "3", 9999999),
        ],
    )
    def test_extreme_but_valid_inputs_price_cleanly(self, width, height, quantity):
        result = _quote(width, height, quantity)
        assert isinstance(result.total_cents, int)
        assert result.total_cents >= DEFAULT_MINIMUM_TOTAL_CENTS
        assert result.unit_cents >= 1

    def test_tiny_stickers_hit_the_minimum(self):
        result = _quote("1e-30", "1e-30", 50)
        assert result.raw_total_cents == 0
        assert result.total_cents == 3000
        assert result.unit_cents == 60

    def test_deterministic(self):
        assert _quote("2.75", "3.5", 250) == _quote("2.75", "3.5", 250)

    @pytest.mark.parametrize(
        "width,height,quantity",
        [
            ("3", "3", 50),
            ("2", "2", 100),
            ("3.5", "4", 250),
            ("2.25", "5", 500),
            ("4", "6", 1000),
            ("1.5", "1.5", 33),
        ],
    )
    def test_total_matches_closed_form(self, width, height, quantity):
        w, h = Decimal(width), Decimal(height)
        area = w * h
        expected = max(
            DEFAULT_MINIMUM_TOTAL_CENTS,
            round_half_up(
                area / 144
                * DEFAULT_RATE_TABLE.rate_for(quantity)
                * size_multiplier(area)
                * quantity
                * 100
            ),
        )
        result = _quote(width, height, quantity)
        assert result.total_cents == expected
        assert result.unit_cents >= 1
        # unit is total / quantity rounded, so the product drifts by at most half a unit per sticker
        assert abs(result.unit_cents * quantity - result.total_cents) * 2 <= quantity
