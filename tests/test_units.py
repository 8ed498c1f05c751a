"""Tests for unit conversion and rounding."""

import pytest
from training_analytics.units import WeightUnit, display_to_kg, kg_to_display, round_half_up


class TestRoundHalfUp:
    def test_halves_round_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(5.25) == 5

    def test_one_decimal(self):
        assert round_half_up(1.25, 1) == pytest.approx(1.3)
        assert round_half_up(0.75, 1) == pytest.approx(0.8)
        assert round_half_up(116.666, 1) == pytest.approx(116.7)


class TestWeightUnit:
    def test_parse(self):
        assert WeightUnit.parse("KG") == WeightUnit.KG
        assert WeightUnit.parse(" lbs ") == WeightUnit.LBS
        assert WeightUnit.parse(None) == WeightUnit.KG
        assert WeightUnit.parse(WeightUnit.LBS) == WeightUnit.LBS

    def test_parse_invalid(self):
        with pytest.raises(ValueError):
            WeightUnit.parse("stone")


class TestConversion:
    def test_kg_passthrough(self):
        assert kg_to_display(102.5, WeightUnit.KG) == 102.5
        assert display_to_kg(102.5, WeightUnit.KG) == 102.5

    def test_pounds_round_to_half(self):
        assert kg_to_display(100, WeightUnit.LBS) == 220.5
        assert kg_to_display(20, WeightUnit.LBS) == 44.0

    def test_back_to_kg(self):
        assert display_to_kg(220.462, WeightUnit.LBS) == pytest.approx(100)

    def test_missing_values(self):
        assert kg_to_display(None, WeightUnit.LBS) == 0
        assert display_to_kg(None, WeightUnit.KG) == 0
