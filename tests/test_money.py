"""Tests for lowest-subunit / highest-unit conversion."""

import dataclasses
from decimal import Decimal, ROUND_HALF_EVEN

import pytest

from subunit.errors import AmountOverflowError, SubunitError, UnknownCurrencyError
from subunit.factor import Currency, supported_currencies
from subunit.money import (
    MAX_SUBUNITS,
    HighestUnit,
    LowestSubunit,
    format_amount,
    to_highest_unit,
    to_lowest_subunit,
)


class TestToHighestUnit:
    def test_inr_factor(self):
        result = to_highest_unit(LowestSubunit(100, Currency.INR))
        assert result == HighestUnit(1.0, Currency.INR)
        assert result.amount == Decimal("1.00")

    def test_zero_usd(self):
        assert to_highest_unit(LowestSubunit(0, Currency.USD)) == HighestUnit(0.0, Currency.USD)

    def test_quantized_to_currency_places(self):
        assert LowestSubunit(1, "INR").convert().amount == Decimal("0.01")
        assert str(LowestSubunit(1500, "KWD").convert().amount) == "1.500"
        assert str(LowestSubunit(1500, "JPY").convert().amount) == "1500"

    def test_keeps_currency(self):
        result = LowestSubunit(250, Currency.EUR).convert()
        assert result.currency is Currency.EUR

    def test_rejects_wrong_representation(self):
        with pytest.raises(TypeError):
            to_highest_unit(HighestUnit(1, "USD"))


class TestToLowestSubunit:
    def test_simple(self):
        assert to_lowest_subunit(HighestUnit("12.34", "USD")) == LowestSubunit(1234, "USD")

    def test_rounds_half_up_by_default(self):
        assert HighestUnit("0.005", "USD").convert().amount == 1
        assert HighestUnit("0.015", "USD").convert().amount == 2
        assert HighestUnit("0.0049", "USD").convert().amount == 0

    def test_float_input_uses_its_decimal_text(self):
        assert HighestUnit(1.005, "INR").convert().amount == 101

    def test_rounding_override(self):
        assert HighestUnit("0.005", "USD").convert(rounding=ROUND_HALF_EVEN).amount == 0
        assert to_lowest_subunit(HighestUnit("0.015", "USD"), rounding=ROUND_HALF_EVEN).amount == 2

    def test_overflow(self):
        assert HighestUnit("21474836.47", "USD").convert().amount == MAX_SUBUNITS
        with pytest.raises(AmountOverflowError) as exc:
            HighestUnit("21474836.48", "USD").convert()
        assert exc.value.limit == MAX_SUBUNITS

    def test_huge_amount_overflows_cleanly(self):
        with pytest.raises(AmountOverflowError):
            HighestUnit("1e300", "USD").convert()

    def test_extreme_exponent_overflows_cleanly(self):
        with pytest.raises(AmountOverflowError) as exc:
            HighestUnit("1e999999", "KWD").convert()
        assert isinstance(exc.value, SubunitError)

    def test_rounding_up_past_max_overflows(self):
        with pytest.raises(AmountOverflowError):
            HighestUnit("21474836.475", "USD").convert()

    def test_rounds_once_at_full_precision(self):
        just_below_half = "0.004" + "9" * 29
        assert HighestUnit(just_below_half, "USD").convert().amount == 0
        assert HighestUnit(just_below_half, "USD").convert(rounding=ROUND_HALF_EVEN).amount == 0
        assert HighestUnit("0.005" + "0" * 29 + "1", "USD").convert().amount == 1

    def test_rejects_wrong_representation(self):
        with pytest.raises(TypeError):
            to_lowest_subunit(LowestSubunit(1, "USD"))


class TestRoundTrip:
    AMOUNTS = [0, 1, 5, 99, 100, 101, 12345, 999_999_999, MAX_SUBUNITS - 1, MAX_SUBUNITS]

    def test_every_supported_currency(self):
        for code in sorted(supported_currencies()):
            for n in self.AMOUNTS:
                amount = LowestSubunit(n, code)
                assert amount.convert().convert() == amount, (code, n)

    def test_neighbours_at_max_stay_distinct(self):
        top = LowestSubunit(MAX_SUBUNITS, Currency.INR).convert().convert()
        below = LowestSubunit(MAX_SUBUNITS - 1, Currency.INR).convert().convert()
        assert top.amount == MAX_SUBUNITS
        assert below.amount == MAX_SUBUNITS - 1


class TestUnknownCurrency:
    def test_to_highest_unit(self):
        with pytest.raises(UnknownCurrencyError):
            LowestSubunit(100, "XYZ").convert()

    def test_to_lowest_subunit(self):
        with pytest.raises(UnknownCurrencyError) as exc:
            HighestUnit("1.00", "XYZ").convert()
        assert exc.value.code == "XYZ"
        assert isinstance(exc.value, SubunitError)


class TestConstruction:
    def test_immutable(self):
        amount = LowestSubunit(1, "USD")
        with pytest.raises(dataclasses.FrozenInstanceError):
            amount.amount = 2

    def test_types_are_distinct(self):
        assert LowestSubunit(1, "USD") != HighestUnit(1, "USD")

    @pytest.mark.parametrize("bad", [1.5, "1", True, None])
    def test_subunit_must_be_int(self, bad):
        with pytest.raises(TypeError):
            LowestSubunit(bad, "USD")

    def test_subunit_non_negative(self):
        with pytest.raises(ValueError):
            LowestSubunit(-1, "USD")

    def test_subunit_range(self):
        with pytest.raises(AmountOverflowError):
            LowestSubunit(MAX_SUBUNITS + 1, "USD")

    @pytest.mark.parametrize("bad", ["-0.01", -1, "nan", "Infinity", "abc"])
    def test_unit_must_be_finite_non_negative(self, bad):
        with pytest.raises(ValueError):
            HighestUnit(bad, "USD")

    @pytest.mark.parametrize("bad", [True, None, [1]])
    def test_unit_must_be_numeric(self, bad):
        with pytest.raises(TypeError):
            HighestUnit(bad, "USD")

    def test_unit_coerced_to_decimal(self):
        assert HighestUnit(2, "USD").amount == Decimal("2")
        assert HighestUnit("1.50", "USD").amount == Decimal("1.50")
        assert isinstance(HighestUnit(0.1, "USD").amount, Decimal)
        assert HighestUnit(0.1, "USD").amount == Decimal("0.1")


class TestSerialization:
    def test_lowest_subunit_dict(self):
        amount = LowestSubunit(150, Currency.INR)
        assert amount.to_dict() == {"amount": 150, "currency": "INR"}
        assert LowestSubunit.from_dict(amount.to_dict()) == amount

    def test_highest_unit_dict(self):
        amount = HighestUnit("1.50", "inr")
        assert amount.to_dict() == {"amount": "1.50", "currency": "INR"}
        assert HighestUnit.from_dict(amount.to_dict()).convert() == LowestSubunit(150, "INR")


class TestFormatAmount:
    def test_from_subunits(self):
        assert format_amount(LowestSubunit(150, Currency.INR)) == "1.50 INR"
        assert format_amount(LowestSubunit(500, "JPY")) == "500 JPY"

    def test_from_units(self):
        assert format_amount(HighestUnit("1.5", "KWD")) == "1.500 KWD"
        assert format_amount(HighestUnit("0.005", "USD")) == "0.01 USD"

    def test_large_amount(self):
        assert format_amount(HighestUnit("1e30", "USD")) == "1" + "0" * 30 + ".00 USD"


class TestCurrencyNormalization:
    def test_code_strings_compare_by_code(self):
        assert LowestSubunit(1, "inr") == LowestSubunit(1, "INR")
        assert HighestUnit("1.00", " usd ").currency == "USD"

    def test_enum_members_kept(self):
        assert LowestSubunit(1, Currency.INR).currency is Currency.INR


def test_unit_dict_keeps_every_digit():
    amount = HighestUnit("0.1234567890123456789", "USD")
    assert amount.to_dict()["amount"] == "0.1234567890123456789"
    assert HighestUnit.from_dict(amount.to_dict()) == amount
