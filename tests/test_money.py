from __future__ import annotations

from decimal import Decimal

import pytest

from pocketledger.errors import ValidationError
from pocketledger.services.money import (
    MAX_AMOUNT_CENTS,
    format_amount,
    from_cents,
    parse_amount_cents,
    to_cents,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("100", 10000),
        ("100.00", 10000),
        (" 12.5 ", 1250),
        ("12,50", 1250),
        ("1,234.56", 123456),
        ("0.005", 1),
        (40, 4000),
        (0.1, 10),
        (Decimal("19.99"), 1999),
        (-5, 500),
        ("-5", 500),
    ],
)
def test_parse_amount_cents_accepts_numbers(raw, expected):
    assert parse_amount_cents(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["abc", "", "   ", None, "0", "0.00", "0.004", "NaN", "inf", "-Infinity", float("nan"), True, "12abc"],
)
def test_parse_amount_cents_rejects_invalid(raw):
    with pytest.raises(ValidationError) as excinfo:
        parse_amount_cents(raw)
    assert excinfo.value.field == "amount"


def test_cents_conversion_is_exact():
    assert to_cents(Decimal("0.1") + Decimal("0.2")) == 30
    assert from_cents(30) == Decimal("0.30")
    assert from_cents(-6000) == Decimal("-60.00")


def test_format_amount_uses_thousands_and_two_places():
    assert format_amount(Decimal("1234.5")) == "1,234.50"
    assert format_amount(Decimal("1234.5"), "TND") == "1,234.50 TND"
    assert format_amount(0, "TND") == "0.00 TND"
    assert format_amount(Decimal("-60")) == "-60.00"
    assert format_amount(0.1) == "0.10"


def test_parse_amount_cents_accepts_the_largest_amount():
    assert parse_amount_cents("9,999,999,999,999.99") == MAX_AMOUNT_CENTS
    assert parse_amount_cents("-9999999999999.99") == MAX_AMOUNT_CENTS


@pytest.mark.parametrize("raw", ["10000000000000", "12345678901234567.89", "1e30", Decimal("1E+40")])
def test_parse_amount_cents_rejects_amounts_above_the_limit(raw):
    with pytest.raises(ValidationError) as excinfo:
        parse_amount_cents(raw)
    assert excinfo.value.field == "amount"
    assert "out of range" in str(excinfo.value)
