"""Money parsing and formatting with integer-cents internals."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from ..errors import ValidationError

AmountInput = Union[str, int, float, Decimal]

_CENT = Decimal("0.01")

# Largest amount whose 15 significant digits survive the JSON float round trip.
MAX_AMOUNT_CENTS = 10**15 - 1


def to_cents(value: Decimal) -> int:
    """Round a decimal to 2 places (half-up) and return it in minor units."""
    return int(value.quantize(_CENT, rounding=ROUND_HALF_UP).scaleb(2))


def from_cents(cents: int) -> Decimal:
    return Decimal(cents).scaleb(-2)


def _to_decimal(raw: AmountInput) -> Decimal:
    if isinstance(raw, bool):
        raise ValidationError("Amount must be a number", field="amount", value=raw)
    if isinstance(raw, Decimal):
        return raw
    if isinstance(raw, int):
        return Decimal(raw)
    if isinstance(raw, float):
        # repr() gives the shortest round-tripping text, so 0.1 stays 0.1
        return Decimal(repr(raw))
    if isinstance(raw, str):
        text = raw.strip().replace("\u00a0", "").replace("\u202f", "").replace(" ", "")
        if not text:
            raise ValidationError("Amount is required", field="amount", value=raw)
        if "," in text and "." not in text:
            text = text.replace(",", ".")
        else:
            text = text.replace(",", "")
        try:
            return Decimal(text)
        except InvalidOperation as exc:
            raise ValidationError(
                f"Amount {raw!r} is not a number", field="amount", value=raw
            ) from exc
    raise ValidationError("Amount must be a number", field="amount", value=raw)


def parse_amount_cents(raw: AmountInput | None) -> int:
    """Parse user input into a strictly positive amount in cents.

    The sign is dropped; direction is carried by the transaction kind.

    Raises:
        ValidationError: missing, non-numeric, non-finite, zero after rounding, or
            above MAX_AMOUNT_CENTS.
    """
    if raw is None:
        raise ValidationError("Amount is required", field="amount", value=raw)
    value = _to_decimal(raw)
    if not value.is_finite():
        raise ValidationError("Amount must be finite", field="amount", value=raw)
    try:
        cents = to_cents(abs(value))
    except InvalidOperation as exc:
        raise ValidationError("Amount is out of range", field="amount", value=raw) from exc
    if cents <= 0:
        raise ValidationError("Amount must be greater than 0", field="amount", value=raw)
    if cents > MAX_AMOUNT_CENTS:
        raise ValidationError("Amount is out of range", field="amount", value=raw)
    return cents


def format_amount(value: Decimal | int | float, currency: str = "") -> str:
    """Render ``1234.5`` as ``1,234.50`` with an optional currency suffix."""
    amount = Decimal(repr(value)) if isinstance(value, float) else Decimal(value)
    text = f"{amount.quantize(_CENT, rounding=ROUND_HALF_UP):,.2f}"
    return f"{text} {currency}" if currency else text


__all__ = [
    "AmountInput",
    "MAX_AMOUNT_CENTS",
    "format_amount",
    "from_cents",
    "parse_amount_cents",
    "to_cents",
]
