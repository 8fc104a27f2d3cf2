"""Decimal helpers for monetary arithmetic."""

from decimal import ROUND_HALF_UP, Decimal

ZERO = Decimal("0")
CENT = Decimal("0.01")
HUNDRED = Decimal("100")


def to_decimal(value: Decimal | float | int | str | None) -> Decimal:
    """Convert a number to Decimal without binary float artefacts.

    Floats go through their shortest repr, so ``0.8`` becomes ``Decimal("0.8")``
    rather than ``Decimal("0.8000000000000000444...")``.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def coerce_float(value):
    """Pydantic before-validator: floats become exact-looking Decimals, the rest pass through."""
    if isinstance(value, float):
        return Decimal(repr(value))
    return value


def round_money(value: Decimal) -> Decimal:
    """Round to two decimal places, half away from zero."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def percentage_of(amount: Decimal, percent: Decimal) -> Decimal:
    return amount * percent / HUNDRED
