"""Currency rounding helpers."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def round2(value: Decimal | int | str) -> Decimal:
    """Round to cents, halves away from zero."""

    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def format_euros(value: Decimal | int) -> str:
    return f"{value} €"
