"""Rounding rule shared by purchase statistics and the conversion rate."""

from decimal import ROUND_HALF_UP, Decimal

TWO_PLACES = 2


def round_half_up(value: float | int | Decimal, places: int = TWO_PLACES) -> float:
    """Round ``value`` half away from zero to ``places`` decimals.

    Floats go through their shortest ``repr`` first, so ``2.675`` rounds to
    ``2.68`` rather than to the ``2.67`` that binary ``round()`` gives.
    """
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    exponent = Decimal(1).scaleb(-places)
    return float(value.quantize(exponent, rounding=ROUND_HALF_UP))
