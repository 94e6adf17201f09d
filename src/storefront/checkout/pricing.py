"""Money arithmetic for checkout.

Prices are held as floats on the aggregates; totals are computed with
``Decimal`` and rounded half-up to the penny on every line before summing, so
line order never changes the result.
"""

from decimal import ROUND_HALF_UP, Decimal

CURRENCY = "GBP"
PENNY = Decimal("0.01")


def to_decimal(amount) -> Decimal:
    return Decimal(str(amount))


def line_total(unit_price, quantity: int) -> Decimal:
    return (to_decimal(unit_price) * quantity).quantize(PENNY, rounding=ROUND_HALF_UP)


def cart_total(lines) -> Decimal:
    """Sum of per-line rounded totals. ``lines`` expose ``unit_price`` and ``quantity``."""
    return sum((line_total(line.unit_price, line.quantity) for line in lines), Decimal("0.00"))


def to_minor_units(amount) -> int:
    """Convert a major-unit amount to pence, rounding half-up."""
    return int((to_decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_amount(amount) -> str:
    return f"£{to_decimal(amount).quantize(PENNY, rounding=ROUND_HALF_UP)}"
