# app/services/pricing.py
"""
Pure pricing arithmetic over priced lines.

A "line" is anything exposing `unit_price` and `quantity`
(CartItemRead, PricedLine). All money is Decimal. Unit prices keep their
full precision; only aggregates (subtotal, tax, totals) are quantized
to cents.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, NamedTuple, Protocol

from app.core.config import get_settings
from app.schemas.cart import PriceBreakdown

CENT = Decimal("0.01")


class LineLike(Protocol):
    unit_price: Decimal
    quantity: int


class PricedLine(NamedTuple):
    unit_price: Decimal
    quantity: int


def to_decimal(value) -> Decimal:
    """
    Convert a store value (float, int, str, Decimal) to Decimal unrounded.

    Floats go through str() so 4.1 becomes Decimal("4.1"),
    not Decimal(4.0999999...).
    """
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def to_money(value) -> Decimal:
    """Convert a value to Decimal and quantize it to cents."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def subtotal(lines: Iterable[LineLike]) -> Decimal:
    total = sum(
        (to_decimal(line.unit_price) * line.quantity for line in lines),
        Decimal("0"),
    )
    return to_money(total)


def delivery_fee() -> Decimal:
    """Flat fee, not distance- or weight-based."""
    return to_money(get_settings().DELIVERY_FEE)


def tax(amount: Decimal) -> Decimal:
    """Flat rate applied to the subtotal, rounded to cents."""
    return to_money(to_money(amount) * get_settings().TAX_RATE)


def grand_total(lines: Iterable[LineLike]) -> Decimal:
    sub = subtotal(lines)
    return to_money(sub + delivery_fee() + tax(sub))


def price_breakdown(lines: Iterable[LineLike]) -> PriceBreakdown:
    lines = list(lines)
    sub = subtotal(lines)
    fee = delivery_fee()
    tax_amount = tax(sub)
    return PriceBreakdown(
        subtotal=sub,
        delivery_fee=fee,
        tax=tax_amount,
        grand_total=to_money(sub + fee + tax_amount),
    )
