"""
Monetary calculations for invoices.

Subtotal, tax and total are each rounded half-up to cents on their own,
in that order, so the displayed subtotal plus tax always adds up to the
displayed total. All arithmetic is Decimal; quantities, prices and rates
that did not parse count as zero.
"""

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Iterable

from invoice_manager.models.invoice import LineItem, Totals
from invoice_manager.utils import parse_number

CENT = Decimal("0.01")
_ZERO = Decimal("0")

# Enough digits to keep cents exact for the largest amounts parse_number accepts
PRECISION = 400


def round2(value: Decimal) -> Decimal:
    """Round to two decimal places, halves away from zero."""
    with localcontext() as ctx:
        ctx.prec = max(PRECISION, value.adjusted() + 4)
        return value.quantize(CENT, rounding=ROUND_HALF_UP)


def _as_decimal(value: Any) -> Decimal:
    return parse_number(value) or _ZERO


def line_amount(item: LineItem) -> Decimal:
    """Unrounded quantity times unit price."""
    with localcontext() as ctx:
        ctx.prec = PRECISION
        return _as_decimal(item.quantity) * _as_decimal(item.unit_price)


def compute_subtotal(items: Iterable[LineItem]) -> Decimal:
    """Sum of line amounts, rounded to cents."""
    with localcontext() as ctx:
        ctx.prec = PRECISION
        return round2(sum((line_amount(item) for item in items), _ZERO))


def compute_tax(subtotal: Decimal, tax_rate: Any) -> Decimal:
    """Tax on an already rounded subtotal, rounded to cents."""
    with localcontext() as ctx:
        ctx.prec = PRECISION
        return round2((subtotal * _as_decimal(tax_rate)).scaleb(-2))


def compute_totals(items: Iterable[LineItem], tax_rate: Any) -> Totals:
    """
    Derive subtotal, tax amount and total for a set of line items.

    Never raises: unparseable or out-of-range numbers are treated as zero.

    Args:
        items: Line items to total.
        tax_rate: Tax rate in percent.

    Returns:
        Totals with each amount quantized to cents.
    """
    subtotal = compute_subtotal(items)
    tax_amount = compute_tax(subtotal, tax_rate)
    with localcontext() as ctx:
        ctx.prec = PRECISION
        total = round2(subtotal + tax_amount)
    return Totals(subtotal=subtotal, tax_amount=tax_amount, total=total)
