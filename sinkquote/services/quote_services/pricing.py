# sinkquote/services/quote_services/pricing.py
"""
Line-item pricing and quote totals.

All arithmetic is done on ``Decimal`` and rounded half-up to cents, so the
figures persisted in the database are exactly what callers see.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Union

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from sinkquote.core.clock import utcnow
from sinkquote.core.errors import NotFound
from sinkquote.models.quote_models import Quote, QuoteLineItem

logger = logging.getLogger(__name__)

Number = Union[Decimal, int, float, str]

CENTS = Decimal("0.01")
RATE_PLACES = Decimal("0.0001")
ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() first so floats like 0.1 keep their printed value
    return Decimal(str(value))


def round2(value: Number) -> Decimal:
    return to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def round_rate(value: Number) -> Decimal:
    return to_decimal(value).quantize(RATE_PLACES, rounding=ROUND_HALF_UP)


def calculate_line_total(quantity: int, unit_price: Number, discount_percent: Number = 0) -> Decimal:
    gross = int(quantity) * to_decimal(unit_price)
    discount = gross * (to_decimal(discount_percent) / HUNDRED)
    return round2(gross - discount)


@dataclass(frozen=True)
class QuoteTotals:
    subtotal: Decimal
    taxable_amount: Decimal
    tax_amount: Decimal
    total: Decimal


def compute_totals(line_totals: Iterable[Number], tax_rate: Number, discount_amount: Number) -> QuoteTotals:
    subtotal = round2(sum((to_decimal(t) for t in line_totals), ZERO))
    taxable = max(ZERO, subtotal - to_decimal(discount_amount))
    tax_amount = max(ZERO, round2(taxable * round_rate(tax_rate)))
    total = max(ZERO, round2(taxable + tax_amount))
    return QuoteTotals(
        subtotal=subtotal,
        taxable_amount=round2(taxable),
        tax_amount=tax_amount,
        total=total,
    )


async def recalculate_quote_totals(
    db: AsyncSession, quote_id: int, tax_rate: Number, discount_amount: Number
) -> QuoteTotals:
    """
    Re-derive subtotal/tax/total for a quote from its stored line items.

    Runs inside whatever transaction ``db`` currently holds and only flushes;
    committing is the caller's job. Calling it twice with the same line
    items and inputs writes the same numbers.
    """
    await db.flush()
    result = await db.execute(
        select(QuoteLineItem.line_total).where(QuoteLineItem.quote_id == quote_id)
    )
    totals = compute_totals(result.scalars().all(), tax_rate, discount_amount)

    quote = await db.get(Quote, quote_id)
    if quote is None:
        raise NotFound("Quote not found")
    quote.subtotal = totals.subtotal
    quote.tax_amount = totals.tax_amount
    quote.total = totals.total
    quote.updated_at = utcnow()
    await db.flush()

    logger.debug("Quote %s totals: subtotal=%s tax=%s total=%s", quote_id, totals.subtotal, totals.tax_amount, totals.total)
    return totals
