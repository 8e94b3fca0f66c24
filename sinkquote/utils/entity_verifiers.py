# sinkquote/utils/entity_verifiers.py
"""
Company-scoped lookups. A record in another company is reported exactly
like a missing one.
"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from sinkquote.core.errors import NotFound
from sinkquote.models.customer_models import Customer
from sinkquote.models.measurement_models import Measurement
from sinkquote.models.quote_models import Quote, QuoteLineItem
from sinkquote.models.sink_models import Sink
from sinkquote.utils.check_roles import is_salesperson


def quote_scope(user):
    """WHERE clauses limiting quotes to what ``user`` may see."""
    conditions = [Quote.company_id == user.company_id]
    if is_salesperson(user):
        conditions.append(Quote.created_by_id == user.id)
    return conditions


async def verify_customer_access(db: AsyncSession, customer_id: int, company_id: int) -> Customer:
    result = await db.execute(
        select(Customer).where(
            Customer.id == customer_id,
            Customer.company_id == company_id,
            Customer.is_active == True,  # noqa: E712
        )
    )
    customer = result.scalars().first()
    if not customer:
        raise NotFound("Customer not found")
    return customer


async def verify_measurement_access(db: AsyncSession, measurement_id: int, company_id: int) -> Measurement:
    result = await db.execute(
        select(Measurement).where(Measurement.id == measurement_id, Measurement.company_id == company_id)
    )
    measurement = result.scalars().first()
    if not measurement:
        raise NotFound("Measurement not found")
    return measurement


async def verify_sink_access(db: AsyncSession, sink_id: int, company_id: int) -> Sink:
    result = await db.execute(select(Sink).where(Sink.id == sink_id, Sink.company_id == company_id))
    sink = result.scalars().first()
    if not sink:
        raise NotFound("Sink not found")
    return sink


async def verify_quote_access(db: AsyncSession, quote_id: int, user) -> Quote:
    result = await db.execute(select(Quote).where(Quote.id == quote_id, *quote_scope(user)))
    quote = result.scalars().first()
    if not quote:
        raise NotFound("Quote not found")
    return quote


async def verify_line_item_access(db: AsyncSession, line_item_id: int, quote_id: int) -> QuoteLineItem:
    result = await db.execute(
        select(QuoteLineItem).where(QuoteLineItem.id == line_item_id, QuoteLineItem.quote_id == quote_id)
    )
    item = result.scalars().first()
    if not item:
        raise NotFound("Line item not found")
    return item
