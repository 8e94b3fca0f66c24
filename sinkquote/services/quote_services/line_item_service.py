# sinkquote/services/quote_services/line_item_service.py
"""
Line-item mutations. Each one runs in its own transaction together with the
quote totals recalculation; the quote version is not checked or bumped.
"""
import logging

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from sinkquote.core.db import atomic
from sinkquote.core.errors import ValidationFailure
from sinkquote.models.quote_models import QuoteLineItem
from sinkquote.schemas.quote_schemas import (
    LineItemCreate, LineItemUpdate, LineItemOut, LineItemData, LineItemResponse, TotalsOut
)
from sinkquote.services.quote_services.patches import LineItemPatch, apply_patch, merge_patch
from sinkquote.services.quote_services.pricing import (
    calculate_line_total, recalculate_quote_totals, round2
)
from sinkquote.services.quote_services.quote_service import build_line_item
from sinkquote.utils.entity_verifiers import verify_line_item_access, verify_quote_access

logger = logging.getLogger(__name__)

NON_NULLABLE_FIELDS = ("name", "quantity", "unit_price", "discount_percent")


async def _next_sort_order(db: AsyncSession, quote_id: int) -> int:
    result = await db.execute(
        select(func.coalesce(func.max(QuoteLineItem.sort_order), -1)).where(QuoteLineItem.quote_id == quote_id)
    )
    return result.scalar() + 1


# --------------------------
# ADD LINE ITEM
# --------------------------
async def add_line_item(db: AsyncSession, quote_id: int, data: LineItemCreate, current_user) -> LineItemResponse:
    quote = await verify_quote_access(db, quote_id, current_user)

    async with atomic(db):
        item = build_line_item(data, await _next_sort_order(db, quote.id))
        quote.line_items.append(item)
        await db.flush()
        totals = await recalculate_quote_totals(db, quote.id, quote.tax_rate, quote.discount_amount)

    return LineItemResponse(
        message="Line item added successfully",
        data=LineItemData(line_item=LineItemOut.from_orm(item), totals=TotalsOut.from_orm(totals)),
    )


# --------------------------
# UPDATE LINE ITEM
# --------------------------
async def update_line_item(
    db: AsyncSession, quote_id: int, line_item_id: int, data: LineItemUpdate, current_user
) -> LineItemResponse:
    quote = await verify_quote_access(db, quote_id, current_user)
    item = await verify_line_item_access(db, line_item_id, quote.id)

    patch = LineItemPatch.from_model(data)
    for name in NON_NULLABLE_FIELDS:
        if patch.is_supplied(name) and getattr(patch, name) is None:
            raise ValidationFailure(f"{name} cannot be null")

    pricing = merge_patch(
        {"quantity": item.quantity, "unit_price": item.unit_price, "discount_percent": item.discount_percent},
        patch,
    )

    async with atomic(db):
        apply_patch(item, patch)
        item.unit_price = round2(pricing["unit_price"])
        item.discount_percent = round2(pricing["discount_percent"])
        item.line_total = calculate_line_total(pricing["quantity"], item.unit_price, item.discount_percent)
        await db.flush()
        totals = await recalculate_quote_totals(db, quote.id, quote.tax_rate, quote.discount_amount)

    return LineItemResponse(
        message="Line item updated successfully",
        data=LineItemData(line_item=LineItemOut.from_orm(item), totals=TotalsOut.from_orm(totals)),
    )


# --------------------------
# DELETE LINE ITEM
# --------------------------
async def delete_line_item(db: AsyncSession, quote_id: int, line_item_id: int, current_user) -> LineItemResponse:
    quote = await verify_quote_access(db, quote_id, current_user)
    item = await verify_line_item_access(db, line_item_id, quote.id)

    async with atomic(db):
        quote.line_items.remove(item)
        await db.flush()
        totals = await recalculate_quote_totals(db, quote.id, quote.tax_rate, quote.discount_amount)

    logger.info("Line item %s removed from quote %s", line_item_id, quote_id)
    return LineItemResponse(
        message="Line item deleted successfully",
        data=LineItemData(line_item=None, totals=TotalsOut.from_orm(totals)),
    )
