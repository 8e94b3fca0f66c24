# sinkquote/services/quote_services/quote_service.py
import logging
import random
import string
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import and_, func, or_, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from sinkquote.core.clock import as_utc, utcnow
from sinkquote.core.config import QUOTE_EXPIRATION_DAYS, QUOTE_NUMBER_ATTEMPTS
from sinkquote.core.db import atomic
from sinkquote.core.errors import (
    NotFound, TransactionFailure, ValidationFailure, VersionConflict
)
from sinkquote.models.enums import QuoteStatus
from sinkquote.models.quote_models import Quote, QuoteLineItem
from sinkquote.schemas.quote_schemas import (
    LineItemCreate, QuoteCreate, QuoteUpdate, QuoteOut, QuoteSummaryOut,
    QuoteResponse, QuoteListResponse
)
from sinkquote.services.quote_services.patches import QuotePatch
from sinkquote.services.quote_services.pricing import (
    calculate_line_total, recalculate_quote_totals, round2, round_rate
)
from sinkquote.services.quote_services.state_machine import ensure_signable, ensure_transition
from sinkquote.utils.activity_helpers import log_user_activity
from sinkquote.utils.entity_verifiers import (
    quote_scope, verify_customer_access, verify_measurement_access, verify_quote_access
)

logger = logging.getLogger(__name__)

QUOTE_NUMBER_ALPHABET = string.ascii_uppercase + string.digits


# --------------------------
# Helpers
# --------------------------
def generate_quote_number(now: Optional[datetime] = None) -> str:
    now = now or utcnow()
    suffix = "".join(random.choices(QUOTE_NUMBER_ALPHABET, k=4))
    return f"Q{now:%y%m}-{suffix}"


async def generate_unique_quote_number(db: AsyncSession, company_id: int) -> str:
    for _ in range(QUOTE_NUMBER_ATTEMPTS):
        candidate = generate_quote_number()
        taken = (
            await db.execute(
                select(Quote.id).where(Quote.company_id == company_id, Quote.quote_number == candidate)
            )
        ).first()
        if not taken:
            return candidate
    raise TransactionFailure("Failed to generate unique quote number. Please try again.")


def build_line_item(item: LineItemCreate, sort_order: int) -> QuoteLineItem:
    unit_price = round2(item.unit_price)
    discount_percent = round2(item.discount_percent)
    return QuoteLineItem(
        sink_id=item.sink_id,
        type=item.type,
        name=item.name,
        description=item.description,
        sku=item.sku,
        quantity=item.quantity,
        unit_price=unit_price,
        discount_percent=discount_percent,
        line_total=calculate_line_total(item.quantity, unit_price, discount_percent),
        sort_order=sort_order,
    )


async def load_quote(db: AsyncSession, quote_id: int) -> Quote:
    """Fresh copy of a quote and its ordered line items."""
    result = await db.execute(
        select(Quote)
        .options(selectinload(Quote.line_items))
        .where(Quote.id == quote_id)
        .execution_options(populate_existing=True)
    )
    quote = result.scalars().first()
    if not quote:
        raise NotFound("Quote not found")
    return quote


async def _quote_out(db: AsyncSession, quote_id: int) -> QuoteOut:
    return QuoteOut.from_orm(await load_quote(db, quote_id))


# --------------------------
# CREATE QUOTE
# --------------------------
async def create_quote(db: AsyncSession, data: QuoteCreate, current_user) -> QuoteResponse:
    """
    Insert the quote header, every initial line item and the derived totals
    as one transaction. Any failure leaves no quote behind.
    """
    if not data.line_items:
        raise ValidationFailure("A quote needs at least one line item")

    company_id = current_user.company_id
    await verify_customer_access(db, data.customer_id, company_id)
    if data.measurement_id is not None:
        await verify_measurement_access(db, data.measurement_id, company_id)

    quote_number = await generate_unique_quote_number(db, company_id)

    async with atomic(db):
        quote = Quote(
            company_id=company_id,
            customer_id=data.customer_id,
            measurement_id=data.measurement_id,
            created_by_id=current_user.id,
            quote_number=quote_number,
            status=QuoteStatus.draft,
            tax_rate=round_rate(data.tax_rate),
            discount_amount=round2(data.discount_amount),
            valid_until=as_utc(data.valid_until),
            notes=data.notes,
            version=1,
            line_items=[build_line_item(item, index) for index, item in enumerate(data.line_items)],
        )
        db.add(quote)
        await db.flush()

        await recalculate_quote_totals(db, quote.id, quote.tax_rate, quote.discount_amount)
        await log_user_activity(
            db,
            user_id=current_user.id,
            username=current_user.username,
            message=f"Quote '{quote_number}' created by '{current_user.username}'",
        )

    logger.info("Quote %s (%s) created with %d line items", quote.id, quote_number, len(data.line_items))
    return QuoteResponse(message="Quote created successfully", data=await _quote_out(db, quote.id))


# --------------------------
# GET SINGLE QUOTE
# --------------------------
async def get_quote(db: AsyncSession, quote_id: int, current_user) -> QuoteResponse:
    await verify_quote_access(db, quote_id, current_user)
    return QuoteResponse(message="Quote retrieved successfully", data=await _quote_out(db, quote_id))


# --------------------------
# LIST QUOTES
# --------------------------
async def list_quotes(
    db: AsyncSession,
    current_user,
    status: Optional[QuoteStatus] = None,
    customer_id: Optional[int] = None,
    limit: int = 50,
    offset: int = 0,
) -> QuoteListResponse:
    conditions = quote_scope(current_user)
    if status is not None:
        conditions.append(Quote.status == status)
    if customer_id is not None:
        await verify_customer_access(db, customer_id, current_user.company_id)
        conditions.append(Quote.customer_id == customer_id)

    total = (await db.execute(select(func.count(Quote.id)).where(*conditions))).scalar() or 0
    result = await db.execute(
        select(Quote)
        .where(*conditions)
        .order_by(Quote.created_at.desc(), Quote.id.desc())
        .limit(limit)
        .offset(offset)
    )
    quotes = result.scalars().all()
    return QuoteListResponse(
        message="Quotes retrieved successfully",
        total=total,
        has_more=offset + len(quotes) < total,
        data=[QuoteSummaryOut.from_orm(q) for q in quotes],
    )


# --------------------------
# UPDATE QUOTE (optimistic concurrency)
# --------------------------
async def _conflict(db: AsyncSession, quote_id: int, client_version: int) -> VersionConflict:
    current = await load_quote(db, quote_id)
    logger.warning(
        "Version conflict on quote %s: client=%s server=%s", quote_id, client_version, current.version
    )
    return VersionConflict(
        server_version=current.version,
        client_version=client_version,
        server_data=QuoteOut.from_orm(current).model_dump(mode="json"),
    )


def _patch_values(patch: QuotePatch) -> dict:
    values = patch.supplied()
    for name in ("tax_rate", "discount_amount"):
        if name in values and values[name] is None:
            raise ValidationFailure(f"{name} cannot be null")
    if "tax_rate" in values:
        values["tax_rate"] = round_rate(values["tax_rate"])
    if "discount_amount" in values:
        values["discount_amount"] = round2(values["discount_amount"])
    if "valid_until" in values:
        values["valid_until"] = as_utc(values["valid_until"])
    return values


async def update_quote(db: AsyncSession, quote_id: int, data: QuoteUpdate, current_user) -> QuoteResponse:
    """
    Update quote-level fields. When the caller sends ``version`` it must match
    the stored one; every accepted update bumps the version by exactly one.
    """
    existing = await verify_quote_access(db, quote_id, current_user)
    if data.version is not None and data.version != existing.version:
        raise await _conflict(db, quote_id, data.version)

    patch = QuotePatch.from_model(data)
    values = _patch_values(patch)
    expected_version = existing.version

    async with atomic(db):
        # Compare-and-swap so a writer that slipped in after our read still loses
        result = await db.execute(
            update(Quote)
            .where(Quote.id == quote_id, Quote.version == expected_version)
            .values(version=expected_version + 1, updated_at=utcnow(), **values)
        )
        if result.rowcount != 1:
            raise await _conflict(db, quote_id, data.version if data.version is not None else expected_version)

        if patch.touches_totals:
            quote = await load_quote(db, quote_id)
            await recalculate_quote_totals(db, quote_id, quote.tax_rate, quote.discount_amount)

        await log_user_activity(
            db,
            user_id=current_user.id,
            username=current_user.username,
            message=f"Quote {quote_id} updated to version {expected_version + 1}",
        )

    return QuoteResponse(message="Quote updated successfully", data=await _quote_out(db, quote_id))


# --------------------------
# UPDATE STATUS
# --------------------------
async def update_quote_status(
    db: AsyncSession, quote_id: int, target: QuoteStatus, current_user, now: Optional[datetime] = None
) -> QuoteResponse:
    quote = await verify_quote_access(db, quote_id, current_user)
    previous = QuoteStatus(quote.status)
    target = ensure_transition(quote, target, now)

    async with atomic(db):
        quote.status = target
        quote.updated_at = now or utcnow()
        await log_user_activity(
            db,
            user_id=current_user.id,
            username=current_user.username,
            message=f"Quote '{quote.quote_number}' moved from {previous.value} to {target.value}",
        )

    logger.info("Quote %s status %s -> %s", quote_id, previous.value, target.value)
    return QuoteResponse(message=f"Quote marked as {target.value}", data=await _quote_out(db, quote_id))


# --------------------------
# SAVE SIGNATURE
# --------------------------
async def save_signature(
    db: AsyncSession, quote_id: int, signature_data_url: str, current_user, now: Optional[datetime] = None
) -> QuoteResponse:
    """Capture the customer's signature and accept the quote in one step."""
    if not signature_data_url:
        raise ValidationFailure("Signature is required")

    quote = await verify_quote_access(db, quote_id, current_user)
    ensure_signable(quote, now)
    signed_at = now or utcnow()

    async with atomic(db):
        quote.signature_url = signature_data_url
        quote.signed_at = signed_at
        quote.status = QuoteStatus.accepted
        quote.updated_at = signed_at
        await log_user_activity(
            db,
            user_id=current_user.id,
            username=current_user.username,
            message=f"Quote '{quote.quote_number}' signed and accepted",
        )

    logger.info("Quote %s signed", quote_id)
    return QuoteResponse(message="Quote signed successfully", data=await _quote_out(db, quote_id))


# --------------------------
# DELETE QUOTE
# --------------------------
async def delete_quote(db: AsyncSession, quote_id: int, current_user) -> QuoteResponse:
    quote = await verify_quote_access(db, quote_id, current_user)
    async with atomic(db):
        await db.delete(quote)
        await log_user_activity(
            db,
            user_id=current_user.id,
            username=current_user.username,
            message=f"Quote '{quote.quote_number}' deleted",
        )
    return QuoteResponse(message="Quote deleted successfully", data=None)


# --------------------------
# EXPIRE STALE QUOTES
# --------------------------
async def expire_stale_quotes(
    db: AsyncSession,
    expiration_days: int = QUOTE_EXPIRATION_DAYS,
    now: Optional[datetime] = None,
    company_id: Optional[int] = None,
) -> int:
    """
    Move sent/viewed quotes to ``expired`` when their ``valid_until`` has
    passed or they are older than ``expiration_days``. Returns the count.
    """
    now = as_utc(now) or utcnow()
    cutoff = now - timedelta(days=expiration_days)

    conditions = [
        Quote.status.in_([QuoteStatus.sent, QuoteStatus.viewed]),
        or_(
            and_(Quote.valid_until.isnot(None), Quote.valid_until <= now),
            Quote.created_at <= cutoff,
        ),
    ]
    if company_id is not None:
        conditions.append(Quote.company_id == company_id)

    async with atomic(db):
        result = await db.execute(
            update(Quote)
            .where(*conditions)
            .values(status=QuoteStatus.expired, updated_at=now)
            .execution_options(synchronize_session=False)
        )

    logger.info("Expired %d stale quotes", result.rowcount)
    return result.rowcount
