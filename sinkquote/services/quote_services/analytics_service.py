# sinkquote/services/quote_services/analytics_service.py
"""
Quote pipeline analytics: status counts, conversion, value and time to close,
bucketed trends and per-salesperson performance. Each report covers the
quotes the caller may see, optionally limited to a ``created_at`` window.
"""
import enum
import logging
from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from sinkquote.core.clock import as_utc
from sinkquote.models.enums import QuoteStatus
from sinkquote.models.quote_models import Quote
from sinkquote.models.user_models import User
from sinkquote.schemas.analytics_schemas import (
    QuoteAnalyticsOut, QuoteAnalyticsResponse, RepPerformanceOut, RepPerformanceResponse,
    TrendPointOut, TrendsResponse
)
from sinkquote.services.quote_services.pricing import ZERO, round2
from sinkquote.utils.entity_verifiers import quote_scope

logger = logging.getLogger(__name__)

DECIDED_STATUSES = (QuoteStatus.accepted, QuoteStatus.rejected, QuoteStatus.expired)
VIEWED_STATUSES = (QuoteStatus.viewed, QuoteStatus.accepted, QuoteStatus.rejected)


class TrendGrouping(str, enum.Enum):
    day = "day"
    week = "week"
    month = "month"


# --------------------------
# Helpers
# --------------------------
def _ratio(part: int, whole: int) -> float:
    return round(part / whole, 2) if whole else 0.0


def _average_days(total_days: int, count: int) -> int:
    if not count:
        return 0
    return int((Decimal(total_days) / count).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def days_to_close(quote) -> Optional[int]:
    """Whole days from creation to signature, or None if never signed."""
    if quote.signed_at is None or quote.created_at is None:
        return None
    return (as_utc(quote.signed_at) - as_utc(quote.created_at)).days


def period_key(created_at: datetime, group_by: TrendGrouping) -> str:
    moment = as_utc(created_at)
    if group_by == TrendGrouping.month:
        return f"{moment.year}-{moment.month:02d}"
    day = moment.date()
    if group_by == TrendGrouping.week:
        # weeks start on Sunday
        day -= timedelta(days=(day.weekday() + 1) % 7)
    return day.isoformat()


async def _load_quotes(db: AsyncSession, conditions: list, start_date=None, end_date=None) -> List[Quote]:
    if start_date is not None:
        conditions.append(Quote.created_at >= as_utc(start_date))
    if end_date is not None:
        conditions.append(Quote.created_at <= as_utc(end_date))
    result = await db.execute(select(Quote).where(*conditions).order_by(Quote.created_at, Quote.id))
    return result.scalars().all()


# --------------------------
# SUMMARY
# --------------------------
async def get_analytics(
    db: AsyncSession,
    current_user,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> QuoteAnalyticsResponse:
    quotes = await _load_quotes(db, quote_scope(current_user), start_date, end_date)

    by_status: Dict[str, int] = {s.value: 0 for s in QuoteStatus}
    total_value = ZERO
    accepted_value = ZERO
    closed_days = []

    for quote in quotes:
        by_status[quote.status.value] += 1
        total_value += quote.total or ZERO
        if quote.status == QuoteStatus.accepted:
            accepted_value += quote.total or ZERO
            days = days_to_close(quote)
            if days is not None:
                closed_days.append(days)

    total_quotes = len(quotes)
    accepted = by_status[QuoteStatus.accepted.value]
    decided = sum(by_status[s.value] for s in DECIDED_STATUSES)
    viewed = sum(by_status[s.value] for s in VIEWED_STATUSES)

    data = QuoteAnalyticsOut(
        total_quotes=total_quotes,
        by_status=by_status,
        conversion_rate=_ratio(accepted, decided),
        view_to_accept_rate=_ratio(accepted, viewed),
        total_value=round2(total_value),
        average_value=round2(total_value / total_quotes) if total_quotes else round2(ZERO),
        accepted_value=round2(accepted_value),
        avg_days_to_close=_average_days(sum(closed_days), len(closed_days)),
    )
    return QuoteAnalyticsResponse(message="Quote analytics retrieved successfully", data=data)


# --------------------------
# TRENDS
# --------------------------
async def get_trends(
    db: AsyncSession,
    current_user,
    start_date: datetime,
    end_date: datetime,
    group_by: TrendGrouping = TrendGrouping.day,
) -> TrendsResponse:
    quotes = await _load_quotes(db, quote_scope(current_user), start_date, end_date)

    buckets: Dict[str, dict] = {}
    for quote in quotes:
        entry = buckets.setdefault(
            period_key(quote.created_at, group_by),
            {"quotes": 0, "accepted": 0, "rejected": 0, "total_value": ZERO},
        )
        entry["quotes"] += 1
        entry["total_value"] += quote.total or ZERO
        if quote.status == QuoteStatus.accepted:
            entry["accepted"] += 1
        elif quote.status == QuoteStatus.rejected:
            entry["rejected"] += 1

    data = [
        TrendPointOut(period=period, **{**entry, "total_value": round2(entry["total_value"])})
        for period, entry in sorted(buckets.items())
    ]
    return TrendsResponse(message="Quote trends retrieved successfully", data=data)


# --------------------------
# REP PERFORMANCE
# --------------------------
async def get_rep_performance(
    db: AsyncSession,
    current_user,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> RepPerformanceResponse:
    """Per-salesperson figures across the whole company, highest value first."""
    quotes = await _load_quotes(db, [Quote.company_id == current_user.company_id], start_date, end_date)

    stats: Dict[Optional[int], dict] = {}
    for quote in quotes:
        entry = stats.setdefault(
            quote.created_by_id,
            {"created": 0, "accepted": 0, "total_value": ZERO, "closed_days": []},
        )
        entry["created"] += 1
        entry["total_value"] += quote.total or ZERO
        if quote.status == QuoteStatus.accepted:
            entry["accepted"] += 1
            days = days_to_close(quote)
            if days is not None:
                entry["closed_days"].append(days)

    user_ids = [user_id for user_id in stats if user_id is not None]
    usernames = {}
    if user_ids:
        result = await db.execute(select(User.id, User.username).where(User.id.in_(user_ids)))
        usernames = dict(result.all())

    data = [
        RepPerformanceOut(
            user_id=user_id,
            username=usernames.get(user_id, "Unknown"),
            quotes_created=entry["created"],
            quotes_accepted=entry["accepted"],
            conversion_rate=_ratio(entry["accepted"], entry["created"]),
            total_value=round2(entry["total_value"]),
            avg_days_to_close=_average_days(sum(entry["closed_days"]), len(entry["closed_days"])),
        )
        for user_id, entry in stats.items()
    ]
    data.sort(key=lambda rep: -rep.total_value)
    logger.info("Rep performance computed for %d salespeople in company %s", len(data), current_user.company_id)
    return RepPerformanceResponse(message="Rep performance retrieved successfully", data=data)
