# sinkquote/routers/analytics_router.py
from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from sinkquote.core.db import get_db
from sinkquote.schemas.analytics_schemas import QuoteAnalyticsResponse, RepPerformanceResponse, TrendsResponse
from sinkquote.services.quote_services import analytics_service
from sinkquote.services.quote_services.analytics_service import TrendGrouping
from sinkquote.utils.check_roles import ALL_ROLES, MANAGEMENT_ROLES, require_role
from sinkquote.utils.get_user import get_current_user

# Registered ahead of the quotes router so /quotes/{quote_id} does not shadow these paths
router = APIRouter(prefix="/quotes/analytics", tags=["Quote Analytics"])


@router.get("/", response_model=QuoteAnalyticsResponse)
@require_role(ALL_ROLES)
async def get_analytics_route(
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
    start_date: datetime = Query(None),
    end_date: datetime = Query(None),
):
    return await analytics_service.get_analytics(db, _user, start_date, end_date)


@router.get("/trends", response_model=TrendsResponse)
@require_role(ALL_ROLES)
async def get_trends_route(
    start_date: datetime,
    end_date: datetime,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
    group_by: TrendGrouping = Query(TrendGrouping.day),
):
    return await analytics_service.get_trends(db, _user, start_date, end_date, group_by)


@router.get("/reps", response_model=RepPerformanceResponse)
@require_role(MANAGEMENT_ROLES)
async def get_rep_performance_route(
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
    start_date: datetime = Query(None),
    end_date: datetime = Query(None),
):
    return await analytics_service.get_rep_performance(db, _user, start_date, end_date)
