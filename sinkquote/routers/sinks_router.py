# sinkquote/routers/sinks_router.py
from decimal import Decimal

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from sinkquote.core.db import get_db
from sinkquote.models.enums import MountingStyle, SinkMaterial
from sinkquote.schemas.sink_schemas import (
    SinkCreate, SinkUpdate, SinkResponse, SinkListResponse, MatchRequest, MatchResponse
)
from sinkquote.services import sink_service
from sinkquote.utils.check_roles import ADMIN_ONLY, ALL_ROLES, require_role
from sinkquote.utils.get_user import get_current_user

router = APIRouter(prefix="/sinks", tags=["Sinks"])


# --------------------------
# MATCH SINKS TO MEASUREMENT
# --------------------------
@router.post("/match", response_model=MatchResponse)
@require_role(ALL_ROLES)
async def match_sinks_route(
    data: MatchRequest,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    return await sink_service.match_products_to_measurement(db, data, _user)


# --------------------------
# LIST SINKS
# --------------------------
@router.get("/", response_model=SinkListResponse)
@require_role(ALL_ROLES)
async def list_sinks_route(
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
    material: SinkMaterial = Query(None),
    mounting_style: MountingStyle = Query(None),
    min_width: Decimal = Query(None, gt=0),
    max_width: Decimal = Query(None, gt=0),
    min_depth: Decimal = Query(None, gt=0),
    max_depth: Decimal = Query(None, gt=0),
    bowl_count: int = Query(None, ge=1),
    is_active: bool = Query(None),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    return await sink_service.list_sinks(
        db, _user, material, mounting_style, min_width, max_width,
        min_depth, max_depth, bowl_count, is_active, limit, offset,
    )


@router.get("/{sink_id}", response_model=SinkResponse)
@require_role(ALL_ROLES)
async def get_sink_route(
    sink_id: int,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    return await sink_service.get_sink(db, sink_id, _user)


# --------------------------
# CATALOG ADMINISTRATION
# --------------------------
@router.post("/", response_model=SinkResponse, status_code=status.HTTP_201_CREATED)
@require_role(ADMIN_ONLY)
async def create_sink_route(
    data: SinkCreate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    return await sink_service.create_sink(db, data, _user)


@router.put("/{sink_id}", response_model=SinkResponse)
@require_role(ADMIN_ONLY)
async def update_sink_route(
    sink_id: int,
    data: SinkUpdate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    return await sink_service.update_sink(db, sink_id, data, _user)


@router.delete("/{sink_id}", response_model=SinkResponse)
@require_role(ADMIN_ONLY)
async def delete_sink_route(
    sink_id: int,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    return await sink_service.delete_sink(db, sink_id, _user)


@router.post("/{sink_id}/toggle-active", response_model=SinkResponse)
@require_role(ADMIN_ONLY)
async def toggle_sink_active_route(
    sink_id: int,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    return await sink_service.toggle_sink_active(db, sink_id, _user)
