# sinkquote/services/sink_service.py
import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from sinkquote.core.config import CANDIDATE_DIMENSION_MARGIN
from sinkquote.core.db import atomic
from sinkquote.core.errors import DuplicateSku, ValidationFailure
from sinkquote.models.sink_models import Sink
from sinkquote.schemas.sink_schemas import (
    SinkCreate, SinkUpdate, SinkOut, SinkResponse, SinkListResponse,
    MatchRequest, MatchOut, MatchData, MatchResponse, MeasurementSummary
)
from sinkquote.services.matching import MatchPreferences, match_sinks_to_measurement
from sinkquote.services.quote_services.patches import SinkPatch, apply_patch
from sinkquote.utils.entity_verifiers import verify_measurement_access, verify_sink_access

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    "sku", "name", "material", "mounting_style", "bowl_count",
    "width_inches", "depth_inches", "height_inches", "base_price", "labor_cost", "is_active",
)


async def _ensure_unique_sku(db: AsyncSession, company_id: int, sku: str, exclude_id: Optional[int] = None):
    conditions = [Sink.company_id == company_id, Sink.sku == sku]
    if exclude_id is not None:
        conditions.append(Sink.id != exclude_id)
    existing = (await db.execute(select(Sink.id).where(*conditions))).first()
    if existing:
        raise DuplicateSku("A sink with this SKU already exists")


# --------------------------
# LIST SINKS
# --------------------------
async def list_sinks(
    db: AsyncSession,
    current_user,
    material: str = None,
    mounting_style: str = None,
    min_width: Decimal = None,
    max_width: Decimal = None,
    min_depth: Decimal = None,
    max_depth: Decimal = None,
    bowl_count: int = None,
    is_active: bool = None,
    limit: int = 50,
    offset: int = 0,
) -> SinkListResponse:
    conditions = [Sink.company_id == current_user.company_id]
    if material:
        conditions.append(Sink.material == material)
    if mounting_style:
        conditions.append(Sink.mounting_style == mounting_style)
    if min_width is not None:
        conditions.append(Sink.width_inches >= min_width)
    if max_width is not None:
        conditions.append(Sink.width_inches <= max_width)
    if min_depth is not None:
        conditions.append(Sink.depth_inches >= min_depth)
    if max_depth is not None:
        conditions.append(Sink.depth_inches <= max_depth)
    if bowl_count is not None:
        conditions.append(Sink.bowl_count == bowl_count)
    if is_active is not None:
        conditions.append(Sink.is_active == is_active)

    total = (await db.execute(select(func.count(Sink.id)).where(*conditions))).scalar() or 0
    result = await db.execute(
        select(Sink).where(*conditions).order_by(Sink.name).limit(limit).offset(offset)
    )
    return SinkListResponse(
        message="Sinks retrieved successfully",
        total=total,
        data=[SinkOut.from_orm(s) for s in result.scalars().all()],
    )


# --------------------------
# GET SINGLE SINK
# --------------------------
async def get_sink(db: AsyncSession, sink_id: int, current_user) -> SinkResponse:
    sink = await verify_sink_access(db, sink_id, current_user.company_id)
    return SinkResponse(message="Sink retrieved successfully", data=SinkOut.from_orm(sink))


# --------------------------
# CREATE SINK
# --------------------------
async def create_sink(db: AsyncSession, data: SinkCreate, current_user) -> SinkResponse:
    await _ensure_unique_sku(db, current_user.company_id, data.sku)

    async with atomic(db):
        sink = Sink(**data.model_dump(), company_id=current_user.company_id)
        db.add(sink)
        await db.flush()

    logger.info("Sink %s (%s) added to catalog of company %s", sink.id, sink.sku, sink.company_id)
    return SinkResponse(message="Sink created successfully", data=SinkOut.from_orm(sink))


# --------------------------
# UPDATE SINK
# --------------------------
async def update_sink(db: AsyncSession, sink_id: int, data: SinkUpdate, current_user) -> SinkResponse:
    sink = await verify_sink_access(db, sink_id, current_user.company_id)
    patch = SinkPatch.from_model(data)
    for name in REQUIRED_FIELDS:
        if patch.is_supplied(name) and getattr(patch, name) is None:
            raise ValidationFailure(f"{name} cannot be null")

    if patch.is_supplied("sku") and patch.sku != sink.sku:
        await _ensure_unique_sku(db, current_user.company_id, patch.sku, exclude_id=sink.id)

    async with atomic(db):
        apply_patch(sink, patch)
        await db.flush()

    await db.refresh(sink)
    return SinkResponse(message="Sink updated successfully", data=SinkOut.from_orm(sink))


# --------------------------
# DELETE SINK
# --------------------------
async def delete_sink(db: AsyncSession, sink_id: int, current_user) -> SinkResponse:
    sink = await verify_sink_access(db, sink_id, current_user.company_id)
    async with atomic(db):
        await db.delete(sink)
    return SinkResponse(message="Sink deleted successfully", data=None)


# --------------------------
# TOGGLE ACTIVE
# --------------------------
async def toggle_sink_active(db: AsyncSession, sink_id: int, current_user) -> SinkResponse:
    sink = await verify_sink_access(db, sink_id, current_user.company_id)
    async with atomic(db):
        sink.is_active = not sink.is_active
        await db.flush()
    return SinkResponse(
        message=f"Sink {'activated' if sink.is_active else 'deactivated'} successfully",
        data=SinkOut.from_orm(sink),
    )


# --------------------------
# MATCH SINKS TO MEASUREMENT
# --------------------------
async def fetch_candidate_sinks(db: AsyncSession, company_id: int, measurement):
    """
    Active company sinks inside generous dimensional bounds. Oversized sinks
    just past the cabinet are kept so the matcher can report why they fail.
    """
    margin = Decimal(str(CANDIDATE_DIMENSION_MARGIN))
    result = await db.execute(
        select(Sink)
        .where(
            Sink.company_id == company_id,
            Sink.is_active == True,  # noqa: E712
            Sink.width_inches <= Decimal(str(measurement.cabinet_width_inches)) + margin,
            Sink.depth_inches <= Decimal(str(measurement.cabinet_depth_inches)) + margin,
        )
        .order_by(Sink.id)
    )
    return result.scalars().all()


async def match_products_to_measurement(db: AsyncSession, request: MatchRequest, current_user) -> MatchResponse:
    measurement = await verify_measurement_access(db, request.measurement_id, current_user.company_id)
    candidates = await fetch_candidate_sinks(db, current_user.company_id, measurement)

    preferences = MatchPreferences(**request.preferences.model_dump()) if request.preferences else None
    matches = match_sinks_to_measurement(candidates, measurement, preferences, request.limit)

    logger.info(
        "Measurement %s: %d candidates, %d matches returned",
        measurement.id, len(candidates), len(matches),
    )
    return MatchResponse(
        message="Sinks matched successfully",
        data=MatchData(
            measurement=MeasurementSummary.from_orm(measurement),
            matches=[MatchOut.from_orm(m) for m in matches],
            total_candidates=len(candidates),
        ),
    )
