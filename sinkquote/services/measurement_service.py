# sinkquote/services/measurement_service.py
import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from sinkquote.core.db import atomic
from sinkquote.core.errors import ValidationFailure
from sinkquote.models.measurement_models import Measurement
from sinkquote.schemas.measurement_schemas import (
    MeasurementCreate, MeasurementUpdate, MeasurementOut,
    MeasurementResponse, MeasurementListResponse
)
from sinkquote.services.quote_services.patches import MeasurementPatch, apply_patch
from sinkquote.utils.activity_helpers import log_user_activity
from sinkquote.utils.entity_verifiers import verify_customer_access, verify_measurement_access

logger = logging.getLogger(__name__)

REQUIRED_DIMENSIONS = ("cabinet_width_inches", "cabinet_depth_inches", "cabinet_height_inches")


# --------------------------
# CREATE MEASUREMENT
# --------------------------
async def create_measurement(db: AsyncSession, data: MeasurementCreate, current_user) -> MeasurementResponse:
    await verify_customer_access(db, data.customer_id, current_user.company_id)

    async with atomic(db):
        measurement = Measurement(
            **data.model_dump(),
            company_id=current_user.company_id,
            created_by_id=current_user.id,
        )
        db.add(measurement)
        await db.flush()
        await log_user_activity(
            db,
            user_id=current_user.id,
            username=current_user.username,
            message=f"Measurement {measurement.id} recorded for customer {data.customer_id}",
        )

    return MeasurementResponse(
        message="Measurement created successfully",
        data=MeasurementOut.from_orm(measurement),
    )


# --------------------------
# GET SINGLE MEASUREMENT
# --------------------------
async def get_measurement(db: AsyncSession, measurement_id: int, current_user) -> MeasurementResponse:
    measurement = await verify_measurement_access(db, measurement_id, current_user.company_id)
    return MeasurementResponse(
        message="Measurement retrieved successfully",
        data=MeasurementOut.from_orm(measurement),
    )


# --------------------------
# LIST MEASUREMENTS BY CUSTOMER
# --------------------------
async def list_measurements_by_customer(db: AsyncSession, customer_id: int, current_user) -> MeasurementListResponse:
    await verify_customer_access(db, customer_id, current_user.company_id)
    result = await db.execute(
        select(Measurement)
        .where(Measurement.customer_id == customer_id, Measurement.company_id == current_user.company_id)
        .order_by(Measurement.created_at.desc())
    )
    return MeasurementListResponse(
        message="Measurements retrieved successfully",
        data=[MeasurementOut.from_orm(m) for m in result.scalars().all()],
    )


# --------------------------
# UPDATE MEASUREMENT
# --------------------------
async def update_measurement(
    db: AsyncSession, measurement_id: int, data: MeasurementUpdate, current_user
) -> MeasurementResponse:
    measurement = await verify_measurement_access(db, measurement_id, current_user.company_id)
    patch = MeasurementPatch.from_model(data)
    for name in REQUIRED_DIMENSIONS:
        if patch.is_supplied(name) and getattr(patch, name) is None:
            raise ValidationFailure(f"{name} must be a positive number")

    async with atomic(db):
        apply_patch(measurement, patch)
        await db.flush()

    await db.refresh(measurement)
    return MeasurementResponse(
        message="Measurement updated successfully",
        data=MeasurementOut.from_orm(measurement),
    )


# --------------------------
# DELETE MEASUREMENT
# --------------------------
async def delete_measurement(db: AsyncSession, measurement_id: int, current_user) -> MeasurementResponse:
    measurement = await verify_measurement_access(db, measurement_id, current_user.company_id)
    async with atomic(db):
        await db.delete(measurement)
    return MeasurementResponse(message="Measurement deleted successfully", data=None)
