# sinkquote/routers/measurements_router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from sinkquote.core.db import get_db
from sinkquote.schemas.measurement_schemas import (
    MeasurementCreate, MeasurementUpdate, MeasurementResponse, MeasurementListResponse
)
from sinkquote.services import measurement_service
from sinkquote.utils.check_roles import ALL_ROLES, require_role
from sinkquote.utils.get_user import get_current_user

router = APIRouter(prefix="/measurements", tags=["Measurements"])


@router.post("/", response_model=MeasurementResponse, status_code=status.HTTP_201_CREATED)
@require_role(ALL_ROLES)
async def create_measurement_route(
    data: MeasurementCreate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    return await measurement_service.create_measurement(db, data, _user)


@router.get("/customer/{customer_id}", response_model=MeasurementListResponse)
@require_role(ALL_ROLES)
async def list_customer_measurements_route(
    customer_id: int,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    return await measurement_service.list_measurements_by_customer(db, customer_id, _user)


@router.get("/{measurement_id}", response_model=MeasurementResponse)
@require_role(ALL_ROLES)
async def get_measurement_route(
    measurement_id: int,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    return await measurement_service.get_measurement(db, measurement_id, _user)


@router.put("/{measurement_id}", response_model=MeasurementResponse)
@require_role(ALL_ROLES)
async def update_measurement_route(
    measurement_id: int,
    data: MeasurementUpdate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    return await measurement_service.update_measurement(db, measurement_id, data, _user)


@router.delete("/{measurement_id}", response_model=MeasurementResponse)
@require_role(ALL_ROLES)
async def delete_measurement_route(
    measurement_id: int,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    return await measurement_service.delete_measurement(db, measurement_id, _user)
