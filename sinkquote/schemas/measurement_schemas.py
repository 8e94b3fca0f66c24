# sinkquote/schemas/measurement_schemas.py
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from sinkquote.models.enums import (
    CabinetIntegrity, CountertopMaterial, ExistingSinkMaterial, MountingStyle
)


# --------------------------
# Measurement Schemas
# --------------------------
class MeasurementFields(BaseModel):
    countertop_material: Optional[CountertopMaterial] = None
    countertop_thickness_inches: Optional[Decimal] = Field(default=None, gt=0)
    countertop_overhang_front_inches: Optional[Decimal] = Field(default=None, ge=0)
    countertop_overhang_sides_inches: Optional[Decimal] = Field(default=None, ge=0)
    mounting_style: Optional[MountingStyle] = None
    existing_sink_width_inches: Optional[Decimal] = Field(default=None, gt=0)
    existing_sink_depth_inches: Optional[Decimal] = Field(default=None, gt=0)
    existing_sink_bowl_count: Optional[int] = Field(default=None, ge=1)
    existing_sink_material: Optional[ExistingSinkMaterial] = None
    existing_cutout_width_inches: Optional[Decimal] = Field(default=None, gt=0)
    existing_cutout_depth_inches: Optional[Decimal] = Field(default=None, gt=0)
    cabinet_integrity: Optional[CabinetIntegrity] = None
    ro_system_present: Optional[bool] = False
    location: Optional[str] = Field(default=None, max_length=100)
    notes: Optional[str] = None


class MeasurementCreate(MeasurementFields):
    customer_id: int
    cabinet_width_inches: Decimal = Field(gt=0)
    cabinet_depth_inches: Decimal = Field(gt=0)
    cabinet_height_inches: Decimal = Field(gt=0)


class MeasurementUpdate(MeasurementFields):
    cabinet_width_inches: Optional[Decimal] = Field(default=None, gt=0)
    cabinet_depth_inches: Optional[Decimal] = Field(default=None, gt=0)
    cabinet_height_inches: Optional[Decimal] = Field(default=None, gt=0)
    ro_system_present: Optional[bool] = None


class MeasurementOut(MeasurementFields):
    id: int
    company_id: int
    customer_id: int
    created_by_id: Optional[int] = None
    cabinet_width_inches: Decimal
    cabinet_depth_inches: Decimal
    cabinet_height_inches: Decimal
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# --------------------------
# Response Schemas
# --------------------------
class MeasurementResponse(BaseModel):
    message: str
    data: Optional[MeasurementOut] = None


class MeasurementListResponse(BaseModel):
    message: str
    data: List[MeasurementOut] = []
