# sinkquote/schemas/sink_schemas.py
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from sinkquote.core.config import DEFAULT_MATCH_LIMIT, MAX_MATCH_LIMIT
from sinkquote.models.enums import (
    BowlConfiguration, InstallationType, MountingStyle, SinkMaterial
)
from sinkquote.services.matching.types import FitRating, InstallMethod


class ColorOption(BaseModel):
    code: str
    name: str


# --------------------------
# Sink Schemas
# --------------------------
class SinkBase(BaseModel):
    description: Optional[str] = None
    manufacturer: Optional[str] = None
    installation_type: Optional[InstallationType] = None
    bowl_configuration: Optional[BowlConfiguration] = None
    apron_depth_inches: Optional[Decimal] = Field(default=None, gt=0)
    mfg_min_cabinet_width_inches: Optional[Decimal] = Field(default=None, gt=0)
    field_min_cabinet_width_inches: Optional[Decimal] = Field(default=None, gt=0)
    is_workstation: Optional[bool] = False
    available_colors: Optional[List[ColorOption]] = None


class SinkCreate(SinkBase):
    sku: str = Field(min_length=1, max_length=100)
    name: str = Field(min_length=1, max_length=255)
    material: SinkMaterial
    mounting_style: MountingStyle
    bowl_count: int = Field(default=1, ge=1)
    width_inches: Decimal = Field(gt=0)
    depth_inches: Decimal = Field(gt=0)
    height_inches: Decimal = Field(gt=0)
    base_price: Decimal = Field(ge=0)
    labor_cost: Decimal = Field(default=Decimal("0"), ge=0)
    is_active: bool = True


class SinkUpdate(SinkBase):
    sku: Optional[str] = Field(default=None, min_length=1, max_length=100)
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    material: Optional[SinkMaterial] = None
    mounting_style: Optional[MountingStyle] = None
    bowl_count: Optional[int] = Field(default=None, ge=1)
    width_inches: Optional[Decimal] = Field(default=None, gt=0)
    depth_inches: Optional[Decimal] = Field(default=None, gt=0)
    height_inches: Optional[Decimal] = Field(default=None, gt=0)
    base_price: Optional[Decimal] = Field(default=None, ge=0)
    labor_cost: Optional[Decimal] = Field(default=None, ge=0)
    is_workstation: Optional[bool] = None
    is_active: Optional[bool] = None


class SinkOut(SinkBase):
    id: int
    company_id: int
    sku: str
    name: str
    material: SinkMaterial
    mounting_style: MountingStyle
    bowl_count: int
    width_inches: Decimal
    depth_inches: Decimal
    height_inches: Decimal
    base_price: Decimal
    labor_cost: Decimal
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SinkResponse(BaseModel):
    message: str
    data: Optional[SinkOut] = None


class SinkListResponse(BaseModel):
    message: str
    total: int
    data: List[SinkOut] = []


# --------------------------
# Matching Schemas
# --------------------------
class MatchPreferencesIn(BaseModel):
    color_preference: Optional[str] = None
    bowl_configuration: Optional[BowlConfiguration] = None
    installation_type: Optional[InstallationType] = None
    max_price: Optional[Decimal] = Field(default=None, gt=0)
    prefer_workstation: bool = False


class MatchRequest(BaseModel):
    measurement_id: int
    limit: int = Field(default=DEFAULT_MATCH_LIMIT, ge=1, le=MAX_MATCH_LIMIT)
    preferences: Optional[MatchPreferencesIn] = None


class InstallMethodOut(BaseModel):
    method: InstallMethod
    feasible: bool
    reason: str

    class Config:
        from_attributes = True


class DimensionalFitOut(BaseModel):
    width_clearance: float
    depth_clearance: float
    height_clearance: float

    class Config:
        from_attributes = True


class MatchOut(BaseModel):
    sink: SinkOut
    overall_score: int
    fit_rating: FitRating
    feasible_install_methods: List[InstallMethodOut]
    eliminated_install_methods: List[InstallMethodOut]
    hard_gate_failures: List[str]
    warnings: List[str]
    add_on_services: List[str]
    dimensional_fit: DimensionalFitOut
    reasons: List[str] = []

    class Config:
        from_attributes = True


class MeasurementSummary(BaseModel):
    id: int
    cabinet_width_inches: Decimal
    cabinet_depth_inches: Decimal
    cabinet_height_inches: Decimal
    mounting_style: Optional[MountingStyle] = None
    location: Optional[str] = None

    class Config:
        from_attributes = True


class MatchData(BaseModel):
    measurement: MeasurementSummary
    matches: List[MatchOut]
    total_candidates: int


class MatchResponse(BaseModel):
    message: str
    data: MatchData
