# sinkquote/models/measurement_models.py
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, ForeignKey, Numeric, Text, Enum
)
from sqlalchemy.orm import relationship

from sinkquote.core.clock import utcnow
from sinkquote.core.db import Base
from sinkquote.models.enums import (
    CabinetIntegrity, CountertopMaterial, ExistingSinkMaterial, MountingStyle
)


class Measurement(Base):
    __tablename__ = "measurements"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)
    created_by_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    # Cabinet (inches)
    cabinet_width_inches = Column(Numeric(6, 2), nullable=False)
    cabinet_depth_inches = Column(Numeric(6, 2), nullable=False)
    cabinet_height_inches = Column(Numeric(6, 2), nullable=False)

    # Countertop
    countertop_material = Column(Enum(CountertopMaterial, name="countertop_material"), nullable=True)
    countertop_thickness_inches = Column(Numeric(4, 2), nullable=True)
    countertop_overhang_front_inches = Column(Numeric(4, 2), nullable=True)
    countertop_overhang_sides_inches = Column(Numeric(4, 2), nullable=True)

    mounting_style = Column(Enum(MountingStyle, name="mounting_style"), nullable=True)

    # Existing sink (when replacing)
    existing_sink_width_inches = Column(Numeric(6, 2), nullable=True)
    existing_sink_depth_inches = Column(Numeric(6, 2), nullable=True)
    existing_sink_bowl_count = Column(Integer, nullable=True)
    existing_sink_material = Column(Enum(ExistingSinkMaterial, name="existing_sink_material"), nullable=True)
    existing_cutout_width_inches = Column(Numeric(6, 2), nullable=True)
    existing_cutout_depth_inches = Column(Numeric(6, 2), nullable=True)

    # Site conditions
    cabinet_integrity = Column(Enum(CabinetIntegrity, name="cabinet_integrity"), nullable=True)
    ro_system_present = Column(Boolean, default=False)

    location = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    customer = relationship("Customer", back_populates="measurements")
