# sinkquote/models/sink_models.py
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, ForeignKey, Numeric, Text, JSON,
    Enum, CheckConstraint, UniqueConstraint
)

from sinkquote.core.clock import utcnow
from sinkquote.core.db import Base
from sinkquote.models.enums import (
    BowlConfiguration, InstallationType, MountingStyle, SinkMaterial
)


class Sink(Base):
    __tablename__ = "sinks"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    sku = Column(String(100), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    manufacturer = Column(String(100), nullable=True)

    material = Column(Enum(SinkMaterial, name="sink_material"), nullable=False)
    mounting_style = Column(Enum(MountingStyle, name="sink_mounting_style"), nullable=False, index=True)
    installation_type = Column(Enum(InstallationType, name="sink_install_type"), nullable=True)
    bowl_count = Column(Integer, nullable=False, default=1)
    bowl_configuration = Column(Enum(BowlConfiguration, name="bowl_config"), nullable=True)

    # Dimensions (inches)
    width_inches = Column(Numeric(6, 2), nullable=False)
    depth_inches = Column(Numeric(6, 2), nullable=False)
    height_inches = Column(Numeric(6, 2), nullable=False)
    apron_depth_inches = Column(Numeric(6, 2), nullable=True)

    # Cabinet minimums: manufacturer-stated and field-tested
    mfg_min_cabinet_width_inches = Column(Numeric(6, 2), nullable=True)
    field_min_cabinet_width_inches = Column(Numeric(6, 2), nullable=True)

    is_workstation = Column(Boolean, default=False)
    available_colors = Column(JSON, nullable=True)  # [{"code": ..., "name": ...}]

    base_price = Column(Numeric(10, 2), nullable=False)
    labor_cost = Column(Numeric(10, 2), nullable=False, default=0)
    is_active = Column(Boolean, default=True, nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    __table_args__ = (
        UniqueConstraint("company_id", "sku", name="uq_sinks_company_sku"),
        CheckConstraint(base_price >= 0, name="check_sink_price_non_negative"),
        CheckConstraint(labor_cost >= 0, name="check_sink_labor_non_negative"),
    )
