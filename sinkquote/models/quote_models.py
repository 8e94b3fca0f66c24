# sinkquote/models/quote_models.py
from sqlalchemy import (
    Column, Integer, String, DateTime, ForeignKey, Numeric, Text, Enum,
    CheckConstraint, UniqueConstraint
)
from sqlalchemy.orm import relationship

from sinkquote.core.clock import utcnow
from sinkquote.core.db import Base
from sinkquote.models.enums import LineItemType, QuoteStatus


# ==================================================
# QUOTE MODEL
# ==================================================
class Quote(Base):
    __tablename__ = "quotes"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)
    measurement_id = Column(Integer, ForeignKey("measurements.id", ondelete="SET NULL"), nullable=True)
    created_by_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    quote_number = Column(String(50), nullable=False)
    status = Column(Enum(QuoteStatus, name="quote_status"), nullable=False, default=QuoteStatus.draft)

    # Financial fields, derived from line items
    subtotal = Column(Numeric(10, 2), nullable=False, default=0)
    tax_rate = Column(Numeric(5, 4), nullable=False, default=0)
    tax_amount = Column(Numeric(10, 2), nullable=False, default=0)
    discount_amount = Column(Numeric(10, 2), nullable=False, default=0)
    total = Column(Numeric(10, 2), nullable=False, default=0)

    # Customer acceptance
    signature_url = Column(Text, nullable=True)
    signed_at = Column(DateTime(timezone=True), nullable=True)

    valid_until = Column(DateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)

    # Optimistic concurrency
    version = Column(Integer, nullable=False, default=1)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow)

    __table_args__ = (
        UniqueConstraint("company_id", "quote_number", name="uq_quotes_company_number"),
        CheckConstraint(subtotal >= 0, name="check_quote_subtotal_non_negative"),
        CheckConstraint(tax_amount >= 0, name="check_quote_tax_non_negative"),
        CheckConstraint(discount_amount >= 0, name="check_quote_discount_non_negative"),
        CheckConstraint(total >= 0, name="check_quote_total_non_negative"),
    )

    customer = relationship("Customer", back_populates="quotes")
    line_items = relationship(
        "QuoteLineItem",
        back_populates="quote",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="QuoteLineItem.sort_order",
        lazy="selectin",
    )


# ==================================================
# QUOTE LINE ITEM MODEL
# ==================================================
class QuoteLineItem(Base):
    __tablename__ = "quote_line_items"

    id = Column(Integer, primary_key=True, index=True)
    quote_id = Column(Integer, ForeignKey("quotes.id", ondelete="CASCADE"), nullable=False, index=True)
    sink_id = Column(Integer, ForeignKey("sinks.id", ondelete="SET NULL"), nullable=True)

    type = Column(Enum(LineItemType, name="line_item_type"), nullable=False, default=LineItemType.product)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    sku = Column(String(100), nullable=True)

    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Numeric(10, 2), nullable=False)
    discount_percent = Column(Numeric(5, 2), nullable=False, default=0)
    line_total = Column(Numeric(10, 2), nullable=False)

    sort_order = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint(quantity > 0, name="check_line_quantity_positive"),
        CheckConstraint(unit_price >= 0, name="check_line_unit_price_non_negative"),
    )

    quote = relationship("Quote", back_populates="line_items")
