# sinkquote/schemas/quote_schemas.py
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from sinkquote.models.enums import LineItemType, QuoteStatus


# --------------------------
# Line Item Schemas
# --------------------------
class LineItemCreate(BaseModel):
    sink_id: Optional[int] = None
    type: LineItemType = LineItemType.product
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    sku: Optional[str] = Field(default=None, max_length=100)
    quantity: int = Field(default=1, ge=1)
    unit_price: Decimal = Field(ge=0)
    discount_percent: Decimal = Field(default=Decimal("0"), ge=0, le=100)


class LineItemUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    quantity: Optional[int] = Field(default=None, ge=1)
    unit_price: Optional[Decimal] = Field(default=None, ge=0)
    discount_percent: Optional[Decimal] = Field(default=None, ge=0, le=100)


class LineItemOut(BaseModel):
    id: int
    quote_id: int
    sink_id: Optional[int] = None
    type: LineItemType
    name: str
    description: Optional[str] = None
    sku: Optional[str] = None
    quantity: int
    unit_price: Decimal
    discount_percent: Decimal
    line_total: Decimal
    sort_order: int

    class Config:
        from_attributes = True


# --------------------------
# Quote Schemas
# --------------------------
class QuoteCreate(BaseModel):
    customer_id: int
    measurement_id: Optional[int] = None
    tax_rate: Decimal = Field(default=Decimal("0"), ge=0, le=1)
    discount_amount: Decimal = Field(default=Decimal("0"), ge=0)
    valid_until: Optional[datetime] = None
    notes: Optional[str] = None
    line_items: List[LineItemCreate] = Field(min_length=1)


class QuoteUpdate(BaseModel):
    version: Optional[int] = Field(default=None, ge=1)
    tax_rate: Optional[Decimal] = Field(default=None, ge=0, le=1)
    discount_amount: Optional[Decimal] = Field(default=None, ge=0)
    valid_until: Optional[datetime] = None
    notes: Optional[str] = None


class QuoteStatusUpdate(BaseModel):
    status: QuoteStatus


class SignatureIn(BaseModel):
    signature_data_url: str = Field(min_length=1)


class QuoteSummaryOut(BaseModel):
    id: int
    quote_number: str
    customer_id: int
    status: QuoteStatus
    subtotal: Decimal
    total: Decimal
    valid_until: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class QuoteOut(QuoteSummaryOut):
    company_id: int
    measurement_id: Optional[int] = None
    created_by_id: Optional[int] = None
    tax_rate: Decimal
    tax_amount: Decimal
    discount_amount: Decimal
    signature_url: Optional[str] = None
    signed_at: Optional[datetime] = None
    notes: Optional[str] = None
    version: int
    updated_at: Optional[datetime] = None
    line_items: List[LineItemOut] = []


class TotalsOut(BaseModel):
    subtotal: Decimal
    taxable_amount: Decimal
    tax_amount: Decimal
    total: Decimal

    class Config:
        from_attributes = True


# --------------------------
# Response Schemas
# --------------------------
class QuoteResponse(BaseModel):
    message: str
    data: Optional[QuoteOut] = None


class QuoteListResponse(BaseModel):
    message: str
    total: int
    has_more: bool
    data: List[QuoteSummaryOut] = []


class LineItemData(BaseModel):
    line_item: Optional[LineItemOut] = None
    totals: TotalsOut


class LineItemResponse(BaseModel):
    message: str
    data: LineItemData


class ExpireResponse(BaseModel):
    message: str
    expired: int
