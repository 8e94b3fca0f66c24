# sinkquote/schemas/analytics_schemas.py
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel


class QuoteAnalyticsOut(BaseModel):
    total_quotes: int
    by_status: Dict[str, int]
    conversion_rate: float
    view_to_accept_rate: float
    total_value: Decimal
    average_value: Decimal
    accepted_value: Decimal
    avg_days_to_close: int


class TrendPointOut(BaseModel):
    period: str
    quotes: int
    accepted: int
    rejected: int
    total_value: Decimal


class RepPerformanceOut(BaseModel):
    user_id: Optional[int] = None
    username: str
    quotes_created: int
    quotes_accepted: int
    conversion_rate: float
    total_value: Decimal
    avg_days_to_close: int


# --------------------------
# Response Schemas
# --------------------------
class QuoteAnalyticsResponse(BaseModel):
    message: str
    data: QuoteAnalyticsOut


class TrendsResponse(BaseModel):
    message: str
    data: List[TrendPointOut] = []


class RepPerformanceResponse(BaseModel):
    message: str
    data: List[RepPerformanceOut] = []
