# sinkquote/routers/quotes_router.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from sinkquote.core.config import QUOTE_EXPIRATION_DAYS
from sinkquote.core.db import get_db
from sinkquote.models.enums import QuoteStatus
from sinkquote.schemas.quote_schemas import (
    QuoteCreate, QuoteUpdate, QuoteStatusUpdate, SignatureIn,
    QuoteResponse, QuoteListResponse,
    LineItemCreate, LineItemUpdate, LineItemResponse, ExpireResponse
)
from sinkquote.services.quote_services import line_item_service, quote_service
from sinkquote.utils.check_roles import ADMIN_ONLY, ALL_ROLES, require_role
from sinkquote.utils.get_user import get_current_user

router = APIRouter(prefix="/quotes", tags=["Quotes"])


# --------------------------
# CREATE QUOTE
# --------------------------
@router.post("/", response_model=QuoteResponse, status_code=status.HTTP_201_CREATED)
@require_role(ALL_ROLES)
async def create_quote_route(
    data: QuoteCreate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    return await quote_service.create_quote(db, data, _user)


# --------------------------
# LIST QUOTES
# --------------------------
@router.get("/", response_model=QuoteListResponse)
@require_role(ALL_ROLES)
async def list_quotes_route(
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
    quote_status: QuoteStatus = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    return await quote_service.list_quotes(db, _user, status=quote_status, limit=limit, offset=offset)


@router.get("/customer/{customer_id}", response_model=QuoteListResponse)
@require_role(ALL_ROLES)
async def list_customer_quotes_route(
    customer_id: int,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    return await quote_service.list_quotes(db, _user, customer_id=customer_id, limit=limit, offset=offset)


# --------------------------
# EXPIRE STALE QUOTES
# --------------------------
@router.post("/expire-stale", response_model=ExpireResponse)
@require_role(ADMIN_ONLY)
async def expire_stale_quotes_route(
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
    expiration_days: int = Query(QUOTE_EXPIRATION_DAYS, ge=1),
):
    expired = await quote_service.expire_stale_quotes(
        db, expiration_days=expiration_days, company_id=_user.company_id
    )
    return ExpireResponse(message=f"{expired} quotes expired", expired=expired)


# --------------------------
# SINGLE QUOTE
# --------------------------
@router.get("/{quote_id}", response_model=QuoteResponse)
@require_role(ALL_ROLES)
async def get_quote_route(
    quote_id: int,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    return await quote_service.get_quote(db, quote_id, _user)


@router.put("/{quote_id}", response_model=QuoteResponse)
@require_role(ALL_ROLES)
async def update_quote_route(
    quote_id: int,
    data: QuoteUpdate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    return await quote_service.update_quote(db, quote_id, data, _user)


@router.patch("/{quote_id}/status", response_model=QuoteResponse)
@require_role(ALL_ROLES)
async def update_quote_status_route(
    quote_id: int,
    data: QuoteStatusUpdate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    return await quote_service.update_quote_status(db, quote_id, data.status, _user)


@router.post("/{quote_id}/signature", response_model=QuoteResponse)
@require_role(ALL_ROLES)
async def save_signature_route(
    quote_id: int,
    data: SignatureIn,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    return await quote_service.save_signature(db, quote_id, data.signature_data_url, _user)


@router.delete("/{quote_id}", response_model=QuoteResponse)
@require_role(ALL_ROLES)
async def delete_quote_route(
    quote_id: int,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    return await quote_service.delete_quote(db, quote_id, _user)


# --------------------------
# LINE ITEMS
# --------------------------
@router.post("/{quote_id}/line-items", response_model=LineItemResponse, status_code=status.HTTP_201_CREATED)
@require_role(ALL_ROLES)
async def add_line_item_route(
    quote_id: int,
    data: LineItemCreate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    return await line_item_service.add_line_item(db, quote_id, data, _user)


@router.put("/{quote_id}/line-items/{line_item_id}", response_model=LineItemResponse)
@require_role(ALL_ROLES)
async def update_line_item_route(
    quote_id: int,
    line_item_id: int,
    data: LineItemUpdate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    return await line_item_service.update_line_item(db, quote_id, line_item_id, data, _user)


@router.delete("/{quote_id}/line-items/{line_item_id}", response_model=LineItemResponse)
@require_role(ALL_ROLES)
async def delete_line_item_route(
    quote_id: int,
    line_item_id: int,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    return await line_item_service.delete_line_item(db, quote_id, line_item_id, _user)
