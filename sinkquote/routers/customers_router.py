# sinkquote/routers/customers_router.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from sinkquote.core.db import get_db
from sinkquote.schemas.customer_schemas import CustomerCreate, CustomerUpdate, CustomerResponse, CustomerListResponse
from sinkquote.services import customer_service
from sinkquote.utils.check_roles import ALL_ROLES, require_role
from sinkquote.utils.get_user import get_current_user

router = APIRouter(prefix="/customers", tags=["Customers"])


# CREATE
@router.post("/", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
@require_role(ALL_ROLES)
async def create_customer_route(
    customer: CustomerCreate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    return await customer_service.create_customer(db, customer, _user)


# GET SINGLE
@router.get("/{customer_id}", response_model=CustomerResponse)
@require_role(ALL_ROLES)
async def get_customer_route(
    customer_id: int,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    return await customer_service.get_customer(db, customer_id, _user)


# LIST WITH SEARCH AND PAGINATION
@router.get("/", response_model=CustomerListResponse)
@require_role(ALL_ROLES)
async def list_customers_route(
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user),
    name: str = Query(None, description="Filter by name"),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    return await customer_service.list_customers(db, _user, name, limit, offset)


# UPDATE
@router.put("/{customer_id}", response_model=CustomerResponse)
@require_role(ALL_ROLES)
async def update_customer_route(
    customer_id: int,
    customer: CustomerUpdate,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    return await customer_service.update_customer(db, customer_id, customer, _user)


# SOFT DELETE
@router.delete("/{customer_id}", response_model=CustomerResponse)
@require_role(ALL_ROLES)
async def delete_customer_route(
    customer_id: int,
    db: AsyncSession = Depends(get_db),
    _user=Depends(get_current_user)
):
    return await customer_service.delete_customer(db, customer_id, _user)
