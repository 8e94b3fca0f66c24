# sinkquote/services/customer_service.py
import logging

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from sinkquote.core.db import atomic
from sinkquote.core.errors import NotFound, ValidationFailure
from sinkquote.models.customer_models import Customer
from sinkquote.schemas.customer_schemas import (
    CustomerCreate, CustomerUpdate, CustomerOut, CustomerResponse, CustomerListResponse
)
from sinkquote.services.quote_services.patches import CustomerPatch, apply_patch
from sinkquote.utils.activity_helpers import log_user_activity
from sinkquote.utils.check_roles import is_salesperson
from sinkquote.utils.entity_verifiers import verify_customer_access

logger = logging.getLogger(__name__)


# --------------------------
# CREATE CUSTOMER
# --------------------------
async def create_customer(db: AsyncSession, data: CustomerCreate, current_user) -> CustomerResponse:
    async with atomic(db):
        customer = Customer(
            **data.model_dump(),
            company_id=current_user.company_id,
            created_by=current_user.id,
        )
        db.add(customer)
        await db.flush()

    await db.refresh(customer)
    return CustomerResponse(message="Customer created successfully", data=CustomerOut.from_orm(customer))


# --------------------------
# GET SINGLE CUSTOMER
# --------------------------
async def get_customer(db: AsyncSession, customer_id: int, current_user) -> CustomerResponse:
    customer = await verify_customer_access(db, customer_id, current_user.company_id)
    return CustomerResponse(message="Customer retrieved successfully", data=CustomerOut.from_orm(customer))


# --------------------------
# LIST CUSTOMERS
# --------------------------
async def list_customers(
    db: AsyncSession, current_user, name: str = None, limit: int = 50, offset: int = 0
) -> CustomerListResponse:
    conditions = [Customer.company_id == current_user.company_id, Customer.is_active == True]  # noqa: E712
    if name:
        conditions.append(Customer.name.ilike(f"%{name}%"))

    total = (await db.execute(select(func.count(Customer.id)).where(*conditions))).scalar() or 0
    result = await db.execute(
        select(Customer).where(*conditions).order_by(Customer.name).limit(limit).offset(offset)
    )
    customers = result.scalars().all()
    return CustomerListResponse(
        message="Customers retrieved successfully",
        total=total,
        data=[CustomerOut.from_orm(c) for c in customers],
    )


async def _editable_customer(db: AsyncSession, customer_id: int, current_user) -> Customer:
    """Salespeople may only change the customers they created."""
    customer = await verify_customer_access(db, customer_id, current_user.company_id)
    if is_salesperson(current_user) and customer.created_by != current_user.id:
        raise NotFound("Customer not found")
    return customer


# --------------------------
# UPDATE CUSTOMER
# --------------------------
async def update_customer(db: AsyncSession, customer_id: int, data: CustomerUpdate, current_user) -> CustomerResponse:
    customer = await _editable_customer(db, customer_id, current_user)
    patch = CustomerPatch.from_model(data)
    if patch.is_supplied("name") and patch.name is None:
        raise ValidationFailure("name cannot be null")

    async with atomic(db):
        apply_patch(customer, patch)
        await db.flush()

    await db.refresh(customer)
    return CustomerResponse(message="Customer updated successfully", data=CustomerOut.from_orm(customer))


# --------------------------
# SOFT DELETE CUSTOMER
# --------------------------
async def delete_customer(db: AsyncSession, customer_id: int, current_user) -> CustomerResponse:
    customer = await _editable_customer(db, customer_id, current_user)
    response = CustomerResponse(message="Customer deleted successfully", data=CustomerOut.from_orm(customer))

    async with atomic(db):
        customer.is_active = False
        await log_user_activity(
            db,
            user_id=current_user.id,
            username=current_user.username,
            message=f"Customer '{customer.name}' deleted by '{current_user.username}'",
        )

    logger.info("Customer %s deactivated", customer_id)
    return response
