"""Pytest configuration for tests."""

import os

# Config is read at import time
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ["DB_TYPE"] = "sqlite"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from sinkquote.core.db import enable_sqlite_foreign_keys, init_models
from sinkquote.models.customer_models import Customer
from sinkquote.models.user_models import Company, User


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest_asyncio.fixture
async def engine():
    # One shared connection so every session sees the same in-memory database
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine.sync_engine, "connect", enable_sqlite_foreign_keys)
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def company(db):
    company = Company(name="Stone & Sink Co")
    db.add(company)
    await db.commit()
    return company


@pytest_asyncio.fixture
async def other_company(db):
    company = Company(name="Rival Countertops")
    db.add(company)
    await db.commit()
    return company


async def _user(db, company, username, role):
    user = User(company_id=company.id, username=username, role=role, token_version=0)
    db.add(user)
    await db.commit()
    return user


@pytest_asyncio.fixture
async def salesperson(db, company):
    return await _user(db, company, "sally", "salesperson")


@pytest_asyncio.fixture
async def other_salesperson(db, company):
    return await _user(db, company, "sam", "salesperson")


@pytest_asyncio.fixture
async def manager(db, company):
    return await _user(db, company, "morgan", "manager")


@pytest_asyncio.fixture
async def admin(db, company):
    return await _user(db, company, "ada", "admin")


@pytest_asyncio.fixture
async def outsider(db, other_company):
    return await _user(db, other_company, "oscar", "admin")


@pytest_asyncio.fixture
async def customer(db, company, salesperson):
    customer = Customer(
        company_id=company.id,
        name="Jordan Rivera",
        email="jordan@example.com",
        created_by=salesperson.id,
    )
    db.add(customer)
    await db.commit()
    return customer
