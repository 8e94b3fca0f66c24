"""Test helper functions and utilities."""

from datetime import timedelta
from decimal import Decimal
from types import SimpleNamespace

from sinkquote.core.clock import utcnow
from sinkquote.models.enums import (
    BowlConfiguration, InstallationType, LineItemType, MountingStyle, QuoteStatus, SinkMaterial
)
from sinkquote.models.measurement_models import Measurement
from sinkquote.models.quote_models import Quote, QuoteLineItem
from sinkquote.models.sink_models import Sink
from sinkquote.schemas.quote_schemas import LineItemCreate, QuoteCreate


SINK_DEFAULTS = dict(
    id=1,
    sku="SK-3020",
    name="Test Sink",
    material=SinkMaterial.stainless_steel,
    mounting_style=MountingStyle.undermount,
    installation_type=None,
    bowl_count=1,
    bowl_configuration=BowlConfiguration.single,
    width_inches=Decimal("30"),
    depth_inches=Decimal("20"),
    height_inches=Decimal("9"),
    apron_depth_inches=None,
    mfg_min_cabinet_width_inches=None,
    field_min_cabinet_width_inches=None,
    is_workstation=False,
    available_colors=None,
    base_price=Decimal("400.00"),
    labor_cost=Decimal("150.00"),
    is_active=True,
)

MEASUREMENT_DEFAULTS = dict(
    id=1,
    cabinet_width_inches=Decimal("36"),
    cabinet_depth_inches=Decimal("24"),
    cabinet_height_inches=Decimal("34"),
    countertop_material=None,
    countertop_thickness_inches=None,
    mounting_style=None,
    existing_sink_width_inches=None,
    existing_sink_depth_inches=None,
    existing_sink_bowl_count=None,
    existing_sink_material=None,
    existing_cutout_width_inches=None,
    existing_cutout_depth_inches=None,
    cabinet_integrity=None,
    ro_system_present=False,
)


def make_sink(**overrides) -> SimpleNamespace:
    """Catalog sink stand-in for the pure matching functions."""
    return SimpleNamespace(**{**SINK_DEFAULTS, **overrides})


def make_measurement(**overrides) -> SimpleNamespace:
    return SimpleNamespace(**{**MEASUREMENT_DEFAULTS, **overrides})


def perfect_fit_pair():
    """
    A sink and measurement where every soft-score component is maxed out:
    6" width and 4" depth clearance, all four install methods feasible.
    """
    sink = make_sink(
        mounting_style=MountingStyle.undermount,
        installation_type=InstallationType.top_mount,
        apron_depth_inches=Decimal("10"),
        is_workstation=True,
        available_colors=[{"code": "SS", "name": "Brushed Steel"}],
    )
    measurement = make_measurement(
        mounting_style=MountingStyle.undermount,
        countertop_thickness_inches=Decimal("1.25"),
        existing_cutout_width_inches=Decimal("30"),
        existing_cutout_depth_inches=Decimal("20"),
    )
    return sink, measurement


def line_item(name="Sink", unit_price="100.00", quantity=1, discount_percent="0", **kwargs) -> LineItemCreate:
    return LineItemCreate(
        name=name,
        unit_price=Decimal(unit_price),
        quantity=quantity,
        discount_percent=Decimal(discount_percent),
        **kwargs,
    )


def sample_quote_create(customer_id: int, **overrides) -> QuoteCreate:
    """Two products, one labor line and an 8.25% tax rate with a $50 discount."""
    values = dict(
        customer_id=customer_id,
        tax_rate=Decimal("0.0825"),
        discount_amount=Decimal("50.00"),
        line_items=[
            line_item("Undermount sink", "500.00", quantity=1),
            line_item("Faucet", "200.00", quantity=2, discount_percent="10"),
            line_item("Installation", "250.00", type=LineItemType.labor),
        ],
    )
    values.update(overrides)
    return QuoteCreate(**values)


async def insert_sink(db, company_id: int, **overrides) -> Sink:
    values = {k: v for k, v in SINK_DEFAULTS.items() if k != "id"}
    values.update(overrides)
    sink = Sink(company_id=company_id, **values)
    db.add(sink)
    await db.commit()
    return sink


async def insert_measurement(db, company_id: int, customer_id: int, **overrides) -> Measurement:
    values = {k: v for k, v in MEASUREMENT_DEFAULTS.items() if k != "id"}
    values.update(overrides)
    measurement = Measurement(company_id=company_id, customer_id=customer_id, **values)
    db.add(measurement)
    await db.commit()
    return measurement


async def insert_quote(
    db,
    company_id: int,
    customer_id: int,
    created_by_id: int,
    quote_number: str,
    status: QuoteStatus = QuoteStatus.draft,
    valid_until=None,
    created_at=None,
) -> Quote:
    """Quote row with a single $100 line, bypassing the service layer."""
    quote = Quote(
        company_id=company_id,
        customer_id=customer_id,
        created_by_id=created_by_id,
        quote_number=quote_number,
        status=status,
        valid_until=valid_until,
        created_at=created_at or utcnow(),
        subtotal=Decimal("100.00"),
        total=Decimal("100.00"),
        line_items=[
            QuoteLineItem(name="Sink", unit_price=Decimal("100.00"), line_total=Decimal("100.00"))
        ],
    )
    db.add(quote)
    await db.commit()
    return quote


def days_ago(days: int):
    return utcnow() - timedelta(days=days)


def days_from_now(days: int):
    return utcnow() + timedelta(days=days)
