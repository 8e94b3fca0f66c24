# sinkquote/services/quote_services/patches.py
"""
Typed partial updates.

A patch has one slot per updatable field. Slots left at ``UNSET`` were not
supplied by the caller; ``None`` is a real value (e.g. clearing
``valid_until``). ``apply_patch`` is the only place patches touch records.
"""
from dataclasses import dataclass, fields
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional, Union


class _Unset:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "UNSET"

    def __bool__(self):
        return False


UNSET: Any = _Unset()


@dataclass(frozen=True)
class Patch:
    def supplied(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not UNSET}

    def is_supplied(self, name: str) -> bool:
        return getattr(self, name) is not UNSET

    @classmethod
    def from_model(cls, model):
        """Build from a pydantic model, keeping only fields the client sent."""
        sent = model.model_dump(exclude_unset=True)
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in sent.items() if k in known})


@dataclass(frozen=True)
class QuotePatch(Patch):
    tax_rate: Union[Decimal, Any] = UNSET
    discount_amount: Union[Decimal, Any] = UNSET
    valid_until: Union[Optional[datetime], Any] = UNSET
    notes: Union[Optional[str], Any] = UNSET

    @property
    def touches_totals(self) -> bool:
        return self.is_supplied("tax_rate") or self.is_supplied("discount_amount")


@dataclass(frozen=True)
class LineItemPatch(Patch):
    name: Union[str, Any] = UNSET
    description: Union[Optional[str], Any] = UNSET
    quantity: Union[int, Any] = UNSET
    unit_price: Union[Decimal, Any] = UNSET
    discount_percent: Union[Decimal, Any] = UNSET


@dataclass(frozen=True)
class CustomerPatch(Patch):
    name: Any = UNSET
    email: Any = UNSET
    phone: Any = UNSET
    address: Any = UNSET


@dataclass(frozen=True)
class MeasurementPatch(Patch):
    cabinet_width_inches: Any = UNSET
    cabinet_depth_inches: Any = UNSET
    cabinet_height_inches: Any = UNSET
    countertop_material: Any = UNSET
    countertop_thickness_inches: Any = UNSET
    countertop_overhang_front_inches: Any = UNSET
    countertop_overhang_sides_inches: Any = UNSET
    mounting_style: Any = UNSET
    existing_sink_width_inches: Any = UNSET
    existing_sink_depth_inches: Any = UNSET
    existing_sink_bowl_count: Any = UNSET
    existing_sink_material: Any = UNSET
    existing_cutout_width_inches: Any = UNSET
    existing_cutout_depth_inches: Any = UNSET
    cabinet_integrity: Any = UNSET
    ro_system_present: Any = UNSET
    location: Any = UNSET
    notes: Any = UNSET


@dataclass(frozen=True)
class SinkPatch(Patch):
    sku: Any = UNSET
    name: Any = UNSET
    description: Any = UNSET
    manufacturer: Any = UNSET
    material: Any = UNSET
    mounting_style: Any = UNSET
    installation_type: Any = UNSET
    bowl_count: Any = UNSET
    bowl_configuration: Any = UNSET
    width_inches: Any = UNSET
    depth_inches: Any = UNSET
    height_inches: Any = UNSET
    apron_depth_inches: Any = UNSET
    mfg_min_cabinet_width_inches: Any = UNSET
    field_min_cabinet_width_inches: Any = UNSET
    is_workstation: Any = UNSET
    available_colors: Any = UNSET
    base_price: Any = UNSET
    labor_cost: Any = UNSET
    is_active: Any = UNSET


def merge_patch(current: Dict[str, Any], patch: Patch) -> Dict[str, Any]:
    """Pure merge: a new dict with the patch's supplied slots laid over ``current``."""
    merged = dict(current)
    merged.update(patch.supplied())
    return merged


def apply_patch(record, patch: Patch):
    for name, value in patch.supplied().items():
        setattr(record, name, value)
    return record
