"""Shared serialization utilities for sinks."""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from rental_registry.models.identifiers import PropertyCode, TenantID
from rental_registry.models.name import Name
from rental_registry.models.property import Property, Villa
from rental_registry.models.tenant import TenantRecord


def to_dict(obj: Any) -> dict:
    """Convert object to dictionary."""
    if isinstance(obj, Property):
        return property_to_dict(obj)
    elif isinstance(obj, TenantRecord):
        return tenant_to_dict(obj)
    elif is_dataclass(obj):
        return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}
    elif isinstance(obj, dict):
        return serialize_value(obj)
    else:
        return {"value": str(obj)}


def property_to_dict(prop: Property) -> dict:
    """Snapshot a property, including the pool state of villas."""
    data = {
        "property_code": str(prop.property_code),
        "property_type": prop.property_type,
        "deposit": prop.deposit,
        "is_rented": prop.is_rented,
        "termination_date": serialize_value(prop.termination_date),
    }
    if isinstance(prop, Villa):
        data["clean_pool"] = prop.clean_pool
    return data


def tenant_to_dict(tenant: TenantRecord) -> dict:
    """Snapshot a tenant record."""
    return {
        "tenant_id": str(tenant.tenant_id),
        "name": str(tenant.name),
        "date_of_birth": tenant.date_of_birth.isoformat(),
        "premium": tenant.premium,
    }


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Enum):
        return value.value
    elif isinstance(value, (PropertyCode, TenantID, Name)):
        return str(value)
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple, set, frozenset)):
        return [serialize_value(v) for v in value]
    return value
