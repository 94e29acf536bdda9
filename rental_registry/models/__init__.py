"""Domain models for the rental registry."""

from rental_registry.models.base import Event
from rental_registry.models.enums import EventType, PropertyKind
from rental_registry.models.identifiers import PropertyCode, TenantID
from rental_registry.models.name import Name
from rental_registry.models.property import PROPERTY_TYPES, Apartment, Property, Villa
from rental_registry.models.tenant import TenantApplication, TenantRecord

__all__ = [
    "PROPERTY_TYPES",
    "Apartment",
    "Event",
    "EventType",
    "Name",
    "Property",
    "PropertyCode",
    "PropertyKind",
    "TenantApplication",
    "TenantID",
    "TenantRecord",
    "Villa",
]
