"""In-memory registry of properties, tenants and rentals."""

from rental_registry.store.registry import RentalRegistry

__all__ = ["RentalRegistry"]
