"""Rentable property models."""

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

from rental_registry.models.enums import PropertyKind
from rental_registry.models.identifiers import PropertyCode


@dataclass(eq=False)
class Property:
    """A rentable unit.

    Rental state is only changed by :class:`~rental_registry.store.registry.RentalRegistry`.
    Two properties are equal when they carry the same property code.
    """

    kind: ClassVar[PropertyKind]
    deposit: ClassVar[int]

    property_code: PropertyCode
    is_rented: bool = False
    termination_date: datetime | None = None

    @property
    def property_type(self) -> str:
        return self.kind.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Property):
            return NotImplemented
        return self.property_code == other.property_code

    def __hash__(self) -> int:
        return hash(self.property_code)

    def __str__(self) -> str:
        return f"{self.kind.value} {self.property_code}"


@dataclass(eq=False)
class Apartment(Property):
    """Apartment, open to any adult tenant."""

    kind: ClassVar[PropertyKind] = PropertyKind.APARTMENT
    deposit: ClassVar[int] = 200


@dataclass(eq=False)
class Villa(Property):
    """Villa with a private pool.

    The pool is dirtied by every rental and serviced when the rental ends;
    only villas with a clean pool can be let.
    """

    kind: ClassVar[PropertyKind] = PropertyKind.VILLA
    deposit: ClassVar[int] = 500

    clean_pool: bool = True


PROPERTY_TYPES: dict[PropertyKind, type[Property]] = {
    PropertyKind.VILLA: Villa,
    PropertyKind.APARTMENT: Apartment,
}
