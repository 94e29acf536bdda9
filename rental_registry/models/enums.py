"""Enumeration types for rental entities."""

from enum import Enum

from rental_registry.exceptions import InvalidArgumentError


class PropertyKind(str, Enum):
    VILLA = "Villa"
    APARTMENT = "Apartment"

    @property
    def prefix(self) -> str:
        """Letter that starts every property code of this kind."""
        return self.value[0]

    @classmethod
    def parse(cls, label: "str | PropertyKind | None") -> "PropertyKind":
        """Resolve a case-insensitive label such as ``"villa"`` to a kind.

        Raises
        ------
        InvalidArgumentError
            If the label is absent or names a kind we do not let.
        """
        if isinstance(label, cls):
            return label
        if label is None:
            raise InvalidArgumentError(
                "Property type can't be None. We offer Villas and Apartments for rental."
            )
        if isinstance(label, str):
            for kind in cls:
                if kind.value.lower() == label.lower():
                    return kind
        raise InvalidArgumentError(
            f"Invalid property type {label!r}. The only properties we offer for rental "
            "are Villas and Apartments."
        )


class EventType(str, Enum):
    PROPERTY_ADDED = "property.added"
    TENANT_ADDED = "tenant.added"
    RENTAL_ISSUED = "rental.issued"
    RENTAL_TERMINATED = "rental.terminated"
