"""Tenant models."""

from dataclasses import dataclass
from datetime import date, datetime

from rental_registry.exceptions import InvalidArgumentError
from rental_registry.models.identifiers import TenantID
from rental_registry.models.name import Name


@dataclass(frozen=True, eq=False)
class TenantRecord:
    """A person on file.

    Records are immutable and compare equal when name and date of birth
    match; the tenant id is not part of equality.
    """

    name: Name
    date_of_birth: date
    premium: bool
    tenant_id: TenantID

    def __post_init__(self) -> None:
        if self.date_of_birth is None:
            raise InvalidArgumentError("Date of birth can't be None")
        if isinstance(self.date_of_birth, datetime):
            object.__setattr__(self, "date_of_birth", self.date_of_birth.date())
        object.__setattr__(self, "premium", bool(self.premium))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TenantRecord):
            return NotImplemented
        return self.name == other.name and self.date_of_birth == other.date_of_birth

    def __hash__(self) -> int:
        return hash((self.name, self.date_of_birth))

    def __str__(self) -> str:
        return str(self.tenant_id)


@dataclass
class TenantApplication:
    """Details a prospective tenant supplies before being put on file."""

    first_name: str
    last_name: str
    date_of_birth: date
    premium: bool
