"""Identifier value objects for properties and tenants.

Both identifiers are plain values; uniqueness is the job of the issuers in
:mod:`rental_registry.generators.identifiers`.
"""

import re
from dataclasses import dataclass

from rental_registry.exceptions import InvalidArgumentError

PROPERTY_CODE_PATTERN = re.compile(r"^[VA]-[A-Z][0-9]{2}$")
TENANT_ID_PATTERN = re.compile(r"^[A-Z]{2}\.[0-9]{4}\.[0-9]{2}$")

SERIAL_PATTERN = re.compile(r"^[0-9]{2}$")


@dataclass(frozen=True)
class PropertyCode:
    """Property identifier rendered as ``V-K42`` or ``A-B07``."""

    prefix: str  # 'V' for villas, 'A' for apartments
    suffix: str  # one letter and two digits

    def __post_init__(self) -> None:
        if not isinstance(self.prefix, str) or not isinstance(self.suffix, str):
            raise InvalidArgumentError("Property code prefix and suffix must be strings")
        if not PROPERTY_CODE_PATTERN.match(str(self)):
            raise InvalidArgumentError(f"Invalid property code {str(self)!r}")

    def __str__(self) -> str:
        return f"{self.prefix}-{self.suffix}"


@dataclass(frozen=True)
class TenantID:
    """Tenant identifier rendered as ``<initials>.<year>.<serial>``, e.g. ``TH.2026.07``.

    Initials are kept as written in the tenant's name, so only their count
    is checked; ids from title-case ASCII names match ``TENANT_ID_PATTERN``.
    """

    initials: str
    year_of_issue: int
    serial: str  # two digits, zero padded

    def __post_init__(self) -> None:
        if not isinstance(self.initials, str) or len(self.initials) != 2 or "." in self.initials:
            raise InvalidArgumentError(f"Tenant initials must be two characters, got {self.initials!r}")
        year = self.year_of_issue
        if isinstance(year, bool) or not isinstance(year, int) or not 1000 <= year <= 9999:
            raise InvalidArgumentError(f"Year of issue must be a four-digit year, got {year!r}")
        if not isinstance(self.serial, str) or not SERIAL_PATTERN.match(self.serial):
            raise InvalidArgumentError(f"Serial must be two digits, got {self.serial!r}")

    def __str__(self) -> str:
        return f"{self.initials}.{self.year_of_issue}.{self.serial}"
