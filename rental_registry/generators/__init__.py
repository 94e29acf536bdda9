"""Identifier issuers and synthetic data generators."""

from rental_registry.generators.identifiers import (
    IdentifierIssuer,
    PropertyCodeIssuer,
    TenantIDIssuer,
)
from rental_registry.generators.tenant import TenantGenerator

__all__ = [
    "IdentifierIssuer",
    "PropertyCodeIssuer",
    "TenantGenerator",
    "TenantIDIssuer",
]
