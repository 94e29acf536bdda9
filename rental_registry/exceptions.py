"""Custom exception hierarchy for rental-registry."""


class RentalRegistryError(Exception):
    """Base exception for all rental-registry errors."""


class InvalidArgumentError(RentalRegistryError, ValueError):
    """Raised when an operation receives an absent or invalid argument."""


class DuplicateTenantError(InvalidArgumentError):
    """Raised when a tenant with the same name and date of birth is on file."""


class EntityNotFoundError(InvalidArgumentError):
    """Raised when a referenced tenant, property or rental does not exist."""


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a rental points at a property missing from the registry."""


class IdentifierExhaustedError(RentalRegistryError):
    """Raised when every identifier in a bucket has already been issued."""


class ConfigurationError(RentalRegistryError):
    """Raised when configuration is invalid or missing."""


class SinkError(RentalRegistryError):
    """Raised when a sink operation fails."""
