"""In-memory rental registry with eligibility rules and referential integrity."""

from __future__ import annotations

import logging
import random
import threading
import uuid
from datetime import date, datetime, timedelta
from types import MappingProxyType
from typing import Any, Callable, Mapping

from rental_registry.config import RegistryConfig
from rental_registry.exceptions import (
    DuplicateTenantError,
    EntityNotFoundError,
    InvalidArgumentError,
    ReferentialIntegrityError,
)
from rental_registry.generators.identifiers import PropertyCodeIssuer, TenantIDIssuer
from rental_registry.models import (
    PROPERTY_TYPES,
    Event,
    EventType,
    Name,
    Property,
    PropertyCode,
    PropertyKind,
    TenantID,
    TenantRecord,
    Villa,
)
from rental_registry.sinks.base import RegistrySink
from rental_registry.sinks.serialization import property_to_dict, tenant_to_dict

logger = logging.getLogger(__name__)

EVENT_SOURCE = "rental-registry"


class RentalRegistry:
    """Central store for properties, tenants and the rentals between them.

    Three mappings are kept: properties by code, tenants by id, and the
    current assignment of each renting tenant to a property code. Every public
    operation leaves them consistent: an assigned property exists and is
    rented, a rented property is assigned and has a termination date, and a
    tenant holds at most one rental.

    Parameters
    ----------
    rng : random.Random | None
        Random source for identifiers and property selection; event ids come
        from a stream derived from it. Seeded from ``config.seed`` when omitted.
    clock : Callable[[], datetime]
        Returns the current time; ages and termination dates derive from it.
    sink : RegistrySink | None
        User channel and event outlet. Messages are only logged when omitted.
    config : RegistryConfig | None
        Policy thresholds and topic names.
    property_codes : PropertyCodeIssuer | None
        Issuer for property codes; a private one sharing ``rng`` by default.
    tenant_ids : TenantIDIssuer | None
        Issuer for tenant ids; a private one sharing ``rng`` by default.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = datetime.now,
        sink: RegistrySink | None = None,
        config: RegistryConfig | None = None,
        property_codes: PropertyCodeIssuer | None = None,
        tenant_ids: TenantIDIssuer | None = None,
    ) -> None:
        self.config = config or RegistryConfig()
        self.rng = rng or random.Random(self.config.seed)
        # Event ids come from a separate stream; draws on ``rng`` never depend on the sink
        self._event_rng = random.Random(self.rng.getrandbits(64))
        self.clock = clock
        self.sink = sink
        self.property_codes = property_codes or PropertyCodeIssuer(self.rng)
        self.tenant_ids = tenant_ids or TenantIDIssuer(self.rng)

        self._properties: dict[PropertyCode, Property] = {}
        self._tenants: dict[TenantID, TenantRecord] = {}
        self._assignments: dict[TenantID, PropertyCode] = {}
        self._lock = threading.RLock()

    # Read-only views
    @property
    def properties(self) -> Mapping[PropertyCode, Property]:
        return MappingProxyType(self._properties)

    @property
    def tenants(self) -> Mapping[TenantID, TenantRecord]:
        return MappingProxyType(self._tenants)

    @property
    def assignments(self) -> Mapping[TenantID, PropertyCode]:
        return MappingProxyType(self._assignments)

    def add_property(self, kind: str | PropertyKind | None) -> Property:
        """Create a villa or apartment with a fresh property code.

        Parameters
        ----------
        kind : str | PropertyKind | None
            ``"Villa"`` or ``"Apartment"``, compared case-insensitively.

        Returns
        -------
        Property
            The new, unrented property.

        Raises
        ------
        InvalidArgumentError
            If ``kind`` is absent or unrecognised.
        """
        kind = PropertyKind.parse(kind)
        with self._lock:
            code = self.property_codes.issue(kind.prefix)
            prop = PROPERTY_TYPES[kind](property_code=code)
            self._properties[code] = prop
        logger.info("Added %s", prop, extra={"property_code": code})
        self._publish(EventType.PROPERTY_ADDED, str(code), property_to_dict(prop))
        return prop

    def count_available(self, kind: str | PropertyKind | None) -> int:
        """Count unrented properties of ``kind``.

        Villas with a dirty pool are counted; they are only excluded when a
        rental is issued.
        """
        kind = PropertyKind.parse(kind)
        with self._lock:
            return sum(
                1 for p in self._properties.values() if p.kind is kind and not p.is_rented
            )

    def add_tenant_record(
        self,
        first_name: str | None,
        last_name: str | None,
        date_of_birth: date | None,
        premium: bool,
    ) -> TenantRecord:
        """Put a new tenant on file.

        Raises
        ------
        InvalidArgumentError
            If a name part or the date of birth is missing, or a name part is empty.
        DuplicateTenantError
            If a tenant with the same name and date of birth is already on file.
        """
        if first_name is None or last_name is None:
            raise InvalidArgumentError("First name and last name can't be None")
        if date_of_birth is None:
            raise InvalidArgumentError("Date of birth can't be None")
        if not isinstance(date_of_birth, date):
            raise InvalidArgumentError(
                f"Date of birth must be a date, got {type(date_of_birth).__name__}"
            )
        name = Name(first_name, last_name)
        if isinstance(date_of_birth, datetime):
            date_of_birth = date_of_birth.date()

        with self._lock:
            for existing in self._tenants.values():
                if existing.name == name and existing.date_of_birth == date_of_birth:
                    raise DuplicateTenantError(
                        f"Tenant with name and date of birth {name}, {date_of_birth} "
                        "already exists on our records"
                    )
            tenant_id = self.tenant_ids.issue(name, self.clock().year)
            record = TenantRecord(name, date_of_birth, premium, tenant_id)
            self._tenants[tenant_id] = record
        logger.info("Added tenant %s (%s)", tenant_id, name, extra={"tenant_id": tenant_id})
        self._publish(EventType.TENANT_ADDED, str(tenant_id), tenant_to_dict(record))
        return record

    def tenant_age(self, tenant_record: TenantRecord) -> int:
        """Age in whole years on today's date according to the clock."""
        if tenant_record is None:
            raise InvalidArgumentError("Tenant record can't be None")
        today = self.clock().date()
        dob = tenant_record.date_of_birth
        age = today.year - dob.year
        if (today.month, today.day) < (dob.month, dob.day):
            age -= 1
        return age

    def issue_rental(
        self,
        tenant_record: TenantRecord,
        kind: str | PropertyKind | None,
        duration_days: int,
    ) -> bool:
        """Let a randomly chosen eligible property of ``kind`` to a tenant.

        Business-rule refusals return ``False`` and tell the user channel why:
        the tenant already rents, nothing of that kind is free (for villas,
        nothing with a clean pool), the tenant is too young, or a villa was
        asked for by a non-premium tenant.

        Parameters
        ----------
        tenant_record : TenantRecord
            Tenant on file with this registry.
        kind : str | PropertyKind | None
            ``"Villa"`` or ``"Apartment"``, compared case-insensitively.
        duration_days : int
            Rental length. Not validated; zero or negative values give a
            termination date at or before now.

        Returns
        -------
        bool
            True if a property was assigned.

        Raises
        ------
        InvalidArgumentError
            If ``kind`` is absent or unrecognised.
        EntityNotFoundError
            If the tenant record is not the one on file for its id.
        """
        age = self.tenant_age(tenant_record)
        kind = PropertyKind.parse(kind)
        policy = self.config.policy

        with self._lock:
            self._require_on_file(tenant_record)
            candidates = [
                p for p in self._properties.values() if p.kind is kind and not p.is_rented
            ]
            eligible = [p for p in candidates if not isinstance(p, Villa) or p.clean_pool]

            if tenant_record.tenant_id in self._assignments:
                return self._refuse(f"Tenant: {tenant_record.name} can only rent one property at a time.")

            if not eligible:
                if kind is PropertyKind.VILLA and candidates:
                    return self._refuse(
                        "Unfortunately we currently have no available Villas for rental with clean "
                        "pools. Please keep checking back as we clean the villa pools daily."
                    )
                return self._refuse(f"All {kind.value}s are currently already rented.")

            if kind is PropertyKind.VILLA:
                if age < policy.villa_min_age:
                    return self._refuse(
                        f"Tenant needs to be {policy.villa_min_age} to rent a villa. They will be "
                        f"eligible in {policy.villa_min_age - age} years time."
                    )
                if not tenant_record.premium:
                    return self._refuse(
                        "Tenant needs to be premium class to rent a Villa. Please have a look at "
                        "our apartments for rental instead."
                    )
            elif age < policy.apartment_min_age:
                return self._refuse(
                    f"Tenant needs to be {policy.apartment_min_age} to rent an apartment. They "
                    f"will be eligible in {policy.apartment_min_age - age} years time."
                )

            chosen = self.rng.choice(eligible)
            self._assign(chosen, tenant_record, duration_days)

        self._notify(
            f"Tenant: {tenant_record.name}, has rented {chosen} for {duration_days} days."
        )
        self._publish(
            EventType.RENTAL_ISSUED,
            str(tenant_record.tenant_id),
            {
                "tenant": tenant_to_dict(tenant_record),
                "property": property_to_dict(chosen),
                "duration_days": duration_days,
            },
        )
        return True

    def terminate_rental(self, tenant_record: TenantRecord | None) -> None:
        """End the tenant's current rental and release the property.

        Raises
        ------
        InvalidArgumentError
            If ``tenant_record`` is None.
        EntityNotFoundError
            If the tenant has no current rental.
        ReferentialIntegrityError
            If the rented property is missing from the registry.
        """
        if tenant_record is None:
            raise InvalidArgumentError("Tenant record is not valid. Please try again.")

        tenant_id = tenant_record.tenant_id
        with self._lock:
            if tenant_id not in self._assignments:
                raise EntityNotFoundError(
                    f"Tenant {tenant_id} does not have any rental properties"
                )
            code = self._assignments[tenant_id]
            prop = self._properties.get(code)
            if prop is None:
                raise ReferentialIntegrityError(f"{tenant_id}'s rental property {code} is missing")

            del self._assignments[tenant_id]
            prop.is_rented = False
            prop.termination_date = None
            if isinstance(prop, Villa):
                prop.clean_pool = True

        logger.info(
            "Terminated rental of %s by %s",
            prop,
            tenant_id,
            extra={"tenant_id": tenant_id, "property_code": code},
        )
        self._notify(f"{tenant_record.name}'s rental of {prop} has been terminated.")
        self._publish(
            EventType.RENTAL_TERMINATED,
            str(tenant_id),
            {"tenant": tenant_to_dict(tenant_record), "property": property_to_dict(prop)},
        )

    def properties_terminating_soon(self) -> frozenset[Property]:
        """Rented properties whose termination falls between now and now plus the window.

        Both ends are inclusive, so a rental past its termination date that
        has not been terminated is no longer reported.
        """
        now = self.clock()
        horizon = now + timedelta(days=self.config.policy.terminating_soon_days)
        with self._lock:
            soon = set()
            for code in self._assignments.values():
                prop = self._properties[code]
                if now <= prop.termination_date <= horizon:
                    soon.add(prop)
        return frozenset(soon)

    def rented_property(self, tenant_record: TenantRecord) -> Property | None:
        """Property currently let to the tenant, if any."""
        with self._lock:
            code = self._assignments.get(tenant_record.tenant_id)
            return self._properties.get(code) if code is not None else None

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        with self._lock:
            kinds = [p.kind for p in self._properties.values()]
            return {
                "properties": len(self._properties),
                "villas": kinds.count(PropertyKind.VILLA),
                "apartments": kinds.count(PropertyKind.APARTMENT),
                "tenants": len(self._tenants),
                "rentals": len(self._assignments),
                "available_villas": self.count_available(PropertyKind.VILLA),
                "available_apartments": self.count_available(PropertyKind.APARTMENT),
            }

    def _require_on_file(self, tenant_record: TenantRecord) -> None:
        if self._tenants.get(tenant_record.tenant_id) is not tenant_record:
            raise EntityNotFoundError(f"Tenant {tenant_record.tenant_id} is not on our records")

    def _assign(self, prop: Property, tenant_record: TenantRecord, duration_days: int) -> None:
        prop.is_rented = True
        if isinstance(prop, Villa):
            prop.clean_pool = False
        prop.termination_date = self.clock() + timedelta(days=duration_days)
        self._assignments[tenant_record.tenant_id] = prop.property_code
        logger.info(
            "Issued %s to %s until %s",
            prop,
            tenant_record.tenant_id,
            prop.termination_date,
            extra={"tenant_id": tenant_record.tenant_id, "property_code": prop.property_code},
        )

    def _refuse(self, message: str) -> bool:
        logger.info("Rental refused: %s", message)
        if self.sink is not None:
            self.sink.notify(message)
        return False

    def _notify(self, message: str) -> None:
        if self.sink is not None:
            self.sink.notify(message)

    def _publish(self, event_type: EventType, subject: str, data: dict[str, Any]) -> None:
        if self.sink is None:
            return
        event = Event(
            event_id=str(uuid.UUID(int=self._event_rng.getrandbits(128), version=4)),
            event_type=event_type.value,
            event_time=self.clock(),
            source=EVENT_SOURCE,
            subject=subject,
            data=data,
        )
        self.sink.send(self.config.events_topic, event, key=subject)
