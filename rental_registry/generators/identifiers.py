"""Issuers for unique property codes and tenant ids.

Each issuer draws random candidates and retries until it finds a string form
it has never handed out. Issuers are owned by a registry, so independent
registries (and tests) never share issued sets.
"""

from __future__ import annotations

import logging
import random
import string
import threading
from datetime import datetime
from types import MappingProxyType
from typing import Callable, Generic, Mapping, TypeVar

from rental_registry.exceptions import IdentifierExhaustedError, InvalidArgumentError
from rental_registry.models.identifiers import PropertyCode, TenantID
from rental_registry.models.name import Name

logger = logging.getLogger(__name__)

T = TypeVar("T", PropertyCode, TenantID)

VALID_PREFIXES = ("V", "A")
SUFFIX_SPACE = len(string.ascii_uppercase) * 100
SERIAL_SPACE = 100


class IdentifierIssuer(Generic[T]):
    """Base issuer keeping the set of identifiers handed out so far.

    Parameters
    ----------
    rng : random.Random | None
        Random source for the draws. A fresh unseeded one when omitted.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()
        self._issued: dict[str, T] = {}
        self._bucket_sizes: dict[str, int] = {}
        self._lock = threading.Lock()

    @property
    def issued(self) -> Mapping[str, T]:
        """Read-only view of issued identifiers keyed by string form."""
        return MappingProxyType(self._issued)

    def reset(self) -> None:
        """Forget every identifier issued so far."""
        with self._lock:
            self._issued.clear()
            self._bucket_sizes.clear()

    def __len__(self) -> int:
        return len(self._issued)

    def __contains__(self, identifier: object) -> bool:
        return str(identifier) in self._issued

    def _claim(self, draw: Callable[[], T], bucket: str, capacity: int) -> T:
        """Draw until an unseen identifier comes up, then record it.

        ``bucket`` names the part of the string form fixed by the caller;
        at most ``capacity`` identifiers fit in one bucket.
        """
        with self._lock:
            if self._bucket_sizes.get(bucket, 0) >= capacity:
                raise IdentifierExhaustedError(
                    f"All {capacity} identifiers starting {bucket!r} have been issued"
                )
            attempts = 1
            candidate = draw()
            while str(candidate) in self._issued:
                attempts += 1
                candidate = draw()
            if attempts > 1:
                logger.debug("Issued %s after %d draws", candidate, attempts)
            self._issued[str(candidate)] = candidate
            self._bucket_sizes[bucket] = self._bucket_sizes.get(bucket, 0) + 1
            return candidate


class PropertyCodeIssuer(IdentifierIssuer[PropertyCode]):
    """Issue property codes such as ``V-K42``."""

    def generate_suffix(self) -> str:
        """Draw one uppercase letter followed by two digits."""
        letter = self.rng.choice(string.ascii_uppercase)
        return f"{letter}{self.rng.randrange(100):02d}"

    def issue(self, prefix: str) -> PropertyCode:
        """Return a property code never issued before.

        Raises
        ------
        InvalidArgumentError
            If ``prefix`` is not ``'V'`` or ``'A'``.
        IdentifierExhaustedError
            If all 2,600 codes for the prefix are taken.
        """
        if prefix not in VALID_PREFIXES:
            raise InvalidArgumentError(
                f"Invalid property prefix {prefix!r}. Must be either 'V' for villas, "
                "or 'A' for apartments."
            )
        return self._claim(
            lambda: PropertyCode(prefix, self.generate_suffix()),
            f"{prefix}-",
            SUFFIX_SPACE,
        )


class TenantIDIssuer(IdentifierIssuer[TenantID]):
    """Issue tenant ids such as ``TH.2026.07``."""

    def generate_serial(self) -> str:
        return f"{self.rng.randrange(100):02d}"

    def issue(self, name: Name, year: int | None = None) -> TenantID:
        """Return a tenant id never issued before.

        Parameters
        ----------
        name : Name
            Tenant name; the initials come from it.
        year : int | None
            Year of issue. Defaults to the current calendar year.
        """
        if name is None:
            raise InvalidArgumentError("Name can't be None")
        if year is None:
            year = datetime.now().year
        initials = name.initials
        return self._claim(
            lambda: TenantID(initials, year, self.generate_serial()),
            f"{initials}.{year}.",
            SERIAL_SPACE,
        )
