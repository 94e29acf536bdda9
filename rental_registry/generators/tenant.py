"""Tenant application generator."""

from __future__ import annotations

from typing import Iterator

from rental_registry.generators.base import BaseGenerator
from rental_registry.models.tenant import TenantApplication


class TenantGenerator(BaseGenerator):
    """Generate synthetic tenant applications."""

    PREMIUM_RATE = 0.3
    MIN_AGE = 16
    MAX_AGE = 80

    def generate(self) -> TenantApplication:
        """Generate a single application.

        Returns
        -------
        TenantApplication
            Generated application.
        """
        return self._generate_one()

    def generate_batch(self, count: int) -> Iterator[TenantApplication]:
        """Generate multiple applications.

        Parameters
        ----------
        count : int
            Number of applications to generate.

        Yields
        ------
        TenantApplication
            Generated applications.
        """
        for _ in range(count):
            yield self._generate_one()

    def _generate_one(self) -> TenantApplication:
        return TenantApplication(
            first_name=self._single_word(self.fake.first_name),
            last_name=self._single_word(self.fake.last_name),
            date_of_birth=self.fake.date_of_birth(
                minimum_age=self.MIN_AGE, maximum_age=self.MAX_AGE
            ),
            premium=self.rng.random() < self.PREMIUM_RATE,
        )

    @staticmethod
    def _single_word(provider) -> str:
        # Names must survive a round trip through Name.parse
        value = provider()
        while " " in value:
            value = provider()
        return value
