"""Pytest configuration and fixtures."""

import random
from datetime import date, datetime
from typing import Callable
from unittest.mock import MagicMock

import pytest

from rental_registry.store import RentalRegistry

NOW = datetime(2026, 10, 18, 12, 30)


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def now() -> datetime:
    """Fixed current time seen by the registry."""
    return NOW


@pytest.fixture
def clock(now: datetime) -> Callable[[], datetime]:
    """Clock that always returns ``now``."""
    return lambda: now


@pytest.fixture
def rng(seed: int) -> random.Random:
    """Seeded random source."""
    return random.Random(seed)


@pytest.fixture
def sink() -> MagicMock:
    """Sink double recording notify/send calls."""
    return MagicMock()


@pytest.fixture
def registry(rng: random.Random, clock: Callable[[], datetime], sink: MagicMock) -> RentalRegistry:
    """Fresh registry with fixed clock and seeded randomness."""
    return RentalRegistry(rng=rng, clock=clock, sink=sink)


@pytest.fixture
def thomas_dob() -> date:
    """Date of birth of an adult premium tenant."""
    return date(1995, 6, 8)
