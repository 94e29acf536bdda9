#!/usr/bin/env python3
"""Simulate a short-let business against an in-memory rental registry.

This script fills a registry with villas and apartments, puts generated
tenants on file, issues rentals of random kinds and lengths, terminates a
share of them and reports availability through the configured sink:
- console: messages and events printed to stdout
- kafka: events published to <topic_prefix>.rental-events and the
  terminating-soon listing to <topic_prefix>.terminating-soon
"""

import argparse
import logging
import random
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rental_registry.config import SINK_CHOICES, RegistryConfig
from rental_registry.exceptions import DuplicateTenantError
from rental_registry.generators import TenantGenerator
from rental_registry.logging import setup_logging
from rental_registry.models import PropertyKind
from rental_registry.sinks import ConsoleSink, KafkaSink
from rental_registry.store import RentalRegistry

logger = logging.getLogger(__name__)


def build_sink(config: RegistryConfig) -> ConsoleSink | KafkaSink | None:
    """Create the sink named by ``config.sink``."""
    if config.sink == "kafka":
        return KafkaSink(config.kafka, notifications_topic=config.notifications_topic)
    if config.sink == "console":
        return ConsoleSink()
    return None


def populate(registry: RentalRegistry, villas: int, apartments: int) -> None:
    """Add the requested number of properties."""
    for _ in range(villas):
        registry.add_property(PropertyKind.VILLA)
    for _ in range(apartments):
        registry.add_property(PropertyKind.APARTMENT)
    logger.info("Added %d villas and %d apartments", villas, apartments)


def simulate(
    registry: RentalRegistry,
    num_tenants: int,
    seed: int | None,
    terminate_rate: float = 0.3,
    max_duration: int = 30,
) -> dict[str, int]:
    """Register tenants, issue rentals and terminate some of them.

    Parameters
    ----------
    registry : RentalRegistry
        Registry to drive.
    num_tenants : int
        Number of tenants to generate and put on file.
    seed : int | None
        Seed for the tenant generator and the simulation choices.
    terminate_rate : float
        Share of issued rentals terminated afterwards.
    max_duration : int
        Longest rental in days.

    Returns
    -------
    dict[str, int]
        Counts of issued, refused and terminated rentals, plus skipped
        duplicate applications.
    """
    rng = random.Random(seed)
    generator = TenantGenerator(seed=seed)
    tenants = []
    stats = {"issued": 0, "refused": 0, "terminated": 0, "duplicates": 0}
    for application in generator.generate_batch(num_tenants):
        try:
            tenants.append(
                registry.add_tenant_record(
                    application.first_name,
                    application.last_name,
                    application.date_of_birth,
                    application.premium,
                )
            )
        except DuplicateTenantError as e:
            logger.warning("Skipping application: %s", e)
            stats["duplicates"] += 1

    renting = []
    for tenant in tenants:
        kind = rng.choice(list(PropertyKind))
        if registry.issue_rental(tenant, kind, rng.randint(1, max_duration)):
            stats["issued"] += 1
            renting.append(tenant)
        else:
            stats["refused"] += 1

    for tenant in renting:
        if rng.random() < terminate_rate:
            registry.terminate_rental(tenant)
            stats["terminated"] += 1

    logger.info(
        "Simulation complete: issued=%d, refused=%d, terminated=%d",
        stats["issued"],
        stats["refused"],
        stats["terminated"],
    )
    return stats


def report(registry: RentalRegistry, sink: ConsoleSink | KafkaSink | None, config: RegistryConfig) -> None:
    """Write properties terminating soon to the sink and log availability."""
    soon = sorted(registry.properties_terminating_soon(), key=str)
    if sink is not None:
        sink.write_batch(config.terminating_soon_topic, soon)
    for kind in PropertyKind:
        logger.info("Available %ss: %d", kind.value, registry.count_available(kind))
    logger.info("Summary: %s", registry.summary())


def main() -> None:
    """Main entry point."""
    config = RegistryConfig.from_env()

    parser = argparse.ArgumentParser(description="Simulate rentals against an in-memory registry")
    parser.add_argument(
        "--villas",
        type=int,
        default=5,
        help="Number of villas to add (default: 5)",
    )
    parser.add_argument(
        "--apartments",
        type=int,
        default=10,
        help="Number of apartments to add (default: 10)",
    )
    parser.add_argument(
        "--tenants",
        type=int,
        default=20,
        help="Number of tenants to generate (default: 20)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.seed,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--sink",
        choices=SINK_CHOICES,
        default=config.sink,
        help="Where messages and events go (default: console)",
    )
    parser.add_argument(
        "--log-level",
        default=config.log_level,
        help="Log level (default: INFO)",
    )
    args = parser.parse_args()

    config.seed = args.seed
    config.sink = args.sink
    setup_logging(args.log_level, config.log_format)

    sink = build_sink(config)
    registry = RentalRegistry(config=config, sink=sink)

    populate(registry, args.villas, args.apartments)
    simulate(registry, args.tenants, args.seed)
    report(registry, sink, config)

    if sink is not None:
        sink.close()


if __name__ == "__main__":
    main()
