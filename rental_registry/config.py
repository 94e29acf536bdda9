"""Configuration management for rental-registry."""

import os
from dataclasses import dataclass, field
from typing import Any

from rental_registry.exceptions import ConfigurationError

SINK_CHOICES = ("none", "console", "kafka")


@dataclass
class KafkaConfig:
    """Kafka producer configuration."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    batch_size: int = 16384
    linger_ms: int = 5
    compression: str = "snappy"
    retries: int = 3

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "batch.size": self.batch_size,
            "linger.ms": self.linger_ms,
            "compression.type": self.compression,
            "retries": self.retries,
        }


@dataclass
class RentalPolicy:
    """Eligibility thresholds applied when issuing rentals."""

    villa_min_age: int = 21
    apartment_min_age: int = 18
    terminating_soon_days: int = 7


@dataclass
class RegistryConfig:
    """Main configuration for rental-registry."""

    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    policy: RentalPolicy = field(default_factory=RentalPolicy)
    topic_prefix: str = "dev.rentals"
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"
    sink: str = "console"

    @property
    def events_topic(self) -> str:
        """Topic receiving rental lifecycle events."""
        return f"{self.topic_prefix}.rental-events"

    @property
    def notifications_topic(self) -> str:
        """Topic receiving user-channel messages."""
        return f"{self.topic_prefix}.notifications"

    @property
    def terminating_soon_topic(self) -> str:
        """Topic receiving listings of rentals about to end."""
        return f"{self.topic_prefix}.terminating-soon"

    @classmethod
    def from_env(cls) -> "RegistryConfig":
        """Create config from environment variables."""
        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            acks=os.getenv("KAFKA_ACKS", "all"),
        )

        policy = RentalPolicy(
            villa_min_age=_env_int("VILLA_MIN_AGE", 21),
            apartment_min_age=_env_int("APARTMENT_MIN_AGE", 18),
            terminating_soon_days=_env_int("TERMINATING_SOON_DAYS", 7),
        )

        sink = os.getenv("RENTAL_SINK", "console").lower()
        if sink not in SINK_CHOICES:
            raise ConfigurationError(
                f"RENTAL_SINK must be one of {', '.join(SINK_CHOICES)}, got {sink!r}"
            )

        seed = _env_int("RENTAL_SEED", None)

        return cls(
            kafka=kafka,
            policy=policy,
            topic_prefix=os.getenv("RENTAL_TOPIC_PREFIX", "dev.rentals"),
            seed=seed,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
            sink=sink,
        )


def _env_int(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
