"""Tests for config and logging."""

import json
import logging
import os
import sys
from unittest.mock import patch

import pytest

from rental_registry.config import KafkaConfig, RegistryConfig, RentalPolicy
from rental_registry.exceptions import ConfigurationError
from rental_registry.logging import JsonFormatter, get_logger, setup_logging

ENV_VARS = [
    "KAFKA_BOOTSTRAP_SERVERS",
    "KAFKA_ACKS",
    "RENTAL_TOPIC_PREFIX",
    "RENTAL_SEED",
    "RENTAL_SINK",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "VILLA_MIN_AGE",
    "APARTMENT_MIN_AGE",
    "TERMINATING_SOON_DAYS",
]


@pytest.fixture
def clean_env() -> dict[str, str]:
    """Environment without any rental-registry variables."""
    return {k: v for k, v in os.environ.items() if k not in ENV_VARS}


class TestKafkaConfig:
    """Tests for KafkaConfig."""

    def test_default_values(self) -> None:
        """Test default Kafka settings."""
        config = KafkaConfig()

        assert config.bootstrap_servers == "localhost:9092"
        assert config.acks == "all"
        assert config.retries == 3

    def test_to_dict(self) -> None:
        """Test conversion to confluent-kafka config dict."""
        result = KafkaConfig(bootstrap_servers="kafka:9092", linger_ms=10).to_dict()

        assert result["bootstrap.servers"] == "kafka:9092"
        assert result["acks"] == "all"
        assert result["batch.size"] == 16384
        assert result["linger.ms"] == 10
        assert result["compression.type"] == "snappy"
        assert result["retries"] == 3


class TestRentalPolicy:
    """Tests for RentalPolicy."""

    def test_default_values(self) -> None:
        """Test default eligibility thresholds."""
        policy = RentalPolicy()

        assert policy.villa_min_age == 21
        assert policy.apartment_min_age == 18
        assert policy.terminating_soon_days == 7


class TestRegistryConfig:
    """Tests for RegistryConfig."""

    def test_default_values(self) -> None:
        """Test default registry settings and topic names."""
        config = RegistryConfig()

        assert isinstance(config.kafka, KafkaConfig)
        assert isinstance(config.policy, RentalPolicy)
        assert config.seed is None
        assert config.log_level == "INFO"
        assert config.sink == "console"
        assert config.events_topic == "dev.rentals.rental-events"
        assert config.notifications_topic == "dev.rentals.notifications"
        assert config.terminating_soon_topic == "dev.rentals.terminating-soon"

    def test_from_env_default(self, clean_env: dict[str, str]) -> None:
        """Test from_env with no variables set."""
        with patch.dict(os.environ, clean_env, clear=True):
            config = RegistryConfig.from_env()

        assert config.kafka.bootstrap_servers == "localhost:9092"
        assert config.policy == RentalPolicy()
        assert config.topic_prefix == "dev.rentals"
        assert config.seed is None
        assert config.sink == "console"

    def test_from_env_custom(self, clean_env: dict[str, str]) -> None:
        """Test from_env reads every variable."""
        env = {
            **clean_env,
            "KAFKA_BOOTSTRAP_SERVERS": "kafka-cluster:9092",
            "KAFKA_ACKS": "1",
            "RENTAL_TOPIC_PREFIX": "prod.lettings",
            "RENTAL_SEED": "12345",
            "RENTAL_SINK": "Kafka",
            "LOG_LEVEL": "DEBUG",
            "LOG_FORMAT": "json",
            "VILLA_MIN_AGE": "25",
            "APARTMENT_MIN_AGE": "19",
            "TERMINATING_SOON_DAYS": "3",
        }
        with patch.dict(os.environ, env, clear=True):
            config = RegistryConfig.from_env()

        assert config.kafka.bootstrap_servers == "kafka-cluster:9092"
        assert config.kafka.acks == "1"
        assert config.events_topic == "prod.lettings.rental-events"
        assert config.seed == 12345
        assert config.sink == "kafka"
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"
        assert config.policy == RentalPolicy(25, 19, 3)

    def test_from_env_bad_integer(self, clean_env: dict[str, str]) -> None:
        """Test a non-numeric threshold is rejected."""
        with patch.dict(os.environ, {**clean_env, "VILLA_MIN_AGE": "old"}, clear=True):
            with pytest.raises(ConfigurationError, match="VILLA_MIN_AGE"):
                RegistryConfig.from_env()

    def test_from_env_bad_sink(self, clean_env: dict[str, str]) -> None:
        """Test an unknown sink name is rejected."""
        with patch.dict(os.environ, {**clean_env, "RENTAL_SINK": "postgres"}, clear=True):
            with pytest.raises(ConfigurationError, match="RENTAL_SINK"):
                RegistryConfig.from_env()


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_default(self) -> None:
        """Test default logging setup."""
        setup_logging()

        assert logging.getLogger("rental_registry").level == logging.INFO

    def test_setup_logging_debug(self) -> None:
        """Test DEBUG level is applied to the root logger."""
        setup_logging(level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG

    def test_setup_logging_invalid_level(self) -> None:
        """Test logging with invalid level defaults to INFO."""
        setup_logging(level="INVALID")

        assert logging.getLogger().level == logging.INFO

    def test_setup_logging_json_format(self) -> None:
        """Test json format installs the JSON formatter."""
        setup_logging(format_type="json")

        logger = logging.getLogger()
        assert any(isinstance(h.formatter, JsonFormatter) for h in logger.handlers)

    def test_setup_logging_replaces_handlers(self) -> None:
        """Test existing root handlers are replaced."""
        logger = logging.getLogger()
        logger.addHandler(logging.StreamHandler())
        logger.addHandler(logging.StreamHandler())

        setup_logging()

        assert len(logger.handlers) == 1

    def test_external_loggers_quieted(self) -> None:
        """Test Kafka and Faker loggers are held at WARNING."""
        setup_logging(level="DEBUG")

        assert logging.getLogger("confluent_kafka").level == logging.WARNING
        assert logging.getLogger("faker").level == logging.WARNING


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def test_format_basic(self) -> None:
        """Test the basic JSON fields."""
        record = logging.LogRecord(
            name="rental_registry.store",
            level=logging.INFO,
            pathname="registry.py",
            lineno=1,
            msg="Added %s",
            args=("Villa V-K42",),
            exc_info=None,
        )

        data = json.loads(JsonFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "rental_registry.store"
        assert data["message"] == "Added Villa V-K42"
        assert "timestamp" in data

    def test_format_with_exception(self) -> None:
        """Test exception text is included."""
        try:
            raise ValueError("boom")
        except ValueError:
            exc_info = sys.exc_info()
        record = logging.LogRecord(
            name="test", level=logging.ERROR, pathname="x.py", lineno=1,
            msg="failed", args=(), exc_info=exc_info,
        )

        data = json.loads(JsonFormatter().format(record))

        assert "ValueError: boom" in data["exception"]

    def test_format_with_extra(self) -> None:
        """Test identifiers passed through extra= become JSON fields."""
        record = logging.getLogger("test").makeRecord(
            "test", logging.INFO, "x.py", 1, "issued", (), None,
            extra={"tenant_id": "TH.2026.07", "unrelated": "ignored"},
        )

        data = json.loads(JsonFormatter().format(record))

        assert data["tenant_id"] == "TH.2026.07"
        assert "unrelated" not in data


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger(self) -> None:
        """Test get_logger returns the named logger."""
        logger = get_logger("rental_registry.test")

        assert logger.name == "rental_registry.test"
        assert logger is logging.getLogger("rental_registry.test")


class TestRegistryLogContext:
    """Tests for identifier fields in JSON logs."""

    def test_context_fields_lifted(self) -> None:
        """Test identifier attributes on the record become fields."""
        record = logging.LogRecord(
            name="rental_registry.store.registry", level=logging.INFO, pathname="x.py",
            lineno=1, msg="Issued", args=(), exc_info=None,
        )
        record.tenant_id = "TH.2026.07"
        record.property_code = "V-K42"

        data = json.loads(JsonFormatter().format(record))

        assert data["tenant_id"] == "TH.2026.07"
        assert data["property_code"] == "V-K42"
        assert "event_type" not in data

    def test_unknown_format_rejected(self) -> None:
        """Test an unknown log format raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="Log format"):
            setup_logging(format_type="xml")

    def test_registry_logs_carry_ids(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test registry log records carry the property code."""
        from rental_registry.store import RentalRegistry

        registry = RentalRegistry()
        with caplog.at_level(logging.INFO, logger="rental_registry"):
            villa = registry.add_property("Villa")

        record = next(r for r in caplog.records if r.getMessage() == f"Added {villa}")
        assert record.property_code == villa.property_code
