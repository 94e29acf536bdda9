"""Kafka sink for publishing rental events."""

import json
import logging
import time
from dataclasses import dataclass
from typing import Any

from confluent_kafka import KafkaException, Producer

from rental_registry.config import KafkaConfig
from rental_registry.exceptions import SinkError
from rental_registry.sinks.serialization import to_dict

logger = logging.getLogger(__name__)


@dataclass
class ProducerStats:
    """Track producer delivery statistics."""

    sent: int = 0
    delivered: int = 0
    failed: int = 0
    start_time: float | None = None
    end_time: float | None = None

    @property
    def success_rate(self) -> float:
        """Calculate success rate."""
        total = self.delivered + self.failed
        return self.delivered / total if total > 0 else 0.0

    @property
    def throughput(self) -> float:
        """Calculate events per second achieved."""
        if self.start_time is None or self.end_time is None:
            return 0.0
        duration = self.end_time - self.start_time
        return self.sent / duration if duration > 0 else 0.0


class KafkaSink:
    """Publish rental events and user messages to Kafka topics."""

    def __init__(
        self,
        config: KafkaConfig | str,
        notifications_topic: str = "dev.rentals.notifications",
    ) -> None:
        """Initialize Kafka sink.

        Parameters
        ----------
        config : KafkaConfig | str
            Producer configuration or bootstrap servers string.
        notifications_topic : str
            Topic that receives user-channel messages.
        """
        if isinstance(config, str):
            config = KafkaConfig(bootstrap_servers=config)

        self.config = config
        self.notifications_topic = notifications_topic
        self.producer = Producer(config.to_dict())
        self.stats = ProducerStats(start_time=time.time())

    def _delivery_callback(self, err: Any, msg: Any) -> None:
        """Handle delivery reports."""
        if err:
            self.stats.failed += 1
            logger.error("Delivery failed: %s", err)
        else:
            self.stats.delivered += 1
            logger.debug("Delivered to %s[%d]@%d", msg.topic(), msg.partition(), msg.offset())

    def send(self, topic: str, record: Any, key: str | None = None) -> None:
        """Send a single record to a Kafka topic as JSON."""
        value = json.dumps(to_dict(record), ensure_ascii=False, default=str).encode("utf-8")

        try:
            self.producer.produce(
                topic=topic,
                key=key.encode("utf-8") if key else None,
                value=value,
                callback=self._delivery_callback,
            )
        except (BufferError, KafkaException) as exc:
            raise SinkError(f"Could not enqueue record for {topic}: {exc}") from exc
        self.stats.sent += 1
        self.producer.poll(0)

    def notify(self, message: str) -> None:
        """Publish a user-channel message."""
        self.send(self.notifications_topic, {"message": message})

    def write_batch(self, topic: str, records: list[Any]) -> None:
        """Write a batch of records to a Kafka topic."""
        logger.info("Writing batch to %s: %d records", topic, len(records))

        for record in records:
            self.send(topic, record)

        self.flush()
        logger.info("Batch complete: sent=%d, delivered=%d, failed=%d",
                    self.stats.sent, self.stats.delivered, self.stats.failed)

    def flush(self, timeout: float = 30.0) -> None:
        """Flush pending messages."""
        self.producer.flush(timeout)

    def close(self) -> None:
        """Flush and close the producer."""
        self.flush()
        self.stats.end_time = time.time()
        logger.info(
            "Kafka sink closed: sent=%d, delivered=%d, failed=%d",
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
        )
