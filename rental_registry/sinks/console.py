"""Console sink for debugging and interactive use."""

import json
from typing import Any

from rental_registry.sinks.serialization import to_dict


class ConsoleSink:
    """Print user messages and events to stdout."""

    def __init__(self, pretty: bool = False, show_events: bool = True, max_records: int | None = None) -> None:
        """Initialize console sink.

        Parameters
        ----------
        pretty : bool
            Pretty-print JSON output.
        show_events : bool
            Print structured events as well as user messages.
        max_records : int | None
            Maximum records to print per batch (None for all).
        """
        self.pretty = pretty
        self.show_events = show_events
        self.max_records = max_records
        self._counts: dict[str, int] = {}

    def notify(self, message: str) -> None:
        """Print a user-channel message."""
        print(message)
        self._counts["messages"] = self._counts.get("messages", 0) + 1

    def send(self, topic: str, record: Any, key: str | None = None) -> None:
        """Print a single event as JSON."""
        self._counts[topic] = self._counts.get(topic, 0) + 1
        if not self.show_events:
            return
        prefix = f"[{topic}]" if key is None else f"[{topic} key={key}]"
        print(f"{prefix} {self._dumps(to_dict(record))}")

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Write a batch of records to console."""
        print(f"\n{'='*60}")
        print(f"Entity: {entity_type} ({len(records)} records)")
        print("=" * 60)

        display_records = records[: self.max_records] if self.max_records else records

        for record in display_records:
            print(self._dumps(to_dict(record)))

        if self.max_records and len(records) > self.max_records:
            print(f"... and {len(records) - self.max_records} more records")

        self._counts[entity_type] = self._counts.get(entity_type, 0) + len(records)

    def close(self) -> None:
        """Print summary and close."""
        print(f"\n{'='*60}")
        print("Console Sink Summary")
        print("=" * 60)
        for entity_type, count in self._counts.items():
            print(f"  {entity_type}: {count} records")

    def _dumps(self, data: dict) -> str:
        if self.pretty:
            return json.dumps(data, indent=2, ensure_ascii=False, default=str)
        return json.dumps(data, ensure_ascii=False, default=str)
