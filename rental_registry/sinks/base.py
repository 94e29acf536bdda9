"""Interface shared by registry sinks."""

from typing import Any, Protocol


class RegistrySink(Protocol):
    """Outlet for user-channel messages and rental events."""

    def notify(self, message: str) -> None:
        """Deliver a human-readable message to the user channel."""

    def send(self, topic: str, record: Any, key: str | None = None) -> None:
        """Deliver a structured record to a topic."""
