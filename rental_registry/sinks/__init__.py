"""Sinks for user-channel messages and rental events."""

from rental_registry.sinks.base import RegistrySink
from rental_registry.sinks.console import ConsoleSink
from rental_registry.sinks.kafka import KafkaSink

__all__ = ["ConsoleSink", "KafkaSink", "RegistrySink"]
