"""Event bus implementations."""

from .in_memory_bus import InMemoryEventBus

__all__ = ["InMemoryEventBus"]
