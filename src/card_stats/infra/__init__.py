"""Collaborator implementations for card_stats."""

from card_stats.infra.clock import FixedClock, SystemClock
from card_stats.infra.memory import InMemoryStorageRepository

__all__ = [
    "FixedClock",
    "InMemoryStorageRepository",
    "SystemClock",
]
