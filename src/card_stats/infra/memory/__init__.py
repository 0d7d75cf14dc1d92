"""In-memory storage backend for card_stats."""

from card_stats.infra.memory.repository import InMemoryStorageRepository

__all__ = ["InMemoryStorageRepository"]
