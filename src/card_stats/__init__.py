"""card_stats - Per-item review statistics with FSRS memory states.

This package provides tools for:
- Replaying an item's review log through the FSRS forgetting-curve model
- Re-attaching memory states to every log entry, including edited or
  excluded ones
- Current retrievability, due date and queue position of an item
- Answer time aggregates

Example usage:
    from card_stats import CardStats, InMemoryStorageRepository

    async with CardStats(
        storage_class=InMemoryStorageRepository,
        storage_custom_config=data,
    ) as cs:
        stats = await cs.card_stats(item_id)
        print(stats.retrievability, stats.due_date)
"""

__version__ = "0.1.0"

from card_stats.config import CardStatsConfig
from card_stats.exceptions import CardStatsError, ModelError, NotFoundError
from card_stats.infra.clock import FixedClock, SystemClock
from card_stats.infra.memory.repository import InMemoryStorageRepository
from card_stats.interfaces.decay_model import DecayModelInterface
from card_stats.interfaces.history_filter import HistoryFilterInterface
from card_stats.interfaces.storage import StorageInterface
from card_stats.interfaces.timing import ClockInterface, TimingSnapshot
from card_stats.orchestrator import CardStats
from card_stats.services.card_stats import CardStatsService
from card_stats.services.decay_model import DecayModelAdapter
from card_stats.services.history_filter import CutoffHistoryFilter

__all__ = [  # noqa: RUF022
    # Orchestrator
    "CardStats",
    "CardStatsConfig",
    # Services
    "CardStatsService",
    "CutoffHistoryFilter",
    "DecayModelAdapter",
    # Implementations
    "FixedClock",
    "InMemoryStorageRepository",
    "SystemClock",
    # Interfaces
    "ClockInterface",
    "DecayModelInterface",
    "HistoryFilterInterface",
    "StorageInterface",
    "TimingSnapshot",
    # Errors
    "CardStatsError",
    "ModelError",
    "NotFoundError",
]
