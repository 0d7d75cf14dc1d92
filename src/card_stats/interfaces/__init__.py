"""Interface contracts for card_stats.

This module exports all Protocol-based interfaces for dependency injection.
"""

from card_stats.interfaces.decay_model import DecayModelInterface
from card_stats.interfaces.history_filter import HistoryFilterInterface
from card_stats.interfaces.storage import StorageInterface
from card_stats.interfaces.timing import ClockInterface, TimingSnapshot

__all__ = [
    "ClockInterface",
    "DecayModelInterface",
    "HistoryFilterInterface",
    "StorageInterface",
    "TimingSnapshot",
]
