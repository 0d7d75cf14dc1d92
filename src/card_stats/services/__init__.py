"""Service layer for card_stats.

This module exports the main service entry points.
"""

from card_stats.services.alignment import align_memory_states, unaligned
from card_stats.services.card_stats import CardStatsService
from card_stats.services.decay_model import DecayModelAdapter
from card_stats.services.history_filter import CutoffHistoryFilter
from card_stats.services.scheduling import (
    average_and_total_secs,
    current_retrievability,
    due_date,
    due_position,
    elapsed_since_last_review,
    is_unix_epoch_timestamp,
)

__all__ = [
    "CardStatsService",
    "CutoffHistoryFilter",
    "DecayModelAdapter",
    "align_memory_states",
    "average_and_total_secs",
    "current_retrievability",
    "due_date",
    "due_position",
    "elapsed_since_last_review",
    "is_unix_epoch_timestamp",
    "unaligned",
]
