"""Public DTO models for card_stats.

This module exports all public data transfer objects.
"""

from card_stats.models.item import DeckDTO, ItemDTO, ItemStage, PresetDTO
from card_stats.models.memory import FilteredFitResult, MemoryStateDTO
from card_stats.models.observation import SECONDS_PER_DAY, ObservationDTO, ReviewKind
from card_stats.models.stats import (
    AlignedObservation,
    CardStatsDTO,
    ReviewLogsDTO,
    StatsObservationDTO,
)

__all__ = [
    "SECONDS_PER_DAY",
    "AlignedObservation",
    "CardStatsDTO",
    "DeckDTO",
    "FilteredFitResult",
    "ItemDTO",
    "ItemStage",
    "MemoryStateDTO",
    "ObservationDTO",
    "PresetDTO",
    "ReviewKind",
    "ReviewLogsDTO",
    "StatsObservationDTO",
]
