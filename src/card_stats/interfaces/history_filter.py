"""History filter interface for card_stats.

This module defines the Protocol for selecting the part of a review log
the forgetting-curve model is fit on.
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from card_stats.interfaces.decay_model import DecayModelInterface
from card_stats.models.item import PresetDTO
from card_stats.models.memory import FilteredFitResult
from card_stats.models.observation import ObservationDTO

__all__ = [
    "HistoryFilterInterface",
]


@runtime_checkable
class HistoryFilterInterface(Protocol):
    """Contract for the filter/cutoff collaborator."""

    def filter(
        self,
        observations: Sequence[ObservationDTO],
        preset: PresetDTO,
        model: DecayModelInterface,
    ) -> FilteredFitResult | None:
        """Select the observations eligible for model fitting.

        Args:
            observations: Full review log, oldest first
            preset: Preset supplying the cutoff and historical retention
            model: Model used to derive a starting state when needed

        Returns:
            FilteredFitResult, or None if no observation is eligible
        """
        ...
