"""Decay model interface for card_stats.

This module defines the Protocol for the forgetting-curve model adapter.
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from card_stats.models.memory import MemoryStateDTO
from card_stats.models.observation import ObservationDTO

__all__ = [
    "DecayModelInterface",
]


@runtime_checkable
class DecayModelInterface(Protocol):
    """Contract for a forgetting-curve model.

    Implementations are pure: identical inputs give identical outputs and
    nothing is retained between calls.
    """

    def state_sequence(
        self,
        observations: Sequence[ObservationDTO],
        starting_state: MemoryStateDTO | None = None,
        *,
        next_day_at: int = 0,
    ) -> list[MemoryStateDTO]:
        """Replay observations through the model.

        Args:
            observations: Filtered observations, oldest first
            starting_state: State before the first observation, if known
            next_day_at: Epoch seconds of the next day rollover

        Returns:
            One memory state per observation, in the same order

        Raises:
            ModelError: If the model rejects its inputs
        """
        ...

    def retrievability(
        self,
        state: MemoryStateDTO,
        elapsed_seconds: int,
        decay: float,
    ) -> float:
        """Probability of recall after ``elapsed_seconds``.

        Args:
            state: Memory state at the last observation
            elapsed_seconds: Seconds since the last observation (>= 0)
            decay: Decay constant

        Returns:
            Probability in [0, 1]

        Raises:
            ModelError: If the decay constant is unusable
        """
        ...

    def memory_state_from_sm2(
        self,
        ease_factor: float,
        interval: float,
        retention: float,
    ) -> MemoryStateDTO:
        """Approximate a memory state from legacy SM-2 scheduling facts.

        Args:
            ease_factor: Ease as a multiplier (2.5 = 250%)
            interval: Interval in days
            retention: Retention the SM-2 schedule is assumed to have achieved

        Returns:
            Starting memory state
        """
        ...
