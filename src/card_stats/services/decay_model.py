"""Decay model adapter for card_stats.

This module wraps the FSRS model behind ``DecayModelInterface`` and is the
only place memory state DTOs are created.
"""

from collections.abc import Sequence

from card_stats.domain.fsrs import FSRSModel
from card_stats.logging import get_logger
from card_stats.models.memory import MemoryStateDTO
from card_stats.models.observation import SECONDS_PER_DAY, ObservationDTO

__all__ = [
    "DecayModelAdapter",
]

logger = get_logger(__name__)


class DecayModelAdapter:
    """FSRS-backed implementation of DecayModelInterface.

    Example:
        adapter = DecayModelAdapter(preset.fsrs_params)
        states = adapter.state_sequence(fit.observations, fit.starting_state)
        r = adapter.retrievability(states[-1], elapsed_seconds=86400, decay=0.5)
    """

    def __init__(self, params: Sequence[float] = ()) -> None:
        """Initialize adapter with preset weights.

        Args:
            params: FSRS weights (empty = model defaults)

        Raises:
            ModelError: If the weights are malformed
        """
        self._model = FSRSModel.from_params(params)

    @property
    def decay(self) -> float:
        """Decay constant implied by the weights."""
        return self._model.decay

    def state_sequence(
        self,
        observations: Sequence[ObservationDTO],
        starting_state: MemoryStateDTO | None = None,
        *,
        next_day_at: int = 0,
    ) -> list[MemoryStateDTO]:
        """Replay observations through FSRS, one state per observation.

        Elapsed days between two observations are counted in whole days,
        with day boundaries at the collection's rollover time. When a
        starting state is given, the first observation's elapsed days come
        from its ``last_interval``.

        Args:
            observations: Filtered observations, oldest first
            starting_state: State before the first observation, if known
            next_day_at: Epoch seconds of the next day rollover

        Returns:
            Memory states in observation order

        Raises:
            ModelError: If FSRS rejects an input
        """
        state = (
            (starting_state.stability, starting_state.difficulty) if starting_state else None
        )
        previous_day: int | None = None
        states: list[MemoryStateDTO] = []

        for observation in observations:
            day = (observation.timestamp_secs - next_day_at) // SECONDS_PER_DAY
            if previous_day is None:
                delta_t = max(observation.last_interval, 0)
            else:
                delta_t = max(day - previous_day, 0)
            previous_day = day

            state = self._model.step(state, observation.grade, delta_t)
            states.append(MemoryStateDTO(stability=state[0], difficulty=state[1]))

        logger.debug(
            "state_sequence_computed",
            observations=len(observations),
            seeded=starting_state is not None,
        )
        return states

    def retrievability(
        self,
        state: MemoryStateDTO,
        elapsed_seconds: int,
        decay: float,
    ) -> float:
        """Probability of recall ``elapsed_seconds`` after the last observation.

        Raises:
            ModelError: If the decay constant is not a positive finite number
        """
        return self._model.forgetting_curve(
            elapsed_seconds / SECONDS_PER_DAY, state.stability, decay
        )

    def memory_state_from_sm2(
        self,
        ease_factor: float,
        interval: float,
        retention: float,
    ) -> MemoryStateDTO:
        """Approximate a memory state from an SM-2 ease multiplier and interval."""
        stability, difficulty = self._model.state_from_sm2(ease_factor, interval, retention)
        return MemoryStateDTO(stability=stability, difficulty=difficulty)
