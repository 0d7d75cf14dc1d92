"""History filter for card_stats.

This module selects the part of an item's review log that the FSRS model
replays. Everything it leaves out still gets a memory state later, through
the alignment step.
"""

from collections.abc import Sequence

from card_stats.interfaces.decay_model import DecayModelInterface
from card_stats.logging import get_logger
from card_stats.models.item import PresetDTO
from card_stats.models.memory import FilteredFitResult, MemoryStateDTO
from card_stats.models.observation import ObservationDTO, ReviewKind

__all__ = [
    "CutoffHistoryFilter",
]

logger = get_logger(__name__)

_NON_REVIEW_KINDS = frozenset({ReviewKind.MANUAL, ReviewKind.RESCHEDULED})


class CutoffHistoryFilter:
    """Default implementation of HistoryFilterInterface.

    Rules, applied to the full log in order:
    - a manual entry with ease 0 is a reset; everything up to it is dropped
    - entries older than the preset's ``ignore_revlogs_before`` are dropped
    - manual, rescheduled and grade-0 entries are never model input, nor are
      filtered-deck reviews that did not reschedule (ease 0)

    When the retained history does not open with a learning step, the item
    was already in review before it, so a starting state is derived from the
    last known SM-2 ease and interval.

    Example:
        fit = CutoffHistoryFilter().filter(observations, preset, adapter)
        if fit is not None:
            states = adapter.state_sequence(fit.observations, fit.starting_state)
    """

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
        start = self._start_after_last_reset(observations)
        cutoff = preset.ignore_revlogs_before

        retained: list[ObservationDTO] = []
        dropped_front = 0
        for index, observation in enumerate(observations):
            if index < start or observation.observation_id < cutoff:
                continue
            if not self._is_model_input(observation):
                continue
            if not retained:
                dropped_front = index
            retained.append(observation)

        if not retained:
            logger.debug(
                "history_filter_empty",
                observations=len(observations),
                cutoff=cutoff,
            )
            return None

        starting_state = None
        if retained[0].kind != ReviewKind.LEARNING:
            starting_state = self._sm2_starting_state(
                observations[start:dropped_front], retained[0], preset, model
            )

        return FilteredFitResult(
            observations=retained,
            starting_state=starting_state,
            dropped_front=dropped_front,
        )

    @staticmethod
    def _start_after_last_reset(observations: Sequence[ObservationDTO]) -> int:
        start = 0
        for index, observation in enumerate(observations):
            if observation.kind == ReviewKind.MANUAL and observation.ease_factor == 0:
                start = index + 1
        return start

    @staticmethod
    def _is_model_input(observation: ObservationDTO) -> bool:
        if not observation.is_answer or observation.kind in _NON_REVIEW_KINDS:
            return False
        return not (observation.kind == ReviewKind.FILTERED and observation.ease_factor == 0)

    @staticmethod
    def _sm2_starting_state(
        preceding: Sequence[ObservationDTO],
        first: ObservationDTO,
        preset: PresetDTO,
        model: DecayModelInterface,
    ) -> MemoryStateDTO | None:
        """Derive the state before ``first`` from the latest SM-2 facts.

        Prefers the newest dropped answer that produced a day interval;
        falls back to the interval ``first`` itself was answered after.
        """
        for observation in reversed(preceding):
            if observation.is_answer and observation.interval > 0 and observation.ease_factor:
                return model.memory_state_from_sm2(
                    observation.ease_factor / 1000.0,
                    observation.interval,
                    preset.historical_retention,
                )
        if first.last_interval > 0 and first.ease_factor:
            return model.memory_state_from_sm2(
                first.ease_factor / 1000.0,
                first.last_interval,
                preset.historical_retention,
            )
        return None
