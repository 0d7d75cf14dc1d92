"""Card statistics service for card_stats.

This module assembles the per-item stats report: review log with memory
states, answer time aggregates, current retrievability and due facts.
"""

from collections.abc import Callable, Sequence

from card_stats.config import SchedulingSettings
from card_stats.exceptions import NotFoundError
from card_stats.interfaces.decay_model import DecayModelInterface
from card_stats.interfaces.history_filter import HistoryFilterInterface
from card_stats.interfaces.storage import StorageInterface
from card_stats.interfaces.timing import ClockInterface, TimingSnapshot
from card_stats.logging import get_logger
from card_stats.models.item import DeckDTO, ItemDTO, PresetDTO
from card_stats.models.observation import ObservationDTO
from card_stats.models.stats import (
    AlignedObservation,
    CardStatsDTO,
    ReviewLogsDTO,
    StatsObservationDTO,
)
from card_stats.services.alignment import align_memory_states, unaligned
from card_stats.services.decay_model import DecayModelAdapter
from card_stats.services.history_filter import CutoffHistoryFilter
from card_stats.services.scheduling import (
    average_and_total_secs,
    current_retrievability,
    due_date,
    due_position,
    elapsed_since_last_review,
)

__all__ = [
    "CardStatsService",
]

logger = get_logger(__name__)

ModelFactory = Callable[[Sequence[float]], DecayModelInterface]


class CardStatsService:
    """Stats assembler for a single item.

    Storage lookups are awaited up front; everything after that is a
    synchronous computation over the fetched data. Each report takes one
    timing snapshot.

    Example:
        service = CardStatsService(storage, SystemClock())
        stats = await service.card_stats(item_id)
        for row in stats.observations:
            print(row.time, row.grade, row.memory_state)
    """

    def __init__(
        self,
        storage: StorageInterface,
        clock: ClockInterface,
        history_filter: HistoryFilterInterface | None = None,
        settings: SchedulingSettings | None = None,
        model_factory: ModelFactory = DecayModelAdapter,
    ) -> None:
        """Initialize service with dependencies.

        Args:
            storage: Storage interface for items, decks, presets and logs
            clock: Clock interface for timing snapshots
            history_filter: Filter selecting the model's input (default: cutoff filter)
            settings: Scheduling settings (default decay, epoch threshold)
            model_factory: Builds a decay model from preset weights
        """
        self._storage = storage
        self._clock = clock
        self._filter = history_filter or CutoffHistoryFilter()
        self._settings = settings or SchedulingSettings()
        self._model_factory = model_factory

    async def card_stats(self, item_id: int) -> CardStatsDTO:
        """Build the stats report for an item.

        Args:
            item_id: Item to report on

        Returns:
            CardStatsDTO with the review log newest first

        Raises:
            NotFoundError: If the item, one of its decks or its preset is missing
            ModelError: If the decay model rejects the preset or item parameters
        """
        item = await self._require_item(item_id)
        deck = await self._require_deck(item.deck_id)
        observations = await self._storage.get_observations_for_item(item.item_id)
        logged_last_review = await self._storage.time_of_last_observation(item.item_id)

        if item.home_deck_id != deck.deck_id:
            original_deck = await self._require_deck(item.home_deck_id)
        else:
            original_deck = deck
        preset = await self._require_preset(original_deck)

        timing = self._clock.timing_today()
        model = self._model_factory(preset.fsrs_params)

        aligned = self.align(observations, preset, model, timing)
        average_secs, total_secs = average_and_total_secs(observations)
        elapsed = elapsed_since_last_review(timing, item.last_review_time, logged_last_review)
        retrievability = current_retrievability(
            item, elapsed, model, self._settings.default_decay
        )

        logger.debug(
            "card_stats_computed",
            item_id=item.item_id,
            observations=len(observations),
            retrievability=retrievability,
        )

        return CardStatsDTO(
            item_id=item.item_id,
            note_id=item.note_id,
            deck=deck.name,
            added=item.added_secs,
            first_review=observations[0].timestamp_secs if observations else None,
            latest_review=observations[-1].timestamp_secs if observations else None,
            due_date=due_date(item, timing, self._settings.epoch_timestamp_threshold),
            due_position=due_position(item),
            interval=item.interval,
            ease=item.ease_factor,
            reviews=item.reps,
            lapses=item.lapses,
            average_secs=average_secs,
            total_secs=total_secs,
            observations=[
                StatsObservationDTO.from_observation(entry.observation, entry.memory_state)
                for entry in reversed(aligned)
            ],
            memory_state=item.memory_state,
            retrievability=retrievability,
            fsrs_params=list(preset.fsrs_params),
            preset=preset.name,
            original_deck=original_deck.name if original_deck != deck else None,
            desired_retention=item.desired_retention,
            custom_data=item.custom_data,
        )

    async def review_logs(self, item_id: int) -> ReviewLogsDTO:
        """Get an item's review log, newest first, without memory states.

        Args:
            item_id: Item to query

        Returns:
            ReviewLogsDTO (empty for unknown items)
        """
        observations = await self._storage.get_observations_for_item(item_id)
        return ReviewLogsDTO(
            entries=[StatsObservationDTO.from_observation(entry) for entry in reversed(observations)]
        )

    def align(
        self,
        observations: Sequence[ObservationDTO],
        preset: PresetDTO,
        model: DecayModelInterface,
        timing: TimingSnapshot,
    ) -> list[AlignedObservation]:
        """Filter, replay and re-align an item's review log.

        Args:
            observations: Full review log, oldest first
            preset: Preset governing the item
            model: Decay model built from the preset
            timing: Timing snapshot of the current report

        Returns:
            One AlignedObservation per observation, oldest first
        """
        fit = self._filter.filter(observations, preset, model)
        if fit is None:
            return unaligned(observations)

        states = model.state_sequence(
            fit.observations,
            fit.starting_state,
            next_day_at=timing.next_day_at,
        )
        aligned = align_memory_states(observations, fit.observations, states)

        logger.debug(
            "memory_states_aligned",
            observations=len(observations),
            filtered=len(fit.observations),
            dropped_front=fit.dropped_front,
        )
        return aligned

    async def _require_item(self, item_id: int) -> ItemDTO:
        item = await self._storage.get_item(item_id)
        if item is None:
            raise NotFoundError("item", item_id)
        return item

    async def _require_deck(self, deck_id: int) -> DeckDTO:
        deck = await self._storage.get_deck(deck_id)
        if deck is None:
            raise NotFoundError("deck", deck_id)
        return deck

    async def _require_preset(self, deck: DeckDTO) -> PresetDTO:
        # Filtered decks carry no preset; callers pass the home deck
        if deck.preset_id is None:
            raise NotFoundError("preset", f"deck {deck.deck_id}")
        preset = await self._storage.get_preset(deck.preset_id)
        if preset is None:
            raise NotFoundError("preset", deck.preset_id)
        return preset
