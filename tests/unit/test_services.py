"""Unit tests for the card stats service."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from card_stats.config import SchedulingSettings
from card_stats.exceptions import ModelError, NotFoundError
from card_stats.infra.clock import FixedClock
from card_stats.models.item import DeckDTO, ItemDTO, ItemStage, PresetDTO
from card_stats.models.observation import ObservationDTO
from card_stats.services.card_stats import CardStatsService
from card_stats.services.decay_model import DecayModelAdapter

NOW = 1_704_067_200


class TestCardStatsService:
    """Tests for CardStatsService.card_stats."""

    @pytest.mark.asyncio
    async def test_full_report(
        self,
        mock_storage: AsyncMock,
        fixed_clock: FixedClock,
        scheduling_settings: SchedulingSettings,
        sample_item: ItemDTO,
        sample_observations: list[ObservationDTO],
    ) -> None:
        service = CardStatsService(mock_storage, fixed_clock, settings=scheduling_settings)

        stats = await service.card_stats(sample_item.item_id)

        assert stats.item_id == sample_item.item_id
        assert stats.note_id == 42
        assert stats.deck == "Japanese::Vocab"
        assert stats.added == sample_item.item_id // 1000
        assert stats.first_review == sample_observations[0].timestamp_secs
        assert stats.latest_review == sample_observations[-1].timestamp_secs
        assert stats.due_date == NOW + 6 * 86_400
        assert stats.due_position is None
        assert stats.reviews == 4
        assert stats.lapses == 1
        assert stats.average_secs == pytest.approx(8.0)
        assert stats.total_secs == pytest.approx(32.0)
        assert stats.preset == "Default"
        assert stats.original_deck is None
        assert stats.memory_state == sample_item.memory_state

    @pytest.mark.asyncio
    async def test_observations_newest_first_with_states(
        self,
        mock_storage: AsyncMock,
        fixed_clock: FixedClock,
        sample_observations: list[ObservationDTO],
    ) -> None:
        service = CardStatsService(mock_storage, fixed_clock)

        stats = await service.card_stats(1)

        expected_states = DecayModelAdapter().state_sequence(
            sample_observations,
            next_day_at=fixed_clock.timing_today().next_day_at,
        )
        assert [row.time for row in stats.observations] == [
            obs.timestamp_secs for obs in reversed(sample_observations)
        ]
        assert [row.memory_state for row in stats.observations] == list(
            reversed(expected_states)
        )

    @pytest.mark.asyncio
    async def test_retrievability_from_later_review_time(
        self,
        mock_storage: AsyncMock,
        fixed_clock: FixedClock,
        sample_item: ItemDTO,
    ) -> None:
        service = CardStatsService(mock_storage, fixed_clock)

        stats = await service.card_stats(1)

        assert sample_item.memory_state is not None
        expected = DecayModelAdapter().retrievability(sample_item.memory_state, 2 * 86_400, 0.5)
        assert stats.retrievability == pytest.approx(expected)

    @pytest.mark.asyncio
    async def test_no_memory_state_no_retrievability(
        self,
        mock_storage: AsyncMock,
        fixed_clock: FixedClock,
        sample_item: ItemDTO,
    ) -> None:
        mock_storage.get_item.return_value = sample_item.model_copy(update={"memory_state": None})
        service = CardStatsService(mock_storage, fixed_clock)

        stats = await service.card_stats(1)

        assert stats.retrievability is None
        assert stats.memory_state is None

    @pytest.mark.asyncio
    async def test_new_item_without_history(
        self,
        mock_storage: AsyncMock,
        fixed_clock: FixedClock,
    ) -> None:
        mock_storage.get_item.return_value = ItemDTO(
            item_id=1, deck_id=1, stage=ItemStage.NEW, due=33
        )
        mock_storage.get_observations_for_item.return_value = []
        mock_storage.time_of_last_observation.return_value = None
        service = CardStatsService(mock_storage, fixed_clock)

        stats = await service.card_stats(1)

        assert stats.observations == []
        assert stats.first_review is None
        assert stats.latest_review is None
        assert stats.due_date is None
        assert stats.due_position == 33
        assert stats.average_secs == 0.0
        assert stats.total_secs == 0.0
        assert stats.retrievability is None

    @pytest.mark.asyncio
    async def test_original_deck_governs_preset(
        self,
        mock_storage: AsyncMock,
        fixed_clock: FixedClock,
        sample_item: ItemDTO,
    ) -> None:
        decks = {
            1: DeckDTO(deck_id=1, name="Japanese::Vocab", preset_id=10),
            7: DeckDTO(deck_id=7, name="Cram"),
        }
        mock_storage.get_deck.side_effect = lambda deck_id: decks.get(deck_id)
        mock_storage.get_item.return_value = sample_item.model_copy(
            update={"deck_id": 7, "original_deck_id": 1}
        )
        service = CardStatsService(mock_storage, fixed_clock)

        stats = await service.card_stats(1)

        assert stats.deck == "Cram"
        assert stats.original_deck == "Japanese::Vocab"
        mock_storage.get_preset.assert_awaited_once_with(10)

    @pytest.mark.asyncio
    async def test_item_not_found(self, mock_storage: AsyncMock, fixed_clock: FixedClock) -> None:
        mock_storage.get_item.return_value = None
        service = CardStatsService(mock_storage, fixed_clock)

        with pytest.raises(NotFoundError) as exc_info:
            await service.card_stats(99)

        assert exc_info.value.kind == "item"
        assert exc_info.value.identity == 99
        mock_storage.get_observations_for_item.assert_not_called()

    @pytest.mark.asyncio
    async def test_deck_not_found(self, mock_storage: AsyncMock, fixed_clock: FixedClock) -> None:
        mock_storage.get_deck.return_value = None
        service = CardStatsService(mock_storage, fixed_clock)

        with pytest.raises(NotFoundError) as exc_info:
            await service.card_stats(1)

        assert exc_info.value.kind == "deck"

    @pytest.mark.asyncio
    async def test_preset_not_found(
        self, mock_storage: AsyncMock, fixed_clock: FixedClock
    ) -> None:
        mock_storage.get_preset.return_value = None
        service = CardStatsService(mock_storage, fixed_clock)

        with pytest.raises(NotFoundError) as exc_info:
            await service.card_stats(1)

        assert exc_info.value.kind == "preset"

    @pytest.mark.asyncio
    async def test_filtered_home_deck_has_no_preset(
        self, mock_storage: AsyncMock, fixed_clock: FixedClock
    ) -> None:
        mock_storage.get_deck.return_value = DeckDTO(deck_id=1, name="Cram")
        service = CardStatsService(mock_storage, fixed_clock)

        with pytest.raises(NotFoundError):
            await service.card_stats(1)

        mock_storage.get_preset.assert_not_called()

    @pytest.mark.asyncio
    async def test_malformed_preset_params(
        self, mock_storage: AsyncMock, fixed_clock: FixedClock
    ) -> None:
        mock_storage.get_preset.return_value = PresetDTO(
            preset_id=10, name="Broken", fsrs_params=[0.4, 1.2]
        )
        service = CardStatsService(mock_storage, fixed_clock)

        with pytest.raises(ModelError):
            await service.card_stats(1)

    @pytest.mark.asyncio
    async def test_malformed_item_decay(
        self,
        mock_storage: AsyncMock,
        fixed_clock: FixedClock,
        sample_item: ItemDTO,
    ) -> None:
        mock_storage.get_item.return_value = sample_item.model_copy(update={"decay": 0.0})
        service = CardStatsService(mock_storage, fixed_clock)

        with pytest.raises(ModelError):
            await service.card_stats(1)

    @pytest.mark.asyncio
    async def test_filter_without_eligible_history(
        self,
        mock_storage: AsyncMock,
        fixed_clock: FixedClock,
    ) -> None:
        history_filter = MagicMock()
        history_filter.filter.return_value = None
        service = CardStatsService(mock_storage, fixed_clock, history_filter=history_filter)

        stats = await service.card_stats(1)

        assert len(stats.observations) == 4
        assert all(row.memory_state is None for row in stats.observations)

    @pytest.mark.asyncio
    async def test_uses_model_factory(
        self,
        mock_storage: AsyncMock,
        fixed_clock: FixedClock,
        sample_preset: PresetDTO,
    ) -> None:
        model = MagicMock(wraps=DecayModelAdapter())
        factory = MagicMock(return_value=model)
        service = CardStatsService(mock_storage, fixed_clock, model_factory=factory)

        await service.card_stats(1)

        factory.assert_called_once_with(sample_preset.fsrs_params)
        model.state_sequence.assert_called_once()


class TestReviewLogs:
    """Tests for CardStatsService.review_logs."""

    @pytest.mark.asyncio
    async def test_newest_first_without_states(
        self,
        mock_storage: AsyncMock,
        fixed_clock: FixedClock,
        sample_observations: list[ObservationDTO],
    ) -> None:
        service = CardStatsService(mock_storage, fixed_clock)

        logs = await service.review_logs(1)

        assert [row.time for row in logs.entries] == [
            obs.timestamp_secs for obs in reversed(sample_observations)
        ]
        assert all(row.memory_state is None for row in logs.entries)

    @pytest.mark.asyncio
    async def test_unknown_item_is_empty(
        self, mock_storage: AsyncMock, fixed_clock: FixedClock
    ) -> None:
        mock_storage.get_observations_for_item.return_value = []
        service = CardStatsService(mock_storage, fixed_clock)

        logs = await service.review_logs(99)

        assert logs.entries == []
