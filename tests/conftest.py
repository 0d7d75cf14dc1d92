"""Shared test fixtures for card_stats.

This module provides pytest fixtures used across all tests.
"""

from collections.abc import Callable
from unittest.mock import AsyncMock

import pytest

from card_stats.config import SchedulingSettings, TimingSettings
from card_stats.infra.clock import FixedClock
from card_stats.models.item import DeckDTO, ItemDTO, ItemStage, PresetDTO
from card_stats.models.memory import MemoryStateDTO
from card_stats.models.observation import ObservationDTO, ReviewKind

# 2024-01-01 00:00:00 UTC
NOW = 1_704_067_200
DAY_MS = 86_400_000
# First observation: 2023-11-01 10:00:00 UTC
T0_MS = 1_698_832_800_000


# Clock fixtures
@pytest.fixture
def timing_settings() -> TimingSettings:
    """Collection created 2020-09-13, rollover at 04:00 UTC."""
    return TimingSettings(collection_created=1_600_000_000, rollover_hour=4)


@pytest.fixture
def fixed_clock(timing_settings: TimingSettings) -> FixedClock:
    """Clock pinned to NOW (day 1204, next rollover NOW + 4h)."""
    return FixedClock(NOW, timing_settings)


@pytest.fixture
def scheduling_settings() -> SchedulingSettings:
    return SchedulingSettings(
        default_decay=0.5,
        epoch_timestamp_threshold=1_000_000_000,
    )


# Factories
@pytest.fixture
def make_observation() -> Callable[..., ObservationDTO]:
    """Build an observation ``day`` days after T0."""

    def _make(
        day: float,
        grade: int = 3,
        kind: ReviewKind = ReviewKind.REVIEW,
        *,
        item_id: int = 1,
        interval: int = 1,
        last_interval: int = 0,
        ease_factor: int = 2500,
        taken_millis: int = 8000,
    ) -> ObservationDTO:
        return ObservationDTO(
            observation_id=T0_MS + int(day * DAY_MS),
            item_id=item_id,
            grade=grade,
            interval=interval,
            last_interval=last_interval,
            ease_factor=ease_factor,
            taken_millis=taken_millis,
            kind=kind,
        )

    return _make


# Sample data fixtures
@pytest.fixture
def sample_observations(make_observation: Callable[..., ObservationDTO]) -> list[ObservationDTO]:
    """Learning step followed by three reviews."""
    return [
        make_observation(0, grade=3, kind=ReviewKind.LEARNING, interval=-600, ease_factor=0),
        make_observation(1, grade=3, interval=3, last_interval=-600),
        make_observation(4, grade=3, interval=9, last_interval=3),
        make_observation(13, grade=1, kind=ReviewKind.REVIEW, interval=-600, last_interval=9),
    ]


@pytest.fixture
def sample_memory_state() -> MemoryStateDTO:
    return MemoryStateDTO(stability=12.5, difficulty=5.2)


@pytest.fixture
def sample_preset() -> PresetDTO:
    return PresetDTO(preset_id=10, name="Default")


@pytest.fixture
def sample_deck() -> DeckDTO:
    return DeckDTO(deck_id=1, name="Japanese::Vocab", preset_id=10)


@pytest.fixture
def sample_item(sample_memory_state: MemoryStateDTO) -> ItemDTO:
    return ItemDTO(
        item_id=1_698_800_000_000,
        note_id=42,
        deck_id=1,
        stage=ItemStage.REVIEW,
        due=1210,
        interval=9,
        ease_factor=2500,
        reps=4,
        lapses=1,
        memory_state=sample_memory_state,
        last_review_time=NOW - 2 * 86_400,
        desired_retention=0.9,
    )


# Mock fixtures
@pytest.fixture
def mock_storage(
    sample_item: ItemDTO,
    sample_deck: DeckDTO,
    sample_preset: PresetDTO,
    sample_observations: list[ObservationDTO],
) -> AsyncMock:
    """Create mock storage interface serving the sample item."""
    storage = AsyncMock()
    storage.get_item.return_value = sample_item
    storage.get_deck.return_value = sample_deck
    storage.get_preset.return_value = sample_preset
    storage.get_observations_for_item.return_value = sample_observations
    storage.time_of_last_observation.return_value = sample_observations[-1].timestamp_secs
    return storage
