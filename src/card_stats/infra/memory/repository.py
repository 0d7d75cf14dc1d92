"""In-memory repository for card_stats.

This module provides a StorageInterface implementation backed by plain
dictionaries. It is meant for embedding, replays and tests; persistent
backends implement the same Protocol.
"""

from typing import Any, Self

from card_stats.interfaces.storage import StorageInterface
from card_stats.logging import get_logger
from card_stats.models.item import DeckDTO, ItemDTO, PresetDTO
from card_stats.models.observation import ObservationDTO, ReviewKind

__all__ = [
    "InMemoryStorageRepository",
]

logger = get_logger(__name__)


class InMemoryStorageRepository(StorageInterface):
    """Dictionary-backed implementation of StorageInterface.

    Review logs are kept sorted by observation_id. Entries can be removed
    to model manual edits of the log.
    """

    config_class = None

    def __init__(self) -> None:
        self._items: dict[int, ItemDTO] = {}
        self._decks: dict[int, DeckDTO] = {}
        self._presets: dict[int, PresetDTO] = {}
        self._observations: dict[int, list[ObservationDTO]] = {}

    @classmethod
    async def from_dict(cls, config: dict[str, Any]) -> Self:
        """Factory method for CardStats instantiation.

        Args:
            config: Optional ``items``, ``decks``, ``presets`` and
                ``observations`` lists of plain dicts

        Returns:
            Populated repository
        """
        repository = cls()
        for data in config.get("presets", []):
            repository.add_preset(PresetDTO.model_validate(data))
        for data in config.get("decks", []):
            repository.add_deck(DeckDTO.model_validate(data))
        for data in config.get("items", []):
            repository.add_item(ItemDTO.model_validate(data))
        for data in config.get("observations", []):
            repository.append_observation(ObservationDTO.model_validate(data))

        logger.debug(
            "memory_repository_loaded",
            items=len(repository._items),
            observations=sum(len(log) for log in repository._observations.values()),
        )
        return repository

    async def close(self) -> None:
        pass

    # Write helpers
    def add_item(self, item: ItemDTO) -> None:
        self._items[item.item_id] = item

    def add_deck(self, deck: DeckDTO) -> None:
        self._decks[deck.deck_id] = deck

    def add_preset(self, preset: PresetDTO) -> None:
        self._presets[preset.preset_id] = preset

    def append_observation(self, observation: ObservationDTO) -> None:
        log = self._observations.setdefault(observation.item_id, [])
        log.append(observation)
        log.sort(key=lambda entry: entry.observation_id)

    def remove_observation(self, item_id: int, observation_id: int) -> bool:
        """Remove one log entry; returns False if it did not exist."""
        log = self._observations.get(item_id, [])
        for index, entry in enumerate(log):
            if entry.observation_id == observation_id:
                del log[index]
                return True
        return False

    # StorageInterface
    async def get_item(self, item_id: int) -> ItemDTO | None:
        return self._items.get(item_id)

    async def get_deck(self, deck_id: int) -> DeckDTO | None:
        return self._decks.get(deck_id)

    async def get_preset(self, preset_id: int) -> PresetDTO | None:
        return self._presets.get(preset_id)

    async def get_observations_for_item(self, item_id: int) -> list[ObservationDTO]:
        return list(self._observations.get(item_id, []))

    async def time_of_last_observation(self, item_id: int) -> int | None:
        for entry in reversed(self._observations.get(item_id, [])):
            if entry.is_answer and entry.kind not in (ReviewKind.MANUAL, ReviewKind.RESCHEDULED):
                return entry.timestamp_secs
        return None
