"""Storage interface for card_stats.

This module defines the Protocol for the read-only storage lookups a stats
report needs. Implementations return ``None`` for unknown identities; the
service layer turns that into ``NotFoundError``.
"""

from typing import ClassVar, Protocol, runtime_checkable

from card_stats.models.item import DeckDTO, ItemDTO, PresetDTO
from card_stats.models.observation import ObservationDTO

__all__ = [
    "StorageInterface",
]


@runtime_checkable
class StorageInterface(Protocol):
    """Contract for item, deck, preset and review log lookups.

    When the log of an item may change while a report is computed, the
    implementation must serve all calls of one report from a consistent
    snapshot.
    """

    config_class: ClassVar[type | None] = None

    async def get_item(self, item_id: int) -> ItemDTO | None:
        """Get an item by ID.

        Args:
            item_id: Item ID to retrieve

        Returns:
            ItemDTO if found, None otherwise
        """
        ...

    async def get_deck(self, deck_id: int) -> DeckDTO | None:
        """Get a deck by ID.

        Args:
            deck_id: Deck ID to retrieve

        Returns:
            DeckDTO if found, None otherwise
        """
        ...

    async def get_preset(self, preset_id: int) -> PresetDTO | None:
        """Get a scheduling preset by ID.

        Args:
            preset_id: Preset ID to retrieve

        Returns:
            PresetDTO if found, None otherwise
        """
        ...

    async def get_observations_for_item(self, item_id: int) -> list[ObservationDTO]:
        """Get the full review log of an item.

        Args:
            item_id: Item ID to query

        Returns:
            Observations ordered by observation_id (oldest first)
        """
        ...

    async def time_of_last_observation(self, item_id: int) -> int | None:
        """Get the time of the item's last real review.

        Args:
            item_id: Item ID to query

        Returns:
            Epoch seconds, or None if the item was never reviewed
        """
        ...
