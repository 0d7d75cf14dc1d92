"""Item, deck and preset models for card_stats.

These models hold the persisted metadata a stats report needs alongside
the observation log.
"""

from enum import StrEnum

from pydantic import BaseModel, Field

from card_stats.models.memory import MemoryStateDTO

__all__ = [
    "DeckDTO",
    "ItemDTO",
    "ItemStage",
    "PresetDTO",
]


class ItemStage(StrEnum):
    """Lifecycle stage of an item."""

    NEW = "new"
    LEARN = "learn"
    REVIEW = "review"
    RELEARN = "relearn"


class ItemDTO(BaseModel, frozen=True):
    """Persisted state of a single tracked item.

    ``due`` and ``original_due`` use a legacy dual encoding: new items store
    their queue position, scheduled items store either epoch seconds or a
    day number relative to the collection's day counter.

    Attributes:
        item_id: Creation time in epoch milliseconds
        note_id: Parent note ID
        deck_id: Current deck
        original_deck_id: Home deck while in a filtered deck, 0 otherwise
        stage: Lifecycle stage
        due: Due value (position, day number or epoch seconds)
        original_due: Due value saved while in a filtered deck, 0 otherwise
        original_position: Queue position saved before first study
        interval: Current interval in days
        ease_factor: Ease in permille
        reps: Number of reviews
        lapses: Number of lapses
        memory_state: Latest persisted memory state
        decay: Item decay constant, if the preset recorded one
        last_review_time: Cached time of the last observation (epoch seconds)
        desired_retention: Retention target of the item's preset
        custom_data: Opaque user data
    """

    item_id: int = Field(ge=0, description="Epoch milliseconds")
    note_id: int = Field(default=0)
    deck_id: int
    original_deck_id: int = Field(default=0)
    stage: ItemStage = Field(default=ItemStage.NEW)
    due: int = Field(default=0)
    original_due: int = Field(default=0)
    original_position: int | None = None
    interval: int = Field(default=0)
    ease_factor: int = Field(default=0, ge=0)
    reps: int = Field(default=0, ge=0)
    lapses: int = Field(default=0, ge=0)
    memory_state: MemoryStateDTO | None = None
    decay: float | None = None
    last_review_time: int | None = Field(default=None, description="Epoch seconds")
    desired_retention: float | None = None
    custom_data: str = ""
    schema_version: int = Field(default=1)

    @property
    def added_secs(self) -> int:
        return self.item_id // 1000

    @property
    def home_deck_id(self) -> int:
        """Deck whose preset governs the item."""
        return self.original_deck_id or self.deck_id


class DeckDTO(BaseModel, frozen=True):
    """Deck an item lives in.

    Filtered decks have no preset of their own.
    """

    deck_id: int
    name: str
    preset_id: int | None = None


class PresetDTO(BaseModel, frozen=True):
    """Scheduling preset shared by a group of decks.

    Attributes:
        preset_id: Preset ID
        name: Display name
        fsrs_params: Pre-computed FSRS weights (empty = model defaults)
        historical_retention: Retention assumed for reviews done before FSRS
        ignore_revlogs_before: Cutoff in epoch milliseconds, 0 = no cutoff
    """

    preset_id: int
    name: str
    fsrs_params: list[float] = Field(default_factory=list)
    historical_retention: float = Field(default=0.9, gt=0.0, lt=1.0)
    ignore_revlogs_before: int = Field(default=0, ge=0, description="Epoch milliseconds")
