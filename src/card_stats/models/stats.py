"""Stats report models for card_stats.

These models are the output boundary: what a caller receives for one item.
Serialization is left to the caller (``model_dump`` / ``model_dump_json``).
"""

from pydantic import BaseModel, Field

from card_stats.models.memory import MemoryStateDTO
from card_stats.models.observation import ObservationDTO, ReviewKind

__all__ = [
    "AlignedObservation",
    "CardStatsDTO",
    "ReviewLogsDTO",
    "StatsObservationDTO",
]


class AlignedObservation(BaseModel, frozen=True):
    """A full-log observation paired with the memory state assigned to it."""

    observation: ObservationDTO
    memory_state: MemoryStateDTO | None = None


class StatsObservationDTO(BaseModel, frozen=True):
    """One review log row as reported to the caller.

    Attributes:
        time: Observation time in epoch seconds
        kind: How the observation was recorded
        grade: Answer button (0 for manual entries)
        interval: Interval produced, in seconds
        ease: Ease in permille
        taken_secs: Time spent answering, in seconds
        memory_state: Memory state after this observation, if known
    """

    time: int
    kind: ReviewKind
    grade: int
    interval: int
    ease: int
    taken_secs: float
    memory_state: MemoryStateDTO | None = None

    @classmethod
    def from_observation(
        cls,
        observation: ObservationDTO,
        memory_state: MemoryStateDTO | None = None,
    ) -> "StatsObservationDTO":
        """Create a report row from an observation."""
        return cls(
            time=observation.timestamp_secs,
            kind=observation.kind,
            grade=observation.grade,
            interval=observation.interval_secs,
            ease=observation.ease_factor,
            taken_secs=observation.taken_secs,
            memory_state=memory_state,
        )


class ReviewLogsDTO(BaseModel, frozen=True):
    """Review log of an item, newest first."""

    entries: list[StatsObservationDTO] = Field(default_factory=list)


class CardStatsDTO(BaseModel, frozen=True):
    """Statistics report for one item.

    Attributes:
        item_id: Item ID
        note_id: Parent note ID
        deck: Name of the deck the item is in
        added: Creation time in epoch seconds
        first_review: Time of the oldest observation
        latest_review: Time of the newest observation
        due_date: Next due time in epoch seconds
        due_position: Queue position for new items
        interval: Current interval in days
        ease: Ease in permille
        reviews: Number of reviews
        lapses: Number of lapses
        average_secs: Average answer time over real answers
        total_secs: Total answer time
        observations: Review log with memory states, newest first
        memory_state: Latest persisted memory state
        retrievability: Current probability of recall
        fsrs_params: Weights of the governing preset
        preset: Name of the governing preset
        original_deck: Home deck name when it differs from ``deck``
        desired_retention: Retention target
        custom_data: Opaque user data
    """

    item_id: int
    note_id: int
    deck: str
    added: int
    first_review: int | None = None
    latest_review: int | None = None
    due_date: int | None = None
    due_position: int | None = None
    interval: int = 0
    ease: int = 0
    reviews: int = 0
    lapses: int = 0
    average_secs: float = 0.0
    total_secs: float = 0.0
    observations: list[StatsObservationDTO] = Field(default_factory=list)
    memory_state: MemoryStateDTO | None = None
    retrievability: float | None = Field(default=None, ge=0.0, le=1.0)
    fsrs_params: list[float] = Field(default_factory=list)
    preset: str = ""
    original_deck: str | None = None
    desired_retention: float | None = None
    custom_data: str = ""
