"""Observation models for card_stats.

An observation is one entry of an item's review log. Observations are
identified by their creation time in epoch milliseconds, so identity order
is chronological order.
"""

from enum import StrEnum

from pydantic import BaseModel, Field

__all__ = [
    "SECONDS_PER_DAY",
    "ObservationDTO",
    "ReviewKind",
]

SECONDS_PER_DAY = 86_400


class ReviewKind(StrEnum):
    """How an observation came to be recorded."""

    LEARNING = "learning"
    REVIEW = "review"
    RELEARNING = "relearning"
    FILTERED = "filtered"
    """Reviewed early in a filtered deck"""

    MANUAL = "manual"
    """Manual change such as a reset or a set-due-date"""

    RESCHEDULED = "rescheduled"


class ObservationDTO(BaseModel, frozen=True):
    """One recorded review event for an item.

    Intervals use the review log convention: positive values are days,
    negative values are seconds.

    Attributes:
        observation_id: Creation time in epoch milliseconds (unique)
        item_id: Item the observation belongs to
        grade: Answer button, 0 for manual/pass-through entries, 1-4 otherwise
        interval: Interval produced by this answer
        last_interval: Interval in effect before this answer
        ease_factor: Ease in permille (2500 = 250%)
        taken_millis: Time spent answering
        kind: How the observation was recorded
        schema_version: Schema version for forward compatibility
    """

    observation_id: int = Field(ge=0, description="Epoch milliseconds")
    item_id: int = Field(default=0)
    grade: int = Field(ge=0, le=4)
    interval: int = Field(default=0)
    last_interval: int = Field(default=0)
    ease_factor: int = Field(default=0, ge=0, description="Permille")
    taken_millis: int = Field(default=0, ge=0)
    kind: ReviewKind = Field(default=ReviewKind.REVIEW)
    schema_version: int = Field(default=1)

    @property
    def timestamp_secs(self) -> int:
        return self.observation_id // 1000

    @property
    def taken_secs(self) -> float:
        return self.taken_millis / 1000.0

    @property
    def interval_secs(self) -> int:
        if self.interval < 0:
            return -self.interval
        return self.interval * SECONDS_PER_DAY

    @property
    def is_answer(self) -> bool:
        """True when the observation records a real answer (grade 1-4)."""
        return self.grade > 0
