"""Memory state models for card_stats.

These models carry the forgetting-curve model's view of an item: the
memory state after an observation and the filtered history the model
was fit on.
"""

from pydantic import BaseModel, Field

from card_stats.models.observation import ObservationDTO

__all__ = [
    "FilteredFitResult",
    "MemoryStateDTO",
]


class MemoryStateDTO(BaseModel, frozen=True):
    """Model belief about recall strength after an observation.

    Attributes:
        stability: Days until retrievability falls to 90%
        difficulty: Item difficulty on the 1-10 scale
    """

    stability: float = Field(gt=0.0, description="Days")
    difficulty: float = Field(ge=1.0, le=10.0)


class FilteredFitResult(BaseModel, frozen=True):
    """History actually given to the model for one item.

    Attributes:
        observations: Filtered subsequence of the full log, in order
        starting_state: State before the first filtered observation, if known
        dropped_front: Number of full-log entries before the first retained one
    """

    observations: list[ObservationDTO] = Field(default_factory=list)
    starting_state: MemoryStateDTO | None = None
    dropped_front: int = Field(default=0, ge=0)
