"""Scheduling facts for card_stats.

Pure helpers deriving due date, queue position, answer time aggregates and
current retrievability from an item's persisted state.
"""

from collections.abc import Sequence

from card_stats.interfaces.decay_model import DecayModelInterface
from card_stats.interfaces.timing import TimingSnapshot
from card_stats.models.item import ItemDTO, ItemStage
from card_stats.models.observation import SECONDS_PER_DAY, ObservationDTO

__all__ = [
    "DEFAULT_EPOCH_TIMESTAMP_THRESHOLD",
    "average_and_total_secs",
    "current_retrievability",
    "due_date",
    "due_position",
    "elapsed_since_last_review",
    "is_unix_epoch_timestamp",
]

DEFAULT_EPOCH_TIMESTAMP_THRESHOLD = 1_000_000_000


def is_unix_epoch_timestamp(
    due: int,
    threshold: int = DEFAULT_EPOCH_TIMESTAMP_THRESHOLD,
) -> bool:
    """Tell an epoch-seconds due value from a day number.

    Day numbers count days since the collection was created and stay far
    below ``threshold``; anything above it is epoch seconds.
    """
    return due > threshold


def due_date(
    item: ItemDTO,
    timing: TimingSnapshot,
    threshold: int = DEFAULT_EPOCH_TIMESTAMP_THRESHOLD,
) -> int | None:
    """Next due time of an item in epoch seconds.

    Day-number due values are converted relative to now, so the result is
    the current time shifted by whole days.

    Returns:
        Epoch seconds, or None for new items
    """
    if item.stage == ItemStage.NEW:
        return None
    due = item.original_due or item.due
    if is_unix_epoch_timestamp(due, threshold):
        return due
    days_remaining = due - timing.days_elapsed
    return timing.now + days_remaining * SECONDS_PER_DAY


def due_position(item: ItemDTO) -> int | None:
    """Queue position: the saved original position, else ``due`` of a new item."""
    if item.original_position is not None:
        return item.original_position
    if item.stage == ItemStage.NEW:
        return item.due
    return None


def average_and_total_secs(observations: Sequence[ObservationDTO]) -> tuple[float, float]:
    """Average and total answer time in seconds.

    The average is taken over real answers only (grade > 0). Both values
    are 0.0 when there is no real answer or no recorded time.
    """
    answer_count = sum(1 for observation in observations if observation.is_answer)
    total_secs = sum(observation.taken_millis for observation in observations) / 1000.0
    if answer_count == 0 or total_secs == 0.0:
        return 0.0, 0.0
    return total_secs / answer_count, total_secs


def elapsed_since_last_review(
    timing: TimingSnapshot,
    cached_last_review: int | None,
    logged_last_review: int | None,
) -> int:
    """Seconds since the later of the cached and the logged last review, 0 if neither."""
    known = [ts for ts in (cached_last_review, logged_last_review) if ts is not None]
    if not known:
        return 0
    return timing.elapsed_secs_since(max(known))


def current_retrievability(
    item: ItemDTO,
    elapsed_seconds: int,
    model: DecayModelInterface,
    default_decay: float,
) -> float | None:
    """Probability of recall right now, None if the item has no memory state.

    Raises:
        ModelError: If the item's decay constant is unusable
    """
    if item.memory_state is None:
        return None
    decay = item.decay if item.decay is not None else default_decay
    return model.retrievability(item.memory_state, elapsed_seconds, decay)
