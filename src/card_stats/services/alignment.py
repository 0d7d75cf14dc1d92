"""Memory state alignment for card_stats.

The model only sees the filtered part of a review log. This module puts a
memory state back on every entry of the full log.
"""

from collections.abc import Sequence

from card_stats.logging import get_logger
from card_stats.models.memory import MemoryStateDTO
from card_stats.models.observation import ObservationDTO
from card_stats.models.stats import AlignedObservation

__all__ = [
    "align_memory_states",
    "unaligned",
]

logger = get_logger(__name__)


def align_memory_states(
    observations: Sequence[ObservationDTO],
    filtered: Sequence[ObservationDTO],
    states: Sequence[MemoryStateDTO],
) -> list[AlignedObservation]:
    """Attach a memory state to every observation of the full log.

    Walks the full log once with a cursor into ``filtered``/``states``:
    - entry matches the cursor: its own state, cursor advances
    - nothing matched yet: no state (the model knows nothing that early)
    - cursor past the last filtered entry: the last state
    - excluded entry between two matched ones: the preceding matched state

    Args:
        observations: Full review log, oldest first
        filtered: Subsequence of ``observations`` the model was fit on
        states: Memory states for ``filtered``, one per entry

    Returns:
        One AlignedObservation per entry of ``observations``, same order

    Raises:
        ValueError: If ``filtered`` and ``states`` differ in length
    """
    if len(filtered) != len(states):
        raise ValueError(
            f"Expected one memory state per filtered observation, "
            f"got {len(states)} for {len(filtered)}"
        )

    aligned: list[AlignedObservation] = []
    cursor = 0
    for observation in observations:
        memory_state: MemoryStateDTO | None
        if cursor < len(filtered) and observation.observation_id == filtered[cursor].observation_id:
            memory_state = states[cursor]
            cursor += 1
        elif cursor == 0:
            memory_state = None
        elif cursor >= len(filtered):
            memory_state = states[-1]
        else:
            memory_state = states[cursor - 1]
        aligned.append(AlignedObservation(observation=observation, memory_state=memory_state))

    if cursor < len(filtered):
        logger.warning(
            "filtered_observations_unmatched",
            matched=cursor,
            filtered=len(filtered),
        )
    return aligned


def unaligned(observations: Sequence[ObservationDTO]) -> list[AlignedObservation]:
    """Pair every observation with no memory state."""
    return [AlignedObservation(observation=observation) for observation in observations]
