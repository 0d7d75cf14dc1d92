"""Clock interface for card_stats.

This module defines the Protocol for the clock collaborator and the
snapshot it hands out. One snapshot is taken per report so every derived
value sees the same "now".
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

__all__ = [
    "ClockInterface",
    "TimingSnapshot",
]


@dataclass(frozen=True)
class TimingSnapshot:
    """Point-in-time view of the clock.

    Attributes:
        now: Current time in epoch seconds
        days_elapsed: Whole days since the collection's reference epoch
        next_day_at: Epoch seconds of the next day rollover
    """

    now: int
    days_elapsed: int
    next_day_at: int

    def elapsed_secs_since(self, timestamp: int) -> int:
        """Seconds from ``timestamp`` to now, never negative."""
        return max(0, self.now - timestamp)


@runtime_checkable
class ClockInterface(Protocol):
    """Contract for the clock/timing collaborator."""

    def timing_today(self) -> TimingSnapshot:
        """Take a timing snapshot.

        Returns:
            TimingSnapshot for the current moment
        """
        ...
