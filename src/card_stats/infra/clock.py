"""Clock implementations for card_stats.

Day boundaries are computed in UTC at the configured rollover hour.
"""

import time
from collections.abc import Callable

from card_stats.config import TimingSettings
from card_stats.interfaces.timing import TimingSnapshot
from card_stats.models.observation import SECONDS_PER_DAY

__all__ = [
    "FixedClock",
    "SystemClock",
    "snapshot_at",
]


class SystemClock:
    """Wall-clock implementation of ClockInterface.

    Example:
        clock = SystemClock(TimingSettings(collection_created=1_600_000_000))
        timing = clock.timing_today()
    """

    config_class = TimingSettings

    def __init__(
        self,
        settings: TimingSettings | None = None,
        now: Callable[[], float] = time.time,
    ) -> None:
        """Initialize clock.

        Args:
            settings: Collection creation time and rollover hour
            now: Source of the current epoch time
        """
        self._settings = settings or TimingSettings()
        self._now = now

    def timing_today(self) -> TimingSnapshot:
        return snapshot_at(int(self._now()), self._settings)


class FixedClock:
    """Clock pinned to one moment, for replays and tests."""

    def __init__(self, now: int, settings: TimingSettings | None = None) -> None:
        self._snapshot = snapshot_at(now, settings or TimingSettings())

    def timing_today(self) -> TimingSnapshot:
        return self._snapshot


def snapshot_at(now: int, settings: TimingSettings) -> TimingSnapshot:
    """Build a timing snapshot for ``now``.

    Day 0 starts at the last rollover at or before collection creation.
    """
    created = settings.collection_created
    first_rollover = (created // SECONDS_PER_DAY) * SECONDS_PER_DAY + settings.rollover_hour * 3600
    if first_rollover > created:
        first_rollover -= SECONDS_PER_DAY
    days_elapsed = max(0, (now - first_rollover) // SECONDS_PER_DAY)
    return TimingSnapshot(
        now=now,
        days_elapsed=days_elapsed,
        next_day_at=first_rollover + (days_elapsed + 1) * SECONDS_PER_DAY,
    )
