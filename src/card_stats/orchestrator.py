"""CardStats orchestrator for per-item statistics.

This module provides the main entry point for the card_stats package,
wiring storage, clock, history filter and the stats service together.
"""

from typing import Any

from card_stats.config import CardStatsConfig
from card_stats.infra.clock import SystemClock
from card_stats.interfaces.history_filter import HistoryFilterInterface
from card_stats.interfaces.storage import StorageInterface
from card_stats.interfaces.timing import ClockInterface
from card_stats.logging import get_logger
from card_stats.models.stats import CardStatsDTO, ReviewLogsDTO
from card_stats.services.card_stats import CardStatsService

__all__ = ["CardStats"]

logger = get_logger(__name__)


class CardStats:
    """Main entry point for card statistics.

    Accepts a storage implementation class. Config is loaded from .env
    automatically. For storage classes with ``config_class = None`` pass a
    ``storage_custom_config`` dict.

    Example:
        async with CardStats(
            storage_class=InMemoryStorageRepository,
            storage_custom_config={"items": [...], "observations": [...]},
        ) as cs:
            stats = await cs.card_stats(item_id)
    """

    def __init__(
        self,
        storage_class: type[StorageInterface],
        clock: ClockInterface | None = None,
        history_filter: HistoryFilterInterface | None = None,
        *,
        storage_custom_config: dict[str, Any] | None = None,
        config: CardStatsConfig | None = None,
    ) -> None:
        """Initialize CardStats with implementation classes.

        Args:
            storage_class: Storage implementation class
            clock: Clock implementation (default: SystemClock from config)
            history_filter: History filter (default: CutoffHistoryFilter)
            storage_custom_config: Custom config dict if storage_class.config_class is None
            config: Settings (default: loaded from .env)
        """
        self._config = config or CardStatsConfig()

        self._storage_class = storage_class
        self._storage_custom_config = storage_custom_config
        self._clock = clock or SystemClock(self._config.timing)
        self._history_filter = history_filter

        self._storage: StorageInterface | None = None
        self._service: CardStatsService | None = None

        self._connected = False

    async def _instantiate_class(
        self,
        cls: type,
        custom_config: dict[str, Any] | None,
    ) -> Any:
        """Instantiate an implementation class.

        If cls.config_class is set, instantiate config (loads from .env).
        If cls.config_class is None, use custom_config dict.
        """
        config_class = getattr(cls, "config_class", None)

        if config_class is None:
            if custom_config is None:
                raise ValueError(
                    f"{cls.__name__} has config_class=None but no custom_config provided"
                )
            return await cls.from_dict(custom_config)
        else:
            config = config_class()
            return await cls.from_config(config)

    async def _connect(self) -> None:
        """Initialize storage and wire the service."""
        if self._connected:
            return

        self._storage = await self._instantiate_class(
            self._storage_class, self._storage_custom_config
        )
        self._service = CardStatsService(
            self._storage,
            self._clock,
            history_filter=self._history_filter,
            settings=self._config.scheduling,
        )

        self._connected = True
        logger.info("card_stats_connected", storage=self._storage_class.__name__)

    async def _disconnect(self) -> None:
        """Close the storage connection."""
        if self._storage and hasattr(self._storage, "close"):
            await self._storage.close()

        self._connected = False
        logger.info("card_stats_disconnected")

    async def __aenter__(self) -> "CardStats":
        """Async context manager entry - connects automatically."""
        await self._connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Async context manager exit - disconnects automatically."""
        await self._disconnect()

    def _ensure_connected(self) -> CardStatsService:
        if not self._connected or self._service is None:
            raise RuntimeError("CardStats not connected. Use 'async with CardStats(...) as cs:'")
        return self._service

    async def card_stats(self, item_id: int) -> CardStatsDTO:
        """Build the stats report for an item.

        Raises:
            NotFoundError: If the item, its decks or its preset are missing
            ModelError: If the decay model rejects its inputs
        """
        return await self._ensure_connected().card_stats(item_id)

    async def review_logs(self, item_id: int) -> ReviewLogsDTO:
        """Get an item's review log, newest first."""
        return await self._ensure_connected().review_logs(item_id)
