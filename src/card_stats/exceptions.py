"""Exceptions raised by card_stats.

Hierarchy:
    CardStatsError (base)
    ├── NotFoundError   identity lookup missed in a collaborator
    └── ModelError      the decay model rejected its numeric inputs

Empty logs, empty filtered histories and zero durations are not errors;
they produce absent or zero values.
"""

from typing import Any

__all__ = [
    "CardStatsError",
    "ModelError",
    "NotFoundError",
]


class CardStatsError(Exception):
    """Base exception for card_stats.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        context: Additional context about the error
    """

    error_code: str = "CARD_STATS_ERROR"

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.message,
            "code": self.error_code,
            "context": self.context,
        }


class NotFoundError(CardStatsError):
    """A storage lookup by identity found nothing."""

    error_code = "NOT_FOUND"

    def __init__(self, kind: str, identity: int | str) -> None:
        super().__init__(f"{kind} not found: {identity}", {"kind": kind, "id": identity})
        self.kind = kind
        self.identity = identity


class ModelError(CardStatsError):
    """The forgetting-curve model rejected its parameters or inputs."""

    error_code = "MODEL_ERROR"
