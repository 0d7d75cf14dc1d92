"""FSRS forgetting-curve model for card_stats.

This module contains the FSRS-5 memory model (with the FSRS-6 extensions
when 21 weights are supplied). Memory states are plain
``(stability, difficulty)`` tuples here; the adapter in
``card_stats.services.decay_model`` converts them to DTOs.

Core formulas:
    R(t, S) = (1 + factor * t / S) ** -decay,  factor = 0.9 ** (-1 / decay) - 1
    S0(g) = w[g-1]
    D0(g) = w4 - exp(w5 * (g - 1)) + 1
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from card_stats.exceptions import ModelError

__all__ = [
    "FSRS5_DEFAULT_PARAMS",
    "FSRSModel",
    "MemoryState",
]

MemoryState = tuple[float, float]

FSRS5_DEFAULT_PARAMS: tuple[float, ...] = (
    0.40255, 1.18385, 3.173, 15.69105,  # w0-w3: initial stability per grade
    7.1949, 0.5345,  # w4-w5: initial difficulty
    1.4604, 0.0046,  # w6-w7: difficulty step, mean reversion
    1.54575, 0.1192, 1.01925,  # w8-w10: stability after recall
    1.9395, 0.11, 0.29605, 2.2698,  # w11-w14: stability after lapse
    0.2315, 2.9898,  # w15-w16: hard penalty, easy bonus
    0.51655, 0.6621,  # w17-w18: same-day reviews
)  # fmt: skip

FSRS5_DECAY = 0.5
S_MIN = 0.01
S_MAX = 36500.0
D_MIN = 1.0
D_MAX = 10.0


def _check_finite(name: str, value: float) -> float:
    if not math.isfinite(value):
        raise ModelError(f"FSRS produced a non-finite {name}", {name: value})
    return value


@dataclass(frozen=True)
class FSRSModel:
    """FSRS memory model with a fixed set of weights.

    Example:
        model = FSRSModel.from_params(preset.fsrs_params)
        state = model.step(None, grade=3, delta_t=0)
        state = model.step(state, grade=3, delta_t=4)
    """

    w: tuple[float, ...] = FSRS5_DEFAULT_PARAMS

    def __post_init__(self) -> None:
        if len(self.w) not in (19, 21):
            raise ModelError(
                "FSRS expects 19 or 21 weights",
                {"count": len(self.w)},
            )
        for index, weight in enumerate(self.w):
            if not math.isfinite(weight):
                raise ModelError("FSRS weight is not finite", {"index": index})
        if not self.decay > 0:
            raise ModelError("FSRS decay must be positive", {"decay": self.decay})

    @classmethod
    def from_params(cls, params: Sequence[float]) -> "FSRSModel":
        """Create a model from preset weights; empty weights mean defaults."""
        if not params:
            return cls()
        return cls(tuple(float(p) for p in params))

    @property
    def decay(self) -> float:
        return self.w[20] if len(self.w) == 21 else FSRS5_DECAY

    @property
    def _short_term_exponent(self) -> float:
        return self.w[19] if len(self.w) == 21 else 0.0

    # === Forgetting curve ===

    @staticmethod
    def forgetting_curve(elapsed_days: float, stability: float, decay: float) -> float:
        """Probability of recall after ``elapsed_days``."""
        if not (math.isfinite(decay) and decay > 0):
            raise ModelError("decay must be a positive finite number", {"decay": decay})
        if not stability > 0:
            raise ModelError("stability must be positive", {"stability": stability})
        factor = math.pow(0.9, -1.0 / decay) - 1.0
        retrievability = math.pow(1.0 + factor * elapsed_days / stability, -decay)
        return min(1.0, max(0.0, _check_finite("retrievability", retrievability)))

    # === Initial state ===

    def init_stability(self, grade: int) -> float:
        return max(self.w[grade - 1], S_MIN)

    def init_difficulty(self, grade: int) -> float:
        return self.w[4] - math.exp(self.w[5] * (grade - 1)) + 1.0

    # === Transitions ===

    def next_difficulty(self, difficulty: float, grade: int) -> float:
        """Difficulty after an answer, with linear damping and mean reversion."""
        delta = -self.w[6] * (grade - 3)
        damped = difficulty + delta * (D_MAX - difficulty) / 9.0
        reverted = self.w[7] * self.init_difficulty(4) + (1.0 - self.w[7]) * damped
        return min(D_MAX, max(D_MIN, reverted))

    def stability_after_success(
        self,
        stability: float,
        difficulty: float,
        retrievability: float,
        grade: int,
    ) -> float:
        hard_penalty = self.w[15] if grade == 2 else 1.0
        easy_bonus = self.w[16] if grade == 4 else 1.0
        increase = (
            math.exp(self.w[8])
            * (11.0 - difficulty)
            * math.pow(stability, -self.w[9])
            * (math.exp((1.0 - retrievability) * self.w[10]) - 1.0)
            * hard_penalty
            * easy_bonus
        )
        return stability * (increase + 1.0)

    def stability_after_failure(
        self,
        stability: float,
        difficulty: float,
        retrievability: float,
    ) -> float:
        new_stability = (
            self.w[11]
            * math.pow(difficulty, -self.w[12])
            * (math.pow(stability + 1.0, self.w[13]) - 1.0)
            * math.exp((1.0 - retrievability) * self.w[14])
        )
        # A lapse never leaves the item more stable than a same-day relearn would
        ceiling = stability / math.exp(self.w[17] * self.w[18])
        return min(new_stability, ceiling)

    def stability_short_term(self, stability: float, grade: int) -> float:
        """Stability after a second review on the same day."""
        increase = math.exp(self.w[17] * (grade - 3 + self.w[18])) * math.pow(
            stability, -self._short_term_exponent
        )
        if grade >= 3:
            increase = max(increase, 1.0)
        return stability * increase

    def step(self, state: MemoryState | None, grade: int, delta_t: int) -> MemoryState:
        """Apply one answer to a memory state.

        Args:
            state: State before the answer, None for a first review
            grade: Answer button 1-4
            delta_t: Whole days since the previous answer

        Returns:
            State after the answer

        Raises:
            ModelError: If the grade is out of range or the result is not finite
        """
        if grade not in (1, 2, 3, 4):
            raise ModelError("FSRS grade must be between 1 and 4", {"grade": grade})

        if state is None:
            stability = self.init_stability(grade)
            difficulty = min(D_MAX, max(D_MIN, self.init_difficulty(grade)))
        else:
            last_stability, last_difficulty = state
            if delta_t <= 0:
                stability = self.stability_short_term(last_stability, grade)
            else:
                retrievability = self.forgetting_curve(delta_t, last_stability, self.decay)
                if grade == 1:
                    stability = self.stability_after_failure(
                        last_stability, last_difficulty, retrievability
                    )
                else:
                    stability = self.stability_after_success(
                        last_stability, last_difficulty, retrievability, grade
                    )
            difficulty = self.next_difficulty(last_difficulty, grade)

        stability = _check_finite("stability", stability)
        difficulty = _check_finite("difficulty", difficulty)
        return min(S_MAX, max(S_MIN, stability)), difficulty

    def state_from_sm2(self, ease_factor: float, interval: float, retention: float) -> MemoryState:
        """Approximate a memory state from an SM-2 ease and interval.

        Stability is chosen so that recall after ``interval`` days equals
        ``retention``; difficulty is chosen so that the recall stability
        increase equals the ease.
        """
        if not 0.0 < retention < 1.0:
            raise ModelError("retention must be between 0 and 1", {"retention": retention})
        decay = self.decay
        factor = math.pow(0.9, -1.0 / decay) - 1.0
        stability = max(interval, S_MIN) * factor / (math.pow(retention, -1.0 / decay) - 1.0)
        scale = (
            math.exp(self.w[8])
            * math.pow(stability, -self.w[9])
            * (math.exp((1.0 - retention) * self.w[10]) - 1.0)
        )
        if scale == 0:
            raise ModelError("FSRS weights give no stability increase", {"w8": self.w[8]})
        difficulty = 11.0 - (ease_factor - 1.0) / scale
        stability = _check_finite("stability", stability)
        difficulty = _check_finite("difficulty", difficulty)
        return min(S_MAX, max(S_MIN, stability)), min(D_MAX, max(D_MIN, difficulty))
