"""Exponential backoff used between request retries."""

from __future__ import annotations

import random
from collections import abc


class ExponentialBackoff:
    """
    Iterator yielding exponentially growing delays, randomized by a variance factor.

    Usage:
        backoff = ExponentialBackoff(maximum=30)
        for attempt, delay in enumerate(backoff, start=1):
            if await try_request():
                break
            await asyncio.sleep(delay)
    """

    def __init__(
        self,
        *,
        base: float = 2,
        variance: float | tuple[float, float] = 0.1,
        shift: float = 0,
        maximum: float = 300,
    ):
        """
        Args:
            base: Exponential base (must be > 1)
            variance: Either a symmetric variance (1 +- variance),
                or a (min_multiplier, max_multiplier) tuple
            shift: Constant value added to each delay
            maximum: Upper bound for a single delay

        Raises:
            ValueError: If base <= 1
        """
        if base <= 1:
            raise ValueError("Base has to be greater than 1")
        self.steps: int = 0
        self.base: float = float(base)
        self.shift: float = float(shift)
        self.maximum: float = float(maximum)
        self.variance_min: float
        self.variance_max: float
        if isinstance(variance, tuple):
            self.variance_min, self.variance_max = variance
        else:
            self.variance_min = 1 - variance
            self.variance_max = 1 + variance

    def __iter__(self) -> abc.Iterator[float]:
        return self

    def __next__(self) -> float:
        value: float = (
            pow(self.base, self.steps) * random.uniform(self.variance_min, self.variance_max)
            + self.shift
        )
        if value > self.maximum:
            return self.maximum
        # stop growing the exponent once the maximum is reached
        self.steps += 1
        return value

    def reset(self) -> None:
        self.steps = 0
