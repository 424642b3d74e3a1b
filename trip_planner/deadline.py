"""Per-run deadline shared by the generator calls of one pipeline run."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Optional


@dataclass(frozen=True)
class Deadline:
    """A point in monotonic time after which no new call may start.

    Attributes:
        expires_at: Monotonic timestamp, or None for no deadline
        clock: Time source (swappable in tests)
    """

    expires_at: Optional[float] = None
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)

    @classmethod
    def after(
        cls, seconds: Optional[float], clock: Callable[[], float] = time.monotonic
    ) -> Deadline:
        """Create a deadline ``seconds`` from now (None means unbounded)."""
        if seconds is None:
            return cls(None, clock)
        return cls(clock() + seconds, clock)

    def remaining(self) -> Optional[float]:
        """Seconds left, clamped at zero; None if unbounded."""
        if self.expires_at is None:
            return None
        return max(0.0, self.expires_at - self.clock())

    @property
    def expired(self) -> bool:
        left = self.remaining()
        return left is not None and left <= 0.0

    def call_timeout(self, per_call: Optional[float]) -> Optional[float]:
        """Timeout for the next call: the tighter of ``per_call`` and the
        time remaining."""
        left = self.remaining()
        if left is None:
            return per_call
        if per_call is None:
            return left
        return min(per_call, left)
