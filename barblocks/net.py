"""Network speed tracking for the net block."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import MutableSequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class NetStats:
    """Byte counters of a network interface."""

    rx_bytes: int = 0
    tx_bytes: int = 0

    def __sub__(self, other: NetStats) -> NetStats:
        return NetStats(self.rx_bytes - other.rx_bytes, self.tx_bytes - other.tx_bytes)


def push_to_hist(hist: MutableSequence[T], elem: T) -> None:
    """Drop the oldest entry of ``hist`` and append ``elem`` at the end."""
    del hist[0]
    hist.append(elem)


def _rate(amount: float, elapsed: float) -> float:
    if elapsed:
        return amount / elapsed
    if amount == 0:
        return math.nan
    return math.copysign(math.inf, amount)


class SpeedMeter:
    """Turns successive byte counters into speeds and keeps a short history."""

    def __init__(self, start: float | None = None, history: int = 8) -> None:
        self._stats: NetStats | None = None
        self._timer = time.monotonic() if start is None else start
        self.rx_hist: list[float] = [0.0] * history
        self.tx_hist: list[float] = [0.0] * history

    def update(
        self, stats: NetStats | None, now: float | None = None
    ) -> tuple[float, float]:
        """Record new counters; return ``(speed_down, speed_up)`` in bytes/s."""
        if now is None:
            now = time.monotonic()
        speed_down = speed_up = 0.0
        if self._stats is None:
            self._stats = stats
        elif stats is None:
            self._stats = None
        else:
            diff = stats - self._stats
            elapsed = now - self._timer
            self._timer = now
            speed_down = _rate(diff.rx_bytes, elapsed)
            speed_up = _rate(diff.tx_bytes, elapsed)
            self._stats = stats
        push_to_hist(self.rx_hist, speed_down)
        push_to_hist(self.tx_hist, speed_up)
        return speed_down, speed_up