"""Widget states shared by all blocks."""

from __future__ import annotations

from enum import Enum


class State(Enum):
    """Visual state of a block's widget."""

    IDLE = "idle"
    INFO = "info"
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"


def parse_state(name: str) -> State:
    """Return the state called ``name``, ignoring case (e.g. ``"Warning"``)."""
    try:
        return State(name.strip().lower())
    except ValueError:
        raise ValueError(f"unknown state: {name!r}") from None