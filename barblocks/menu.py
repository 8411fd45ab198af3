"""A click-driven menu that runs shell commands."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from enum import Enum, auto
from typing import Sequence


@dataclass(frozen=True)
class MenuItem:
    """One entry of the menu."""

    display: str
    cmd: str
    confirm_msg: str | None = None


class _Stage(Enum):
    INACTIVE = auto()
    BROWSING = auto()
    CONFIRMING = auto()


class Menu:
    """State of the menu block, advanced by click actions.

    Actions are ``"_left"``, ``"_right"``, ``"_up"`` and ``"_down"``.
    """

    def __init__(self, text: str, items: Sequence[MenuItem]) -> None:
        if not items:
            raise ValueError("menu needs at least one item")
        self.text = text
        self.items = list(items)
        self._stage = _Stage.INACTIVE
        self._index = 0

    @property
    def active(self) -> bool:
        """Whether the menu is open or waiting for confirmation."""
        return self._stage is not _Stage.INACTIVE

    @property
    def display(self) -> str:
        """The text the block should currently show."""
        if self._stage is _Stage.BROWSING:
            return self.items[self._index].display
        if self._stage is _Stage.CONFIRMING:
            return self.items[self._index].confirm_msg or ""
        return self.text

    def _reset(self) -> None:
        self._stage = _Stage.INACTIVE
        self._index = 0

    def handle(self, action: str) -> MenuItem | None:
        """Apply a click action; return the item to run, if one was chosen."""
        if self._stage is _Stage.INACTIVE:
            if action == "_left":
                self._stage = _Stage.BROWSING
                self._index = 0
            return None

        if self._stage is _Stage.CONFIRMING:
            item = self.items[self._index]
            self._reset()
            return item if action == "_left" else None

        if action == "_up":
            self._index = (self._index + 1) % len(self.items)
        elif action == "_down":
            self._index = (self._index - 1) % len(self.items)
        elif action == "_right":
            self._reset()
        elif action == "_left":
            item = self.items[self._index]
            if item.confirm_msg is not None:
                self._stage = _Stage.CONFIRMING
                return None
            self._reset()
            return item
        return None


def run_item(item: MenuItem) -> subprocess.Popen:
    """Start the item's command in a shell without waiting for it."""
    try:
        return subprocess.Popen(["sh", "-c", item.cmd], stdin=subprocess.DEVNULL)
    except OSError as exc:
        raise RuntimeError(f"Failed to run '{item.cmd}'") from exc