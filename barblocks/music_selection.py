"""Choosing which MPRIS player the music block follows."""

from __future__ import annotations

from typing import Sequence

from barblocks.mpris import PlayerMetadata
from barblocks.music import PlaybackStatus


def choose_current_player(statuses: Sequence[PlaybackStatus | None]) -> int | None:
    """Pick the first playing player, else the last one; ``None`` if empty."""
    current = None
    for index, status in enumerate(statuses):
        current = index
        if status is PlaybackStatus.PLAYING:
            break
    return current


def choose_from_playerctld(
    bus_names: Sequence[str], playerctld_names: Sequence[str]
) -> int | None:
    """Index of the first player in playerctld's order that is tracked."""
    positions = {name: index for index, name in reversed(list(enumerate(bus_names)))}
    for name in playerctld_names:
        if name in positions:
            return positions[name]
    return None


def index_after_removal(cur: int | None, pos: int, remaining: int) -> int | None:
    """New current index after the player at ``pos`` was removed.

    ``remaining`` is the number of players left after the removal.
    """
    if cur is None:
        return None
    if remaining == 0:
        return None
    if pos == cur:
        return 0
    if pos < cur:
        return cur - 1
    return cur


def next_player_index(cur: int, count: int) -> int:
    """Index of the player after ``cur``, wrapping around."""
    if count <= 0:
        raise ValueError("no players to switch between")
    return (cur + 1) % count


def should_follow(status: PlaybackStatus | None, metadata: PlayerMetadata) -> bool:
    """Whether a player that changed should become the current one."""
    return status is PlaybackStatus.PLAYING and (
        metadata.title is not None
        or metadata.artist is not None
        or metadata.url is not None
    )