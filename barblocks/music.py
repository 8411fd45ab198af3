"""Music block helpers: player names, filtering and the displayed text."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Sequence

_NAME_PREFIX = "org.mpris.MediaPlayer2."


class PlaybackStatus(Enum):
    """Playback status as reported over MPRIS."""

    PLAYING = "Playing"
    PAUSED = "Paused"
    STOPPED = "Stopped"


@dataclass
class MusicConfig:
    """Settings of the music block.

    ``player`` may be given as a single name or a list of names; it is
    always stored as a list.
    """

    format: str = " $icon {$combo.str(max_w:25,rot_interval:0.5) $play |}"
    format_alt: str | None = None
    player: list[str] | str = field(default_factory=list)
    interface_name_exclude: list[str] = field(
        default_factory=lambda: ["playerctld"]
    )
    separator: str = " - "
    seek_step_secs: float = 1.0
    volume_step: float = 5.0

    def __post_init__(self) -> None:
        if isinstance(self.player, str):
            self.player = [self.player]
        else:
            self.player = list(self.player)
        if self.seek_step_secs < 0:
            raise ValueError("seek_step_secs must not be negative")


def parse_playback_status(text: str) -> PlaybackStatus | None:
    """Return the status named by ``text``, or ``None`` if it is unknown."""
    try:
        return PlaybackStatus(text)
    except ValueError:
        return None


def extract_player_name(full_name: str) -> str | None:
    """Return the part of an MPRIS bus name after the common prefix."""
    if full_name.startswith(_NAME_PREFIX):
        return full_name[len(_NAME_PREFIX):]
    return None


def compile_excludes(patterns: Iterable[str]) -> list[re.Pattern[str]]:
    """Compile the exclusion patterns, failing on the first invalid one."""
    try:
        return [re.compile(pattern) for pattern in patterns]
    except re.error as exc:
        raise ValueError("Invalid regex") from exc


def player_matches(
    full_name: str,
    preferred_players: Sequence[str],
    exclude_regex: Sequence[re.Pattern[str]],
) -> bool:
    """Whether a bus name is an MPRIS player the block should track."""
    name = extract_player_name(full_name)
    if name is None:
        return False
    if any(regex.search(name) for regex in exclude_regex):
        return False
    return not preferred_players or any(name.startswith(p) for p in preferred_players)


def combo_values(
    title: str | None,
    artist: str | None,
    url: str | None,
    separator: str,
) -> dict[str, str]:
    """Return the ``combo``, ``title``, ``artist`` and ``url`` placeholders."""
    values: dict[str, str] = {}
    if url is not None:
        values["url"] = url
    if title is not None and artist is None:
        values["combo"] = title
        values["title"] = title
    elif title is None and artist is not None:
        values["combo"] = artist
        values["artist"] = artist
    elif title is not None and artist is not None:
        values["combo"] = f"{title}{separator}{artist}"
        values["title"] = title
        values["artist"] = artist
    elif url is not None:
        values["combo"] = url
    return values