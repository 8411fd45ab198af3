"""Track metadata as published by MPRIS media players."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

TITLE_KEY = "xesam:title"
ARTIST_KEY = "xesam:artist"
URL_KEY = "xesam:url"


@dataclass(frozen=True)
class PlayerMetadata:
    """The parts of a player's ``Metadata`` property the music block shows."""

    title: str | None = None
    artist: str | None = None
    url: str | None = None


def _non_empty_str(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def _first_artist(value: Any) -> str | None:
    if isinstance(value, (list, tuple)) and value:
        return _non_empty_str(value[0])
    return None


def parse_metadata(mapping: Mapping[str, Any]) -> PlayerMetadata:
    """Build metadata from a ``Metadata`` dictionary.

    Empty or non-string values count as missing; only the first artist is kept.
    """
    return PlayerMetadata(
        title=_non_empty_str(mapping.get(TITLE_KEY)),
        artist=_first_artist(mapping.get(ARTIST_KEY)),
        url=_non_empty_str(mapping.get(URL_KEY)),
    )