"""Keyboard layout block: layout parsing, setxkbmap querying and mappings."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from enum import Enum
from typing import Mapping


class KeyboardLayoutDriver(Enum):
    """Where the current layout is read from."""

    SETXKBMAP = "setxkbmap"
    LOCALEBUS = "localebus"
    KBDDBUS = "kbddbus"
    SWAY = "sway"


@dataclass(frozen=True)
class LayoutInfo:
    """A keyboard layout and its optional variant."""

    layout: str
    variant: str | None = None


def parse_layout_variant(text: str) -> LayoutInfo:
    """Parse a ``"layout (variant)"`` string."""
    layout, sep, rest = text.partition("(")
    if not sep:
        return LayoutInfo(text, None)
    return LayoutInfo(layout.rstrip(), rest.rstrip(")"))


def _last_word(line: str, what: str) -> str:
    words = line.split()
    if not words:
        raise ValueError(f"Could not read the {what} entry from setxkbmap.")
    return words[-1]


def parse_setxkbmap_output(output: str) -> LayoutInfo:
    """Extract layout and variant from the output of ``setxkbmap -query``."""
    lines = output.splitlines()
    layout_line = next((line for line in lines if line.startswith("layout")), None)
    if layout_line is None:
        raise ValueError("Could not find the layout entry from setxkbmap")
    layout = _last_word(layout_line, "layout")
    variant_line = next((line for line in lines if line.startswith("variant")), None)
    variant = _last_word(variant_line, "variant") if variant_line is not None else None
    return LayoutInfo(layout, variant)


def query_setxkbmap() -> LayoutInfo:
    """Run ``setxkbmap -query`` and parse its output."""
    try:
        result = subprocess.run(
            ["setxkbmap", "-query"], capture_output=True, check=False
        )
    except OSError as exc:
        raise RuntimeError("Failed to execute setxkbmap") from exc
    try:
        output = result.stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ValueError("setxkbmap produced a non-UTF8 output") from exc
    return parse_setxkbmap_output(output)


def display_values(
    info: LayoutInfo, mappings: Mapping[str, str] | None
) -> dict[str, str]:
    """Return the ``layout`` and ``variant`` placeholders, applying mappings."""
    variant = info.variant if info.variant is not None else "N/A"
    layout = info.layout
    if mappings:
        layout = mappings.get(f"{layout} ({variant})", layout)
    return {"layout": layout, "variant": variant}