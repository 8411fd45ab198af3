"""System load average block."""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path

from barblocks.state import State


@dataclass
class LoadConfig:
    """Settings of the load block."""

    interval: float = 3.0
    info: float = 0.3
    warning: float = 0.6
    critical: float = 0.9


def count_logical_cores(cpuinfo: str) -> int:
    """Count ``processor`` entries in the contents of ``/proc/cpuinfo``."""
    return sum(1 for line in cpuinfo.splitlines() if line.startswith("processor"))


def _parse_float(token: str) -> float:
    if not token or token != token.strip() or "_" in token:
        raise ValueError("bad /proc/loadavg file")
    try:
        return float(token)
    except ValueError:
        raise ValueError("bad /proc/loadavg file") from None


def parse_loadavg(text: str) -> tuple[float, float, float]:
    """Return the 1, 5 and 15 minute averages from ``/proc/loadavg``."""
    fields = text.split(" ")
    if len(fields) < 3:
        raise ValueError("bad /proc/loadavg file")
    m1, m5, m15 = (_parse_float(field) for field in fields[:3])
    return m1, m5, m15


def load_state(m1: float, logical_cores: int, config: LoadConfig) -> State:
    """Return the state for a one-minute load spread over the cores."""
    if logical_cores:
        ratio = m1 / logical_cores
    else:
        ratio = math.copysign(math.inf, m1) if m1 else math.nan
    if ratio > config.critical:
        return State.CRITICAL
    if ratio > config.warning:
        return State.WARNING
    if ratio > config.info:
        return State.INFO
    return State.IDLE


def read_load(
    cpuinfo_path: str | Path = "/proc/cpuinfo",
    loadavg_path: str | Path = "/proc/loadavg",
) -> tuple[int, tuple[float, float, float]]:
    """Read the number of logical cores and the three load averages."""
    try:
        cpuinfo = Path(cpuinfo_path).read_text()
    except OSError as exc:
        raise RuntimeError("Your system doesn't support /proc/cpuinfo") from exc
    try:
        loadavg = Path(loadavg_path).read_text()
    except OSError as exc:
        raise RuntimeError(
            "Your system does not support reading the load average from /proc/loadavg"
        ) from exc
    return count_logical_cores(cpuinfo), parse_loadavg(loadavg)