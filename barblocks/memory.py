"""Memory and swap usage block."""

from __future__ import annotations

import dataclasses
import math
import re
from dataclasses import dataclass
from pathlib import Path

from barblocks.state import State

_U64_MAX = 2**64 - 1
_UNSIGNED_RE = re.compile(r"\+?[0-9]+")
_SIZE_RE = re.compile(r"size\s+\d+\s+(\d+)")
_C_MIN_RE = re.compile(r"c_min\s+\d+\s+(\d+)")

_MEMINFO_FIELDS = {
    "MemTotal:": "mem_total",
    "MemFree:": "mem_free",
    "MemAvailable:": "mem_available",
    "Buffers:": "buffers",
    "Cached:": "pagecache",
    "SReclaimable:": "s_reclaimable",
    "Shmem:": "shmem",
    "SwapTotal:": "swap_total",
    "SwapFree:": "swap_free",
    "SwapCached:": "swap_cached",
}


@dataclass(frozen=True)
class MemState:
    """Raw counters from ``/proc/meminfo`` (kB) and ZFS arcstats (bytes)."""

    mem_total: int = 0
    mem_free: int = 0
    mem_available: int = 0
    buffers: int = 0
    pagecache: int = 0
    s_reclaimable: int = 0
    shmem: int = 0
    swap_total: int = 0
    swap_free: int = 0
    swap_cached: int = 0
    zfs_arc_cache: int = 0
    zfs_arc_min: int = 0


@dataclass
class MemoryConfig:
    """Settings of the memory block."""

    interval: float = 5.0
    warning_mem: float = 80.0
    warning_swap: float = 80.0
    critical_mem: float = 95.0
    critical_swap: float = 95.0


def _parse_u64(token: str, message: str) -> int:
    if not _UNSIGNED_RE.fullmatch(token):
        raise ValueError(message)
    value = int(token)
    if value > _U64_MAX:
        raise ValueError(message)
    return value


def parse_meminfo(text: str) -> MemState:
    """Parse the contents of ``/proc/meminfo``."""
    found: dict[str, int] = {}
    for line in text.splitlines():
        words = line.split()
        if not words:
            continue
        if len(words) < 2:
            raise ValueError("failed to parse /proc/meminfo")
        value = _parse_u64(words[1], "failed to parse /proc/meminfo")
        attr = _MEMINFO_FIELDS.get(words[0])
        if attr is not None:
            found[attr] = value
    return MemState(**found)


def parse_arcstats(text: str) -> tuple[int, int]:
    """Return the ZFS ARC size and minimum size from arcstats contents."""
    size = _SIZE_RE.search(text)
    if size is None:
        raise ValueError("failed to find zfs_arc_cache size")
    cache = _parse_u64(size.group(1), "failed to parse zfs_arc_cache size")
    c_min = _C_MIN_RE.search(text)
    if c_min is None:
        raise ValueError("failed to find zfs_arc_min size")
    minimum = _parse_u64(c_min.group(1), "failed to parse zfs_arc_min size")
    return cache, minimum


def read_memstate(
    meminfo_path: str | Path = "/proc/meminfo",
    arcstats_path: str | Path = "/proc/spl/kstat/zfs/arcstats",
) -> MemState:
    """Read memory counters, including ZFS ARC figures when available."""
    try:
        meminfo = Path(meminfo_path).read_text()
    except FileNotFoundError as exc:
        raise RuntimeError("/proc/meminfo does not exist") from exc
    except OSError as exc:
        raise RuntimeError("failed to read /proc/meminfo") from exc
    state = parse_meminfo(meminfo)
    try:
        arcstats = Path(arcstats_path).read_text()
    except OSError:
        return state
    cache, minimum = parse_arcstats(arcstats)
    return dataclasses.replace(state, zfs_arc_cache=cache, zfs_arc_min=minimum)


def _percent(part: float, whole: float) -> float:
    if whole:
        return part / whole * 100.0
    if part == 0 or math.isnan(part):
        return math.nan
    return math.copysign(math.inf, part)


def compute_values(mem_state: MemState) -> dict[str, float]:
    """Compute the block's numeric placeholders (bytes and percents)."""
    mem_total = mem_state.mem_total * 1024.0
    mem_free = mem_state.mem_free * 1024.0
    mem_total_used = mem_total - mem_free

    if mem_state.mem_available != 0:
        avail_kb = min(mem_state.mem_available, mem_state.mem_total)
    else:
        avail_kb = mem_state.mem_free
    zfs_shrinkable = float(max(mem_state.zfs_arc_cache - mem_state.zfs_arc_min, 0))
    mem_avail = avail_kb * 1024.0 + zfs_shrinkable

    pagecache = mem_state.pagecache * 1024.0
    reclaimable = mem_state.s_reclaimable * 1024.0
    shmem = mem_state.shmem * 1024.0
    cached = pagecache + reclaimable - shmem + zfs_shrinkable
    buffers = mem_state.buffers * 1024.0

    used_diff = mem_free + buffers + pagecache + reclaimable
    if mem_total >= used_diff:
        mem_used = mem_total - used_diff
    else:
        mem_used = mem_total - mem_free
    mem_used -= zfs_shrinkable

    swap_total = mem_state.swap_total * 1024.0
    swap_free = mem_state.swap_free * 1024.0
    swap_cached = mem_state.swap_cached * 1024.0
    swap_used = swap_total - swap_free - swap_cached

    return {
        "mem_total": mem_total,
        "mem_free": mem_free,
        "mem_free_percents": _percent(mem_free, mem_total),
        "mem_total_used": mem_total_used,
        "mem_total_used_percents": _percent(mem_total_used, mem_total),
        "mem_used": mem_used,
        "mem_used_percents": _percent(mem_used, mem_total),
        "mem_avail": mem_avail,
        "mem_avail_percents": _percent(mem_avail, mem_total),
        "swap_total": swap_total,
        "swap_free": swap_free,
        "swap_free_percents": _percent(swap_free, swap_total),
        "swap_used": swap_used,
        "swap_used_percents": _percent(swap_used, swap_total),
        "buffers": buffers,
        "buffers_percent": _percent(buffers, mem_total),
        "cached": cached,
        "cached_percent": _percent(cached, mem_total),
    }


def _level(percent: float, warning: float, critical: float) -> State:
    if percent > critical:
        return State.CRITICAL
    if percent > warning:
        return State.WARNING
    return State.IDLE


def memory_state(values: dict[str, float], config: MemoryConfig) -> State:
    """Return the worse of the memory and swap states."""
    mem = _level(values["mem_used_percents"], config.warning_mem, config.critical_mem)
    swap = _level(
        values["swap_used_percents"], config.warning_swap, config.critical_swap
    )
    if State.CRITICAL in (mem, swap):
        return State.CRITICAL
    if State.WARNING in (mem, swap):
        return State.WARNING
    return State.IDLE