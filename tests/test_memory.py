import math

import pytest

from barblocks.memory import (
    MemoryConfig,
    MemState,
    compute_values,
    memory_state,
    parse_arcstats,
    parse_meminfo,
    read_memstate,
)
from barblocks.state import State

MEMINFO = """MemTotal:       16000000 kB
MemFree:         4000000 kB
MemAvailable:    9000000 kB
Buffers:          500000 kB
Cached:          3000000 kB
SwapCached:        10000 kB
Shmem:            200000 kB
SReclaimable:     300000 kB
SwapTotal:       8000000 kB
SwapFree:        7000000 kB
HugePages_Total:       0

"""

ARCSTATS = """13 1 0x01 123 33456 1234 5678
name                            type data
c_min                           4    1000
size                            4    5000
"""


def test_parse_meminfo_fields():
    state = parse_meminfo(MEMINFO)
    assert state.mem_total == 16000000
    assert state.mem_free == 4000000
    assert state.mem_available == 9000000
    assert state.buffers == 500000
    assert state.pagecache == 3000000
    assert state.s_reclaimable == 300000
    assert state.shmem == 200000
    assert state.swap_total == 8000000
    assert state.swap_free == 7000000
    assert state.swap_cached == 10000
    assert state.zfs_arc_cache == 0


def test_parse_meminfo_bad_value():
    with pytest.raises(ValueError):
        parse_meminfo("MemTotal: lots kB\n")


def test_parse_meminfo_missing_value():
    with pytest.raises(ValueError):
        parse_meminfo("MemTotal:\n")


def test_parse_arcstats():
    assert parse_arcstats(ARCSTATS) == (5000, 1000)


def test_parse_arcstats_missing_size():
    with pytest.raises(ValueError):
        parse_arcstats("c_min 4 1000\n")


def test_read_memstate_without_zfs(tmp_path):
    meminfo = tmp_path / "meminfo"
    meminfo.write_text(MEMINFO)
    state = read_memstate(meminfo, tmp_path / "absent")
    assert state == parse_meminfo(MEMINFO)


def test_read_memstate_with_zfs(tmp_path):
    meminfo = tmp_path / "meminfo"
    meminfo.write_text(MEMINFO)
    arc = tmp_path / "arcstats"
    arc.write_text(ARCSTATS)
    state = read_memstate(meminfo, arc)
    assert (state.zfs_arc_cache, state.zfs_arc_min) == (5000, 1000)
    assert state.mem_total == 16000000


def test_read_memstate_missing_meminfo(tmp_path):
    with pytest.raises(RuntimeError):
        read_memstate(tmp_path / "nope", tmp_path / "absent")


def test_compute_values_invariants():
    values = compute_values(parse_meminfo(MEMINFO))
    assert values["mem_total_used"] == values["mem_total"] - values["mem_free"]
    assert values["mem_free_percents"] + values["mem_total_used_percents"] == pytest.approx(100.0)
    assert values["swap_used"] == values["swap_total"] - values["swap_free"] - 10000 * 1024.0
    assert 0 < values["mem_used"] < values["mem_total"]


def test_mem_avail_capped_at_total():
    values = compute_values(MemState(mem_total=100, mem_free=10, mem_available=500))
    assert values["mem_avail"] == values["mem_total"]


def test_mem_avail_falls_back_to_free():
    values = compute_values(MemState(mem_total=100, mem_free=30))
    assert values["mem_avail"] == values["mem_free"]


def test_zfs_shrinkable_added_to_avail():
    base = MemState(mem_total=100000, mem_free=10000, mem_available=50000)
    with_zfs = MemState(
        mem_total=100000, mem_free=10000, mem_available=50000,
        zfs_arc_cache=9000, zfs_arc_min=2000,
    )
    diff = compute_values(with_zfs)["mem_avail"] - compute_values(base)["mem_avail"]
    assert diff == 9000 - 2000
    used_diff = compute_values(base)["mem_used"] - compute_values(with_zfs)["mem_used"]
    assert used_diff == 9000 - 2000


def test_zfs_min_above_cache_saturates():
    base = MemState(mem_total=100, mem_free=10)
    odd = MemState(mem_total=100, mem_free=10, zfs_arc_cache=5, zfs_arc_min=50)
    assert compute_values(odd) == compute_values(base)


def test_no_swap_gives_nan_percent_and_idle():
    values = compute_values(MemState(mem_total=1000, mem_free=900))
    assert math.isnan(values["swap_used_percents"])
    assert memory_state(values, MemoryConfig()) is State.IDLE


@pytest.mark.parametrize(
    "mem, swap, expected",
    [
        (96.0, 0.0, State.CRITICAL),
        (85.0, 0.0, State.WARNING),
        (10.0, 99.0, State.CRITICAL),
        (10.0, 81.0, State.WARNING),
        (80.0, 80.0, State.IDLE),
        (85.0, 96.0, State.CRITICAL),
    ],
)
def test_memory_state(mem, swap, expected):
    values = {"mem_used_percents": mem, "swap_used_percents": swap}
    assert memory_state(values, MemoryConfig()) is expected


def test_memory_state_custom_thresholds():
    config = MemoryConfig(warning_mem=70.0, critical_mem=90.0)
    values = {"mem_used_percents": 75.0, "swap_used_percents": 0.0}
    assert memory_state(values, config) is State.WARNING