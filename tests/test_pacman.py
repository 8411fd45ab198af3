import re
import subprocess
import tempfile
from pathlib import Path
from unittest import mock

import pytest

from barblocks.pacman import (
    Watched,
    choose_format,
    get_aur_available_updates,
    get_pacman_available_updates,
    get_update_count,
    has_matching_update,
    pacman_db_path,
    select_watched,
    update_state,
    updates_db_path,
)
from barblocks.state import State


def test_select_watched_pacman_only():
    assert select_watched({"icon", "pacman"}, None) == Watched(pacman=True)


def test_select_watched_aur_only():
    watched = select_watched({"aur"}, "yay -Qua")
    assert watched == Watched(aur_command="yay -Qua")
    assert watched.aur and not watched.pacman


@pytest.mark.parametrize("keys", [{"both"}, {"pacman", "aur"}, {"both", "icon"}])
def test_select_watched_both(keys):
    assert select_watched(keys, "yay -Qua") == Watched(True, "yay -Qua")


def test_select_watched_nothing():
    watched = select_watched({"icon"}, "yay -Qua")
    assert watched == Watched()
    assert not watched.needs_fakeroot


@pytest.mark.parametrize("keys", [{"aur"}, {"both"}, {"pacman", "aur"}])
def test_select_watched_requires_aur_command(keys):
    with pytest.raises(ValueError, match="no aur_command supplied"):
        select_watched(keys, None)


def test_updates_db_path_from_env():
    assert updates_db_path({"CHECKUPDATES_DB": "/srv/db"}) == Path("/srv/db")


def test_updates_db_path_uses_user_and_tempdir():
    path = updates_db_path({"USER": "alice"})
    assert path.parent == Path(tempfile.gettempdir())
    assert path.name.endswith("-alice")


def test_updates_db_path_without_user():
    assert updates_db_path({}).name.endswith("-no-user")


def test_pacman_db_path():
    assert pacman_db_path({}) == Path("/var/lib/pacman/")
    assert pacman_db_path({"DBPath": "/opt/db"}) == Path("/opt/db")


def test_get_update_count_skips_ignored():
    kept = ["linux 6.1-1 -> 6.2-1", "zfs-utils 2.1 -> 2.2"]
    ignored = ["firefox 1 -> 2 [ignored]"]
    text = "\n".join(kept + ignored) + "\n"
    assert get_update_count(text) == len(kept)


def test_get_update_count_empty():
    assert get_update_count("") == 0


def test_has_matching_update():
    updates = "linux-lts 6.1 -> 6.2\nvim 9.0 -> 9.1\n"
    assert has_matching_update(updates, re.compile("(linux|linux-lts|linux-zen)"))
    assert not has_matching_update(updates, re.compile("(zfs|zfs-lts)"))


def test_update_state():
    assert update_state(0, True, True) is State.IDLE
    assert update_state(3, True, True) is State.CRITICAL
    assert update_state(3, True, False) is State.WARNING
    assert update_state(3, False, False) is State.INFO


def test_choose_format():
    assert choose_format(0) == "format_up_to_date"
    assert choose_format(1) == "format_singular"
    assert choose_format(5) == "format"


def test_get_aur_available_updates_returns_stdout():
    out = get_aur_available_updates("printf 'foo 1 -> 2\\nbar 3 -> 4\\n'")
    assert out.splitlines() == ["foo 1 -> 2", "bar 3 -> 4"]


def test_get_aur_available_updates_non_utf8():
    with pytest.raises(ValueError):
        get_aur_available_updates("printf '\\377\\376'")


def _completed(returncode=0, stdout=b""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout)


def test_get_pacman_available_updates(tmp_path, monkeypatch):
    db = tmp_path / "checkup"
    system = tmp_path / "system"
    monkeypatch.setenv("CHECKUPDATES_DB", str(db))
    monkeypatch.setenv("DBPath", str(system))
    listing = b"linux 6.1 -> 6.2\n"
    with mock.patch(
        "barblocks.pacman.subprocess.run",
        side_effect=[_completed(), _completed(stdout=listing)],
    ) as run:
        result = get_pacman_available_updates()
    assert result == listing.decode()
    assert (db / "local").is_symlink()
    assert Path(str((db / "local").readlink())) == system / "local"
    first_args = run.call_args_list[0].args[0]
    assert first_args[:4] == ["fakeroot", "--", "pacman", "-Sy"]
    assert run.call_args_list[0].kwargs["env"]["LC_ALL"] == "C"


def test_get_pacman_available_updates_sync_failure(tmp_path, monkeypatch):
    monkeypatch.setenv("CHECKUPDATES_DB", str(tmp_path / "checkup"))
    monkeypatch.setenv("DBPath", str(tmp_path / "system"))
    with mock.patch(
        "barblocks.pacman.subprocess.run", return_value=_completed(returncode=1)
    ):
        with pytest.raises(RuntimeError, match="non zero exit status"):
            get_pacman_available_updates()