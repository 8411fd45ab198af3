"""Pending package updates from pacman and an AUR helper."""

from __future__ import annotations

import os
import re
import shutil
import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Collection, Mapping

from barblocks.state import State

DEFAULT_FORMAT = " $icon $pacman.eng(w:1) "
_MISSING_AUR_COMMAND = "$aur or $both found in format string but no aur_command supplied"


@dataclass(frozen=True)
class Watched:
    """Which update sources the block has to query.

    ``pacman`` says whether pacman is queried; ``aur_command`` is the shell
    command for AUR updates, or ``None`` when the AUR is not queried.
    """

    pacman: bool = False
    aur_command: str | None = None

    @property
    def aur(self) -> bool:
        """Whether the AUR helper is queried."""
        return self.aur_command is not None

    @property
    def needs_fakeroot(self) -> bool:
        """Whether querying needs ``fakeroot`` (only pacman does)."""
        return self.pacman


def select_watched(
    format_keys: Collection[str], aur_command: str | None
) -> Watched:
    """Decide what to query from the placeholders used by the formats."""
    aur = "aur" in format_keys
    pacman = "pacman" in format_keys
    both = "both" in format_keys
    if both or (pacman and aur):
        if aur_command is None:
            raise ValueError(_MISSING_AUR_COMMAND)
        return Watched(pacman=True, aur_command=aur_command)
    if pacman:
        return Watched(pacman=True)
    if aur:
        if aur_command is None:
            raise ValueError(_MISSING_AUR_COMMAND)
        return Watched(aur_command=aur_command)
    return Watched()


def updates_db_path(env: Mapping[str, str] | None = None) -> Path:
    """Directory of the private sync database used to check for updates."""
    env = os.environ if env is None else env
    configured = env.get("CHECKUPDATES_DB")
    if configured is not None:
        return Path(configured)
    user = env.get("USER") or "no-user"
    return Path(tempfile.gettempdir()) / f"checkup-db-barblocks-{user}"


def pacman_db_path(env: Mapping[str, str] | None = None) -> Path:
    """Directory of the system pacman database."""
    env = os.environ if env is None else env
    return Path(env.get("DBPath", "/var/lib/pacman/"))


def get_update_count(updates: str) -> int:
    """Number of listed updates, ignoring those marked ``[ignored]``."""
    return sum(1 for line in updates.splitlines() if "[ignored]" not in line)


def has_matching_update(updates: str, regex: re.Pattern[str]) -> bool:
    """Whether any listed update matches ``regex``."""
    return any(regex.search(line) for line in updates.splitlines())


def compile_regex(pattern: str | None, what: str) -> re.Pattern[str] | None:
    """Compile an optional pattern, naming it in the error."""
    if pattern is None:
        return None
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise ValueError(f"invalid {what} updates regex") from exc


def update_state(total: int, warning: bool, critical: bool) -> State:
    """Block state for a number of updates and the regex findings."""
    if total == 0:
        return State.IDLE
    if critical:
        return State.CRITICAL
    if warning:
        return State.WARNING
    return State.INFO


def choose_format(total: int) -> str:
    """Name of the format option used for ``total`` updates."""
    if total == 0:
        return "format_up_to_date"
    if total == 1:
        return "format_singular"
    return "format"


def check_fakeroot() -> None:
    """Raise if ``fakeroot`` is not on the PATH."""
    if shutil.which("fakeroot") is None:
        raise RuntimeError("fakeroot not found")


def get_pacman_available_updates() -> str:
    """Refresh a private sync database and list pending pacman updates."""
    db = updates_db_path()
    try:
        db.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise RuntimeError(
            f"Failed to create checkup-db directory at '{db}'"
        ) from exc

    local_cache = db / "local"
    if not local_cache.exists():
        try:
            local_cache.symlink_to(pacman_db_path() / "local")
        except OSError as exc:
            raise RuntimeError("Failed to created required symlink") from exc

    env = {**os.environ, "LC_ALL": "C"}
    try:
        sync = subprocess.run(
            ["fakeroot", "--", "pacman", "-Sy", "--dbpath", str(db),
             "--logfile", "/dev/null"],
            env=env,
            stdout=subprocess.DEVNULL,
            check=False,
        )
    except OSError as exc:
        raise RuntimeError("Failed to run command") from exc
    if sync.returncode != 0:
        raise RuntimeError("pacman -Sy exited with non zero exit status")

    try:
        query = subprocess.run(
            ["fakeroot", "--", "pacman", "-Qu", "--dbpath", str(db)],
            env=env,
            capture_output=True,
            check=False,
        )
    except OSError as exc:
        raise RuntimeError(
            "There was a problem running the pacman commands"
        ) from exc
    try:
        return query.stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ValueError("Pacman produced non-UTF8 output") from exc


def get_aur_available_updates(aur_command: str) -> str:
    """Run the AUR helper command and return its output."""
    try:
        result = subprocess.run(
            ["sh", "-c", aur_command], capture_output=True, check=False
        )
    except OSError as exc:
        raise RuntimeError(f"aur command: {aur_command} failed") from exc
    try:
        return result.stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ValueError(
            "There was a problem while converting the aur command output to a string"
        ) from exc