"""Unread mail counting for maildir inboxes."""

from __future__ import annotations

import glob
import os
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable

from barblocks.state import State

_VAR_RE = re.compile(r"\$(?:\{(\w+)\}|(\w+))")


class MailType(Enum):
    """Which part of a maildir to count."""

    NEW = "new"
    CUR = "cur"
    ALL = "all"


@dataclass
class MaildirConfig:
    """Settings of the maildir block."""

    inboxes: list[str] = field(default_factory=list)
    interval: float = 5.0
    threshold_warning: int = 1
    threshold_critical: int = 10
    display_type: MailType = MailType.NEW


def _expand_vars(text: str) -> str:
    def substitute(match: re.Match[str]) -> str:
        name = match.group(1) or match.group(2)
        try:
            return os.environ[name]
        except KeyError:
            raise ValueError("Failed to expand inbox") from None

    return _VAR_RE.sub(substitute, text)


def expand_inbox(inbox: str) -> list[Path]:
    """Expand ``~``, environment variables and globs into existing paths."""
    expanded = os.path.expanduser(_expand_vars(inbox))
    return [Path(p) for p in sorted(glob.glob(expanded))]


def _count_entries(directory: Path) -> int:
    try:
        return sum(1 for entry in directory.iterdir() if not entry.name.startswith("."))
    except OSError:
        return 0


def count_mail(path: str | Path, display_type: MailType) -> int:
    """Count the mails of one maildir."""
    path = Path(path)
    if display_type is MailType.NEW:
        return _count_entries(path / "new")
    if display_type is MailType.CUR:
        return _count_entries(path / "cur")
    return _count_entries(path / "new") + _count_entries(path / "cur")


def total_mail(inboxes: Iterable[str | Path], display_type: MailType) -> int:
    """Count mails over several maildirs."""
    return sum(count_mail(inbox, display_type) for inbox in inboxes)


def mail_state(count: int, config: MaildirConfig) -> State:
    """Return the block state for a mail count."""
    if count >= config.threshold_critical:
        return State.CRITICAL
    if count >= config.threshold_warning:
        return State.WARNING
    return State.IDLE