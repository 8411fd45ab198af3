"""Pending notification count from the rofication daemon."""

from __future__ import annotations

import os
import re
import socket

from barblocks.state import State

_UNSIGNED_RE = re.compile(r"\+?[0-9]+")
_SEPARATOR_RE = re.compile(r"[,\n]")


def _parse_count(token: str) -> int:
    if not _UNSIGNED_RE.fullmatch(token):
        raise ValueError("Incorrect response")
    return int(token)


def parse_response(response: str) -> tuple[int, int]:
    """Parse ``"<regular>,<critical>"`` (comma or newline separated)."""
    parts = _SEPARATOR_RE.split(response, maxsplit=1)
    if len(parts) != 2:
        raise ValueError("Incorrect response")
    num, crit = parts
    return _parse_count(num), _parse_count(crit)


def rofication_status(
    socket_path: str = "/tmp/rofi_notification_daemon",
) -> tuple[int, int]:
    """Ask the daemon for the regular and critical notification counts."""
    path = os.path.expanduser(os.path.expandvars(socket_path))
    with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
        try:
            sock.connect(path)
        except OSError as exc:
            raise RuntimeError("Failed to connect to socket") from exc
        try:
            sock.sendall(b"num:\n")
        except OSError as exc:
            raise RuntimeError("Failed to write to socket") from exc
        chunks = []
        try:
            while chunk := sock.recv(4096):
                chunks.append(chunk)
        except OSError as exc:
            raise RuntimeError("Failed to read from socket") from exc
    try:
        response = b"".join(chunks).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise RuntimeError("Failed to read from socket") from exc
    return parse_response(response)


def rofication_state(num: int, crit: int) -> State:
    """Warning when critical notifications exist, info when any exist."""
    if crit > 0:
        return State.WARNING
    if num > 0:
        return State.INFO
    return State.IDLE