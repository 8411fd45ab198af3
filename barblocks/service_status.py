"""Service status block: systemd unit paths and block state."""

from __future__ import annotations

from dataclasses import dataclass

from barblocks.state import State, parse_state

_UNIT_PREFIX = "/org/freedesktop/systemd1/unit/"


@dataclass
class ServiceStatusConfig:
    """Settings of the service status block."""

    service: str = ""
    driver: str = "systemd"
    active_format: str = " $service active "
    inactive_format: str = " $service inactive "
    active_state: State | str | None = None
    inactive_state: State | str | None = None

    def __post_init__(self) -> None:
        if self.driver != "systemd":
            raise ValueError(f"unknown driver: {self.driver!r}")
        if isinstance(self.active_state, str):
            self.active_state = parse_state(self.active_state)
        if isinstance(self.inactive_state, str):
            self.inactive_state = parse_state(self.inactive_state)


def encode_unit_path(service: str) -> str:
    """Return the systemd D-Bus object path of ``<service>.service``."""
    if not service.isascii():
        raise ValueError(
            f'service name "{service}" must only contain ASCII characters'
        )
    encoded = "".join(
        chr(byte) if chr(byte).isalnum() else f"_{byte:02x}"
        for byte in f"{service}.service".encode("ascii")
    )
    return _UNIT_PREFIX + encoded


def service_state(active: bool, config: ServiceStatusConfig) -> State:
    """Return the configured state for an active or inactive service."""
    if active:
        return config.active_state if config.active_state is not None else State.IDLE
    return (
        config.inactive_state if config.inactive_state is not None else State.CRITICAL
    )