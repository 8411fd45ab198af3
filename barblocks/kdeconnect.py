"""KDE Connect block: device object paths and the displayed status."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from barblocks.state import State

_DEVICES_ROOT = "/modules/kdeconnect/devices"

SERVICE = "org.kde.kdeconnect"
DAEMON_INTERFACE = "org.kde.kdeconnect.daemon"
DEVICE_INTERFACE = "org.kde.kdeconnect.device"
BATTERY_INTERFACE = "org.kde.kdeconnect.device.battery"
NOTIFICATIONS_INTERFACE = "org.kde.kdeconnect.device.notifications"
CONNECTIVITY_INTERFACE = "org.kde.kdeconnect.device.connectivity_report"

DISCONNECTED_NETWORK_TYPE = "×"


@dataclass
class KdeConnectConfig:
    """Settings of the KDE Connect block."""

    device_id: str | None = None
    format: str = " $icon $name {$bat_icon $bat_charge |}{$notif_icon |}"
    bat_good: int = 60
    bat_info: int = 60
    bat_warning: int = 30
    bat_critical: int = 15
    hide_disconnected: bool = True

    def battery_state_enabled(self) -> bool:
        """Whether the state follows the battery (not all thresholds are 0)."""
        return (self.bat_good, self.bat_info, self.bat_warning, self.bat_critical) != (
            0,
            0,
            0,
            0,
        )


def device_paths(device_id: str) -> dict[str, str]:
    """Return the D-Bus object paths of a device and its plugins."""
    device = f"{_DEVICES_ROOT}/{device_id}"
    return {
        "device": device,
        "battery": f"{device}/battery",
        "notifications": f"{device}/notifications",
        "connectivity_report": f"{device}/connectivity_report",
    }


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _battery_state(level: int, charging: bool, config: KdeConnectConfig) -> State:
    if charging:
        return State.GOOD
    if level <= config.bat_critical:
        return State.CRITICAL
    if level <= config.bat_info:
        return State.INFO
    if level > config.bat_good:
        return State.GOOD
    return State.IDLE


def build_status(
    config: KdeConnectConfig,
    connected: bool,
    name: str | None = None,
    battery_level: int | None = None,
    charging: bool = False,
    network_type: str | None = None,
    network_strength: int | None = None,
    notif_count: int = 0,
) -> tuple[State, dict[str, Any]] | None:
    """Compute the widget state and placeholder values for a device.

    Returns ``None`` when the block should be hidden. Icons are plain names;
    icons shown as a progression are ``(name, fraction)`` pairs. A missing
    ``battery_level`` or ``network_type`` means the device did not report it;
    a missing ``network_strength`` counts as ``-1``.
    """
    if not connected and config.hide_disconnected:
        return None

    state = State.IDLE
    values: dict[str, Any] = {}
    if name is not None:
        values["name"] = name

    if not connected:
        values["icon"] = "phone_disconnected"
        return state, values

    values["icon"] = "phone"
    values["connected"] = True
    battery_state = config.battery_state_enabled()

    if battery_level is not None:
        level = _clamp(battery_level, 0, 100)
        values["bat_charge"] = float(level)
        values["bat_icon"] = ("bat_charging" if charging else "bat", level / 100.0)
        if battery_state:
            state = _battery_state(level, charging, config)

    if network_type is not None:
        strength = -1 if network_strength is None else network_strength
        values["network_icon"] = ("net_cellular", _clamp(strength + 1, 0, 5) / 5.0)
        values["network_strength"] = float(_clamp(strength, 0, 4) * 25)
        if strength <= 0:
            state = State.CRITICAL
            values["network_type"] = DISCONNECTED_NETWORK_TYPE
        else:
            values["network_type"] = network_type

    if notif_count > 0:
        values["notif_count"] = notif_count
        values["notif_icon"] = "notification"

    if not battery_state:
        state = State.IDLE if notif_count == 0 else State.INFO

    return state, values