# barblocks

Logic for the blocks of a status bar on Linux desktops. Each module takes one
source of system information and turns it into display values. It also gives
the `State` (idle, info, good, warning, critical) that a bar uses to colour
the block.

Parsing and decisions are kept apart from system access. You can pass in text
you already have, or let a function read `/proc`, run `setxkbmap`, or query a
socket for you.

## Modules

| Module | What it covers |
|--------|----------------|
| `barblocks.state` | `State` and `parse_state` shared by all blocks |
| `barblocks.keyboard_layout` | Layout and variant parsing, `setxkbmap -query`, name mappings |
| `barblocks.load` | Load average from `/proc/loadavg`, scaled by the number of logical cores |
| `barblocks.maildir` | Counting new, current or all mail in maildir inboxes, with glob, `~` and `$VAR` expansion |
| `barblocks.menu` | A click-driven menu (`Menu`, `MenuItem`) whose items run shell commands, with optional confirmation |
| `barblocks.memory` | Memory and swap usage from `/proc/meminfo`, taking the ZFS ARC cache into account |
| `barblocks.net` | Throughput from successive interface byte counters, with a short speed history |
| `barblocks.music` | MPRIS player-name matching, playback status and artist/title display values |
| `barblocks.mpris` | Decoding an MPRIS `Metadata` dictionary into `PlayerMetadata` |
| `barblocks.music_selection` | Which player to show, and how the choice follows players coming and going |
| `barblocks.rofication` | Pending notification counts from a rofication daemon socket |
| `barblocks.service_status` | systemd unit object paths and active/inactive states |
| `barblocks.kdeconnect` | Object paths and display values for a KDE Connect device: battery, cellular signal, notifications |
| `barblocks.pacman` | Pending pacman and AUR updates, counts, regex-based warnings and format choice |

## Examples

Keyboard layout strings in the `"layout (variant)"` form:

```python
from barblocks.keyboard_layout import parse_layout_variant, display_values

info = parse_layout_variant("English (US)")
info.layout   # "English"
info.variant  # "US"
display_values(info, {"English (US)": "us"})  # {"layout": "us", "variant": "US"}
```

Load state for the current machine:

```python
from barblocks.load import LoadConfig, read_load, load_state

cores, (m1, m5, m15) = read_load()
state = load_state(m1, cores, LoadConfig())
```

Memory values and state:

```python
from barblocks.memory import MemoryConfig, read_memstate, compute_values, memory_state

values = compute_values(read_memstate())
state = memory_state(values, MemoryConfig())
```

Network speeds. `SpeedMeter.update` takes the interface counters and a time
in seconds, and returns `(speed_down, speed_up)` in bytes per second:

```python
from barblocks.net import NetStats, SpeedMeter

meter = SpeedMeter(start=0.0)
meter.update(NetStats(rx_bytes=1000, tx_bytes=500), now=1.0)  # (0.0, 0.0), first sample
meter.update(NetStats(rx_bytes=3000, tx_bytes=900), now=2.0)  # (2000.0, 400.0)
meter.rx_hist  # last 8 download speeds, oldest first
```

MPRIS player names:

```python
from barblocks.music import extract_player_name, player_matches, compile_excludes

extract_player_name("org.mpris.MediaPlayer2.firefox.instance852")  # "firefox.instance852"
excludes = compile_excludes(["mpd", "firefox.*"])
player_matches("org.mpris.MediaPlayer2.playerctld", [], excludes)           # True
player_matches("org.mpris.MediaPlayer2.playerctld", ["spotify"], excludes)  # False
```

A menu driven by click actions (`"_left"`, `"_right"`, `"_up"`, `"_down"`):

```python
from barblocks.menu import Menu, MenuItem, run_item

menu = Menu("power", [MenuItem("Sleep", "systemctl suspend"),
                      MenuItem("Reboot", "reboot", confirm_msg="Really reboot?")])
menu.handle("_left")          # opens the menu; menu.display == "Sleep"
item = menu.handle("_left")   # chooses "Sleep"
if item is not None:
    run_item(item)            # starts the command with sh -c
```

systemd unit paths:

```python
from barblocks.service_status import encode_unit_path

encode_unit_path("cups")  # "/org/freedesktop/systemd1/unit/cups_2eservice"
```

Pacman update counts skip lines marked `[ignored]`:

```python
from barblocks.pacman import get_update_count

get_update_count("linux 6.1 -> 6.2\nfoo 1.0 -> 1.1 [ignored]\n")  # 1
```

## What the package does not do

- There is no command and no bar: nothing runs blocks in a loop or writes
  the i3bar/swaybar protocol. You call the functions and render the values
  yourself.
- There is no D-Bus client. The music, KDE Connect and service status modules
  compute values and states from data you obtain elsewhere (player names,
  metadata, battery level, unit state).
- `barblocks.net` does not read interface counters itself; you supply
  `NetStats`.
- Of the `KeyboardLayoutDriver` values, only `setxkbmap` is queried
  (`query_setxkbmap`); locale1, kbdd and sway are not read.

## Requirements

Python 3.10 or later on Linux. No dependencies outside the standard library.
Some functions run external programs when called: `setxkbmap` for the
keyboard layout, `fakeroot` and `pacman` for pending updates, and `sh` for
menu items and AUR commands.