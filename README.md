# waysensor

Building blocks for Waybar custom modules on Linux:

- `waysensor.core` – the `WaybarOutput` record (`text`, `tooltip`, `class`,
  `percentage`), icon/sparkline/gauge style enums, `Theme` and the
  `SensorError` family of exceptions.
- `waysensor.formatting` – helpers that turn readings into bar text and
  tooltips: icons with Pango colour markup, byte/rate/frequency formatting,
  gauges, sparklines, status indicators and top-process listings.
- `waysensor.config` – `GlobalConfig` (the user's configuration file),
  `SensorConfig` (per-sensor settings) and the abstract `Sensor` interface.
- `waysensor.ron` – a reader and writer for RON, the configuration format
  (`loads`, `dumps`).
- `waysensor.discovery` – scans `/proc` and `/sys` for CPU, memory, disks,
  GPUs, thermal zones, network interfaces and batteries.
- `waysensor.cli` – the `waysensor-discover` command.

## Installation

```sh
pip install .
```

For running the tests:

```sh
pip install ".[test]"
pytest
```

## Hardware discovery

```sh
waysensor-discover                      # hardware report as JSON
waysensor-discover --format ron         # the same report in RON
waysensor-discover --format waybar-config --waybar-config
waysensor-discover --smart --verbose    # also tries each sensor command once
waysensor-discover --complete-config --output ./waybar-setup
waysensor-discover --setup              # setup wizard, writes into the current directory
waysensor-discover --benchmark          # times ten runs of each sensor command
```

`--complete-config` writes `waysensor-waybar-config.json`,
`waysensor-style.css` and an executable `install-waysensor.sh` into the
output directory. `--setup` detects hardware, reports which sensor commands
are missing, and writes `waybar-config.json`, `waybar-style.css` and
`generated-install.sh` into the current directory.

The same command can be started with `python -m waysensor.cli`.

## Library use

```python
from waysensor.config import GlobalConfig
from waysensor import formatting

config = GlobalConfig.load().to_sensor_config()

usage = 85.0
text = formatting.with_icon_and_colors(f"{usage:.0f}%", config.icons.cpu, config)
output = formatting.themed_output(
    text, "CPU Usage: 85%", 85, usage, 70.0, 90.0, config.theme
)
print(output.to_json())
```

`formatting` also offers `bytes_to_human`, `rate_to_human`,
`frequency_to_human`, `create_gauge`, `create_sparkline`, `status_indicator`,
`key_value` and `format_top_processes`, among others.

## Configuration

`GlobalConfig.load()` reads `waysensor/config.ron` from the user's
configuration directory (`$XDG_CONFIG_HOME` or `~/.config` on Linux),
falling back to `~/.waysensor/config.ron`; defaults are used when neither
exists. A fully documented example can be written with:

```python
from waysensor.config import GlobalConfig, save_example_config_to_file

save_example_config_to_file(GlobalConfig.default_config_path())
```

`GlobalConfig.save()` and `save_to_file(path)` write the current settings
back as RON. Settings cover icon style, position and spacing, icon glyphs,
colours (Pango markup), sparkline and gauge styles, tooltip detail and
per-sensor options.

## What this package does not do

It contains no sensor programs of its own. The generated Waybar
configuration, `--smart`, `--benchmark` and the install script all refer to
commands such as `waysensor-cpu`, `waysensor-memory`, `waysensor-amd-gpu`,
`waysensor-disk`, `waysensor-network` and `waysensor-battery`, which must
be provided separately; the `Sensor` class only defines the interface such
programs would implement. The generated install script runs
`python3 -m pip install --user .` and then checks which of those commands
are present.