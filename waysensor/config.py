"""Configuration: the global config file, per-sensor settings and the sensor interface."""

from __future__ import annotations

import os
import sys
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, is_dataclass, replace, asdict
from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar, Optional, Union

from . import ron
from .core import (
    GaugeStyle,
    IconPosition,
    IconStyle,
    ParseError,
    SensorIOError,
    SparklineStyle,
    Theme,
    TooltipDetail,
    UnavailableError,
    WaybarOutput,
)

APP_DIR_NAME = "waysensor"
CONFIG_FILE_NAME = "config.ron"

_MISSING = object()


def _home_dir() -> Optional[Path]:
    try:
        return Path.home()
    except RuntimeError:
        return None


def config_dir() -> Optional[Path]:
    """Return the user's configuration directory for this platform, if known."""
    platform = sys.platform
    if platform.startswith("win"):
        appdata = os.environ.get("APPDATA")
        return Path(appdata) if appdata else None
    home = _home_dir()
    if platform == "darwin":
        return home / "Library" / "Application Support" if home else None
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg and os.path.isabs(xdg):
        return Path(xdg)
    return home / ".config" if home else None


# ---------------------------------------------------------------------------
# Field readers used when building configuration from loaded data
# ---------------------------------------------------------------------------


def _as_str(key: str, value: Any) -> str:
    if isinstance(value, str) and not isinstance(value, Enum):
        return str(value)
    raise ParseError(f"invalid type for `{key}`: expected a string, got {value!r}")


def _as_opt_str(key: str, value: Any) -> Optional[str]:
    if isinstance(value, ron.Some):
        value = value.value
    if value is None:
        return None
    return _as_str(key, value)


def _as_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    raise ParseError(f"invalid type for `{key}`: expected a boolean, got {value!r}")


def _as_int(key: str, value: Any, maximum: Optional[int] = None) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ParseError(f"invalid type for `{key}`: expected an integer, got {value!r}")
    if value < 0 or (maximum is not None and value > maximum):
        raise ParseError(f"invalid value for `{key}`: {value} is out of range")
    return value


def _as_enum(key: str, value: Any, enum_cls: type[Enum]) -> Any:
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(str(value))
        except ValueError:
            pass
    options = ", ".join(f"`{member.value}`" for member in enum_cls)
    raise ParseError(f"unknown variant `{value}` for `{key}`, expected one of {options}")


def _as_mapping(key: str, value: Any) -> Mapping:
    if isinstance(value, Mapping):
        return value
    raise ParseError(f"invalid type for `{key}`: expected a struct or map, got {value!r}")


def _required(data: Mapping, key: str) -> Any:
    if key not in data:
        raise ParseError(f"missing field `{key}`")
    return data[key]


def _to_json(value: Any) -> Any:
    """Turn a loaded RON value into plain JSON-like Python data."""
    if isinstance(value, ron.Some):
        return _to_json(value.value)
    if isinstance(value, ron.Struct):
        if not value and value.name is None:
            return None
        keys = list(value)
        if keys and keys == list(range(len(keys))):
            return [_to_json(item) for item in value.values()]
        return {_json_key(k): _to_json(v) for k, v in value.items()}
    if isinstance(value, Mapping):
        return {_json_key(k): _to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_json(item) for item in value]
    if isinstance(value, str):
        return str(value)
    return value


def _json_key(key: Any) -> str:
    if isinstance(key, str):
        return str(key)
    raise ParseError(f"map key {key!r} must be a string")


def _json_to_ron(value: Any) -> Any:
    if value is None:
        return ron.Struct()
    if isinstance(value, Mapping):
        return {k: _json_to_ron(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_to_ron(item) for item in value]
    return value


def _ron_struct(obj: Any) -> ron.Struct:
    out: dict[str, Any] = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        if is_dataclass(value):
            value = _ron_struct(value)
        elif isinstance(value, Enum):
            pass
        elif isinstance(value, dict):
            value = {k: _json_to_ron(v) for k, v in value.items()}
        elif isinstance(value, str) and "Optional" in str(f.type):
            value = ron.Some(value)
        out[f.name] = value
    return ron.Struct(out)


def _section(data: Mapping, key: str, cls: Any) -> Any:
    if key not in data:
        return cls()
    return cls.from_dict(_as_mapping(key, data[key]))


# ---------------------------------------------------------------------------
# Configuration records
# ---------------------------------------------------------------------------


@dataclass
class IconConfig:
    """Icons used by each sensor type."""

    cpu: str = "\uf4bc"
    memory: str = "\uefc5"
    disk: str = "\uf0a0"
    network_download: str = "\uf019"
    network_upload: str = "\uf093"
    network_wifi: str = "\U000f05a9"
    network_ethernet: str = "\uef44"
    battery_full: str = "\U000f0079"
    battery_three_quarters: str = "\U000f12a3"
    battery_half: str = "\U000f12a2"
    battery_quarter: str = "\U000f12a1"
    battery_empty: str = "\U000f008e"
    battery_charging: str = "\U000f0084"
    thermal_low: str = "\uf2ca"
    thermal_medium: str = "\uf2c9"
    thermal_high: str = "\ufc27"
    gpu: str = "\U000f08ae"

    @classmethod
    def from_dict(cls, data: Mapping) -> "IconConfig":
        kwargs = {f.name: _as_str(f.name, data[f.name]) for f in fields(cls) if f.name in data}
        return cls(**kwargs)

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass
class StatusColorConfig:
    """Colors for status indicators."""

    excellent: Optional[str] = None
    good: Optional[str] = None
    warning: Optional[str] = None
    critical: Optional[str] = None
    unknown: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping) -> "StatusColorConfig":
        return cls(**{f.name: _as_opt_str(f.name, data.get(f.name)) for f in fields(cls)})


@dataclass
class ColorConfig:
    """Colors for icons, text, tooltips and sparklines."""

    icon_color: Optional[str] = None
    text_color: Optional[str] = None
    tooltip_label_color: Optional[str] = None
    tooltip_value_color: Optional[str] = None
    sparkline_color: Optional[str] = None
    status_colors: StatusColorConfig = field(default_factory=StatusColorConfig)

    @classmethod
    def from_dict(cls, data: Mapping) -> "ColorConfig":
        status = StatusColorConfig.from_dict(
            _as_mapping("status_colors", _required(data, "status_colors"))
        )
        names = ("icon_color", "text_color", "tooltip_label_color",
                 "tooltip_value_color", "sparkline_color")
        kwargs = {name: _as_opt_str(name, data.get(name)) for name in names}
        return cls(status_colors=status, **kwargs)


@dataclass
class VisualConfig:
    """Visual enhancement settings."""

    sparklines: bool = True
    sparkline_length: int = 8
    sparkline_style: SparklineStyle = SparklineStyle.BLOCKS
    sparklines_in_text: bool = True
    status_indicators: bool = True
    extended_metadata: bool = True
    tooltip_detail: TooltipDetail = TooltipDetail.DETAILED
    tooltip_gauges: bool = True
    gauge_width: int = 12
    gauge_style: GaugeStyle = GaugeStyle.BLOCKS
    show_top_processes: bool = True
    top_processes_count: int = 10
    process_name_max_length: int = 20

    _BOOLS: ClassVar[tuple[str, ...]] = (
        "sparklines", "sparklines_in_text", "status_indicators",
        "extended_metadata", "tooltip_gauges", "show_top_processes",
    )
    _SIZES: ClassVar[dict[str, Optional[int]]] = {
        "sparkline_length": None,
        "gauge_width": None,
        "top_processes_count": 255,
        "process_name_max_length": 255,
    }
    _ENUMS: ClassVar[dict[str, type[Enum]]] = {
        "sparkline_style": SparklineStyle,
        "tooltip_detail": TooltipDetail,
        "gauge_style": GaugeStyle,
    }

    @classmethod
    def from_dict(cls, data: Mapping) -> "VisualConfig":
        kwargs: dict[str, Any] = {}
        for name in cls._BOOLS:
            if name in data:
                kwargs[name] = _as_bool(name, data[name])
        for name, maximum in cls._SIZES.items():
            if name in data:
                kwargs[name] = _as_int(name, data[name], maximum)
        for name, enum_cls in cls._ENUMS.items():
            if name in data:
                kwargs[name] = _as_enum(name, data[name], enum_cls)
        return cls(**kwargs)


@dataclass
class SensorConfig:
    """Settings that control how a sensor behaves and looks."""

    MIN_UPDATE_INTERVAL: ClassVar[int] = 100

    update_interval: int = 1000
    theme: Theme = field(default_factory=Theme)
    icon_style: IconStyle = IconStyle.NONE
    icon_position: IconPosition = IconPosition.BEFORE
    icon_spacing: int = 1
    icons: IconConfig = field(default_factory=IconConfig)
    icon_color: Optional[str] = None
    text_color: Optional[str] = None
    tooltip_label_color: Optional[str] = None
    tooltip_value_color: Optional[str] = None
    sparkline_color: Optional[str] = None
    visuals: VisualConfig = field(default_factory=VisualConfig)
    custom: dict[str, Any] = field(default_factory=dict)

    _COLORS: ClassVar[tuple[str, ...]] = (
        "icon_color", "text_color", "tooltip_label_color",
        "tooltip_value_color", "sparkline_color",
    )
    _KNOWN: ClassVar[frozenset[str]] = frozenset({
        "update_interval", "theme", "icon_style", "icon_position", "icon_spacing",
        "icons", "visuals", *_COLORS,
    })

    @classmethod
    def from_dict(cls, data: Mapping) -> "SensorConfig":
        interval = _as_int("update_interval", _required(data, "update_interval"))
        if interval < cls.MIN_UPDATE_INTERVAL:
            raise ParseError(
                f"Update interval must be at least {cls.MIN_UPDATE_INTERVAL}ms, "
                f"got {interval}ms"
            )
        theme = Theme()
        if "theme" in data:
            theme_data = _as_mapping("theme", data["theme"])
            theme = Theme(**{
                f.name: _as_str(f.name, _required(theme_data, f.name)) for f in fields(Theme)
            })
        kwargs: dict[str, Any] = {name: _as_opt_str(name, data.get(name)) for name in cls._COLORS}
        if "icon_style" in data:
            kwargs["icon_style"] = _as_enum("icon_style", data["icon_style"], IconStyle)
        if "icon_position" in data:
            kwargs["icon_position"] = _as_enum("icon_position", data["icon_position"], IconPosition)
        if "icon_spacing" in data:
            kwargs["icon_spacing"] = _as_int("icon_spacing", data["icon_spacing"], 255)
        custom = {
            _json_key(key): _to_json(value)
            for key, value in data.items()
            if key not in cls._KNOWN
        }
        return cls(
            update_interval=interval,
            theme=theme,
            icons=_section(data, "icons", IconConfig),
            visuals=_section(data, "visuals", VisualConfig),
            custom=custom,
            **kwargs,
        )

    def _check_interval(self, millis: int) -> None:
        if millis < self.MIN_UPDATE_INTERVAL:
            raise ValueError(f"Update interval must be at least {self.MIN_UPDATE_INTERVAL}ms")

    def with_update_interval(self, interval: Union[timedelta, float]) -> "SensorConfig":
        """Set the interval from a timedelta or a number of seconds."""
        if not isinstance(interval, timedelta):
            interval = timedelta(seconds=interval)
        millis = interval // timedelta(milliseconds=1)
        self._check_interval(millis)
        return replace(self, update_interval=millis)

    def with_update_interval_ms(self, millis: int) -> "SensorConfig":
        self._check_interval(millis)
        return replace(self, update_interval=millis)

    def with_theme(self, theme: Theme) -> "SensorConfig":
        return replace(self, theme=theme)

    def with_icon_style(self, style: IconStyle) -> "SensorConfig":
        return replace(self, icon_style=style)

    def with_icon_position(self, position: IconPosition) -> "SensorConfig":
        return replace(self, icon_position=position)

    def with_icon_color(self, color: str) -> "SensorConfig":
        return replace(self, icon_color=str(color))

    def with_text_color(self, color: str) -> "SensorConfig":
        return replace(self, text_color=str(color))

    def with_tooltip_label_color(self, color: str) -> "SensorConfig":
        return replace(self, tooltip_label_color=str(color))

    def with_tooltip_value_color(self, color: str) -> "SensorConfig":
        return replace(self, tooltip_value_color=str(color))

    def apply_color_overrides(
        self,
        icon_color: Optional[str],
        text_color: Optional[str],
        tooltip_label_color: Optional[str],
        tooltip_value_color: Optional[str],
    ) -> "SensorConfig":
        """Replace each color that is given, keeping the others."""
        overrides = {
            "icon_color": icon_color,
            "text_color": text_color,
            "tooltip_label_color": tooltip_label_color,
            "tooltip_value_color": tooltip_value_color,
        }
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def with_custom(self, key: str, value: Any) -> "SensorConfig":
        return replace(self, custom={**self.custom, str(key): value})

    def update_interval_duration(self) -> timedelta:
        return timedelta(milliseconds=self.update_interval)

    def get_custom(self, key: str) -> Any:
        return self.custom.get(key)


@dataclass
class GlobalConfig:
    """The user's configuration file."""

    colors: ColorConfig = field(default_factory=ColorConfig)
    icon_style: IconStyle = IconStyle.NONE
    icon_position: IconPosition = IconPosition.BEFORE
    icon_spacing: int = 1
    icons: IconConfig = field(default_factory=IconConfig)
    update_interval: int = 1000
    visuals: VisualConfig = field(default_factory=VisualConfig)
    sensors: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping) -> "GlobalConfig":
        kwargs: dict[str, Any] = {
            "colors": _section(data, "colors", ColorConfig),
            "icons": _section(data, "icons", IconConfig),
            "visuals": _section(data, "visuals", VisualConfig),
        }
        if "icon_style" in data:
            kwargs["icon_style"] = _as_enum("icon_style", data["icon_style"], IconStyle)
        if "icon_position" in data:
            kwargs["icon_position"] = _as_enum("icon_position", data["icon_position"], IconPosition)
        if "icon_spacing" in data:
            kwargs["icon_spacing"] = _as_int("icon_spacing", data["icon_spacing"], 255)
        if "update_interval" in data:
            kwargs["update_interval"] = _as_int("update_interval", data["update_interval"])
        if "sensors" in data:
            sensors = _as_mapping("sensors", data["sensors"])
            kwargs["sensors"] = {_json_key(k): _to_json(v) for k, v in sensors.items()}
        return cls(**kwargs)

    def to_ron(self) -> str:
        """Serialize as pretty-printed RON."""
        return ron.dumps(_ron_struct(self), indent=4)

    @classmethod
    def load(cls) -> "GlobalConfig":
        """Load the config file from its standard location, or return defaults."""
        path = cls.find_config_file()
        return cls.load_from_file(path) if path is not None else cls()

    @classmethod
    def load_from_file(cls, path: Union[str, Path]) -> "GlobalConfig":
        try:
            content = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise SensorIOError(exc) from exc
        try:
            data = ron.loads(content)
            if not isinstance(data, Mapping):
                raise ParseError("expected a struct at the top level")
            return cls.from_dict(data)
        except (ron.RonError, ParseError) as exc:
            message = exc.message if isinstance(exc, ParseError) else str(exc)
            raise ParseError(f"Failed to parse config file: {message}", exc) from exc

    @staticmethod
    def find_config_file() -> Optional[Path]:
        """Find the config file, preferring the config directory over the home fallback."""
        directory = config_dir()
        if directory is not None:
            candidate = directory / APP_DIR_NAME / CONFIG_FILE_NAME
            if candidate.exists():
                return candidate
        home = _home_dir()
        if home is not None:
            candidate = home / f".{APP_DIR_NAME}" / CONFIG_FILE_NAME
            if candidate.exists():
                return candidate
        return None

    @staticmethod
    def default_config_path() -> Optional[Path]:
        directory = config_dir()
        return directory / APP_DIR_NAME / CONFIG_FILE_NAME if directory is not None else None

    def save(self) -> None:
        path = self.default_config_path()
        if path is None:
            raise UnavailableError("Could not determine config directory")
        self.save_to_file(path)

    def save_to_file(self, path: Union[str, Path]) -> None:
        path = Path(path)
        try:
            content = self.to_ron()
        except ron.RonError as exc:
            raise ParseError(f"Failed to serialize config: {exc}", exc) from exc
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise SensorIOError(exc) from exc

    def to_sensor_config(self) -> SensorConfig:
        return SensorConfig(
            update_interval=self.update_interval,
            theme=Theme(),
            icon_style=self.icon_style,
            icon_position=self.icon_position,
            icon_spacing=self.icon_spacing,
            icons=replace(self.icons),
            icon_color=self.colors.icon_color,
            text_color=self.colors.text_color,
            tooltip_label_color=self.colors.tooltip_label_color,
            tooltip_value_color=self.colors.tooltip_value_color,
            sparkline_color=self.colors.sparkline_color,
            visuals=replace(self.visuals),
            custom={},
        )

    @classmethod
    def example_config(cls) -> "GlobalConfig":
        """A configuration with a sample color scheme and sensor thresholds."""
        config = cls()
        colors = config.colors
        colors.icon_color = "#7aa2f7"
        colors.text_color = "#c0caf5"
        colors.tooltip_label_color = "#bb9af7"
        colors.tooltip_value_color = "#9ece6a"
        colors.sparkline_color = "#f7768e"
        colors.status_colors = StatusColorConfig(
            excellent="#9ece6a",
            good="#73daca",
            warning="#e0af68",
            critical="#f7768e",
            unknown="#565f89",
        )
        config.icon_style = IconStyle.NERDFONT
        config.update_interval = 1000
        visuals = config.visuals
        visuals.sparklines = True
        visuals.sparkline_length = 8
        visuals.sparkline_style = SparklineStyle.BLOCKS
        visuals.status_indicators = True
        visuals.extended_metadata = True
        visuals.tooltip_detail = TooltipDetail.DETAILED
        config.sensors = {
            "cpu": {"warning_threshold": 75, "critical_threshold": 90},
            "memory": {"warning_threshold": 80, "include_swap": True},
            "thermal": {"warning_threshold": 70, "critical_threshold": 85},
        }
        return config


_EXAMPLE_CONFIG = r"""// waysensor Configuration File
// =============================
// Complete configuration reference with all available options.
// Copy this to ~/.config/waysensor/config.ron and customize as needed.
//
// Note: Command line arguments override these settings.

(
    // Default icon style for all sensors
    // Options: nerdfont, none
    icon_style: nerdfont,

    // Icon position relative to text in main waybar display
    // Options: before, after
    // - before: Icon appears before value (e.g., "<icon> 50%")
    // - after: Icon appears after value (e.g., "50% <icon>")
    icon_position: before,

    // Number of spaces between icon and text (1-10)
    icon_spacing: 1,

    // Default update interval in milliseconds (minimum 100ms)
    // This is the internal update rate for persistent processes
    update_interval: 1000,

    // =============================================================================
    // ICON CONFIGURATION
    // =============================================================================
    // Configure the Unicode icons used by each sensor type.
    // Unicode escapes such as \u{F0779} work for 5-digit codes.

    icons: (
        // CPU sensor icon
        cpu: "\u{F4BC}",

        // Memory sensor icon
        memory: "\u{EFC5}",

        // Disk/Storage sensor icon
        disk: "\u{F0A0}",

        // Network sensor icons (4 variants)
        network_download: "\u{F019}",
        network_upload: "\u{F093}",
        network_wifi: "\u{F05A9}",
        network_ethernet: "\u{F0200}",

        // Battery sensor icons (6 charge levels)
        battery_full: "\u{F0079}",
        battery_three_quarters: "\u{F12A3}",
        battery_half: "\u{F12A2}",
        battery_quarter: "\u{F12A1}",
        battery_empty: "\u{F008E}",
        battery_charging: "\u{F0084}",

        // Thermal sensor icons (3 temperature levels)
        thermal_low: "\u{F2CA}",
        thermal_medium: "\u{F2C9}",
        thermal_high: "\u{F2C7}",

        // GPU sensor icon
        gpu: "\u{F08AE}",
    ),

    // =============================================================================
    // COLOR CONFIGURATION
    // =============================================================================
    // All colors use hex format like "#7aa2f7" or RGB like "rgb(122, 162, 247)"
    // Colors support Pango markup for waybar compatibility

    colors: (
        // Icon color (applies to sensor icons. Examples from "Tokyo Night")
        icon_color: Some("#7aa2f7"),        // Blue

        // Main text color (sensor values)
        text_color: Some("#c0caf5"),        // Light blue/gray

        // Tooltip label/key color (left side of key: value pairs)
        tooltip_label_color: Some("#bb9af7"),   // Purple

        // Tooltip value color (right side of key: value pairs)
        tooltip_value_color: Some("#9ece6a"),   // Green

        // Sparkline chart color
        sparkline_color: Some("#f7768e"),       // Red/pink

        // Status indicator colors for different health states
        status_colors: (
            // Excellent status (very low usage, optimal state)
            excellent: Some("#9ece6a"),         // Green
            // Good status (normal usage, healthy)
            good: Some("#73daca"),              // Teal
            // Warning status (elevated usage, needs attention)
            warning: Some("#e0af68"),           // Yellow/orange
            // Critical status (high usage, immediate attention)
            critical: Some("#f7768e"),          // Red
            // Unknown/unavailable status (no data, error state)
            unknown: Some("#565f89"),           // Gray
        ),
    ),

    // =============================================================================
    // VISUAL ENHANCEMENT SETTINGS
    // =============================================================================

    visuals: (
        // Enable sparkline mini-charts showing recent history
        sparklines: true,

        // Show sparklines in main bar text (true) or tooltip only (false)
        sparklines_in_text: true,

        // Number of data points to maintain for sparklines
        // Range: 4-16 recommended (default: 8)
        sparkline_length: 8,

        // Sparkline rendering style
        // Options: blocks, braille, dots, none
        sparkline_style: blocks,

        // Enable status indicator emojis based on threshold levels
        status_indicators: false,

        // Enable additional metadata in tooltips
        extended_metadata: true,

        // Tooltip detail level
        // Options: basic, detailed, expert
        tooltip_detail: detailed,

        // Enable gauge bars in tooltips
        tooltip_gauges: true,

        // Width of gauge bars in characters
        // Range: 4-20 recommended (default: 12)
        gauge_width: 12,

        // Style of gauge bars
        // Options: blocks, ascii, dots, equals, custom
        gauge_style: blocks,

        // Show top processes in tooltips
        show_top_processes: true,

        // Number of top processes to display (1-20)
        top_processes_count: 10,

        // Maximum length for process names (truncated with ... if longer)
        process_name_max_length: 20,
    ),

    // =============================================================================
    // SENSOR-SPECIFIC CONFIGURATIONS
    // =============================================================================
    // Each sensor can override global settings and add specific options

    sensors: {
        "cpu": {
            "warning_threshold": 75,
            "critical_threshold": 90,
            "show_per_core": true,
            "max_cores_display": 0,
        },
        "memory": {
            "warning_threshold": 80,
            "critical_threshold": 95,
            "include_swap": true,
            "show_breakdown": true,
        },
        "thermal": {
            "warning_threshold": 70,
            "critical_threshold": 85,
            "temperature_unit": "celsius",
        },
        "amd-gpu": {
            "warning_threshold": 80,
            "critical_threshold": 95,
            "display_format": "compact",
            // Control which values appear in waybar text
            "show_temperature": true,
            "show_power": true,
            "show_utilization": true,
            "show_memory": false,
            "show_frequency": false,
            // Custom display order (when all are shown)
            "display_order": ["temperature", "power", "utilization"],
        },
        "nvidia-gpu": {
            "warning_threshold": 80,
            "critical_threshold": 95,
            "gpu_id": 0,
            "show_temperature": true,
            "show_power": true,
            "show_utilization": true,
            "show_memory": true,
            "show_clocks": true,
        },
        "intel-gpu": {
            "warning_threshold": 80,
            "critical_threshold": 95,
            "show_frequency": true,
        },
    },
)

// =============================================================================
// NOTES
// =============================================================================
//
// 1. Format: comments are allowed with // (line) and /* block */ syntax.
// 2. Minimal configuration: set icon_style and colors, everything else
//    uses sensible defaults.
// 3. Performance: increase update_interval, disable sparklines and
//    extended_metadata, or set tooltip_detail to basic for less work.
// 4. Per-sensor overrides: sensors respect their specific settings over
//    global ones.
// 5. Command line arguments override this config file,
//    e.g. --icon-style none overrides icon_style.
"""


def example_config_text() -> str:
    """The fully documented example configuration file."""
    return _EXAMPLE_CONFIG


def save_example_config_to_file(path: Union[str, Path]) -> None:
    """Write the documented example configuration to ``path``."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(_EXAMPLE_CONFIG, encoding="utf-8")
    except OSError as exc:
        raise SensorIOError(exc) from exc


class Sensor(ABC):
    """Interface every sensor implements to produce Waybar output."""

    @abstractmethod
    def read(self) -> WaybarOutput:
        """Read current data and return it formatted for Waybar."""

    @abstractmethod
    def name(self) -> str:
        """A stable identifier for this sensor."""

    @abstractmethod
    def configure(self, config: SensorConfig) -> None:
        """Apply a new configuration."""

    def check_availability(self) -> None:
        """Raise a SensorError if the sensor cannot work on this system."""
        return None

    def config(self) -> SensorConfig:
        """The sensor's current configuration; defaults unless overridden."""
        return SensorConfig()