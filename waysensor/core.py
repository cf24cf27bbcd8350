"""Core types shared by all sensors: output records, styles, themes and errors."""

from __future__ import annotations

import errno
import json
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional


def _format_duration(seconds: float) -> str:
    """Render a duration in seconds compactly, e.g. ``5s``, ``1.5s`` or ``500ms``."""
    if seconds >= 1 or seconds == 0:
        return f"{seconds:g}s"
    if seconds >= 1e-3:
        return f"{seconds * 1e3:g}ms"
    if seconds >= 1e-6:
        return f"{seconds * 1e6:g}µs"
    return f"{seconds * 1e9:g}ns"


class SensorError(Exception):
    """Base class for every error a sensor can report."""

    def is_temporary(self) -> bool:
        """Whether the condition behind this error may clear up by itself."""
        return False


class SensorIOError(SensorError):
    """An I/O error occurred while reading sensor data."""

    def __init__(self, error: OSError) -> None:
        super().__init__(f"I/O error: {error}")
        self.error = error
        self.__cause__ = error

    def is_temporary(self) -> bool:
        if isinstance(self.error, (InterruptedError, TimeoutError)):
            return True
        return self.error.errno in (errno.EINTR, errno.ETIMEDOUT)


class ParseError(SensorError):
    """Sensor data or configuration text could not be parsed."""

    def __init__(self, message: str, source: Optional[BaseException] = None) -> None:
        super().__init__(f"Parse error: {message}")
        self.message = message
        self.source = source
        if source is not None:
            self.__cause__ = source


class ConfigError(SensorError):
    """A configuration setting is invalid."""

    def __init__(self, message: str, value: Optional[str] = None) -> None:
        super().__init__(f"Configuration error: {message}")
        self.message = message
        self.value = value


class UnavailableError(SensorError):
    """The sensor is not available on this system."""

    def __init__(self, reason: str, is_temporary: bool = False) -> None:
        super().__init__(f"Sensor unavailable: {reason}")
        self.reason = reason
        self.temporary = is_temporary

    def is_temporary(self) -> bool:
        return self.temporary


class PermissionDeniedError(SensorError):
    """Access to a sensor resource was denied."""

    def __init__(self, resource: str) -> None:
        super().__init__(f"Permission denied: {resource}")
        self.resource = resource


class SensorTimeoutError(SensorError):
    """Reading sensor data took too long; ``duration`` is in seconds."""

    def __init__(self, duration: float, operation: str) -> None:
        super().__init__(f"Timeout after {_format_duration(duration)} while {operation}")
        self.duration = duration
        self.operation = operation

    def is_temporary(self) -> bool:
        return True


class InvalidDataError(SensorError):
    """Sensor data has an unexpected format or value."""

    def __init__(self, message: str, data: Optional[str] = None) -> None:
        super().__init__(f"Invalid data: {message}")
        self.message = message
        self.data = data


def _check_percentage(percentage: int) -> None:
    if not 0 <= percentage <= 100:
        raise ValueError(f"Percentage must be <= 100, got {percentage}")


@dataclass
class WaybarOutput:
    """One record of Waybar's custom-module JSON protocol."""

    text: str
    tooltip: Optional[str] = None
    css_class: Optional[str] = None
    percentage: Optional[int] = None

    def with_tooltip(self, tooltip: str) -> "WaybarOutput":
        return replace(self, tooltip=str(tooltip))

    def with_class(self, css_class: str) -> "WaybarOutput":
        return replace(self, css_class=str(css_class))

    def with_percentage(self, percentage: int) -> "WaybarOutput":
        _check_percentage(percentage)
        return replace(self, percentage=percentage)

    def set_tooltip(self, tooltip: str) -> None:
        self.tooltip = str(tooltip)

    def set_class(self, css_class: str) -> None:
        self.css_class = str(css_class)

    def set_percentage(self, percentage: int) -> None:
        _check_percentage(percentage)
        self.percentage = percentage

    def to_dict(self) -> dict[str, Any]:
        """Return the protocol fields, leaving out those that are unset."""
        result: dict[str, Any] = {"text": self.text}
        if self.tooltip is not None:
            result["tooltip"] = self.tooltip
        if self.css_class is not None:
            result["class"] = self.css_class
        if self.percentage is not None:
            result["percentage"] = self.percentage
        return result

    def to_json(self) -> str:
        """Serialize to a compact single-line JSON string."""
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))


class IconPositionParseError(ValueError):
    """Raised when text does not name an icon position."""

    def __init__(self, input: str, valid_options: tuple[str, ...] = ("before", "after")) -> None:
        super().__init__(
            f"Invalid icon position '{input}'. Valid options: {', '.join(valid_options)}"
        )
        self.input = input
        self.valid_options = valid_options


class IconStyleParseError(ValueError):
    """Raised when text does not name an icon style."""

    def __init__(self, input: str, valid_options: tuple[str, ...] = ("nerdfont", "none")) -> None:
        super().__init__(
            f"Invalid icon style '{input}'. Valid options: {', '.join(valid_options)}"
        )
        self.input = input
        self.valid_options = valid_options


class _ValueEnum(str, Enum):
    def __str__(self) -> str:
        return self.value


class IconPosition(_ValueEnum):
    """Where the icon goes relative to the value."""

    BEFORE = "before"
    AFTER = "after"

    @classmethod
    def parse(cls, text: str) -> "IconPosition":
        key = text.lower()
        if key in ("before", "pre", "left"):
            return cls.BEFORE
        if key in ("after", "post", "right"):
            return cls.AFTER
        raise IconPositionParseError(text)


class IconStyle(_ValueEnum):
    """Whether sensors show Nerd Font icons or text only."""

    NERDFONT = "nerdfont"
    NONE = "none"

    @classmethod
    def parse(cls, text: str) -> "IconStyle":
        key = text.lower()
        if key in ("nerdfont", "nerd", "nf"):
            return cls.NERDFONT
        if key in ("none", "no", ""):
            return cls.NONE
        raise IconStyleParseError(text)


class SparklineStyle(_ValueEnum):
    """How sparklines are drawn."""

    BLOCKS = "blocks"
    BRAILLE = "braille"
    DOTS = "dots"
    NONE = "none"


class GaugeStyle(_ValueEnum):
    """How gauge bars are drawn."""

    BLOCKS = "blocks"
    ASCII = "ascii"
    DOTS = "dots"
    EQUALS = "equals"
    CUSTOM = "custom"


class TooltipDetail(_ValueEnum):
    """How much information tooltips carry."""

    BASIC = "basic"
    DETAILED = "detailed"
    EXPERT = "expert"


@dataclass
class Theme:
    """CSS class names used for the states a sensor can report."""

    normal: str = "normal"
    warning: str = "warning"
    critical: str = "critical"
    good: str = "good"
    unknown: str = "unknown"

    def with_normal(self, css_class: str) -> "Theme":
        return replace(self, normal=str(css_class))

    def with_warning(self, css_class: str) -> "Theme":
        return replace(self, warning=str(css_class))

    def with_critical(self, css_class: str) -> "Theme":
        return replace(self, critical=str(css_class))

    def with_good(self, css_class: str) -> "Theme":
        return replace(self, good=str(css_class))

    def with_unknown(self, css_class: str) -> "Theme":
        return replace(self, unknown=str(css_class))

    def class_for_thresholds(
        self, value: float, warning_threshold: float, critical_threshold: float
    ) -> str:
        """Pick the critical, warning or normal class for ``value``."""
        if value >= critical_threshold:
            return self.critical
        if value >= warning_threshold:
            return self.warning
        return self.normal