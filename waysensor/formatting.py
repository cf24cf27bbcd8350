"""Helpers that turn sensor readings into Waybar text, tooltips and charts."""

from __future__ import annotations

import math
import subprocess
import sys
from typing import Iterable, Optional, Sequence

from .config import SensorConfig
from .core import GaugeStyle, IconPosition, IconStyle, SparklineStyle, Theme, WaybarOutput

_BLOCKS = "▁▂▃▄▅▆▇█"
_DOTS = ".:·•"
_BRAILLE_BASE = 0x2800
_BRAILLE_FLAT = "⠤"
_BRAILLE_LEFT = {0: 0x00, 1: 0x04, 2: 0x06}
_BRAILLE_RIGHT = {0: 0x00, 1: 0x20, 2: 0x30}


def _span(color: str, content: str) -> str:
    return f'<span color="{color}">{content}</span>'


def _round_half_up(value: float) -> int:
    """Round to the nearest integer, ties away from zero; NaN and negatives give 0."""
    if math.isnan(value) or value <= 0:
        return 0
    if math.isinf(value):
        return sys.maxsize
    whole = math.floor(value)
    return whole + (1 if value - whole >= 0.5 else 0)


def _bounds(values: Iterable[float]) -> tuple[float, float]:
    finite = [v for v in values if not math.isnan(v)]
    if not finite:
        return math.inf, -math.inf
    return min(finite), max(finite)


def _is_flat(low: float, high: float) -> bool:
    spread = high - low
    return not math.isnan(spread) and abs(spread) < sys.float_info.epsilon


def with_icon(
    text: str,
    icon: str,
    style: IconStyle,
    position: IconPosition,
    spacing: int = 1,
) -> str:
    """Put ``icon`` before or after ``text``, or leave the text alone."""
    if style is IconStyle.NONE or not icon:
        return text
    spacer = " " * spacing
    if position is IconPosition.BEFORE:
        return f"{icon}{spacer}{text}"
    return f"{text}{spacer}{icon}"


def with_icon_and_colors(text: str, icon: str, config: SensorConfig) -> str:
    """Combine icon and text, coloring each with Pango markup as configured."""
    text_part = _span(config.text_color, text) if config.text_color is not None else text
    if config.icon_style is IconStyle.NONE or not icon.strip():
        return text_part
    icon_part = _span(config.icon_color, icon) if config.icon_color is not None else icon
    spacer = " " * config.icon_spacing
    if config.icon_position is IconPosition.BEFORE:
        return f"{icon_part}{spacer}{text_part}"
    return f"{text_part}{spacer}{icon_part}"


def key_only(key: str, config: SensorConfig) -> str:
    """A tooltip label followed by a colon, colored if configured."""
    label = f"{key}:"
    if config.tooltip_label_color is not None:
        return _span(config.tooltip_label_color, label)
    return label


def value_only(value: str, config: SensorConfig) -> str:
    """A tooltip value, colored if configured."""
    if config.tooltip_value_color is not None:
        return _span(config.tooltip_value_color, value)
    return value


def key_value(key: str, value: str, config: SensorConfig) -> str:
    """A ``key: value`` tooltip line with optional colors."""
    return f"{key_only(key, config)} {value_only(value, config)}"


def _scaled(amount: float, units: Sequence[str], threshold: float) -> str:
    index = 0
    while amount >= threshold and index < len(units) - 1:
        amount /= threshold
        index += 1
    if index == 0:
        return f"{amount:.0f}{units[index]}"
    return f"{amount:.1f}{units[index]}"


def bytes_to_human(size: int) -> str:
    """Format a byte count with binary (1024-based) units."""
    if size == 0:
        return "0B"
    return _scaled(float(size), ("B", "KB", "MB", "GB", "TB", "PB"), 1024.0)


def rate_to_human(bytes_per_second: int) -> str:
    """Format a byte rate, e.g. ``1.0KB/s``."""
    return f"{bytes_to_human(bytes_per_second)}/s"


def frequency_to_human(hz: int) -> str:
    """Format a frequency with decimal units up to GHz."""
    return _scaled(float(hz), ("Hz", "KHz", "MHz", "GHz"), 1000.0)


def create_gauge(percentage: float, width: int, style: GaugeStyle) -> str:
    """Draw a gauge bar ``width`` cells wide, filled to ``percentage``."""
    clamped = min(max(percentage, 0.0), 100.0)
    filled = _round_half_up(clamped / 100.0 * width)
    empty = max(width - filled, 0)
    if style is GaugeStyle.ASCII:
        return f"[{'#' * filled}{'-' * empty}]"
    if style is GaugeStyle.DOTS:
        return "●" * filled + "○" * empty
    if style is GaugeStyle.EQUALS:
        return f"[{'=' * filled}{' ' * empty}]"
    # Blocks, and custom until custom characters are configurable.
    return "█" * filled + "░" * empty


def themed_output(
    text: str,
    tooltip: Optional[str],
    percentage: Optional[int],
    value: float,
    warning_threshold: float,
    critical_threshold: float,
    theme: Theme,
) -> WaybarOutput:
    """Build output whose CSS class follows the theme's thresholds."""
    css_class = theme.class_for_thresholds(value, warning_threshold, critical_threshold)
    return WaybarOutput(text=text, tooltip=tooltip, css_class=css_class, percentage=percentage)


def simple_themed_output(
    text: str,
    tooltip: Optional[str],
    value: float,
    warning_threshold: float,
    critical_threshold: float,
    theme: Theme,
) -> WaybarOutput:
    """Like :func:`themed_output`, without a percentage."""
    return themed_output(
        text, tooltip, None, value, warning_threshold, critical_threshold, theme
    )


def _level_chars(values: Sequence[float], chars: str) -> str:
    if not values:
        return ""
    low, high = _bounds(values)
    if _is_flat(low, high):
        return chars[len(chars) // 2] * len(values)
    top = len(chars) - 1
    span = high - low
    return "".join(
        chars[min(_round_half_up((value - low) / span * top), top)] for value in values
    )


def create_block_sparkline(values: Sequence[float]) -> str:
    """Sparkline drawn with block characters ▁ to █."""
    return _level_chars(list(values), _BLOCKS)


def create_dot_sparkline(values: Sequence[float]) -> str:
    """Sparkline drawn with dots."""
    return _level_chars(list(values), _DOTS)


def create_braille_sparkline(values: Sequence[float]) -> str:
    """Sparkline with two values per Braille character."""
    values = list(values)
    if not values:
        return ""
    low, high = _bounds(values)
    if _is_flat(low, high):
        return _BRAILLE_FLAT * (len(values) // 2 + len(values) % 2)
    span = high - low
    chars = []
    for start in range(0, len(values), 2):
        pair = values[start:start + 2]
        left = pair[0]
        right = pair[1] if len(pair) > 1 else left
        left_level = _round_half_up((left - low) / span * 3.0)
        right_level = _round_half_up((right - low) / span * 3.0)
        pattern = (
            _BRAILLE_BASE
            | _BRAILLE_LEFT.get(left_level, 0x07)
            | _BRAILLE_RIGHT.get(right_level, 0x38)
        )
        chars.append(chr(pattern))
    return "".join(chars)


def create_sparkline(values: Sequence[float], style: SparklineStyle) -> str:
    """Draw ``values`` as a sparkline in the given style."""
    values = list(values)
    if not values or style is SparklineStyle.NONE:
        return ""
    if style is SparklineStyle.BRAILLE:
        return create_braille_sparkline(values)
    if style is SparklineStyle.DOTS:
        return create_dot_sparkline(values)
    return create_block_sparkline(values)


def status_indicator(
    value: float,
    warning_threshold: float,
    critical_threshold: float,
    status_indicators_enabled: bool,
) -> Optional[str]:
    """An emoji for the value's state, "" for normal, None when disabled."""
    if not status_indicators_enabled:
        return None
    if value >= critical_threshold:
        return "🔴"
    if value >= warning_threshold:
        return "🟡"
    if value < warning_threshold * 0.3:
        return "🟢"
    return ""


def colored_sparkline(sparkline: str, color: Optional[str]) -> str:
    """Wrap a sparkline in a color span when a color is given."""
    return _span(color, sparkline) if color is not None else sparkline


def parse_process_listing(
    text: str, count: int, max_name_length: int
) -> list[tuple[str, float]]:
    """Parse ``pid value command`` lines, looking at no more than ``count`` lines."""
    processes = []
    for line in text.splitlines()[:count]:
        parts = line.split()
        if len(parts) < 3:
            continue
        try:
            usage = float(parts[1])
        except ValueError:
            continue
        name = parts[2]
        if len(name) > max_name_length:
            name = name[:max(max_name_length - 3, 0)] + "..."
        processes.append((name, usage))
    return processes


def _top_processes(field: str, count: int, max_name_length: int) -> list[tuple[str, float]]:
    try:
        result = subprocess.run(
            ["ps", "-eo", f"pid,{field},comm", f"--sort=-{field}", "--no-headers"],
            capture_output=True,
            check=False,
        )
    except OSError:
        return []
    if result.returncode != 0:
        return []
    stdout = result.stdout
    if isinstance(stdout, bytes):
        stdout = stdout.decode("utf-8", errors="replace")
    return parse_process_listing(stdout, count, max_name_length)


def get_top_processes_by_cpu(count: int, max_name_length: int) -> list[tuple[str, float]]:
    """The processes using the most CPU, as (name, percent) pairs."""
    return _top_processes("pcpu", count, max_name_length)


def get_top_processes_by_memory(count: int, max_name_length: int) -> list[tuple[str, float]]:
    """The processes using the most memory, as (name, percent) pairs."""
    return _top_processes("pmem", count, max_name_length)


def format_top_processes(
    processes: Sequence[tuple[str, float]],
    metric_name: str,
    label_color: Optional[str],
    value_color: Optional[str],
) -> str:
    """Tooltip section listing processes and their usage percentages."""
    if not processes:
        return ""
    title = _span(label_color, metric_name) if label_color is not None else metric_name
    lines = [f"\n\n{title}:"]
    for name, usage in processes:
        amount = f"{usage:.1f}%"
        if value_color is not None:
            amount = _span(value_color, amount)
        lines.append(f"\n  {name}: {amount}")
    return "".join(lines)