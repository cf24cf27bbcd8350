import subprocess
from unittest import mock

import pytest

from waysensor import formatting
from waysensor.config import SensorConfig
from waysensor.core import GaugeStyle, IconPosition, IconStyle, SparklineStyle, Theme

ICON = "\U000f035b"


def test_bytes_to_human():
    assert formatting.bytes_to_human(0) == "0B"
    assert formatting.bytes_to_human(512) == "512B"
    assert formatting.bytes_to_human(1024) == "1.0KB"
    assert formatting.bytes_to_human(1536) == "1.5KB"
    assert formatting.bytes_to_human(1048576) == "1.0MB"
    assert formatting.bytes_to_human(1073741824) == "1.0GB"


def test_rate_to_human():
    assert formatting.rate_to_human(1024) == "1.0KB/s"
    assert formatting.rate_to_human(1048576) == "1.0MB/s"


def test_frequency_to_human():
    assert formatting.frequency_to_human(1000) == "1.0KHz"
    assert formatting.frequency_to_human(1500000) == "1.5MHz"
    assert formatting.frequency_to_human(2400000000) == "2.4GHz"


def test_with_icon():
    nf, none = IconStyle.NERDFONT, IconStyle.NONE
    before, after = IconPosition.BEFORE, IconPosition.AFTER
    assert formatting.with_icon("50%", ICON, nf, before, 1) == f"{ICON} 50%"
    assert formatting.with_icon("50%", ICON, nf, after, 1) == f"50% {ICON}"
    assert formatting.with_icon("50%", ICON, none, before, 1) == "50%"
    assert formatting.with_icon("50%", "", nf, before, 1) == "50%"
    assert formatting.with_icon("50%", ICON, nf, before, 2) == f"{ICON}  50%"
    assert formatting.with_icon("50%", ICON, nf, after, 3) == f"50%   {ICON}"


def test_with_icon_and_colors_icon_color():
    config = SensorConfig().with_icon_style(IconStyle.NERDFONT).with_icon_color("#7aa2f7")
    result = formatting.with_icon_and_colors("50%", ICON, config)
    assert result == f'<span color="#7aa2f7">{ICON}</span> 50%'


def test_with_icon_and_colors_blank_icon_and_text_color():
    config = SensorConfig().with_icon_style(IconStyle.NERDFONT).with_text_color("#c0caf5")
    assert formatting.with_icon_and_colors("50%", "  ", config) == '<span color="#c0caf5">50%</span>'


def test_with_icon_and_colors_after():
    config = (
        SensorConfig()
        .with_icon_style(IconStyle.NERDFONT)
        .with_icon_position(IconPosition.AFTER)
        .with_text_color("#111111")
    )
    assert formatting.with_icon_and_colors("50%", ICON, config) == f'<span color="#111111">50%</span> {ICON}'


def test_with_icon_and_colors_no_style():
    assert formatting.with_icon_and_colors("50%", ICON, SensorConfig()) == "50%"


def test_key_value():
    config = (
        SensorConfig()
        .with_tooltip_label_color("#bb9af7")
        .with_tooltip_value_color("#9ece6a")
    )
    assert formatting.key_value("CPU", "AMD Ryzen 9", config) == (
        '<span color="#bb9af7">CPU:</span> <span color="#9ece6a">AMD Ryzen 9</span>'
    )
    assert formatting.key_value("CPU", "x", SensorConfig()) == "CPU: x"


def test_key_only_and_value_only():
    config = SensorConfig().with_tooltip_label_color("#123456")
    assert formatting.key_only("Load", config) == '<span color="#123456">Load:</span>'
    assert formatting.value_only("3", config) == "3"


@pytest.mark.parametrize(
    "percentage, style, expected",
    [
        (50.0, GaugeStyle.BLOCKS, "█████░░░░░"),
        (30.0, GaugeStyle.ASCII, "[###-------]"),
        (25.0, GaugeStyle.ASCII, "[###-------]"),
        (40.0, GaugeStyle.DOTS, "●●●●○○○○○○"),
        (20.0, GaugeStyle.EQUALS, "[==        ]"),
        (150.0, GaugeStyle.CUSTOM, "██████████"),
        (-10.0, GaugeStyle.BLOCKS, "░░░░░░░░░░"),
    ],
)
def test_create_gauge(percentage, style, expected):
    assert formatting.create_gauge(percentage, 10, style) == expected


def test_themed_output():
    output = formatting.themed_output(
        "50%", "CPU Usage: 50%", 50, 50.0, 70.0, 90.0, Theme()
    )
    assert output.text == "50%"
    assert output.css_class == "normal"
    assert output.percentage == 50


def test_themed_output_warning():
    output = formatting.themed_output("85%", "CPU Usage: 85%", 85, 85.0, 70.0, 90.0, Theme())
    assert output.css_class == "warning"


def test_simple_themed_output():
    output = formatting.simple_themed_output("hot", None, 95.0, 70.0, 90.0, Theme())
    assert output.css_class == "critical"
    assert output.percentage is None


def test_block_sparkline():
    assert formatting.create_block_sparkline([0.0, 50.0, 100.0]) == "▁▅█"
    assert formatting.create_block_sparkline([3.0, 3.0, 3.0]) == "▅▅▅"
    assert formatting.create_block_sparkline([]) == ""


def test_dot_sparkline():
    assert formatting.create_dot_sparkline([0.0, 100.0]) == ".•"
    assert formatting.create_dot_sparkline([1.0, 1.0]) == "··"


def test_braille_sparkline():
    assert formatting.create_braille_sparkline([0.0, 100.0]) == "\u2838"
    assert formatting.create_braille_sparkline([100.0, 0.0, 100.0]) == "\u2807\u283f"
    assert formatting.create_braille_sparkline([5.0, 5.0, 5.0]) == "⠤⠤"


def test_create_sparkline_dispatch():
    data = [0.0, 100.0]
    assert formatting.create_sparkline(data, SparklineStyle.BLOCKS) == "▁█"
    assert formatting.create_sparkline(data, SparklineStyle.DOTS) == ".•"
    assert formatting.create_sparkline(data, SparklineStyle.BRAILLE) == "\u2838"
    assert formatting.create_sparkline(data, SparklineStyle.NONE) == ""
    assert formatting.create_sparkline([], SparklineStyle.BLOCKS) == ""


def test_sparkline_length_matches_input():
    data = [10.0, 20.0, 50.0, 80.0, 30.0, 60.0]
    line = formatting.create_sparkline(data, SparklineStyle.BLOCKS)
    assert len(line) == len(data)
    assert set(line) <= set("▁▂▃▄▅▆▇█")


def test_status_indicator():
    assert formatting.status_indicator(95.0, 70.0, 90.0, True) == "🔴"
    assert formatting.status_indicator(80.0, 70.0, 90.0, True) == "🟡"
    assert formatting.status_indicator(10.0, 70.0, 90.0, True) == "🟢"
    assert formatting.status_indicator(50.0, 70.0, 90.0, True) == ""
    assert formatting.status_indicator(95.0, 70.0, 90.0, False) is None


def test_colored_sparkline():
    assert formatting.colored_sparkline("▁█", "#f7768e") == '<span color="#f7768e">▁█</span>'
    assert formatting.colored_sparkline("▁█", None) == "▁█"


def test_parse_process_listing():
    text = "  123 45.5 firefox\n  456 2.0 averyveryverylongprocessname\n  789 1.0 bash\n"
    assert formatting.parse_process_listing(text, 2, 10) == [
        ("firefox", 45.5),
        ("averyve...", 2.0),
    ]


def test_parse_process_listing_skips_bad_lines_within_count():
    text = "garbage\n1 x name\n2 3.5 ok\n3 1.0 late\n"
    assert formatting.parse_process_listing(text, 3, 20) == [("ok", 3.5)]


def test_format_top_processes():
    procs = [("a", 12.34), ("b", 1.0)]
    assert formatting.format_top_processes(procs, "Top CPU", None, None) == (
        "\n\nTop CPU:\n  a: 12.3%\n  b: 1.0%"
    )
    assert formatting.format_top_processes(procs[:1], "Top", "#111", "#222") == (
        '\n\n<span color="#111">Top</span>:\n  a: <span color="#222">12.3%</span>'
    )
    assert formatting.format_top_processes([], "Top", None, None) == ""


def test_top_processes_by_cpu_parses_ps_output():
    done = subprocess.CompletedProcess(["ps"], 0, stdout=b"1 20.0 python\n2 5.5 sh\n", stderr=b"")
    with mock.patch("waysensor.formatting.subprocess.run", return_value=done) as run:
        result = formatting.get_top_processes_by_cpu(5, 20)
    assert result == [("python", 20.0), ("sh", 5.5)]
    assert "--sort=-pcpu" in run.call_args[0][0]


def test_top_processes_by_memory_failure_status():
    done = subprocess.CompletedProcess(["ps"], 1, stdout=b"1 20.0 python\n", stderr=b"")
    with mock.patch("waysensor.formatting.subprocess.run", return_value=done):
        assert formatting.get_top_processes_by_memory(5, 20) == []


def test_top_processes_missing_ps():
    with mock.patch("waysensor.formatting.subprocess.run", side_effect=FileNotFoundError):
        assert formatting.get_top_processes_by_cpu(5, 20) == []