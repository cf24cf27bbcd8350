import math

import pytest

from waysensor.core import IconPosition, IconStyle, SparklineStyle
from waysensor.ron import Ident, RonError, Some, Struct, dumps, loads

CONFIG_SNIPPET = r'''// waysensor-rs Configuration File
(
    // Default icon style for all sensors
    icon_style: nerdfont,
    icon_position: before,
    icon_spacing: 1,
    update_interval: 1000,
    icons: (
        cpu: "\u{F4BC}",                    /* CPU chip icon */
        network_wifi: "\u{F05A9}",
    ),
    colors: (
        icon_color: Some("#7aa2f7"),
        text_color: None,
    ),
    visuals: (
        sparklines: true,
        status_indicators: false,
    ),
    sensors: {
        "cpu": {
            "warning_threshold": 75,
            "show_per_core": true,
        },
        "amd-gpu": {
            "display_order": ["temperature", "power", "utilization"],
        },
    },
)
'''

SAMPLE = Struct(
    {
        "icon_style": Ident("nerdfont"),
        "update_interval": 1000,
        "ratio": 0.25,
        "limit": float("inf"),
        "big": 1e20,
        "icons": Struct({"cpu": "\uf4bc", "gpu": "\U000f08ae"}),
        "colors": Struct({"icon_color": Some("#7aa2f7"), "text_color": None}),
        "text": 'quote " backslash \\ newline \n tab \t bell \x07',
        "sensors": {"cpu": {"warning_threshold": 75, "enabled": True}},
        "points": [
            Struct({"x": 1, "y": 2}, name="Point"),
            Struct({0: -1, 1: "b"}, name="Pair"),
        ],
        "pairs": {(1, 2): "a", Ident("key"): Some(Some(False))},
        "empty_list": [],
        "nested": ((1,), ("x", 2.5)),
    }
)


def test_loads_config_snippet_structure():
    cfg = loads(CONFIG_SNIPPET)
    assert isinstance(cfg, Struct)
    assert cfg.name is None
    assert IconStyle(cfg["icon_style"]) is IconStyle.NERDFONT
    assert IconPosition(cfg["icon_position"]) is IconPosition.BEFORE
    assert cfg["icon_spacing"] == 1
    assert cfg["update_interval"] == 1000
    assert cfg["colors"]["icon_color"] == Some("#7aa2f7")
    assert cfg["colors"]["text_color"] is None
    assert cfg["visuals"]["sparklines"] is True
    assert cfg["visuals"]["status_indicators"] is False
    assert cfg["sensors"]["cpu"] == {"warning_threshold": 75, "show_per_core": True}
    assert cfg["sensors"]["amd-gpu"]["display_order"] == ["temperature", "power", "utilization"]


def test_unicode_escapes_in_icons():
    icons = loads(CONFIG_SNIPPET)["icons"]
    assert icons["cpu"] == "\uf4bc"
    assert icons["network_wifi"] == "\U000f05a9"


def test_bare_identifier_is_ident():
    value = loads("blocks")
    assert isinstance(value, Ident)
    assert SparklineStyle(value) is SparklineStyle.BLOCKS


def test_named_struct():
    value = loads("Point(x: 1, y: -2)")
    assert value.name == "Point"
    assert value == {"x": 1, "y": -2}


def test_named_tuple_struct():
    value = loads('Pair(1, "a")')
    assert value.name == "Pair"
    assert list(value.values()) == [1, "a"]
    assert dumps(value, None) == 'Pair(1, "a")'


def test_tuples_and_lists():
    assert loads('(1, "a", true)') == (1, "a", True)
    assert loads("[1, 2, 3,]") == [1, 2, 3]
    assert loads("(Some(1), 2)") == (Some(1), 2)


def test_numbers():
    assert loads("12_000") == 12_000
    assert loads("255u8") == 255
    assert loads("0xff") == 0xFF
    assert loads("0b1010") == 0b1010
    assert loads("0o17") == 0o17
    assert loads("-1.5e3") == -1.5e3
    assert loads(".5") == 0.5
    assert isinstance(loads("2.0"), float)
    assert math.isinf(loads("-inf")) and loads("-inf") < 0
    assert math.isnan(loads("NaN"))


def test_some_nesting():
    assert loads("Some(Some(3))") == Some(Some(3))
    assert loads("Some( [1, 2], )") == Some([1, 2])


def test_nested_comments_are_skipped():
    assert loads("/* a /* nested */ still comment */ 5 // trailing") == 5


def test_leading_attributes_are_ignored():
    assert loads("#![enable(implicit_some)]\n(a: 1)") == {"a": 1}


def test_raw_string():
    assert loads('r#"say "hi" \\n"#') == 'say "hi" \\n'


def test_char_and_string_escapes():
    assert loads(r"'\n'") == "\n"
    assert loads(r'"tab\there \"q\" \\"') == 'tab\there "q" \\'


def test_bytes_input():
    assert loads(b"[1]") == [1]


def test_pretty_layout():
    value = Struct({"icon_spacing": 1, "icon_color": Some("#7aa2f7")})
    assert dumps(value, 4) == '(\n    icon_spacing: 1,\n    icon_color: Some("#7aa2f7"),\n)'


def test_compact_layout():
    assert dumps({"cpu": [1, 2]}, None) == '{"cpu": [1, 2]}'


def test_dumps_enums_as_identifiers():
    assert dumps(IconStyle.NERDFONT) == IconStyle.NERDFONT.value
    assert loads(dumps(SparklineStyle.NONE)) == SparklineStyle.NONE.value


def test_keyword_identifier_round_trip():
    value = loads(dumps(Ident("true")))
    assert isinstance(value, Ident)
    assert value == Ident("true")


def test_empty_containers_round_trip():
    assert loads(dumps(Struct())) == Struct()
    assert loads(dumps([])) == []
    assert loads(dumps({})) == {}


@pytest.mark.parametrize("indent", [4, 2, None, "\t"])
def test_round_trip(indent):
    text = dumps(SAMPLE, indent)
    restored = loads(text)
    assert restored == SAMPLE
    assert restored["points"][0].name == "Point"
    assert restored["points"][1].name == "Pair"
    assert isinstance(restored["icon_style"], Ident)


def test_dumps_is_stable_after_round_trip():
    text = dumps(SAMPLE)
    assert dumps(loads(text)) == text


def test_compact_output_is_single_line():
    assert "\n" not in dumps(SAMPLE, None)


def test_struct_equality_uses_name():
    assert Struct({"a": 1}, name="A") != Struct({"a": 1}, name="B")
    assert Struct({"a": 1}, name="A") == Struct({"a": 1}, name="A")
    assert Struct({"a": 1}) == {"a": 1}


@pytest.mark.parametrize(
    "text",
    [
        "(a: 1",
        "[1, 2",
        "(a: 1, a: 2)",
        '"abc',
        "1 2",
        "/* open",
        "@",
        "{[1]: 2}",
        "0xZZ",
        "'ab'",
        '"\\q"',
        '"\\u{110000}"',
        "1.5.3",
        "",
    ],
)
def test_invalid_documents_raise(text):
    with pytest.raises(RonError):
        loads(text)


def test_error_reports_line():
    with pytest.raises(RonError) as info:
        loads("(\n  a: @\n)")
    assert info.value.line == 2
    assert info.value.column > 1


@pytest.mark.parametrize(
    "value",
    [object(), Struct({"not valid": 1}), {"a": {1, 2}}, Ident("no spaces allowed")],
)
def test_unrepresentable_values_raise(value):
    with pytest.raises(RonError):
        dumps(value)