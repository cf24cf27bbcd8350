"""Reading and writing RON (Rusty Object Notation), the configuration file format.

Values map onto Python as follows:

* structs ``(field: value, ...)`` and ``Name(field: value, ...)`` become
  :class:`Struct`, a ``dict`` that also remembers the optional struct name;
  a named tuple struct ``Name(a, b)`` becomes a :class:`Struct` whose keys
  are the positions ``0, 1, ...``; the unit value ``()`` is an empty
  :class:`Struct`;
* maps ``{key: value}`` become ``dict``, lists ``[...]`` become ``list`` and
  tuples ``(a, b)`` become ``tuple``;
* ``Some(x)`` becomes :class:`Some`, ``None`` becomes ``None``;
* bare identifiers such as enum variants become :class:`Ident`, a ``str``;
* strings and characters become ``str``, numbers ``int`` or ``float``.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Optional, Union


class RonError(ValueError):
    """Raised when RON text cannot be read or a value cannot be written."""

    def __init__(
        self, message: str, line: Optional[int] = None, column: Optional[int] = None
    ) -> None:
        where = f" at line {line}, column {column}" if line is not None else ""
        super().__init__(f"{message}{where}")
        self.message = message
        self.line = line
        self.column = column


class Ident(str):
    """A bare identifier, such as an enum variant name."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Ident({str.__repr__(self)})"


@dataclass(frozen=True)
class Some:
    """An optional value that is present."""

    value: Any


class Struct(dict):
    """A RON struct: its fields as a dict, plus the struct name if one was given."""

    def __init__(self, fields: Union[Mapping, Iterable] = (), name: Optional[str] = None) -> None:
        super().__init__(fields)
        self.name = name or None

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Struct) and self.name != other.name:
            return False
        return dict.__eq__(self, other)

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Struct({dict.__repr__(self)}, name={self.name!r})"


_IDENT_RE = re.compile(r"(r#)?([A-Za-z_][A-Za-z0-9_]*)")
_IDENT_FULL_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")
_RAW_STRING_RE = re.compile(r'r(#*)"')
_RADIX_RE = re.compile(r"([+-]?)0([xbo])([0-9A-Fa-f_]+)(?:[iu](?:8|16|32|64|128|size))?")
_DECIMAL_RE = re.compile(
    r"[+-]?(?:[0-9][0-9_]*(?:\.[0-9_]*)?|\.[0-9][0-9_]*)(?:[eE][+-]?[0-9][0-9_]*)?"
)
_NUM_SUFFIX_RE = re.compile(r"(?:[iu](?:8|16|32|64|128|size)|f32|f64)")
_STRING_CHUNK_RE = re.compile(r'[^"\\]+')
_KEYWORDS = frozenset({"true", "false", "None", "Some", "inf", "NaN"})
_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "\\": "\\",
    '"': '"',
    "'": "'",
    "/": "/",
    "b": "\b",
    "f": "\f",
}
_RADIX_BASES = {"x": 16, "b": 2, "o": 8}


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def error(self, message: str, pos: Optional[int] = None) -> RonError:
        at = self.pos if pos is None else pos
        line = self.text.count("\n", 0, at) + 1
        column = at - (self.text.rfind("\n", 0, at) + 1) + 1
        return RonError(message, line, column)

    def parse_document(self) -> Any:
        self.skip()
        while self.text.startswith("#!", self.pos):
            self.skip_attribute()
            self.skip()
        value = self.value()
        self.skip()
        if self.pos < len(self.text):
            raise self.error(f"unexpected {self.text[self.pos]!r} after value")
        return value

    def skip_attribute(self) -> None:
        start = self.pos
        self.pos += 2
        self.skip()
        self.expect("[")
        depth = 1
        while depth:
            if self.pos >= len(self.text):
                raise self.error("unterminated attribute", start)
            char = self.text[self.pos]
            depth += {"[": 1, "]": -1}.get(char, 0)
            self.pos += 1

    def skip(self) -> None:
        text, size = self.text, len(self.text)
        while self.pos < size:
            if text[self.pos].isspace():
                self.pos += 1
            elif text.startswith("//", self.pos):
                end = text.find("\n", self.pos)
                self.pos = size if end < 0 else end + 1
            elif text.startswith("/*", self.pos):
                self.skip_block_comment()
            else:
                break

    def skip_block_comment(self) -> None:
        start, depth = self.pos, 0
        while True:
            if self.text.startswith("/*", self.pos):
                depth += 1
                self.pos += 2
            elif self.text.startswith("*/", self.pos):
                depth -= 1
                self.pos += 2
                if depth == 0:
                    return
            elif self.pos >= len(self.text):
                raise self.error("unterminated block comment", start)
            else:
                self.pos += 1

    def take(self, token: str) -> bool:
        if self.text.startswith(token, self.pos):
            self.pos += len(token)
            return True
        return False

    def expect(self, token: str) -> None:
        if not self.take(token):
            found = repr(self.text[self.pos]) if self.pos < len(self.text) else "end of input"
            raise self.error(f"expected {token!r}, found {found}")

    def is_ident_char(self, pos: int) -> bool:
        return pos < len(self.text) and (self.text[pos].isalnum() or self.text[pos] == "_")

    def value(self) -> Any:
        self.skip()
        if self.pos >= len(self.text):
            raise self.error("unexpected end of input")
        char = self.text[self.pos]
        if char == '"':
            return self.string()
        if char == "'":
            return self.char()
        if char == "[":
            self.pos += 1
            return self.sequence("]")
        if char == "{":
            return self.map()
        if char == "(":
            self.pos += 1
            return self.paren_body(None)
        if _RAW_STRING_RE.match(self.text, self.pos):
            return self.raw_string()
        if char in "+-":
            for word, special in (("inf", math.inf), ("NaN", math.nan)):
                end = self.pos + 1 + len(word)
                if self.text.startswith(word, self.pos + 1) and not self.is_ident_char(end):
                    self.pos = end
                    return -special if char == "-" else special
            return self.number()
        if char.isdigit() or char == ".":
            return self.number()
        match = _IDENT_RE.match(self.text, self.pos)
        if match:
            return self.ident_value(match)
        raise self.error(f"unexpected character {char!r}")

    def number(self) -> Union[int, float]:
        start = self.pos
        match = _RADIX_RE.match(self.text, self.pos)
        if match:
            sign, kind, digits = match.groups()
            try:
                value = int(digits.replace("_", ""), _RADIX_BASES[kind])
            except ValueError:
                raise self.error(f"invalid number {match.group()!r}", start) from None
            self.pos = match.end()
            if self.is_ident_char(self.pos):
                raise self.error("invalid number", start)
            return -value if sign == "-" else value
        match = _DECIMAL_RE.match(self.text, self.pos)
        if not match:
            raise self.error("invalid number")
        body = match.group()
        self.pos = match.end()
        suffix_match = _NUM_SUFFIX_RE.match(self.text, self.pos)
        suffix = ""
        if suffix_match:
            suffix = suffix_match.group()
            self.pos = suffix_match.end()
        if self.is_ident_char(self.pos):
            raise self.error("invalid number", start)
        cleaned = body.replace("_", "")
        try:
            if suffix.startswith("f") or any(c in cleaned for c in ".eE"):
                return float(cleaned)
            return int(cleaned)
        except ValueError:
            raise self.error(f"invalid number {body!r}", start) from None

    def string(self) -> str:
        start = self.pos
        self.pos += 1
        parts: list[str] = []
        while True:
            if self.pos >= len(self.text):
                raise self.error("unterminated string", start)
            chunk = _STRING_CHUNK_RE.match(self.text, self.pos)
            if chunk:
                parts.append(chunk.group())
                self.pos = chunk.end()
                continue
            if self.text[self.pos] == '"':
                self.pos += 1
                return "".join(parts)
            parts.append(self.escape())

    def raw_string(self) -> str:
        match = _RAW_STRING_RE.match(self.text, self.pos)
        assert match is not None
        start = self.pos
        marker = '"' + match.group(1)
        end = self.text.find(marker, match.end())
        if end < 0:
            raise self.error("unterminated raw string", start)
        self.pos = end + len(marker)
        return self.text[match.end():end]

    def char(self) -> str:
        start = self.pos
        self.pos += 1
        if self.pos >= len(self.text):
            raise self.error("unterminated character", start)
        if self.text[self.pos] == "\\":
            value = self.escape()
            if not value:
                raise self.error("invalid character literal", start)
        else:
            value = self.text[self.pos]
            self.pos += 1
        self.expect("'")
        return value

    def hex_digits(self, count: int, start: int) -> int:
        digits = self.text[self.pos:self.pos + count]
        if len(digits) != count or not all(c in "0123456789abcdefABCDEF" for c in digits):
            raise self.error("invalid escape sequence", start)
        self.pos += count
        return int(digits, 16)

    def code_point(self, code: int, start: int) -> str:
        if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
            raise self.error(f"invalid code point {code:#x}", start)
        return chr(code)

    def escape(self) -> str:
        start = self.pos
        self.pos += 1
        if self.pos >= len(self.text):
            raise self.error("unterminated escape sequence", start)
        kind = self.text[self.pos]
        self.pos += 1
        if kind in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[kind]
        if kind == "\n":
            while self.pos < len(self.text) and self.text[self.pos].isspace():
                self.pos += 1
            return ""
        if kind == "x":
            return chr(self.hex_digits(2, start))
        if kind == "u":
            if self.take("{"):
                end = self.text.find("}", self.pos)
                digits = self.text[self.pos:end] if end >= 0 else ""
                if not 1 <= len(digits) <= 6 or not all(
                    c in "0123456789abcdefABCDEF" for c in digits
                ):
                    raise self.error("invalid unicode escape", start)
                self.pos = end + 1
                return self.code_point(int(digits, 16), start)
            code = self.hex_digits(4, start)
            if 0xD800 <= code <= 0xDBFF and self.text.startswith("\\u", self.pos):
                saved = self.pos
                self.pos += 2
                low = self.hex_digits(4, start)
                if 0xDC00 <= low <= 0xDFFF:
                    return chr(0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00))
                self.pos = saved
            return self.code_point(code, start)
        raise self.error(f"unknown escape sequence '\\{kind}'", start)

    def ident_value(self, match: re.Match) -> Any:
        raw = match.group(1) is not None
        name = match.group(2)
        self.pos = match.end()
        if not raw:
            if name == "true":
                return True
            if name == "false":
                return False
            if name == "None":
                return None
            if name == "inf":
                return math.inf
            if name == "NaN":
                return math.nan
            if name == "Some":
                self.skip()
                self.expect("(")
                inner = self.value()
                self.skip()
                if self.take(","):
                    self.skip()
                self.expect(")")
                return Some(inner)
        self.skip()
        if self.take("("):
            return self.paren_body(name)
        return Ident(name)

    def at_field(self) -> bool:
        match = _IDENT_RE.match(self.text, self.pos)
        if not match:
            return False
        saved = self.pos
        self.pos = match.end()
        self.skip()
        found = self.text.startswith(":", self.pos)
        self.pos = saved
        return found

    def paren_body(self, name: Optional[str]) -> Any:
        self.skip()
        if self.take(")"):
            return Struct(name=name)
        if self.at_field():
            return Struct(self.fields(), name)
        items = self.sequence(")")
        if name is None:
            return tuple(items)
        return Struct(enumerate(items), name)

    def fields(self) -> dict[str, Any]:
        fields: dict[str, Any] = {}
        while True:
            self.skip()
            if self.take(")"):
                return fields
            start = self.pos
            match = _IDENT_RE.match(self.text, self.pos)
            if not match:
                raise self.error("expected a field name")
            key = match.group(2)
            self.pos = match.end()
            self.skip()
            self.expect(":")
            if key in fields:
                raise self.error(f"duplicate field {key!r}", start)
            fields[key] = self.value()
            self.skip()
            if not self.take(","):
                self.expect(")")
                return fields

    def sequence(self, close: str) -> list[Any]:
        items: list[Any] = []
        while True:
            self.skip()
            if self.take(close):
                return items
            items.append(self.value())
            self.skip()
            if not self.take(","):
                self.expect(close)
                return items

    def map(self) -> dict[Any, Any]:
        self.pos += 1
        result: dict[Any, Any] = {}
        while True:
            self.skip()
            if self.take("}"):
                return result
            start = self.pos
            key = self.value()
            try:
                hash(key)
            except TypeError:
                raise self.error("map keys must be hashable values", start) from None
            self.skip()
            self.expect(":")
            result[key] = self.value()
            self.skip()
            if not self.take(","):
                self.expect("}")
                return result


def loads(text: Union[str, bytes]) -> Any:
    """Parse a RON document into Python values."""
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("utf-8")
    if text.startswith("\ufeff"):
        text = text[1:]
    return _Parser(text).parse_document()


def _escape_char(match: re.Match) -> str:
    char = match.group()
    mapped = {'"': '\\"', "\\": "\\\\", "\n": "\\n", "\r": "\\r", "\t": "\\t", "\0": "\\0"}
    return mapped.get(char, f"\\u{{{ord(char):x}}}")


_NEEDS_ESCAPE_RE = re.compile('["\\\\\x00-\x1f\x7f]')


def _quote(text: str) -> str:
    return '"' + _NEEDS_ESCAPE_RE.sub(_escape_char, text) + '"'


def _ident_text(name: str) -> str:
    if not _IDENT_FULL_RE.match(name):
        raise RonError(f"{name!r} is not a valid identifier")
    return f"r#{name}" if name in _KEYWORDS else name


def _float_text(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = repr(value)
    return text if any(c in text for c in ".eE") else f"{text}.0"


class _Writer:
    def __init__(self, unit: Optional[str]) -> None:
        self.unit = unit

    def block(self, open_: str, close: str, items: list[str], level: int) -> str:
        if not items:
            return open_ + close
        if self.unit is None:
            return open_ + ", ".join(items) + close
        inner = self.unit * (level + 1)
        body = "".join(f"{inner}{item},\n" for item in items)
        return f"{open_}\n{body}{self.unit * level}{close}"

    def items(self, values: Iterable[Any], level: int) -> list[str]:
        return [self.write(item, level + 1) for item in values]

    def write(self, value: Any, level: int) -> str:
        if value is None:
            return "None"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, Some):
            return f"Some({self.write(value.value, level)})"
        if isinstance(value, Ident):
            return _ident_text(value)
        if isinstance(value, Enum):
            inner = value.value
            return self.write(Ident(inner) if isinstance(inner, str) else inner, level)
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            return _float_text(value)
        if isinstance(value, str):
            return _quote(value)
        if isinstance(value, Struct):
            return self.struct(value, level)
        if isinstance(value, Mapping):
            entries = [
                f"{self.write(key, level + 1)}: {self.write(item, level + 1)}"
                for key, item in value.items()
            ]
            return self.block("{", "}", entries, level)
        if isinstance(value, tuple):
            return self.block("(", ")", self.items(value, level), level)
        if isinstance(value, list):
            return self.block("[", "]", self.items(value, level), level)
        raise RonError(f"cannot represent {type(value).__name__} in RON")

    def struct(self, value: Struct, level: int) -> str:
        prefix = _ident_text(value.name) if value.name else ""
        keys = list(value)
        if keys and keys == list(range(len(keys))):
            return prefix + self.block("(", ")", self.items(value.values(), level), level)
        entries = []
        for key, item in value.items():
            if not isinstance(key, str) or not _IDENT_FULL_RE.match(key):
                raise RonError(f"struct field name {key!r} is not an identifier")
            entries.append(f"{key}: {self.write(item, level + 1)}")
        return prefix + self.block("(", ")", entries, level)


def dumps(value: Any, indent: Union[int, str, None] = 4) -> str:
    """Write ``value`` as RON; ``indent`` is spaces or a string per level, None for one line."""
    unit = " " * indent if isinstance(indent, int) else indent
    return _Writer(unit).write(value, 0)


Serializer = Callable[[Any], str]