from __future__ import annotations

import re
from typing import Iterator

from gradelut.errors import MalformedDataError


# Longest numeric prefix accepted by a C "%f" conversion.
_FLOAT_RE = re.compile(
    r"\s*([+-]?(?:0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)(?:[pP][+-]?\d+)?"
    r"|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
    r"|inf(?:inity)?|nan(?:\([0-9A-Za-z_]*\))?))",
    re.IGNORECASE,
)
_LINE_RE = re.compile(r"([^\r\n]*)\r*\n?")
_DEC_INT_RE = re.compile(r"\s*([+-]?\d+)")
_C_INT_RE = re.compile(r"\s*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9]\d*)")


def is_skip_line(line: str) -> bool:
    """True for blank lines and ``#`` comments."""
    stripped = line.lstrip()
    return not stripped or stripped.startswith("#")


def _float_token(text: str) -> float:
    body = text.lstrip("+-").lower()
    if body.startswith("0x"):
        return float.fromhex(text)
    if body.startswith("nan"):
        return float("nan")
    return float(text)


def scan_floats(text: str, count: int) -> list[float]:
    """Scan up to ``count`` whitespace-separated floats from the start of ``text``.

    Scanning stops at the first token that does not start with a number, so
    the result may be shorter than ``count``. Anything after the last
    requested value is ignored.
    """
    values: list[float] = []
    pos = 0
    while len(values) < count:
        m = _FLOAT_RE.match(text, pos)
        if m is None:
            break
        values.append(_float_token(m.group(1)))
        pos = m.end()
    return values


def scan_ints(text: str, count: int) -> list[int]:
    values: list[int] = []
    pos = 0
    while len(values) < count:
        m = _DEC_INT_RE.match(text, pos)
        if m is None:
            break
        values.append(int(m.group(1)))
        pos = m.end()
    return values


def parse_c_int(text: str) -> int:
    """Leading integer literal with C base prefixes (``0x1f``, ``017``); 0 when absent."""
    m = _C_INT_RE.match(text)
    if m is None:
        return 0
    sign, digits = m.groups()
    if digits[:2] in ("0x", "0X"):
        value = int(digits[2:], 16)
    elif len(digits) > 1 and digits[0] == "0":
        value = int(digits, 8)
    else:
        value = int(digits)
    return -value if sign == "-" else value


def require_floats(line: str, count: int) -> list[float]:
    values = scan_floats(line, count)
    if len(values) != count:
        raise MalformedDataError(f"expected {count} values, got {len(values)}: {line.strip()!r}")
    return values


def require_ints(line: str, count: int) -> list[int]:
    values = scan_ints(line, count)
    if len(values) != count:
        raise MalformedDataError(f"expected {count} integers, got {len(values)}: {line.strip()!r}")
    return values


class LineReader:
    """Sequential reader over LUT text with both line and word access.

    Word reads leave the position right after the word, so a following
    line read returns the remainder of that line.
    """

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0
        self.line_number = 0

    @property
    def eof(self) -> bool:
        return self._pos >= len(self._text)

    def read_line(self) -> str | None:
        """Next raw line without its terminator, or None at end of input."""
        if self.eof:
            return None
        match = _LINE_RE.match(self._text, self._pos)
        assert match is not None
        self._pos = match.end()
        self.line_number += 1
        return match.group(1)

    def next_line(self, skip_comments: bool = True) -> str:
        """Next line, optionally skipping blanks and comments; EOF is an error."""
        while True:
            line = self.read_line()
            if line is None:
                raise MalformedDataError("Unexpected EOF")
            if not skip_comments or not is_skip_line(line):
                return line

    def __iter__(self) -> Iterator[str]:
        while True:
            line = self.read_line()
            if line is None:
                return
            yield line

    def next_word(self) -> str | None:
        text = self._text
        pos = self._pos
        while pos < len(text) and text[pos].isspace():
            if text[pos] == "\n":
                self.line_number += 1
            pos += 1
        start = pos
        while pos < len(text) and not text[pos].isspace():
            pos += 1
        self._pos = pos
        if pos == start:
            return None
        return text[start:pos]

    def next_float(self) -> float:
        word = self.next_word()
        if word is None:
            raise MalformedDataError("Unexpected EOF while reading curve samples")
        values = scan_floats(word, 1)
        if not values:
            raise MalformedDataError(f"invalid curve sample {word!r}")
        return values[0]
