"""Reader for XPM images."""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path

from cubcaster.colors import text_to_rgb
from cubcaster.image import Image

TRANSPARENT = 0xFF000000

_WORD_SEPARATORS = re.compile(r"[ \t]+")
_LEADING_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")


class XpmError(ValueError):
    """Raised when XPM data cannot be read as an image."""


def split_words(text: str) -> list[str]:
    """Split ``text`` into the words separated by spaces and tabs."""
    return [word for word in _WORD_SEPARATORS.split(text) if word]


def _blank(text: str, start: int, end: int) -> str:
    return text[:start] + " " * (end - start) + text[end:]


def _strip_kind(text: str, opener: str, closer: str) -> str:
    in_quotes = False
    pos = 0
    while pos < len(text):
        if text[pos] == '"':
            in_quotes = not in_quotes
        if not in_quotes and text.startswith(opener, pos):
            close = text.find(closer, pos + len(opener))
            end = len(text) if close == -1 else close + len(closer)
            text = _blank(text, pos, end)
            pos = end
            continue
        pos += 1
    return text


def strip_comments(text: str) -> str:
    """Replace ``/* */`` and ``//`` comments outside quotes with spaces.

    The text keeps its length; an unterminated comment runs to the end.
    """
    text = _strip_kind(text, "/*", "*/")
    return _strip_kind(text, "//", "\n")


def quoted_lines(text: str) -> list[str]:
    """Return the contents of each successive pair of double quotes."""
    lines = []
    pos = 0
    while True:
        opening = text.find('"', pos)
        if opening == -1:
            break
        closing = text.find('"', opening + 1)
        if closing == -1:
            break
        lines.append(text[opening + 1 : closing])
        pos = closing + 1
    return lines


def _atoi(word: str) -> int:
    match = _LEADING_INT.match(word)
    return int(match.group(1)) if match else 0


def _parse_header(line: str) -> tuple[int, int, int, int]:
    words = split_words(line)
    if len(words) < 4:
        raise XpmError(f"incomplete XPM header: {line!r}")
    values = tuple(_atoi(word) for word in words[:4])
    if any(value <= 0 for value in values):
        raise XpmError(f"invalid XPM header: {line!r}")
    return values  # type: ignore[return-value]


def _parse_color(line: str, cpp: int) -> tuple[str, int]:
    key = line[:cpp]
    words = split_words(line[cpp:])
    try:
        c_index = words.index("c")
    except ValueError:
        raise XpmError(f"colour line without 'c' entry: {line!r}") from None
    if c_index + 1 >= len(words):
        raise XpmError(f"colour line without a colour: {line!r}")
    name = words[c_index + 1]
    end = words[c_index + 2] if c_index + 2 < len(words) else None
    return key, text_to_rgb(name, end)


def parse_xpm(lines: Iterable[str]) -> Image:
    """Build an image from XPM string lines: header, colours, then pixel rows.

    A colour of ``None`` becomes the transparent value 0xFF000000; pixel keys
    with no colour definition read as 0.
    """
    rows = iter(lines)

    def next_line(what: str) -> str:
        try:
            return next(rows)
        except StopIteration:
            raise XpmError(f"XPM data ends before {what}") from None

    width, height, ncolors, cpp = _parse_header(next_line("the header"))

    palette: dict[str, int] = {}
    for _ in range(ncolors):
        key, value = _parse_color(next_line("the colour table ends"), cpp)
        if cpp <= 2:
            palette[key] = value
        else:
            palette.setdefault(key, value)

    image = Image(width, height)
    for y in range(height):
        line = next_line("the last pixel row")
        if len(line) < width * cpp:
            raise XpmError(f"pixel row {y} is shorter than {width} pixels")
        for x in range(width):
            color = palette.get(line[x * cpp : (x + 1) * cpp], 0)
            if color == -1:
                color = TRANSPARENT
            image.put_pixel(x, y, color)
    return image


def parse_xpm_text(text: str) -> Image:
    """Parse the text of an XPM file, comments included."""
    return parse_xpm(quoted_lines(strip_comments(text)))


def load_xpm(path: str | Path) -> Image:
    """Read and parse the XPM file at ``path``."""
    data = Path(path).read_bytes()
    return parse_xpm_text(data.decode("latin-1"))