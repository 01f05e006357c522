"""Reader for XPM images, the texture format used by the renderer."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from cubecaster.colors import text_to_rgb

# Pixels whose colour is "None" are stored with this value.
TRANSPARENT = 0xFF000000

_WORD_SEPARATORS = re.compile(r"[ \t]+")
_ATOI = re.compile(r"\s*([+-]?\d+)")


class XpmError(ValueError):
    """Raised when XPM data cannot be read or is malformed."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded XPM image; ``pixels`` holds rows of 32-bit colour values."""

    width: int
    height: int
    pixels: tuple[tuple[int, ...], ...]

    def pixel(self, x: int, y: int) -> int:
        """Return the colour at column ``x`` and row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return self.pixels[y][x]


def split_words(text: str) -> list[str]:
    """Split ``text`` into words separated by spaces and tabs."""
    return [word for word in _WORD_SEPARATORS.split(text) if word]


def _find_unquoted(text: str, token: str) -> int:
    """Position of the first ``token`` lying outside double quotes, or -1."""
    quoted = False
    for pos, char in enumerate(text):
        if char == '"':
            quoted = not quoted
        if not quoted and text.startswith(token, pos):
            return pos
    return -1


def _blank(text: str, start: int, stop: int) -> str:
    return text[:start] + " " * (stop - start) + text[stop:]


def strip_comments(text: str) -> str:
    """Replace C-style comments outside quoted strings with spaces.

    The result has the same length as ``text``. Block comments are removed
    first, then line comments together with their closing newline. A comment
    that is never closed runs to the end of the text.
    """
    while (start := _find_unquoted(text, "/*")) != -1:
        end = text.find("*/", start + 2)
        text = _blank(text, start, len(text) if end == -1 else end + 2)
    while (start := _find_unquoted(text, "//")) != -1:
        end = text.find("\n", start + 2)
        text = _blank(text, start, len(text) if end == -1 else end + 1)
    return text


def quoted_strings(text: str) -> list[str]:
    """Return the contents of each complete double-quoted string in order."""
    found: list[str] = []
    pos = 0
    while (opening := text.find('"', pos)) != -1:
        closing = text.find('"', opening + 1)
        if closing == -1:
            break
        found.append(text[opening + 1:closing])
        pos = closing + 1
    return found


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def _stored(colour: int) -> int:
    return TRANSPARENT if colour == -1 else colour & 0xFFFFFFFF


def _take(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise XpmError(f"missing {what}") from None


def parse_xpm_lines(lines: Iterable[str]) -> XpmImage:
    """Decode an image from its XPM strings: header, colours, then pixel rows."""
    source = iter(lines)
    header = split_words(_take(source, "header"))
    if len(header) < 4:
        raise XpmError("header needs width, height, colour count and characters per pixel")
    width, height, ncolours, cpp = (_atoi(word) for word in header[:4])
    if min(width, height, ncolours, cpp) <= 0:
        raise XpmError(f"invalid XPM header: {' '.join(header)!r}")

    palette: dict[str, int] = {}
    for _ in range(ncolours):
        line = _take(source, "colour definition")
        key = line[:cpp]
        words = split_words(line[cpp:])
        try:
            index = words.index("c")
        except ValueError:
            raise XpmError(f"colour definition without a 'c' key: {line!r}") from None
        if index + 1 >= len(words):
            raise XpmError(f"colour definition without a value: {line!r}")
        end = words[index + 2] if index + 2 < len(words) else None
        colour = text_to_rgb(words[index + 1], end)
        # One- and two-character keys keep the last definition, longer keys the first.
        if cpp <= 2 or key not in palette:
            palette[key] = colour

    rows: list[tuple[int, ...]] = []
    for _ in range(height):
        line = _take(source, "pixel row")
        if len(line) < width * cpp:
            raise XpmError(f"pixel row too short: {line!r}")
        rows.append(tuple(
            _stored(palette.get(line[start:start + cpp], 0))
            for start in range(0, width * cpp, cpp)
        ))
    return XpmImage(width, height, tuple(rows))


def parse_xpm_text(text: str) -> XpmImage:
    """Decode an image from the text of an XPM file."""
    return parse_xpm_lines(quoted_strings(strip_comments(text)))


def load_xpm(path: str | Path) -> XpmImage:
    """Read and decode the XPM file at ``path``."""
    try:
        text = Path(path).read_bytes().decode("latin-1")
    except OSError as exc:
        raise XpmError(f"cannot read {path}: {exc}") from exc
    return parse_xpm_text(text)