"""
Header Scanner: reads the frame geometry Piskel writes as preprocessor
constants, e.g.

    #define NEW_PISKEL_FRAME_COUNT 2
    #define NEW_PISKEL_FRAME_WIDTH 5
    #define NEW_PISKEL_FRAME_HEIGHT 5
"""
import logging
import re
from typing import Optional

from glyphpack.errors import MalformedHeaderError, NonSquareGlyphError

logger = logging.getLogger("glyphpack.header")

_NUMBER_RE = re.compile(r"[0-9]+")
_COMMENT_RE = re.compile(r"//|/\*")
_DEFINE_RE = re.compile(r"^[ \t]*#[ \t]*define[ \t]+\w*_FRAME_(WIDTH|HEIGHT|COUNT)\b[ \t]*(.*)$", re.MULTILINE)


def _declarations(text: str, key: str):
    # Trailing // or /* */ comments are not part of the value
    return [
        _COMMENT_RE.split(m.group(2), 1)[0].strip()
        for m in _DEFINE_RE.finditer(text)
        if m.group(1) == key
    ]


def _read_dimension(text: str, key: str, required: bool = True) -> Optional[int]:
    values = _declarations(text, key)
    if not values:
        if required:
            raise MalformedHeaderError(f"Missing '#define *_FRAME_{key} <n>' declaration")
        return None

    numbers = set()
    for raw in values:
        if not _NUMBER_RE.fullmatch(raw):
            raise MalformedHeaderError(f"_FRAME_{key} must be a decimal number, got {raw!r}")
        numbers.add(int(raw))

    if len(numbers) > 1:
        raise MalformedHeaderError(
            f"Conflicting _FRAME_{key} declarations: {', '.join(str(n) for n in sorted(numbers))}"
        )
    return numbers.pop()


def scan_header(text: str) -> int:
    """Return the square glyph size declared in the input header."""
    width = _read_dimension(text, "WIDTH")
    height = _read_dimension(text, "HEIGHT")

    if width != height:
        raise NonSquareGlyphError(width, height)
    if width == 0:
        raise MalformedHeaderError("Frame size must be positive, got 0")

    logger.debug(f"Header declares {width}x{height} frames")
    return width


def scan_frame_count(text: str) -> Optional[int]:
    """Return the optional _FRAME_COUNT declaration, or None when absent."""
    return _read_dimension(text, "COUNT", required=False)
