"""
Glyph Extractor.

Finds every innermost ``{ ... }`` block of the input (the per-frame pixel
arrays of a Piskel C export) and decodes it into a Glyph. The brace
structure is parsed with a small lark grammar so that unterminated or
unbalanced blocks are reported instead of silently skipped.
"""
import logging
import os
from dataclasses import dataclass
from typing import List, Optional

from lark import Lark, Transformer
from lark.exceptions import UnexpectedInput, UnexpectedToken

from glyphpack.config import Settings, settings as default_settings
from glyphpack.errors import InvalidPixelTokenError, MalformedGlyphError
from glyphpack.models import Glyph

logger = logging.getLogger("glyphpack.extractor")

GRAMMAR_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "glyphs.lark")

SEPARATOR = ","


@dataclass(frozen=True)
class RawBlock:
    body: str
    line: int
    column: int


class InnermostBlockCollector(Transformer):
    """Reduces the brace tree to the list of blocks without nested blocks, in source order."""

    def block(self, children):
        opening = children[0]
        inner = children[1:-1]
        nested = [c for c in inner if isinstance(c, list)]
        if not nested:
            body = "".join(str(c) for c in inner)
            return [RawBlock(body, opening.line, opening.column)]
        return [raw for group in nested for raw in group]

    def start(self, children):
        return [raw for c in children if isinstance(c, list) for raw in c]


class BraceParser:
    _parsers = {}

    def __init__(self, grammar_path=GRAMMAR_PATH):
        self.grammar_path = grammar_path
        if grammar_path not in self._parsers:
            with open(grammar_path, "r", encoding="utf-8") as f:
                grammar = f.read()
            self._parsers[grammar_path] = Lark(grammar, parser="lalr")
        self.parser = self._parsers[grammar_path]

    def innermost_blocks(self, text: str) -> List[RawBlock]:
        try:
            tree = self.parser.parse(text)
        except UnexpectedToken as e:
            if e.token.type == "$END":
                raise MalformedGlyphError("Unterminated '{' block at end of input")
            raise MalformedGlyphError(f"Unbalanced '{e.token}' at line {e.line}, col {e.column}")
        except UnexpectedInput as e:
            raise MalformedGlyphError(f"Unparseable input at line {e.line}, col {e.column}")
        return InnermostBlockCollector().transform(tree)


def split_tokens(body: str) -> List[str]:
    """Strip whitespace and split a block body into pixel literals."""
    compact = "".join(body.split())
    if not compact:
        return []
    tokens = compact.split(SEPARATOR)
    # C allows one trailing separator after the last element
    if len(tokens) > 1 and tokens[-1] == "":
        tokens.pop()
    return tokens


def decode_block(raw: RawBlock, index: int, size: int, config: Settings) -> Glyph:
    tokens = split_tokens(raw.body)

    pixels = []
    for token in tokens:
        if token == config.OPAQUE_PIXEL:
            pixels.append(True)
        elif token == config.TRANSPARENT_PIXEL:
            pixels.append(False)
        else:
            raise InvalidPixelTokenError(token, config.OPAQUE_PIXEL, config.TRANSPARENT_PIXEL, index)

    expected = size * size
    if len(pixels) != expected:
        raise MalformedGlyphError(
            f"Icon #{index} at line {raw.line} has {len(pixels)} pixels, expected {expected} ({size}x{size})"
        )

    rows = tuple(tuple(pixels[r * size:(r + 1) * size]) for r in range(size))
    return Glyph(index=index, rows=rows)


def extract_glyphs(text: str, size: int, config: Optional[Settings] = None) -> List[Glyph]:
    """Return every icon of the input as a Glyph, in source order."""
    config = config or default_settings
    blocks = BraceParser().innermost_blocks(text)
    glyphs = [decode_block(raw, i, size, config) for i, raw in enumerate(blocks)]
    logger.debug(f"Extracted {len(glyphs)} glyph block(s)")
    return glyphs
