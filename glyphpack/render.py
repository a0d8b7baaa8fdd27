"""Art Renderer: text-art preview of an icon for the generated doc comment."""

from typing import Optional

from glyphpack.config import Settings, settings as default_settings
from glyphpack.models import Glyph, RenderedGlyph

INDENT = " " * 4


def indent(level: int) -> str:
    return INDENT * level


def render_glyph(glyph: Glyph, size: int, padding: int, config: Optional[Settings] = None, level: int = 0) -> RenderedGlyph:
    """
    Draw the glyph inside a block comment:

        /***********
         *   # #   *
         **********/

    ``padding`` blank cells are drawn on both sides of each row so the box
    is as wide as the packed byte.
    """
    config = config or default_settings
    pad = indent(level)
    border = config.BORDER_CHAR * (size + padding * 2 + 1)
    side = config.BLANK_CHAR * padding

    lines = [f"{pad}/*{border}"]
    for row in glyph.rows:
        cells = "".join(config.MARKER_CHAR if px else config.BLANK_CHAR for px in row)
        lines.append(f"{pad} *{side}{cells}{side}{config.BORDER_CHAR}")
    lines.append(f"{pad} {border}*/")
    return lines
