"""
Pipeline: header -> glyphs -> packed rows -> preview -> document -> disk.

Everything up to the document text is computed before the first filesystem
side effect, so a bad input never touches the existing output.
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from glyphpack.config import Settings, settings as default_settings
from glyphpack.emitter import build_document, output_path, struct_name, write_document
from glyphpack.errors import FilesystemError, MalformedGlyphError
from glyphpack.extractor import extract_glyphs
from glyphpack.header import scan_frame_count, scan_header
from glyphpack.models import Glyph, IconEntry, IconSet, OutputDocument
from glyphpack.packer import pack_glyph, packing_layout
from glyphpack.render import indent, render_glyph

logger = logging.getLogger("glyphpack.pipeline")


def read_icon_set(config: Optional[Settings] = None) -> IconSet:
    config = config or default_settings
    path = Path(config.INPUT_PATH)
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise FilesystemError(f"Could not read {path}: {e}", path)
    except UnicodeDecodeError as e:
        raise FilesystemError(f"{path} is not valid UTF-8 text: {e}", path)
    return IconSet(text=text, size=scan_header(text), source=str(path))


def _preview(glyph: Glyph, size: int, padding: int, config: Settings) -> List[str]:
    try:
        return render_glyph(glyph, size, padding, config, level=2)
    except Exception as e:
        logger.warning(f"Could not render preview for icon #{glyph.index}: {e}")
        return [f"{indent(2)}// icon #{glyph.index}"]


def compile_icons(icon_set: IconSet, config: Optional[Settings] = None) -> OutputDocument:
    """Turn a parsed input into the generated document, without writing anything."""
    config = config or default_settings
    size = icon_set.size
    data_width, padding = packing_layout(size)
    logger.info(f"Pad zero: {padding}; Data width in byte: {data_width}")

    glyphs = extract_glyphs(icon_set.text, size, config)
    declared = scan_frame_count(icon_set.text)
    if declared is not None and declared != len(glyphs):
        raise MalformedGlyphError(
            f"{icon_set.source} declares {declared} frame(s) but contains {len(glyphs)} icon block(s)"
        )

    entries = []
    for glyph in glyphs:
        packed = pack_glyph(glyph, size)
        entries.append(IconEntry(
            const_name=f"ICON_{glyph.index}",
            method_name=f"icon_{glyph.index}",
            comment=_preview(glyph, size, padding, config),
            packed=packed,
        ))

    logger.info(f"Compiled {len(entries)} {size}x{size} icon(s) from {icon_set.source}")
    return OutputDocument(
        path=output_path(size, config),
        struct_name=struct_name(size),
        text=build_document(size, entries, config),
        entries=entries,
    )


def run(config: Optional[Settings] = None, clock: Optional[Callable[[], datetime]] = None) -> OutputDocument:
    """Read, compile and write. Returns the written document."""
    config = config or default_settings
    icon_set = read_icon_set(config)
    logger.info(f"Icon size: {icon_set.size}")
    document = compile_icons(icon_set, config)
    write_document(document, clock)
    return document
