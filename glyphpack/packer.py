"""
Bit Packer.

Every icon row is stored as one or more bytes. Rows narrower than a byte
are left-aligned and padded with zero bits, so a 5 px row ``10110`` becomes
``0b10110000``. Rows wider than a byte are cut into whole bytes.
"""
import logging
from typing import List, Tuple

from glyphpack.errors import RowPackingError
from glyphpack.models import Glyph, PackedRow

logger = logging.getLogger("glyphpack.packer")

BYTE_BITS = 8


def packing_layout(size: int) -> Tuple[int, int]:
    """Return (data_width, padding): data bits per byte and zero bits appended to each."""
    data_width = min(BYTE_BITS, size)
    padding = max(0, BYTE_BITS - size)
    return data_width, padding


def pack_row(bits: str, data_width: int, padding: int) -> List[str]:
    if data_width <= 0 or len(bits) % data_width:
        raise RowPackingError(
            f"Row of {len(bits)} pixels cannot be split into {data_width}-bit chunks"
        )
    return [
        f"0b{bits[start:start + data_width]}{'0' * padding}"
        for start in range(0, len(bits), data_width)
    ]


def pack_glyph(glyph: Glyph, size: int) -> PackedRow:
    """Pack a glyph into 8-bit binary literals, row by row, chunk order preserved."""
    data_width, padding = packing_layout(size)
    packed = []
    for row_no, bits in enumerate(glyph.bits()):
        if len(bits) != size:
            raise RowPackingError(f"Icon #{glyph.index} row {row_no} has {len(bits)} pixels, expected {size}")
        try:
            packed.extend(pack_row(bits, data_width, padding))
        except RowPackingError as e:
            raise RowPackingError(f"Icon #{glyph.index} row {row_no}: {e.message}")
    logger.debug(f"Packed icon #{glyph.index} into {len(packed)} byte(s)")
    return tuple(packed)
