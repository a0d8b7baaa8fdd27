from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

# One icon row: True = opaque pixel
PixelRow = Tuple[bool, ...]
# 8-bit binary literal tokens ("0b10100000") for a whole icon
PackedRow = Tuple[str, ...]
# Comment lines of the text-art preview
RenderedGlyph = List[str]


@dataclass(frozen=True)
class IconSet:
    text: str
    size: int
    source: str = "<unknown>"


@dataclass(frozen=True)
class Glyph:
    index: int
    rows: Tuple[PixelRow, ...]

    @property
    def size(self) -> int:
        return len(self.rows)

    def bits(self) -> List[str]:
        """Rows as '1'/'0' digit strings."""
        return ["".join("1" if px else "0" for px in row) for row in self.rows]


@dataclass(frozen=True)
class IconEntry:
    const_name: str
    method_name: str
    comment: RenderedGlyph
    packed: PackedRow


@dataclass(frozen=True)
class OutputDocument:
    path: Path
    struct_name: str
    text: str
    entries: List[IconEntry] = field(default_factory=list)
