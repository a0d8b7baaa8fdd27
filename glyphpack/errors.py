"""
Error taxonomy for the icon compiler.

Everything raised on purpose by the pipeline derives from GlyphPackError,
so the entry point can report it and exit non-zero.
"""
from typing import Optional


class GlyphPackError(Exception):
    """Base exception for icon compilation errors."""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MalformedHeaderError(GlyphPackError):
    """Frame width/height declaration missing or unusable."""
    pass


class NonSquareGlyphError(GlyphPackError):
    """Declared frame width and height differ."""
    def __init__(self, width: int, height: int):
        super().__init__(f"Icons must be square-sized, got icons {width}x{height}")
        self.width = width
        self.height = height


class InvalidPixelTokenError(GlyphPackError):
    """A pixel literal is neither the opaque nor the transparent constant."""
    def __init__(self, token: str, opaque: str, transparent: str, glyph_index: Optional[int] = None):
        where = f" in icon #{glyph_index}" if glyph_index is not None else ""
        super().__init__(
            f"Invalid data byte{where}: {token!r}. Should be '{opaque}' or '{transparent}'"
        )
        self.token = token
        self.glyph_index = glyph_index


class MalformedGlyphError(GlyphPackError):
    """A pixel block has the wrong shape or the brace structure is broken."""
    pass


class RowPackingError(GlyphPackError):
    """A row cannot be split into whole byte chunks."""
    pass


class FilesystemError(GlyphPackError):
    """Reading the input, archiving or writing the output failed."""
    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path
