"""glyphpack: compiles Piskel C icon exports into packed ``make_icon_set!`` sources."""

__version__ = "0.1.0"
