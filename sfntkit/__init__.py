"""Read-only parser for OpenType and TrueType font data and its common tables."""

__version__ = "0.1.0"

__all__ = [
    "avar",
    "binary",
    "cmap",
    "colr",
    "cpal",
    "font",
    "fvar",
    "head",
    "hhea",
    "hmtx",
    "maxp",
    "name",
    "os2",
    "paint",
]