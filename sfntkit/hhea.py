"""Horizontal header table."""

from __future__ import annotations

from dataclasses import dataclass

from .binary import Reader, make_tag

HHEA = make_tag(b"hhea")

_LAYOUT = (
    ("major_version", "u16", 0),
    ("minor_version", "u16", 2),
    ("ascender", "i16", 4),
    ("descender", "i16", 6),
    ("line_gap", "i16", 8),
    ("max_advance", "u16", 10),
    ("min_lsb", "i16", 12),
    ("min_rsb", "i16", 14),
    ("max_extent", "i16", 16),
    ("caret_rise", "i16", 18),
    ("caret_run", "i16", 20),
    ("caret_offset", "i16", 22),
    ("metric_data_format", "i16", 32),
    ("num_long_metrics", "u16", 34),
)


@dataclass(frozen=True)
class Hhea:
    """Horizontal header table; fields missing from the data are zero."""

    major_version: int = 0
    minor_version: int = 0
    ascender: int = 0
    descender: int = 0
    line_gap: int = 0
    max_advance: int = 0
    min_lsb: int = 0
    min_rsb: int = 0
    max_extent: int = 0
    caret_rise: int = 0
    caret_run: int = 0
    caret_offset: int = 0
    metric_data_format: int = 0
    num_long_metrics: int = 0

    @classmethod
    def parse(cls, data: bytes) -> Hhea:
        """Read the table from its raw bytes."""
        reader = Reader(data)
        return cls(
            **{name: getattr(reader, kind)(offset) or 0 for name, kind, offset in _LAYOUT}
        )