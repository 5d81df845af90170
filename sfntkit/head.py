"""Font header table."""

from __future__ import annotations

from dataclasses import dataclass

from .binary import Reader, make_tag

HEAD = make_tag(b"head")
MAGIC_NUMBER = 0x5F0F3CF5

_LAYOUT = (
    ("major_version", "u16", 0),
    ("minor_version", "u16", 2),
    ("revision", "i32", 4),
    ("checksum_adjustment", "u32", 8),
    ("magic_number", "u32", 12),
    ("flags", "u16", 16),
    ("units_per_em", "u16", 18),
    ("created", "u64", 20),
    ("modified", "u64", 28),
    ("x_min", "i16", 36),
    ("y_min", "i16", 38),
    ("x_max", "i16", 40),
    ("y_max", "i16", 42),
    ("mac_style", "u16", 44),
    ("lowest_recommended_ppem", "u16", 46),
    ("direction_hint", "u16", 48),
    ("index_to_location_format", "i16", 50),
    ("glyph_data_format", "i16", 52),
)


@dataclass(frozen=True)
class Head:
    """Font header table; fields missing from the data are zero.

    ``revision`` is a 16.16 fixed value. ``created`` and ``modified`` count
    seconds since midnight, January 1st 1904, UTC.
    """

    major_version: int = 0
    minor_version: int = 0
    revision: int = 0
    checksum_adjustment: int = 0
    magic_number: int = 0
    flags: int = 0
    units_per_em: int = 0
    created: int = 0
    modified: int = 0
    x_min: int = 0
    y_min: int = 0
    x_max: int = 0
    y_max: int = 0
    mac_style: int = 0
    lowest_recommended_ppem: int = 0
    direction_hint: int = 0
    index_to_location_format: int = 0
    glyph_data_format: int = 0

    @classmethod
    def parse(cls, data: bytes) -> Head:
        """Read the table from its raw bytes."""
        reader = Reader(data)
        return cls(
            **{name: getattr(reader, kind)(offset) or 0 for name, kind, offset in _LAYOUT}
        )