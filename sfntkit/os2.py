"""OS/2 and Windows metrics table."""

from __future__ import annotations

from dataclasses import dataclass

from .binary import Reader, make_tag

OS2 = make_tag(b"OS/2")

_LAYOUT = (
    ("version", "u16", 0),
    ("average_char_width", "u16", 2),
    ("weight_class", "u16", 4),
    ("width_class", "u16", 6),
    ("type_flags", "u16", 8),
    ("subscript_x_size", "i16", 10),
    ("subscript_y_size", "i16", 12),
    ("subscript_x_offset", "i16", 14),
    ("subscript_y_offset", "i16", 16),
    ("superscript_x_size", "i16", 18),
    ("superscript_y_size", "i16", 20),
    ("superscript_x_offset", "i16", 22),
    ("superscript_y_offset", "i16", 24),
    ("strikeout_size", "i16", 26),
    ("strikeout_position", "i16", 28),
    ("family_class", "i16", 30),
    ("selection_flags", "u16", 62),
    ("first_char_index", "u16", 64),
    ("last_char_index", "u16", 66),
    ("typographic_ascender", "i16", 68),
    ("typographic_descender", "i16", 70),
    ("typographic_line_gap", "i16", 72),
    ("win_ascent", "u16", 74),
    ("win_descent", "u16", 76),
)

# Fields present from a given table version on; None when the version is older.
_VERSIONED = (
    ("x_height", "i16", 86, 2),
    ("cap_height", "i16", 88, 2),
    ("default_char", "u16", 90, 2),
    ("break_char", "u16", 92, 2),
    ("max_context", "u16", 94, 2),
    ("lower_optical_point_size", "u16", 96, 5),
    ("upper_optical_point_size", "u16", 98, 5),
)

_DEFAULT_PANOSE = bytes(10)
_DEFAULT_VENDOR = "none"


def _vendor_id(reader: Reader) -> str:
    raw = reader.bytes(58, 4)
    if raw is None:
        return _DEFAULT_VENDOR
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return _DEFAULT_VENDOR


@dataclass(frozen=True)
class Os2:
    """OS/2 and Windows metrics table.

    Plain fields missing from the data are zero. Fields introduced by later
    table versions are ``None`` when the table version is older or the data
    is too short.
    """

    version: int = 0
    average_char_width: int = 0
    weight_class: int = 0
    width_class: int = 0
    type_flags: int = 0
    subscript_x_size: int = 0
    subscript_y_size: int = 0
    subscript_x_offset: int = 0
    subscript_y_offset: int = 0
    superscript_x_size: int = 0
    superscript_y_size: int = 0
    superscript_x_offset: int = 0
    superscript_y_offset: int = 0
    strikeout_size: int = 0
    strikeout_position: int = 0
    family_class: int = 0
    panose: bytes = _DEFAULT_PANOSE
    unicode_range: tuple[int, int, int, int] = (0, 0, 0, 0)
    vendor_id: str = _DEFAULT_VENDOR
    selection_flags: int = 0
    first_char_index: int = 0
    last_char_index: int = 0
    typographic_ascender: int = 0
    typographic_descender: int = 0
    typographic_line_gap: int = 0
    win_ascent: int = 0
    win_descent: int = 0
    code_page_range: tuple[int, int] | None = None
    x_height: int | None = None
    cap_height: int | None = None
    default_char: int | None = None
    break_char: int | None = None
    max_context: int | None = None
    lower_optical_point_size: int | None = None
    upper_optical_point_size: int | None = None

    @classmethod
    def parse(cls, data: bytes) -> Os2:
        """Read the table from its raw bytes."""
        reader = Reader(data)
        fields = {name: getattr(reader, kind)(offset) or 0 for name, kind, offset in _LAYOUT}
        version = fields["version"]
        fields["panose"] = reader.bytes(32, 10) or _DEFAULT_PANOSE
        fields["unicode_range"] = tuple(reader.u32(offset) or 0 for offset in (42, 46, 50, 54))
        fields["vendor_id"] = _vendor_id(reader)
        if version >= 1:
            fields["code_page_range"] = (reader.u32(78) or 0, reader.u32(82) or 0)
        for name, kind, offset, since in _VERSIONED:
            if version >= since:
                fields[name] = getattr(reader, kind)(offset)
        return cls(**fields)