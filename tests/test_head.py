import struct

from sfntkit.binary import make_tag
from sfntkit.head import HEAD, MAGIC_NUMBER, Head

_FORMAT = ">HHiIIHHQQhhhhHHHhh"

_VALUES = (
    1, 0, 0x00018000, 0x12345678, MAGIC_NUMBER, 0x000B, 2048,
    3_600_000_000, 3_700_000_000, -100, -250, 1900, 1800,
    0x0003, 9, 2, 1, 0,
)


def _head_bytes():
    return struct.pack(_FORMAT, *_VALUES)


def test_last_field_ends_at_byte_54():
    data = _head_bytes()[:52] + struct.pack(">h", 5)
    assert len(data) == 54
    assert Head.parse(data).glyph_data_format == 5
    assert Head.parse(data[:53]).glyph_data_format == 0


def test_parse_reads_all_fields():
    head = Head.parse(_head_bytes())
    assert (
        head.major_version, head.minor_version, head.revision,
        head.checksum_adjustment, head.magic_number, head.flags,
        head.units_per_em, head.created, head.modified,
        head.x_min, head.y_min, head.x_max, head.y_max,
        head.mac_style, head.lowest_recommended_ppem, head.direction_hint,
        head.index_to_location_format, head.glyph_data_format,
    ) == _VALUES


def test_empty_data_gives_zeros():
    assert Head.parse(b"") == Head()
    assert Head.parse(b"").units_per_em == 0


def test_truncated_data_zeroes_missing_fields():
    data = _head_bytes()[:20]
    head = Head.parse(data)
    assert head.units_per_em == 2048
    assert head.magic_number == MAGIC_NUMBER
    assert head.created == 0
    assert head.y_max == 0


def test_tag_value():
    assert HEAD == make_tag("head")