import struct

from sfntkit.binary import make_tag
from sfntkit.hhea import HHEA, Hhea

_HEAD_FMT = ">HHhhhHhhhhhh"
_HEAD_VALUES = (1, 0, 800, -200, 90, 1200, -50, -60, 1100, 1, 0, 0)


def _hhea_bytes(num_long_metrics=42, metric_data_format=0):
    return (
        struct.pack(_HEAD_FMT, *_HEAD_VALUES)
        + b"\x00" * 8
        + struct.pack(">hH", metric_data_format, num_long_metrics)
    )


def test_last_field_ends_at_byte_36():
    data = _hhea_bytes(num_long_metrics=513)
    assert len(data) == 36
    assert Hhea.parse(data).num_long_metrics == 513
    assert Hhea.parse(data[:35]).num_long_metrics == 0


def test_parse_reads_fields():
    hhea = Hhea.parse(_hhea_bytes())
    assert (
        hhea.major_version, hhea.minor_version, hhea.ascender, hhea.descender,
        hhea.line_gap, hhea.max_advance, hhea.min_lsb, hhea.min_rsb,
        hhea.max_extent, hhea.caret_rise, hhea.caret_run, hhea.caret_offset,
    ) == _HEAD_VALUES
    assert hhea.num_long_metrics == 42
    assert hhea.metric_data_format == 0


def test_reserved_bytes_are_skipped():
    data = bytearray(_hhea_bytes(num_long_metrics=7))
    data[24:32] = b"\xff" * 8
    hhea = Hhea.parse(bytes(data))
    assert hhea.num_long_metrics == 7
    assert hhea.caret_offset == 0


def test_truncated_data_zeroes_missing_fields():
    hhea = Hhea.parse(_hhea_bytes()[:34])
    assert hhea.num_long_metrics == 0
    assert hhea.ascender == 800


def test_empty_data():
    assert Hhea.parse(b"") == Hhea()


def test_tag_value():
    assert HHEA == make_tag("hhea")