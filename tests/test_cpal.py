import struct

from sfntkit.cpal import Color, Cpal, Palette, Theme


def _v0_table() -> bytes:
    header = struct.pack(">HHHHI", 0, 2, 1, 2, 16)
    indices = struct.pack(">HH", 0, 0)
    colors = bytes([0x10, 0x20, 0x30, 0xFF, 0x01, 0x02, 0x03, 0x80])
    return header + indices + colors


def _v1_table() -> bytes:
    header = struct.pack(">HHHHI", 1, 2, 1, 2, 26)
    indices = struct.pack(">H", 0)
    offsets = struct.pack(">III", 34, 38, 0)
    colors = bytes([0x10, 0x20, 0x30, 0xFF, 0x01, 0x02, 0x03, 0x80])
    types = struct.pack(">I", 2)
    labels = struct.pack(">H", 256)
    data = header + indices + offsets + colors + types + labels
    assert len(data) == 40
    return data


def test_v0_palette():
    cpal = Cpal(_v0_table())
    assert cpal.version() == 0
    assert len(cpal) == 1
    palette = cpal.get(0)
    assert palette == Palette(
        0,
        None,
        Theme.ANY,
        (Color(r=0x30, g=0x20, b=0x10, a=0xFF), Color(r=0x03, g=0x02, b=0x01, a=0x80)),
    )


def test_out_of_range_index():
    cpal = Cpal(_v0_table())
    assert cpal.get(1) is None
    assert cpal.get(-1) is None


def test_v1_theme_and_name():
    cpal = Cpal(_v1_table())
    palette = cpal.get(0)
    assert palette.theme is Theme.DARK
    assert palette.name_id == 256
    assert palette.colors[0] == Color(r=0x30, g=0x20, b=0x10, a=0xFF)


def test_palettes_iterates_all():
    cpal = Cpal(_v1_table())
    assert list(cpal.palettes()) == [cpal.get(0)]


def test_truncated_colors():
    assert Cpal(_v0_table()[:-1]).get(0) is None


def test_empty_table():
    cpal = Cpal(b"")
    assert len(cpal) == 0
    assert list(cpal.palettes()) == []