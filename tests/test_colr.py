import struct

from sfntkit.colr import Colr, Glyph, Layer
from sfntkit.paint import ClipBox, PaintColorGlyph, PaintSolid, f2dot14_to_float


def _v0_table() -> bytes:
    header = struct.pack(">HHIIH", 0, 1, 14, 20, 2)
    base_records = struct.pack(">HHH", 5, 0, 2)
    # The layer count is read four bytes into the layer records.
    layers = struct.pack(">HHHH", 10, 0, 2, 0xFFFF)
    return header + base_records + layers


def _v1_table() -> bytes:
    header_size = 34
    base_list = struct.pack(">IHI", 1, 7, 10) + struct.pack(">BHh", 2, 3, 0x4000)
    layer_list = struct.pack(">II", 1, 8) + struct.pack(">BH", 11, 9)
    clip_record = struct.pack(">HH", 7, 8) + (7).to_bytes(3, "big")
    clip = struct.pack(">Bhxxhxxhxxh", 1, 0x4000, -0x4000, 0x2000, 0x1000)
    clip_list = struct.pack(">BI", 1, 1) + clip_record + clip
    base_offset = header_size
    layer_offset = base_offset + len(base_list)
    clip_offset = layer_offset + len(layer_list)
    header = struct.pack(">HHIIH", 1, 0, 0, 0, 0) + struct.pack(
        ">IIIII", base_offset, layer_offset, clip_offset, 0, 0
    )
    assert len(header) == header_size
    return header + base_list + layer_list + clip_list


def test_v0_glyph_layers():
    colr = Colr(_v0_table())
    assert colr.version() == 0
    assert colr.num_glyphs() == 1
    assert colr.glyph(0) == Glyph(5, (Layer(10, 0), Layer(2, None)))


def test_v0_find_glyph_and_missing():
    colr = Colr(_v0_table())
    assert colr.find_glyph(5) == colr.glyph(0)
    assert colr.find_glyph(6) is None
    assert colr.glyph(1) is None
    assert list(colr.glyphs()) == [colr.glyph(0)]


def test_v0_has_no_paint_data():
    colr = Colr(_v0_table())
    assert colr.num_base_paints() == 0
    assert colr.base_paint(0) is None
    assert colr.find_base_paint(5) is None
    assert colr.num_clip_boxes() == 0
    assert list(colr.paint_layers()) == []


def test_v1_base_paint():
    colr = Colr(_v1_table())
    assert colr.num_base_paints() == 1
    gid, paint = colr.base_paint(0)
    assert gid == 7
    assert paint == PaintSolid(3, f2dot14_to_float(0x4000), None)
    assert colr.find_base_paint(7) == paint
    assert colr.find_base_paint(8) is None
    assert colr.base_paint(1) is None
    assert list(colr.base_paints()) == [(7, paint)]


def test_v1_paint_layers():
    colr = Colr(_v1_table())
    assert colr.num_paint_layers() == 1
    assert colr.paint_layer(0) == PaintColorGlyph(9)
    assert colr.paint_layer(1) is None
    assert list(colr.paint_layers()) == [PaintColorGlyph(9)]


def test_v1_clip_boxes():
    colr = Colr(_v1_table())
    expected = ClipBox(
        f2dot14_to_float(0x4000),
        f2dot14_to_float(-0x4000),
        f2dot14_to_float(0x2000),
        f2dot14_to_float(0x1000),
        None,
    )
    assert colr.num_clip_boxes() == 1
    assert colr.clip_box(0) == (range(7, 9), expected)
    assert colr.find_clip_box(7) == expected
    assert colr.find_clip_box(8) == expected
    assert colr.find_clip_box(9) is None
    assert colr.clip_box(1) is None
    assert list(colr.clip_boxes()) == [(range(7, 9), expected)]


def test_truncated_table_yields_nothing():
    colr = Colr(_v1_table()[:40])
    assert colr.base_paint(0) is None
    assert colr.paint_layer(0) is None
    assert colr.clip_box(0) is None
    assert Colr(b"").num_glyphs() == 0