"""Color table."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Iterator

from .binary import Reader, make_tag
from .paint import ClipBox, Paint, PaintRef, f2dot14_to_float

COLR = make_tag(b"COLR")

_LAYER = struct.Struct(">HH")
_NO_PALETTE = 0xFFFF


@dataclass(frozen=True)
class Layer:
    """Single layer in a color outline."""

    gid: int
    palette_index: int | None = None


@dataclass(frozen=True)
class Glyph:
    """Sequence of layers that define a color outline."""

    gid: int
    layers: tuple[Layer, ...]


class Colr:
    """Color table."""

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)
        self._reader = Reader(self.data)
        self._version = self._reader.u16(0) or 0

    def version(self) -> int:
        """Return the table version."""
        return self._version

    def num_glyphs(self) -> int:
        """Return the number of base glyph records."""
        return self._reader.u16(2) or 0

    def _layers(self, first: int) -> tuple[Layer, ...] | None:
        reader = self._reader
        layers_base = reader.u32(8)
        if layers_base is None:
            return None
        offset = layers_base + first * _LAYER.size
        count = reader.u16(offset + 4)
        if count is None:
            return None
        raw = reader.bytes(offset, count * _LAYER.size)
        if raw is None:
            return None
        return tuple(
            Layer(gid, None if index == _NO_PALETTE else index)
            for gid, index in _LAYER.iter_unpack(raw)
        )

    def _glyph_at(self, record: int) -> Glyph | None:
        gid = self._reader.u16(record)
        first = self._reader.u16(record + 2)
        if gid is None or first is None:
            return None
        layers = self._layers(first)
        return None if layers is None else Glyph(gid, layers)

    def glyph(self, index: int) -> Glyph | None:
        """Return the glyph at ``index``, or None if it is missing."""
        if not 0 <= index < self.num_glyphs():
            return None
        base = self._reader.u32(4)
        if base is None:
            return None
        return self._glyph_at(base + index * 6)

    def find_glyph(self, gid: int) -> Glyph | None:
        """Return the glyph with identifier ``gid``, or None."""
        base = self._reader.u32(4)
        if base is None:
            return None
        lo, hi = 0, self.num_glyphs()
        while lo < hi:
            i = (lo + hi) // 2
            record = base + i * 6
            found = self._reader.u16(record)
            if found is None:
                return None
            if gid < found:
                hi = i
            elif gid > found:
                lo = i + 1
            else:
                return self._glyph_at(record)
        return None

    def glyphs(self) -> Iterator[Glyph]:
        """Yield the glyphs that can be read."""
        for index in range(self.num_glyphs()):
            glyph = self.glyph(index)
            if glyph is not None:
                yield glyph

    def _paint_at(self, offset: int) -> Paint | None:
        ref = PaintRef.at(self._reader, offset)
        return None if ref is None else ref.get()

    def _list_count(self, header_offset: int, skip: int) -> int:
        if self._version < 1:
            return 0
        base = self._reader.u32(header_offset)
        if not base:
            return 0
        return self._reader.u32(base + skip) or 0

    def num_base_paints(self) -> int:
        """Return the number of base paint records."""
        return self._list_count(14, 0)

    def _base_paint_record(self, base: int, record: int) -> tuple[int, Paint] | None:
        gid = self._reader.u16(record)
        relative = self._reader.u32(record + 2)
        if gid is None or relative is None:
            return None
        paint = self._paint_at(base + relative)
        return None if paint is None else (gid, paint)

    def base_paint(self, index: int) -> tuple[int, Paint] | None:
        """Return the glyph identifier and base paint at ``index``."""
        if self._version < 1:
            return None
        base = self._reader.u32(14)
        if base is None:
            return None
        count = self._reader.u32(base)
        if count is None or not 0 <= index < count:
            return None
        return self._base_paint_record(base, base + 4 + index * 6)

    def find_base_paint(self, gid: int) -> Paint | None:
        """Return the base paint for glyph ``gid``, or None."""
        if self._version < 1:
            return None
        base = self._reader.u32(14)
        if base is None:
            return None
        count = self._reader.u32(base)
        if count is None:
            return None
        lo, hi = 0, count
        while lo < hi:
            i = (lo + hi) // 2
            record = base + 4 + i * 6
            found = self._reader.u16(record)
            if found is None:
                return None
            if gid < found:
                hi = i
            elif gid > found:
                lo = i + 1
            else:
                result = self._base_paint_record(base, record)
                return None if result is None else result[1]
        return None

    def base_paints(self) -> Iterator[tuple[int, Paint]]:
        """Yield the base paints that can be read."""
        for index in range(self.num_base_paints()):
            item = self.base_paint(index)
            if item is not None:
                yield item

    def num_paint_layers(self) -> int:
        """Return the number of paint layers."""
        return self._list_count(18, 0)

    def paint_layer(self, index: int) -> Paint | None:
        """Return the paint layer at ``index``, or None."""
        if self._version < 1:
            return None
        base = self._reader.u32(18)
        if base is None:
            return None
        count = self._reader.u32(base)
        if count is None or not 0 <= index < count:
            return None
        relative = self._reader.u32(base + 4 + index * 4)
        if relative is None:
            return None
        return self._paint_at(base + relative)

    def paint_layers(self) -> Iterator[Paint]:
        """Yield the paint layers that can be read."""
        for index in range(self.num_paint_layers()):
            paint = self.paint_layer(index)
            if paint is not None:
                yield paint

    def num_clip_boxes(self) -> int:
        """Return the number of clip records."""
        return self._list_count(22, 1)

    def _clip_at(self, record: int) -> ClipBox | None:
        reader = self._reader
        offset = reader.u24(record + 4)
        if not offset:
            return None
        clip_base = record + offset
        fmt = reader.u8(clip_base)
        coords = [reader.i16(clip_base + delta) for delta in (1, 5, 9, 13)]
        if fmt is None or any(value is None for value in coords):
            return None
        var_index = None
        if fmt == 2:
            var_index = reader.u32(clip_base + 17)
            if var_index is None:
                return None
        x_min, y_min, x_max, y_max = (f2dot14_to_float(value) for value in coords)
        return ClipBox(x_min, y_min, x_max, y_max, var_index)

    def _clip_base(self) -> tuple[int, int] | None:
        if self._version < 1:
            return None
        base = self._reader.u32(22)
        if not base:
            return None
        count = self._reader.u32(base + 1)
        return None if count is None else (base, count)

    def clip_box(self, index: int) -> tuple[range, ClipBox] | None:
        """Return the glyph range and clip box of the record at ``index``."""
        found = self._clip_base()
        if found is None:
            return None
        base, count = found
        if not 0 <= index < count:
            return None
        record = base + 5 + index * 7
        start = self._reader.u16(record)
        end = self._reader.u16(record + 2)
        if start is None or end is None:
            return None
        box = self._clip_at(record)
        return None if box is None else (range(start, end + 1), box)

    def find_clip_box(self, gid: int) -> ClipBox | None:
        """Return the clip box covering glyph ``gid``, or None."""
        found = self._clip_base()
        if found is None:
            return None
        base, count = found
        lo, hi = 0, count
        while lo < hi:
            i = (lo + hi) // 2
            record = base + 5 + i * 7
            start = self._reader.u16(record)
            if start is None:
                return None
            if gid < start:
                lo = i + 1
                continue
            end = self._reader.u16(record + 2)
            if end is None:
                return None
            if gid > end:
                hi = i
            else:
                return self._clip_at(record)
        return None

    def clip_boxes(self) -> Iterator[tuple[range, ClipBox]]:
        """Yield the clip records that can be read."""
        for index in range(self.num_clip_boxes()):
            item = self.clip_box(index)
            if item is not None:
                yield item