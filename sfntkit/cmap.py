"""Character to glyph index mapping table."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Iterator

from .binary import Reader, make_tag

CMAP = make_tag(b"cmap")

_ENCODING_RECORD = struct.Struct(">HHI")


@dataclass(frozen=True)
class EncodingRecord:
    """Encoding and offset to a subtable."""

    platform_id: int
    encoding_id: int
    offset: int


@dataclass(frozen=True)
class MapVariant:
    """Result of mapping a codepoint with a variation selector.

    ``glyph_id`` is None when the default glyph mapping should be used.
    """

    glyph_id: int | None = None

    @property
    def use_default(self) -> bool:
        """True when the default mapping applies."""
        return self.glyph_id is None


USE_DEFAULT = MapVariant()


class Cmap:
    """Character to glyph index mapping table."""

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)
        self._reader = Reader(self.data)

    def version(self) -> int:
        """Return the table version."""
        return self._reader.u16(0) or 0

    def records(self) -> list[EncodingRecord]:
        """Return the encoding records, or an empty list if the data is short."""
        count = self._reader.u16(2) or 0
        raw = self._reader.bytes(4, count * _ENCODING_RECORD.size)
        if raw is None:
            return []
        return [EncodingRecord(*fields) for fields in _ENCODING_RECORD.iter_unpack(raw)]

    def subtables(self) -> Iterator[Subtable]:
        """Yield a subtable for each encoding record."""
        for record in self.records():
            yield Subtable(self, record)

    def map(self, codepoint: int) -> int | None:
        """Map a codepoint to a glyph identifier using the first subtable that can."""
        for subtable in self.subtables():
            glyph = subtable.map(codepoint)
            if glyph is not None:
                return glyph
        return None

    def map_variant(self, codepoint: int, variation_selector: int) -> MapVariant | None:
        """Map a codepoint with a variation selector."""
        for subtable in self.subtables():
            result = subtable.map_variant(codepoint, variation_selector)
            if result is not None:
                return result
        return None


@dataclass(frozen=True)
class Subtable:
    """Character to glyph index mapping subtable."""

    cmap: Cmap
    encoding: EncodingRecord

    def format(self) -> int:
        """Return the subtable format."""
        return Reader(self.cmap.data).u16(self.encoding.offset) or 0

    def map(self, codepoint: int) -> int | None:
        """Map a codepoint to a glyph identifier."""
        return map_codepoint(self.cmap.data, self.encoding.offset, self.format(), codepoint)

    def map_variant(self, codepoint: int, variation_selector: int) -> MapVariant | None:
        """Map a codepoint with a variation selector; only format 14 can."""
        if self.format() != 14:
            return None
        return map_variant(self.cmap.data, self.encoding.offset, codepoint, variation_selector)


def map_codepoint(data: bytes, offset: int, format: int, codepoint: int) -> int | None:
    """Map a codepoint using the subtable of ``format`` at ``offset``.

    Formats 4, 12 and 13 are supported; others map nothing.
    """
    if format == 4:
        return _map_format4(data, offset, codepoint)
    if format == 12:
        found = _map_format12_13(data, offset, codepoint)
        if found is None:
            return None
        start, delta = found
        return (codepoint - start + delta) & 0xFFFF
    if format == 13:
        found = _map_format12_13(data, offset, codepoint)
        return None if found is None else found[1] & 0xFFFF
    return None


def _map_format4(data: bytes, offset: int, codepoint: int) -> int | None:
    if codepoint >= 0xFFFF:
        return None
    table = Reader(data).sub(offset)
    if table is None:
        return None
    seg_x2 = table.u16(6)
    if seg_x2 is None or len(table) < 16 + seg_x2 * 4:
        return None
    ends = 14
    starts = ends + seg_x2 + 2
    deltas = starts + seg_x2
    ranges = deltas + seg_x2
    lo, hi = 0, seg_x2 // 2
    while lo < hi:
        i = (lo + hi) // 2
        i2 = i * 2
        start = table.u16(starts + i2) or 0
        if codepoint < start:
            hi = i
        elif codepoint > (table.u16(ends + i2) or 0):
            lo = i + 1
        else:
            range_offset = table.u16(ranges + i2) or 0
            delta = table.i16(deltas + i2) or 0
            if range_offset == 0:
                return (codepoint + delta) & 0xFFFF
            glyph = table.u16(ranges + i2 + range_offset + (codepoint - start) * 2) or 0
            return (glyph + delta) & 0xFFFF if glyph else 0
    return None


def _map_format12_13(data: bytes, offset: int, codepoint: int) -> tuple[int, int] | None:
    table = Reader(data).sub(offset)
    if table is None:
        return None
    base = 16
    count = table.u32(base - 4)
    if count is None or len(table) < base + count * 12:
        return None
    lo, hi = 0, count
    while lo < hi:
        i = (lo + hi) // 2
        rec = base + i * 12
        start = table.u32(rec) or 0
        if codepoint < start:
            hi = i
        elif codepoint > (table.u32(rec + 4) or 0):
            lo = i + 1
        else:
            return start, table.u32(rec + 8) or 0
    return None


def map_variant(
    data: bytes, offset: int, codepoint: int, variation_selector: int
) -> MapVariant | None:
    """Map a codepoint with a variation selector using the format 14 subtable at ``offset``."""
    table = Reader(data).sub(offset)
    if table is None:
        return None
    count = table.u32(6)
    if count is None:
        return None
    default_uvs = 0
    non_default_uvs = 0
    lo, hi = 0, count
    while lo < hi:
        i = (lo + hi) // 2
        rec = 10 + i * 11
        selector = table.u24(rec)
        if selector is None:
            return None
        if variation_selector < selector:
            hi = i
        elif variation_selector > selector:
            lo = i + 1
        else:
            default_uvs = table.u32(rec + 3)
            non_default_uvs = table.u32(rec + 7)
            if default_uvs is None or non_default_uvs is None:
                return None
            break

    if default_uvs:
        ranges = table.u32(default_uvs)
        if ranges is None:
            return None
        lo, hi = 0, ranges
        while lo < hi:
            i = (lo + hi) // 2
            rec = default_uvs + 4 + i * 4
            start = table.u24(rec)
            if start is None:
                return None
            if codepoint < start:
                hi = i
                continue
            extra = table.u8(rec + 3)
            if extra is None:
                return None
            if codepoint > start + extra:
                lo = i + 1
            else:
                return USE_DEFAULT

    if non_default_uvs:
        mappings = table.u32(non_default_uvs)
        if mappings is None:
            return None
        lo, hi = 0, mappings
        while lo < hi:
            i = (lo + hi) // 2
            rec = non_default_uvs + 4 + i * 5
            value = table.u24(rec)
            if value is None:
                return None
            if codepoint < value:
                hi = i
            elif codepoint > value:
                lo = i + 1
            else:
                glyph = table.u16(rec + 3)
                return None if glyph is None else MapVariant(glyph)
    return None