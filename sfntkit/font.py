"""Font files, collections and their table directories."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from .avar import AVAR, Avar
from .binary import Reader, make_tag
from .cmap import CMAP, Cmap
from .colr import COLR, Colr
from .cpal import CPAL, Cpal
from .fvar import FVAR, Fvar
from .head import HEAD, Head
from .hhea import HHEA, Hhea
from .hmtx import Hmtx
from .maxp import MAXP, Maxp
from .name import NAME, Name
from .os2 import OS2, Os2

TTCF = make_tag(b"ttcf")
OTTO = make_tag(b"OTTO")
FONT = 0x00010000
DFNT = make_tag(b"\x00\x00\x01\x00")
TRUE = make_tag(b"true")
SFNT = make_tag(b"sfnt")
HMTX = make_tag(b"hmtx")

_TABLE_RECORD = struct.Struct(">4I")
_DIRECTORY_HEADER_SIZE = 12


def _as_tag(tag: int | bytes | str) -> int:
    return tag if isinstance(tag, int) else make_tag(tag)


class FontKind(Enum):
    """Kind of a font."""

    TRUE_TYPE = "truetype"
    OPEN_TYPE = "opentype"

    @classmethod
    def parse(cls, data: bytes, offset: int) -> FontKind | None:
        """Return the font kind of the table directory at ``offset``, or None."""
        tag = Reader(data).tag(offset)
        if tag in (FONT, TRUE):
            return cls.TRUE_TYPE
        if tag == OTTO:
            return cls.OPEN_TYPE
        return None


class FontDataKind(Enum):
    """Kind of a font file."""

    TRUE_TYPE = "truetype"
    OPEN_TYPE = "opentype"
    COLLECTION = "collection"
    RESOURCE_FORK = "resource_fork"

    @property
    def font_kind(self) -> FontKind | None:
        """The font kind for a single font, None for containers."""
        if self is FontDataKind.TRUE_TYPE:
            return FontKind.TRUE_TYPE
        if self is FontDataKind.OPEN_TYPE:
            return FontKind.OPEN_TYPE
        return None

    @classmethod
    def parse(cls, data: bytes, offset: int) -> FontDataKind | None:
        """Return the kind of font data at ``offset``, or None if unrecognized."""
        tag = Reader(data).tag(offset)
        if tag is None:
            return None
        if tag == TTCF:
            return cls.COLLECTION
        if tag == DFNT:
            return cls.RESOURCE_FORK
        kind = FontKind.parse(data, offset)
        if kind is FontKind.TRUE_TYPE:
            return cls.TRUE_TYPE
        if kind is FontKind.OPEN_TYPE:
            return cls.OPEN_TYPE
        return None


@dataclass(frozen=True)
class TableRecord:
    """Entry of the table directory."""

    tag: int
    checksum: int
    offset: int
    length: int

    def data_range(self) -> range:
        """Return the byte range of the table in the font data."""
        return range(self.offset, self.offset + self.length)


@dataclass(frozen=True)
class Table:
    """Table data together with its directory record."""

    data: bytes
    record: TableRecord


def _slice(data: bytes, span: range) -> bytes | None:
    if span.stop > len(data):
        return None
    return data[span.start : span.stop]


@dataclass(frozen=True)
class FontRef:
    """Single font inside font data; ``offset`` locates its table directory."""

    data: bytes
    offset: int = 0

    @classmethod
    def from_index(cls, data: bytes, index: int) -> FontRef:
        """Return the font at ``index`` in ``data``.

        Raises ValueError if the data is not font data and IndexError if
        there is no font at ``index``.
        """
        font = FontDataRef(data).get(index)
        if font is None:
            raise IndexError(f"no font at index {index}")
        return font

    @classmethod
    def from_offset(cls, data: bytes, offset: int) -> FontRef:
        """Return the font whose table directory is at ``offset``.

        Raises ValueError if no font starts there.
        """
        data = bytes(data)
        if FontKind.parse(data, offset) is None:
            raise ValueError(f"no font table directory at offset {offset}")
        return cls(data, offset)

    def kind(self) -> FontKind | None:
        """Return the kind of the font."""
        return FontKind.parse(self.data, self.offset)

    def __len__(self) -> int:
        return Reader(self.data).u16(self.offset + 4) or 0

    def records(self) -> list[TableRecord]:
        """Return the table records, or an empty list if the directory is short."""
        raw = Reader(self.data).bytes(
            self.offset + _DIRECTORY_HEADER_SIZE, len(self) * _TABLE_RECORD.size
        )
        if raw is None:
            return []
        return [TableRecord(*fields) for fields in _TABLE_RECORD.iter_unpack(raw)]

    def find_record(self, tag: int | bytes | str) -> TableRecord | None:
        """Return the record of the table with ``tag``, or None."""
        wanted = _as_tag(tag)
        reader = Reader(self.data)
        count = reader.u16(self.offset + 4)
        if count is None:
            return None
        base = self.offset + _DIRECTORY_HEADER_SIZE
        lo, hi = 0, count
        while lo < hi:
            i = (lo + hi) // 2
            raw = reader.bytes(base + i * _TABLE_RECORD.size, _TABLE_RECORD.size)
            if raw is None:
                return None
            found, checksum, offset, length = _TABLE_RECORD.unpack(raw)
            if wanted < found:
                hi = i
            elif wanted > found:
                lo = i + 1
            else:
                return TableRecord(found, checksum, offset, length)
        return None

    def tables(self) -> Iterator[Table]:
        """Yield the tables whose data lies inside the font data."""
        for record in self.records():
            data = _slice(self.data, record.data_range())
            if data is not None:
                yield Table(data, record)

    def find_table(self, tag: int | bytes | str) -> Table | None:
        """Return the table with ``tag``, or None."""
        record = self.find_record(tag)
        if record is None:
            return None
        data = _slice(self.data, record.data_range())
        return None if data is None else Table(data, record)

    def table_data(self, tag: int | bytes | str) -> bytes | None:
        """Return the raw data of the table with ``tag``, or None."""
        record = self.find_record(tag)
        return None if record is None else _slice(self.data, record.data_range())

    def head(self) -> Head | None:
        """Return the font header table."""
        data = self.table_data(HEAD)
        return None if data is None else Head.parse(data)

    def maxp(self) -> Maxp | None:
        """Return the maximum profile table."""
        data = self.table_data(MAXP)
        return None if data is None else Maxp.parse(data)

    def os2(self) -> Os2 | None:
        """Return the OS/2 and Windows metrics table."""
        data = self.table_data(OS2)
        return None if data is None else Os2.parse(data)

    def hhea(self) -> Hhea | None:
        """Return the horizontal header table."""
        data = self.table_data(HHEA)
        return None if data is None else Hhea.parse(data)

    def hmtx(self) -> Hmtx | None:
        """Return the horizontal metrics table; needs ``maxp`` and ``hhea``."""
        maxp = self.maxp()
        if maxp is None:
            return None
        hhea = self.hhea()
        if hhea is None:
            return None
        data = self.table_data(HMTX)
        if data is None:
            return None
        return Hmtx(data, maxp.num_glyphs, hhea.num_long_metrics)

    def name(self) -> Name | None:
        """Return the naming table."""
        data = self.table_data(NAME)
        return None if data is None else Name(data)

    def cmap(self) -> Cmap | None:
        """Return the character mapping table."""
        data = self.table_data(CMAP)
        return None if data is None else Cmap(data)

    def fvar(self) -> Fvar | None:
        """Return the font variations table."""
        data = self.table_data(FVAR)
        return None if data is None else Fvar(data)

    def avar(self) -> Avar | None:
        """Return the axis variations table."""
        data = self.table_data(AVAR)
        return None if data is None else Avar(data)

    def cpal(self) -> Cpal | None:
        """Return the color palette table."""
        data = self.table_data(CPAL)
        return None if data is None else Cpal(data)

    def colr(self) -> Colr | None:
        """Return the color table."""
        data = self.table_data(COLR)
        return None if data is None else Colr(data)


class FontDataRef:
    """Content of a font file: a single font, a collection or a resource fork."""

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)
        if FontDataKind.parse(self.data, 0) is None:
            raise ValueError("data is not a recognized font format")

    def __repr__(self) -> str:
        return f"FontDataRef({self.kind()}, <{len(self.data)} bytes>)"

    def kind(self) -> FontDataKind | None:
        """Return the kind of the font data."""
        return FontDataKind.parse(self.data, 0)

    def __len__(self) -> int:
        return _font_count(self.data)

    def get(self, index: int) -> FontRef | None:
        """Return the font at ``index``, or None if it is missing."""
        if not 0 <= index < len(self):
            return None
        kind = self.kind()
        reader = Reader(self.data)
        if kind is FontDataKind.COLLECTION:
            offset = reader.u32(12 + index * 4)
            return None if offset is None else FontRef(self.data, offset)
        if kind is FontDataKind.RESOURCE_FORK:
            span = _dfont_range(self.data, index)
            if span is None or span[0] > len(self.data):
                return None
            return FontRef(self.data[span[0] :], 0)
        return FontRef(self.data, 0)

    def fonts(self) -> Iterator[FontRef]:
        """Yield the fonts that can be located."""
        for index in range(len(self)):
            font = self.get(index)
            if font is not None:
                yield font


def _font_count(data: bytes) -> int:
    kind = FontDataKind.parse(data, 0)
    if kind is None:
        return 0
    if kind is FontDataKind.COLLECTION:
        return Reader(data).u32(8) or 0
    if kind is FontDataKind.RESOURCE_FORK:
        return _dfont_count(data) or 0
    return 1


def _sfnt_type_entry(reader: Reader) -> tuple[int, int] | None:
    """Return the type list base and the offset of the 'sfnt' type entry."""
    resource_map_base = reader.u32(4)
    if resource_map_base is None:
        return None
    type_list_offset = reader.u16(resource_map_base + 24)
    if type_list_offset is None:
        return None
    type_list_base = resource_map_base + type_list_offset
    type_count = reader.u16(type_list_base)
    if type_count is None:
        return None
    for i in range(type_count + 1):
        entry = type_list_base + 2 + i * 8
        tag = reader.tag(entry)
        if tag is None:
            return None
        if tag == SFNT:
            return type_list_base, entry
    return None


def _dfont_count(data: bytes) -> int | None:
    reader = Reader(data)
    found = _sfnt_type_entry(reader)
    if found is None:
        return None
    count = reader.u16(found[1] + 4)
    return None if count is None else count + 1


def _dfont_range(data: bytes, index: int) -> tuple[int, int] | None:
    reader = Reader(data)
    data_base = reader.u32(0)
    if data_base is None:
        return None
    found = _sfnt_type_entry(reader)
    if found is None:
        return None
    type_list_base, entry = found
    count = reader.u16(entry + 4)
    if count is None or index >= count + 1:
        return None
    resources_offset = reader.u16(entry + 6)
    if resources_offset is None:
        return None
    resource_base = type_list_base + resources_offset + index * 12
    relative = reader.u24(resource_base + 5)
    if relative is None:
        return None
    data_offset = data_base + relative
    data_len = reader.u32(data_offset)
    if data_len is None:
        return None
    return data_offset + 4, data_offset + 4 + data_len