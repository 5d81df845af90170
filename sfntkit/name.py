"""Naming table."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator

from .binary import Reader, make_tag

NAME = make_tag(b"name")

_RECORD = struct.Struct(">6H")
_HEADER_SIZE = 6

_UTF16 = 0
_MAC_ROMAN = 1
_UNSUPPORTED = 2

_REPLACEMENT = "\ufffd"

_MAC_ROMAN_HIGH = (
    196, 197, 199, 201, 209, 214, 220, 225, 224, 226, 228, 227, 229, 231, 233,
    232, 234, 235, 237, 236, 238, 239, 241, 243, 242, 244, 246, 245, 250, 249,
    251, 252, 8224, 176, 162, 163, 167, 8226, 182, 223, 174, 169, 8482, 180,
    168, 8800, 198, 216, 8734, 177, 8804, 8805, 165, 181, 8706, 8721, 8719,
    960, 8747, 170, 186, 937, 230, 248, 191, 161, 172, 8730, 402, 8776, 8710,
    171, 187, 8230, 160, 192, 195, 213, 338, 339, 8211, 8212, 8220, 8221, 8216,
    8217, 247, 9674, 255, 376, 8260, 8364, 8249, 8250, 64257, 64258, 8225, 183,
    8218, 8222, 8240, 194, 202, 193, 203, 200, 205, 206, 207, 204, 211, 212,
    63743, 210, 218, 219, 217, 305, 710, 732, 175, 728, 729, 730, 184, 733,
    731, 711,
)


class NameId(IntEnum):
    """Well-known name identifiers."""

    COPYRIGHT_NOTICE = 0
    FAMILY_NAME = 1
    SUBFAMILY_NAME = 2
    UNIQUE_ID = 3
    FULL_NAME = 4
    VERSION_STRING = 5
    POSTSCRIPT_NAME = 6
    TRADEMARK = 7
    MANUFACTURER = 8
    DESIGNER = 9
    DESCRIPTION = 10
    VENDOR_URL = 11
    DESIGNER_URL = 12
    LICENSE_DESCRIPTION = 13
    LICENSE_URL = 14
    TYPOGRAPHIC_FAMILY_NAME = 16
    TYPOGRAPHIC_SUBFAMILY_NAME = 17
    COMPATIBLE_FULL_NAME = 18
    SAMPLE_TEXT = 19
    POSTSCRIPT_CID_NAME = 20
    WWS_FAMILY_NAME = 21
    WWS_SUBFAMILY_NAME = 22
    LIGHT_BACKGROUND_PALETTE = 23
    DARK_BACKGROUND_PALETTE = 24
    VARIATIONS_POSTSCRIPT_NAME_PREFIX = 25


def _encoding(platform_id: int, encoding_id: int) -> int:
    if platform_id == 0:
        return _UTF16
    if platform_id == 1 and encoding_id == 0:
        return _MAC_ROMAN
    if platform_id == 3 and encoding_id in (0, 1, 10):
        return _UTF16
    return _UNSUPPORTED


def _char(codepoint: int) -> str:
    if 0xD800 <= codepoint <= 0xDFFF or codepoint > 0x10FFFF:
        return _REPLACEMENT
    return chr(codepoint)


@dataclass(frozen=True)
class NameRecord:
    """Record for an entry in the naming table."""

    platform_id: int = 0
    encoding_id: int = 0
    language_id: int = 0
    name_id: int = 0
    length: int = 0
    offset: int = 0

    def is_decodable(self) -> bool:
        """Return True if the string data can be decoded."""
        return _encoding(self.platform_id, self.encoding_id) != _UNSUPPORTED

    def storage_range(self) -> range:
        """Return the byte range of the string in the storage area."""
        return range(self.offset, self.offset + self.length)


class Name:
    """Naming table."""

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)
        self._reader = Reader(self.data)

    def version(self) -> int:
        """Return the table version."""
        return self._reader.u16(0) or 0

    def records(self) -> list[NameRecord]:
        """Return the name records, or an empty list if the data is short."""
        count = self._reader.u16(2) or 0
        raw = self._reader.bytes(_HEADER_SIZE, count * _RECORD.size)
        if raw is None:
            return []
        return [NameRecord(*fields) for fields in _RECORD.iter_unpack(raw)]

    def entries(self) -> Iterator[Entry]:
        """Yield an entry for each name record."""
        for record in self.records():
            yield Entry(self, record)

    def storage(self) -> bytes:
        """Return the storage area holding the string data."""
        offset = self._reader.u16(4)
        if not offset:
            return b""
        return self.data[offset:]


@dataclass(frozen=True)
class Entry:
    """Name in the naming table together with its record."""

    name: Name
    record: NameRecord

    def data(self) -> bytes | None:
        """Return the raw string bytes, or None if they lie outside the storage."""
        storage = self.name.storage()
        span = self.record.storage_range()
        if span.stop > len(storage):
            return None
        return storage[span.start : span.stop]

    def decode(self) -> Iterator[str]:
        """Yield the characters of the name."""
        raw = self.data() or b""
        kind = _encoding(self.record.platform_id, self.record.encoding_id)
        if kind == _UTF16:
            yield from _decode_utf16(raw)
        elif kind == _MAC_ROMAN:
            for byte in raw:
                yield _char(_MAC_ROMAN_HIGH[byte - 128]) if byte > 127 else chr(byte)

    def text(self) -> str:
        """Return the decoded name as a string."""
        return "".join(self.decode())


def _decode_utf16(raw: bytes) -> Iterator[str]:
    reader = Reader(raw)
    pos = 0
    while pos < len(raw):
        unit = reader.u16(pos)
        if unit is None:
            return
        pos += 2
        if 0xD800 <= unit < 0xDC00:
            low = reader.u16(pos)
            if low is None:
                return
            pos += 2
            unit = ((unit & 0x3FF) << 10) + (low & 0x3FF) + 0x10000
        yield _char(unit)