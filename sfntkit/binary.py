"""Big-endian readers and fixed-point helpers for font table data."""

from __future__ import annotations

import struct

_U8 = struct.Struct(">B")
_U16 = struct.Struct(">H")
_I16 = struct.Struct(">h")
_U32 = struct.Struct(">I")
_I32 = struct.Struct(">i")
_U64 = struct.Struct(">Q")

_FIXED_ONE = 0x10000


class Reader:
    """Bounds-checked big-endian reader over a block of bytes.

    Every read returns ``None`` when the requested range does not lie
    entirely inside the data.
    """

    __slots__ = ("_view",)

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._view = memoryview(data).cast("B") if not isinstance(data, memoryview) else data

    def __len__(self) -> int:
        return len(self._view)

    def __repr__(self) -> str:
        return f"Reader(<{len(self._view)} bytes>)"

    @property
    def data(self) -> bytes:
        """The underlying bytes."""
        return bytes(self._view)

    def _in_range(self, offset: int, size: int) -> bool:
        return offset >= 0 and size >= 0 and offset + size <= len(self._view)

    def _unpack(self, layout: struct.Struct, offset: int) -> int | None:
        if not self._in_range(offset, layout.size):
            return None
        return layout.unpack_from(self._view, offset)[0]

    def u8(self, offset: int) -> int | None:
        """Read an unsigned 8-bit integer."""
        return self._unpack(_U8, offset)

    def u16(self, offset: int) -> int | None:
        """Read an unsigned 16-bit integer."""
        return self._unpack(_U16, offset)

    def i16(self, offset: int) -> int | None:
        """Read a signed 16-bit integer."""
        return self._unpack(_I16, offset)

    def u24(self, offset: int) -> int | None:
        """Read an unsigned 24-bit integer."""
        if not self._in_range(offset, 3):
            return None
        return int.from_bytes(self._view[offset : offset + 3], "big")

    def u32(self, offset: int) -> int | None:
        """Read an unsigned 32-bit integer."""
        return self._unpack(_U32, offset)

    def i32(self, offset: int) -> int | None:
        """Read a signed 32-bit integer."""
        return self._unpack(_I32, offset)

    def u64(self, offset: int) -> int | None:
        """Read an unsigned 64-bit integer."""
        return self._unpack(_U64, offset)

    def tag(self, offset: int) -> int | None:
        """Read a four byte tag as an integer."""
        return self._unpack(_U32, offset)

    def bytes(self, offset: int, length: int) -> bytes | None:
        """Return ``length`` bytes starting at ``offset``."""
        if not self._in_range(offset, length):
            return None
        return bytes(self._view[offset : offset + length])

    def sub(self, offset: int) -> Reader | None:
        """Return a reader over the data starting at ``offset``."""
        if offset < 0 or offset > len(self._view):
            return None
        return Reader(self._view[offset:])


def make_tag(name: bytes | str) -> int:
    """Build an integer tag from four bytes or four characters."""
    raw = name.encode("latin-1") if isinstance(name, str) else bytes(name)
    if len(raw) != 4:
        raise ValueError(f"a tag needs exactly 4 bytes, got {len(raw)}")
    return int.from_bytes(raw, "big")


def tag_to_str(tag: int) -> str:
    """Render an integer tag as its four characters."""
    return (tag & 0xFFFFFFFF).to_bytes(4, "big").decode("latin-1")


def fixed_from_f2dot14(value: int) -> int:
    """Convert a 2.14 fixed value to a 16.16 fixed value."""
    return value * 4


def fixed_mul(a: int, b: int) -> int:
    """Multiply two 16.16 fixed values, rounding to nearest."""
    product = a * b
    magnitude = (abs(product) + 0x8000) >> 16
    return -magnitude if product < 0 else magnitude


def fixed_div(a: int, b: int) -> int:
    """Divide two 16.16 fixed values, rounding to nearest.

    Raises ZeroDivisionError when ``b`` is zero.
    """
    if b == 0:
        raise ZeroDivisionError("fixed-point division by zero")
    magnitude = ((abs(a) << 16) + abs(b) // 2) // abs(b)
    return -magnitude if (a < 0) != (b < 0) else magnitude


def fixed_to_float(value: int) -> float:
    """Convert a 16.16 fixed value to a float."""
    return value / _FIXED_ONE