"""Font variations table."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Iterator

from .binary import Reader, fixed_div, make_tag

FVAR = make_tag(b"fvar")

_FIXED_ONE = 0x10000
_COORD = struct.Struct(">i")


@dataclass(frozen=True)
class Axis:
    """Axis of variation; values are 16.16 fixed point."""

    index: int = 0
    tag: int = 0
    name_id: int = 0
    flags: int = 0
    min_value: int = 0
    default_value: int = 0
    max_value: int = 0

    def is_hidden(self) -> bool:
        """Return True if the axis should be hidden in a user interface."""
        return bool(self.flags & 1)

    def normalize(self, value: int) -> int:
        """Return the normalized 16.16 coordinate for a 16.16 axis value."""
        value = min(max(value, self.min_value), self.max_value)
        if value < self.default_value:
            result = -fixed_div(self.default_value - value, self.default_value - self.min_value)
        elif value > self.default_value:
            result = fixed_div(value - self.default_value, self.max_value - self.default_value)
        else:
            result = 0
        return max(min(result, _FIXED_ONE), -_FIXED_ONE)


@dataclass(frozen=True)
class Instance:
    """Named instance; coordinates are 16.16 fixed point."""

    index: int
    subfamily_name_id: int
    flags: int
    coords: tuple[int, ...]
    postscript_name_id: int | None = None


class Fvar:
    """Font variations table."""

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)
        reader = Reader(self.data)
        self._reader = reader
        self._axis_offset = reader.u16(4) or 0
        self._num_axes = reader.u16(8) or 0
        self._axis_size = reader.u16(10) or 0
        self._num_instances = reader.u16(12) or 0
        self._instance_size = reader.u16(14) or 0

    def major_version(self) -> int:
        """Return the major version."""
        return self._reader.u16(0) or 0

    def minor_version(self) -> int:
        """Return the minor version."""
        return self._reader.u16(2) or 0

    def num_axes(self) -> int:
        """Return the number of variation axes."""
        return self._num_axes

    def axis(self, index: int) -> Axis | None:
        """Return the axis at ``index``, or None if it is missing."""
        if not 0 <= index < self._num_axes:
            return None
        r = self._reader
        offset = self._axis_offset + index * self._axis_size
        values = (
            r.tag(offset),
            r.i32(offset + 4),
            r.i32(offset + 8),
            r.i32(offset + 12),
            r.u16(offset + 16),
            r.u16(offset + 18),
        )
        if any(value is None for value in values):
            return None
        tag, min_value, default_value, max_value, flags, name_id = values
        return Axis(index, tag, name_id, flags, min_value, default_value, max_value)

    def axes(self) -> Iterator[Axis]:
        """Yield the axes that can be read."""
        for index in range(self._num_axes):
            axis = self.axis(index)
            if axis is not None:
                yield axis

    def num_instances(self) -> int:
        """Return the number of named instances."""
        return self._num_instances

    def instance(self, index: int) -> Instance | None:
        """Return the named instance at ``index``, or None if it is missing."""
        if not 0 <= index < self._num_instances:
            return None
        r = self._reader
        base = self._axis_offset + self._num_axes * self._axis_size
        offset = base + index * self._instance_size
        subfamily_name_id = r.u16(offset)
        flags = r.u16(offset + 2)
        raw = r.bytes(offset + 4, self._num_axes * _COORD.size)
        if subfamily_name_id is None or flags is None or raw is None:
            return None
        coords = tuple(value for (value,) in _COORD.iter_unpack(raw))
        ps_name_offset = 4 + self._num_axes * 4
        postscript_name_id = None
        if ps_name_offset == self._instance_size - 2:
            postscript_name_id = r.u16(ps_name_offset)
        return Instance(index, subfamily_name_id, flags, coords, postscript_name_id)

    def instances(self) -> Iterator[Instance]:
        """Yield the named instances that can be read."""
        for index in range(self._num_instances):
            instance = self.instance(index)
            if instance is not None:
                yield instance