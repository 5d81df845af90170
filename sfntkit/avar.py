"""Axis variations table."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from .binary import Reader, fixed_div, fixed_from_f2dot14, fixed_mul, make_tag

AVAR = make_tag(b"avar")

_VALUE_MAP = struct.Struct(">hh")
_HEADER_SIZE = 8


@dataclass(frozen=True)
class ValueMap:
    """Axis value mapping in 2.14 fixed point."""

    from_coord: int = 0
    to_coord: int = 0


@dataclass(frozen=True)
class SegmentMap:
    """Value maps for a single axis."""

    values: tuple[ValueMap, ...]

    def apply(self, coord: int) -> int:
        """Return the 16.16 coordinate remapped through the value maps."""
        prev = ValueMap()
        for i, value_map in enumerate(self.values):
            source = fixed_from_f2dot14(value_map.from_coord)
            if source == coord:
                return fixed_from_f2dot14(value_map.to_coord)
            if source > coord:
                if i == 0:
                    return coord
                target = fixed_from_f2dot14(value_map.to_coord)
                prev_source = fixed_from_f2dot14(prev.from_coord)
                prev_target = fixed_from_f2dot14(prev.to_coord)
                scaled = fixed_mul(target - prev_target, coord - prev_source)
                return prev_target + fixed_div(scaled, source - prev_source)
            prev = value_map
        return coord


class Avar:
    """Axis variations table."""

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)
        self._reader = Reader(self.data)

    def major_version(self) -> int:
        """Return the major version."""
        return self._reader.u16(0) or 0

    def minor_version(self) -> int:
        """Return the minor version."""
        return self._reader.u16(2) or 0

    def num_axes(self) -> int:
        """Return the number of axes."""
        return self._reader.u16(6) or 0

    def segment_map(self, axis: int) -> SegmentMap | None:
        """Return the segment map for ``axis``, or None if it is not present."""
        reader = self._reader
        pos = _HEADER_SIZE
        if pos > len(reader):
            return None
        for _ in range(axis):
            count = reader.u16(pos)
            if count is None:
                return None
            pos += 2 + count * _VALUE_MAP.size
            if pos > len(reader):
                return None
        count = reader.u16(pos)
        if count is None:
            return None
        raw = reader.bytes(pos + 2, count * _VALUE_MAP.size)
        if raw is None:
            return None
        return SegmentMap(tuple(ValueMap(a, b) for a, b in _VALUE_MAP.iter_unpack(raw)))