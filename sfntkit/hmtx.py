"""Horizontal metrics table."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from .binary import Reader, make_tag

HMTX = make_tag(b"hmtx")

_HMETRIC = struct.Struct(">Hh")
_LSB = struct.Struct(">h")


@dataclass(frozen=True)
class HMetric:
    """Paired advance width and left side bearing, in font units."""

    advance_width: int
    lsb: int


@dataclass(frozen=True)
class Hmtx:
    """Horizontal metrics table.

    ``num_glyphs`` comes from the ``maxp`` table and ``num_hmetrics`` from
    the ``hhea`` table.
    """

    data: bytes
    num_glyphs: int
    num_hmetrics: int

    def hmetrics(self) -> list[HMetric]:
        """Return the long metrics, or an empty list if the data is short."""
        raw = Reader(self.data).bytes(0, self.num_hmetrics * _HMETRIC.size)
        if raw is None:
            return []
        return [HMetric(advance, lsb) for advance, lsb in _HMETRIC.iter_unpack(raw)]

    def lsbs(self) -> list[int]:
        """Return the trailing left side bearings, or an empty list if the data is short."""
        count = max(0, self.num_glyphs - self.num_hmetrics)
        offset = self.num_hmetrics * _HMETRIC.size
        raw = Reader(self.data).bytes(offset, count * _LSB.size)
        if raw is None:
            return []
        return [lsb for (lsb,) in _LSB.iter_unpack(raw)]