"""Color palette table."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from .binary import Reader, make_tag

CPAL = make_tag(b"CPAL")

_COLOR_SIZE = 4


class Theme(Enum):
    """Theme of a palette with respect to background color."""

    ANY = "any"
    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True)
class Color:
    """RGBA color value."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0


@dataclass(frozen=True)
class Palette:
    """Collection of colors."""

    index: int
    name_id: int | None
    theme: Theme
    colors: tuple[Color, ...]


class Cpal:
    """Color palette table."""

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)
        reader = Reader(self.data)
        self._reader = reader
        self._version = reader.u16(0) or 0
        self._length = reader.u16(4) or 0
        self._offset = reader.u32(8) or 0

    def version(self) -> int:
        """Return the table version."""
        return self._version

    def __len__(self) -> int:
        return self._length

    def _name_id(self, index: int) -> int | None:
        if self._version == 0:
            return None
        labels = self._reader.u32(16 + self._length * 2)
        if not labels:
            return None
        return self._reader.u16(labels + index * 2)

    def _theme(self, index: int) -> Theme:
        flags = 0
        if self._version != 0:
            types = self._reader.u32(12 + self._length * 2)
            if types:
                flags = self._reader.u32(types + index * 4) or 0
        bits = flags & 0b11
        if bits == 0b01:
            return Theme.LIGHT
        if bits == 0b10:
            return Theme.DARK
        return Theme.ANY

    def get(self, index: int) -> Palette | None:
        """Return the palette at ``index``, or None if it is missing."""
        if not 0 <= index < self._length:
            return None
        r = self._reader
        entries = r.u16(2)
        first = r.u32(12 + index * 2)
        if entries is None or first is None:
            return None
        raw = r.bytes(self._offset + first, entries * _COLOR_SIZE)
        if raw is None:
            return None
        colors = tuple(
            Color(r=raw[i + 2], g=raw[i + 1], b=raw[i], a=raw[i + 3])
            for i in range(0, len(raw), _COLOR_SIZE)
        )
        return Palette(index, self._name_id(index), self._theme(index), colors)

    def palettes(self) -> Iterator[Palette]:
        """Yield the palettes that can be read."""
        for index in range(self._length):
            palette = self.get(index)
            if palette is not None:
                yield palette