"""Paint graph nodes of the color table."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Iterator, Union

from .binary import Reader

_F32 = struct.Struct(">f")
_FIXED_SCALE = 1.0 / 65536.0


def _to_f32(value: float) -> float:
    """Round a value to single precision."""
    return _F32.unpack(_F32.pack(value))[0]


def fixed_to_float32(value: int) -> float:
    """Convert a 16.16 fixed value to a single precision float."""
    return _to_f32(value) * _FIXED_SCALE


def f2dot14_to_float(value: int) -> float:
    """Convert a 2.14 fixed value to a float."""
    return (value * 4) * _FIXED_SCALE


class CompositeMode(IntEnum):
    """Compositing modes."""

    CLEAR = 0
    SRC = 1
    DEST = 2
    SRC_OVER = 3
    DEST_OVER = 4
    SRC_IN = 5
    DEST_IN = 6
    SRC_OUT = 7
    DEST_OUT = 8
    SRC_ATOP = 9
    DEST_ATOP = 10
    XOR = 11
    PLUS = 12
    SCREEN = 13
    OVERLAY = 14
    DARKEN = 15
    LIGHTEN = 16
    COLOR_DODGE = 17
    COLOR_BURN = 18
    HARD_LIGHT = 19
    SOFT_LIGHT = 20
    DIFFERENCE = 21
    EXCLUSION = 22
    MULTIPLY = 23
    HSL_HUE = 24
    HSL_SATURATION = 25
    HSL_COLOR = 26
    HSL_LUMINOSITY = 27


class Extend(IntEnum):
    """Extension mode for gradients."""

    PAD = 0
    REPEAT = 1
    REFLECT = 2


@dataclass(frozen=True)
class ClipBox:
    """Clip box for a color outline."""

    x_min: float = 0.0
    y_min: float = 0.0
    x_max: float = 0.0
    y_max: float = 0.0
    var_index: int | None = None


@dataclass(frozen=True)
class ColorStop:
    """Single color stop of a gradient."""

    offset: float = 0.0
    palette_index: int = 0
    alpha: float = 0.0
    var_index: int | None = None


class _Malformed(Exception):
    """Raised internally when paint data is truncated or invalid."""


class _Cursor:
    """Sequential reader that raises _Malformed when data runs out."""

    __slots__ = ("_reader", "_pos")

    def __init__(self, reader: Reader, pos: int = 0) -> None:
        self._reader = reader
        self._pos = pos

    def _take(self, read: Callable[[int], int | None], size: int) -> int:
        value = read(self._pos)
        if value is None:
            raise _Malformed
        self._pos += size
        return value

    def u8(self) -> int:
        return self._take(self._reader.u8, 1)

    def u16(self) -> int:
        return self._take(self._reader.u16, 2)

    def i16(self) -> int:
        return self._take(self._reader.i16, 2)

    def u24(self) -> int:
        return self._take(self._reader.u24, 3)

    def u32(self) -> int:
        return self._take(self._reader.u32, 4)

    def i32(self) -> int:
        return self._take(self._reader.i32, 4)


class ColorLine:
    """Collection of color stops that define a gradient."""

    __slots__ = ("_reader", "extend", "is_var", "_length")

    def __init__(self, reader: Reader, extend: Extend, is_var: bool, length: int) -> None:
        self._reader = reader
        self.extend = extend
        self.is_var = is_var
        self._length = length

    def __len__(self) -> int:
        return self._length

    def __repr__(self) -> str:
        return f"ColorLine({self.extend.name}, {list(self.stops())!r})"

    def get(self, index: int) -> ColorStop | None:
        """Return the color stop at ``index``, or None if it is missing."""
        if not 0 <= index < self._length:
            return None
        size = 10 if self.is_var else 6
        base = index * size + 3
        reader = self._reader
        offset = reader.i16(base)
        palette_index = reader.u16(base + 2)
        alpha = reader.i16(base + 4)
        if offset is None or palette_index is None or alpha is None:
            return None
        var_index = None
        if self.is_var:
            var_index = reader.u32(base + 6)
            if var_index is None:
                return None
        return ColorStop(f2dot14_to_float(offset), palette_index, f2dot14_to_float(alpha), var_index)

    def stops(self) -> Iterator[ColorStop]:
        """Yield the color stops that can be read."""
        for index in range(self._length):
            stop = self.get(index)
            if stop is not None:
                yield stop


@dataclass(frozen=True)
class PaintLayers:
    """Range of paint layers."""

    start: int
    end: int


@dataclass(frozen=True)
class PaintSolid:
    """Solid color fill."""

    palette_index: int
    alpha: float
    var_index: int | None = None


@dataclass(frozen=True, eq=False)
class PaintLinearGradient:
    """Linear gradient fill."""

    color_line: ColorLine
    x0: float
    y0: float
    x1: float
    y1: float
    x2: float
    y2: float
    var_index: int | None = None


@dataclass(frozen=True, eq=False)
class PaintRadialGradient:
    """Radial gradient fill."""

    color_line: ColorLine
    x0: float
    y0: float
    radius0: float
    x1: float
    y1: float
    radius1: float
    var_index: int | None = None


@dataclass(frozen=True, eq=False)
class PaintSweepGradient:
    """Sweep gradient fill."""

    color_line: ColorLine
    center_x: float
    center_y: float
    start_angle: float
    end_angle: float
    var_index: int | None = None


@dataclass(frozen=True, eq=False)
class PaintGlyph:
    """Glyph outline filled by a child paint."""

    paint: PaintRef
    id: int


@dataclass(frozen=True)
class PaintColorGlyph:
    """Reference to another color glyph."""

    id: int


@dataclass(frozen=True, eq=False)
class PaintTransform:
    """Affine transform of a child paint."""

    paint: PaintRef
    xx: float
    yx: float
    xy: float
    yy: float
    dx: float
    dy: float
    var_index: int | None = None


@dataclass(frozen=True, eq=False)
class PaintTranslate:
    """Translation of a child paint."""

    paint: PaintRef
    dx: float
    dy: float
    var_index: int | None = None


@dataclass(frozen=True, eq=False)
class PaintScale:
    """Scale of a child paint."""

    paint: PaintRef
    scale_x: float
    scale_y: float
    var_index: int | None = None


@dataclass(frozen=True, eq=False)
class PaintScaleAroundCenter:
    """Scale of a child paint around a center point."""

    paint: PaintRef
    scale_x: float
    scale_y: float
    center_x: float
    center_y: float
    var_index: int | None = None


@dataclass(frozen=True, eq=False)
class PaintScaleUniform:
    """Uniform scale of a child paint."""

    paint: PaintRef
    scale: float
    var_index: int | None = None


@dataclass(frozen=True, eq=False)
class PaintScaleUniformAroundCenter:
    """Uniform scale of a child paint around a center point."""

    paint: PaintRef
    scale: float
    center_x: float
    center_y: float
    var_index: int | None = None


@dataclass(frozen=True, eq=False)
class PaintRotate:
    """Rotation of a child paint."""

    paint: PaintRef
    angle: float
    var_index: int | None = None


@dataclass(frozen=True, eq=False)
class PaintRotateAroundCenter:
    """Rotation of a child paint around a center point."""

    paint: PaintRef
    angle: float
    center_x: float
    center_y: float
    var_index: int | None = None


@dataclass(frozen=True, eq=False)
class PaintSkew:
    """Skew of a child paint."""

    paint: PaintRef
    x_skew: float
    y_skew: float
    var_index: int | None = None


@dataclass(frozen=True, eq=False)
class PaintSkewAroundCenter:
    """Skew of a child paint around a center point."""

    paint: PaintRef
    x_skew: float
    y_skew: float
    center_x: float
    center_y: float
    var_index: int | None = None


@dataclass(frozen=True, eq=False)
class PaintComposite:
    """Composition of a source paint onto a backdrop paint."""

    source: PaintRef
    mode: CompositeMode
    backdrop: PaintRef


Paint = Union[
    PaintLayers,
    PaintSolid,
    PaintLinearGradient,
    PaintRadialGradient,
    PaintSweepGradient,
    PaintGlyph,
    PaintColorGlyph,
    PaintTransform,
    PaintTranslate,
    PaintScale,
    PaintScaleAroundCenter,
    PaintScaleUniform,
    PaintScaleUniformAroundCenter,
    PaintRotate,
    PaintRotateAroundCenter,
    PaintSkew,
    PaintSkewAroundCenter,
    PaintComposite,
]


class PaintRef:
    """Reference to a paint graph node; offsets inside it are relative to its start."""

    __slots__ = ("_reader",)

    def __init__(self, reader: Reader) -> None:
        self._reader = reader

    @classmethod
    def at(cls, data: bytes | Reader, offset: int) -> PaintRef | None:
        """Return a reference to the paint at ``offset``, or None if out of range."""
        reader = data if isinstance(data, Reader) else Reader(data)
        sub = reader.sub(offset)
        return None if sub is None else cls(sub)

    def __repr__(self) -> str:
        node = self.get()
        return "(null)" if node is None else repr(node)

    def get(self) -> Paint | None:
        """Return the paint node, or None if it is malformed or of unknown format."""
        try:
            return self._parse()
        except _Malformed:
            return None

    def _child(self, offset: int) -> PaintRef:
        child = PaintRef.at(self._reader, offset)
        if child is None:
            raise _Malformed
        return child

    def _color_line(self, offset: int, is_var: bool) -> ColorLine:
        reader = self._reader.sub(offset)
        if reader is None:
            raise _Malformed
        raw_extend = reader.u8(0)
        length = reader.u16(1)
        if raw_extend is None or length is None or raw_extend not in Extend._value2member_map_:
            raise _Malformed
        return ColorLine(reader, Extend(raw_extend), is_var, length)

    def _parse(self) -> Paint | None:
        c = _Cursor(self._reader)
        fmt = c.u8()
        variable = fmt % 2 == 1

        def var_index(cursor: _Cursor = c) -> int | None:
            return cursor.u32() if variable else None

        def fixed(cursor: _Cursor = c) -> float:
            return fixed_to_float32(cursor.i32())

        def f2dot14() -> float:
            return f2dot14_to_float(c.i16())

        def coord() -> float:
            return float(c.i16())

        if fmt == 1:
            count = c.u8()
            start = c.u32()
            return PaintLayers(start, start + count)
        if fmt in (2, 3):
            palette_index = c.u16()
            alpha = f2dot14()
            return PaintSolid(palette_index, alpha, var_index())
        if fmt in (4, 5):
            line_offset = c.u24()
            x0, y0, x1, y1, x2, y2 = (coord() for _ in range(6))
            index = var_index()
            line = self._color_line(line_offset, index is not None)
            return PaintLinearGradient(line, x0, y0, x1, y1, x2, y2, index)
        if fmt in (6, 7):
            line_offset = c.u24()
            x0, y0, radius0, x1, y1, radius1 = (coord() for _ in range(6))
            index = var_index()
            line = self._color_line(line_offset, index is not None)
            return PaintRadialGradient(line, x0, y0, radius0, x1, y1, radius1, index)
        if fmt in (8, 9):
            line_offset = c.u24()
            center_x = coord()
            center_y = coord()
            start_angle = f2dot14()
            end_angle = f2dot14()
            index = var_index()
            line = self._color_line(line_offset, index is not None)
            return PaintSweepGradient(line, center_x, center_y, start_angle, end_angle, index)
        if fmt == 10:
            paint = self._child(c.u24())
            return PaintGlyph(paint, c.u16())
        if fmt == 11:
            return PaintColorGlyph(c.u16())
        if fmt in (12, 13):
            paint = self._child(c.u24())
            matrix = _Cursor(self._reader, c.u24())
            xx, yx, xy, yy, dx, dy = (fixed(matrix) for _ in range(6))
            return PaintTransform(paint, xx, yx, xy, yy, dx, dy, var_index(matrix))
        if fmt in (14, 15):
            paint = self._child(c.u24())
            dx = fixed()
            dy = fixed()
            return PaintTranslate(paint, dx, dy, var_index())
        if fmt in (16, 17):
            paint = self._child(c.u24())
            scale_x = fixed()
            scale_y = fixed()
            return PaintScale(paint, scale_x, scale_y, var_index())
        if fmt in (18, 19):
            paint = self._child(c.u24())
            scale_x, scale_y, center_x, center_y = (fixed() for _ in range(4))
            return PaintScaleAroundCenter(paint, scale_x, scale_y, center_x, center_y, var_index())
        if fmt in (20, 21):
            paint = self._child(c.u24())
            return PaintScaleUniform(paint, fixed(), var_index())
        if fmt in (22, 23):
            paint = self._child(c.u24())
            scale, center_x, center_y = (fixed() for _ in range(3))
            return PaintScaleUniformAroundCenter(paint, scale, center_x, center_y, var_index())
        if fmt in (24, 25):
            paint = self._child(c.u24())
            return PaintRotate(paint, f2dot14(), var_index())
        if fmt in (26, 27):
            paint = self._child(c.u24())
            angle = f2dot14()
            center_x = fixed()
            center_y = fixed()
            return PaintRotateAroundCenter(paint, angle, center_x, center_y, var_index())
        if fmt in (28, 29):
            paint = self._child(c.u24())
            x_skew = f2dot14()
            y_skew = f2dot14()
            return PaintSkew(paint, x_skew, y_skew, var_index())
        if fmt in (30, 31):
            paint = self._child(c.u24())
            x_skew = f2dot14()
            y_skew = f2dot14()
            center_x = fixed()
            center_y = fixed()
            return PaintSkewAroundCenter(paint, x_skew, y_skew, center_x, center_y, var_index())
        if fmt == 32:
            source = self._child(c.u24())
            raw_mode = c.u8()
            mode = CompositeMode(raw_mode) if raw_mode in CompositeMode._value2member_map_ else CompositeMode.CLEAR
            backdrop = self._child(c.u24())
            return PaintComposite(source, mode, backdrop)
        return None