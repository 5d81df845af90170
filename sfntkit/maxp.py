"""Maximum profile table."""

from __future__ import annotations

from dataclasses import dataclass

from .binary import Reader, make_tag

MAXP = make_tag(b"maxp")

_LAYOUT = (
    ("version", "i32", 0),
    ("num_glyphs", "u16", 4),
    ("max_points", "u16", 6),
    ("max_contours", "u16", 8),
    ("max_composite_points", "u16", 10),
    ("max_composite_contours", "u16", 12),
    ("max_zones", "u16", 14),
    ("max_twilight_points", "u16", 16),
    ("max_storage", "u16", 18),
    ("max_function_defs", "u16", 20),
    ("max_instruction_defs", "u16", 22),
    ("max_stack_depth", "u16", 24),
    ("max_instructions_size", "u16", 26),
    ("max_component_elements", "u16", 28),
    ("max_component_depth", "u16", 30),
)


@dataclass(frozen=True)
class Maxp:
    """Maximum profile table; fields missing from the data are zero.

    ``version`` is a 16.16 fixed value: 0x00005000 for version 0.5, where
    only ``num_glyphs`` is meaningful, and 0x00010000 for version 1.0.
    """

    version: int = 0
    num_glyphs: int = 0
    max_points: int = 0
    max_contours: int = 0
    max_composite_points: int = 0
    max_composite_contours: int = 0
    max_zones: int = 0
    max_twilight_points: int = 0
    max_storage: int = 0
    max_function_defs: int = 0
    max_instruction_defs: int = 0
    max_stack_depth: int = 0
    max_instructions_size: int = 0
    max_component_elements: int = 0
    max_component_depth: int = 0

    @classmethod
    def parse(cls, data: bytes) -> Maxp:
        """Read the table from its raw bytes."""
        reader = Reader(data)
        return cls(
            **{name: getattr(reader, kind)(offset) or 0 for name, kind, offset in _LAYOUT}
        )