"""
ui/types.py
===========
Lightweight data containers used across every UI module.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

from citymap.geometry import Label, Park, Point

ColorRGB = Tuple[int, int, int]
ColorRGBA = Tuple[int, int, int, int]


@dataclass(frozen=True)
class RenderOptions:
    """Optional overlay layers for :func:`ui.draw_map.render_map`.

    Every field may be left at its default; an absent value omits that
    layer.  Coordinates are in virtual map space.
    """
    show_water: bool = False
    parks: Sequence[Park] = field(default_factory=tuple)
    route: Optional[Sequence[Point]] = None
    drop_pin: Optional[Point] = None
    pickup_pin: Optional[Point] = None
    labels: Sequence[Label] = field(default_factory=tuple)
    driver_dot: Optional[Point] = None


@dataclass
class ButtonRect:
    """Stores a button's screen rect and label for click detection."""
    label: str
    x: int
    y: int
    w: int
    h: int

    def contains(self, mx: int, my: int) -> bool:
        return self.x <= mx <= self.x + self.w and self.y <= my <= self.y + self.h
