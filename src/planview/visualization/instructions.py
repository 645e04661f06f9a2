"""Drawing instructions for a floor plan.

``build_drawing`` maps a layout and a view state to a flat list of drawing
instructions in plan coordinates. It needs no drawing surface, so what gets
drawn can be inspected directly; ``generator.RasterSurface`` turns the
instructions into pixels.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .. import config
from ..core.model import Layout, Point, Room, ViewState
from ..core.styles import style_for
from ..geom.openings import OpeningPlacement, opening_strokes

BACKGROUND_COLOR = "#fafafa"
GRID_COLOR = "#e5e7eb"
GRID_LINE_WIDTH = 0.5
ROOM_BORDER_WIDTH = 2
LABEL_COLOR = "#374151"
LABEL_FONT_SIZE = 14
LABEL_OFFSET = 8
DIMENSION_COLOR = "#6b7280"
DIMENSION_FONT_SIZE = 10
OPENING_COLORS = {"entrance": "#374151", "door": "#374151", "window": "#0ea5e9"}
OPENING_LINE_WIDTH = 3


@dataclass(frozen=True)
class FillRect:
    x: float
    y: float
    width: float
    height: float
    color: str


@dataclass(frozen=True)
class StrokeRect:
    x: float
    y: float
    width: float
    height: float
    color: str
    line_width: float


@dataclass(frozen=True)
class Line:
    x0: float
    y0: float
    x1: float
    y1: float
    color: str
    line_width: float


@dataclass(frozen=True)
class Text:
    """Text centered horizontally and vertically on (x, y)."""

    x: float
    y: float
    text: str
    color: str
    font_size: float


DrawOp = Union[FillRect, StrokeRect, Line, Text]


@dataclass(frozen=True)
class Drawing:
    """Instructions for one frame.

    Coordinates are plan-units. A surface maps them to pixels with
    ``screen = (plan + pan) * zoom``, so zooming grows the plan from the
    top-left corner. Font sizes scale with zoom; line widths are pixels and
    do not.

    Attributes:
        width: Surface width in pixels.
        height: Surface height in pixels.
        zoom: Scale factor.
        pan: Translation in plan-units.
        ops: Instructions in painting order.
    """

    width: int
    height: int
    zoom: float
    pan: Point
    ops: Tuple[DrawOp, ...]

    def to_screen(self, x: float, y: float) -> tuple[float, float]:
        return ((x + self.pan.x) * self.zoom, (y + self.pan.y) * self.zoom)


def display_units(value: float) -> int:
    """Convert plan-units to the coarse unit shown on labels.

    Ten plan-units count as one foot, rounded half up.
    """
    return int(math.floor(value / config.DIMENSION_UNIT_DIVISOR + 0.5))


def dimension_label(room: Room) -> str:
    return f"{display_units(room.width)}' × {display_units(room.height)}'"


def _grid_positions(start: float, stop: float) -> list[float]:
    spacing = config.GRID_SPACING
    value = math.ceil(start / spacing) * spacing
    positions = []
    while value < stop:
        positions.append(value)
        value += spacing
    return positions


def _room_ops(room: Room) -> list[DrawOp]:
    style = style_for(room.category)
    center = room.center
    return [
        FillRect(room.x, room.y, room.width, room.height, style.fill),
        StrokeRect(room.x, room.y, room.width, room.height, style.border, ROOM_BORDER_WIDTH),
        Text(center.x, center.y - LABEL_OFFSET, room.name, LABEL_COLOR, LABEL_FONT_SIZE),
        Text(center.x, center.y + LABEL_OFFSET, dimension_label(room), DIMENSION_COLOR,
             DIMENSION_FONT_SIZE),
    ]


def build_drawing(
    layout: Optional[Layout],
    view: ViewState,
    width: int = config.CANVAS_WIDTH,
    height: int = config.CANVAS_HEIGHT,
    placement: OpeningPlacement = OpeningPlacement.GEOMETRIC,
) -> Drawing:
    """Build the drawing instructions for a layout.

    Painting order: background, grid, rooms in layout order (fill, border,
    name, dimensions), then the entrance and opening strokes. With no layout
    only the background and grid are drawn.

    Args:
        layout: The layout to draw, or None.
        view: Zoom and pan.
        width: Surface width in pixels.
        height: Surface height in pixels.
        placement: How opening positions are derived.

    Returns:
        The drawing for this frame.
    """
    visible_width = width / view.zoom
    visible_height = height / view.zoom
    left, top = -view.pan.x, -view.pan.y
    right, bottom = left + visible_width, top + visible_height

    ops: list[DrawOp] = [FillRect(left, top, visible_width, visible_height, BACKGROUND_COLOR)]
    for x in _grid_positions(left, right):
        ops.append(Line(x, top, x, bottom, GRID_COLOR, GRID_LINE_WIDTH))
    for y in _grid_positions(top, bottom):
        ops.append(Line(left, y, right, y, GRID_COLOR, GRID_LINE_WIDTH))

    if layout is not None:
        for room in layout.rooms:
            ops.extend(_room_ops(room))
        for stroke in opening_strokes(layout, placement):
            ops.append(
                Line(stroke.start.x, stroke.start.y, stroke.end.x, stroke.end.y,
                     OPENING_COLORS[stroke.kind], OPENING_LINE_WIDTH)
            )

    return Drawing(width=width, height=height, zoom=view.zoom, pan=view.pan, ops=tuple(ops))
