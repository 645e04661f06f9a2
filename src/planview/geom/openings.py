"""Placement of doors, windows and the entrance marker.

Openings only store which room(s) and wall they belong to. This module turns
those references into line segments in plan space, from the rooms' actual
rectangles: doors sit on the wall two rooms share (or the walls facing each
other when there is a gap), windows on the named wall side.

The ``FIXED`` placement reproduces the legacy hardcoded strokes, which do
not depend on the layout at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from shapely.geometry import LineString, MultiLineString, box
from shapely.ops import nearest_points

from ..core.model import Layout, Opening, OpeningKind, Point, Room, WallSide

DOOR_WIDTH = 20.0
WINDOW_WIDTH = 30.0
ENTRANCE_LENGTH = 15.0
EPS = 1e-9

# Legacy hardcoded strokes: entrance, then (x, y, width, vertical) doors.
FIXED_ENTRANCE = (Point(150, 50), Point(150, 35))
FIXED_DOORS = [
    (250, 100, 20, False),
    (190, 200, 20, False),
    (350, 200, 20, False),
]


class OpeningPlacement(str, Enum):
    GEOMETRIC = "geometric"
    FIXED = "fixed"


@dataclass(frozen=True)
class OpeningStroke:
    """A line segment marking an opening.

    Attributes:
        kind: "entrance", "door" or "window".
        start: First end of the segment.
        end: Second end of the segment.
        opening_id: ID of the Opening drawn, None for the entrance marker.
    """

    kind: str
    start: Point
    end: Point
    opening_id: Optional[str] = None


def _room_box(room: Room):
    return box(*room.bounds)


def _segment(center: Point, length: float, horizontal: bool) -> tuple[Point, Point]:
    half = length / 2
    if horizontal:
        return Point(center.x - half, center.y), Point(center.x + half, center.y)
    return Point(center.x, center.y - half), Point(center.x, center.y + half)


def _longest_line(geom) -> Optional[LineString]:
    if geom.is_empty:
        return None
    if isinstance(geom, LineString):
        lines = [geom]
    elif isinstance(geom, MultiLineString):
        lines = list(geom.geoms)
    elif hasattr(geom, "geoms"):
        lines = [g for g in geom.geoms if isinstance(g, LineString)]
    else:
        return None
    lines = [line for line in lines if line.length > EPS]
    if not lines:
        return None
    return max(lines, key=lambda line: line.length)


def _overlap(a0: float, a1: float, b0: float, b1: float) -> tuple[float, float]:
    return max(a0, b0), min(a1, b1)


def shared_edge(first: Room, second: Room) -> Optional[LineString]:
    """Return the longest part of ``first``'s walls lying on or inside ``second``."""
    contact = _room_box(first).boundary.intersection(_room_box(second))
    return _longest_line(contact)


def door_segment(first: Room, second: Room, size: Optional[float] = None) -> tuple[Point, Point]:
    """Place a door between two rooms.

    The door is centered on the shared wall when the rooms touch. Otherwise
    it goes on the wall of ``first`` facing ``second``, centered on the span
    where the two rooms face each other. Rooms that only meet diagonally get
    the door on ``first``'s nearest horizontal wall.
    """
    width = size or DOOR_WIDTH
    ax0, ay0, ax1, ay1 = first.bounds
    bx0, by0, bx1, by1 = second.bounds

    edge = shared_edge(first, second)
    if edge is not None:
        (x0, y0), (x1, y1) = edge.coords[0], edge.coords[-1]
        mid = edge.interpolate(0.5, normalized=True)
        return _segment(Point(mid.x, mid.y), min(width, edge.length), abs(y1 - y0) < EPS)

    lo, hi = _overlap(ax0, ax1, bx0, bx1)
    if hi - lo > EPS:
        y = ay1 if by0 >= ay1 else ay0
        return _segment(Point((lo + hi) / 2, y), min(width, hi - lo), True)

    lo, hi = _overlap(ay0, ay1, by0, by1)
    if hi - lo > EPS:
        x = ax1 if bx0 >= ax1 else ax0
        return _segment(Point(x, (lo + hi) / 2), min(width, hi - lo), False)

    anchor, _ = nearest_points(_room_box(first).boundary, _room_box(second))
    length = min(width, first.width)
    x = min(max(anchor.x, ax0 + length / 2), ax1 - length / 2)
    return _segment(Point(x, anchor.y), length, True)


def window_segment(room: Room, wall: WallSide, size: Optional[float] = None) -> tuple[Point, Point]:
    """Place a window centered on one wall of a room."""
    x0, y0, x1, y1 = room.bounds
    center = room.center
    if wall in (WallSide.NORTH, WallSide.SOUTH):
        y = y0 if wall is WallSide.NORTH else y1
        return _segment(Point(center.x, y), min(size or WINDOW_WIDTH, room.width), True)
    x = x1 if wall is WallSide.EAST else x0
    return _segment(Point(x, center.y), min(size or WINDOW_WIDTH, room.height), False)


def entrance_segment(layout: Layout) -> Optional[tuple[Point, Point]]:
    """Mark the entrance on the north wall of the first living room.

    Falls back to the first room; returns None for a layout without rooms.
    The marker points outward, or inward when the wall is too close to the
    top of the plan for it to stay visible.
    """
    if not layout.rooms:
        return None
    room = next((r for r in layout.rooms if r.category == "living"), layout.rooms[0])
    x = room.center.x
    if room.y < ENTRANCE_LENGTH:
        return Point(x, room.y), Point(x, room.y + ENTRANCE_LENGTH)
    return Point(x, room.y), Point(x, room.y - ENTRANCE_LENGTH)


def _opening_segment(layout: Layout, opening: Opening) -> tuple[Point, Point]:
    if opening.kind is OpeningKind.DOOR:
        first, second = (layout.room(rid) for rid in opening.room_ids)
        return door_segment(first, second, opening.size)
    return window_segment(layout.room(opening.room_ids[0]), opening.wall, opening.size)


def fixed_strokes() -> List[OpeningStroke]:
    strokes = [OpeningStroke("entrance", *FIXED_ENTRANCE)]
    for x, y, width, vertical in FIXED_DOORS:
        end = Point(x, y + width) if vertical else Point(x + width, y)
        strokes.append(OpeningStroke("door", Point(x, y), end))
    return strokes


def opening_strokes(
    layout: Layout, placement: OpeningPlacement = OpeningPlacement.GEOMETRIC
) -> List[OpeningStroke]:
    """Compute every opening stroke of a layout, entrance first.

    Args:
        layout: The layout whose openings are drawn.
        placement: ``GEOMETRIC`` to derive positions from the rooms,
            ``FIXED`` for the legacy hardcoded strokes.

    Returns:
        Strokes in drawing order.
    """
    if placement is OpeningPlacement.FIXED:
        return fixed_strokes()

    strokes = []
    entrance = entrance_segment(layout)
    if entrance is not None:
        strokes.append(OpeningStroke("entrance", *entrance))
    for opening in layout.openings:
        start, end = _opening_segment(layout, opening)
        strokes.append(OpeningStroke(opening.kind.value, start, end, opening.id))
    return strokes
