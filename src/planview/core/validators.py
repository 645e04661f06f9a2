"""Construction-time validation for layouts.

These checks run when a Room, Layout or ViewState is built, so an invalid
object never exists. Overlapping rooms are allowed: the plan is drawn as
given, without adjacency or overlap checks.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from .. import config

if TYPE_CHECKING:
    from .model import Layout, Room, ViewState


class InvalidLayout(ValueError):
    """Raised when a layout is built with out-of-range geometry."""

    pass


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def validate_room(room: Room) -> None:
    """Validate a single room's geometry.

    Args:
        room: The room to validate.

    Raises:
        InvalidLayout: If a coordinate is not a finite number or the size
            is not strictly positive.
    """
    for name in ("x", "y", "width", "height"):
        if not _is_number(getattr(room, name)):
            raise InvalidLayout(f"Room '{room.name}': {name} must be a finite number")
    if room.width <= 0 or room.height <= 0:
        raise InvalidLayout(
            f"Room '{room.name}': size must be positive, got {room.width} x {room.height}"
        )


def validate_bounds(layout: Layout) -> None:
    """Validate that every room lies within the layout's drawable bounds."""
    for room in layout.rooms:
        minx, miny, maxx, maxy = room.bounds
        if minx < 0 or miny < 0 or maxx > layout.width or maxy > layout.height:
            raise InvalidLayout(
                f"Room '{room.name}' ({minx}, {miny}, {maxx}, {maxy}) lies outside "
                f"the drawable area {layout.width} x {layout.height}"
            )


def validate_openings(layout: Layout) -> None:
    """Validate that openings reference existing rooms.

    Doors must reference two distinct rooms, windows one room and a wall side.
    """
    from .model import OpeningKind

    room_ids = {room.id for room in layout.rooms}
    for opening in layout.openings:
        missing = [rid for rid in opening.room_ids if rid not in room_ids]
        if missing:
            raise InvalidLayout(f"Opening '{opening.id}' references unknown rooms: {missing}")
        if opening.size is not None and (not _is_number(opening.size) or opening.size <= 0):
            raise InvalidLayout(f"Opening '{opening.id}': size must be positive")
        if opening.kind is OpeningKind.DOOR:
            if len(opening.room_ids) != 2 or opening.room_ids[0] == opening.room_ids[1]:
                raise InvalidLayout(f"Door '{opening.id}' must connect two different rooms")
        elif len(opening.room_ids) != 1 or opening.wall is None:
            raise InvalidLayout(f"Window '{opening.id}' needs exactly one room and a wall side")


def validate_layout(layout: Layout) -> None:
    """Run all layout validations.

    Args:
        layout: The layout to validate.

    Raises:
        InvalidLayout: If any validation fails.
    """
    if layout.width <= 0 or layout.height <= 0:
        raise InvalidLayout("Drawable area must be positive")

    seen = set()
    for room in layout.rooms:
        if room.id in seen:
            raise InvalidLayout(f"Duplicate room id: {room.id}")
        seen.add(room.id)

    validate_bounds(layout)
    validate_openings(layout)


def validate_view_state(view: ViewState) -> None:
    if not _is_number(view.zoom) or not config.ZOOM_MIN <= view.zoom <= config.ZOOM_MAX:
        raise ValueError(
            f"Zoom must be within [{config.ZOOM_MIN}, {config.ZOOM_MAX}], got {view.zoom}"
        )
