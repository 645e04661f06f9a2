"""Core data models for floor plan layouts.

This module defines the fundamental data structures used to represent
a floor plan: rectangular rooms, door and window openings, the layout
aggregate that holds them, and the view state used to draw it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from .. import config
from .validators import validate_layout, validate_room, validate_view_state


class SourceKind(str, Enum):
    """Input surface that produced a layout."""

    VOICE = "voice"
    TEXT = "text"
    DRAWING = "drawing"
    CODE = "code"


class OpeningKind(str, Enum):
    DOOR = "door"
    WINDOW = "window"


class WallSide(str, Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"


@dataclass(frozen=True)
class Point:
    """Represents a 2D point in plan space.

    Attributes:
        x: The x-coordinate of the point.
        y: The y-coordinate of the point.
    """

    x: float
    y: float


@dataclass(frozen=True)
class Room:
    """Represents a rectangular room.

    Attributes:
        id: Unique identifier for the room within its layout.
        name: Display label of the room.
        category: Style tag (e.g. "bedroom"), stored lowercase. Unknown tags
            are kept.
        x: Left edge in plan-units.
        y: Top edge in plan-units (y grows downwards).
        width: Horizontal extent in plan-units, strictly positive.
        height: Vertical extent in plan-units, strictly positive.
    """

    id: str
    name: str
    category: str
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self):
        if isinstance(self.category, str):
            object.__setattr__(self, "category", self.category.strip().lower())
        validate_room(self)

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    @property
    def size(self) -> tuple[float, float]:
        return (self.width, self.height)

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """(minx, miny, maxx, maxy) of the room rectangle."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)


@dataclass(frozen=True)
class Opening:
    """Represents a door or window annotation.

    Openings store logical references only; where they are drawn is
    computed from the referenced rooms at render time.

    Attributes:
        id: Unique identifier for the opening within its layout.
        kind: Door or window.
        room_ids: Referenced room IDs. Doors reference two rooms,
            windows reference one.
        wall: Wall side of the room the window sits on (windows only).
        size: Opening length in plan-units, if specified.
    """

    id: str
    kind: OpeningKind
    room_ids: tuple[str, ...]
    wall: WallSide | None = None
    size: float | None = None


@dataclass(frozen=True)
class Layout:
    """Represents a complete floor plan produced for one design request.

    Layouts are immutable: a new input produces a new Layout. Construction
    validates geometry and raises ``InvalidLayout`` on failure.

    Attributes:
        rooms: Rooms in drawing order.
        openings: Doors and windows in drawing order.
        source_kind: Which input surface created this layout.
        created_at: Creation timestamp (UTC).
        width: Drawable width of the plan in plan-units.
        height: Drawable height of the plan in plan-units.
    """

    rooms: tuple[Room, ...]
    openings: tuple[Opening, ...] = ()
    source_kind: SourceKind = SourceKind.TEXT
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    width: float = config.CANVAS_WIDTH
    height: float = config.CANVAS_HEIGHT

    def __post_init__(self):
        object.__setattr__(self, "rooms", tuple(self.rooms))
        object.__setattr__(self, "openings", tuple(self.openings))
        validate_layout(self)

    def room(self, room_id: str) -> Room:
        """Return the room with the given ID.

        Raises:
            KeyError: If no room has this ID.
        """
        for room in self.rooms:
            if room.id == room_id:
                return room
        raise KeyError(room_id)

    def find_room(self, name: str) -> Room | None:
        """Return the first room whose name matches, ignoring case."""
        wanted = name.strip().lower()
        for room in self.rooms:
            if room.name.strip().lower() == wanted:
                return room
        return None

    @property
    def doors(self) -> tuple[Opening, ...]:
        return tuple(o for o in self.openings if o.kind is OpeningKind.DOOR)

    @property
    def windows(self) -> tuple[Opening, ...]:
        return tuple(o for o in self.openings if o.kind is OpeningKind.WINDOW)


@dataclass(frozen=True)
class ViewState:
    """Zoom and pan used to draw a layout.

    Attributes:
        zoom: Uniform scale factor around the top-left origin.
        pan: Translation in plan-units applied before scaling.
    """

    zoom: float = config.ZOOM_DEFAULT
    pan: Point = Point(0.0, 0.0)

    def __post_init__(self):
        validate_view_state(self)

    def with_zoom(self, zoom: float) -> ViewState:
        """Return a copy with ``zoom`` clamped to the allowed range."""
        clamped = min(max(zoom, config.ZOOM_MIN), config.ZOOM_MAX)
        # Round off float noise so repeated steps stay on the 0.2 grid.
        return ViewState(zoom=round(clamped, 6), pan=self.pan)
