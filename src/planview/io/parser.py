"""Parser for structured floor plan specifications.

This module converts the JSON room/door/window format typed into the code
editor into Layout objects, and serializes layouts back to that format.

Format::

    {
      "rooms":   [{"name": str, "width": num, "height": num, "x"?: num, "y"?: num (together),
                   "type"?: str, "id"?: str}],
      "doors":   [{"from": room name, "to": room name, "size"?: num}],
      "windows": [{"room": room name, "wall": "north|south|east|west", "size"?: num}]
    }

Unknown top-level fields are ignored. When ``rooms`` is absent, the rooms of
the first entry of ``floors`` are used.
"""

from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from .. import config
from ..core.errors import parse_error, schema_error
from ..core.model import Layout, Opening, OpeningKind, Room, SourceKind, WallSide
from ..core.styles import infer_category


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _require_number(entry: dict, key: str, context: str) -> float:
    if key not in entry:
        raise schema_error(f"{context}: missing required field '{key}'")
    value = entry[key]
    if not _is_number(value):
        raise schema_error(f"{context}: '{key}' must be a number, got {value!r}")
    return value


def _optional_number(entry: dict, key: str, context: str) -> Optional[float]:
    value = entry.get(key)
    if value is None:
        return None
    if not _is_number(value):
        raise schema_error(f"{context}: '{key}' must be a number, got {value!r}")
    return value


def _extract_room_entries(data: Dict[str, Any]) -> List[Any]:
    """Return the list of room entries, looking into ``floors`` if needed."""
    if "rooms" in data:
        rooms = data["rooms"]
    else:
        floors = data.get("floors")
        if not isinstance(floors, list) or not floors or not isinstance(floors[0], dict) \
                or "rooms" not in floors[0]:
            raise schema_error("Missing required field 'rooms'")
        rooms = floors[0]["rooms"]

    if not isinstance(rooms, list):
        raise schema_error("'rooms' must be a list")
    if not rooms:
        raise schema_error("'rooms' must contain at least one room")
    return rooms


def _auto_place(sizes: List[tuple[float, float]], plan_width: float) -> List[tuple[float, float]]:
    """Place rooms left to right in rows starting at the origin.

    A new row starts below the tallest room of the current row when the next
    room would cross the right edge of the plan.
    """
    positions = []
    x = y = row_height = 0.0
    for width, height in sizes:
        if x > 0 and x + width > plan_width:
            x = 0.0
            y += row_height
            row_height = 0.0
        positions.append((x, y))
        x += width
        row_height = max(row_height, height)
    return positions


def _parse_rooms(entries: List[Any]) -> List[Dict[str, Any]]:
    parsed = []
    for index, entry in enumerate(entries):
        context = f"rooms[{index}]"
        if not isinstance(entry, dict):
            raise schema_error(f"{context}: expected an object")

        name = entry.get("name")
        if not isinstance(name, str) or not name.strip():
            raise schema_error(f"{context}: missing required field 'name'")

        width = _require_number(entry, "width", context)
        height = _require_number(entry, "height", context)
        x = _optional_number(entry, "x", context)
        y = _optional_number(entry, "y", context)
        if (x is None) != (y is None):
            raise schema_error(f"{context}: 'x' and 'y' must be given together")

        category = entry.get("type", entry.get("category"))
        if category is None:
            category = infer_category(name)
        elif not isinstance(category, str):
            raise schema_error(f"{context}: 'type' must be a string")

        room_id = entry.get("id", f"room-{index + 1}")
        parsed.append(
            {
                "id": str(room_id),
                "name": name.strip(),
                "category": category.strip().lower(),
                "x": x,
                "y": y,
                "width": width,
                "height": height,
            }
        )
    return parsed


def _resolve_room(layout: Layout, name: Any, context: str) -> Room:
    if not isinstance(name, str):
        raise schema_error(f"{context}: room reference must be a room name")
    room = layout.find_room(name)
    if room is not None:
        return room
    raise schema_error(f"{context}: unknown room '{name}'")


def _parse_openings(data: Dict[str, Any], layout: Layout) -> List[Opening]:
    openings = []

    doors = data.get("doors", [])
    if not isinstance(doors, list):
        raise schema_error("'doors' must be a list")
    for index, entry in enumerate(doors):
        context = f"doors[{index}]"
        if not isinstance(entry, dict) or "from" not in entry or "to" not in entry:
            raise schema_error(f"{context}: expected an object with 'from' and 'to'")
        first = _resolve_room(layout, entry["from"], context)
        second = _resolve_room(layout, entry["to"], context)
        openings.append(
            Opening(
                id=f"door-{index + 1}",
                kind=OpeningKind.DOOR,
                room_ids=(first.id, second.id),
                size=_optional_number(entry, "size", context),
            )
        )

    windows = data.get("windows", [])
    if not isinstance(windows, list):
        raise schema_error("'windows' must be a list")
    for index, entry in enumerate(windows):
        context = f"windows[{index}]"
        if not isinstance(entry, dict) or "room" not in entry or "wall" not in entry:
            raise schema_error(f"{context}: expected an object with 'room' and 'wall'")
        room = _resolve_room(layout, entry["room"], context)
        try:
            wall = WallSide(str(entry["wall"]).strip().lower())
        except ValueError:
            raise schema_error(
                f"{context}: wall must be one of north, south, east, west, got {entry['wall']!r}"
            ) from None
        openings.append(
            Opening(
                id=f"window-{index + 1}",
                kind=OpeningKind.WINDOW,
                room_ids=(room.id,),
                wall=wall,
                size=_optional_number(entry, "size", context),
            )
        )

    return openings


def parse_layout_spec(
    text: str,
    source_kind: SourceKind = SourceKind.CODE,
    width: float = config.CANVAS_WIDTH,
    height: float = config.CANVAS_HEIGHT,
) -> Layout:
    """Parse a structured specification string into a Layout.

    Args:
        text: JSON text in the structured floor plan format.
        source_kind: Input surface the text came from.
        width: Drawable width of the resulting layout.
        height: Drawable height of the resulting layout.

    Returns:
        A validated Layout.

    Raises:
        GenerationError: ``PARSE_ERROR`` if the text is not valid JSON,
            ``SCHEMA_ERROR`` if required fields are missing or mistyped.
        InvalidLayout: If the described geometry is out of range.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise parse_error(f"Invalid JSON - {e.msg} (line {e.lineno}, column {e.colno})") from e

    if not isinstance(data, dict):
        raise schema_error("Specification must be a JSON object")

    entries = _parse_rooms(_extract_room_entries(data))

    unplaced = [e for e in entries if e["x"] is None]
    for entry, (x, y) in zip(unplaced, _auto_place([(e["width"], e["height"]) for e in unplaced], width)):
        entry["x"], entry["y"] = x, y

    layout = Layout(
        rooms=tuple(Room(**entry) for entry in entries),
        source_kind=source_kind,
        width=width,
        height=height,
    )
    return replace(layout, openings=tuple(_parse_openings(data, layout)))


def load_layout(path: str) -> Layout:
    """Load a layout from a structured specification file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        GenerationError: If the content is not a valid specification.
        InvalidLayout: If the described geometry is out of range.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with open(file_path, encoding="utf-8") as f:
        return parse_layout_spec(f.read(), SourceKind.CODE)


def layout_to_dict(layout: Layout) -> Dict[str, Any]:
    """Convert a Layout into the structured specification format."""
    names = {room.id: room.name for room in layout.rooms}

    doors = []
    windows = []
    for opening in layout.openings:
        if opening.kind is OpeningKind.DOOR:
            entry = {"from": names[opening.room_ids[0]], "to": names[opening.room_ids[1]]}
        else:
            entry = {"room": names[opening.room_ids[0]], "wall": opening.wall.value}
        if opening.size is not None:
            entry["size"] = opening.size
        (doors if opening.kind is OpeningKind.DOOR else windows).append(entry)

    return {
        "rooms": [
            {
                "id": room.id,
                "name": room.name,
                "type": room.category,
                "x": room.x,
                "y": room.y,
                "width": room.width,
                "height": room.height,
            }
            for room in layout.rooms
        ],
        "doors": doors,
        "windows": windows,
    }


def save_layout(layout: Layout, output_path: str) -> None:
    """Save a layout to a JSON file in the structured specification format."""
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(layout_to_dict(layout), f, indent=2)
