"""Room category styling.

Each recognized category maps to a (fill, border) color pair. Categories
outside the table are still valid rooms; they are drawn with the default
style.
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class RoomStyle:
    fill: str
    border: str


ROOM_STYLES = {
    "bedroom": RoomStyle(fill="#e0e7ff", border="#6366f1"),
    "living": RoomStyle(fill="#fef3c7", border="#f59e0b"),
    "kitchen": RoomStyle(fill="#dcfce7", border="#10b981"),
    "bathroom": RoomStyle(fill="#fce7f3", border="#ec4899"),
    "garden": RoomStyle(fill="#d1fae5", border="#059669"),
    "dining": RoomStyle(fill="#fed7d7", border="#ef4444"),
}

DEFAULT_STYLE = RoomStyle(fill="#f3f4f6", border="#9ca3af")
DEFAULT_CATEGORY = "other"

# First match wins, so "master bedroom with bath" is a bedroom.
_CATEGORY_KEYWORDS = [
    ("bedroom", re.compile(r"\b(bed|bedroom|guest room|nursery)", re.IGNORECASE)),
    ("kitchen", re.compile(r"\b(kitchen|pantry)", re.IGNORECASE)),
    ("dining", re.compile(r"\bdining", re.IGNORECASE)),
    ("bathroom", re.compile(r"\b(bath|bathroom|toilet|wc|washroom|restroom)", re.IGNORECASE)),
    ("garden", re.compile(r"\b(garden|lawn|yard|backyard)", re.IGNORECASE)),
    ("living", re.compile(r"\b(living|lounge|hall|family room|drawing room)", re.IGNORECASE)),
]


def style_for(category: str) -> RoomStyle:
    """Return the style for a category, falling back to the default style."""
    return ROOM_STYLES.get((category or "").lower(), DEFAULT_STYLE)


def infer_category(name: str) -> str:
    """Guess a room category from its display name.

    Args:
        name: Room name such as "Bedroom 2" or "Guest Bathroom".

    Returns:
        A recognized category, or ``DEFAULT_CATEGORY`` when nothing matches.
    """
    for category, pattern in _CATEGORY_KEYWORDS:
        if pattern.search(name or ""):
            return category
    return DEFAULT_CATEGORY
