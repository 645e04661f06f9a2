"""Core data models for floor plans."""

from .errors import GenerationError, GenerationErrorKind
from .model import Layout, Opening, OpeningKind, Point, Room, SourceKind, ViewState, WallSide
from .styles import RoomStyle, infer_category, style_for
from .validators import InvalidLayout

__all__ = [
    "GenerationError",
    "GenerationErrorKind",
    "InvalidLayout",
    "Layout",
    "Opening",
    "OpeningKind",
    "Point",
    "Room",
    "RoomStyle",
    "SourceKind",
    "ViewState",
    "WallSide",
    "infer_category",
    "style_for",
]
