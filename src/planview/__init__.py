"""Planview - generate, render and inspect rectangular floor plans."""

__version__ = "0.1.0"

from .core.errors import GenerationError, GenerationErrorKind
from .core.model import Layout, Opening, OpeningKind, Point, Room, SourceKind, ViewState, WallSide
from .core.validators import InvalidLayout

__all__ = [
    "GenerationError",
    "GenerationErrorKind",
    "InvalidLayout",
    "Layout",
    "Opening",
    "OpeningKind",
    "Point",
    "Room",
    "SourceKind",
    "ViewState",
    "WallSide",
]
