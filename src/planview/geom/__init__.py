"""Geometry utilities for floor plans.

This module positions doors, windows and the entrance marker on room
walls.
"""

from .openings import OpeningPlacement, OpeningStroke, door_segment, opening_strokes, window_segment

__all__ = ["OpeningPlacement", "OpeningStroke", "door_segment", "window_segment", "opening_strokes"]
