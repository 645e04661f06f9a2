"""Legend: grouped room lists shown next to the floor plan.

Rooms are sorted into four fixed buckets by category, keeping layout order
inside each bucket. Categories outside the buckets are left out.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .core.model import Layout, Room
from .core.styles import style_for

LOGGER = logging.getLogger(__name__)

# (key, title, categories)
LEGEND_BUCKETS = [
    ("bedrooms", "Rooms", ("bedroom",)),
    ("kitchen_dining", "Kitchen & Dining", ("kitchen", "dining")),
    ("bathrooms", "Bathrooms", ("bathroom",)),
    ("others", "Others", ("living", "garden")),
]


@dataclass(frozen=True)
class LegendBucket:
    key: str
    title: str
    categories: Tuple[str, ...]
    rooms: Tuple[Room, ...]

    @property
    def names(self) -> List[str]:
        return [room.name for room in self.rooms]


@dataclass(frozen=True)
class LegendSummary:
    buckets: Tuple[LegendBucket, ...]

    def __getitem__(self, key: str) -> LegendBucket:
        for bucket in self.buckets:
            if bucket.key == key:
                return bucket
        raise KeyError(key)

    def __iter__(self):
        return iter(self.buckets)

    def as_dict(self) -> Dict[str, List[str]]:
        """Bucket key -> room names, the shape the display panel consumes."""
        return {bucket.key: bucket.names for bucket in self.buckets}


def summarize(layout: Optional[Layout]) -> LegendSummary:
    """Group the rooms of a layout into the legend buckets.

    Args:
        layout: The layout to summarize; None gives empty buckets.

    Returns:
        A summary with the four buckets in display order.
    """
    rooms = layout.rooms if layout is not None else ()
    bucketed = set()
    buckets = []
    for key, title, categories in LEGEND_BUCKETS:
        members = tuple(room for room in rooms if room.category in categories)
        bucketed.update(room.id for room in members)
        buckets.append(LegendBucket(key, title, categories, members))

    for room in rooms:
        if room.id not in bucketed:
            LOGGER.debug("Room '%s' (%s) is not shown in the legend", room.name, room.category)

    return LegendSummary(tuple(buckets))


def legend_rows(summary: LegendSummary) -> List[Tuple[str, str, str, str]]:
    """Flatten a summary into (bucket title, room name, fill, border) rows."""
    rows = []
    for bucket in summary:
        for room in bucket.rooms:
            style = style_for(room.category)
            rows.append((bucket.title, room.name, style.fill, style.border))
    return rows
