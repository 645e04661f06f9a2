"""Shared fixtures for the planview tests."""

import json

import pytest

from planview.core.model import Layout, Opening, OpeningKind, Room, SourceKind, WallSide
from planview.engine.generator import PlaceholderGenerator, RoutingGenerator, placeholder_layout
from planview.view.controller import ViewController

SPEC = {
    "rooms": [
        {"name": "Living Room", "width": 200, "height": 150, "x": 0, "y": 0},
        {"name": "Kitchen", "width": 100, "height": 150, "x": 200, "y": 0},
        {"name": "Master Bedroom", "width": 150, "height": 120, "x": 0, "y": 150},
    ],
    "doors": [{"from": "Living Room", "to": "Kitchen"}],
    "windows": [{"room": "Master Bedroom", "wall": "south", "size": 40}],
}


@pytest.fixture
def spec_text():
    return json.dumps(SPEC)


@pytest.fixture
def two_room_layout():
    rooms = (
        Room(id="a", name="Living Room", category="living", x=0, y=0, width=200, height=150),
        Room(id="b", name="Kitchen", category="kitchen", x=200, y=0, width=100, height=150),
    )
    openings = (
        Opening(id="door-1", kind=OpeningKind.DOOR, room_ids=("a", "b")),
        Opening(id="window-1", kind=OpeningKind.WINDOW, room_ids=("b",), wall=WallSide.EAST),
    )
    return Layout(rooms=rooms, openings=openings, source_kind=SourceKind.CODE)


@pytest.fixture
def placeholder():
    return placeholder_layout()


@pytest.fixture
def fast_generator():
    return RoutingGenerator(inference=PlaceholderGenerator(delay=0))


@pytest.fixture
def controller(fast_generator):
    return ViewController(generator=fast_generator)
