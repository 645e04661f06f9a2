"""Tests for door, window and entrance placement."""

import pytest

from planview.core.model import Layout, Point, Room, WallSide
from planview.geom.openings import (
    FIXED_ENTRANCE,
    OpeningPlacement,
    door_segment,
    entrance_segment,
    opening_strokes,
    shared_edge,
    window_segment,
)


def room(x, y, width, height, category="bedroom", room_id=None):
    room_id = room_id or f"{x}-{y}"
    return Room(id=room_id, name=room_id, category=category, x=x, y=y, width=width, height=height)


def test_door_on_shared_vertical_wall():
    left = room(0, 0, 100, 100)
    right = room(100, 0, 100, 100)

    assert shared_edge(left, right).length == pytest.approx(100)
    assert door_segment(left, right) == (Point(100, 40), Point(100, 60))


def test_door_on_partially_shared_horizontal_wall():
    top = room(0, 0, 200, 100)
    bottom = room(150, 100, 100, 100)

    start, end = door_segment(top, bottom)

    assert start.y == end.y == 100
    assert (start.x + end.x) / 2 == pytest.approx(175)
    assert end.x - start.x == pytest.approx(20)


def test_door_is_never_wider_than_the_shared_wall():
    top = room(0, 0, 100, 100)
    bottom = room(90, 100, 100, 100)

    start, end = door_segment(top, bottom, size=30)

    assert (start, end) == (Point(90, 100), Point(100, 100))


def test_door_across_a_gap_uses_facing_wall(placeholder):
    living, kitchen, bedroom_1, bedroom_2 = placeholder.rooms[:4]

    assert door_segment(living, kitchen) == (Point(250, 90), Point(250, 110))
    assert door_segment(living, bedroom_1) == (Point(110, 200), Point(130, 200))
    assert door_segment(kitchen, bedroom_2) == (Point(300, 150), Point(320, 150))


def test_door_between_diagonal_rooms():
    first = room(0, 0, 100, 100)
    second = room(150, 150, 50, 50)

    assert door_segment(first, second) == (Point(80, 100), Point(100, 100))


@pytest.mark.parametrize(
    "wall,expected",
    [
        (WallSide.NORTH, (Point(40, 20), Point(70, 20))),
        (WallSide.SOUTH, (Point(40, 100), Point(70, 100))),
        (WallSide.EAST, (Point(110, 45), Point(110, 75))),
        (WallSide.WEST, (Point(0, 45), Point(0, 75))),
    ],
)
def test_window_on_each_wall(wall, expected):
    target = room(0, 20, 110, 80)

    assert window_segment(target, wall) == expected


def test_window_size_is_capped_by_wall_length():
    target = room(0, 0, 20, 100)

    start, end = window_segment(target, WallSide.NORTH, size=50)

    assert (start, end) == (Point(0, 0), Point(20, 0))


def test_entrance_on_first_living_room(placeholder):
    assert entrance_segment(placeholder) == FIXED_ENTRANCE


def test_entrance_falls_back_to_first_room():
    layout = Layout(rooms=[room(100, 100, 60, 40, "kitchen"), room(200, 100, 60, 40, "bathroom")])

    assert entrance_segment(layout) == (Point(130, 100), Point(130, 85))


def test_entrance_points_inward_at_top_of_plan():
    layout = Layout(rooms=[room(0, 0, 100, 60, "living"), room(100, 10, 50, 50, "living")])

    assert entrance_segment(layout) == (Point(50, 0), Point(50, 15))
    start, end = entrance_segment(Layout(rooms=[room(100, 10, 50, 50, "living")]))
    assert (start, end) == (Point(125, 10), Point(125, 25))


def test_no_entrance_without_rooms():
    assert entrance_segment(Layout(rooms=[])) is None
    assert opening_strokes(Layout(rooms=[])) == []


def test_geometric_strokes(two_room_layout):
    strokes = opening_strokes(two_room_layout)

    assert [s.kind for s in strokes] == ["entrance", "door", "window"]
    assert [s.opening_id for s in strokes] == [None, "door-1", "window-1"]
    assert strokes[1].start == Point(200, 65)
    assert strokes[2].start == Point(300, 60)


def test_fixed_strokes_ignore_layout(two_room_layout, placeholder):
    fixed = opening_strokes(two_room_layout, OpeningPlacement.FIXED)

    assert fixed == opening_strokes(placeholder, OpeningPlacement.FIXED)
    assert [(s.start, s.end) for s in fixed] == [
        (Point(150, 50), Point(150, 35)),
        (Point(250, 100), Point(270, 100)),
        (Point(190, 200), Point(210, 200)),
        (Point(350, 200), Point(370, 200)),
    ]
