"""Tests for the legend summary."""

from planview.core.model import Layout, Room
from planview.legend import LEGEND_BUCKETS, legend_rows, summarize


def layout_of(*categories):
    rooms = [
        Room(id=str(i), name=f"{category.title()} {i}", category=category,
             x=i * 50, y=0, width=40, height=40)
        for i, category in enumerate(categories)
    ]
    return Layout(rooms=rooms)


def test_buckets_in_display_order():
    summary = summarize(layout_of("bedroom"))

    assert [bucket.key for bucket in summary] == [key for key, _, _ in LEGEND_BUCKETS]
    assert [bucket.title for bucket in summary] == ["Rooms", "Kitchen & Dining", "Bathrooms", "Others"]


def test_grouping_keeps_layout_order():
    summary = summarize(layout_of("bedroom", "bedroom", "kitchen", "garden"))

    assert summary.as_dict() == {
        "bedrooms": ["Bedroom 0", "Bedroom 1"],
        "kitchen_dining": ["Kitchen 2"],
        "bathrooms": [],
        "others": ["Garden 3"],
    }


def test_dining_and_living_buckets():
    summary = summarize(layout_of("dining", "living", "kitchen", "bathroom"))

    assert summary["kitchen_dining"].names == ["Dining 0", "Kitchen 2"]
    assert summary["others"].names == ["Living 1"]
    assert summary["bathrooms"].names == ["Bathroom 3"]


def test_mixed_case_categories_are_grouped():
    layout = layout_of("Bedroom", "BATHROOM")

    summary = summarize(layout)

    assert summary["bedrooms"].names == ["Bedroom 0"]
    assert summary["bathrooms"].names == ["Bathroom 1"]
    assert legend_rows(summary)[0][2:] == ("#e0e7ff", "#6366f1")


def test_unknown_category_is_left_out():
    layout = layout_of("attic", "bedroom")

    summary = summarize(layout)

    assert len(layout.rooms) == 2
    assert sum(len(bucket.rooms) for bucket in summary) == 1
    assert all("Attic 0" not in bucket.names for bucket in summary)


def test_no_layout_gives_empty_buckets():
    summary = summarize(None)

    assert all(bucket.rooms == () for bucket in summary)


def test_legend_rows_carry_styles():
    rows = legend_rows(summarize(layout_of("kitchen", "attic")))

    assert rows == [("Kitchen & Dining", "Kitchen 0", "#dcfce7", "#10b981")]
