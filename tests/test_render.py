"""Tests for raster rendering and PNG export."""

import matplotlib.image as mpimg
import numpy as np

from planview.core.model import ViewState
from planview.visualization.generator import RasterSurface, generate_plan_image, render


def test_render_without_surface_is_a_no_op(placeholder):
    assert render(placeholder, ViewState(), None) is None


def test_render_is_pixel_deterministic(placeholder):
    surface = RasterSurface()

    first = render(placeholder, ViewState(), surface).copy()
    second = render(placeholder, ViewState(), surface)

    assert first.shape == (500, 600, 4)
    assert first.dtype == np.uint8
    assert np.array_equal(first, second)


def test_render_paints_background_and_room_fill(placeholder):
    pixels = render(placeholder, ViewState(), RasterSurface())

    assert tuple(pixels[10, 10]) == (250, 250, 250, 255)
    # Inside the living room, away from grid lines and labels.
    assert tuple(pixels[75, 70]) == (254, 243, 199, 255)


def test_zoom_changes_output(placeholder):
    normal = render(placeholder, ViewState(), RasterSurface()).copy()
    zoomed = render(placeholder, ViewState(zoom=2.0), RasterSurface())

    assert not np.array_equal(normal, zoomed)
    # At 2x the living room starts at pixel 100 instead of 50.
    assert tuple(zoomed[75, 70]) != (254, 243, 199, 255)
    assert tuple(zoomed[150, 140]) == (254, 243, 199, 255)


def test_empty_layout_renders_grid_only():
    pixels = render(None, ViewState(), RasterSurface())

    assert tuple(pixels[10, 10]) == (250, 250, 250, 255)


def test_clear_and_blank_export(tmp_path):
    surface = RasterSurface(width=40, height=30)
    surface.clear()

    path = surface.to_png(tmp_path / "out" / "blank.png")

    assert path.exists()
    assert mpimg.imread(path).shape[:2] == (30, 40)


def test_png_bytes_have_png_signature(placeholder):
    surface = RasterSurface()
    render(placeholder, ViewState(), surface)

    assert surface.to_png_bytes().startswith(b"\x89PNG")


def test_generate_plan_image(tmp_path, placeholder):
    path = generate_plan_image(placeholder, tmp_path / "floor-plan.png")

    assert path == tmp_path / "floor-plan.png"
    assert mpimg.imread(path).shape[:2] == (500, 600)
