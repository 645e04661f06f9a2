"""Raster output for floor plans.

This module binds drawing instructions to a pixel surface using
matplotlib's Agg canvas, and writes PNG images of floor plans.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional

import matplotlib.image as mpimg
import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.lines import Line2D
from matplotlib.patches import Rectangle

from .. import config
from ..core.model import Layout, ViewState
from ..geom.openings import OpeningPlacement
from .instructions import Drawing, FillRect, Line, StrokeRect, Text, build_drawing

LOGGER = logging.getLogger(__name__)

FONT_FAMILY = "sans-serif"


class RasterSurface:
    """An RGBA pixel buffer that drawings are painted into.

    Attributes:
        width: Width in pixels.
        height: Height in pixels.
        pixels: ``(height, width, 4)`` uint8 array holding the last frame.
    """

    def __init__(
        self,
        width: int = config.CANVAS_WIDTH,
        height: int = config.CANVAS_HEIGHT,
        dpi: int = config.CANVAS_DPI,
    ):
        self.width = width
        self.height = height
        self.dpi = dpi
        self.pixels = np.zeros((height, width, 4), dtype=np.uint8)

    def clear(self) -> None:
        self.pixels = np.zeros((self.height, self.width, 4), dtype=np.uint8)

    def _points(self, pixels: float) -> float:
        return pixels * 72.0 / self.dpi

    def paint(self, drawing: Drawing) -> np.ndarray:
        """Replace the surface content with ``drawing``.

        Returns:
            The new pixel buffer.
        """
        fig = Figure(figsize=(self.width / self.dpi, self.height / self.dpi), dpi=self.dpi)
        canvas = FigureCanvasAgg(fig)
        fig.patch.set_alpha(0.0)

        ax = fig.add_axes((0, 0, 1, 1))
        ax.set_xlim(0, self.width)
        ax.set_ylim(self.height, 0)
        ax.set_axis_off()

        zoom = drawing.zoom
        for op in drawing.ops:
            if isinstance(op, (FillRect, StrokeRect)):
                x, y = drawing.to_screen(op.x, op.y)
                filled = isinstance(op, FillRect)
                ax.add_patch(
                    Rectangle(
                        (x, y), op.width * zoom, op.height * zoom,
                        facecolor=op.color if filled else "none",
                        edgecolor="none" if filled else op.color,
                        linewidth=0 if filled else self._points(op.line_width),
                    )
                )
            elif isinstance(op, Line):
                x0, y0 = drawing.to_screen(op.x0, op.y0)
                x1, y1 = drawing.to_screen(op.x1, op.y1)
                ax.add_line(
                    Line2D([x0, x1], [y0, y1], color=op.color,
                           linewidth=self._points(op.line_width), solid_capstyle="butt")
                )
            elif isinstance(op, Text):
                x, y = drawing.to_screen(op.x, op.y)
                ax.text(
                    x, y, op.text, color=op.color, family=FONT_FAMILY,
                    fontsize=self._points(op.font_size * zoom),
                    ha="center", va="center",
                )

        canvas.draw()
        self.pixels = np.asarray(canvas.buffer_rgba()).copy()
        return self.pixels

    def to_png(self, output_path: Path) -> Path:
        """Write the current pixels as a PNG file, blank or not."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        mpimg.imsave(output_path, self.pixels, format="png")
        return output_path

    def to_png_bytes(self) -> bytes:
        buffer = io.BytesIO()
        mpimg.imsave(buffer, self.pixels, format="png")
        return buffer.getvalue()


def render(
    layout: Optional[Layout],
    view: ViewState,
    surface: Optional[RasterSurface],
    placement: OpeningPlacement = OpeningPlacement.GEOMETRIC,
) -> Optional[np.ndarray]:
    """Render a layout into a surface.

    A missing surface means it is not attached yet: nothing is drawn and
    None is returned.
    """
    if surface is None:
        LOGGER.debug("No drawing surface attached, skipping render")
        return None
    drawing = build_drawing(layout, view, surface.width, surface.height, placement)
    return surface.paint(drawing)


def generate_plan_image(
    layout: Layout,
    output_path: Path,
    view: Optional[ViewState] = None,
    placement: OpeningPlacement = OpeningPlacement.GEOMETRIC,
) -> Path:
    """Generate a PNG image of a floor plan.

    Args:
        layout: The layout to draw.
        output_path: Where to save the PNG image.
        view: Zoom and pan, defaults to the initial view.
        placement: How opening positions are derived.

    Returns:
        The path written.
    """
    surface = RasterSurface()
    render(layout, view or ViewState(), surface, placement)
    path = surface.to_png(output_path)
    LOGGER.info("Floor plan image written to %s", path)
    return path
