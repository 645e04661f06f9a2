"""Visualization module for floor plans.

This module maps layouts to drawing instructions and paints them into
raster surfaces or PNG files.
"""

from .generator import RasterSurface, generate_plan_image, render
from .instructions import Drawing, build_drawing, dimension_label

__all__ = ["Drawing", "RasterSurface", "build_drawing", "dimension_label", "generate_plan_image", "render"]
