"""
Configuration for the floor plan viewer.

Values read through ``_env`` can be overridden with a ``PLANVIEW_<NAME>``
environment variable.
"""

import os
from pathlib import Path


def _env(name: str, default: str) -> str:
    return os.getenv(f"PLANVIEW_{name}", default)


# Canvas (pixels at zoom 1.0, also the drawable bounds in plan-units)
CANVAS_WIDTH = int(_env("CANVAS_WIDTH", "600"))
CANVAS_HEIGHT = int(_env("CANVAS_HEIGHT", "500"))
CANVAS_DPI = 100

# Drawing constants
GRID_SPACING = 20
DIMENSION_UNIT_DIVISOR = 10  # 10 plan-units ~ 1 foot on the label

# View
ZOOM_DEFAULT = 1.0
ZOOM_MIN = 0.5
ZOOM_MAX = 2.0
ZOOM_STEP = 0.2

# Generation
PLACEHOLDER_DELAY_SECONDS = float(_env("PLACEHOLDER_DELAY_SECONDS", "3.0"))
GENERATION_TIMEOUT_SECONDS = float(_env("GENERATION_TIMEOUT_SECONDS", "30.0"))

# Inference service (empty URL = placeholder generator)
INFERENCE_URL = _env("INFERENCE_URL", "")
INFERENCE_TIMEOUT_SECONDS = float(_env("INFERENCE_TIMEOUT_SECONDS", "60"))
INFERENCE_MAX_RETRIES = int(_env("INFERENCE_MAX_RETRIES", "2"))

# Openings: "geometric" or "fixed"
OPENING_PLACEMENT = _env("OPENING_PLACEMENT", "geometric")

# Export
EXPORT_FILENAME = "floor-plan.png"
EXPORT_DIR = Path(_env("EXPORT_DIR", "./exports"))

# Web
HISTORY_LIMIT = int(_env("HISTORY_LIMIT", "100"))
WEB_HOST = _env("WEB_HOST", "0.0.0.0")
WEB_PORT = int(_env("WEB_PORT", "8080"))

LOG_LEVEL = _env("LOG_LEVEL", "INFO")
