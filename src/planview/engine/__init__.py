"""Layout generation.

Generators turn a raw user payload (text, transcription, drawing or JSON
specification) into a validated Layout.
"""

from .generator import (
    InferenceServiceGenerator,
    LayoutGenerator,
    PlaceholderGenerator,
    RoutingGenerator,
    StructuredSpecGenerator,
    default_generator,
    placeholder_layout,
)

__all__ = [
    "LayoutGenerator",
    "StructuredSpecGenerator",
    "PlaceholderGenerator",
    "InferenceServiceGenerator",
    "RoutingGenerator",
    "default_generator",
    "placeholder_layout",
]
