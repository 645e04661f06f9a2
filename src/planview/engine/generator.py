"""Layout generators: turn raw user input into a Layout.

Every generator exposes one coroutine, ``generate(payload, source_kind)``,
that returns a complete Layout or raises GenerationError (or InvalidLayout
for out-of-range geometry). Generators never touch shared state.
"""

from __future__ import annotations

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import requests

from .. import config
from ..core.errors import GenerationError, GenerationErrorKind, parse_error, schema_error
from ..core.model import Layout, Opening, OpeningKind, Room, SourceKind
from ..io.parser import parse_layout_spec

LOGGER = logging.getLogger(__name__)

# Fixed room set returned while inference is not wired in:
# (id, name, category, x, y, width, height)
PLACEHOLDER_ROOMS = [
    ("1", "Living Room", "living", 50, 50, 200, 150),
    ("2", "Kitchen", "kitchen", 270, 50, 120, 100),
    ("3", "Bedroom 1", "bedroom", 50, 220, 140, 120),
    ("4", "Bedroom 2", "bedroom", 210, 220, 140, 120),
    ("5", "Bedroom 3", "bedroom", 370, 220, 140, 120),
    ("6", "Bathroom 1", "bathroom", 270, 170, 80, 80),
    ("7", "Bathroom 2", "bathroom", 370, 170, 80, 80),
    ("8", "Garden", "garden", 50, 360, 460, 80),
]
PLACEHOLDER_DOORS = [("1", "2"), ("1", "3"), ("2", "4")]


def check_payload(payload: Any, source_kind: SourceKind) -> None:
    """Reject payloads no generator can work with.

    Raises:
        GenerationError: ``SCHEMA_ERROR`` for empty input, ``PARSE_ERROR``
            for a drawing that is not an image data URL.
    """
    if not isinstance(payload, str) or not payload.strip():
        raise schema_error("Input is empty")
    if source_kind is SourceKind.DRAWING and not payload.strip().startswith("data:image/"):
        raise parse_error("Drawing input must be an image data URL")


def placeholder_layout(source_kind: SourceKind = SourceKind.TEXT) -> Layout:
    """Build the fixed eight-room layout."""
    rooms = tuple(
        Room(id=rid, name=name, category=category, x=x, y=y, width=w, height=h)
        for rid, name, category, x, y, w, h in PLACEHOLDER_ROOMS
    )
    doors = tuple(
        Opening(id=f"door-{i + 1}", kind=OpeningKind.DOOR, room_ids=pair)
        for i, pair in enumerate(PLACEHOLDER_DOORS)
    )
    return Layout(rooms=rooms, openings=doors, source_kind=source_kind)


class LayoutGenerator(ABC):
    """Produces a Layout from an opaque input payload."""

    @abstractmethod
    async def generate(self, payload: str, source_kind: SourceKind) -> Layout:
        """Generate a layout.

        Args:
            payload: Raw input: text, transcription, image data URL or JSON.
            source_kind: Input surface the payload came from.

        Returns:
            A complete, validated Layout.

        Raises:
            GenerationError: If no layout can be derived from the input.
            InvalidLayout: If the derived geometry is out of range.
        """


class StructuredSpecGenerator(LayoutGenerator):
    """Parses the JSON structured specification typed in the code editor."""

    def __init__(self, width: float = config.CANVAS_WIDTH, height: float = config.CANVAS_HEIGHT):
        self.width = width
        self.height = height

    async def generate(self, payload: str, source_kind: SourceKind) -> Layout:
        check_payload(payload, source_kind)
        return parse_layout_spec(payload, source_kind, width=self.width, height=self.height)


class PlaceholderGenerator(LayoutGenerator):
    """Stands in for the inference service.

    Waits ``delay`` seconds, then returns the fixed placeholder layout
    whatever the input says.
    """

    def __init__(self, delay: float = config.PLACEHOLDER_DELAY_SECONDS):
        self.delay = delay

    async def generate(self, payload: str, source_kind: SourceKind) -> Layout:
        check_payload(payload, source_kind)
        LOGGER.debug("Simulating inference for %s input (%.1fs)", source_kind.value, self.delay)
        await asyncio.sleep(self.delay)
        return placeholder_layout(source_kind)


class InferenceServiceGenerator(LayoutGenerator):
    """Asks a remote inference service for a layout.

    The service receives ``{"payload": ..., "source_kind": ...}`` and must
    answer with a structured specification, either as the top-level JSON
    object or under a ``"layout"`` key. The blocking HTTP call runs in a
    worker thread so the event loop stays responsive.
    """

    def __init__(
        self,
        url: str,
        timeout: float = config.INFERENCE_TIMEOUT_SECONDS,
        max_retries: int = config.INFERENCE_MAX_RETRIES,
        session: Optional[requests.Session] = None,
        width: float = config.CANVAS_WIDTH,
        height: float = config.CANVAS_HEIGHT,
    ):
        self.url = url
        self.timeout = timeout
        self.max_retries = max_retries
        self.session = session or requests.Session()
        self.width = width
        self.height = height

    async def generate(self, payload: str, source_kind: SourceKind) -> Layout:
        check_payload(payload, source_kind)
        spec_text = await asyncio.to_thread(self._query_service, payload, source_kind)
        try:
            return parse_layout_spec(spec_text, source_kind, width=self.width, height=self.height)
        except GenerationError as e:
            raise GenerationError(
                GenerationErrorKind.SERVICE_FAILURE,
                f"Inference service returned an unusable layout: {e}",
            ) from e

    def _query_service(self, payload: str, source_kind: SourceKind) -> str:
        body = {"payload": payload, "source_kind": source_kind.value}
        last_error: Optional[Exception] = None

        for attempt in range(1, self.max_retries + 2):
            try:
                response = self.session.post(self.url, json=body, timeout=self.timeout)
                response.raise_for_status()
                data = response.json()
                if isinstance(data, dict) and isinstance(data.get("layout"), dict):
                    data = data["layout"]
                return json.dumps(data)
            except (requests.RequestException, ValueError) as exc:
                last_error = exc
                LOGGER.warning(
                    "Inference request failed (attempt %s/%s): %s",
                    attempt, self.max_retries + 1, exc,
                )

        raise GenerationError(
            GenerationErrorKind.SERVICE_FAILURE,
            f"Inference service unavailable: {last_error}",
        ) from last_error


class RoutingGenerator(LayoutGenerator):
    """Sends code input to the structured parser and everything else to inference."""

    def __init__(
        self,
        structured: Optional[LayoutGenerator] = None,
        inference: Optional[LayoutGenerator] = None,
    ):
        self.structured = structured or StructuredSpecGenerator()
        self.inference = inference or PlaceholderGenerator()

    async def generate(self, payload: str, source_kind: SourceKind) -> Layout:
        if source_kind is SourceKind.CODE:
            return await self.structured.generate(payload, source_kind)
        return await self.inference.generate(payload, source_kind)


def default_generator() -> RoutingGenerator:
    """Build the generator configured for this process."""
    if config.INFERENCE_URL:
        LOGGER.info("Using inference service at %s", config.INFERENCE_URL)
        inference: LayoutGenerator = InferenceServiceGenerator(config.INFERENCE_URL)
    else:
        inference = PlaceholderGenerator()
    return RoutingGenerator(inference=inference)
