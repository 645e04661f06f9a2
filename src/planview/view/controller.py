"""View controller: owns the visible layout and view state.

The controller holds one ``ViewSession`` (layout + view state) and replaces
it as a whole, never field by field. Zoom and reset each trigger exactly one
render. Layout generation is awaited without blocking; every request gets a
sequence number and only the most recent request may change the visible
layout, so a slow stale result can never overwrite a newer one.

The controller is not thread-safe: drive it from a single event loop.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional, Union

import numpy as np

from .. import config
from ..core.errors import GenerationError, GenerationErrorKind
from ..core.model import Layout, SourceKind, ViewState
from ..core.validators import InvalidLayout
from ..engine.generator import LayoutGenerator, default_generator
from ..geom.openings import OpeningPlacement
from ..legend import LegendSummary, summarize
from ..visualization.generator import RasterSurface, render

LOGGER = logging.getLogger(__name__)

INVALID_LAYOUT = "invalid_layout"

USER_MESSAGES = {
    GenerationErrorKind.SERVICE_FAILURE: "Could not generate a floor plan right now. Please try again.",
    GenerationErrorKind.TIMEOUT: "Generating the floor plan took too long. Please try again.",
}


@dataclass(frozen=True)
class Status:
    """User-visible state of the controller.

    Attributes:
        state: "idle", "generating", "ready", "error", or "stale" for a
            result superseded by a newer request.
        message: Text to show the user.
        error_kind: GenerationErrorKind value or "invalid_layout" on error.
        retryable: Whether retrying the same input may succeed.
    """

    state: str = "idle"
    message: str = ""
    error_kind: Optional[str] = None
    retryable: bool = False


@dataclass(frozen=True)
class ViewSession:
    layout: Optional[Layout] = None
    view: ViewState = field(default_factory=ViewState)


@dataclass(frozen=True)
class GenerationOutcome:
    """Result of one ``submit`` call.

    Attributes:
        sequence: Request number, increasing per controller.
        applied: True if the layout replaced the visible one.
        status: Status for this request. For a stale request this is not
            the controller's status.
        layout: The generated layout, if generation succeeded.
    """

    sequence: int
    applied: bool
    status: Status
    layout: Optional[Layout] = None


class ViewController:
    """Mediates user input, generation and rendering for one view."""

    def __init__(
        self,
        generator: Optional[LayoutGenerator] = None,
        surface: Optional[RasterSurface] = None,
        timeout: float = config.GENERATION_TIMEOUT_SECONDS,
        placement: Union[OpeningPlacement, str] = config.OPENING_PLACEMENT,
    ):
        self.generator = generator or default_generator()
        self.surface = surface
        self.timeout = timeout
        self.placement = OpeningPlacement(placement)
        self.session = ViewSession()
        self.status = Status()
        self.render_count = 0
        self._latest_sequence = 0
        self._in_flight = 0

    @property
    def layout(self) -> Optional[Layout]:
        return self.session.layout

    @property
    def view(self) -> ViewState:
        return self.session.view

    @property
    def zoom(self) -> float:
        return self.session.view.zoom

    @property
    def is_generating(self) -> bool:
        return self._in_flight > 0

    # ------------------------------------------------------------------
    # Surface and rendering
    # ------------------------------------------------------------------

    def attach(self, surface: RasterSurface) -> None:
        """Attach a drawing surface and draw the current session into it."""
        self.surface = surface
        self.render()

    def detach(self) -> None:
        self.surface = None

    def render(self) -> Optional[np.ndarray]:
        """Draw the current session; a no-op returning None without a surface."""
        self.render_count += 1
        session = self.session
        return render(session.layout, session.view, self.surface, self.placement)

    def legend(self) -> LegendSummary:
        return summarize(self.session.layout)

    # ------------------------------------------------------------------
    # View operations
    # ------------------------------------------------------------------

    def _set_view(self, view: ViewState) -> ViewState:
        self.session = replace(self.session, view=view)
        self.render()
        return view

    def zoom_in(self) -> ViewState:
        return self._set_view(self.view.with_zoom(self.view.zoom + config.ZOOM_STEP))

    def zoom_out(self) -> ViewState:
        return self._set_view(self.view.with_zoom(self.view.zoom - config.ZOOM_STEP))

    def reset_view(self) -> ViewState:
        return self._set_view(ViewState())

    def export_image(self, path: Optional[Union[str, Path]] = None) -> Optional[Path]:
        """Write the current surface to a PNG file.

        Args:
            path: Destination; defaults to ``EXPORT_DIR/floor-plan.png``.

        Returns:
            The written path, or None when no surface is attached.
        """
        if self.surface is None:
            LOGGER.debug("No drawing surface attached, nothing to export")
            return None
        target = Path(path) if path else config.EXPORT_DIR / config.EXPORT_FILENAME
        written = self.surface.to_png(target)
        LOGGER.info("Exported floor plan to %s", written)
        return written

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def _is_stale(self, sequence: int) -> bool:
        return sequence != self._latest_sequence

    def _failure(self, sequence: int, error: Exception) -> GenerationOutcome:
        if isinstance(error, GenerationError):
            message = USER_MESSAGES.get(error.kind, str(error))
            status = Status("error", message, error.kind.value, error.retryable)
        else:
            status = Status("error", str(error), INVALID_LAYOUT, False)

        if self._is_stale(sequence):
            LOGGER.debug("Ignoring failure of stale request %s: %s", sequence, error)
        else:
            LOGGER.warning("Generation request %s failed: %s", sequence, error)
            self.status = status
        return GenerationOutcome(sequence, False, status)

    async def submit(self, payload: str, source_kind: Union[SourceKind, str]) -> GenerationOutcome:
        """Generate a layout from user input and show it.

        Failures never propagate: they are turned into an error status and
        the current layout is kept. A result is applied only if no newer
        request was submitted meanwhile; on success the view is reset and
        the new layout rendered once.

        Args:
            payload: Raw input text, image data URL or JSON specification.
            source_kind: Input surface the payload came from.

        Returns:
            What happened to this request.
        """
        self._latest_sequence += 1
        sequence = self._latest_sequence
        self._in_flight += 1
        self.status = Status("generating", "Generating floor plan...")

        try:
            kind = SourceKind(source_kind)
            layout = await asyncio.wait_for(self.generator.generate(payload, kind), self.timeout)
        except asyncio.TimeoutError:
            return self._failure(
                sequence,
                GenerationError(
                    GenerationErrorKind.TIMEOUT,
                    f"Generation did not finish within {self.timeout}s",
                ),
            )
        except (GenerationError, InvalidLayout) as e:
            return self._failure(sequence, e)
        except ValueError as e:
            return self._failure(
                sequence, GenerationError(GenerationErrorKind.SCHEMA_ERROR, str(e))
            )
        except Exception as e:
            LOGGER.exception("Generator raised an unexpected error")
            return self._failure(
                sequence, GenerationError(GenerationErrorKind.SERVICE_FAILURE, str(e))
            )
        finally:
            self._in_flight -= 1

        if self._is_stale(sequence):
            LOGGER.debug(
                "Discarding result of request %s, request %s is newer",
                sequence, self._latest_sequence,
            )
            return GenerationOutcome(
                sequence, False, Status("stale", "Superseded by a newer request"), layout
            )

        self.session = ViewSession(layout=layout, view=ViewState())
        self.status = Status("ready", f"Floor plan ready with {len(layout.rooms)} rooms")
        LOGGER.info(
            "Request %s produced a layout with %s rooms from %s input",
            sequence, len(layout.rooms), layout.source_kind.value,
        )
        self.render()
        return GenerationOutcome(sequence, True, self.status, layout)
