"""
Web interface for the floor plan viewer.

JSON API used by the browser page: submit an input, zoom, fetch the
rendered plan and its legend. All controller work runs on one dedicated
event loop thread, so overlapping requests interleave cooperatively like
UI events instead of running in parallel.
"""

import asyncio
import atexit
import logging
import threading
import time
from collections import deque
from dataclasses import asdict

from flask import Flask, Response, jsonify, request
from flask_cors import CORS

from . import config
from .core.model import SourceKind
from .io.parser import layout_to_dict
from .view.controller import ViewController
from .visualization.generator import RasterSurface

LOGGER = logging.getLogger(__name__)


class ControllerLoop:
    """Runs a ViewController on its own event loop thread."""

    def __init__(self, controller: ViewController):
        self.controller = controller
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(
            target=self._loop.run_forever, daemon=True, name="planview-loop"
        )
        self._thread.start()

    def run(self, coro):
        """Run a coroutine on the loop and wait for its result."""
        return asyncio.run_coroutine_threadsafe(coro, self._loop).result()

    def call(self, fn, *args):
        """Run a plain function on the loop thread and return its result."""

        async def _call():
            return fn(*args)

        return self.run(_call())

    @property
    def is_running(self) -> bool:
        return self._thread.is_alive()

    def close(self) -> None:
        """Stop the loop thread. Safe to call more than once."""
        if self._loop.is_closed():
            return
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout=5)
        if not self._thread.is_alive():
            self._loop.close()


def create_app(controller: ViewController = None) -> Flask:
    """Build the Flask app around a controller.

    The loop thread is stored as ``app.extensions["planview"]`` and is
    closed at interpreter exit, or earlier through its ``close()``.

    Args:
        controller: Controller to serve; a new one with an attached
            surface is created when omitted.
    """
    if controller is None:
        controller = ViewController(surface=RasterSurface())
    runner = ControllerLoop(controller)
    atexit.register(runner.close)
    history = deque(maxlen=config.HISTORY_LIMIT)

    app = Flask(__name__)
    CORS(app)
    app.extensions["planview"] = runner

    def _state():
        layout = controller.layout
        return {
            "status": asdict(controller.status),
            "generating": controller.is_generating,
            "zoom": controller.zoom,
            "layout": layout_to_dict(layout) if layout is not None else None,
        }

    def _legend():
        return [
            {"key": bucket.key, "title": bucket.title, "rooms": bucket.names}
            for bucket in controller.legend()
        ]

    @app.route("/api/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    @app.route("/api/generate", methods=["POST"])
    def generate():
        """Generate a floor plan from {payload, source_kind}."""
        data = request.get_json(silent=True) or {}
        payload = data.get("payload", "")
        source_kind = data.get("source_kind", SourceKind.TEXT.value)

        if not isinstance(payload, str) or not payload.strip():
            return jsonify({"success": False, "error": "No payload provided"}), 400
        try:
            kind = SourceKind(source_kind)
        except ValueError:
            return jsonify({"success": False, "error": f"Unknown source kind: {source_kind}"}), 400

        outcome = runner.run(controller.submit(payload, kind))
        history.append(
            {
                "sequence": outcome.sequence,
                "source_kind": kind.value,
                "payload": payload,
                "state": outcome.status.state,
                "timestamp": time.time(),
            }
        )

        if outcome.status.state == "error":
            return jsonify(
                {
                    "success": False,
                    "error": outcome.status.message,
                    "kind": outcome.status.error_kind,
                    "retryable": outcome.status.retryable,
                }
            ), 422

        response = {
            "success": True,
            "applied": outcome.applied,
            "sequence": outcome.sequence,
        }
        response.update(runner.call(_state))
        response["legend"] = runner.call(_legend)
        return jsonify(response)

    @app.route("/api/view/<action>", methods=["POST"])
    def change_view(action):
        operations = {
            "zoom-in": controller.zoom_in,
            "zoom-out": controller.zoom_out,
            "reset": controller.reset_view,
        }
        if action not in operations:
            return jsonify({"error": f"Unknown view action: {action}"}), 404
        view = runner.call(operations[action])
        return jsonify({"zoom": view.zoom})

    @app.route("/api/state", methods=["GET"])
    def state():
        return jsonify(runner.call(_state))

    @app.route("/api/legend", methods=["GET"])
    def legend():
        return jsonify(runner.call(_legend))

    @app.route("/api/plan.png", methods=["GET"])
    def plan_image():
        if controller.surface is None:
            return jsonify({"error": "No drawing surface attached"}), 404
        png = runner.call(controller.surface.to_png_bytes)
        return Response(png, mimetype="image/png")

    @app.route("/api/export", methods=["GET"])
    def export():
        """Download the current plan as floor-plan.png."""
        if controller.surface is None:
            return jsonify({"error": "No drawing surface attached"}), 404
        png = runner.call(controller.surface.to_png_bytes)
        return Response(
            png,
            mimetype="image/png",
            headers={"Content-Disposition": f"attachment; filename={config.EXPORT_FILENAME}"},
        )

    @app.route("/api/history", methods=["GET"])
    def get_history():
        """Most recent submissions first."""
        return jsonify(list(reversed(history)))

    return app


def main():
    logging.basicConfig(level=config.LOG_LEVEL)
    app = create_app()
    LOGGER.info("Server running at http://localhost:%s", config.WEB_PORT)
    app.run(host=config.WEB_HOST, port=config.WEB_PORT)


if __name__ == "__main__":
    main()
