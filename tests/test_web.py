"""Tests for the web API."""

import pytest

from planview import config
from planview.view.controller import ViewController
from planview.visualization.generator import RasterSurface
from planview.web import create_app


@pytest.fixture
def app(fast_generator):
    controller = ViewController(generator=fast_generator, surface=RasterSurface())
    app = create_app(controller)
    app.config["TESTING"] = True
    yield app
    app.extensions["planview"].close()


@pytest.fixture
def client(app):
    return app.test_client()


def test_health(client):
    assert client.get("/api/health").get_json() == {"status": "ok"}


def test_generate_from_text(client):
    response = client.post("/api/generate", json={"payload": "two bedrooms", "source_kind": "text"})

    assert response.status_code == 200
    data = response.get_json()
    assert data["success"] is True
    assert data["applied"] is True
    assert data["sequence"] == 1
    assert len(data["layout"]["rooms"]) == 8
    assert data["status"]["state"] == "ready"
    bedrooms = next(bucket for bucket in data["legend"] if bucket["key"] == "bedrooms")
    assert bedrooms["rooms"] == ["Bedroom 1", "Bedroom 2", "Bedroom 3"]


def test_generate_from_code(client, spec_text):
    response = client.post("/api/generate", json={"payload": spec_text, "source_kind": "code"})

    assert response.status_code == 200
    assert [room["name"] for room in response.get_json()["layout"]["rooms"]] == [
        "Living Room", "Kitchen", "Master Bedroom",
    ]


def test_generate_without_payload(client):
    response = client.post("/api/generate", json={"source_kind": "text"})

    assert response.status_code == 400
    assert response.get_json()["success"] is False


def test_generate_unknown_source_kind(client):
    response = client.post("/api/generate", json={"payload": "x", "source_kind": "smoke"})

    assert response.status_code == 400


def test_generate_failure_keeps_layout(client, spec_text):
    client.post("/api/generate", json={"payload": spec_text, "source_kind": "code"})

    response = client.post("/api/generate", json={"payload": "{oops", "source_kind": "code"})

    assert response.status_code == 422
    data = response.get_json()
    assert data["success"] is False
    assert data["kind"] == "parse_error"
    assert data["retryable"] is False
    assert data["error"]
    state = client.get("/api/state").get_json()
    assert len(state["layout"]["rooms"]) == 3
    assert state["status"]["state"] == "error"


def test_view_actions(client):
    assert client.post("/api/view/zoom-in").get_json() == {"zoom": pytest.approx(1.2)}
    assert client.post("/api/view/zoom-in").get_json()["zoom"] == pytest.approx(1.4)
    assert client.post("/api/view/zoom-out").get_json()["zoom"] == pytest.approx(1.2)
    assert client.post("/api/view/reset").get_json() == {"zoom": 1.0}
    assert client.post("/api/view/rotate").status_code == 404


def test_plan_image(client):
    client.post("/api/generate", json={"payload": "house", "source_kind": "text"})

    response = client.get("/api/plan.png")

    assert response.status_code == 200
    assert response.mimetype == "image/png"
    assert response.data.startswith(b"\x89PNG")


def test_export_download_name(client):
    response = client.get("/api/export")

    assert response.status_code == 200
    assert f"filename={config.EXPORT_FILENAME}" in response.headers["Content-Disposition"]


def test_plan_image_without_surface(fast_generator):
    app = create_app(ViewController(generator=fast_generator))
    try:
        assert app.test_client().get("/api/plan.png").status_code == 404
    finally:
        app.extensions["planview"].close()


def test_legend_endpoint(client):
    buckets = client.get("/api/legend").get_json()

    assert [bucket["title"] for bucket in buckets] == ["Rooms", "Kitchen & Dining", "Bathrooms", "Others"]
    assert all(bucket["rooms"] == [] for bucket in buckets)


def test_history_most_recent_first(client):
    for i in range(3):
        client.post("/api/generate", json={"payload": f"house {i}", "source_kind": "text"})
    client.post("/api/generate", json={"payload": "{", "source_kind": "code"})

    history = client.get("/api/history").get_json()

    assert [entry["payload"] for entry in history] == ["{", "house 2", "house 1", "house 0"]
    assert history[0]["state"] == "error"
    assert history[1]["state"] == "ready"


def test_history_limit(fast_generator, monkeypatch):
    monkeypatch.setattr(config, "HISTORY_LIMIT", 2)
    app = create_app(ViewController(generator=fast_generator))
    client = app.test_client()
    try:
        for i in range(4):
            client.post("/api/generate", json={"payload": f"house {i}"})
        history = client.get("/api/history").get_json()
    finally:
        app.extensions["planview"].close()

    assert [entry["payload"] for entry in history] == ["house 3", "house 2"]


def test_loop_thread_stops_on_close(fast_generator):
    app = create_app(ViewController(generator=fast_generator))
    runner = app.extensions["planview"]
    assert runner.is_running

    runner.close()
    runner.close()

    assert not runner.is_running
