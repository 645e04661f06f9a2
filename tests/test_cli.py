"""Tests for the command line interface."""

import json

from typer.testing import CliRunner

from planview.cli import app

runner = CliRunner()


def write_spec(tmp_path, spec_text):
    path = tmp_path / "house.json"
    path.write_text(spec_text)
    return path


def test_render(tmp_path, spec_text):
    spec = write_spec(tmp_path, spec_text)
    out = tmp_path / "out" / "plan.png"

    result = runner.invoke(app, ["render", str(spec), "--out", str(out), "--zoom", "1.4"])

    assert result.exit_code == 0, result.output
    assert out.exists()
    assert "Floor plan saved" in result.output


def test_render_fixed_placement(tmp_path, spec_text):
    spec = write_spec(tmp_path, spec_text)
    out = tmp_path / "plan.png"

    result = runner.invoke(app, ["render", str(spec), "-o", str(out), "--placement", "fixed"])

    assert result.exit_code == 0, result.output
    assert out.exists()


def test_render_missing_file(tmp_path):
    result = runner.invoke(app, ["render", str(tmp_path / "nope.json")])

    assert result.exit_code == 1
    assert "File not found" in result.output


def test_render_invalid_spec(tmp_path):
    spec = write_spec(tmp_path, json.dumps({"floors": "none"}))

    result = runner.invoke(app, ["render", str(spec), "-o", str(tmp_path / "x.png")])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_legend(tmp_path, spec_text):
    result = runner.invoke(app, ["legend", str(write_spec(tmp_path, spec_text))])

    assert result.exit_code == 0, result.output
    assert "Master Bedroom" in result.output
    assert "Kitchen & Dining" in result.output
    assert "Bathrooms: none" in result.output


def test_info(tmp_path, spec_text):
    result = runner.invoke(app, ["info", str(write_spec(tmp_path, spec_text))])

    assert result.exit_code == 0, result.output
    assert "Rooms: 3" in result.output
    assert "Openings: 2" in result.output
    assert "window" in result.output


def test_generate_offline(tmp_path):
    out = tmp_path / "floor-plan.png"

    result = runner.invoke(
        app, ["generate", "a house with three bedrooms", "--offline", "-o", str(out), "--zoom-steps", "2"]
    )

    assert result.exit_code == 0, result.output
    assert out.exists()
    assert "8 rooms" in result.output
    assert "zoom 1.4" in result.output


def test_generate_reports_errors(tmp_path):
    result = runner.invoke(
        app, ["generate", "not json", "--kind", "code", "--offline", "-o", str(tmp_path / "x.png")]
    )

    assert result.exit_code == 1
    assert "parse_error" in result.output
