"""Tests for the fold-editor CLI."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from fold_editor.cli import app
from tests.unit.samples import PROJECT_TEXT

runner = CliRunner()


@pytest.fixture
def outline(tmp_path: Path) -> Path:
    path = tmp_path / "project.tree"
    path.write_text(PROJECT_TEXT)
    return path


def test_show_prints_every_line(outline: Path) -> None:
    result = runner.invoke(app, ["show", str(outline)])
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert len(lines) == 9
    assert lines[0] == "▾ Project"
    assert lines[2] == "      API design"


def test_show_fold_all(outline: Path) -> None:
    result = runner.invoke(app, ["show", str(outline), "--fold-all"])
    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["▸ Project", "▸ Notes"]


def test_show_filter(outline: Path) -> None:
    result = runner.invoke(app, ["show", str(outline), "--filter", "page"])
    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["      Login page"]


def test_missing_file_exits_with_error(tmp_path: Path) -> None:
    result = runner.invoke(app, ["show", str(tmp_path / "nope.tree")])
    assert result.exit_code == 1


def test_search_json(outline: Path) -> None:
    result = runner.invoke(app, ["search", str(outline), "API", "--json"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["total"] == 2
    assert data["results"][0]["path"] == ["Project", "Backend", "API design"]
    assert data["results"][1]["text"] == "Meeting with api team"


def test_search_text_output(outline: Path) -> None:
    result = runner.invoke(app, ["search", str(outline), "schema"])
    assert result.exit_code == 0, result.output
    assert "Found 1 results" in result.output
    assert "Database schema" in result.output
    assert "Project › Backend" in result.output


def test_normalize_reindents(tmp_path: Path) -> None:
    path = tmp_path / "messy.tree"
    path.write_text("a\n\tb\n\n\t\tc\n")
    result = runner.invoke(app, ["normalize", str(path), "--indent-size", "4"])
    assert result.exit_code == 0, result.output
    assert result.output == "a\n    b\n        c\n"


def test_keys_replays_tokens(outline: Path) -> None:
    result = runner.invoke(app, ["keys", str(outline), "j", "<leader>", "c", "a", "j"])
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert "API design" not in result.output
    assert lines[2].startswith(">")
    assert lines[2].endswith("Frontend")


def test_keys_reports_pending_chord(outline: Path) -> None:
    result = runner.invoke(app, ["keys", str(outline), "<leader>", "c"])
    assert result.exit_code == 0, result.output
    assert "pending:" in result.output
