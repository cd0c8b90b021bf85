"""Command-line smoke tests."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from frontend.cli.rich.app import render_map
from main import app
from wallslide.models.gamemap import GameMap

runner = CliRunner()


def _write_map(path: Path, rows: list[str]) -> Path:
    path.write_text(json.dumps(GameMap.from_rows(rows).to_dict()))
    return path


def test_generate_saves_a_map(tmp_path: Path) -> None:
    result = runner.invoke(app, [
        "generate", "-m", "1", "--seed", "5", "--width", "2", "--height", "1",
        "-o", str(tmp_path),
    ])

    assert result.exit_code == 0, result.output
    files = list(tmp_path.glob("*.json"))
    assert len(files) == 1
    saved = GameMap.from_dict(json.loads(files[0].read_text()))
    assert saved.min_moves == 1
    assert saved.seed == 5


def test_generate_reports_failure() -> None:
    result = runner.invoke(app, [
        "generate", "-m", "2", "--seed", "5", "--width", "2", "--height", "1",
        "--max-attempts", "3", "--no-save",
    ])

    assert result.exit_code == 1
    assert "Could not generate" in result.output


def test_generate_rejects_a_board_too_small() -> None:
    result = runner.invoke(app, [
        "generate", "-m", "1", "--width", "1", "--height", "1", "--no-save",
    ])

    assert result.exit_code == 1
    assert "cannot hold a player and a goal" in result.output


def test_solve_prints_path(tmp_path: Path) -> None:
    path = _write_map(tmp_path / "map.json", ["P...G"])

    result = runner.invoke(app, ["solve", str(path)])

    assert result.exit_code == 0, result.output
    assert "Solvable in 1 moves" in result.output


def test_solve_unsolvable_map(tmp_path: Path) -> None:
    path = _write_map(tmp_path / "map.json", ["P#..G"])

    result = runner.invoke(app, ["solve", str(path)])

    assert result.exit_code == 1
    assert "Unsolvable" in result.output


def test_solve_malformed_file(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{}")

    result = runner.invoke(app, ["solve", str(path)])

    assert result.exit_code == 1
    assert "Cannot load" in result.output


def test_show_with_replay(tmp_path: Path) -> None:
    path = _write_map(tmp_path / "map.json", ["P.BG"])

    result = runner.invoke(app, ["show", str(path), "--replay", "--delay", "0"])

    assert result.exit_code == 0, result.output
    assert "Solved in 2 moves" in result.output


def test_batch(tmp_path: Path) -> None:
    result = runner.invoke(app, [
        "batch", "-n", "2", "--min-moves", "1", "--max-moves", "1",
        "--max-attempts", "50", "-o", str(tmp_path),
    ])

    assert result.exit_code == 0, result.output
    assert "Generated: " in result.output


def test_render_map_styles_slide_tiles() -> None:
    table = render_map(GameMap.from_rows(["P^>v<G"]))

    cells = [next(iter(column.cells)) for column in table.columns]

    assert cells[1:5] == [
        "[bold magenta]^[/bold magenta]",
        "[bold magenta]>[/bold magenta]",
        "[bold magenta]v[/bold magenta]",
        "[bold magenta]<[/bold magenta]",
    ]
