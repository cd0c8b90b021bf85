#!/usr/bin/env python3
"""Wall Slide puzzle — map authoring tools.

Usage::

    python main.py generate -m 5 --seed 42      # one map with exactly 5 moves
    python main.py batch -n 10 --min-moves 3    # ten maps, 3-15 moves each
    python main.py solve data/maps/Map_5moves_….json
    python main.py show data/maps/Map_5moves_….json --replay
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

ROOT = Path(__file__).resolve().parent  # python/
PROJECT_ROOT = ROOT.parent
DATA_DIR = PROJECT_ROOT / "data" / "maps"

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from frontend.cli.rich.app import draw_map, format_path, replay_path  # noqa: E402
from wallslide.engine.gamegenerator import GameGenerator, GenerationExhausted  # noqa: E402
from wallslide.engine.gamegenerator.generator import (  # noqa: E402
    DEFAULT_HEIGHT,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_BATCH_MOVES,
    DEFAULT_WIDTH,
)
from wallslide.engine.gamesolver import Solver  # noqa: E402
from wallslide.models import MalformedMapError, MapStore  # noqa: E402

console = Console()

app = typer.Typer(add_completion=False, help="Wall Slide puzzle map tools.")


# -- helpers ------------------------------------------------------------------


def _load(path: Path):
    try:
        return MapStore.load(path)
    except (OSError, MalformedMapError) as e:
        console.print(f"[red]Cannot load {path}: {e}[/red]")
        raise typer.Exit(code=1)


@app.callback()
def _configure(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Log every attempt."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


# -- commands -----------------------------------------------------------------


@app.command()
def generate(
    moves: int = typer.Option(..., "-m", "--moves", min=1, help="Exact solution length."),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed; omit for a fresh one."),
    max_attempts: int = typer.Option(DEFAULT_MAX_ATTEMPTS, "--max-attempts", min=1),
    width: int = typer.Option(DEFAULT_WIDTH, "--width", min=1),
    height: int = typer.Option(DEFAULT_HEIGHT, "--height", min=1),
    time_budget: Optional[float] = typer.Option(None, "--time-budget", help="Seconds."),
    out: Path = typer.Option(DATA_DIR, "-o", "--out", help="Directory for the map file."),
    save: bool = typer.Option(True, "--save/--no-save"),
) -> None:
    """Generate one map whose shortest solution has exactly MOVES moves."""
    try:
        result = GameGenerator.generate(moves, seed, max_attempts, width, height, time_budget)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)
    if isinstance(result, GenerationExhausted):
        console.print(
            f"[red]Could not generate a map with {moves} moves "
            f"({result.reason} after {result.attempts} attempts, seed {result.seed}).[/red]"
        )
        raise typer.Exit(code=1)

    draw_map(console, result, title="Generated")
    if save:
        path = MapStore(out).save(result)
        console.print(f"  Saved to [bold]{path}[/bold]")


@app.command()
def batch(
    count: int = typer.Option(10, "-n", "--count", min=1),
    min_moves: int = typer.Option(3, "--min-moves", min=1),
    max_moves: int = typer.Option(DEFAULT_MAX_BATCH_MOVES, "--max-moves", min=1),
    max_attempts: int = typer.Option(DEFAULT_MAX_ATTEMPTS, "--max-attempts", min=1),
    out: Path = typer.Option(DATA_DIR, "-o", "--out"),
) -> None:
    """Generate COUNT maps with random targets between the move bounds."""
    if min_moves > max_moves:
        console.print(f"[red]--min-moves {min_moves} exceeds --max-moves {max_moves}.[/red]")
        raise typer.Exit(code=1)

    result = GameGenerator.generate_batch(count, min_moves, max_moves, max_attempts)
    store = MapStore(out)
    for game_map in result.maps:
        store.save(game_map)
    console.print(
        f"[bold green]Generated: {len(result.maps)}[/bold green]  "
        f"[red]Failed: {len(result.failures)}[/red]  → {out}"
    )


@app.command()
def solve(path: Path = typer.Argument(..., exists=True, dir_okay=False)) -> None:
    """Solve a stored map and print its shortest path."""
    game_map = _load(path)
    result = Solver.solve(game_map)
    if not result.solvable:
        console.print(f"[red]Unsolvable ({result.explored} states explored).[/red]")
        raise typer.Exit(code=1)

    console.print(
        f"[bold green]Solvable in {result.min_moves} moves:[/bold green] "
        f"{format_path(result.optimal_path)}"
    )
    stored = game_map.min_moves
    if stored is not None and stored != result.min_moves:
        console.print(f"[yellow]Stored path has {stored} moves.[/yellow]")


@app.command()
def show(
    path: Path = typer.Argument(..., exists=True, dir_okay=False),
    replay: bool = typer.Option(False, "--replay", help="Play the shortest path."),
    delay: float = typer.Option(0.3, "--delay", min=0.0),
) -> None:
    """Draw a stored map."""
    game_map = _load(path)
    draw_map(console, game_map, title=path.stem)
    if replay:
        moves = game_map.optimal_path or Solver.solve(game_map).optimal_path
        if not moves:
            console.print("[red]Map is unsolvable.[/red]")
            raise typer.Exit(code=1)
        replay_path(console, game_map, moves, delay)


if __name__ == "__main__":
    app()
