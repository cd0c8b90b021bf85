"""Rich terminal output — board tables, solution replay and status panels.

Uses the ``rich`` library for styled output.  The board is drawn from the
map's ASCII picture; every replayed step goes through ``GamePlay`` so the
picture matches the resolver exactly.
"""

from __future__ import annotations

import time

import rich.box
from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from wallslide.engine.gameplay import GamePlay
from wallslide.models.gamemap import Cell, Direction, GameMap

_ARROWS = {
    Direction.UP: "↑",
    Direction.RIGHT: "→",
    Direction.DOWN: "↓",
    Direction.LEFT: "←",
}

_STYLES = {
    "P": "[bold cyan]P[/bold cyan]",
    "G": "[bold green]G[/bold green]",
    "#": "[bold white]#[/bold white]",
    "B": "[bold yellow]B[/bold yellow]",
    "^": "[bold magenta]^[/bold magenta]",
    ">": "[bold magenta]>[/bold magenta]",
    "v": "[bold magenta]v[/bold magenta]",
    "<": "[bold magenta]<[/bold magenta]",
    ".": "[dim]·[/dim]",
}


# -- helpers ------------------------------------------------------------------


def format_path(path: tuple[Direction, ...] | None) -> str:
    if not path:
        return "-"
    return " ".join(_ARROWS[d] for d in path)


# -- board rendering ----------------------------------------------------------


def render_map(game_map: GameMap, position: Cell | None = None,
               broken: frozenset[Cell] = frozenset()) -> Table:
    """Return a Rich Table representing the map, top row first."""
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 0),
    )
    for _ in range(game_map.width):
        table.add_column(width=1, justify="center")

    for row in game_map.to_rows(position, broken):
        table.add_row(*(_STYLES[ch] for ch in row))

    return table


def draw_map(console: Console, game_map: GameMap, title: str = "Map") -> None:
    """Print the map with its stored solution underneath."""
    panel = Panel(
        Align.center(render_map(game_map)),
        title=f"[bold cyan]{title}  {game_map.width}×{game_map.height}[/bold cyan]",
        border_style="bright_blue",
        padding=(1, 2),
    )
    info = Text()
    info.append("  Moves: ", style="dim")
    info.append(str(game_map.min_moves if game_map.min_moves is not None else "?"),
                style="bold yellow")
    info.append("    Seed: ", style="dim")
    info.append(str(game_map.seed if game_map.seed is not None else "-"), style="bold yellow")
    info.append("    Path: ", style="dim")
    info.append(format_path(game_map.optimal_path), style="bold")

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(info))


# -- solution replay ----------------------------------------------------------


def replay_path(console: Console, game_map: GameMap,
                path: tuple[Direction, ...], delay: float = 0.3) -> GamePlay:
    """Play *path* step by step, redrawing the board after every move."""
    game = GamePlay(game_map)
    for i, direction in enumerate(path):
        if game.is_over:
            break
        outcome = game.move(direction)

        progress = Text()
        progress.append(f"  Move {i + 1}/{len(path)} ", style="bold cyan")
        progress.append(f"({direction.name.lower()}: {outcome.status.value})", style="dim")

        panel = Panel(
            Align.center(render_map(game_map, game.state.position, game.state.broken)),
            title="[bold cyan]Replay[/bold cyan]",
            border_style="cyan",
            padding=(1, 2),
        )
        console.print()
        console.print(Align.center(panel))
        console.print(Align.center(progress))
        if delay:
            time.sleep(delay)

    if game.is_won:
        console.print(f"[bold green]Solved in {game.state.moves} moves![/bold green]")
    else:
        console.print(f"[red]Replay ended without reaching the goal "
                      f"({game.state.status.value}).[/red]")
    return game
