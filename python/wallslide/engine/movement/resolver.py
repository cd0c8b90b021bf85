"""Slide-move resolution — the one rule every caller goes through."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from wallslide.models.gamemap import Cell, Direction, GameMap, ObstacleKind


class MoveStatus(Enum):
    MOVED = "moved"
    BLOCKED = "blocked"
    GOAL = "goal"
    OUT_OF_BOUNDS = "out_of_bounds"
    INVALID_SLIDE_EXIT = "invalid_slide_exit"


_FAILURES = {MoveStatus.OUT_OF_BOUNDS, MoveStatus.INVALID_SLIDE_EXIT}


@dataclass(frozen=True)
class MoveOutcome:
    """Result of resolving one slide move.

    ``broken`` is the complete broken-wall set after the move and
    ``broken_wall`` the wall destroyed by this move, if any.
    """

    position: Cell
    pending_break: Cell | None
    broken: frozenset[Cell]
    status: MoveStatus
    broken_wall: Cell | None = None

    @property
    def wall_just_broken(self) -> bool:
        return self.broken_wall is not None

    @property
    def reached_goal(self) -> bool:
        return self.status is MoveStatus.GOAL

    @property
    def out_of_bounds(self) -> bool:
        return self.status is MoveStatus.OUT_OF_BOUNDS

    @property
    def invalid_exit(self) -> bool:
        return self.status is MoveStatus.INVALID_SLIDE_EXIT

    @property
    def is_noop(self) -> bool:
        return self.status is MoveStatus.BLOCKED

    @property
    def is_failure(self) -> bool:
        return self.status in _FAILURES


def initial_pending_break(game_map: GameMap, position: Cell,
                          broken: Iterable[Cell] = ()) -> Cell | None:
    """Return the first unbroken breakable wall next to *position*.

    Neighbours are checked in ``Direction`` order; only one wall is marked.
    """
    gone = set(broken)
    for direction in Direction:
        cell = direction.step(position)
        if cell not in gone and game_map.obstacle_at(cell) is ObstacleKind.BREAKABLE_WALL:
            return cell
    return None


def resolve(
    game_map: GameMap,
    position: Cell,
    direction: Direction,
    pending_break: Cell | None = None,
    broken: Iterable[Cell] = frozenset(),
) -> MoveOutcome:
    """Slide from *position* in *direction* and report where the mover ends.

    A breakable wall stops the first move that reaches it and becomes the
    pending break.  It is destroyed by the next move made straight into it,
    which then carries on through its cell.  Slide tiles move the mover onto
    the tile and exactly one cell further in the tile's own direction.

    A move that neither displaces the mover nor breaks a wall comes back as
    ``BLOCKED`` with the input state echoed; callers must not count it.
    Pushing into an adjacent breakable wall that is not marked is such a
    move.
    """
    broken = frozenset(broken)
    start_broken = broken
    broken_wall: Cell | None = None

    ahead = direction.step(position)
    if (
        pending_break is not None
        and pending_break == ahead
        and ahead not in broken
        and game_map.obstacle_at(ahead) is ObstacleKind.BREAKABLE_WALL
    ):
        broken_wall = ahead
        broken = broken | {ahead}

    current = position
    new_pending: Cell | None = None
    status = MoveStatus.MOVED

    while True:
        nxt = direction.step(current)
        if not game_map.in_bounds(nxt):
            current = nxt
            status = MoveStatus.OUT_OF_BOUNDS
            break

        kind = game_map.obstacle_at(nxt)
        if kind is None or nxt in broken:
            current = nxt
            continue

        if kind is ObstacleKind.WALL:
            break
        if kind is ObstacleKind.BREAKABLE_WALL:
            new_pending = nxt
            break
        if kind is ObstacleKind.GOAL:
            current = nxt
            status = MoveStatus.GOAL
            break

        # slide tile: one hop in its own direction, never clamped
        exit_cell = kind.slide_direction.step(nxt)
        exit_kind = game_map.obstacle_at(exit_cell)
        blocked = exit_kind is not None and exit_cell not in broken and exit_kind is not ObstacleKind.GOAL
        if not game_map.in_bounds(exit_cell) or blocked:
            return MoveOutcome(
                position=nxt,
                pending_break=pending_break,
                broken=broken,
                status=MoveStatus.INVALID_SLIDE_EXIT,
                broken_wall=broken_wall,
            )
        current = exit_cell
        if exit_kind is ObstacleKind.GOAL:
            status = MoveStatus.GOAL
        break

    if current == position and broken_wall is None:
        return MoveOutcome(position, pending_break, start_broken, MoveStatus.BLOCKED)

    return MoveOutcome(current, new_pending, broken, status, broken_wall)


def replay(game_map: GameMap, path: Iterable[Direction]) -> list[MoveOutcome]:
    """Play *path* from the map's start and return every outcome.

    No-op moves are reported but not applied.  Replay stops after a goal
    arrival or a failure.
    """
    position = game_map.player_start
    broken: frozenset[Cell] = frozenset()
    pending = initial_pending_break(game_map, position)
    outcomes: list[MoveOutcome] = []
    for direction in path:
        outcome = resolve(game_map, position, direction, pending, broken)
        outcomes.append(outcome)
        if outcome.is_noop:
            continue
        if outcome.reached_goal or outcome.is_failure:
            break
        position, pending, broken = outcome.position, outcome.pending_break, outcome.broken
    return outcomes
