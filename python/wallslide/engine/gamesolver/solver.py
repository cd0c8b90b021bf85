"""Breadth-first puzzle solver."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Iterable

from wallslide.engine.movement import initial_pending_break, resolve
from wallslide.models.gamemap import Cell, Direction, GameMap

logger = logging.getLogger(__name__)

# How many expansions pass between two polls of the cancel callback.
CANCEL_CHECK_INTERVAL = 256

StateKey = tuple[Cell, tuple[Cell, ...], Cell | None]


class SearchCancelled(RuntimeError):
    """Raised when a caller-supplied cancel callback stops a search."""


@dataclass(frozen=True)
class MoveState:
    position: Cell
    broken: frozenset[Cell]
    pending_break: Cell | None

    @property
    def key(self) -> StateKey:
        return self.position, tuple(sorted(self.broken)), self.pending_break


@dataclass(frozen=True)
class SolverResult:
    solvable: bool
    min_moves: int
    optimal_path: tuple[Direction, ...]
    explored: int = 0


class Solver:
    """Stateless solver — all methods are static."""

    @staticmethod
    def solve(game_map: GameMap,
              cancel: Callable[[], bool] | None = None) -> SolverResult:
        """Return the shortest move sequence from the map's start to its goal."""
        start = game_map.player_start
        return Solver.solve_from(
            game_map, start, frozenset(), initial_pending_break(game_map, start),
            cancel=cancel,
        )

    @staticmethod
    def solve_from(
        game_map: GameMap,
        position: Cell,
        broken: Iterable[Cell] = frozenset(),
        pending_break: Cell | None = None,
        cancel: Callable[[], bool] | None = None,
    ) -> SolverResult:
        """Search from an arbitrary position and broken-wall state."""
        start = MoveState(position, frozenset(broken), pending_break)
        start_key = start.key
        parents: dict[StateKey, tuple[StateKey, Direction]] = {}
        visited: set[StateKey] = {start_key}
        queue: deque[MoveState] = deque([start])
        expanded = 0

        while queue:
            state = queue.popleft()
            expanded += 1
            if cancel is not None and expanded % CANCEL_CHECK_INTERVAL == 0 and cancel():
                raise SearchCancelled(f"Search cancelled after {expanded} states.")

            state_key = state.key
            for direction in Direction:
                outcome = resolve(game_map, state.position, direction,
                                  state.pending_break, state.broken)
                if outcome.is_noop or outcome.is_failure:
                    continue

                if outcome.reached_goal:
                    path = Solver._reconstruct(parents, state_key, start_key)
                    path.append(direction)
                    logger.debug(
                        f"Solved in {len(path)} moves after expanding {expanded} states"
                    )
                    return SolverResult(True, len(path), tuple(path), expanded)

                child = MoveState(outcome.position, outcome.broken, outcome.pending_break)
                child_key = child.key
                if child_key in visited:
                    continue
                visited.add(child_key)
                parents[child_key] = (state_key, direction)
                queue.append(child)

        logger.debug(f"Unsolvable: exhausted {expanded} states")
        return SolverResult(False, 0, (), expanded)

    @staticmethod
    def is_solvable(game_map: GameMap) -> bool:
        """Return True if the goal can be reached from the map's start."""
        return Solver.solve(game_map).solvable

    @staticmethod
    def hint(
        game_map: GameMap,
        position: Cell | None = None,
        broken: Iterable[Cell] = frozenset(),
        pending_break: Cell | None = None,
    ) -> Direction | None:
        """Return the first move of a shortest solution, or ``None``."""
        if position is None:
            result = Solver.solve(game_map)
        else:
            result = Solver.solve_from(game_map, position, broken, pending_break)
        return result.optimal_path[0] if result.solvable else None

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _reconstruct(parents: dict[StateKey, tuple[StateKey, Direction]],
                     key: StateKey, start_key: StateKey) -> list[Direction]:
        path: list[Direction] = []
        while key != start_key:
            key, direction = parents[key]
            path.append(direction)
        path.reverse()
        return path
