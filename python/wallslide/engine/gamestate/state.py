"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

import time
from enum import Enum

from wallslide.engine.movement import MoveOutcome, initial_pending_break
from wallslide.models.gamemap import Cell, GameMap


class GameStatus(Enum):
    PLAYING = "playing"
    WON = "won"
    FAILED = "failed"


class GameState:
    """Holds the mover, the broken-wall diff, counters and elapsed time.

    The map itself is never modified; destroyed walls are tracked in
    ``broken``.
    """

    def __init__(self, game_map: GameMap) -> None:
        self.game_map = game_map
        self.position: Cell = game_map.player_start
        self.broken: frozenset[Cell] = frozenset()
        self.pending_break: Cell | None = initial_pending_break(game_map, self.position)
        self.status = GameStatus.PLAYING
        self.moves: int = 0
        self.tries: int = 0
        self._start_time: float = time.time()
        self._elapsed_banked: float = 0.0
        self._running: bool = True

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        if self._running:
            return self._elapsed_banked + (time.time() - self._start_time)
        return self._elapsed_banked

    def pause(self) -> None:
        if self._running:
            self._elapsed_banked += time.time() - self._start_time
            self._running = False

    def resume(self) -> None:
        if not self._running:
            self._start_time = time.time()
            self._running = True

    # -- moves ----------------------------------------------------------------

    def increment_tries(self) -> None:
        self.tries += 1

    def apply(self, outcome: MoveOutcome) -> None:
        """Commit a non-blocked outcome."""
        self.position = outcome.position
        self.broken = outcome.broken
        self.pending_break = outcome.pending_break
        self.moves += 1
        if outcome.reached_goal:
            self.status = GameStatus.WON
        elif outcome.is_failure:
            self.status = GameStatus.FAILED
        if self.status is not GameStatus.PLAYING:
            self.pause()

    @property
    def is_solved(self) -> bool:
        return self.status is GameStatus.WON
