"""Core gameplay logic — feeds inputs through the resolver and tracks the result."""

from __future__ import annotations

import logging

from wallslide.engine.gamesolver import Solver
from wallslide.engine.gamestate import GameState, GameStatus
from wallslide.engine.movement import MoveOutcome, resolve
from wallslide.models.gamemap import Direction, GameMap

logger = logging.getLogger(__name__)


class GamePlay:
    """Orchestrates a single game session on one map."""

    def __init__(self, game_map: GameMap) -> None:
        self.game_map = game_map
        self.state = GameState(game_map)

    # -- movement -------------------------------------------------------------

    def move(self, direction: Direction) -> MoveOutcome:
        """Slide the mover in *direction*.

        Every call counts as a try; only moves that change something count
        as moves.  Raises ``RuntimeError`` once the game has been won or lost.
        """
        if self.is_over:
            raise RuntimeError(f"Game is over ({self.state.status.value}); restart first.")

        state = self.state
        state.increment_tries()
        outcome = resolve(self.game_map, state.position, direction,
                          state.pending_break, state.broken)
        if outcome.is_noop:
            return outcome

        state.apply(outcome)
        if outcome.wall_just_broken:
            logger.debug(f"Wall at {outcome.broken_wall} broken")
        if state.status is GameStatus.WON:
            logger.info(f"Level clear in {state.moves} moves ({state.tries} tries)")
        elif state.status is GameStatus.FAILED:
            logger.info(f"Move {direction.name} failed: {outcome.status.value}")
        return outcome

    def restart(self) -> None:
        self.state = GameState(self.game_map)

    def hint(self) -> Direction | None:
        """Return the first move of a shortest solution from the current state."""
        if self.is_over:
            return None
        state = self.state
        return Solver.hint(self.game_map, state.position, state.broken, state.pending_break)

    # -- queries --------------------------------------------------------------

    @property
    def is_won(self) -> bool:
        return self.state.is_solved

    @property
    def is_over(self) -> bool:
        return self.state.status is not GameStatus.PLAYING
