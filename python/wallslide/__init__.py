"""Movement, solving and generation core of the wall-slide puzzle."""

from wallslide.engine.gamegenerator import GameGenerator, GenerationExhausted
from wallslide.engine.gamesolver import Solver, SolverResult
from wallslide.engine.movement import MoveOutcome, MoveStatus, resolve
from wallslide.models import Direction, GameMap, MalformedMapError, ObstacleKind

__version__ = "0.1.0"

__all__ = [
    "Direction",
    "GameGenerator",
    "GameMap",
    "GenerationExhausted",
    "MalformedMapError",
    "MoveOutcome",
    "MoveStatus",
    "ObstacleKind",
    "Solver",
    "SolverResult",
    "resolve",
]
