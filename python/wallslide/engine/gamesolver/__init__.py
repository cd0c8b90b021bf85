from wallslide.engine.gamesolver.solver import (
    MoveState,
    SearchCancelled,
    Solver,
    SolverResult,
)

__all__ = ["MoveState", "SearchCancelled", "Solver", "SolverResult"]
