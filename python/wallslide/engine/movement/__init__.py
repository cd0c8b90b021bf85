from wallslide.engine.movement.resolver import (
    MoveOutcome,
    MoveStatus,
    initial_pending_break,
    replay,
    resolve,
)

__all__ = ["MoveOutcome", "MoveStatus", "initial_pending_break", "replay", "resolve"]
