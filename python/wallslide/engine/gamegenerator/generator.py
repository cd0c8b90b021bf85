"""Generates puzzle maps with an exact shortest-solution length."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Iterator

from wallslide.engine.gamesolver import Solver
from wallslide.models.gamemap import SLIDE_KINDS, Cell, GameMap, ObstacleKind

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 15
DEFAULT_HEIGHT = 15
DEFAULT_MAX_ATTEMPTS = 10_000
DEFAULT_MAX_BATCH_MOVES = 15

# Random probes before falling back to a row-major scan for a free cell.
_MAX_POSITION_PROBES = 1000


@dataclass(frozen=True)
class GenerationExhausted:
    """Returned when no candidate matched the target within the budget."""

    target_moves: int
    seed: int
    attempts: int
    reason: str = "max attempts reached"


@dataclass(frozen=True)
class AttemptReport:
    """Outcome of one generate-and-solve attempt."""

    attempt: int
    seed: int
    solvable: bool
    min_moves: int
    game_map: GameMap | None = None

    @property
    def accepted(self) -> bool:
        return self.game_map is not None


@dataclass
class BatchResult:
    maps: list[GameMap] = field(default_factory=list)
    failures: list[GenerationExhausted] = field(default_factory=list)


class GameGenerator:
    """Creates maps by random placement, keeping only exact-target layouts."""

    @staticmethod
    def generate(
        target_moves: int,
        seed: int | None = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        time_budget: float | None = None,
    ) -> GameMap | GenerationExhausted:
        """Return a map whose shortest solution is exactly *target_moves* long.

        The returned map carries its optimal path and the seed used, so the
        same call with that seed reproduces it.  When the attempt or time
        budget runs out a :class:`GenerationExhausted` is returned instead.
        """
        used_seed = GameGenerator._pick_seed(seed)
        attempts = 0
        started = time.monotonic()
        for report in GameGenerator.attempts(target_moves, used_seed, max_attempts,
                                             width, height):
            attempts = report.attempt
            if report.accepted:
                logger.info(
                    f"Generated map with {target_moves} moves on attempt "
                    f"{attempts} (seed: {used_seed})"
                )
                return report.game_map
            if time_budget is not None and time.monotonic() - started > time_budget:
                logger.warning(
                    f"Time budget of {time_budget:.1f}s spent after {attempts} "
                    f"attempts for {target_moves} moves (seed: {used_seed})"
                )
                return GenerationExhausted(target_moves, used_seed, attempts,
                                           "time budget spent")

        logger.warning(
            f"Failed after {attempts} attempts to generate a map with "
            f"{target_moves} moves (seed: {used_seed})"
        )
        return GenerationExhausted(target_moves, used_seed, attempts)

    @staticmethod
    def attempts(
        target_moves: int,
        seed: int,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
    ) -> Iterator[AttemptReport]:
        """Yield one report per attempt; stops after an accepted map.

        A host that must stay responsive can iterate this itself and do other
        work between attempts.  All attempts share one RNG stream seeded from
        *seed*.
        """
        GameGenerator._check_arguments(target_moves, max_attempts, width, height)
        rng = random.Random(seed)
        for attempt in range(1, max_attempts + 1):
            candidate = GameGenerator._candidate(rng, target_moves, width, height)
            result = Solver.solve(candidate)
            if result.solvable and result.min_moves == target_moves:
                yield AttemptReport(attempt, seed, True, result.min_moves,
                                    candidate.with_solution(result.optimal_path, seed))
                return
            if not result.solvable:
                logger.debug(f"Attempt {attempt}: map is unsolvable")
            else:
                logger.debug(
                    f"Attempt {attempt}: move count mismatch "
                    f"(target: {target_moves}, actual: {result.min_moves})"
                )
            yield AttemptReport(attempt, seed, result.solvable, result.min_moves)

    @staticmethod
    def generate_batch(
        count: int,
        min_moves: int,
        max_moves: int = DEFAULT_MAX_BATCH_MOVES,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        rng: random.Random | None = None,
    ) -> BatchResult:
        """Generate *count* maps with random targets in ``[min_moves, max_moves]``.

        Each map gets its own fresh seed; *rng* only drives the choice of
        targets and seeds.
        """
        if count < 1:
            raise ValueError(f"count must be at least 1, got {count}.")
        if not 1 <= min_moves <= max_moves:
            raise ValueError(f"Invalid move range [{min_moves}, {max_moves}].")
        picker = rng or random.Random()
        batch = BatchResult()
        for i in range(count):
            target = picker.randint(min_moves, max_moves)
            result = GameGenerator.generate(target, picker.randrange(2**31),
                                            max_attempts, width, height)
            if isinstance(result, GenerationExhausted):
                batch.failures.append(result)
            else:
                batch.maps.append(result)
            logger.info(f"Batch {i + 1}/{count}: target {target} moves, "
                        f"{len(batch.maps)} generated so far")
        return batch

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _pick_seed(seed: int | None) -> int:
        if seed is not None:
            return seed
        return time.time_ns() & 0x7FFFFFFF

    @staticmethod
    def _check_arguments(target_moves: int, max_attempts: int,
                         width: int, height: int) -> None:
        if target_moves < 1:
            raise ValueError(f"target_moves must be at least 1, got {target_moves}.")
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}.")
        if width < 1 or height < 1 or width * height < 2:
            raise ValueError(f"A {width}x{height} board cannot hold a player and a goal.")

    @staticmethod
    def _candidate(rng: random.Random, target_moves: int,
                   width: int, height: int) -> GameMap:
        occupied: set[Cell] = set()
        player = GameGenerator._random_free_cell(rng, width, height, occupied)
        occupied.add(player)
        goal = GameGenerator._place_goal(rng, width, height, player, target_moves, occupied)
        occupied.add(goal)

        obstacles: dict[Cell, ObstacleKind] = {goal: ObstacleKind.GOAL}
        wall_count = round(target_moves * rng.uniform(0.5, 1.5))
        breakable_count = GameGenerator._breakable_count(rng, target_moves)
        slide_count = GameGenerator._slide_count(rng, target_moves)

        for _ in range(wall_count):
            if not GameGenerator._place(rng, width, height, occupied, obstacles,
                                        ObstacleKind.WALL):
                break
        for _ in range(breakable_count):
            if not GameGenerator._place(rng, width, height, occupied, obstacles,
                                        ObstacleKind.BREAKABLE_WALL):
                break
        for _ in range(slide_count):
            kind = SLIDE_KINDS[rng.randrange(len(SLIDE_KINDS))]
            if not GameGenerator._place(rng, width, height, occupied, obstacles, kind):
                break

        return GameMap(width=width, height=height, player_start=player,
                       obstacles=obstacles)

    @staticmethod
    def _place(rng: random.Random, width: int, height: int, occupied: set[Cell],
               obstacles: dict[Cell, ObstacleKind], kind: ObstacleKind) -> bool:
        # keep at least one cell free
        if len(occupied) >= width * height - 1:
            return False
        cell = GameGenerator._random_free_cell(rng, width, height, occupied)
        obstacles[cell] = kind
        occupied.add(cell)
        return True

    @staticmethod
    def _place_goal(rng: random.Random, width: int, height: int, player: Cell,
                    target_moves: int, occupied: set[Cell]) -> Cell:
        min_distance = max(2, target_moves // 2)
        max_distance = min(width + height - 2, target_moves * 2)
        px, py = player
        candidates = [
            (x, y)
            for y in range(height)
            for x in range(width)
            if (x, y) not in occupied
            and min_distance <= abs(x - px) + abs(y - py) <= max_distance
        ]
        if not candidates:
            return GameGenerator._random_free_cell(rng, width, height, occupied)
        return candidates[rng.randrange(len(candidates))]

    @staticmethod
    def _breakable_count(rng: random.Random, target_moves: int) -> int:
        if target_moves < 3:
            return 0
        if target_moves < 6:
            return rng.randrange(0, 2)
        if target_moves < 10:
            return rng.randrange(0, 3)
        return rng.randrange(1, 4)

    @staticmethod
    def _slide_count(rng: random.Random, target_moves: int) -> int:
        if target_moves < 4:
            return 0
        if target_moves < 8:
            return rng.randrange(0, 2)
        if target_moves < 12:
            return rng.randrange(0, 3)
        return rng.randrange(1, 4)

    @staticmethod
    def _random_free_cell(rng: random.Random, width: int, height: int,
                          occupied: set[Cell]) -> Cell:
        for _ in range(_MAX_POSITION_PROBES):
            cell = (rng.randrange(width), rng.randrange(height))
            if cell not in occupied:
                return cell
        for y in range(height):
            for x in range(width):
                if (x, y) not in occupied:
                    return x, y
        raise ValueError(f"No free cell left on the {width}x{height} board.")
