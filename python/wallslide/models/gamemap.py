"""Map model for the wall-slide puzzle."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import IntEnum
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Sequence

Cell = tuple[int, int]

# ``Type`` code of the player record in the persisted map format.
PLAYER_TYPE = 0


class MalformedMapError(ValueError):
    """Raised when a map description violates the board invariants."""


class Direction(IntEnum):
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    @property
    def delta(self) -> Cell:
        return _DELTAS[self]

    def step(self, cell: Cell) -> Cell:
        dx, dy = _DELTAS[self]
        return cell[0] + dx, cell[1] + dy


# y grows upward: UP moves towards higher rows.
_DELTAS: dict[Direction, Cell] = {
    Direction.UP: (0, 1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, -1),
    Direction.LEFT: (-1, 0),
}


class ObstacleKind(IntEnum):
    """Obstacle types; values are the ``Type`` codes of the map file format."""

    WALL = 1
    GOAL = 2
    BREAKABLE_WALL = 3
    SLIDE_UP = 10
    SLIDE_RIGHT = 11
    SLIDE_DOWN = 12
    SLIDE_LEFT = 13

    @property
    def is_slide(self) -> bool:
        return self in _SLIDE_DIRECTIONS

    @property
    def slide_direction(self) -> Direction | None:
        """Fixed redirect direction of a slide tile, ``None`` otherwise."""
        return _SLIDE_DIRECTIONS.get(self)


_SLIDE_DIRECTIONS: dict[ObstacleKind, Direction] = {
    ObstacleKind.SLIDE_UP: Direction.UP,
    ObstacleKind.SLIDE_RIGHT: Direction.RIGHT,
    ObstacleKind.SLIDE_DOWN: Direction.DOWN,
    ObstacleKind.SLIDE_LEFT: Direction.LEFT,
}

SLIDE_KINDS: tuple[ObstacleKind, ...] = tuple(_SLIDE_DIRECTIONS)

# ASCII picture symbols used by ``from_rows`` / ``to_rows``.
_SYMBOLS: dict[ObstacleKind, str] = {
    ObstacleKind.WALL: "#",
    ObstacleKind.GOAL: "G",
    ObstacleKind.BREAKABLE_WALL: "B",
    ObstacleKind.SLIDE_UP: "^",
    ObstacleKind.SLIDE_RIGHT: ">",
    ObstacleKind.SLIDE_DOWN: "v",
    ObstacleKind.SLIDE_LEFT: "<",
}
_KINDS_BY_SYMBOL = {s: k for k, s in _SYMBOLS.items()}
PLAYER_SYMBOL = "P"
EMPTY_SYMBOL = "."


@dataclass(frozen=True)
class GameMap:
    """Immutable description of a puzzle board.

    ``obstacles`` maps each occupied cell to its kind; the player start is
    never an obstacle cell.  The mapping is copied on construction and
    exposed read-only.  Broken walls are not recorded here: callers
    carry them separately so the same map can be replayed any number of
    times.
    """

    width: int
    height: int
    player_start: Cell
    obstacles: Mapping[Cell, ObstacleKind] = field(hash=False)
    optimal_path: tuple[Direction, ...] | None = None
    seed: int | None = None
    _goal: Cell = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "obstacles", MappingProxyType(dict(self.obstacles)))
        if self.width <= 0 or self.height <= 0:
            raise MalformedMapError(
                f"Map size must be positive, got {self.width}x{self.height}."
            )
        if not self.in_bounds(self.player_start):
            raise MalformedMapError(
                f"Player start {self.player_start} lies outside the "
                f"{self.width}x{self.height} board."
            )
        if self.player_start in self.obstacles:
            raise MalformedMapError(
                f"Player start {self.player_start} is occupied by "
                f"{self.obstacles[self.player_start].name}."
            )
        goals: list[Cell] = []
        for cell, kind in self.obstacles.items():
            if not self.in_bounds(cell):
                raise MalformedMapError(
                    f"{kind.name} at {cell} lies outside the "
                    f"{self.width}x{self.height} board."
                )
            if kind is ObstacleKind.GOAL:
                goals.append(cell)
        if len(goals) != 1:
            raise MalformedMapError(f"Expected exactly one goal, found {len(goals)}.")
        object.__setattr__(self, "_goal", goals[0])

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_rows(cls, rows: Sequence[str], **kwargs: Any) -> GameMap:
        """Create a map from an ASCII picture, top row first.

        The first string is the highest ``y``.  Example::

            GameMap.from_rows([
                "..#",
                "P.G",
            ])
        """
        if not rows:
            raise MalformedMapError("Map picture has no rows.")
        width = len(rows[0])
        height = len(rows)
        player: Cell | None = None
        obstacles: dict[Cell, ObstacleKind] = {}
        for r, row in enumerate(rows):
            if len(row) != width:
                raise MalformedMapError(
                    f"Row {r} has {len(row)} cells, expected {width}."
                )
            y = height - 1 - r
            for x, ch in enumerate(row):
                if ch == EMPTY_SYMBOL:
                    continue
                if ch == PLAYER_SYMBOL:
                    if player is not None:
                        raise MalformedMapError("Map picture has more than one player.")
                    player = (x, y)
                elif ch in _KINDS_BY_SYMBOL:
                    obstacles[(x, y)] = _KINDS_BY_SYMBOL[ch]
                else:
                    raise MalformedMapError(f"Unknown map symbol {ch!r} at ({x}, {y}).")
        if player is None:
            raise MalformedMapError("Map picture has no player.")
        return cls(width=width, height=height, player_start=player,
                   obstacles=obstacles, **kwargs)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GameMap:
        """Decode the persisted map format.

        ``MapObjects`` holds ``{"Type", "X", "Y"}`` records where type ``0`` is
        the player and the remaining codes are :class:`ObstacleKind` values.
        """
        try:
            size = data["MapSize"]
            width, height = int(size["x"]), int(size["y"])
            records = data["MapObjects"]
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedMapError(f"Incomplete map description: {e}") from e

        player: Cell | None = None
        obstacles: dict[Cell, ObstacleKind] = {}
        for record in records:
            try:
                code, cell = int(record["Type"]), (int(record["X"]), int(record["Y"]))
            except (KeyError, TypeError, ValueError) as e:
                raise MalformedMapError(f"Bad map object {record!r}: {e}") from e
            if code == PLAYER_TYPE:
                if player is not None:
                    raise MalformedMapError("Map has more than one player.")
                player = cell
                continue
            try:
                kind = ObstacleKind(code)
            except ValueError:
                raise MalformedMapError(f"Unknown object type {code} at {cell}.") from None
            if cell in obstacles:
                raise MalformedMapError(f"Cell {cell} is occupied twice.")
            obstacles[cell] = kind
        if player is None:
            raise MalformedMapError("Map has no player.")

        path = data.get("OptimalPath") or None
        try:
            optimal_path = tuple(Direction(d) for d in path) if path else None
        except (TypeError, ValueError) as e:
            raise MalformedMapError(f"Bad optimal path {path!r}: {e}") from e
        seed = data.get("Seed")
        try:
            seed = int(seed) if seed is not None else None
        except (TypeError, ValueError) as e:
            raise MalformedMapError(f"Bad seed {seed!r}: {e}") from e
        return cls(
            width=width,
            height=height,
            player_start=player,
            obstacles=obstacles,
            optimal_path=optimal_path,
            seed=seed,
        )

    def to_dict(self) -> dict[str, Any]:
        objects = [{"Type": PLAYER_TYPE, "X": self.player_start[0], "Y": self.player_start[1]}]
        for (x, y), kind in sorted(self.obstacles.items(), key=lambda item: (item[0][1], item[0][0])):
            objects.append({"Type": int(kind), "X": x, "Y": y})
        return {
            "MapSize": {"x": self.width, "y": self.height},
            "OptimalPath": [int(d) for d in self.optimal_path or ()],
            "MapObjects": objects,
            "Seed": self.seed if self.seed is not None else 0,
        }

    def with_solution(self, path: Iterable[Direction], seed: int | None = None) -> GameMap:
        """Return a copy carrying *path* (and *seed*, when given)."""
        return replace(
            self,
            obstacles=dict(self.obstacles),
            optimal_path=tuple(path),
            seed=self.seed if seed is None else seed,
        )

    # -- queries --------------------------------------------------------------

    @property
    def goal(self) -> Cell:
        return self._goal

    @property
    def min_moves(self) -> int | None:
        """Length of the stored optimal path, if one is stored."""
        return None if self.optimal_path is None else len(self.optimal_path)

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def obstacle_at(self, cell: Cell) -> ObstacleKind | None:
        return self.obstacles.get(cell)

    def breakable_walls(self) -> list[Cell]:
        return sorted(c for c, k in self.obstacles.items() if k is ObstacleKind.BREAKABLE_WALL)

    def free_cells(self) -> list[Cell]:
        """Cells holding neither an obstacle nor the player, row-major."""
        return [
            (x, y)
            for y in range(self.height)
            for x in range(self.width)
            if (x, y) not in self.obstacles and (x, y) != self.player_start
        ]

    def to_rows(self, position: Cell | None = None,
                broken: Iterable[Cell] = ()) -> list[str]:
        """Return the ASCII picture, top row first.

        *position* draws the mover somewhere other than the start; cells in
        *broken* are drawn empty.
        """
        mover = self.player_start if position is None else position
        gone = set(broken)
        rows: list[str] = []
        for y in range(self.height - 1, -1, -1):
            chars: list[str] = []
            for x in range(self.width):
                kind = self.obstacles.get((x, y))
                if (x, y) == mover:
                    chars.append(PLAYER_SYMBOL)
                elif kind is None or (x, y) in gone:
                    chars.append(EMPTY_SYMBOL)
                else:
                    chars.append(_SYMBOLS[kind])
            rows.append("".join(chars))
        return rows
