"""Map model, file format and store tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from wallslide.models import GameMap, MalformedMapError, MapStore
from wallslide.models.gamemap import Direction, ObstacleKind

# Format written by the level editor: type 0 is the player.
EDITOR_MAP = {
    "MapSize": {"x": 4, "y": 3},
    "OptimalPath": [0, 1],
    "MapObjects": [
        {"Type": 0, "X": 0, "Y": 0},
        {"Type": 2, "X": 3, "Y": 2},
        {"Type": 1, "X": 0, "Y": 2},
        {"Type": 3, "X": 2, "Y": 1},
        {"Type": 11, "X": 1, "Y": 1},
    ],
    "Seed": 1234,
}


# -- construction -------------------------------------------------------------


def test_from_rows_uses_bottom_left_origin() -> None:
    game_map = GameMap.from_rows([
        "..G",
        "P#.",
    ])

    assert game_map.player_start == (0, 0)
    assert game_map.goal == (2, 1)
    assert game_map.obstacle_at((1, 0)) is ObstacleKind.WALL
    assert (game_map.width, game_map.height) == (3, 2)


def test_rows_round_trip() -> None:
    rows = [
        "#.^..",
        "B.>vG",
        "P..<.",
    ]

    assert GameMap.from_rows(rows).to_rows() == rows


def test_to_rows_draws_position_and_broken_walls() -> None:
    game_map = GameMap.from_rows(["PB.G"])

    assert game_map.to_rows(position=(2, 0), broken={(1, 0)}) == ["..PG"]


def test_slide_kinds_know_their_direction() -> None:
    assert ObstacleKind.SLIDE_LEFT.slide_direction is Direction.LEFT
    assert ObstacleKind.SLIDE_UP.is_slide
    assert ObstacleKind.WALL.slide_direction is None


def test_free_cells_exclude_player_and_obstacles() -> None:
    game_map = GameMap.from_rows(["P#.G"])

    assert game_map.free_cells() == [(2, 0)]


# -- invariants ---------------------------------------------------------------


@pytest.mark.parametrize("rows", [
    ["P..."],
    ["P.GG"],
    ["..#G"],
    ["P.G", ".."],
    ["P.X.G"],
])
def test_malformed_pictures(rows: list[str]) -> None:
    with pytest.raises(MalformedMapError):
        GameMap.from_rows(rows)


def test_player_on_obstacle_is_rejected() -> None:
    with pytest.raises(MalformedMapError):
        GameMap(3, 1, (0, 0), {(0, 0): ObstacleKind.WALL, (2, 0): ObstacleKind.GOAL})


def test_out_of_range_coordinates_are_rejected() -> None:
    with pytest.raises(MalformedMapError):
        GameMap(3, 1, (5, 0), {(2, 0): ObstacleKind.GOAL})
    with pytest.raises(MalformedMapError):
        GameMap(3, 1, (0, 0), {(3, 0): ObstacleKind.GOAL})


def test_obstacles_are_copied_and_read_only() -> None:
    source = {(2, 0): ObstacleKind.GOAL}
    game_map = GameMap(3, 1, (0, 0), source)

    source[(0, 0)] = ObstacleKind.WALL
    del source[(2, 0)]

    assert game_map.obstacle_at((2, 0)) is ObstacleKind.GOAL
    assert game_map.obstacle_at((0, 0)) is None
    with pytest.raises(TypeError):
        game_map.obstacles[(1, 0)] = ObstacleKind.WALL  # type: ignore[index]


def test_maps_are_hashable() -> None:
    first = GameMap.from_rows(["P.#G"])
    second = GameMap.from_rows(["P.#G"])

    assert first == second
    assert hash(first) == hash(second)
    assert len({first, second}) == 1


def test_malformed_map_is_a_value_error() -> None:
    assert issubclass(MalformedMapError, ValueError)


# -- file format --------------------------------------------------------------


def test_from_dict_reads_editor_format() -> None:
    game_map = GameMap.from_dict(EDITOR_MAP)

    assert game_map.player_start == (0, 0)
    assert game_map.goal == (3, 2)
    assert game_map.obstacle_at((1, 1)) is ObstacleKind.SLIDE_RIGHT
    assert game_map.optimal_path == (Direction.UP, Direction.RIGHT)
    assert game_map.min_moves == 2
    assert game_map.seed == 1234


def test_dict_round_trip() -> None:
    game_map = GameMap.from_dict(EDITOR_MAP)

    assert GameMap.from_dict(game_map.to_dict()) == game_map


def test_empty_optimal_path_means_unknown() -> None:
    data = dict(EDITOR_MAP, OptimalPath=[])

    assert GameMap.from_dict(data).min_moves is None


@pytest.mark.parametrize("objects", [
    [{"Type": 2, "X": 3, "Y": 2}],
    [{"Type": 0, "X": 0, "Y": 0}, {"Type": 0, "X": 1, "Y": 0}, {"Type": 2, "X": 3, "Y": 2}],
    [{"Type": 0, "X": 0, "Y": 0}, {"Type": 2, "X": 3, "Y": 2}, {"Type": 1, "X": 3, "Y": 2}],
    [{"Type": 0, "X": 0, "Y": 0}, {"Type": 2, "X": 3, "Y": 2}, {"Type": 7, "X": 1, "Y": 1}],
    [{"Type": 0, "X": 0}, {"Type": 2, "X": 3, "Y": 2}],
])
def test_malformed_records(objects: list[dict]) -> None:
    with pytest.raises(MalformedMapError):
        GameMap.from_dict(dict(EDITOR_MAP, MapObjects=objects))


@pytest.mark.parametrize("seed", ["abc", [1], {"x": 1}])
def test_bad_seed_is_malformed(seed: object) -> None:
    with pytest.raises(MalformedMapError):
        GameMap.from_dict(dict(EDITOR_MAP, Seed=seed))


def test_missing_size_is_malformed() -> None:
    with pytest.raises(MalformedMapError):
        GameMap.from_dict({"MapObjects": []})


# -- store --------------------------------------------------------------------


def test_store_save_and_load(tmp_path: Path) -> None:
    store = MapStore(tmp_path / "maps")
    game_map = GameMap.from_dict(EDITOR_MAP)

    path = store.save(game_map)

    assert path.name.startswith("Map_2moves_")
    assert store.list_maps() == [path]
    assert MapStore.load(path) == game_map


def test_store_skips_broken_files(tmp_path: Path) -> None:
    store = MapStore(tmp_path)
    good = store.save(GameMap.from_dict(EDITOR_MAP), name="good.json")
    (tmp_path / "bad.json").write_text("{not json")
    (tmp_path / "nogoal.json").write_text(json.dumps({
        "MapSize": {"x": 2, "y": 1},
        "MapObjects": [{"Type": 0, "X": 0, "Y": 0}],
    }))

    loaded = store.load_all()

    assert [p for p, _ in loaded] == [good]


def test_store_on_missing_directory(tmp_path: Path) -> None:
    assert MapStore(tmp_path / "nowhere").list_maps() == []
