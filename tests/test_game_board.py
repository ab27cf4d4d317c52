#!/usr/bin/env python3
"""
Test suite for the tile and board model.

Covers:
1. Quarter-turn rotation mapping and the 4-cycle property
2. Tile equality (position, stubs, station; not powered)
3. Board construction, addressing and bounds
4. Two-sided stub matching
5. Scrambling and snapshots
"""

import dataclasses
import itertools
import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from lightemall.game_board import Board, Direction, Tile, TileView  # noqa: E402


def _stubs(tile):
    return (tile.up, tile.down, tile.left, tile.right)


def test_rotate_moves_top_stub_to_right():
    """A quarter turn sends top->right, right->bottom, bottom->left, left->top."""
    tile = Tile(row=0, col=0, up=True)
    tile.rotate()
    assert _stubs(tile) == (False, False, False, True), "Top stub should move to the right"
    tile.rotate()
    assert _stubs(tile) == (False, True, False, False), "Right stub should move to the bottom"
    tile.rotate()
    assert _stubs(tile) == (False, False, True, False), "Bottom stub should move to the left"
    tile.rotate()
    assert _stubs(tile) == (True, False, False, False), "Left stub should move to the top"


def test_rotation_is_a_four_cycle_for_every_stub_combination():
    """Rotating four times restores all 16 possible stub configurations."""
    for up, down, left, right in itertools.product([False, True], repeat=4):
        tile = Tile(row=1, col=2, up=up, down=down, left=left, right=right)
        original = _stubs(tile)
        for _ in range(4):
            tile.rotate()
        assert _stubs(tile) == original, f"4 rotations changed {original} into {_stubs(tile)}"


def test_rotation_preserves_stub_count():
    tile = Tile(row=0, col=0, up=True, left=True, right=True)
    for _ in range(3):
        tile.rotate()
        assert tile.stub_count() == 3


def test_four_stub_tile_is_unchanged_by_rotation():
    tile = Tile(row=2, col=2, up=True, down=True, left=True, right=True, has_station=True)
    before = Tile(row=2, col=2, up=True, down=True, left=True, right=True, has_station=True)
    tile.rotate()
    assert tile == before


def test_tile_equality_ignores_powered_flag():
    """Tiles compare by position, stubs and station flag only."""
    a = Tile(0, 0, True, True, True, True, True, powered=True)
    b = Tile(0, 0, True, True, True, True, True, powered=False)
    c = Tile(0, 0, False, True, True, True, False)
    d = Tile(1, 1, True, True, True, True, True)

    assert a == b, "Powered flag must not affect equality"
    assert b != c, "Different stubs must compare unequal"
    assert b != d, "Different positions must compare unequal"


def test_board_rejects_empty_dimensions():
    with pytest.raises(ValueError):
        Board(0, 5)
    with pytest.raises(ValueError):
        Board(5, 0)


def test_board_rejects_station_off_board():
    with pytest.raises(ValueError):
        Board(3, 3, station=(3, 0))


def test_board_places_exactly_one_station():
    board = Board(4, 3, station=(2, 1))
    stations = [tile for tile in board if tile.has_station]
    assert len(stations) == 1
    assert (stations[0].col, stations[0].row) == (2, 1)
    assert board.station_position() == (2, 1)


def test_indexing_round_trip_and_tile_positions():
    board = Board(4, 3)
    assert len(board) == 12
    for row in range(3):
        for col in range(4):
            index = board.index_of(col, row)
            assert board.position_of(index) == (col, row)
            tile = board.tile_at(col, row)
            assert (tile.col, tile.row) == (col, row)


def test_valid_coordinate_bounds():
    board = Board(3, 3)
    assert board.valid_coordinate(0, 0)
    assert board.valid_coordinate(1, 0)
    assert board.valid_coordinate(1, 2)
    assert board.valid_coordinate(2, 0)
    assert not board.valid_coordinate(3, 3)
    assert not board.valid_coordinate(-1, 0)


def test_tile_at_off_board_raises_index_error():
    board = Board(2, 2)
    with pytest.raises(IndexError):
        board.tile_at(2, 0)


def test_neighbor_index_stops_at_edges():
    board = Board(2, 2)
    corner = board.index_of(0, 0)
    assert board.neighbor_index(corner, Direction.UP) is None
    assert board.neighbor_index(corner, Direction.LEFT) is None
    assert board.neighbor_index(corner, Direction.RIGHT) == board.index_of(1, 0)
    assert board.neighbor_index(corner, Direction.DOWN) == board.index_of(0, 1)


def test_connect_sets_matching_stubs():
    board = Board(2, 2)
    board.connect(board.index_of(0, 0), board.index_of(0, 1))
    assert board.tile_at(0, 0).down
    assert board.tile_at(0, 1).up
    assert board.is_connected(board.index_of(0, 0), Direction.DOWN)
    assert board.is_connected(board.index_of(0, 1), Direction.UP)


def test_connect_rejects_non_adjacent_tiles():
    board = Board(3, 3)
    with pytest.raises(ValueError):
        board.connect(board.index_of(0, 0), board.index_of(1, 1))


def test_one_sided_stub_does_not_connect():
    """Both tiles need a stub on the shared side."""
    board = Board(2, 1)
    board.tile_at(0, 0).right = True
    assert not board.is_connected(0, Direction.RIGHT)
    board.tile_at(1, 0).left = True
    assert board.is_connected(0, Direction.RIGHT)


def test_stub_facing_board_edge_does_not_connect():
    board = Board(1, 1)
    board.tile_at(0, 0).up = True
    assert not board.is_connected(0, Direction.UP)


def test_move_station_moves_flag():
    board = Board(3, 1)
    board.move_station(2)
    assert not board.tile_at(0, 0).has_station
    assert board.tile_at(2, 0).has_station
    assert board.station.col == 2


def test_powered_mask_shape_and_all_powered():
    board = Board(3, 2)
    mask = board.powered_mask()
    assert mask.shape == (2, 3)
    assert not mask.any()
    assert not board.all_powered()

    for tile in board:
        tile.powered = True
    assert board.all_powered()

    board.tile_at(2, 1).powered = False
    assert board.powered_mask()[1, 2] == False  # noqa: E712
    assert not board.all_powered()


def test_reset_power_clears_flags():
    board = Board(2, 2)
    for tile in board:
        tile.powered = True
    board.reset_power()
    assert not any(tile.powered for tile in board)


def test_scramble_keeps_each_tile_stub_count():
    board = Board(4, 4)
    rng = np.random.default_rng(7)
    for index, tile in enumerate(board):
        tile.up = index % 2 == 0
        tile.right = index % 3 == 0
    counts = [tile.stub_count() for tile in board]

    board.scramble(rng)

    assert [tile.stub_count() for tile in board] == counts


def test_scramble_is_reproducible_for_a_seed():
    first, second = Board(3, 3), Board(3, 3)
    for board in (first, second):
        for tile in board:
            tile.up = True
        board.scramble(np.random.default_rng(11))
    assert first.snapshot() == second.snapshot()


def test_snapshot_is_row_major_read_only_views():
    board = Board(2, 2)
    board.tile_at(1, 0).right = True
    snapshot = board.snapshot()

    assert [(view.col, view.row) for view in snapshot] == [(0, 0), (1, 0), (0, 1), (1, 1)]
    assert all(isinstance(view, TileView) for view in snapshot)
    assert snapshot[1].right

    with pytest.raises(dataclasses.FrozenInstanceError):
        snapshot[0].up = True


def test_direction_helpers():
    assert Direction("up") is Direction.UP
    assert Direction.LEFT.opposite is Direction.RIGHT
    assert Direction.DOWN.delta == (0, 1)
