#!/usr/bin/env python3
"""
Test suite for power propagation.

A tile must be powered exactly when a path of mutually matching stubs joins
it to the station.
"""

import os
import sys

import numpy as np

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from lightemall.game_board import Board  # noqa: E402
from lightemall.power import propagate_power  # noqa: E402
from lightemall.spanning_tree import build_spanning_tree  # noqa: E402
from lightemall.utils.layouts import fixed_layout  # noqa: E402
from lightemall.utils.validation import reachable_from  # noqa: E402


def _powered_positions(board):
    return {(tile.col, tile.row) for tile in board if tile.powered}


def test_station_without_stubs_powers_only_itself():
    board = Board(3, 3, station=(1, 1))
    powered = propagate_power(board)
    assert powered == {board.station_index}
    assert _powered_positions(board) == {(1, 1)}


def test_power_flows_along_matched_stubs():
    board = Board(3, 1)
    board.connect(0, 1)
    board.connect(1, 2)
    propagate_power(board)
    assert board.all_powered()


def test_one_sided_stub_blocks_power():
    """A stub only conducts if the neighbor has the opposite stub too."""
    board = Board(3, 1)
    board.connect(0, 1)
    board.tile_at(1, 0).right = True
    propagate_power(board)
    assert _powered_positions(board) == {(0, 0), (1, 0)}


def test_fixed_layout_center_station_powers_everything():
    """The unscrambled comb board is fully lit from its centre."""
    board = Board(5, 5, station=(2, 2))
    fixed_layout(board, np.random.default_rng(0))
    propagate_power(board)
    assert board.all_powered()


def test_rotated_tile_cuts_power_to_its_branch():
    print("\n=== Rotated Tile Cuts Power ===")
    board = Board(5, 5, station=(2, 2))
    fixed_layout(board, np.random.default_rng(0))

    # (2, 1) is a vertical segment; a quarter turn makes it horizontal
    board.tile_at(2, 1).rotate()
    propagate_power(board)

    unpowered = {(tile.col, tile.row) for tile in board if not tile.powered}
    assert unpowered == {(2, 0), (2, 1)}, f"Unexpected unpowered tiles: {unpowered}"
    print("✅ PASSED: Only the cut branch lost power")


def test_propagation_resets_stale_flags():
    """Each run starts from an all-off board."""
    board = Board(2, 1)
    for tile in board:
        tile.powered = True
    propagate_power(board)
    assert _powered_positions(board) == {(0, 0)}


def test_powered_iff_reachable_on_scrambled_boards():
    """BFS result matches an independent reachability check from the station."""
    for seed in range(20):
        rng = np.random.default_rng(seed)
        board = Board(6, 5, station=(int(rng.integers(0, 6)), int(rng.integers(0, 5))))
        build_spanning_tree(board, rng)
        board.scramble(rng)

        powered = propagate_power(board)
        expected = reachable_from(board, board.station_index)

        assert powered == expected, f"seed {seed}: BFS disagrees with reachability"
        for index, tile in enumerate(board.tiles):
            assert tile.powered == (index in expected)


def test_station_is_always_powered():
    for seed in range(5):
        rng = np.random.default_rng(seed)
        board = Board(4, 4, station=(3, 3))
        build_spanning_tree(board, rng)
        board.scramble(rng)
        propagate_power(board)
        assert board.station.powered
