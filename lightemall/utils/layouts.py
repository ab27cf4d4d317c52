"""
Board layouts: generators for the solved wiring of a new puzzle.

Each layout takes a bare board plus a random source and sets the stubs of the
solved configuration. The controller scrambles the rotations afterwards.

Available layouts:
- ``random``: Kruskal spanning tree with random edge weights
- ``fixed``: hand-drawn comb; every column is a vertical line and the middle
  row is a horizontal line joining them
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Tuple

import numpy as np

from lightemall.game_board import Board, Direction
from lightemall.spanning_tree import SpanningTreeError, build_spanning_tree
from lightemall.utils.validation import count_connections, is_spanning_tree

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

LayoutFn = Callable[[Board, np.random.Generator], None]


def random_layout(board: Board, rng: np.random.Generator):
    build_spanning_tree(board, rng)


def fixed_layout(board: Board, rng: np.random.Generator):
    """Vertical line in every column, one horizontal line through the middle row."""
    _ = rng  # deterministic layout
    middle = board.height // 2
    for tile in board:
        tile.set_stub(Direction.UP, tile.row > 0)
        tile.set_stub(Direction.DOWN, tile.row < board.height - 1)
        tile.set_stub(Direction.LEFT, tile.row == middle and tile.col != 0)
        tile.set_stub(Direction.RIGHT, tile.row == middle and tile.col != board.width - 1)


def top_left_station(width: int, height: int) -> Tuple[int, int]:
    return (0, 0)


def center_station(width: int, height: int) -> Tuple[int, int]:
    return (width // 2, height // 2)


@dataclass(frozen=True)
class LayoutInfo:
    """
    Registry entry for a layout.

    Attributes:
        build: Sets the solved stubs on a bare board
        default_station: Maps (width, height) to the station's starting (col, row)
    """
    build: LayoutFn
    default_station: Callable[[int, int], Tuple[int, int]]


LAYOUTS: Dict[str, LayoutInfo] = {
    'random': LayoutInfo(random_layout, top_left_station),
    'fixed': LayoutInfo(fixed_layout, center_station),
}


def get_layout(name: str) -> LayoutInfo:
    """
    Looks up a layout by name.

    Raises:
        ValueError: If no layout has that name
    """
    try:
        return LAYOUTS[name]
    except KeyError:
        raise ValueError(
            f"Unknown layout {name!r} (choose from {', '.join(sorted(LAYOUTS))})"
        ) from None


def apply_layout(board: Board, name: str, rng: np.random.Generator):
    """
    Wires a bare board with the named layout and checks the result is a tree.

    Raises:
        ValueError: If the layout name is unknown
        SpanningTreeError: If the wiring does not span the board as a tree
    """
    get_layout(name).build(board, rng)
    if not is_spanning_tree(board):
        raise SpanningTreeError(
            f"Layout {name!r} produced {count_connections(board)} connections on "
            f"{len(board)} tiles without forming a spanning tree"
        )
    logger.debug("Applied %s layout to %dx%d board", name, board.width, board.height)
