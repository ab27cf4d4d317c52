"""Validation helpers for analyzing the wire graph of a board."""

from collections import deque
from typing import Set

# Use an absolute import so the helpers work whether ``utils`` is imported
# as part of the package or from a test with the repository root on sys.path.
from lightemall.game_board import Board, Direction

# Only the two "forward" sides, so each matched pair is counted once
_FORWARD = (Direction.RIGHT, Direction.DOWN)


def count_connections(board: Board) -> int:
    """Number of adjacent tile pairs with matching stubs on their shared side."""
    return sum(
        1
        for index in range(len(board))
        for direction in _FORWARD
        if board.is_connected(index, direction)
    )


def reachable_from(board: Board, start: int) -> Set[int]:
    """Tiles reachable from ``start`` over matched stubs (ignores powered flags)."""
    seen: Set[int] = {start}
    queue: deque[int] = deque([start])
    while queue:
        index = queue.popleft()
        for direction in Direction:
            if not board.is_connected(index, direction):
                continue
            neighbor = board.neighbor_index(index, direction)
            if neighbor not in seen:
                seen.add(neighbor)
                queue.append(neighbor)
    return seen


def is_fully_connected(board: Board) -> bool:
    return len(reachable_from(board, 0)) == len(board)


def is_spanning_tree(board: Board) -> bool:
    """
    Checks that the wires form a tree over every tile.

    A connected graph on N tiles with exactly N - 1 connections has no cycles.
    """
    return is_fully_connected(board) and count_connections(board) == len(board) - 1


def has_dangling_stubs(board: Board) -> bool:
    """True if any stub faces the board edge or a neighbor without the opposite stub."""
    return any(
        tile.has_stub(direction) and not board.is_connected(index, direction)
        for index, tile in enumerate(board.tiles)
        for direction in Direction
    )
