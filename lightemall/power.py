"""Power propagation: breadth-first search outward from the power station."""

import logging
from collections import deque
from typing import Set

from lightemall.game_board import Board, Direction

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def propagate_power(board: Board) -> Set[int]:
    """
    Recomputes every tile's powered flag from scratch.

    All tiles are switched off first. Power then flows from the station to a
    neighbor only when both tiles have a stub on their shared side.

    Args:
        board: Board to update in place

    Returns:
        Indices of the powered tiles
    """
    board.reset_power()

    visited: Set[int] = {board.station_index}
    queue: deque[int] = deque([board.station_index])

    while queue:
        index = queue.popleft()
        board.tiles[index].powered = True
        for direction in Direction:
            if not board.is_connected(index, direction):
                continue
            neighbor = board.neighbor_index(index, direction)
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)

    logger.debug("Powered %d of %d tiles", len(visited), len(board))
    return visited
