"""
Random spanning-tree generation for LightEmAll boards.

Candidate edges join every pair of orthogonally adjacent tiles and carry a
random weight. Kruskal's algorithm walks the edges in ascending weight order
and keeps each edge whose endpoints are still in different union-find classes,
wiring the two tiles together as it goes. The result is a board whose wires
form a tree touching every tile: fully connected, no cycles.
"""

import logging
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from lightemall.game_board import Board

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

MAX_EDGE_WEIGHT = 40

# (col, row) offsets in generation order
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = ((-1, 0), (0, -1), (0, 1), (1, 0))


class SpanningTreeError(RuntimeError):
    """Raised when tree construction cannot reach every tile."""


@dataclass(frozen=True)
class Edge:
    """Candidate link between two adjacent tiles, by tile index."""
    source: int
    target: int
    weight: int


class UnionFind:
    """
    Disjoint sets over tile indices.

    ``union(a, b)`` always points a's root at b's root. Parents are stored by
    index, so stubs added to tiles during construction never disturb lookups.
    """

    def __init__(self, size: int):
        self.parent: List[int] = list(range(size))

    def find(self, item: int) -> int:
        """Returns the root of an item's class (with path compression)."""
        if self.parent[item] != item:
            self.parent[item] = self.find(self.parent[item])
        return self.parent[item]

    def union(self, a: int, b: int):
        self.parent[self.find(a)] = self.find(b)

    def connected(self, a: int, b: int) -> bool:
        return self.find(a) == self.find(b)


def generate_edges(board: Board, rng: np.random.Generator,
                   max_weight: int = MAX_EDGE_WEIGHT) -> List[Edge]:
    """
    Enumerates every ordered adjacent pair on the board with a random weight.

    Pairs are produced column by column, top to bottom, trying neighbors in
    ``NEIGHBOR_OFFSETS`` order. Each pair gets an independent weight in
    ``[0, max_weight)``.

    Args:
        board: Board supplying the dimensions
        rng: Random source; advanced by one draw per edge
        max_weight: Exclusive upper bound for weights

    Returns:
        Edges sorted by ascending weight, ties in generation order
    """
    pairs: List[Tuple[int, int]] = []
    for col in range(board.width):
        for row in range(board.height):
            for d_col, d_row in NEIGHBOR_OFFSETS:
                n_col, n_row = col + d_col, row + d_row
                if board.valid_coordinate(n_col, n_row):
                    pairs.append((board.index_of(col, row), board.index_of(n_col, n_row)))

    weights = rng.integers(0, max_weight, size=len(pairs))
    edges = [Edge(source, target, int(weight)) for (source, target), weight in zip(pairs, weights)]
    edges.sort(key=lambda edge: edge.weight)
    return edges


def build_spanning_tree(board: Board, rng: np.random.Generator) -> List[Edge]:
    """
    Wires the board into a random spanning tree (Kruskal).

    Mutates the stub flags of ``board``; existing stubs are left in place, so
    callers normally start from a bare board.

    Args:
        board: Board to wire
        rng: Random source for edge weights

    Returns:
        The accepted edges, ``len(board) - 1`` of them

    Raises:
        SpanningTreeError: If the candidate edges run out before every tile
            is joined
    """
    required = len(board) - 1
    classes = UnionFind(len(board))
    tree: List[Edge] = []

    for edge in generate_edges(board, rng):
        if len(tree) == required:
            break
        if classes.connected(edge.source, edge.target):
            continue
        tree.append(edge)
        classes.union(edge.source, edge.target)
        board.connect(edge.source, edge.target)

    if len(tree) < required:
        raise SpanningTreeError(
            f"Spanning tree joined {len(tree) + 1} of {len(board)} tiles"
        )

    logger.debug("Built spanning tree with %d edges on a %dx%d board",
                 len(tree), board.width, board.height)
    return tree
