"""
Board model for the LightEmAll puzzle.

This module provides the grid of wire tiles the player rotates. Each tile
carries four wire stubs (up, down, left, right), a power-station flag and a
derived powered flag.

ARENA MODEL:
- Tiles live in one flat list indexed by ``row * width + col``
- Every relation (edges, union-find parents, BFS visited sets) uses that index
- Stub flags mutate in place; the index never changes, so identity is stable
- The public API addresses tiles by (col, row) like the on-screen grid
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple

import numpy as np


# ============================================================
# Directions
# ============================================================
class Direction(Enum):
    """A side of a tile, valued by the name used for key events."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    @property
    def delta(self) -> Tuple[int, int]:
        """(col, row) offset of the neighbor on this side."""
        return _DELTAS[self]


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

_DELTAS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


# ============================================================
# Tile Models
# ============================================================
@dataclass
class Tile:
    """
    One cell of the board.

    Two tiles are equal when position, stubs and station flag match.
    ``powered`` is derived state and does not take part in comparisons.
    """
    row: int
    col: int
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False
    has_station: bool = False
    powered: bool = field(default=False, compare=False)

    def has_stub(self, direction: Direction) -> bool:
        return getattr(self, direction.value)

    def set_stub(self, direction: Direction, value: bool = True):
        setattr(self, direction.value, value)

    def stub_count(self) -> int:
        return sum((self.up, self.down, self.left, self.right))

    def rotate(self):
        """Turns the tile a quarter turn clockwise (top stub ends up on the right)."""
        self.left, self.down, self.right, self.up = (
            self.down, self.right, self.up, self.left
        )

    def view(self) -> "TileView":
        return TileView(
            row=self.row,
            col=self.col,
            up=self.up,
            down=self.down,
            left=self.left,
            right=self.right,
            has_station=self.has_station,
            powered=self.powered,
        )


@dataclass(frozen=True)
class TileView:
    """Read-only copy of a tile handed to renderers."""
    row: int
    col: int
    up: bool
    down: bool
    left: bool
    right: bool
    has_station: bool
    powered: bool


# ============================================================
# Board Class
# ============================================================
class Board:
    MIN_SIZE = 1
    DEFAULT_WIDTH = 5
    DEFAULT_HEIGHT = 5

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT,
                 station: Tuple[int, int] = (0, 0)):
        if width < self.MIN_SIZE or height < self.MIN_SIZE:
            raise ValueError(
                f"Board requires at least {self.MIN_SIZE}x{self.MIN_SIZE} tiles (got {width}x{height})"
            )

        self.width = width
        self.height = height
        self.tiles: List[Tile] = [
            Tile(row=row, col=col)
            for row in range(height)
            for col in range(width)
        ]

        station_col, station_row = station
        if not self.valid_coordinate(station_col, station_row):
            raise ValueError(f"Station position {station} is outside a {width}x{height} board")
        self.station_index = self.index_of(station_col, station_row)
        self.tiles[self.station_index].has_station = True

    def __len__(self) -> int:
        return len(self.tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self.tiles)

    def valid_coordinate(self, col: int, row: int) -> bool:
        return 0 <= col < self.width and 0 <= row < self.height

    def index_of(self, col: int, row: int) -> int:
        return row * self.width + col

    def position_of(self, index: int) -> Tuple[int, int]:
        """Returns the (col, row) of a tile index."""
        return index % self.width, index // self.width

    def tile_at(self, col: int, row: int) -> Tile:
        """
        Returns the tile at a grid position.

        Raises:
            IndexError: If the position is off the board
        """
        if not self.valid_coordinate(col, row):
            raise IndexError(f"({col}, {row}) is outside a {self.width}x{self.height} board")
        return self.tiles[self.index_of(col, row)]

    def neighbor_index(self, index: int, direction: Direction) -> Optional[int]:
        """Index of the tile on the given side, or None past the board edge."""
        col, row = self.position_of(index)
        d_col, d_row = direction.delta
        if not self.valid_coordinate(col + d_col, row + d_row):
            return None
        return self.index_of(col + d_col, row + d_row)

    def is_connected(self, index: int, direction: Direction) -> bool:
        """
        Checks whether a tile conducts across one of its sides.

        Both tiles must declare a stub on the shared side; a stub facing the
        board edge or a bare neighbor conducts nothing.
        """
        if not self.tiles[index].has_stub(direction):
            return False
        neighbor = self.neighbor_index(index, direction)
        if neighbor is None:
            return False
        return self.tiles[neighbor].has_stub(direction.opposite)

    def connect(self, a: int, b: int):
        """
        Adds matching stubs between two grid-adjacent tiles.

        Raises:
            ValueError: If the tiles are not orthogonal neighbors
        """
        for direction in Direction:
            if self.neighbor_index(a, direction) == b:
                self.tiles[a].set_stub(direction)
                self.tiles[b].set_stub(direction.opposite)
                return
        raise ValueError(f"Tiles {self.position_of(a)} and {self.position_of(b)} are not adjacent")

    # ------------------------------------------------------------
    # Power station
    # ------------------------------------------------------------
    @property
    def station(self) -> Tile:
        return self.tiles[self.station_index]

    def station_position(self) -> Tuple[int, int]:
        return self.position_of(self.station_index)

    def move_station(self, index: int):
        """(Internal) Moves the station flag without checking wiring."""
        self.tiles[self.station_index].has_station = False
        self.station_index = index
        self.tiles[index].has_station = True

    # ------------------------------------------------------------
    # Power state
    # ------------------------------------------------------------
    def reset_power(self):
        for tile in self.tiles:
            tile.powered = False

    def powered_mask(self) -> np.ndarray:
        """Boolean array of shape (height, width) holding each tile's powered flag."""
        mask = np.fromiter((tile.powered for tile in self.tiles), dtype=bool, count=len(self.tiles))
        return mask.reshape(self.height, self.width)

    def all_powered(self) -> bool:
        return bool(self.powered_mask().all())

    def scramble(self, rng: np.random.Generator):
        """Rotates every tile by an independent draw of 0-3 quarter turns."""
        turns = rng.integers(0, 4, size=len(self.tiles))
        for tile, count in zip(self.tiles, turns):
            for _ in range(int(count)):
                tile.rotate()

    def snapshot(self) -> Tuple[TileView, ...]:
        """Read-only views of every tile in row-major order."""
        return tuple(tile.view() for tile in self.tiles)
