# light_em_all.py
# Game controller for LightEmAll: rotation, station movement, reset and win detection.

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple, Union

import numpy as np

from lightemall.game_board import Board, Direction, TileView
from lightemall.power import propagate_power
from lightemall.utils.layouts import apply_layout, get_layout

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

DEFAULT_TILE_SIZE = 50
RESET_KEY = "r"

RandomSource = Union[None, int, np.random.Generator]


class GameState(Enum):
    IDLE = auto()
    WON = auto()


@dataclass(frozen=True)
class GameConfig:
    """
    Settings for a LightEmAll game.

    Attributes:
        width: Board width in tiles
        height: Board height in tiles
        layout: Name of the layout generating the solved wiring
        station: Starting (col, row) of the power station; None uses the
            layout's default (top-left for ``random``, centre for ``fixed``)
        tile_size: Tile edge in pixels, used to map mouse clicks to tiles
        scramble: Randomly rotate every tile after generating the layout
    """
    width: int = Board.DEFAULT_WIDTH
    height: int = Board.DEFAULT_HEIGHT
    layout: str = 'random'
    station: Optional[Tuple[int, int]] = None
    tile_size: int = DEFAULT_TILE_SIZE
    scramble: bool = True

    def validate(self):
        """
        Rejects settings the board cannot be built from.

        Raises:
            ValueError: On an unknown layout or a non-positive tile size
        """
        get_layout(self.layout)
        if self.tile_size < 1:
            raise ValueError(f"Tile size must be positive (got {self.tile_size})")

    def station_start(self) -> Tuple[int, int]:
        if self.station is not None:
            return self.station
        return get_layout(self.layout).default_station(self.width, self.height)


def make_rng(source: RandomSource = None) -> np.random.Generator:
    """Returns ``source`` if it is already a Generator, else seeds a new one from it."""
    if isinstance(source, np.random.Generator):
        return source
    return np.random.default_rng(source)


class LightEmAll:
    """
    One LightEmAll puzzle and the player's progress on it.

    Every action is handled to completion: mutate the board, recompute power
    from the station, then check whether every tile is lit. Once the puzzle is
    won, rotations and station moves are ignored until the next reset.
    """
    def __init__(self, config: Optional[GameConfig] = None, rng: RandomSource = None):
        self.config = config or GameConfig()
        self.config.validate()
        self.rng = make_rng(rng)
        self.board: Board
        self.steps = 0
        self.state = GameState.IDLE
        self._new_board()

    # ------------------------------------------------------------
    # Player actions
    # ------------------------------------------------------------
    def handle_rotate_at(self, col: int, row: int) -> bool:
        """
        Rotates the tile at (col, row) a quarter turn clockwise.

        Args:
            col: Grid column
            row: Grid row

        Returns:
            True if a tile was rotated; False for off-board positions or a won game
        """
        if self.state is GameState.WON or not self.board.valid_coordinate(col, row):
            return False

        self.board.tile_at(col, row).rotate()
        self.steps += 1
        logger.debug("Rotated tile (%d, %d); step %d", col, row, self.steps)
        self._refresh()
        return True

    def handle_move(self, direction: Union[Direction, str]) -> bool:
        """
        Moves the power station one tile along a wire.

        The move happens only when the station's tile and its neighbor both
        have stubs on their shared side. Anything else is a no-op.

        Args:
            direction: A Direction or one of "up", "down", "left", "right"

        Returns:
            True if the station moved

        Raises:
            ValueError: If ``direction`` is not a recognised direction name
        """
        direction = Direction(direction)
        if self.state is GameState.WON:
            return False

        station = self.board.station_index
        if not self.board.is_connected(station, direction):
            return False

        self.board.move_station(self.board.neighbor_index(station, direction))
        logger.debug("Moved station %s to %s", direction.value, self.board.station_position())
        self._refresh()
        return True

    def handle_reset(self):
        """Starts a new puzzle from the next draws of the random source."""
        logger.debug("Resetting board")
        self._new_board()

    # ------------------------------------------------------------
    # Input translation
    # ------------------------------------------------------------
    def on_key_event(self, key: str) -> bool:
        """
        Dispatches a key press: "r" resets, arrow names move the station.

        Returns:
            True if the key changed the game; unknown keys are ignored
        """
        if key == RESET_KEY:
            self.handle_reset()
            return True
        try:
            direction = Direction(key)
        except ValueError:
            return False
        return self.handle_move(direction)

    def on_mouse_clicked(self, x: int, y: int) -> bool:
        """
        Rotates the tile under a mouse click given in pixels.

        Returns:
            True if a tile was rotated
        """
        if x < 0 or y < 0:
            return False
        return self.handle_rotate_at(x // self.config.tile_size, y // self.config.tile_size)

    # ------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------
    def is_won(self) -> bool:
        return self.board.all_powered()

    def step_count(self) -> int:
        return self.steps

    def station_position(self) -> Tuple[int, int]:
        return self.board.station_position()

    def snapshot(self) -> Tuple[TileView, ...]:
        return self.board.snapshot()

    # ------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------
    def _new_board(self):
        """Generates, scrambles and powers a fresh board."""
        board = Board(self.config.width, self.config.height, station=self.config.station_start())
        apply_layout(board, self.config.layout, self.rng)
        if self.config.scramble:
            board.scramble(self.rng)

        self.board = board
        self.steps = 0
        self.state = GameState.IDLE
        self._refresh()

    def _refresh(self):
        """Recomputes power and updates the win state."""
        propagate_power(self.board)
        if self.board.all_powered() and self.state is not GameState.WON:
            self.state = GameState.WON
            logger.info("Puzzle solved in %d steps", self.steps)
