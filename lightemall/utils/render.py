"""
Text rendering of board snapshots for the terminal front end.

Each tile is drawn as a 3x3 block of characters: the centre shows the hub (or
``*`` for the power station) and the four edge cells show the stubs.
"""

import math
from typing import List, Optional, Sequence

from lightemall.game_board import TileView


class _Colors:
    """ANSI escape codes for terminal coloring."""
    CYAN = "\033[96m"
    DIM = "\033[2m"
    RESET = "\033[0m"


_BOX = {"vertical": "│", "horizontal": "─", "hub": "┼", "bare": "·"}
_ASCII = {"vertical": "|", "horizontal": "-", "hub": "+", "bare": "."}

WIN_MESSAGE = "CONGRATS! YOU WON"


def _tile_block(tile: TileView, glyphs: dict) -> List[str]:
    """Three 3-character lines for one tile."""
    if tile.has_station:
        hub = "*"
    elif tile.up or tile.down or tile.left or tile.right:
        hub = glyphs["hub"]
    else:
        hub = glyphs["bare"]
    vertical = glyphs["vertical"]
    horizontal = glyphs["horizontal"]
    return [
        f" {vertical if tile.up else ' '} ",
        f"{horizontal if tile.left else ' '}{hub}{horizontal if tile.right else ' '}",
        f" {vertical if tile.down else ' '} ",
    ]


def wire_color(distance: float) -> str:
    """
    ANSI code for a powered wire ``distance`` tiles from the station.

    Wires fade from yellow next to the station through orange to red, one
    shade every two tiles, and stay red from ten tiles out.
    """
    green = max(0, 5 - int(distance) // 2)
    # 256-color cube: red 5, green 0-5, blue 0
    return f"\033[38;5;{196 + 6 * green}m"


def _paint(text: str, tile: TileView, station: Optional[TileView]) -> str:
    if tile.has_station:
        return f"{_Colors.CYAN}{text}{_Colors.RESET}"
    if tile.powered and station is not None:
        distance = math.hypot(tile.col - station.col, tile.row - station.row)
        return f"{wire_color(distance)}{text}{_Colors.RESET}"
    return f"{_Colors.DIM}{text}{_Colors.RESET}"


def render_board(snapshot: Sequence[TileView], width: int, height: int,
                 ascii_only: bool = False, color: bool = True) -> List[str]:
    """
    Renders a row-major snapshot as text.

    Args:
        snapshot: Tile views in row-major order, ``width * height`` of them
        width: Board width in tiles
        height: Board height in tiles
        ascii_only: Use ``| - +`` instead of box-drawing characters
        color: Wrap tiles in ANSI codes (powered wires shaded by distance
            from the station, station cyan, unpowered dim)

    Returns:
        Lines of text, three per board row
    """
    if len(snapshot) != width * height:
        raise ValueError(f"Snapshot has {len(snapshot)} tiles, expected {width * height}")

    glyphs = _ASCII if ascii_only else _BOX
    station = next((tile for tile in snapshot if tile.has_station), None)
    lines: List[str] = []
    for row in range(height):
        row_lines = ["", "", ""]
        for col in range(width):
            tile = snapshot[row * width + col]
            for i, part in enumerate(_tile_block(tile, glyphs)):
                row_lines[i] += _paint(part, tile, station) if color else part
        lines.extend(row_lines)
    return lines


def render_status(steps: int, won: bool) -> List[str]:
    lines = [f"amount of steps: {steps}"]
    if won:
        lines.append(WIN_MESSAGE)
    return lines
