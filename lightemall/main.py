#!/usr/bin/env python3
"""
Terminal front end for LightEmAll.

Draws the board as text and reads one command per line until the puzzle is
solved, the input ends, or the player quits.

Usage:
    python3 -m lightemall.main [--width W] [--height H] [--seed N] [--layout NAME]
                               [--station COL ROW] [--no-scramble] [--ascii]
                               [--commands CMD ...] [--verbose]

Commands:
    up / down / left / right   move the power station along a wire
    rotate COL ROW             rotate the tile at a grid position
    click X Y                  rotate the tile under a pixel position
    r                          start a new puzzle
    q                          quit
"""

import argparse
import logging
import sys
from typing import Iterable, List, Optional, TextIO

from lightemall.game_board import Board
from lightemall.light_em_all import DEFAULT_TILE_SIZE, GameConfig, LightEmAll
from lightemall.utils.layouts import LAYOUTS
from lightemall.utils.render import render_board, render_status

QUIT_COMMANDS = {"q", "quit", "exit"}
HELP_TEXT = "commands: up | down | left | right | rotate COL ROW | click X Y | r | q"


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the terminal game."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        game = LightEmAll(_build_config(args), rng=args.seed)
    except ValueError as exc:
        # Board size, station and tile size are checked by the game itself
        parser.error(str(exc))

    _print_header(args)
    _print_game(game, args)

    commands = args.commands if args.commands is not None else _read_lines(sys.stdin)
    _run_session(game, commands, args)
    return 0


def _parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parses command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    return _build_parser().parse_args(argv)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='LightEmAll wire puzzle')
    parser.add_argument('--width', type=int, default=Board.DEFAULT_WIDTH,
                        help=f'Board width in tiles (default: {Board.DEFAULT_WIDTH})')
    parser.add_argument('--height', type=int, default=Board.DEFAULT_HEIGHT,
                        help=f'Board height in tiles (default: {Board.DEFAULT_HEIGHT})')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for board generation (default: random)')
    parser.add_argument('--layout', choices=sorted(LAYOUTS), default='random',
                        help='Board layout (default: random)')
    parser.add_argument('--station', type=int, nargs=2, metavar=('COL', 'ROW'), default=None,
                        help="Starting station cell (default: the layout's own)")
    parser.add_argument('--tile-size', type=int, default=DEFAULT_TILE_SIZE,
                        help=f'Tile size in pixels for click commands (default: {DEFAULT_TILE_SIZE})')
    parser.add_argument('--no-scramble', action='store_true',
                        help='Start from the solved wiring')
    parser.add_argument('--ascii', action='store_true',
                        help='Draw with plain ASCII instead of box-drawing characters')
    parser.add_argument('--no-color', action='store_true',
                        help='Disable ANSI colors')
    parser.add_argument('--commands', nargs='*', default=None,
                        help='Run these commands instead of reading standard input')
    parser.add_argument('--verbose', action='store_true',
                        help='Print debug logging')
    return parser


def _build_config(args: argparse.Namespace) -> GameConfig:
    return GameConfig(
        width=args.width,
        height=args.height,
        layout=args.layout,
        station=tuple(args.station) if args.station else None,
        tile_size=args.tile_size,
        scramble=not args.no_scramble,
    )


def _print_header(args: argparse.Namespace):
    """
    Prints the program header with configuration.

    Args:
        args: Parsed command-line arguments
    """
    print("=" * 40)
    print("WELCOME TO LIGHT EM ALL!")
    print("=" * 40)
    print(f"Board: {args.width}x{args.height} ({args.layout} layout)")
    if args.seed is not None:
        print(f"Seed: {args.seed}")
    print(HELP_TEXT)
    print("=" * 40)


def _print_game(game: LightEmAll, args: argparse.Namespace):
    lines = render_board(game.snapshot(), game.board.width, game.board.height,
                         ascii_only=args.ascii, color=not args.no_color)
    lines.extend(render_status(game.step_count(), game.is_won()))
    print("\n".join(lines))


def _read_lines(stream: TextIO) -> Iterable[str]:
    for line in stream:
        yield line.strip()


def _run_session(game: LightEmAll, commands: Iterable[str], args: argparse.Namespace):
    """
    Applies commands until the puzzle is won, the commands run out, or the player quits.

    Args:
        game: Game to drive
        commands: One command per item
        args: Parsed arguments (for rendering options)
    """
    if game.is_won():
        return

    for command in commands:
        command = command.strip().lower()
        if not command:
            continue
        if command in QUIT_COMMANDS:
            break

        if not _apply_command(game, command):
            print(HELP_TEXT)
            continue

        _print_game(game, args)
        if game.is_won():
            break


def _apply_command(game: LightEmAll, command: str) -> bool:
    """
    Applies one text command to the game.

    Args:
        game: Game to drive
        command: Lower-cased command line

    Returns:
        False if the command was not understood
    """
    parts = command.split()
    name = parts[0]

    if name in ("rotate", "click"):
        if len(parts) != 3:
            return False
        try:
            first, second = int(parts[1]), int(parts[2])
        except ValueError:
            return False
        if name == "rotate":
            game.handle_rotate_at(first, second)
        else:
            game.on_mouse_clicked(first, second)
        return True

    if len(parts) != 1:
        return False
    if name == "r":
        game.on_key_event(name)
        return True
    try:
        game.handle_move(name)
    except ValueError:
        return False
    return True


if __name__ == "__main__":
    sys.exit(main())
