#!/usr/bin/env python3
"""CLI entry point for playing Playzzle puzzles in the terminal."""

import argparse
import logging
import sys
from pathlib import Path

from PIL import Image

from playzzle.config import DIFFICULTY_LEVELS, GameConfig
from playzzle.geometry import Point, Size
from playzzle.renderer import PuzzleImage
from playzzle.session import GameSession, GameState


def setup_logging(verbose: bool) -> None:
    """Configure logging."""
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )


def parse_cell(value: str, grid_size: int) -> int:
    """
    Parse a 1-indexed "row,col" cell into a board position.

    Raises:
        ValueError: If the format is invalid or the cell is off the board
    """
    parts = value.strip().split(",")
    if len(parts) != 2:
        raise ValueError(f"Invalid cell format: {value}. Use 'row,col'")

    row = int(parts[0].strip()) - 1
    col = int(parts[1].strip()) - 1
    if not (0 <= row < grid_size and 0 <= col < grid_size):
        raise ValueError(f"Cell {value} out of bounds for a {grid_size}x{grid_size} board")

    return row * grid_size + col


def print_slide_board(session: GameSession) -> None:
    n = session.difficulty
    blank = n * n
    width = len(str(blank))
    hide_blank = session.state == GameState.PLAYING
    for row in range(n):
        cells = []
        for tile in session.slide_board.tiles[row * n:(row + 1) * n]:
            if tile == blank and hide_blank:
                cells.append("." * width)
            else:
                cells.append(str(tile).rjust(width))
        print("  " + " ".join(cells))


def print_jigsaw_board(session: GameSession) -> None:
    geometry = session.geometry
    origin = geometry.origin
    print(
        f"  Board at ({origin.x:.0f}, {origin.y:.0f}), "
        f"{geometry.board.width:.0f}x{geometry.board.height:.0f}, "
        f"cells {geometry.cell_width:.1f}x{geometry.cell_height:.1f}"
    )
    board = session.jigsaw_board
    loose = [p for p in session.piece_layout() if not p.placed]
    print(f"  Placed: {board.count_placed()}/{board.total_pieces}")
    for piece in loose:
        print(
            f"  piece {piece.id:3d} (cell {piece.row + 1},{piece.col + 1}) "
            f"at ({piece.position.x:.0f}, {piece.position.y:.0f})"
        )


def print_status(session: GameSession) -> None:
    stats = session.stats()
    print(f"[{stats.state}] moves: {stats.moves}  time: {stats.time}  "
          f"best: {session.best_times.formatted(session.game_type, session.difficulty)}")
    if session.game_type == "slide":
        print_slide_board(session)
    else:
        print_jigsaw_board(session)


def handle_command(session: GameSession, command: str) -> bool:
    """
    Apply one line of player input.

    Returns:
        False when the player wants to quit
    """
    command = command.strip().lower()
    if not command:
        return True

    if command in ("q", "quit"):
        return False
    if command in ("p", "pause"):
        session.toggle_pause()
        return True
    if command in ("s", "stop"):
        session.stop()
        return True
    if command in ("r", "restart"):
        session.restart()
        return True
    if command in ("g", "go", "start"):
        if not session.start():
            session.play_again()
            session.start()
        return True

    if session.game_type == "slide":
        try:
            index = parse_cell(command, session.difficulty)
        except ValueError as e:
            print(f"  {e}")
            return True
        if not session.move_tile(index):
            print("  That tile cannot move.")
        return True

    parts = command.split()
    try:
        piece_id, x, y = int(parts[0]), float(parts[1]), float(parts[2])
    except (ValueError, IndexError):
        print("  Use: <piece> <x> <y>")
        return True

    result = session.drop_piece(piece_id, Point(x, y))
    if result is None:
        print("  That piece cannot be moved.")
    elif result.placed:
        print(f"  Piece {piece_id} snapped into place!")
    return True


def main():
    parser = argparse.ArgumentParser(
        description="Playzzle - sliding-tile and jigsaw puzzles in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 4x4 sliding puzzle
  python main.py --image puzzle.jpg --game slide --difficulty 4

  # 3x3 jigsaw in a 1200x800 play area, remembering best times
  python main.py --image puzzle.jpg --game jigsaw --difficulty 3 \\
    --width 1200 --height 800 --best-times ~/.playzzle/best_times.json

Commands while playing:
  slide:   row,col       slide the tile at that cell (1-indexed)
  jigsaw:  piece x y     drop a piece with its top-left corner at (x, y)
  p pause/resume, s stop, r restart, g start, q quit
        """,
    )

    parser.add_argument(
        "--image", "-i", type=str, required=True, help="Path to the image file to use as puzzle"
    )
    parser.add_argument(
        "--game",
        "-g",
        type=str,
        default="jigsaw",
        choices=sorted(DIFFICULTY_LEVELS),
        help="Puzzle type (default: jigsaw)",
    )
    parser.add_argument(
        "--difficulty",
        "-d",
        type=int,
        default=None,
        help="Grid size N (slide: 3-10, default 3; jigsaw: 2-12, default 4)",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for reproducible shuffling"
    )
    parser.add_argument(
        "--width", type=int, default=1200, help="Width of the play area in pixels (default: 1200)"
    )
    parser.add_argument(
        "--height", type=int, default=800, help="Height of the play area in pixels (default: 800)"
    )
    parser.add_argument(
        "--best-times",
        type=str,
        default=None,
        help="JSON file for best times (or set PLAYZZLE_BEST_TIMES)",
    )
    parser.add_argument(
        "--history",
        type=str,
        default=None,
        help="JSON file recording completed puzzles (or set PLAYZZLE_HISTORY)",
    )
    parser.add_argument(
        "--puzzle-id",
        type=str,
        default=None,
        help="Puzzle identifier such as 'animals/cat-1' (defaults to the image file name)",
    )
    parser.add_argument(
        "--snapshot", type=str, default=None, help="Save a PNG of the board when the game ends"
    )
    parser.add_argument("--quiet", "-q", action="store_true", help="Suppress progress output")

    args = parser.parse_args()

    setup_logging(not args.quiet)
    logger = logging.getLogger(__name__)

    image_path = Path(args.image)
    if not image_path.exists():
        logger.error(f"Image file not found: {image_path}")
        sys.exit(1)

    try:
        image = PuzzleImage.open(image_path)
    except OSError as e:
        logger.error(f"Could not load image {image_path}: {e}")
        sys.exit(1)

    config = GameConfig(
        game_type=args.game,
        difficulty=args.difficulty,
        shuffle_seed=args.seed,
        best_times_path=args.best_times,
        history_path=args.history,
    )

    try:
        session = GameSession(
            config,
            container=Size(args.width, args.height),
            puzzle_id=args.puzzle_id or image_path.stem,
        )
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    session.load_image(image.size)
    session.start()

    try:
        while True:
            print_status(session)
            if session.state == GameState.SOLVED:
                break
            if not handle_command(session, input("> ")):
                break
    except (KeyboardInterrupt, EOFError):
        logger.info("Interrupted by user")
        sys.exit(130)

    if args.snapshot:
        if session.game_type == "slide":
            snapshot = image.render_slide(
                session.slide_board,
                session.board_bounds,
                hide_blank=session.state == GameState.PLAYING,
            )
        else:
            snapshot = image.render_jigsaw(session.jigsaw_board)
        Image.fromarray(snapshot).save(args.snapshot)
        logger.info(f"Snapshot saved to: {args.snapshot}")

    if session.final_stats is None:
        sys.exit(1)

    print("\n" + "=" * 50)
    print("PUZZLE COMPLETE")
    print("=" * 50)
    print(f"Game: {session.game_type} {session.difficulty}x{session.difficulty}")
    print(f"Moves: {session.final_stats.moves}")
    print(f"Time: {session.final_stats.time}")
    print(f"Best: {session.best_times.formatted(session.game_type, session.difficulty)}")
    print("=" * 50)
    sys.exit(0)


if __name__ == "__main__":
    main()
