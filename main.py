#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--size N] [--difficulty NAME] [--seed S]
    python main.py demo [--games N] [--delay SECONDS]
"""
import argparse
import logging
from typing import List, Optional, Tuple

from src.minesweeper.config import BOARD_SIZES, Difficulty, GameConfig
from src.minesweeper.render import render_ansi, render_status
from src.minesweeper.session import SessionController

HELP_TEXT = """Commands:
  r ROW COL   reveal a cell
  f ROW COL   toggle a flag
  m           toggle flag mode (reveals become flags)
  n           new game
  q           quit"""


def _parse_position(parts: List[str]) -> Optional[Tuple[int, int]]:
    """Parse 'ROW COL' arguments, or None if malformed."""
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def settle(session: SessionController, fps: float) -> int:
    """Tick frames until the reveal queue drains; returns frames used."""
    frames = 0
    while session.pending_reveals:
        session.tick(1.0 / fps)
        frames += 1
    return frames


def show(session: SessionController) -> None:
    print()
    print(render_status(session))
    print(render_ansi(session.board, coordinates=True))
    if session.game_won:
        print(f"\n*** VICTORY! Time: {int(session.elapsed_seconds)} seconds ***")
    elif session.game_over:
        print("\n*** GAME OVER ***")


def play(args: argparse.Namespace) -> None:
    """Play an interactive game in the terminal."""
    config = GameConfig(Difficulty.from_name(args.difficulty), args.size)
    session = SessionController(config, seed=args.seed)
    session.start_new_game()

    print(HELP_TEXT)
    show(session)

    while True:
        try:
            line = input("> ").strip().lower()
        except EOFError:
            break
        if not line:
            continue

        command, *rest = line.split()
        if command == "q":
            break
        if command == "n":
            session.reset_game()
        elif command == "m":
            session.toggle_flag_mode()
        elif command in ("r", "f"):
            position = _parse_position(rest)
            if position is None:
                print("Expected: r|f ROW COL")
                continue
            # A typed command counts as one frame of wall time
            session.tick(1.0 / args.fps)
            if command == "r":
                session.handle_primary_action(*position)
            else:
                session.handle_secondary_action(*position)
            settle(session, args.fps)
        else:
            print(HELP_TEXT)
            continue

        show(session)


def demo(args: argparse.Namespace) -> None:
    """Watch a random agent play."""
    from demo import run_demo

    run_demo(
        delay=args.delay,
        games=args.games,
        size=args.size,
        difficulty=Difficulty.from_name(args.difficulty),
        seed=args.seed,
    )


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minesweeper")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    difficulties = [d.label for d in Difficulty]

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument(
        "--size", type=int, choices=BOARD_SIZES, default=9, help="Board size (NxN)"
    )
    play_parser.add_argument(
        "--difficulty", choices=difficulties, default="beginner", help="Mine density"
    )
    play_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    play_parser.add_argument(
        "--fps", type=float, default=60.0, help="Simulated frame rate"
    )

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Watch a random agent play")
    demo_parser.add_argument(
        "--games", type=int, default=5, help="Number of games"
    )
    demo_parser.add_argument(
        "--delay", type=float, default=0.3, help="Delay between moves"
    )
    demo_parser.add_argument(
        "--size", type=int, choices=BOARD_SIZES, default=9, help="Board size (NxN)"
    )
    demo_parser.add_argument(
        "--difficulty", choices=difficulties, default="beginner", help="Mine density"
    )
    demo_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    args = parser.parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.command == "play":
        play(args)
    elif args.command == "demo":
        demo(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
