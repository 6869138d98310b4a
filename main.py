#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [easy|medium|hard | ROWS COLS MINES] [--seed N]
    python main.py scores
"""
import argparse
import logging
import random
import sys
from datetime import datetime
from typing import List

from src.minesweeper.board import BoardConfig
from src.minesweeper.config import Settings, parse_board_config
from src.minesweeper.environment import render_board
from src.minesweeper.game import Game, GameState
from src.minesweeper.scores import LedgerError, ScoreLedger, ScoreRecord

logger = logging.getLogger(__name__)

HELP_TEXT = "Commands: r ROW COL (reveal), f ROW COL (flag), n (new game), q (quit)"


def load_ledger(settings: Settings) -> ScoreLedger:
    """Load the score ledger, starting empty if it cannot be read."""
    ledger = ScoreLedger(settings.scores_path)
    try:
        ledger.load()
    except LedgerError as exc:
        logger.error("Ignoring unreadable score ledger: %s", exc)
    return ledger


def print_scores(entries: List[ScoreRecord]) -> None:
    """Print the leaderboard as a table."""
    if not entries:
        print("No winning games yet.")
        return

    print(f"{'#':<4} {'Mines':>6} {'Time':>6} {'Board':>8}  Date")
    print("-" * 44)
    for rank, entry in enumerate(entries, start=1):
        board = f"{entry.rows}x{entry.cols}"
        date = datetime.fromtimestamp(entry.completion_timestamp)
        print(
            f"{rank:<4} {entry.mine_count:>6} {entry.elapsed_seconds:>5}s "
            f"{board:>8}  {date:%Y-%m-%d %H:%M}"
        )


def print_game(game: Game) -> None:
    """Print the board and a status line."""
    status = game.game_status()
    print(render_board(game.board))
    if status.state == GameState.WON:
        print(f"YOU WON in {status.elapsed_seconds}s")
    elif status.state == GameState.LOST:
        print("YOU LOST")
    else:
        print(f"{status.flag_count}/{status.mine_count} mines flagged")


def play(args: argparse.Namespace) -> None:
    """Run an interactive game in the terminal."""
    try:
        config = parse_board_config(args.board)
    except ValueError as exc:
        print(f"Invalid board: {exc}", file=sys.stderr)
        sys.exit(2)

    ledger = load_ledger(Settings.from_env())
    game = Game(ledger=ledger, rng=random.Random(args.seed))
    game.start_game(config)

    print(HELP_TEXT)
    print_game(game)
    while not game.terminated:
        try:
            line = input("> ").split()
        except EOFError:
            game.quit_game()
            break
        if line:
            handle_command(game, config, line)


def handle_command(game: Game, config: BoardConfig, words: List[str]) -> None:
    """Dispatch one line of player input to the engine."""
    command = words[0].lower()

    if command == "q":
        game.quit_game()
        return
    if command == "n":
        if game.reset_game():
            game.start_game(config)
            print_game(game)
        else:
            print("Finish the current game first.")
        return
    if command in ("r", "f") and len(words) == 3:
        try:
            row, col = int(words[1]), int(words[2])
        except ValueError:
            print(HELP_TEXT)
            return
        if command == "r":
            game.reveal_cell(row, col)
        else:
            game.toggle_flag(row, col)
        print_game(game)
        if not game.is_playing:
            print("Type n for a new game or q to quit.")
        return

    print(HELP_TEXT)


def scores(args: argparse.Namespace) -> None:
    """Print the stored leaderboard."""
    ledger = ScoreLedger(Settings.from_env().scores_path)
    try:
        entries = ledger.load()
    except LedgerError as exc:
        print(f"Could not read leaderboard: {exc}", file=sys.stderr)
        sys.exit(1)
    print_scores(entries)


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minesweeper")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game")
    play_parser.add_argument(
        "board",
        nargs="*",
        help="Difficulty (easy, medium, hard) or ROWS COLS MINES",
    )
    play_parser.add_argument(
        "--seed", type=int, default=None, help="Seed for mine placement"
    )

    # Scores command
    subparsers.add_parser("scores", help="Show the leaderboard")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        play(args)
    elif args.command == "scores":
        scores(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
