"""
cli.py - Command-line interface for playing Tic-Tac-4

This module provides a hot-seat terminal adapter over the MetaGame engine.
It sends moves in, and re-renders from the engine's placement and match-over
notifications rather than polling state.
"""

import argparse
import sys
from typing import List, Optional, Tuple, Union

from tictac4.debug import debug, DebugLevel
from tictac4.game.meta import MetaGame, MoveResult, MoveStatus, PlacementEvent
from tictac4.utils import Outcome, Rejection

Move = Tuple[int, int, int]

REJECTION_MESSAGES = {
    Rejection.FROZEN: "that board is already finished",
    Rejection.COLUMN_FULL: "that column is full",
    Rejection.OUT_OF_RANGE: "that position is off the board",
}

QUIT = 'q'


def parse_move(text: str) -> Move:
    """
    Parse a move written as three integers: meta row, meta column, column.

    Spaces and commas are both accepted as separators.

    Raises:
        ValueError: If the text is not exactly three integers
    """
    parts = text.replace(',', ' ').split()
    if len(parts) != 3:
        raise ValueError(f"Expected 'meta_row meta_col column', got '{text}'")
    meta_row, meta_col, column = (int(p) for p in parts)
    return meta_row, meta_col, column


def parse_move_list(text: str) -> List[Move]:
    """Parse a ';'-separated list of moves, e.g. '0,0,3;1,1,2'."""
    return [parse_move(chunk) for chunk in text.split(';') if chunk.strip()]


def describe_outcome(outcome: Outcome) -> str:
    if outcome == Outcome.DRAWN:
        return "It's a tie!"
    return f"{outcome.winner} has won the match!"


class SimpleCLI:
    """Simple command-line interface for Tic-Tac-4."""

    def __init__(self):
        """Initialize the CLI and subscribe to engine notifications."""
        self.game = MetaGame()
        self.game.add_placement_listener(self.on_placement)
        self.game.add_match_over_listener(self.on_match_over)
        self.args = None
        self.show_board = True
        self.final_outcome = None

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(description='Tic-Tac-4 CLI')
        parser.add_argument('--debug', action='store_true', help='Enable debug mode')
        parser.add_argument('--debug-level', default='warning',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging verbosity')
        parser.add_argument('--log-file', type=str, default=None, help='Also write logs to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        subparsers.add_parser('play', help='Play a hot-seat match interactively')

        replay_parser = subparsers.add_parser('replay', help='Apply a scripted list of moves')
        replay_parser.add_argument('--moves', type=str, required=True,
                                   help="Moves as 'meta_row,meta_col,column;...'")
        replay_parser.add_argument('--quiet', action='store_true',
                                   help='Only print the final board and result')

        self.args = parser.parse_args(argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args(argv)

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'replay':
            try:
                moves = parse_move_list(self.args.moves)
            except ValueError as e:
                print(f"Error parsing moves: {e}")
                return 1
            self.show_board = not self.args.quiet
            self.replay(moves)
            if not self.show_board:
                print(self.game.render())
        else:
            print("Please specify a command. Use --help for options.")
            return 1
        return 0

    def on_placement(self, event: PlacementEvent) -> None:
        debug.debug(f"CLI received placement {event}", "cli")
        if self.show_board:
            print(f"\n{event.mark} drops into board ({event.meta_row}, {event.meta_col}), "
                  f"column {event.column}")
            print(self.game.render())

    def on_match_over(self, outcome: Outcome) -> None:
        debug.info(f"CLI received match over: {outcome}", "cli")
        self.final_outcome = outcome

    def report(self, result: MoveResult) -> None:
        """Print anything about a move the notifications don't cover."""
        if result.status == MoveStatus.REJECTED:
            print(f"Invalid move: {REJECTION_MESSAGES[result.rejection]}.")
        elif result.sub_outcome is not None:
            board = f"({result.meta_row}, {result.meta_col})"
            if result.sub_outcome == Outcome.DRAWN:
                print(f"Board {board} is full: nobody claims it.")
            else:
                print(f"{result.sub_outcome.winner} claims board {board}!")
        if result.status == MoveStatus.MATCH_OVER:
            print(f"\nGame over! {describe_outcome(result.match_outcome)}")

    def get_human_move(self) -> Optional[Union[Move, str]]:
        """
        Get a move from player input.

        Returns:
            The parsed move, QUIT, or None if the input was invalid
        """
        user_input = input("Your move (meta_row meta_col column, q to quit): ").strip().lower()
        if user_input == QUIT:
            return QUIT
        try:
            return parse_move(user_input)
        except ValueError:
            print("Invalid input. Enter three numbers, e.g. '1 1 3'.")
            return None

    def play_game(self) -> None:
        """Play a hot-seat match until it ends or a player quits."""
        print("Starting a new Tic-Tac-4 match!")
        print("Win three boards in a row. Each board is its own game of four-in-a-row.")
        self.game.reset()
        self.final_outcome = None
        print(self.game.render())

        while not self.game.is_over():
            try:
                move = self.get_human_move()
            except EOFError:
                print("\nQuitting game.")
                return
            if move is None:
                continue
            if move == QUIT:
                print("Quitting game.")
                return
            self.report(self.game.move(*move))

    def replay(self, moves: List[Move]) -> List[MoveResult]:
        """
        Apply a list of moves to a fresh match.

        Moves after the match has ended are still submitted and reported as
        rejected.
        """
        self.game.reset()
        self.final_outcome = None
        results = []
        for move in moves:
            result = self.game.move(*move)
            self.report(result)
            results.append(result)
        if not self.game.is_over():
            print(f"\nMatch still in progress after {len(moves)} moves.")
        return results


def main(argv: Optional[List[str]] = None) -> int:
    return SimpleCLI().run(argv)


if __name__ == "__main__":
    sys.exit(main())
