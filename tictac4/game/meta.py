"""
meta.py - Meta-grid game state management for Tic-Tac-4

This module provides the MetaGame class, which owns the 3x3 grid of
four-in-a-row sub-games, records each sub-game's outcome as a claim on its
meta-cell, and plays those claims as tic-tac-toe to decide the match.

Presentation layers drive it through `move` and can subscribe to placement
and match-over notifications, which fire synchronously inside `move`.
"""

from enum import Enum, auto
from typing import Callable, List, NamedTuple, Optional, Tuple

from tictac4.debug import debug
from tictac4.game.board import DropResult, SubGame
from tictac4.utils import (ROWS, COLS, CONNECT_N, META_SIZE, Mark, Outcome,
                           Rejection, meta_line_winner, render_meta_ascii)


class MoveStatus(Enum):
    CONTINUING = auto()
    SUB_GAME_RESOLVED = auto()
    MATCH_OVER = auto()
    REJECTED = auto()


class PlacementEvent(NamedTuple):
    """Sent to placement listeners after every successful placement."""
    meta_row: int
    meta_col: int
    row: int
    column: int
    mark: Mark


class MoveResult(NamedTuple):
    """
    Result of a single `MetaGame.move` call.

    A MATCH_OVER result still carries the `sub_outcome` that ended the match,
    so a caller can show the sub-game result before the end-of-match notice.
    """
    status: MoveStatus
    meta_row: int
    meta_col: int
    placement: Optional[DropResult] = None
    sub_outcome: Optional[Outcome] = None
    match_outcome: Optional[Outcome] = None
    rejection: Optional[Rejection] = None

    @property
    def accepted(self) -> bool:
        return self.status != MoveStatus.REJECTED


PlacementListener = Callable[[PlacementEvent], None]
MatchOverListener = Callable[[Outcome], None]


class MetaGame:
    """
    A full Tic-Tac-4 match: nine sub-games played as one tic-tac-toe grid.

    Each sub-game keeps its own turn, so players may choose freely which
    sub-game to play next.
    """

    def __init__(self, rows: int = ROWS, columns: int = COLS, connect_n: int = CONNECT_N):
        """
        Initialize a new match.

        Args:
            rows: Height of every sub-game board
            columns: Width of every sub-game board
            connect_n: Run length needed to win a sub-game
        """
        debug.debug("Initializing MetaGame", "meta")
        self.rows = rows
        self.columns = columns
        self.connect_n = connect_n
        self._placement_listeners: List[PlacementListener] = []
        self._match_over_listeners: List[MatchOverListener] = []
        self.reset()

    def reset(self) -> None:
        """Start a new match. Registered listeners are kept."""
        debug.debug("Starting new match", "meta")
        self.sub_games = [[SubGame(self.rows, self.columns, self.connect_n)
                           for _ in range(META_SIZE)] for _ in range(META_SIZE)]
        self.claims: List[List[Optional[Outcome]]] = [[None] * META_SIZE for _ in range(META_SIZE)]
        self.match_outcome: Optional[Outcome] = None

    def add_placement_listener(self, listener: PlacementListener) -> None:
        self._placement_listeners.append(listener)

    def add_match_over_listener(self, listener: MatchOverListener) -> None:
        self._match_over_listeners.append(listener)

    def is_over(self) -> bool:
        return self.match_outcome is not None

    @property
    def winner(self) -> Optional[Mark]:
        """The mark that won the match, or None if unfinished or drawn."""
        if self.match_outcome is None:
            return None
        return self.match_outcome.winner

    def sub_game(self, meta_row: int, meta_col: int) -> SubGame:
        return self.sub_games[meta_row][meta_col]

    def get_valid_moves(self) -> List[Tuple[int, int, int]]:
        """
        Get every move the match would currently accept.

        Returns:
            List of (meta_row, meta_col, column) triples
        """
        if self.is_over():
            return []
        return [(meta_row, meta_col, column)
                for meta_row in range(META_SIZE)
                for meta_col in range(META_SIZE)
                for column in self.sub_games[meta_row][meta_col].get_valid_moves()]

    def move(self, meta_row: int, meta_col: int, column: int) -> MoveResult:
        """
        Drop the addressed sub-game's current player into `column`.

        A move that resolves a sub-game claims its meta-cell and re-evaluates
        the match. A meta win is checked before the full-grid draw.

        Args:
            meta_row: Row of the sub-game in the meta-grid
            meta_col: Column of the sub-game in the meta-grid
            column: Column of the sub-game to drop into

        Returns:
            MoveResult with the status of the move
        """
        if self.is_over():
            debug.debug(f"Move ({meta_row}, {meta_col}, {column}) rejected: match is over", "meta")
            return MoveResult(MoveStatus.REJECTED, meta_row, meta_col, rejection=Rejection.FROZEN)

        if not (0 <= meta_row < META_SIZE and 0 <= meta_col < META_SIZE):
            debug.debug(f"Move ({meta_row}, {meta_col}, {column}) rejected: meta cell out of range", "meta")
            return MoveResult(MoveStatus.REJECTED, meta_row, meta_col, rejection=Rejection.OUT_OF_RANGE)

        placement = self.sub_games[meta_row][meta_col].drop(column)
        if not placement.placed:
            return MoveResult(MoveStatus.REJECTED, meta_row, meta_col,
                              placement=placement, rejection=placement.rejection)

        # All state changes land before any listener runs
        match_outcome = None
        if placement.terminal:
            self.claims[meta_row][meta_col] = placement.outcome
            debug.info(f"Meta cell ({meta_row}, {meta_col}) claimed: {placement.outcome}", "meta")
            match_outcome = self._evaluate_match()
            if match_outcome is not None:
                self._finish(match_outcome)

        self._notify_placement(PlacementEvent(meta_row, meta_col, placement.row,
                                              placement.column, placement.mark))

        if not placement.terminal:
            return MoveResult(MoveStatus.CONTINUING, meta_row, meta_col, placement=placement)

        if match_outcome is None:
            return MoveResult(MoveStatus.SUB_GAME_RESOLVED, meta_row, meta_col,
                              placement=placement, sub_outcome=placement.outcome)

        for listener in self._match_over_listeners:
            listener(match_outcome)
        return MoveResult(MoveStatus.MATCH_OVER, meta_row, meta_col, placement=placement,
                          sub_outcome=placement.outcome, match_outcome=match_outcome)

    def _evaluate_match(self) -> Optional[Outcome]:
        winner = meta_line_winner(self.claims)
        if winner is not None:
            return Outcome.win_for(winner)
        if all(claim is not None for row in self.claims for claim in row):
            return Outcome.DRAWN
        return None

    def _finish(self, outcome: Outcome) -> None:
        self.match_outcome = outcome
        for row in self.sub_games:
            for sub_game in row:
                sub_game.lock()
        debug.info(f"Match over: {outcome}", "meta")

    def _notify_placement(self, event: PlacementEvent) -> None:
        debug.trace(f"Placement event {event}", "meta")
        for listener in self._placement_listeners:
            listener(event)

    def render(self) -> str:
        grids = [[sub_game.cells for sub_game in row] for row in self.sub_games]
        return render_meta_ascii(grids, self.claims)

    def __str__(self) -> str:
        return self.render()
