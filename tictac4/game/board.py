"""
board.py - Four-in-a-row sub-game for Tic-Tac-4

This module implements the SubGame class: one gravity-drop board occupying a
single cell of the meta-grid. It places pieces, alternates its own turn,
detects four-in-a-row wins anchored at the landing cell and reports its
terminal outcome exactly once.
"""

from typing import List, NamedTuple, Optional, Tuple

import numpy as np

from tictac4.debug import debug
from tictac4.utils import (ROWS, COLS, CONNECT_N, Mark, Outcome, Rejection,
                           check_win_at_position, get_landing_row,
                           winning_line_at, render_board_ascii)


class DropResult(NamedTuple):
    """Result of a single `SubGame.drop` call."""
    row: Optional[int] = None
    column: Optional[int] = None
    mark: Optional[Mark] = None
    outcome: Optional[Outcome] = None
    rejection: Optional[Rejection] = None

    @property
    def placed(self) -> bool:
        return self.rejection is None

    @property
    def terminal(self) -> bool:
        return self.outcome is not None


class SubGame:
    """
    A single four-in-a-row board.

    The sub-game knows nothing about the meta-grid that owns it. It reports a
    terminal outcome through the value returned by `drop`; the owner decides
    what to do with it.
    """

    def __init__(self, rows: int = ROWS, columns: int = COLS, connect_n: int = CONNECT_N):
        """
        Initialize an empty sub-game.

        Args:
            rows: Board height
            columns: Board width
            connect_n: Run length needed to win
        """
        self.rows = rows
        self.columns = columns
        self.connect_n = connect_n
        self.reset()

    def reset(self):
        """Reset the sub-game to an empty, unfrozen state."""
        self.cells = np.zeros((self.rows, self.columns), dtype=int)
        self.turn = Mark.A
        self.frozen = False
        self.locked = False
        self.outcome: Optional[Outcome] = None
        self.last_move: Optional[Tuple[int, int]] = None
        self.moves_made = 0

    def mark_at(self, row: int, column: int) -> Mark:
        return Mark(int(self.cells[row, column]))

    def is_full(self) -> bool:
        return not np.any(self.cells == Mark.EMPTY.value)

    def is_column_full(self, column: int) -> bool:
        return self.cells[0, column] != Mark.EMPTY.value

    def get_valid_moves(self) -> List[int]:
        """
        Get the columns that would currently accept a piece.

        Returns:
            List of valid column indices (empty when frozen)
        """
        if self.frozen:
            return []
        return [col for col in range(self.columns) if not self.is_column_full(col)]

    def _check_drop(self, column: int) -> Optional[Rejection]:
        if self.frozen:
            return Rejection.FROZEN
        if not (0 <= column < self.columns):
            return Rejection.OUT_OF_RANGE
        if self.is_column_full(column):
            return Rejection.COLUMN_FULL
        return None

    def drop(self, column: int) -> DropResult:
        """
        Drop the current player's piece into a column.

        The piece lands in the lowest empty row. A completed line freezes the
        board with the mover as winner and keeps the turn on the mover; filling
        the last cell without a line freezes it as drawn. Otherwise the turn
        passes to the other player.

        Args:
            column: The column to drop into (0-indexed)

        Returns:
            DropResult describing the placement, or carrying the rejection reason
        """
        rejection = self._check_drop(column)
        if rejection is not None:
            debug.debug(f"Drop in column {column} rejected: {rejection.name}", "board")
            return DropResult(column=column, rejection=rejection)

        mark = self.turn
        row = get_landing_row(self.cells, column)
        self.cells[row, column] = mark.value
        self.last_move = (row, column)
        self.moves_made += 1
        debug.trace(f"Placed {mark.name} at ({row}, {column})", "board")

        debug.start_timer("win_check")
        if check_win_at_position(self.cells, row, column, self.connect_n):
            self._resolve(Outcome.win_for(mark))
        elif self.is_full():
            self._resolve(Outcome.DRAWN)
        else:
            self.turn = mark.other()
        debug.end_timer("win_check", "board")

        return DropResult(row=row, column=column, mark=mark, outcome=self.outcome)

    def _resolve(self, outcome: Outcome):
        # outcome is write-once; drop() never reaches here once frozen
        self.outcome = outcome
        self.frozen = True
        debug.info(f"Sub-game resolved: {outcome} after move at {self.last_move}", "board")

    def set_frozen(self, frozen: bool = True):
        """
        Freeze or unfreeze the board from outside (idempotent).

        A board that reached its own outcome, or that was locked by the match
        that owns it, stays frozen.
        """
        if not frozen and (self.outcome is not None or self.locked):
            debug.warning("Refusing to unfreeze a resolved or locked sub-game", "board")
            return
        self.frozen = bool(frozen)

    def lock(self):
        """Freeze the board for good; only `reset` clears the lock."""
        self.set_frozen(True)
        self.locked = True

    def get_winning_line(self) -> List[Tuple[int, int]]:
        """
        Get the positions of the winning line if the sub-game was won.

        Returns:
            List of (row, col) positions forming the line, or empty list if no win
        """
        if self.outcome is None or not self.outcome.is_win() or self.last_move is None:
            return []
        row, col = self.last_move
        return winning_line_at(self.cells, row, col, self.connect_n)

    def get_state(self) -> np.ndarray:
        return self.cells.copy()

    def render(self) -> str:
        return render_board_ascii(self.cells)

    def __str__(self) -> str:
        return self.render()
