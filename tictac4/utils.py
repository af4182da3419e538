"""
utils.py - Constants, enumerations and helper functions for Tic-Tac-4

This module provides the marks, outcomes and rejection reasons shared by the
sub-game and meta-game engines, along with line scanning helpers and the
ASCII renderers used by the text interface.
"""

from enum import Enum, auto
from typing import List, Optional, Sequence, Tuple

import numpy as np

# Sub-game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win a sub-game

# Meta-grid constant
META_SIZE = 3


class Mark(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    A = 1    # First player
    B = 2    # Second player

    def other(self) -> 'Mark':
        """Get the other player."""
        if self == Mark.A:
            return Mark.B
        elif self == Mark.B:
            return Mark.A
        return Mark.EMPTY

    def __str__(self):
        if self == Mark.EMPTY:
            return " "
        elif self == Mark.A:
            return "X"
        else:
            return "O"


class Outcome(Enum):
    """Terminal result of a sub-game, a meta-cell claim, or the whole match."""
    A_WINS = auto()
    B_WINS = auto()
    DRAWN = auto()

    @classmethod
    def win_for(cls, mark: Mark) -> 'Outcome':
        if mark == Mark.A:
            return cls.A_WINS
        if mark == Mark.B:
            return cls.B_WINS
        raise ValueError(f"No player owns mark {mark!r}")

    @property
    def winner(self) -> Optional[Mark]:
        """The winning mark, or None for a draw."""
        if self == Outcome.A_WINS:
            return Mark.A
        if self == Outcome.B_WINS:
            return Mark.B
        return None

    def is_win(self) -> bool:
        return self != Outcome.DRAWN

    def __str__(self):
        if self == Outcome.DRAWN:
            return "draw"
        return f"{self.winner} wins"


class Rejection(Enum):
    """Reasons a placement can be refused. Refused moves change no state."""
    FROZEN = auto()        # sub-game or match already concluded
    COLUMN_FULL = auto()   # no empty cell in the requested column
    OUT_OF_RANGE = auto()  # meta or column index outside valid bounds


class Direction(Enum):
    """Enumeration representing directions for win checking."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_UP = auto()  # Diagonal from bottom-left to top-right
    DIAGONAL_DOWN = auto()  # Diagonal from top-left to bottom-right


# Direction vectors (row, col) for each direction
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_UP: (-1, 1),
    Direction.DIAGONAL_DOWN: (1, 1)
}

# Meta-grid lines in evaluation order: rows, columns, then both diagonals
META_LINES: List[Tuple[Tuple[int, int], ...]] = (
    [tuple((r, c) for c in range(META_SIZE)) for r in range(META_SIZE)]
    + [tuple((r, c) for r in range(META_SIZE)) for c in range(META_SIZE)]
    + [tuple((i, i) for i in range(META_SIZE)),
       tuple((i, META_SIZE - 1 - i) for i in range(META_SIZE))]
)


def is_valid_position(row: int, col: int, rows: int = ROWS, cols: int = COLS) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index
        col: Column index
        rows: Board height
        cols: Board width

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < rows and 0 <= col < cols


def get_landing_row(grid: np.ndarray, column: int) -> int:
    """
    Find the row a piece dropped into `column` would land in.

    Returns:
        The lowest empty row index, or -1 if the column is full
    """
    for row in range(grid.shape[0] - 1, -1, -1):
        if grid[row, column] == Mark.EMPTY.value:
            return row
    return -1


def winning_line_at(grid: np.ndarray, row: int, col: int,
                    connect_n: int = CONNECT_N) -> List[Tuple[int, int]]:
    """
    Find the run of same-mark cells through (row, col) that completes a line.

    Only lines passing through the anchor cell are examined, in each of the
    four directions. Runs longer than `connect_n` still count.

    Args:
        grid: The sub-game board
        row: Row index of the anchor cell
        col: Column index of the anchor cell
        connect_n: Run length needed to win

    Returns:
        Cells of the first winning run found, or an empty list
    """
    player_value = grid[row, col]
    if player_value == Mark.EMPTY.value:
        return []

    rows, cols = grid.shape
    for direction, (dr, dc) in DIRECTION_VECTORS.items():
        positions = [(row, col)]

        # Check in the positive direction
        r, c = row + dr, col + dc
        while is_valid_position(r, c, rows, cols) and grid[r, c] == player_value:
            positions.append((r, c))
            r += dr
            c += dc

        # Check in the negative direction
        r, c = row - dr, col - dc
        while is_valid_position(r, c, rows, cols) and grid[r, c] == player_value:
            positions.insert(0, (r, c))
            r -= dr
            c -= dc

        if len(positions) >= connect_n:
            return positions

    return []


def check_win_at_position(grid: np.ndarray, row: int, col: int,
                          connect_n: int = CONNECT_N) -> bool:
    """
    Check if the piece at the given position completes a winning line.

    Returns:
        True if the move results in a win, False otherwise
    """
    return bool(winning_line_at(grid, row, col, connect_n))


def meta_line_winner(claims: Sequence[Sequence[Optional[Outcome]]]) -> Optional[Mark]:
    """
    Evaluate the meta-grid like tic-tac-toe.

    A line wins only when all three claims are the same winning outcome;
    drawn claims never take part in a meta win.

    Args:
        claims: META_SIZE x META_SIZE grid of claimed outcomes (None = unclaimed)

    Returns:
        The mark owning the first winning line (rows, columns, diagonals), or None
    """
    for line in META_LINES:
        first = claims[line[0][0]][line[0][1]]
        if first is None or not first.is_win():
            continue
        if all(claims[r][c] == first for r, c in line[1:]):
            return first.winner
    return None


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render a sub-game board as ASCII art.

    Args:
        grid: The sub-game board

    Returns:
        ASCII representation of the board
    """
    return "\n".join(_board_lines(grid))


def _board_lines(grid: np.ndarray, caption: str = "") -> List[str]:
    rows, cols = grid.shape
    width = cols * 2 - 1
    lines = [caption.center(width + 2)] if caption else []
    lines.append("|" + "-" * width + "|")
    for row in range(rows):
        lines.append("|" + " ".join(str(Mark(int(v))) for v in grid[row]) + "|")
    lines.append("|" + "-" * width + "|")
    lines.append("|" + " ".join(str(i) for i in range(cols)) + "|")
    return lines


def claim_label(claim: Optional[Outcome]) -> str:
    """Short caption for a meta-cell claim."""
    if claim is None:
        return ""
    if claim == Outcome.DRAWN:
        return "[draw]"
    return f"[{claim.winner}]"


def render_meta_ascii(grids: Sequence[Sequence[np.ndarray]],
                      claims: Sequence[Sequence[Optional[Outcome]]]) -> str:
    """
    Render the whole meta-grid, sub-boards side by side.

    Each sub-board is captioned with its meta coordinates and its claim.

    Args:
        grids: META_SIZE x META_SIZE nested sequence of sub-game boards
        claims: Matching grid of claimed outcomes

    Returns:
        ASCII representation of all nine boards
    """
    blocks = []
    for meta_row, row_grids in enumerate(grids):
        columns = [
            _board_lines(grid, f"{meta_row},{meta_col} {claim_label(claims[meta_row][meta_col])}".strip())
            for meta_col, grid in enumerate(row_grids)
        ]
        blocks.append("\n".join("   ".join(parts) for parts in zip(*columns)))
    return "\n\n".join(blocks)
