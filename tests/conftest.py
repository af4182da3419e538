"""
Shared fixtures for the Tic-Tac-4 test suite.
"""

import pytest

from tictac4.game.board import SubGame
from tictac4.game.meta import MetaGame
from tictac4.utils import Mark, Outcome

# Drop sequences (columns) that resolve a fresh sub-game for one player
A_WIN_DROPS = [0, 1, 0, 1, 0, 1, 0]
B_WIN_DROPS = [0, 1, 0, 1, 0, 1, 2, 1]

LAST_CELL = (0, 6)


def draw_pattern_mark(row: int, col: int) -> Mark:
    """
    Mark of a full board with no four-in-a-row anywhere.

    Columns alternate A/B and rows come in pairs, flipping every two rows:
    runs are at most two long in every direction.
    """
    flip = (row // 2) % 2
    return Mark.A if (col + flip) % 2 == 0 else Mark.B


def fill_all_but_last(sub_game: SubGame):
    """Inject the draw pattern everywhere except the top cell of the last column."""
    for row in range(sub_game.rows):
        for col in range(sub_game.columns):
            if (row, col) != LAST_CELL:
                sub_game.cells[row, col] = draw_pattern_mark(row, col).value
    sub_game.turn = draw_pattern_mark(*LAST_CELL)


@pytest.fixture
def sub_game():
    return SubGame()


@pytest.fixture
def meta():
    return MetaGame()


@pytest.fixture
def nearly_drawn(sub_game):
    fill_all_but_last(sub_game)
    return sub_game


@pytest.fixture
def resolve():
    """Return a helper that drives one sub-game of a MetaGame to an outcome."""
    def _resolve(meta, meta_row, meta_col, outcome):
        if outcome == Outcome.A_WINS:
            drops = A_WIN_DROPS
        elif outcome == Outcome.B_WINS:
            drops = B_WIN_DROPS
        else:
            fill_all_but_last(meta.sub_games[meta_row][meta_col])
            drops = [LAST_CELL[1]]

        result = None
        for column in drops:
            result = meta.move(meta_row, meta_col, column)
            assert result.accepted
        assert result.sub_outcome == outcome
        return result
    return _resolve
