"""
tictac4.game - Core game mechanics for Tic-Tac-4

This package contains the four-in-a-row sub-game engine and the meta-grid
engine that turns sub-game outcomes into a tic-tac-toe match.
"""

from tictac4.game.board import DropResult, SubGame
from tictac4.game.meta import MetaGame, MoveResult, MoveStatus, PlacementEvent

__all__ = ['DropResult', 'SubGame', 'MetaGame', 'MoveResult', 'MoveStatus', 'PlacementEvent']
