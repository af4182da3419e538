"""
tictac4.interfaces - User interfaces for Tic-Tac-4

This package contains adapters that drive the game engine, such as the
terminal hot-seat interface.
"""

# Don't import anything here to avoid circular imports
__all__ = []
