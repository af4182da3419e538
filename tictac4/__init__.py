"""
Tic-Tac-4 - nine four-in-a-row boards played as one game of tic-tac-toe
"""

__version__ = "0.1.0"
