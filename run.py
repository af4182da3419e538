#!/usr/bin/env python3
"""
run.py - Main entry point for Tic-Tac-4

Examples:

    # Play a hot-seat match in the terminal
    python run.py play

    # Replay a scripted list of moves with debug logging
    python run.py --debug replay --moves "0,0,0;0,0,1;0,0,0"
"""

import sys

from tictac4.interfaces.cli import main


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nInterrupted.")
        sys.exit(130)
