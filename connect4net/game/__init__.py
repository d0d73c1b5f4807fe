"""
connect4net.game - Core game mechanics for Connect Four

This package contains the board representation with win detection and
the computer opponent used by the server.
"""

from connect4net.game.board import Board
from connect4net.game.evaluator import ComputerPlayer

__all__ = ['Board', 'ComputerPlayer']
