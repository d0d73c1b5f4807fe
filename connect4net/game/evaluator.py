"""
evaluator.py - Computer opponent for the Connect Four server

This module provides a ComputerPlayer that picks a move with a three-tier
policy:
1. Win now if some column completes a run of four for the computer
2. Otherwise block a column where the opponent would complete one
3. Otherwise drop into a column chosen uniformly at random

Lookahead is a single ply and only considers the landing cell of each
column that still has room.
"""

import random
from typing import Optional, Tuple

from connect4net.debug import debug
from connect4net.utils import Player
from connect4net.game.board import Board

Move = Tuple[int, int]


class ComputerPlayer:
    """A Connect Four player that wins or blocks when it can, else plays randomly."""

    def __init__(self, player: Player = Player.BLACK, rng: Optional[random.Random] = None):
        """
        Initialize the computer player.

        Args:
            player: The symbol the computer plays with
            rng: Random source for the fallback move (unseeded by default)
        """
        if player == Player.EMPTY:
            raise ValueError("Computer player cannot be EMPTY")
        self.player = player
        self.rng = rng or random.Random()

    def get_move(self, board: Board) -> Optional[Move]:
        """
        Choose the computer's next move.

        Args:
            board: The current game board (not modified)

        Returns:
            (row, col) of the chosen cell, or None if no column has room
        """
        debug.start_timer("computer_move")

        move = self.find_winning_move(board, self.player)
        if move is not None:
            debug.debug(f"Winning move found at {move}", "evaluator")
        else:
            move = self.find_winning_move(board, self.player.other())
            if move is not None:
                debug.debug(f"Blocking opponent at {move}", "evaluator")
            else:
                move = self.random_move(board)
                debug.debug(f"Random move {move}", "evaluator")

        debug.end_timer("computer_move", "evaluator")
        return move

    def find_winning_move(self, board: Board, player: Player) -> Optional[Move]:
        """
        Find the first column, left to right, where player would win.

        Args:
            board: The game board to probe
            player: Player whose winning drop is searched for

        Returns:
            (row, col) of the winning cell, or None
        """
        for col in board.available_columns():
            row = board.lowest_empty_row(col)
            debug.trace(f"Probing {player.name} at ({row}, {col})", "evaluator")
            if board.is_winning_move(row, col, player, probe=True):
                return row, col
        return None

    def random_move(self, board: Board) -> Optional[Move]:
        """
        Pick a column with room uniformly at random.

        Returns:
            (row, col) of the landing cell, or None if the board is full
        """
        columns = board.available_columns()
        if not columns:
            return None

        col = self.rng.choice(columns)
        row = board.lowest_empty_row(col)
        return row, col
