"""
board.py - Board representation and win detection for Connect Four

This module implements the Board class used by the server-side session and
the terminal client. The grid is stored padded with an empty border of
BORDER cells on every side so that scanning for a run of four never has to
check bounds. All public methods take inner (wire) coordinates.
"""

import numpy as np
from typing import List

from connect4net.debug import debug, DebugLevel
from connect4net.utils import (ROWS, COLS, CONNECT_N, PADDED_ROWS, PADDED_COLS,
                               NO_ROOM, Player, DIRECTION_VECTORS,
                               is_valid_position, to_padded, render_board_ascii)


class Board:
    """
    Represents a Connect Four game board.

    This class manages the board state, places chips and checks for
    win conditions, either on the live grid or on a scratch copy.
    """

    def __init__(self):
        """Initialize an empty Connect Four board."""
        debug.trace("Initializing new Board", "board")
        self.reset()

    def reset(self):
        """Reset the board to an empty state."""
        debug.debug("Resetting board", "board")
        self.grid = np.zeros((PADDED_ROWS, PADDED_COLS), dtype=np.int8)
        self.empty_cells = ROWS * COLS

    def copy(self) -> 'Board':
        """
        Create a deep copy of the current board.

        Returns:
            A new Board instance with the same state
        """
        new_board = Board()
        new_board.grid = self.grid.copy()
        new_board.empty_cells = self.empty_cells
        return new_board

    def get_cell(self, row: int, col: int) -> Player:
        """Get the player occupying an inner cell."""
        r, c = to_padded(row, col)
        return Player(int(self.grid[r, c]))

    def is_full(self) -> bool:
        """Check whether no empty inner cell remains."""
        return self.empty_cells == 0

    def lowest_empty_row(self, column: int) -> int:
        """
        Find the row a chip dropped into a column would land on.

        Every inner row is scanned and the last empty one wins, since rows
        grow downward and the bottom slot has the highest index.

        Args:
            column: Inner column index

        Returns:
            Inner row index, or NO_ROOM if the column is full
        """
        if not (0 <= column < COLS):
            raise ValueError(f"Column {column} out of bounds")

        row = NO_ROOM
        for r in range(ROWS):
            if self.get_cell(r, column) == Player.EMPTY:
                row = r
        return row

    def available_columns(self) -> List[int]:
        """
        Get the columns that still have room, left to right.

        Returns:
            List of inner column indices
        """
        return [col for col in range(COLS) if self.lowest_empty_row(col) != NO_ROOM]

    def is_valid_move(self, row: int, col: int) -> bool:
        """
        Check if a chip may be placed at the given cell.

        The cell must lie on the board, be empty, and be the lowest
        empty cell of its column.
        """
        if not is_valid_position(row, col):
            debug.debug(f"Invalid move: ({row}, {col}) out of bounds", "board")
            return False

        if self.get_cell(row, col) != Player.EMPTY:
            debug.debug(f"Invalid move: ({row}, {col}) is occupied", "board")
            return False

        if self.lowest_empty_row(col) != row:
            debug.debug(f"Invalid move: ({row}, {col}) is not the lowest empty cell", "board")
            return False

        return True

    def place(self, row: int, col: int, player: Player):
        """
        Write a chip into an empty inner cell.

        Args:
            row: Inner row index
            col: Inner column index
            player: RED or BLACK

        Raises:
            ValueError: If the cell is off the board or occupied, or player is EMPTY
        """
        if player == Player.EMPTY:
            raise ValueError("Cannot place an EMPTY chip")
        if not is_valid_position(row, col):
            raise ValueError(f"Cell ({row}, {col}) out of bounds")
        if self.get_cell(row, col) != Player.EMPTY:
            raise ValueError(f"Cell ({row}, {col}) is already occupied")

        r, c = to_padded(row, col)
        self.grid[r, c] = player.value
        self.empty_cells -= 1
        debug.trace(f"Placed {player.name} at ({row}, {col}), {self.empty_cells} cells left", "board")

    def play(self, row: int, col: int, player: Player) -> bool:
        """
        Place a chip and check whether it wins.

        Returns:
            True if the placement completes a run of four
        """
        self.place(row, col, player)
        return self.is_winning_move(row, col, player)

    def is_winning_move(self, row: int, col: int, player: Player, probe: bool = False) -> bool:
        """
        Check for a run of four through a cell.

        Args:
            row: Inner row index
            col: Inner column index
            player: Player the run must belong to
            probe: If True, check a hypothetical chip on a scratch copy
                   instead of the live grid, which is left untouched

        Returns:
            True if the cell is part of a run of at least four
        """
        r, c = to_padded(row, col)

        if probe:
            grid = self.grid.copy()
            grid[r, c] = player.value
        else:
            grid = self.grid

        if grid[r, c] != player.value:
            return False

        for dr, dc in DIRECTION_VECTORS.values():
            if self._count_run(grid, r, c, dr, dc, player.value) == CONNECT_N:
                return True

        return False

    @staticmethod
    def _count_run(grid: np.ndarray, row: int, col: int, dr: int, dc: int, value: int) -> int:
        """
        Count same-player cells along one axis, capped at CONNECT_N.

        Walks forward from the cell itself, then backward from the cell
        just before it. The cell must hold the player, so neither walk
        goes more than BORDER steps past it.
        """
        count = 0

        r, c = row, col
        while count < CONNECT_N and grid[r, c] == value:
            count += 1
            r += dr
            c += dc

        r, c = row - dr, col - dc
        while count < CONNECT_N and grid[r, c] == value:
            count += 1
            r -= dr
            c -= dc

        return count

    def get_state(self) -> np.ndarray:
        """
        Get the inner board state as a numpy array.

        Returns:
            ROWS x COLS copy of the playable area
        """
        r0, c0 = to_padded(0, 0)
        return self.grid[r0:r0 + ROWS, c0:c0 + COLS].copy()

    def render(self) -> str:
        """Render the board as a string."""
        return render_board_ascii(self.get_state())

    def __str__(self) -> str:
        """String representation of the board."""
        return self.render()


if __name__ == "__main__":
    debug.configure(level=DebugLevel.TRACE)

    board = Board()
    for col, player in [(3, Player.RED), (3, Player.BLACK), (4, Player.RED),
                        (4, Player.BLACK), (5, Player.RED), (5, Player.BLACK)]:
        board.place(board.lowest_empty_row(col), col, player)
    print(board)

    row = board.lowest_empty_row(6)
    print(f"\nRED wins at ({row}, 6): {board.is_winning_move(row, 6, Player.RED, probe=True)}")
