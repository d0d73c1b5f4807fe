"""
utils.py - Constants, enumerations and helpers shared by server and client

Board geometry, player identities, session states and ASCII rendering live
here so the game engine, the wire protocol and the terminal client agree on
them.
"""

from enum import Enum, auto
from typing import Tuple

import numpy as np

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win

# Empty cells around the playable area so run scanning never leaves the grid
BORDER = CONNECT_N - 1
PADDED_ROWS = ROWS + 2 * BORDER
PADDED_COLS = COLS + 2 * BORDER

NO_ROOM = -1  # lowest_empty_row() result for a full column

# Network constants
DEFAULT_HOST = ''
DEFAULT_PORT = 50000
FRAME_SIZE = 3


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    RED = 1      # Human, playing through the remote client
    BLACK = 2    # Computer, played by the server

    def other(self) -> 'Player':
        """Get the opposing player."""
        if self == Player.RED:
            return Player.BLACK
        elif self == Player.BLACK:
            return Player.RED
        return Player.EMPTY

    def __str__(self):
        if self == Player.EMPTY:
            return " "
        elif self == Player.RED:
            return "R"
        else:
            return "B"


class GameResult(Enum):
    """Enumeration representing the outcome of a game."""
    IN_PROGRESS = auto()
    RED_WON = auto()
    COMPUTER_WON = auto()
    TIE = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS


class SessionState(Enum):
    """Turn state of one server-side session."""
    AWAITING_START = auto()
    IN_PROGRESS = auto()
    CLOSED = auto()


class Direction(Enum):
    """Enumeration representing directions for win checking."""
    HORIZONTAL = auto()
    DIAGONAL_UP = auto()  # Diagonal from bottom-left to top-right
    VERTICAL = auto()
    DIAGONAL_DOWN = auto()  # Diagonal from top-left to bottom-right


# Direction vectors (row, col); rows grow downward
DIRECTION_VECTORS = {
    Direction.HORIZONTAL: (0, 1),
    Direction.DIAGONAL_UP: (-1, 1),
    Direction.VERTICAL: (-1, 0),
    Direction.DIAGONAL_DOWN: (1, 1)
}


def is_valid_position(row: int, col: int) -> bool:
    """Check if an inner (wire) position is within the board boundaries."""
    return 0 <= row < ROWS and 0 <= col < COLS


def to_padded(row: int, col: int) -> Tuple[int, int]:
    """Translate inner coordinates to padded-grid coordinates."""
    return row + BORDER, col + BORDER


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render an inner 6x7 grid as ASCII art.

    Args:
        grid: Inner grid of Player values

    Returns:
        ASCII representation with column numbers on top
    """
    lines = ["".join(f" {col} " for col in range(COLS))]

    for row in range(ROWS):
        cells = []
        for col in range(COLS):
            cells.append(f"[{Player(int(grid[row, col]))}]")
        lines.append("".join(cells))

    return "\n".join(lines)
