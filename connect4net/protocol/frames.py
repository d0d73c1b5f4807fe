"""
frames.py - Fixed 3-byte frames exchanged between client and server

Every message is exactly three unsigned bytes: (opcode, row, col). Control
frames use fixed byte patterns; move and result frames carry inner board
coordinates in the last two bytes.
"""

import struct
from enum import IntEnum
from typing import NamedTuple

from connect4net.utils import FRAME_SIZE

FRAME_STRUCT = "3B"  # opcode, row, col


class ProtocolError(ValueError):
    """A frame that is malformed or not allowed in the current state."""


class Opcode(IntEnum):
    """First byte of a frame."""
    CONTROL = 0        # START (client) or GAME_ON (server)
    RED_WON = 1
    COMPUTER_WON = 2
    TIE = 3
    QUIT = 4
    MOVE = 9


class Frame(NamedTuple):
    opcode: int
    row: int = 0
    col: int = 0

    @property
    def is_start(self) -> bool:
        return self == START

    @property
    def is_game_on(self) -> bool:
        return self == GAME_ON

    @property
    def is_quit(self) -> bool:
        return self == QUIT

    def __str__(self):
        return f"{int(self.opcode):02x} {self.row:02x} {self.col:02x}"


START = Frame(Opcode.CONTROL, 0, 0)
GAME_ON = Frame(Opcode.CONTROL, 0, 1)
RED_WON = Frame(Opcode.RED_WON, 0, 0)
QUIT = Frame(Opcode.QUIT, 4, 4)


def move_frame(row: int, col: int) -> Frame:
    """Build a move frame for an inner cell."""
    return Frame(Opcode.MOVE, row, col)


def computer_won_frame(row: int, col: int) -> Frame:
    return Frame(Opcode.COMPUTER_WON, row, col)


def tie_frame(row: int, col: int) -> Frame:
    return Frame(Opcode.TIE, row, col)


def encode_frame(frame: Frame) -> bytes:
    """
    Pack a frame into its 3-byte wire form.

    Raises:
        ProtocolError: If any field does not fit in an unsigned byte
    """
    try:
        return struct.pack(FRAME_STRUCT, int(frame.opcode), frame.row, frame.col)
    except struct.error as e:
        raise ProtocolError(f"Cannot encode frame {tuple(frame)}: {e}") from e


def decode_frame(data: bytes) -> Frame:
    """
    Unpack 3 wire bytes into a Frame.

    Raises:
        ProtocolError: If the length is wrong or the opcode is unknown
    """
    if len(data) != FRAME_SIZE:
        raise ProtocolError(f"Frame must be {FRAME_SIZE} bytes, got {len(data)}")

    opcode, row, col = struct.unpack(FRAME_STRUCT, data)
    try:
        opcode = Opcode(opcode)
    except ValueError:
        raise ProtocolError(f"Unknown opcode {opcode:#04x}") from None

    return Frame(opcode, row, col)
