"""
client.py - Terminal client for playing against the Connect Four server

The client keeps its own view of the board, turns typed column numbers into
move frames and start/quit choices into control frames, and renders the
board after every exchange with the server.
"""

import socket
import time
from typing import Callable

from connect4net.debug import debug
from connect4net.utils import COLS, DEFAULT_PORT, NO_ROOM, Player, is_valid_position
from connect4net.game.board import Board
from connect4net.protocol.frames import (Frame, Opcode, ProtocolError, START, QUIT,
                                         move_frame)
from connect4net.protocol.transport import FrameTransport, ConnectionClosed


class RemoteClient:
    """Interactive client: the human plays RED, the server plays BLACK."""

    def __init__(self, transport: FrameTransport,
                 input_func: Callable[[str], str] = input,
                 output: Callable[[str], None] = print,
                 delay: float = 1.0,
                 sleep: Callable[[float], None] = time.sleep):
        """
        Initialize the client.

        Args:
            transport: Connection to the server
            input_func: Reads one line of user input given a prompt
            output: Writes one message to the user
            delay: Pause before showing the computer's move, in seconds
            sleep: Used to pause, replaceable for tests
        """
        self.transport = transport
        self.input = input_func
        self.output = output
        self.delay = delay
        self.sleep = sleep
        self.board = Board()

    @classmethod
    def connect(cls, host: str, port: int = DEFAULT_PORT, **kwargs) -> 'RemoteClient':
        """Open a connection to the server and wrap it in a client."""
        sock = socket.create_connection((host, port))
        debug.info(f"Connected to {host}:{port}", "client")
        return cls(FrameTransport(sock, name=f"{host}:{port}"), **kwargs)

    def display(self):
        self.output(self.board.render())

    def wants_to_play(self) -> bool:
        """
        Ask whether to start a new game or quit, and tell the server.

        Returns:
            True if a new game was requested
        """
        while True:
            choice = self.input("Press S to start a new game, Q to quit: ").strip().lower()

            if choice.startswith('s'):
                self.board.reset()
                self.transport.write_frame(START)
                return True
            elif choice.startswith('q'):
                self.transport.write_frame(QUIT)
                self.transport.close()
                return False

            self.output("Invalid choice.")

    def get_player_move(self):
        """
        Read a column number from the user.

        Returns:
            Column index, or None if the input was not a valid column
        """
        text = self.input(f"Place a chip between 0 to {COLS - 1}: ").strip()
        try:
            column = int(text)
        except ValueError:
            self.output(f"Not a number between 0 and {COLS - 1}.")
            return None

        if not (0 <= column < COLS):
            self.output(f"Not a number between 0 and {COLS - 1}.")
            return None

        return column

    def get_input_and_send(self):
        """Prompt until a playable column is chosen, then send the move."""
        while True:
            column = self.get_player_move()
            if column is None:
                continue

            row = self.board.lowest_empty_row(column)
            if row == NO_ROOM:
                self.display()
                self.output("No space left in column to place chip.")
                continue

            self.board.place(row, column, Player.RED)
            self.display()
            self.transport.write_frame(move_frame(row, column))
            return

    def _record_computer_move(self, frame: Frame):
        if not is_valid_position(frame.row, frame.col):
            raise ProtocolError(f"Server sent a cell off the board: {frame}")
        # A tie may report the human's own last drop
        if frame.opcode == Opcode.TIE and self.board.get_cell(frame.row, frame.col) == Player.RED:
            return
        if not self.board.is_valid_move(frame.row, frame.col):
            raise ProtocolError(f"Server placed a chip on an unavailable cell: {frame}")
        self.board.place(frame.row, frame.col, Player.BLACK)

    def handle_frame(self, frame: Frame) -> bool:
        """
        React to one frame from the server.

        Returns:
            True to keep playing, False once the session is over
        """
        if frame.is_game_on:
            self.display()
            self.get_input_and_send()
            return True

        if frame.opcode == Opcode.MOVE:
            self._record_computer_move(frame)
            self.sleep(self.delay)
            self.display()
            self.get_input_and_send()
            return True

        if frame.opcode == Opcode.RED_WON:
            self.output("You win!")
            return self.wants_to_play()

        if frame.opcode == Opcode.COMPUTER_WON:
            self._record_computer_move(frame)
            self.display()
            self.output("The computer wins!")
            return self.wants_to_play()

        if frame.opcode == Opcode.TIE:
            self._record_computer_move(frame)
            self.display()
            self.output("It's a tie!")
            return self.wants_to_play()

        if frame.is_quit:
            self.output("Server ended the session.")
            self.transport.close()
            return False

        raise ProtocolError(f"Unexpected frame from server: {frame}")

    def play(self):
        """Play games until the user quits or the connection drops."""
        try:
            if not self.wants_to_play():
                return
            while self.handle_frame(self.transport.read_frame()):
                pass
        except ConnectionClosed:
            self.output("Connection closed by server.")
        except (Exception, KeyboardInterrupt) as e:
            debug.warning(f"Game interrupted: {e!r}", "client")
            self.output("Game interrupted.")
            self._send_quit()
        finally:
            self.transport.close()

    def _send_quit(self):
        try:
            self.transport.write_frame(QUIT)
        except ConnectionClosed:
            pass  # server is already gone


def run_client(host: str, port: int = DEFAULT_PORT, delay: float = 1.0):
    """Connect to a server and play interactively."""
    try:
        client = RemoteClient.connect(host, port, delay=delay)
    except OSError as e:
        print(f"Unable to connect to {host}:{port}: {e}")
        return
    client.play()
