"""
session.py - Server-side game session for one client connection

A GameSession owns one Board, one transport and the turn state of the game
played over that connection. handle_frame() is the transition function;
run() drives it from the transport until the client quits, disconnects or
breaks the protocol.
"""

from typing import Optional

from connect4net.debug import debug
from connect4net.utils import Player, GameResult, SessionState
from connect4net.game.board import Board
from connect4net.game.evaluator import ComputerPlayer
from connect4net.protocol.frames import (Frame, Opcode, ProtocolError, GAME_ON, RED_WON,
                                         move_frame, computer_won_frame, tie_frame)
from connect4net.protocol.transport import FrameTransport, ConnectionClosed


class GameSession:
    """
    Turn-taking state machine for a human on the client against the computer.

    States:
        AWAITING_START: no game running, only Start or Quit are accepted
        IN_PROGRESS: a game is running and the human is to move
        CLOSED: terminal, the connection is gone
    """

    def __init__(self, transport: Optional[FrameTransport] = None,
                 computer: Optional[ComputerPlayer] = None,
                 board: Optional[Board] = None):
        """
        Initialize a session.

        Args:
            transport: Connection to the client (only needed by run())
            computer: Opponent policy, BLACK by default
            board: Board to play on, a fresh one by default
        """
        self.transport = transport
        self.computer = computer or ComputerPlayer(Player.BLACK)
        self.human = self.computer.player.other()
        self.board = board or Board()
        self.state = SessionState.AWAITING_START
        self.last_result = GameResult.IN_PROGRESS
        self.games_played = 0

    def handle_frame(self, frame: Frame) -> Optional[Frame]:
        """
        Apply one inbound frame.

        Args:
            frame: Frame received from the client

        Returns:
            The reply to send, or None when the session ends

        Raises:
            ProtocolError: If the frame is not valid in the current state
        """
        if self.state == SessionState.CLOSED:
            raise ProtocolError("Session is closed")

        if frame.is_quit:
            debug.info("Client quit", "session")
            self.state = SessionState.CLOSED
            return None

        if frame.is_start:
            return self._start_game()

        if frame.opcode == Opcode.MOVE:
            return self._human_move(frame.row, frame.col)

        raise ProtocolError(f"Unexpected frame {frame} in state {self.state.name}")

    def _start_game(self) -> Frame:
        if self.state == SessionState.IN_PROGRESS:
            debug.info("Start received mid-game, abandoning current game", "session")
        self.board.reset()
        self.state = SessionState.IN_PROGRESS
        self.last_result = GameResult.IN_PROGRESS
        debug.debug("New game started", "session")
        return GAME_ON

    def _human_move(self, row: int, col: int) -> Frame:
        if self.state != SessionState.IN_PROGRESS:
            raise ProtocolError(f"Move ({row}, {col}) received while no game is in progress")

        if not self.board.is_valid_move(row, col):
            raise ProtocolError(f"Move ({row}, {col}) is not a legal drop")

        if self.board.play(row, col, self.human):
            return self._finish(GameResult.RED_WON, RED_WON)

        # Cannot happen when the human moves first, but a full board is still a tie
        if self.board.is_full():
            return self._finish(GameResult.TIE, tie_frame(row, col))

        row, col = self.computer.get_move(self.board)
        if self.board.play(row, col, self.computer.player):
            return self._finish(GameResult.COMPUTER_WON, computer_won_frame(row, col))

        if self.board.is_full():
            return self._finish(GameResult.TIE, tie_frame(row, col))

        debug.trace(f"Board after computer move:\n{self.board.render()}", "session")
        return move_frame(row, col)

    def _finish(self, result: GameResult, reply: Frame) -> Frame:
        """Record the outcome and clear the board for the next game."""
        debug.trace(f"Final board:\n{self.board.render()}", "session")
        debug.info(f"Game over: {result.name}", "session")
        self.board.reset()
        self.state = SessionState.AWAITING_START
        self.last_result = result
        self.games_played += 1
        return reply

    def run(self):
        """
        Serve the client until it quits, disconnects or violates the protocol.

        The transport is always closed on return.
        """
        if self.transport is None:
            raise ValueError("Session has no transport to run on")

        debug.info(f"Handling client at {self.transport.name}", "session")
        try:
            while self.state != SessionState.CLOSED:
                frame = self.transport.read_frame()
                reply = self.handle_frame(frame)
                if reply is not None:
                    self.transport.write_frame(reply)
        except ConnectionClosed as e:
            debug.info(f"Connection lost: {e}", "session")
        except ProtocolError as e:
            debug.warning(f"Protocol violation from {self.transport.name}: {e}", "session")
        finally:
            self.state = SessionState.CLOSED
            self.transport.close()

        debug.info(f"Session with {self.transport.name} ended after {self.games_played} game(s)",
                   "session")
