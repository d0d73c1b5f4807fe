"""Tests for the server-side session state machine."""

import random
import sys
from pathlib import Path

import numpy as np
import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from connect4net.game.evaluator import ComputerPlayer
from connect4net.protocol.frames import (Frame, Opcode, ProtocolError, START, GAME_ON,
                                         RED_WON, QUIT, move_frame)
from connect4net.protocol.session import GameSession
from connect4net.protocol.transport import ConnectionClosed
from connect4net.utils import ROWS, COLS, Player, GameResult, SessionState


class ScriptedTransport:
    """Transport stand-in replaying inbound frames and recording replies."""

    def __init__(self, frames):
        self.inbound = list(frames)
        self.sent = []
        self.closed = False
        self.name = "scripted"

    def read_frame(self):
        if not self.inbound:
            raise ConnectionClosed("end of script")
        return self.inbound.pop(0)

    def write_frame(self, frame):
        self.sent.append(frame)

    def close(self):
        self.closed = True


def draw_pattern(row, col):
    """A full-board colouring with no run of four in any direction."""
    return Player.RED if ((col + 2 * row) // 2) % 2 == 0 else Player.BLACK


@pytest.fixture
def session():
    return GameSession(computer=ComputerPlayer(rng=random.Random(3)))


def started(session):
    assert session.handle_frame(START) == GAME_ON
    return session


def test_start_replies_game_on(session):
    assert session.state == SessionState.AWAITING_START
    assert session.handle_frame(START) == GAME_ON
    assert session.state == SessionState.IN_PROGRESS
    assert session.board.empty_cells == ROWS * COLS


def test_repeated_start_gives_fresh_board(session):
    """Test every Start clears the board and replies Game on."""
    started(session)
    session.handle_frame(move_frame(5, 3))
    assert session.board.empty_cells < ROWS * COLS

    for _ in range(3):
        assert session.handle_frame(START) == GAME_ON
        assert np.all(session.board.get_state() == Player.EMPTY.value)
        assert session.board.empty_cells == ROWS * COLS


def test_move_exchange(session):
    """Test a human drop in column 0 is answered with exactly one computer placement."""
    started(session)
    reply = session.handle_frame(move_frame(5, 0))

    assert reply.opcode in (Opcode.MOVE, Opcode.TIE, Opcode.COMPUTER_WON)
    assert reply.opcode == Opcode.MOVE  # one chip each cannot end the game
    assert session.board.get_cell(5, 0) == Player.RED
    assert session.board.get_cell(reply.row, reply.col) == Player.BLACK
    assert session.board.empty_cells == ROWS * COLS - 2
    assert session.state == SessionState.IN_PROGRESS


def test_move_before_start_is_violation(session):
    with pytest.raises(ProtocolError):
        session.handle_frame(move_frame(5, 0))


@pytest.mark.parametrize("row, col", [(4, 0), (6, 0), (0, 7), (255, 255)])
def test_illegal_cells_are_violations(session, row, col):
    started(session)
    with pytest.raises(ProtocolError):
        session.handle_frame(move_frame(row, col))


def test_occupied_cell_is_violation(session):
    started(session)
    reply = session.handle_frame(move_frame(5, 0))
    with pytest.raises(ProtocolError):
        session.handle_frame(move_frame(reply.row, reply.col))


@pytest.mark.parametrize("frame", [GAME_ON, RED_WON, Frame(Opcode.TIE, 1, 1),
                                   Frame(Opcode.COMPUTER_WON, 0, 0), Frame(Opcode.QUIT, 0, 0)])
def test_server_only_frames_are_violations(session, frame):
    started(session)
    with pytest.raises(ProtocolError):
        session.handle_frame(frame)


def test_human_win(session):
    started(session)
    for col in range(3):
        session.board.place(5, col, Player.RED)

    assert session.handle_frame(move_frame(5, 3)) == RED_WON
    assert session.state == SessionState.AWAITING_START
    assert session.last_result == GameResult.RED_WON
    assert session.board.empty_cells == ROWS * COLS
    assert session.games_played == 1


def test_computer_win(session):
    started(session)
    for col in (4, 5, 6):
        session.board.place(5, col, Player.BLACK)

    assert session.handle_frame(move_frame(5, 0)) == Frame(Opcode.COMPUTER_WON, 5, 3)
    assert session.state == SessionState.AWAITING_START
    assert session.last_result == GameResult.COMPUTER_WON
    assert session.board.empty_cells == ROWS * COLS


def test_computer_blocks(session):
    started(session)
    session.board.place(5, 0, Player.RED)
    session.board.place(4, 0, Player.RED)
    session.board.place(5, 1, Player.BLACK)
    session.board.place(4, 1, Player.BLACK)

    assert session.handle_frame(move_frame(3, 0)) == move_frame(2, 0)
    assert session.board.get_cell(2, 0) == Player.BLACK


def test_tie(session):
    """Test filling the last cell without a win ends in a tie."""
    started(session)
    for row in range(ROWS):
        for col in range(COLS):
            if (row, col) not in ((0, 1), (0, 2)):
                session.board.place(row, col, draw_pattern(row, col))

    assert session.handle_frame(move_frame(0, 1)) == Frame(Opcode.TIE, 0, 2)
    assert session.last_result == GameResult.TIE
    assert session.state == SessionState.AWAITING_START
    assert session.board.empty_cells == ROWS * COLS


def test_quit_closes(session):
    assert session.handle_frame(QUIT) is None
    assert session.state == SessionState.CLOSED
    with pytest.raises(ProtocolError):
        session.handle_frame(START)


def test_run_plays_until_quit():
    transport = ScriptedTransport([START, move_frame(5, 0), QUIT, START])
    session = GameSession(transport, computer=ComputerPlayer(rng=random.Random(1)))
    session.run()

    assert transport.sent[0] == GAME_ON
    assert transport.sent[1].opcode == Opcode.MOVE
    assert len(transport.sent) == 2
    assert transport.inbound == [START]  # nothing read after Quit
    assert transport.closed
    assert session.state == SessionState.CLOSED


def test_run_ends_on_disconnect():
    transport = ScriptedTransport([START])
    session = GameSession(transport)
    session.run()

    assert transport.sent == [GAME_ON]
    assert transport.closed
    assert session.state == SessionState.CLOSED


def test_run_closes_on_protocol_violation():
    """Test an out-of-turn move closes the connection without a reply."""
    transport = ScriptedTransport([move_frame(5, 0), START])
    session = GameSession(transport)
    session.run()

    assert transport.sent == []
    assert transport.closed
    assert transport.inbound == [START]


def test_run_without_transport():
    with pytest.raises(ValueError):
        GameSession().run()
