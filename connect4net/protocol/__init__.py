"""
connect4net.protocol - Wire protocol between the client and the server

This package contains the 3-byte frame codec, the socket transport and
the per-connection session state machine.
"""

from connect4net.protocol.frames import Frame, Opcode, ProtocolError
from connect4net.protocol.transport import FrameTransport, ConnectionClosed
from connect4net.protocol.session import GameSession

__all__ = ['Frame', 'Opcode', 'ProtocolError', 'FrameTransport', 'ConnectionClosed', 'GameSession']
