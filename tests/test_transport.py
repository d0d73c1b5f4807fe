"""Tests for FrameTransport."""

import socket
import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from connect4net.protocol.frames import ProtocolError, START, QUIT, move_frame
from connect4net.protocol.transport import FrameTransport, ConnectionClosed


class ChunkedSocket:
    """Socket stand-in that hands out queued chunks one recv() at a time."""

    def __init__(self, chunks, error=None):
        self.chunks = list(chunks)
        self.error = error
        self.sent = bytearray()
        self.recv_calls = 0
        self.closed = False

    def recv(self, size):
        self.recv_calls += 1
        if self.chunks:
            chunk = self.chunks.pop(0)
            assert len(chunk) <= size
            return chunk
        if self.error:
            raise self.error
        return b""

    def sendall(self, data):
        if self.closed:
            raise OSError("socket is closed")
        self.sent.extend(data)

    def shutdown(self, how):
        pass

    def close(self):
        self.closed = True


def test_read_frame_assembles_split_delivery():
    """Test a frame delivered as 1+1+1 bytes is read whole."""
    sock = ChunkedSocket([b"\x09", b"\x05", b"\x00"])
    transport = FrameTransport(sock)
    assert transport.read_frame() == move_frame(5, 0)
    assert sock.recv_calls == 3


def test_read_frame_split_two_and_one():
    sock = ChunkedSocket([b"\x00\x00", b"\x00", b"\x04\x04\x04"])
    transport = FrameTransport(sock)
    assert transport.read_frame() == START
    assert transport.read_frame() == QUIT


def test_end_of_stream_mid_frame():
    transport = FrameTransport(ChunkedSocket([b"\x09", b"\x05"]))
    with pytest.raises(ConnectionClosed):
        transport.read_frame()


def test_end_of_stream_before_frame():
    transport = FrameTransport(ChunkedSocket([]))
    with pytest.raises(ConnectionClosed):
        transport.read_frame()


def test_connection_reset_becomes_connection_closed():
    transport = FrameTransport(ChunkedSocket([b"\x09"], error=ConnectionResetError()))
    with pytest.raises(ConnectionClosed):
        transport.read_frame()


def test_malformed_frame_raises_protocol_error():
    transport = FrameTransport(ChunkedSocket([b"\x05\x00\x00"]))
    with pytest.raises(ProtocolError):
        transport.read_frame()


def test_write_frame():
    sock = ChunkedSocket([])
    transport = FrameTransport(sock)
    transport.write_frame(move_frame(3, 4))
    transport.write_frame(QUIT)
    assert bytes(sock.sent) == b"\x09\x03\x04\x04\x04\x04"


def test_write_after_close_raises_connection_closed():
    sock = ChunkedSocket([])
    transport = FrameTransport(sock)
    transport.close()
    transport.close()
    assert sock.closed
    with pytest.raises(ConnectionClosed):
        transport.write_frame(START)


def test_over_real_socket_pair():
    """Test frames survive a real stream written one byte at a time."""
    left, right = socket.socketpair()
    try:
        sender = FrameTransport(left, name="left")
        receiver = FrameTransport(right, name="right")
        for byte in b"\x09\x02\x06":
            left.sendall(bytes([byte]))
        assert receiver.read_frame() == move_frame(2, 6)

        sender.close()
        with pytest.raises(ConnectionClosed):
            receiver.read_frame()
    finally:
        left.close()
        right.close()
