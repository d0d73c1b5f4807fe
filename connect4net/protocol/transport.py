"""
transport.py - Frame transport over a connected stream socket

Reads block until a whole frame has arrived, looping over short reads.
End-of-stream and socket errors surface as ConnectionClosed so callers can
end the session without sending anything further.
"""

import socket

from connect4net.debug import debug
from connect4net.utils import FRAME_SIZE
from connect4net.protocol.frames import Frame, encode_frame, decode_frame


class ConnectionClosed(ConnectionError):
    """The peer went away or the stream failed."""


class FrameTransport:
    """Sends and receives 3-byte frames on one connection."""

    def __init__(self, sock: socket.socket, name: str = "peer"):
        self.sock = sock
        self.name = name
        self.closed = False

    def read_exact(self, size: int = FRAME_SIZE) -> bytes:
        """
        Read exactly size bytes, however the stream splits them.

        Raises:
            ConnectionClosed: On end-of-stream or a socket error
        """
        buffer = bytearray()
        while len(buffer) < size:
            try:
                chunk = self.sock.recv(size - len(buffer))
            except OSError as e:
                raise ConnectionClosed(f"Read from {self.name} failed: {e}") from e
            if not chunk:
                raise ConnectionClosed(f"{self.name} closed the connection")
            buffer.extend(chunk)
        return bytes(buffer)

    def read_frame(self) -> Frame:
        """Block until the next frame arrives and decode it."""
        data = self.read_exact(FRAME_SIZE)
        frame = decode_frame(data)
        debug.debug(f"Received {frame} from {self.name}", "transport")
        return frame

    def write_frame(self, frame: Frame):
        """
        Send one frame without waiting for any acknowledgement.

        Raises:
            ConnectionClosed: If the socket can no longer be written
        """
        data = encode_frame(frame)
        try:
            self.sock.sendall(data)
        except OSError as e:
            raise ConnectionClosed(f"Write to {self.name} failed: {e}") from e
        debug.debug(f"Sent {frame} to {self.name}", "transport")

    def close(self):
        """Shut down and close the socket; safe to call more than once."""
        if self.closed:
            return
        self.closed = True
        try:
            self.sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass  # already disconnected
        self.sock.close()
        debug.debug(f"Closed connection to {self.name}", "transport")
