"""
server.py - Threaded TCP server hosting the computer opponent

The server accepts connections and hands each one to its own GameSession
running on a dedicated thread. It keeps no game state of its own.
"""

import socket
import socketserver
from typing import Callable, Optional

from connect4net.debug import debug
from connect4net.utils import DEFAULT_HOST, DEFAULT_PORT
from connect4net.game.evaluator import ComputerPlayer
from connect4net.protocol.session import GameSession
from connect4net.protocol.transport import FrameTransport


class SessionHandler(socketserver.BaseRequestHandler):
    """Runs one independent game session for an accepted connection."""

    def handle(self):
        host, port = self.client_address[:2]
        debug.info(f"Accepted connection from {host}:{port}", "server")
        transport = FrameTransport(self.request, name=f"{host}:{port}")
        session = GameSession(transport, computer=self.server.computer_factory())
        session.run()


class ConnectFourServer(socketserver.ThreadingTCPServer):
    """TCP server spawning one GameSession per connection."""

    allow_reuse_address = True
    daemon_threads = True

    def __init__(self, address=(DEFAULT_HOST, DEFAULT_PORT),
                 computer_factory: Optional[Callable[[], ComputerPlayer]] = None):
        """
        Initialize and bind the server.

        Args:
            address: (host, port) to listen on; port 0 picks a free port
            computer_factory: Builds the opponent for each new session
        """
        self.computer_factory = computer_factory or ComputerPlayer
        super().__init__(address, SessionHandler)

    @property
    def port(self) -> int:
        return self.server_address[1]

    def handle_error(self, request, client_address):
        # A failing session must never stop the listener
        debug.error(f"Session with {client_address} crashed", "server")
        debug.log_exception("server")


def get_host_address() -> Optional[str]:
    """Best-effort IP address of this host, for players to connect to."""
    try:
        return socket.gethostbyname(socket.gethostname())
    except OSError:
        return None


def serve(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT):
    """
    Run the server until interrupted.

    Args:
        host: Interface to bind ('' for all)
        port: TCP port to listen on
    """
    address = get_host_address()
    if address:
        print(f"Server IP Address: {address}")
    else:
        print("Unable to determine this host's address")

    try:
        server = ConnectFourServer((host, port))
    except OSError as e:
        print(f"Unable to listen on port {port}: {e}")
        return

    with server:
        print(f"Listening on port {server.port}")
        debug.info(f"Server listening on {host or '*'}:{server.port}", "server")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            print("\nShutting down server.")
        debug.info("Server stopped", "server")
