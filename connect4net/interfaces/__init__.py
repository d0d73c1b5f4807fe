"""
connect4net.interfaces - Network endpoints for Connect Four

This package contains the threaded server hosting the computer opponent
and the terminal client used by the human player.
"""

# Don't import anything here to avoid circular imports
__all__ = []
